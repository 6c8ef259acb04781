from __future__ import annotations

import typing as T

from loguru import logger

DEFAULT_MULTIPLIER = 1.1


def select_high_centrality(
    centrality: T.Mapping[T.Hashable, float],
    multiplier: float = DEFAULT_MULTIPLIER,
) -> list[T.Hashable]:
    """
    Pick nodes whose centrality is strictly above multiplier times the mean.

    Args:
        centrality: Mapping of node to centrality
        multiplier: Factor applied to the mean. Defaults to 1.1.

    Returns:
        Selected nodes in ascending order. Empty for an empty mapping.
    """
    if not centrality:
        return []

    threshold = multiplier * sum(centrality.values()) / len(centrality)
    selected = sorted(node for node, score in centrality.items() if score > threshold)

    logger.debug(
        f"Selected {len(selected)}/{len(centrality)} nodes above threshold {threshold:.4f}"
    )
    return selected
