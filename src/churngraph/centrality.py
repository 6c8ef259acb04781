"""
Closeness centrality over a subset of graph nodes.

Distances are unit-weight shortest paths over the whole graph, so nodes
outside the subset still carry paths between subset members. Only
distances between subset members enter the score.
"""

from __future__ import annotations

import math
import typing as T

import networkx as nx
from loguru import logger


class DistanceTable:
    """
    Lazily filled all-pairs shortest-path table.

    A miss on (a, b) runs one breadth-first search from a and stores the
    whole row. A later lookup of (b, a) reads that row instead of searching
    again. Unreachable pairs are math.inf.

    Attributes:
        graph: Graph to measure
        searches: Number of breadth-first searches run so far
    """

    def __init__(self, graph: nx.Graph) -> None:
        self.graph = graph
        self.searches = 0
        self._rows: dict[T.Hashable, dict[T.Hashable, int]] = {}

    def _row(self, source: T.Hashable) -> dict[T.Hashable, int]:
        row = self._rows.get(source)
        if row is None:
            row = nx.single_source_shortest_path_length(self.graph, source)
            self._rows[source] = row
            self.searches += 1
        return row

    def distance(self, a: T.Hashable, b: T.Hashable) -> float:
        """
        Shortest-path distance between two nodes.

        Args:
            a: Source node
            b: Target node

        Returns:
            Hop count, or math.inf when b is unreachable from a
        """
        if a == b:
            return 0
        if a in self._rows:
            return self._rows[a].get(b, math.inf)
        if b in self._rows:
            return self._rows[b].get(a, math.inf)
        return self._row(a).get(b, math.inf)


def closeness_centrality(
    graph: nx.Graph,
    nodes: T.Iterable[T.Hashable] | None = None,
) -> dict[T.Hashable, float]:
    """
    Compute closeness centrality for each node of a subset.

    centrality(u) = (|subset| - 1) / sum(distance(u, v) for v in subset, v != u)

    A node cut off from any subset member gets an infinite sum and scores 0.
    A singleton subset also scores 0.

    Args:
        graph: Similarity graph
        nodes: Subset to score. Defaults to every node in the graph.

    Returns:
        Mapping of node to centrality

    Raises:
        KeyError: If a subset node is not in the graph
    """
    subset = list(graph.nodes) if nodes is None else list(dict.fromkeys(nodes))
    for node in subset:
        if node not in graph:
            raise KeyError(f"Node {node!r} is not in the graph")

    table = DistanceTable(graph)
    others = len(subset) - 1

    centrality: dict[T.Hashable, float] = {}
    for node in subset:
        total = 0.0
        for other in subset:
            if other != node:
                total += table.distance(node, other)

        if total == 0 or math.isinf(total):
            centrality[node] = 0.0
        else:
            centrality[node] = others / total

    logger.debug(
        f"Closeness centrality for {len(subset)} nodes "
        f"({table.searches} breadth-first searches)"
    )
    return centrality
