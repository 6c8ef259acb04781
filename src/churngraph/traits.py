"""
Aggregation of the traits high-centrality customers share with neighbors.

For each selected node the shared traits with every graph neighbor are
counted and the top entries kept. The kept entries of all nodes are then
merged into flat totals and a category -> value -> count split, from
which category and value percentages are derived.
"""

from __future__ import annotations

import math
import typing as T
from dataclasses import dataclass, field

import networkx as nx
from loguru import logger

from churngraph.customer import Customer
from churngraph.similarity import SimilarityPredicate, split_trait

DEFAULT_TOP_TRAITS = 4


@dataclass(frozen=True)
class ValueShare:
    """Count and within-category percentage of one trait value."""

    value: str
    count: int
    percentage: float


@dataclass(frozen=True)
class CategoryBreakdown:
    """
    Totals for one trait category.

    Attributes:
        category: Category name, e.g. "Card Type"
        total: Sum of the value counts in the category
        percentage: Share of the grand total across all categories
        values: Per-value counts and percentages
    """

    category: str
    total: int
    percentage: float
    values: list[ValueShare]


@dataclass
class TraitTally:
    """Merged trait counts across the selected nodes."""

    totals: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, dict[str, int]] = field(default_factory=dict)

    def add(self, trait: str, count: int) -> None:
        self.totals[trait] = self.totals.get(trait, 0) + count

        parts = split_trait(trait)
        if parts is None:
            return
        category, value = parts
        values = self.by_category.setdefault(category, {})
        values[value] = values.get(value, 0) + count


@dataclass
class TraitReport:
    """
    Outcome of aggregating shared traits for one customer group.

    Attributes:
        nodes: High-centrality nodes the report was built from
        totals: Count per distinct trait string
        categories: Category breakdown with percentages
        skipped_nodes: Node indices outside the customer list
    """

    nodes: list[int]
    totals: dict[str, int] = field(default_factory=dict)
    categories: list[CategoryBreakdown] = field(default_factory=list)
    skipped_nodes: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when there were no high-centrality nodes to report on."""
        return not self.nodes

    @property
    def grand_total(self) -> int:
        return sum(category.total for category in self.categories)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to the given number of decimals, halves away from zero."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def top_shared_traits(
    graph: nx.Graph,
    node: int,
    customers: T.Sequence[Customer],
    predicate: SimilarityPredicate | None = None,
    limit: int = DEFAULT_TOP_TRAITS,
) -> list[tuple[str, int]]:
    """
    Rank the traits a node shares with its graph neighbors.

    Neighbors outside the customer list are ignored. Ties keep the order
    in which the traits were first seen.

    Args:
        graph: Similarity graph
        node: Index of the customer to rank traits for
        customers: Customer list the graph indices point into
        predicate: Trait extractor. Defaults to SimilarityPredicate().
        limit: Number of traits to keep. Defaults to 4.

    Returns:
        Up to limit (trait, count) pairs, highest count first
    """
    predicate = predicate or SimilarityPredicate()
    customer = customers[node]

    counts: dict[str, int] = {}
    for neighbor in graph.neighbors(node):
        if not 0 <= neighbor < len(customers):
            continue
        for trait in predicate.traits_shared(customer, customers[neighbor]):
            counts[trait] = counts.get(trait, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def breakdown(tally: TraitTally) -> list[CategoryBreakdown]:
    """
    Turn a tally into category and value percentages.

    Category percentage is relative to the grand total of all value counts.
    Value percentage is relative to its category total. Both are rounded
    to one decimal.

    Args:
        tally: Merged trait counts

    Returns:
        One CategoryBreakdown per category, in tally order
    """
    grand_total = sum(sum(values.values()) for values in tally.by_category.values())
    if grand_total == 0:
        return []

    categories = []
    for category, values in tally.by_category.items():
        total = sum(values.values())
        shares = [
            ValueShare(
                value=value,
                count=count,
                percentage=round_half_up(100 * count / total) if total else 0.0,
            )
            for value, count in values.items()
        ]
        categories.append(
            CategoryBreakdown(
                category=category,
                total=total,
                percentage=round_half_up(100 * total / grand_total),
                values=shares,
            )
        )
    return categories


def aggregate_traits(
    nodes: T.Sequence[int],
    customers: T.Sequence[Customer],
    graph: nx.Graph,
    predicate: SimilarityPredicate | None = None,
    limit: int = DEFAULT_TOP_TRAITS,
) -> TraitReport:
    """
    Aggregate the top shared traits of every high-centrality node.

    Nodes outside the customer list are logged and skipped. Nodes with no
    shared traits contribute nothing.

    Args:
        nodes: High-centrality node indices
        customers: Customer list the graph indices point into
        graph: Similarity graph
        predicate: Trait extractor. Defaults to SimilarityPredicate().
        limit: Traits kept per node. Defaults to 4.

    Returns:
        TraitReport. Its is_empty flag is set when nodes is empty.
    """
    report = TraitReport(nodes=list(nodes))
    if report.is_empty:
        logger.debug("No high centrality nodes to aggregate")
        return report

    predicate = predicate or SimilarityPredicate()
    tally = TraitTally()

    for node in nodes:
        if not 0 <= node < len(customers):
            logger.warning(f"Invalid node index: {node}")
            report.skipped_nodes.append(node)
            continue

        ranked = top_shared_traits(graph, node, customers, predicate, limit)
        if not ranked:
            continue

        logger.debug(f"Node {node}: {ranked}")
        for trait, count in ranked:
            tally.add(trait, count)

    report.totals = tally.totals
    report.categories = breakdown(tally)
    return report

