"""
End-to-end analysis: partition by churn, build graphs, score, aggregate.
"""

from __future__ import annotations

import typing as T
from dataclasses import dataclass

from loguru import logger

from churngraph.centrality import closeness_centrality
from churngraph.config import AnalysisConfig
from churngraph.customer import Customer
from churngraph.graph import build_graph
from churngraph.selection import select_high_centrality
from churngraph.similarity import SimilarityPredicate
from churngraph.traits import TraitReport, aggregate_traits

CHURN_GROUP = "Churn"
NOT_CHURN_GROUP = "Not Churn"


@dataclass
class GroupResult:
    """
    Analysis outcome for one churn-status group.

    Attributes:
        name: Group name, "Churn" or "Not Churn"
        size: Number of customers in the group
        centrality: Closeness centrality per node
        high_centrality_nodes: Selected nodes in ascending order
        report: Aggregated shared traits of the selected nodes
    """

    name: str
    size: int
    centrality: dict[int, float]
    high_centrality_nodes: list[int]
    report: TraitReport


@dataclass
class AnalysisResult:
    """Results for the churned and the existing customers."""

    churn: GroupResult
    not_churn: GroupResult

    @property
    def groups(self) -> list[GroupResult]:
        return [self.churn, self.not_churn]


def partition_by_churn(
    customers: T.Sequence[Customer],
    existing_label: str = "Existing Customer",
) -> tuple[list[Customer], list[Customer]]:
    """
    Split customers into (churned, existing), keeping input order.

    Every customer whose status differs from existing_label counts as churned.
    """
    churned = [c for c in customers if c.is_churned(existing_label)]
    existing = [c for c in customers if not c.is_churned(existing_label)]
    return churned, existing


def _analyze_partition(
    name: str,
    customers: list[Customer],
    predicate: SimilarityPredicate,
    config: AnalysisConfig,
) -> GroupResult:
    graph = build_graph(customers, predicate)
    centrality = closeness_centrality(graph)
    nodes = select_high_centrality(centrality, config.centrality_multiplier)
    report = aggregate_traits(nodes, customers, graph, predicate, config.top_traits)
    return GroupResult(name, len(customers), centrality, nodes, report)


def analyze(
    customers: T.Sequence[Customer],
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """
    Run the full analysis on a customer list.

    With graph_scope "partition" each churn group gets its own graph and
    node indices. With "shared" one graph spans all customers, centrality
    is measured within each group on that graph, and node indices refer
    to the full customer list.

    Args:
        customers: All customers
        config: Analysis settings. Defaults to AnalysisConfig().

    Returns:
        AnalysisResult with one GroupResult per churn status
    """
    config = config or AnalysisConfig()
    predicate = SimilarityPredicate(config.neighbor_threshold, config.bucket_mode)
    customers = list(customers)

    logger.debug(
        f"Analyzing {len(customers)} customers "
        f"(scope={config.graph_scope}, buckets={config.bucket_mode})"
    )

    if config.graph_scope == "partition":
        churned, existing = partition_by_churn(customers, config.existing_label)
        return AnalysisResult(
            churn=_analyze_partition(CHURN_GROUP, churned, predicate, config),
            not_churn=_analyze_partition(NOT_CHURN_GROUP, existing, predicate, config),
        )

    graph = build_graph(customers, predicate)
    groups = {}
    for name, churned in ((CHURN_GROUP, True), (NOT_CHURN_GROUP, False)):
        members = [
            index
            for index, customer in enumerate(customers)
            if customer.is_churned(config.existing_label) == churned
        ]
        centrality = closeness_centrality(graph, members)
        nodes = select_high_centrality(centrality, config.centrality_multiplier)
        report = aggregate_traits(nodes, customers, graph, predicate, config.top_traits)
        groups[name] = GroupResult(name, len(members), centrality, nodes, report)

    return AnalysisResult(churn=groups[CHURN_GROUP], not_churn=groups[NOT_CHURN_GROUP])
