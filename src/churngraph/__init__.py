"""
churngraph: similarity-graph analysis of customer churn.

Customers become nodes of an undirected graph, connected when they share
enough traits. Closeness centrality picks the best-connected customers of
each churn group, and the traits they share with their neighbors are
aggregated into a category breakdown.

Public API:
    Customer: Immutable customer record
    OneHotEncoding: Categorical bundle of a customer
    SimilarityPredicate: Neighbor test and shared-trait extraction
    build_graph: Build the similarity graph
    closeness_centrality: Score nodes by closeness
    select_high_centrality: Pick nodes above the scaled mean
    aggregate_traits: Aggregate shared traits of selected nodes
    load_customers: Read customers from CSV
    analyze: Run the whole pipeline
"""

from churngraph.categories import map_category
from churngraph.centrality import DistanceTable, closeness_centrality
from churngraph.config import AnalysisConfig
from churngraph.customer import Customer, OneHotEncoding
from churngraph.dataset import customer_from_row, load_customers
from churngraph.graph import build_graph
from churngraph.pipeline import AnalysisResult, GroupResult, analyze, partition_by_churn
from churngraph.selection import select_high_centrality
from churngraph.similarity import SimilarityPredicate, is_neighbor, traits_shared
from churngraph.traits import TraitReport, aggregate_traits, top_shared_traits

__all__ = [
    "Customer",
    "OneHotEncoding",
    "map_category",
    "SimilarityPredicate",
    "is_neighbor",
    "traits_shared",
    "build_graph",
    "DistanceTable",
    "closeness_centrality",
    "select_high_centrality",
    "TraitReport",
    "aggregate_traits",
    "top_shared_traits",
    "AnalysisConfig",
    "AnalysisResult",
    "GroupResult",
    "analyze",
    "partition_by_churn",
    "customer_from_row",
    "load_customers",
]
