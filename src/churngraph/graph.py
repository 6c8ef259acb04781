from __future__ import annotations

import typing as T

import networkx as nx
from loguru import logger

from churngraph.customer import Customer
from churngraph.similarity import SimilarityPredicate


def build_graph(
    customers: T.Sequence[Customer],
    predicate: SimilarityPredicate | None = None,
) -> nx.Graph:
    """
    Build the undirected similarity graph over a list of customers.

    Node i is the integer index of customers[i] and carries the record in
    its "customer" attribute. Every ordered pair (i, j) with i != j is
    tested; nx.Graph stores each undirected edge once, so the symmetric
    second test cannot add a duplicate.

    Args:
        customers: Customers in node order
        predicate: Neighbor test. Defaults to SimilarityPredicate().

    Returns:
        Graph with exactly len(customers) nodes

    Example:
        graph = build_graph(customers)
        graph.has_edge(0, 1)
    """
    predicate = predicate or SimilarityPredicate()

    graph = nx.Graph()
    for index, customer in enumerate(customers):
        graph.add_node(index, customer=customer)

    for i, customer_a in enumerate(customers):
        for j, customer_b in enumerate(customers):
            if i != j and predicate.is_neighbor(customer_a, customer_b):
                graph.add_edge(i, j)

    logger.debug(
        f"Built similarity graph: {graph.number_of_nodes()} nodes, "
        f"{graph.number_of_edges()} edges"
    )
    return graph


def customer_at(graph: nx.Graph, node: int) -> Customer:
    """Return the customer record stored on a graph node."""
    return graph.nodes[node]["customer"]
