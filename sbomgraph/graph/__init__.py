"""Public graph API surface."""

from sbomgraph.graph.io import load_graph, nodes_from_graph, select_nodes
from sbomgraph.graph.models import Edge, EdgeKind, GraphNode, make_pkgid

__all__ = [
    "Edge",
    "EdgeKind",
    "GraphNode",
    "load_graph",
    "make_pkgid",
    "nodes_from_graph",
    "select_nodes",
]
