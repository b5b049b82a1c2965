"""Loading of serialized dependency graphs.

Graphs are exchanged as networkx node-link JSON. Node attributes:
``name``, ``version``, ``location``, ``resolved``, ``integrity``,
``package``, ``root``, ``link``, ``target``, ``extraneous`` and
``missing``; edge attribute ``kind`` (``normal`` when absent). Nodes
flagged ``missing`` stand for unresolved dependencies: edges pointing at
them are kept with ``Edge.to = None`` and the nodes themselves are not
part of the node set.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

import networkx as nx
from networkx.exception import NetworkXError
from networkx.readwrite import node_link_graph

from sbomgraph.errors import GraphLoadError, InvariantViolation
from sbomgraph.graph.models import EdgeKind, GraphNode

logger = logging.getLogger("sbomgraph.graph.io")


def read_graph(path: Union[str, Path]) -> nx.MultiDiGraph:
    """Read a node-link JSON file into a MultiDiGraph.

    Both the ``edges`` and the legacy ``links`` key are accepted.

    Args:
        path: JSON file path.

    Returns:
        nx.MultiDiGraph: Directed multigraph with node/edge attributes.

    Raises:
        GraphLoadError: If the file cannot be read or is not node-link data.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as err:
        raise GraphLoadError(f"Cannot read graph file {path}: {err}") from err

    if not isinstance(data, dict):
        raise GraphLoadError(f"Graph file {path} does not contain a JSON object")

    edges_key = "edges" if "edges" in data or "links" not in data else "links"
    data.setdefault(edges_key, [])
    try:
        graph = node_link_graph(data, directed=True, multigraph=True, edges=edges_key)
    except (KeyError, TypeError, NetworkXError) as err:
        raise GraphLoadError(f"Invalid node-link data in {path}: {err}") from err

    if not graph.is_directed():
        graph = nx.MultiDiGraph(graph)

    logger.debug(
        "Read graph %s: %d nodes, %d edges",
        path,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def _find_root(graph: nx.MultiDiGraph) -> str:
    roots = [node_id for node_id, attrs in graph.nodes(data=True) if attrs.get("root")]
    if len(roots) != 1:
        raise InvariantViolation(
            f"Expected exactly one root node in graph, found {len(roots)}"
        )
    return roots[0]


def select_nodes(graph: nx.MultiDiGraph, omit: Iterable[str] = ()) -> nx.MultiDiGraph:
    """Drop nodes that are only reachable through omitted edge kinds.

    The root, every node reachable from it through non-omitted edges
    (a link counts as a normal edge to its target) and every extraneous
    node are kept.

    Args:
        graph: Full dependency graph.
        omit: Edge kinds to ignore while walking from the root.

    Returns:
        nx.MultiDiGraph: The input graph when nothing is omitted, otherwise
        an induced subgraph copy.

    Raises:
        InvariantViolation: If the graph does not have exactly one root.
    """
    omit = {str(kind) for kind in omit}
    root = _find_root(graph)
    if not omit:
        return graph

    walk = nx.DiGraph()
    walk.add_nodes_from(graph.nodes)
    for source, target, attrs in graph.edges(data=True):
        if str(attrs.get("kind", EdgeKind.NORMAL.value)) in omit:
            continue
        walk.add_edge(source, target)
    for node_id, attrs in graph.nodes(data=True):
        target = attrs.get("target")
        if attrs.get("link") and target is not None and graph.has_node(target):
            walk.add_edge(node_id, target)

    keep = {root} | nx.descendants(walk, root)
    keep.update(
        node_id for node_id, attrs in graph.nodes(data=True) if attrs.get("extraneous")
    )

    dropped = graph.number_of_nodes() - len(keep)
    logger.info("Omitting %s dependencies removed %d nodes", sorted(omit), dropped)
    return graph.subgraph(keep).copy()


def nodes_from_graph(graph: nx.MultiDiGraph) -> List[GraphNode]:
    """Convert a node-link graph into linked ``GraphNode`` objects.

    Args:
        graph: Dependency graph.

    Returns:
        List[GraphNode]: Nodes in graph iteration order, missing nodes excluded.

    Raises:
        GraphLoadError: If a node carries a package attribute that is not an object.
    """
    nodes: Dict[str, GraphNode] = {}
    for node_id, attrs in graph.nodes(data=True):
        if attrs.get("missing"):
            continue
        package = attrs.get("package") or {}
        if not isinstance(package, dict):
            raise GraphLoadError(
                f"Package attribute must be an object, got {type(package).__name__}",
                identifier=str(node_id),
            )
        nodes[node_id] = GraphNode(
            identifier=str(node_id),
            name=str(attrs.get("name", package.get("name", ""))),
            version=str(attrs.get("version", package.get("version", ""))),
            location=str(attrs.get("location", "")),
            resolved=attrs.get("resolved"),
            integrity=attrs.get("integrity"),
            package=dict(package),
            is_root=bool(attrs.get("root", False)),
            is_link=bool(attrs.get("link", False)),
            is_extraneous=bool(attrs.get("extraneous", False)),
        )

    for node_id, node in nodes.items():
        if not node.is_link:
            continue
        target_id = graph.nodes[node_id].get("target")
        node.target = nodes.get(target_id)
        if node.target is None:
            logger.warning("Link %s points at unknown target %s", node_id, target_id)

    for source, target, attrs in graph.edges(data=True):
        origin = nodes.get(source)
        if origin is None:
            continue
        kind = attrs.get("kind", EdgeKind.NORMAL.value)
        origin.add_edge(nodes.get(target), EdgeKind.coerce(kind) or kind)

    return list(nodes.values())


def load_graph(path: Union[str, Path], omit: Iterable[str] = ()) -> List[GraphNode]:
    """Read a node-link JSON graph and return the selected nodes.

    Args:
        path: JSON file path.
        omit: Edge kinds whose exclusively reachable nodes are dropped.

    Returns:
        List[GraphNode]: Nodes ready for projection.
    """
    graph = select_nodes(read_graph(path), omit)
    nodes = nodes_from_graph(graph)
    logger.info("Loaded %d nodes from %s", len(nodes), path)
    return nodes
