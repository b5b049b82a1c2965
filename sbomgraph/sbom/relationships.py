"""Mapping of dependency edges to SPDX relationship records."""

from __future__ import annotations

from typing import Any, Optional

from sbomgraph.graph.models import Edge, EdgeKind, GraphNode
from sbomgraph.sbom.identifiers import to_spdx_id
from sbomgraph.sbom.models import RelationshipRecord, RelationshipType

EDGE_RELATIONSHIPS = {
    EdgeKind.PEER: RelationshipType.HAS_PREREQUISITE,
    EdgeKind.OPTIONAL: RelationshipType.OPTIONAL_DEPENDENCY_OF,
    EdgeKind.DEV: RelationshipType.DEV_DEPENDENCY_OF,
    EdgeKind.NORMAL: RelationshipType.DEPENDS_ON,
}


def relationship_type(kind: Any) -> RelationshipType:
    """Return the relationship type for an edge kind; unknown kinds depend on."""
    edge_kind = EdgeKind.coerce(kind)
    return EDGE_RELATIONSHIPS.get(edge_kind, RelationshipType.DEPENDS_ON)


def classify(node: GraphNode, edge: Edge) -> Optional[RelationshipRecord]:
    """Build the relationship record for ``node -> edge.to``.

    Args:
        node: Node the edge leaves from.
        edge: Dependency edge.

    Returns:
        Optional[RelationshipRecord]: None when the edge has no target.
    """
    if edge.to is None:
        return None
    return RelationshipRecord(
        spdx_element_id=to_spdx_id(node.identifier),
        related_spdx_element=to_spdx_id(edge.to.identifier),
        relationship_type=relationship_type(edge.kind),
    )
