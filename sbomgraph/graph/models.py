"""Graph node and edge value types consumed by the SPDX projector.

The projector treats these objects as a read-only snapshot of a resolved
install tree. The only mutation it performs is manifest normalization on
``GraphNode.package`` (see ``sbomgraph.sbom.packages``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EdgeKind(str, Enum):
    """Dependency edge kinds as declared in a package manifest."""

    NORMAL = "normal"
    PEER = "peer"
    OPTIONAL = "optional"
    DEV = "dev"

    @classmethod
    def coerce(cls, value: Any) -> Optional["EdgeKind"]:
        """Return the matching kind, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


def make_pkgid(name: str, version: str, package_name: Optional[str] = None) -> str:
    """Build a package identifier the way npm keys installed nodes.

    Args:
        name: Name the node is installed under.
        version: Resolved version.
        package_name: Real package name when installed under an alias.

    Returns:
        ``name@version``, or ``name@npm:package_name@version`` for aliases.
    """
    if package_name and package_name != name:
        return f"{name}@npm:{package_name}@{version}"
    return f"{name}@{version}"


@dataclass(eq=False)
class Edge:
    """Directed dependency from one node to another.

    Attributes:
        to: Target node, or None when the dependency is unresolved.
        kind: Edge kind; any value outside ``EdgeKind`` is kept verbatim.
    """

    to: Optional["GraphNode"]
    kind: Any = EdgeKind.NORMAL


@dataclass(eq=False)
class GraphNode:
    """One resolved package instance in an install tree.

    Attributes:
        identifier: Manager-specific unique key (``name@version``).
        name: Installed name.
        version: Resolved version.
        location: Install location relative to the project root.
        resolved: Source the package bytes came from.
        integrity: SRI integrity string.
        package: Package manifest fields (normalized in place on export).
        is_root: Whether this node is the project root.
        is_link: Whether this node is an alias for ``target``.
        target: Node a link resolves to.
        is_extraneous: Present on disk but not required by the root.
        edges_out: Outgoing dependency edges.
    """

    identifier: str
    name: str
    version: str
    location: str = ""
    resolved: Optional[str] = None
    integrity: Optional[str] = None
    package: Dict[str, Any] = field(default_factory=dict)
    is_root: bool = False
    is_link: bool = False
    target: Optional["GraphNode"] = None
    is_extraneous: bool = False
    edges_out: List[Edge] = field(default_factory=list)

    def resolve(self) -> "GraphNode":
        """Return the node whose edges describe this package."""
        if self.is_link and self.target is not None:
            return self.target
        return self

    def add_edge(self, to: Optional["GraphNode"], kind: Any = EdgeKind.NORMAL) -> Edge:
        """Append an outgoing edge and return it."""
        edge = Edge(to=to, kind=kind)
        self.edges_out.append(edge)
        return edge

    def __repr__(self) -> str:
        return f"GraphNode({self.identifier!r})"
