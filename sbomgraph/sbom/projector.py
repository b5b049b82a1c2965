"""Projection of a resolved dependency graph into an SPDX 2.3 document."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from sbomgraph.config import ManagerInfo, SbomConfig
from sbomgraph.errors import InvalidPackageIdentifier, InvariantViolation
from sbomgraph.graph.models import Edge, EdgeKind, GraphNode
from sbomgraph.parsers import get_ecosystem
from sbomgraph.parsers.base import Ecosystem, InvalidSpecifierError
from sbomgraph.sbom.identifiers import to_spdx_id
from sbomgraph.sbom.models import (
    SPDX_DOCUMENT_ID,
    CreationInfo,
    RelationshipRecord,
    RelationshipType,
    SpdxDocument,
)
from sbomgraph.sbom.packages import build_package
from sbomgraph.sbom.relationships import classify

logger = logging.getLogger("sbomgraph.sbom.projector")


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a UTC timestamp as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def split_root(nodes: Sequence[GraphNode]) -> Tuple[GraphNode, List[GraphNode]]:
    """Separate the single root node from its dependencies.

    Raises:
        InvariantViolation: If there is not exactly one root node.
    """
    roots = [node for node in nodes if node.is_root]
    if len(roots) != 1:
        raise InvariantViolation(
            f"Expected exactly one root node, found {len(roots)}",
            identifier=", ".join(node.identifier for node in roots) or None,
        )
    root = roots[0]
    return root, [node for node in nodes if node is not root]


class GraphProjector:
    """Builds SPDX documents from graph snapshots.

    The projector holds no per-call state; the clock and the namespace
    token source are injectable so tests can pin them.

    Args:
        config: Projection configuration.
        ecosystem: Parsing capabilities; looked up from ``config.ecosystem``
            when omitted.
        clock: Returns the creation time.
        token_factory: Returns a fresh namespace token per call.
    """

    def __init__(
        self,
        config: Optional[SbomConfig] = None,
        ecosystem: Optional[Ecosystem] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        token_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.config = config or SbomConfig()
        self.ecosystem = ecosystem or get_ecosystem(self.config.ecosystem)
        self._clock = clock
        self._token_factory = token_factory

    def namespace(self, root: GraphNode) -> str:
        """Return a fresh document namespace for ``root``.

        Raises:
            InvalidPackageIdentifier: If the root identifier names no package.
        """
        try:
            parsed = self.ecosystem.specifiers.parse(root.identifier)
        except InvalidSpecifierError as err:
            raise InvalidPackageIdentifier(str(err), identifier=root.identifier) from err
        if not parsed.escaped_name:
            raise InvalidPackageIdentifier(
                "Root identifier does not name a package", identifier=root.identifier
            )
        return (
            f"{self.config.namespace_base}/"
            f"{parsed.escaped_name}-{root.version}-{self._token_factory()}"
        )

    def relationships(
        self, root: GraphNode, nodes: Sequence[GraphNode]
    ) -> List[RelationshipRecord]:
        """Return dependency relationships between nodes of the set.

        Edges whose target is not part of ``nodes`` are dropped. A link
        reports its target's edges under its own identifier when the
        target itself is not part of ``nodes``. Each
        extraneous node additionally gets an optional dependency from the
        root.
        """
        known: Set[str] = {node.identifier for node in nodes}
        records: List[RelationshipRecord] = []

        for node in nodes:
            source = node.resolve()
            emitter = source if source.identifier in known else node
            for edge in source.edges_out:
                if edge.to is None or edge.to.identifier not in known:
                    logger.debug(
                        "Dropping edge %s -> %s: target not in node set",
                        emitter.identifier,
                        edge.to.identifier if edge.to is not None else "<missing>",
                    )
                    continue
                record = classify(emitter, edge)
                if record is not None:
                    records.append(record)

        for node in nodes:
            if node.is_extraneous:
                records.append(classify(root, Edge(to=node, kind=EdgeKind.OPTIONAL)))

        return records

    def project(
        self,
        nodes: Iterable[GraphNode],
        manager: ManagerInfo,
        package_type: Optional[str] = None,
    ) -> SpdxDocument:
        """Project a graph snapshot into an SPDX document.

        Args:
            nodes: All nodes of the graph, including exactly one root.
            manager: Identity of the package manager.
            package_type: Purpose of the root package (e.g. ``application``).

        Returns:
            SpdxDocument: Immutable SPDX 2.3 document.

        Raises:
            InvariantViolation: If the node set does not have exactly one root.
            InvalidPackageIdentifier: If a node has no package URL form.
            MalformedChecksum: If an integrity string is malformed and the
                checksum policy is ``fail``.
        """
        nodes = list(nodes)
        root, children = split_root(nodes)
        root_id = to_spdx_id(root.identifier)
        namespace = self.namespace(root)

        relationships = self.relationships(root, nodes)

        policy = self.config.checksum_policy
        packages = [build_package(root, self.ecosystem, package_type, policy)]
        packages.extend(
            build_package(child, self.ecosystem, checksum_policy=policy) for child in children
        )

        document = SpdxDocument(
            name=root.identifier,
            document_namespace=namespace,
            creation_info=CreationInfo(
                created=iso_timestamp(self._clock()),
                creators=(manager.tool,),
            ),
            document_describes=(root_id,),
            packages=tuple(packages),
            relationships=(
                RelationshipRecord(
                    spdx_element_id=SPDX_DOCUMENT_ID,
                    related_spdx_element=root_id,
                    relationship_type=RelationshipType.DESCRIBES,
                ),
                *relationships,
            ),
        )
        logger.info(
            "Projected %s: %d packages, %d relationships",
            root.identifier,
            len(document.packages),
            len(document.relationships),
        )
        return document


def project(
    nodes: Iterable[GraphNode],
    manager: ManagerInfo,
    package_type: Optional[str] = None,
    config: Optional[SbomConfig] = None,
) -> SpdxDocument:
    """Project ``nodes`` with a default ``GraphProjector``."""
    return GraphProjector(config).project(nodes, manager, package_type)
