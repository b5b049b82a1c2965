"""Mapping of graph nodes to SPDX package records.

Building a record normalizes ``node.package`` in place through the
ecosystem's manifest normalizer (missing name/version become ``""``,
shorthand repositories are expanded, and so on). Callers sharing node
objects between concurrent projections must copy the manifests first.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sbomgraph.errors import InvalidPackageIdentifier, MalformedChecksum
from sbomgraph.graph.models import GraphNode
from sbomgraph.parsers.base import Ecosystem, IntegrityError, InvalidSpecifierError
from sbomgraph.sbom.identifiers import to_spdx_id
from sbomgraph.sbom.locators import download_location, purl_locator
from sbomgraph.sbom.models import NO_ASSERTION, Checksum, ExternalRef, PackageRecord

logger = logging.getLogger("sbomgraph.sbom.packages")


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def checksum_for(node: GraphNode, ecosystem: Ecosystem) -> Checksum:
    """Build the SPDX checksum for a node's integrity string.

    Raises:
        MalformedChecksum: If the integrity string has no usable digest.
    """
    try:
        digest = ecosystem.integrity.pick(node.integrity)
    except IntegrityError as err:
        raise MalformedChecksum(str(err), identifier=node.identifier) from err
    return Checksum(
        algorithm=digest.algorithm.upper().replace("_", "-"),
        checksum_value=digest.hex_digest(),
    )


def build_package(
    node: GraphNode,
    ecosystem: Ecosystem,
    package_type: Optional[str] = None,
    checksum_policy: str = "fail",
) -> PackageRecord:
    """Build the SPDX package record of one node.

    Args:
        node: Graph node; ``node.package`` is normalized in place.
        ecosystem: Parsing capabilities for the node's ecosystem.
        package_type: Purpose hint, upper-cased into
            ``primaryPackagePurpose`` when given.
        checksum_policy: ``fail`` raises on malformed integrity, ``omit``
            drops the checksum with a warning.

    Returns:
        PackageRecord: Package entry.

    Raises:
        InvalidPackageIdentifier: If no package URL can be built.
        MalformedChecksum: If the integrity string is malformed and the
            policy is ``fail``.
    """
    manifest = ecosystem.manifests.normalize(node.package)

    try:
        locator = purl_locator(node, ecosystem.specifiers)
    except InvalidSpecifierError as err:
        raise InvalidPackageIdentifier(str(err), identifier=node.identifier) from err

    checksums = None
    if node.integrity:
        try:
            checksums = (checksum_for(node, ecosystem),)
        except MalformedChecksum as err:
            if checksum_policy != "omit":
                raise
            logger.warning("Omitting checksum: %s", err)

    record = PackageRecord(
        name=node.name,
        spdx_id=to_spdx_id(node.identifier),
        version_info=node.version,
        package_file_name=node.location,
        description=_text(manifest.get("description")),
        primary_package_purpose=package_type.upper() if package_type else None,
        download_location=download_location(node),
        files_analyzed=False,
        homepage=_text(manifest.get("homepage")) or NO_ASSERTION,
        license_declared=_text(manifest.get("license")) or NO_ASSERTION,
        external_refs=(ExternalRef(reference_locator=locator),),
        checksums=checksums,
    )
    logger.debug("Built package record %s", record.spdx_id)
    return record
