"""SPDX projection of dependency graphs."""

from sbomgraph.sbom.identifiers import to_spdx_id
from sbomgraph.sbom.locators import SourceKind, classify_source, is_git_source
from sbomgraph.sbom.models import (
    NO_ASSERTION,
    Checksum,
    CreationInfo,
    ExternalRef,
    PackageRecord,
    RelationshipRecord,
    RelationshipType,
    SpdxDocument,
)
from sbomgraph.sbom.packages import build_package
from sbomgraph.sbom.projector import GraphProjector, project
from sbomgraph.sbom.relationships import classify

__all__ = [
    "NO_ASSERTION",
    "Checksum",
    "CreationInfo",
    "ExternalRef",
    "GraphProjector",
    "PackageRecord",
    "RelationshipRecord",
    "RelationshipType",
    "SourceKind",
    "SpdxDocument",
    "build_package",
    "classify",
    "classify_source",
    "is_git_source",
    "project",
    "to_spdx_id",
]
