"""Sbomgraph - SPDX software bills of materials from dependency graphs."""

__version__ = "0.1.0"

from sbomgraph.config import ManagerInfo, SbomConfig
from sbomgraph.errors import (
    GraphLoadError,
    InvalidPackageIdentifier,
    InvariantViolation,
    MalformedChecksum,
    SbomError,
)
from sbomgraph.graph import Edge, EdgeKind, GraphNode, load_graph
from sbomgraph.sbom import GraphProjector, SpdxDocument, project

__all__ = [
    "Edge",
    "EdgeKind",
    "GraphLoadError",
    "GraphNode",
    "GraphProjector",
    "InvalidPackageIdentifier",
    "InvariantViolation",
    "MalformedChecksum",
    "ManagerInfo",
    "SbomConfig",
    "SbomError",
    "SpdxDocument",
    "__version__",
    "load_graph",
    "project",
]
