"""Download locations and package-manager references for graph nodes."""

from __future__ import annotations

import logging
from enum import Enum

from sbomgraph.graph.models import GraphNode
from sbomgraph.parsers.base import InvalidSpecifierError, SpecifierParser
from sbomgraph.sbom.models import NO_ASSERTION

logger = logging.getLogger("sbomgraph.sbom.locators")

GIT_SPEC_TYPES = frozenset({"git", "hosted"})


class SourceKind(str, Enum):
    """Classification of a node's resolved source."""

    GIT = "git"
    OTHER = "other"
    UNKNOWN = "unknown"


def classify_source(node: GraphNode, specifiers: SpecifierParser) -> SourceKind:
    """Classify where a node's bytes came from.

    Args:
        node: Graph node.
        specifiers: Ecosystem specifier parser.

    Returns:
        SourceKind: GIT for git and hosted-git sources, OTHER for any other
        parseable source, UNKNOWN when the node has no source or the
        source cannot be parsed.
    """
    if not node.resolved:
        return SourceKind.UNKNOWN
    try:
        parsed = specifiers.parse(node.resolved)
    except InvalidSpecifierError as err:
        logger.warning("Cannot classify source of %s: %s", node.identifier, err)
        return SourceKind.UNKNOWN
    return SourceKind.GIT if parsed.type in GIT_SPEC_TYPES else SourceKind.OTHER


def is_git_source(node: GraphNode, specifiers: SpecifierParser) -> bool:
    """Return True when the node was resolved from a git repository."""
    return classify_source(node, specifiers) is SourceKind.GIT


def download_location(node: GraphNode) -> str:
    """Return the SPDX download location of a node."""
    if node.is_link or not node.resolved:
        return NO_ASSERTION
    return node.resolved


def purl_locator(node: GraphNode, specifiers: SpecifierParser) -> str:
    """Return the package URL of a node.

    Git-sourced nodes carry their source as a ``vcs_url`` qualifier.

    Raises:
        InvalidSpecifierError: If the identifier has no package URL form.
    """
    locator = specifiers.to_purl(node.identifier)
    if is_git_source(node, specifiers):
        locator = f"{locator}?vcs_url={node.resolved}"
    return locator
