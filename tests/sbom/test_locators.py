"""Tests for source classification and locator building."""

from typing import Optional

import pytest

from sbomgraph.graph.models import GraphNode
from sbomgraph.parsers.npm import NpmSpecifierParser
from sbomgraph.sbom.locators import (
    SourceKind,
    classify_source,
    download_location,
    is_git_source,
    purl_locator,
)

SPECIFIERS = NpmSpecifierParser()


def _node(identifier: str, resolved: Optional[str] = None, **kwargs) -> GraphNode:
    name, _, version = identifier.rpartition("@")
    return GraphNode(identifier=identifier, name=name, version=version, resolved=resolved, **kwargs)


@pytest.mark.parametrize(
    ("resolved", "expected"),
    [
        (None, SourceKind.UNKNOWN),
        ("", SourceKind.UNKNOWN),
        ("::::", SourceKind.UNKNOWN),
        ("https://registry.npmjs.org/foo/-/foo-1.0.0.tgz", SourceKind.OTHER),
        ("file:../foo", SourceKind.OTHER),
        ("git+ssh://git@github.com/acme/foo.git#abc123", SourceKind.GIT),
        ("github:acme/foo", SourceKind.GIT),
        ("git+https://git.example.com/foo.git", SourceKind.GIT),
    ],
)
def test_classify_source(resolved: Optional[str], expected: SourceKind) -> None:
    """Sources are split into git, other and unknown."""
    assert classify_source(_node("foo@1.0.0", resolved), SPECIFIERS) is expected


def test_is_git_source_swallows_parse_failures() -> None:
    """An unparseable source is simply not git."""
    assert is_git_source(_node("foo@1.0.0", "not a spec!"), SPECIFIERS) is False


def test_download_location_prefers_resolved() -> None:
    """Resolved sources are used verbatim."""
    url = "https://registry.npmjs.org/foo/-/foo-1.0.0.tgz"
    assert download_location(_node("foo@1.0.0", url)) == url


def test_download_location_no_assertion_for_links_and_missing_sources() -> None:
    """Links and nodes without a source have no download location."""
    assert download_location(_node("foo@1.0.0")) == "NOASSERTION"
    link = _node("foo@1.0.0", "file:packages/foo", is_link=True)
    assert download_location(link) == "NOASSERTION"


def test_purl_locator_for_registry_package() -> None:
    """Registry packages get a plain purl."""
    node = _node("@acme/foo@1.0.0", "https://registry.npmjs.org/@acme/foo/-/foo-1.0.0.tgz")
    assert purl_locator(node, SPECIFIERS) == "pkg:npm/%40acme/foo@1.0.0"


def test_purl_locator_appends_vcs_url_for_git_sources() -> None:
    """Git sources are recorded as a vcs_url qualifier."""
    source = "git+ssh://git@github.com/acme/foo.git#abc123"
    node = _node("foo@1.0.0", source)
    assert purl_locator(node, SPECIFIERS) == f"pkg:npm/foo@1.0.0?vcs_url={source}"
