"""Tests for graph node and edge types."""

import pytest

from sbomgraph.graph.models import EdgeKind, GraphNode, make_pkgid


@pytest.mark.parametrize(
    ("name", "version", "package_name", "expected"),
    [
        ("left-pad", "1.3.0", None, "left-pad@1.3.0"),
        ("@acme/widget", "2.0.0", "@acme/widget", "@acme/widget@2.0.0"),
        ("pad", "1.3.0", "left-pad", "pad@npm:left-pad@1.3.0"),
    ],
)
def test_make_pkgid(name, version, package_name, expected) -> None:
    """Aliased installs embed the real package name."""
    assert make_pkgid(name, version, package_name) == expected


def test_edge_kind_coerce() -> None:
    """Known kinds map to members, anything else to None."""
    assert EdgeKind.coerce("dev") is EdgeKind.DEV
    assert EdgeKind.coerce(EdgeKind.PEER) is EdgeKind.PEER
    assert EdgeKind.coerce("workspace") is None


def test_resolve_follows_link_target() -> None:
    """Links resolve to their target; links without one resolve to themselves."""
    target = GraphNode(identifier=make_pkgid("ws", "1.0.0"), name="ws", version="1.0.0")
    link = GraphNode(
        identifier=make_pkgid("ws", "1.0.0"), name="ws", version="1.0.0", is_link=True, target=target
    )
    dangling = GraphNode(identifier="lib@1.0.0", name="lib", version="1.0.0", is_link=True)

    assert link.resolve() is target
    assert dangling.resolve() is dangling
    assert target.resolve() is target
