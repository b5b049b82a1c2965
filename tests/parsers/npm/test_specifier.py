"""Tests for npm package specifier parsing."""

import pytest

from sbomgraph.parsers.base import InvalidSpecifierError
from sbomgraph.parsers.npm.specifier import NpmSpecifierParser, clean_version, is_range

PARSER = NpmSpecifierParser()


@pytest.mark.parametrize(
    ("spec", "spec_type", "name"),
    [
        ("left-pad@1.3.0", "version", "left-pad"),
        ("foo@^1.2.0", "range", "foo"),
        ("foo@>=1.0.0 <2.0.0 || 3.x", "range", "foo"),
        ("foo", "range", "foo"),
        ("foo@latest", "tag", "foo"),
        ("foo@npm:bar@1.0.0", "alias", "foo"),
        ("github:npm/cli", "hosted", None),
        ("npm/cli", "hosted", None),
        ("foo@github:npm/cli#v1.0.0", "hosted", "foo"),
        ("git+ssh://git@github.com/npm/cli.git#abc123", "hosted", None),
        ("git@github.com:npm/cli.git", "hosted", None),
        ("git+https://git.example.com/repo.git", "git", None),
        ("git://git.example.com/repo.git", "git", None),
        ("https://registry.npmjs.org/left-pad/-/left-pad-1.3.0.tgz", "remote", None),
        ("file:../foo", "directory", None),
        ("./foo.tgz", "file", None),
        ("/abs/path/pkg", "directory", None),
        ("foo@file:vendor/foo-1.0.0.tgz", "file", "foo"),
    ],
)
def test_parse_classifies_specifiers(spec: str, spec_type: str, name) -> None:
    """Specifiers are classified the way npm classifies them."""
    parsed = PARSER.parse(spec)
    assert parsed.type == spec_type
    assert parsed.name == name
    assert parsed.raw == spec


def test_parse_scoped_name() -> None:
    """Scoped names expose their scope and an escaped form."""
    parsed = PARSER.parse("@types/node@20.1.0")

    assert parsed.name == "@types/node"
    assert parsed.scope == "@types"
    assert parsed.escaped_name == "@types%2fnode"
    assert parsed.raw_spec == "20.1.0"
    assert parsed.fetch_spec == "20.1.0"


def test_parse_cleans_loose_versions() -> None:
    """Loose versions are recognized and cleaned in fetch_spec."""
    parsed = PARSER.parse("foo@v1.2.3")

    assert parsed.type == "version"
    assert parsed.raw_spec == "v1.2.3"
    assert parsed.fetch_spec == "1.2.3"


def test_parse_alias_fetch_spec() -> None:
    """Aliases point at the real package."""
    parsed = PARSER.parse("foo@npm:@scope/bar@^2.0.0")

    assert parsed.type == "alias"
    assert parsed.fetch_spec == "@scope/bar@^2.0.0"


@pytest.mark.parametrize(
    "spec",
    [
        ".hidden@1.0.0",
        "_private@1.0.0",
        "node_modules@1.0.0",
        "foo@not valid!",
        "foo@npm:github:user/repo",
        "@scope@1.0.0",
        "foo@ftp://example.com/foo.tgz",
    ],
)
def test_parse_rejects_invalid_specifiers(spec: str) -> None:
    """Invalid names and specs raise InvalidSpecifierError."""
    with pytest.raises(InvalidSpecifierError):
        PARSER.parse(spec)


@pytest.mark.parametrize(
    ("spec", "purl"),
    [
        ("left-pad@1.3.0", "pkg:npm/left-pad@1.3.0"),
        ("@scope/pkg@1.0.0", "pkg:npm/%40scope/pkg@1.0.0"),
        ("foo@1.0.0-beta.1", "pkg:npm/foo@1.0.0-beta.1"),
    ],
)
def test_to_purl(spec: str, purl: str) -> None:
    """Exact versions render as npm package URLs."""
    assert PARSER.to_purl(spec) == purl


@pytest.mark.parametrize(
    "spec",
    ["foo@^1.0.0", "foo@latest", "foo@npm:bar@1.0.0", "app@", "github:npm/cli"],
)
def test_to_purl_requires_exact_version(spec: str) -> None:
    """Anything but a named exact version has no purl."""
    with pytest.raises(InvalidSpecifierError):
        PARSER.to_purl(spec)


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.2.3", "1.2.3"),
        ("v1.2.3", "1.2.3"),
        ("=1.2.3", "1.2.3"),
        (" 1.2.3 ", "1.2.3"),
        ("1.2.3-rc.1+build.5", "1.2.3-rc.1"),
        ("1.2", None),
        ("^1.2.3", None),
    ],
)
def test_clean_version(version: str, expected) -> None:
    """Only single versions are cleaned."""
    assert clean_version(version) == expected


@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        ("*", True),
        ("1.x", True),
        ("~1.2", True),
        ("1.0.0 - 2.0.0", True),
        (">= 1.0.0", True),
        ("^1 || ^2", True),
        ("latest", False),
        ("next-tag", False),
    ],
)
def test_is_range(spec: str, expected: bool) -> None:
    """Semver ranges are told apart from dist-tags."""
    assert is_range(spec) is expected
