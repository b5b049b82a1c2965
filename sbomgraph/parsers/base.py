"""Capability interfaces for ecosystem-specific parsing.

The projector never interprets package specifiers, integrity strings or
manifests itself. Each ecosystem supplies three narrow capabilities:

1. SpecifierParser - classify a package reference and render a purl
2. IntegrityParser - pick one digest out of an integrity string
3. ManifestNormalizer - fill conventional manifest defaults
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable


class InvalidSpecifierError(ValueError):
    """A package specifier or name cannot be parsed."""


class IntegrityError(ValueError):
    """An integrity string does not contain a usable digest."""


@dataclass(frozen=True)
class ParsedSpecifier:
    """Result of parsing a package specifier.

    Attributes:
        raw: Input string.
        type: Specifier type (version, range, tag, alias, git, hosted,
            remote, file, directory).
        name: Package name, when the specifier names one.
        scope: Scope including the leading ``@``, for scoped names.
        escaped_name: Name safe for use in a URL path segment.
        raw_spec: Portion after the name (or the whole input).
        fetch_spec: Normalized form of ``raw_spec`` (cleaned version,
            URL, path, ...).
    """

    raw: str
    type: str
    name: Optional[str] = None
    scope: Optional[str] = None
    escaped_name: Optional[str] = None
    raw_spec: str = ""
    fetch_spec: Optional[str] = None


@dataclass(frozen=True)
class Digest:
    """A single algorithm/digest pair taken from an integrity string."""

    algorithm: str
    digest: bytes

    def hex_digest(self) -> str:
        """Return the digest as lowercase hex."""
        return self.digest.hex()


@runtime_checkable
class SpecifierParser(Protocol):
    """Parse package references for one ecosystem."""

    def parse(self, spec: str) -> ParsedSpecifier:
        """Parse ``spec``; raise InvalidSpecifierError when impossible."""

    def to_purl(self, spec: str) -> str:
        """Render ``spec`` as a canonical package URL."""


@runtime_checkable
class IntegrityParser(Protocol):
    """Extract digests from integrity strings."""

    def pick(self, integrity: str) -> Digest:
        """Return the preferred digest; raise IntegrityError when none."""


@runtime_checkable
class ManifestNormalizer(Protocol):
    """Normalize a package manifest in place."""

    def normalize(self, manifest: Dict[str, Any]) -> Dict[str, Any]:
        """Fill defaults on ``manifest`` and return the same mapping."""


@dataclass(frozen=True)
class Ecosystem:
    """Bundle of the three parsing capabilities for one ecosystem.

    Attributes:
        name: Ecosystem identifier (e.g. ``npm``).
        specifiers: Specifier parser.
        integrity: Integrity parser.
        manifests: Manifest normalizer.
    """

    name: str
    specifiers: SpecifierParser
    integrity: IntegrityParser
    manifests: ManifestNormalizer
