"""Ecosystem parsers.

Importing this package registers every bundled ecosystem with the
global ``EcosystemRegistry``.
"""

from sbomgraph.parsers.base import (
    Digest,
    Ecosystem,
    IntegrityError,
    IntegrityParser,
    InvalidSpecifierError,
    ManifestNormalizer,
    ParsedSpecifier,
    SpecifierParser,
)
from sbomgraph.parsers.registry import EcosystemRegistry
from sbomgraph.parsers.npm import NPM_ECOSYSTEM

EcosystemRegistry.get_instance().register(NPM_ECOSYSTEM)


def get_ecosystem(name: str) -> Ecosystem:
    """Return the registered ecosystem bundle for ``name``."""
    return EcosystemRegistry.get_instance().get(name)


__all__ = [
    "Digest",
    "Ecosystem",
    "EcosystemRegistry",
    "IntegrityError",
    "IntegrityParser",
    "InvalidSpecifierError",
    "ManifestNormalizer",
    "NPM_ECOSYSTEM",
    "ParsedSpecifier",
    "SpecifierParser",
    "get_ecosystem",
]
