"""NPM ecosystem parser package.

Provides the npm implementations of the parsing capabilities:
- Package specifier classification and purl rendering
- Hosted git repository detection
- Subresource Integrity parsing
- package.json normalization
"""

from sbomgraph.parsers.base import Ecosystem
from sbomgraph.parsers.npm.integrity import SriIntegrityParser
from sbomgraph.parsers.npm.manifest import NpmManifestNormalizer
from sbomgraph.parsers.npm.specifier import NpmSpecifierParser

NPM_ECOSYSTEM = Ecosystem(
    name="npm",
    specifiers=NpmSpecifierParser(),
    integrity=SriIntegrityParser(),
    manifests=NpmManifestNormalizer(),
)

__all__ = [
    "NPM_ECOSYSTEM",
    "NpmManifestNormalizer",
    "NpmSpecifierParser",
    "SriIntegrityParser",
]
