"""Exception hierarchy for SBOM projection.

All errors that can escape a projection derive from ``SbomError`` and
carry the identifier of the offending graph node when one is known.
"""

from typing import Optional


class SbomError(Exception):
    """Base class for projection failures.

    Attributes:
        identifier: Identifier of the graph node that triggered the error.
    """

    def __init__(self, message: str, identifier: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def __str__(self) -> str:
        if self.identifier is None:
            return self.message
        return f"{self.message} (node: {self.identifier})"


class InvariantViolation(SbomError):
    """The input graph breaks a structural assumption (e.g. root count)."""


class InvalidPackageIdentifier(SbomError):
    """A node identifier cannot be turned into a package URL or namespace."""


class MalformedChecksum(SbomError):
    """A node integrity string cannot be parsed into a digest."""


class GraphLoadError(SbomError):
    """A serialized graph could not be read or converted into nodes."""
