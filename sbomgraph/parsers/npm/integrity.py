"""Subresource Integrity (SRI) string parsing.

An integrity string is a whitespace separated list of
``<algorithm>-<base64 digest>[?options]`` entries. When several entries
are present, the strongest algorithm wins and, among entries of that
algorithm, the first one is used.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import List

from sbomgraph.parsers.base import Digest, IntegrityError

logger = logging.getLogger("sbomgraph.parsers.npm.integrity")

_SRI_ENTRY = re.compile(
    r"^(?P<algorithm>sha3[-_](?:224|256|384|512)|[a-z0-9]+)-(?P<digest>[^?]+)(?P<options>[?\S*]*)$"
)

# Weakest first.
ALGORITHM_PRIORITY = (
    "md5",
    "whirlpool",
    "sha1",
    "sha224",
    "sha256",
    "sha384",
    "sha512",
    "sha3",
    "sha3-256",
    "sha3-384",
    "sha3-512",
    "sha3_256",
    "sha3_384",
    "sha3_512",
)


def _rank(algorithm: str) -> int:
    try:
        return ALGORITHM_PRIORITY.index(algorithm)
    except ValueError:
        return -1


def parse_entries(integrity: str) -> List[Digest]:
    """Parse every well-formed entry of an integrity string.

    Entries that do not look like ``algo-digest`` are skipped, matching
    the lenient behaviour of npm. A well-formed entry whose digest is not
    valid base64 is an error.

    Args:
        integrity: SRI string.

    Returns:
        List[Digest]: Entries in input order.

    Raises:
        IntegrityError: If a digest cannot be base64-decoded.
    """
    entries: List[Digest] = []
    for token in integrity.split():
        match = _SRI_ENTRY.match(token)
        if not match:
            logger.debug("Skipping malformed integrity entry: %s", token)
            continue
        try:
            raw = base64.b64decode(match["digest"], validate=True)
        except (binascii.Error, ValueError) as err:
            raise IntegrityError(
                f"Invalid base64 digest for {match['algorithm']}: {err}"
            ) from err
        entries.append(Digest(algorithm=match["algorithm"], digest=raw))
    return entries


class SriIntegrityParser:
    """Integrity parser picking the strongest digest."""

    def pick(self, integrity: str) -> Digest:
        """Select one digest from an integrity string.

        Args:
            integrity: SRI string, possibly listing several digests.

        Returns:
            Digest: First entry of the highest-priority algorithm. Unknown
            algorithms rank below every known one.

        Raises:
            IntegrityError: If no usable entry is present.
        """
        if not isinstance(integrity, str):
            raise IntegrityError(f"Integrity must be a string, got {type(integrity).__name__}")

        entries = parse_entries(integrity)
        if not entries:
            raise IntegrityError(f"No valid integrity entries in '{integrity}'")

        best = entries[0]
        for entry in entries[1:]:
            if _rank(entry.algorithm) > _rank(best.algorithm):
                best = entry
        return best
