"""npm package specifier parsing.

Classifies the strings npm accepts wherever a dependency can be named
(``foo@^1.2.0``, ``@scope/pkg@1.0.0``, ``github:user/repo``,
``git+ssh://...``, tarball URLs, local paths, ``npm:`` aliases) and
renders exact-version specifiers as package URLs.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple
from urllib.parse import quote

from sbomgraph.parsers.base import InvalidSpecifierError, ParsedSpecifier
from sbomgraph.parsers.npm import hosted

_IS_URL = re.compile(r"^(?:git[+:]|https?:|file:)", re.IGNORECASE)
_IS_GIT_SCP = re.compile(r"^[^@]+@[^:.]+\.[^:]+:.+$", re.IGNORECASE)
_IS_FILENAME = re.compile(r"[.](?:tgz|tar\.gz|tar)$", re.IGNORECASE)
_IS_FILESPEC = re.compile(r"^(?:[.]|~[/]|[/\\]|[a-zA-Z]:)")
_HAS_SLASHES = re.compile(r"[/\\]")
_ANY_URL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")

_SEMVER = re.compile(
    r"^[v=\s]*"
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-?(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?\s*$"
)
_XR = r"(?:0|[1-9]\d*|[xX*])"
_COMPARATOR = re.compile(
    rf"^(?:[<>]=?|=|~>?|\^)?v?{_XR}(?:\.{_XR}(?:\.{_XR})?)?"
    r"(?:-?[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

# Characters JavaScript's encodeURIComponent leaves untouched.
_URI_SAFE = "-_.!~*'()"
_BLOCKED_NAMES = {"node_modules", "favicon.ico"}

SPEC_TYPES = (
    "version",
    "range",
    "tag",
    "alias",
    "git",
    "hosted",
    "remote",
    "file",
    "directory",
)


def clean_version(spec: str) -> Optional[str]:
    """Return the canonical form of a (loosely written) semver version.

    Args:
        spec: Version string such as ``1.2.3``, ``v1.2.3`` or ``=1.2.3-beta``.

    Returns:
        Optional[str]: ``major.minor.patch[-prerelease]``, or None when
        ``spec`` is not a single version.
    """
    match = _SEMVER.match(spec)
    if not match:
        return None
    version = f"{match['major']}.{match['minor']}.{match['patch']}"
    if match["pre"]:
        version = f"{version}-{match['pre']}"
    return version


def is_range(spec: str) -> bool:
    """Check whether ``spec`` is a semver range (``^1.0.0 || 2.x``, ``*``...)."""
    for alternative in spec.split("||"):
        alternative = alternative.strip()
        if not alternative:
            continue
        alternative = re.sub(r"\s+-\s+", " ", alternative)
        alternative = re.sub(r"([<>=~^]+)\s+", r"\1", alternative)
        for comparator in alternative.split():
            if not _COMPARATOR.match(comparator):
                return False
    return True


def _uri_safe(value: str) -> bool:
    return quote(value, safe=_URI_SAFE) == value


def validate_name(name: str) -> Tuple[Optional[str], str]:
    """Validate a package name.

    Names accepted by the registry at any point in time are accepted here,
    including legacy upper-case names.

    Args:
        name: Package name, optionally scoped (``@scope/pkg``).

    Returns:
        Tuple[Optional[str], str]: Scope (with ``@``) and URL-escaped name.

    Raises:
        InvalidSpecifierError: If the name is not a valid package name.
    """
    if not name:
        raise InvalidSpecifierError("Invalid package name '': name length must be greater than zero")
    if name.startswith((".", "_")):
        raise InvalidSpecifierError(f"Invalid package name '{name}': cannot start with a period or underscore")
    if name.strip() != name:
        raise InvalidSpecifierError(f"Invalid package name '{name}': leading or trailing spaces")
    if name.lower() in _BLOCKED_NAMES:
        raise InvalidSpecifierError(f"Invalid package name '{name}': blocked name")

    if name.startswith("@"):
        scope, sep, bare = name[1:].partition("/")
        if not sep or not scope or not bare or not _uri_safe(scope) or not _uri_safe(bare):
            raise InvalidSpecifierError(f"Invalid package name '{name}': malformed scoped name")
        return f"@{scope}", name.replace("/", "%2f")

    if not _uri_safe(name):
        raise InvalidSpecifierError(f"Invalid package name '{name}': name can only contain URL-friendly characters")
    return None, name


class NpmSpecifierParser:
    """Parser for npm package specifiers."""

    def parse(self, spec: str) -> ParsedSpecifier:
        """Parse a specifier with an optional leading package name.

        Args:
            spec: e.g. ``left-pad@1.3.0``, ``@types/node@^20``, ``user/repo``.

        Returns:
            ParsedSpecifier: Classified specifier.

        Raises:
            InvalidSpecifierError: If the name or the spec part is invalid.
        """
        if not isinstance(spec, str):
            raise InvalidSpecifierError(f"Specifier must be a string, got {type(spec).__name__}")

        name_ends_at = spec.find("@", 1)
        name_part = spec[:name_ends_at] if name_ends_at > 0 else spec
        name: Optional[str] = None

        if _IS_URL.match(spec):
            raw_spec = spec
        elif _IS_GIT_SCP.match(spec):
            raw_spec = f"git+ssh://{spec}"
        elif not name_part.startswith("@") and (
            _HAS_SLASHES.search(name_part) or _IS_FILENAME.search(name_part)
        ):
            raw_spec = spec
        elif name_ends_at > 0:
            name = name_part
            raw_spec = spec[name_ends_at + 1:] or "*"
        else:
            try:
                validate_name(spec)
            except InvalidSpecifierError:
                raw_spec = spec
            else:
                name = spec
                raw_spec = "*"

        return self._resolve(spec, name, raw_spec)

    def _resolve(self, raw: str, name: Optional[str], spec: str) -> ParsedSpecifier:
        scope = escaped = None
        if name is not None:
            scope, escaped = validate_name(name)

        def result(spec_type: str, fetch_spec: Optional[str]) -> ParsedSpecifier:
            return ParsedSpecifier(
                raw=raw,
                type=spec_type,
                name=name,
                scope=scope,
                escaped_name=escaped,
                raw_spec=spec,
                fetch_spec=fetch_spec,
            )

        if _IS_FILESPEC.match(spec) or spec.lower().startswith("file:"):
            return result(*self._from_file(spec))

        if spec.lower().startswith("npm:"):
            target = self.parse(spec[4:])
            if target.name is None or target.type not in ("version", "range", "tag"):
                raise InvalidSpecifierError(f"Aliases only work for registry dependencies: '{raw}'")
            return result("alias", target.raw)

        repo = hosted.from_url(spec)
        if repo is not None:
            return result("hosted", repo.https_url())

        if _IS_URL.match(spec) or _ANY_URL.match(spec):
            lowered = spec.lower()
            if lowered.startswith(("git+", "git:")):
                return result("git", spec)
            if lowered.startswith(("http:", "https:")):
                return result("remote", spec)
            raise InvalidSpecifierError(f"Unsupported URL type in '{raw}'")

        if _HAS_SLASHES.search(spec) or _IS_FILENAME.search(spec):
            return result(*self._from_file(spec))

        version = clean_version(spec)
        if version is not None:
            return result("version", version)
        if is_range(spec):
            return result("range", spec.strip() or "*")
        if spec and _uri_safe(spec):
            return result("tag", spec)
        raise InvalidSpecifierError(f"Invalid tag name '{spec}' in '{raw}'")

    @staticmethod
    def _from_file(spec: str) -> Tuple[str, str]:
        path = spec[5:] if spec.lower().startswith("file:") else spec
        spec_type = "file" if _IS_FILENAME.search(path) else "directory"
        return spec_type, path

    def to_purl(self, spec: str) -> str:
        """Render an exact-version specifier as a package URL.

        Args:
            spec: Specifier such as ``@scope/pkg@1.0.0``.

        Returns:
            str: ``pkg:npm/%40scope/pkg@1.0.0`` style purl.

        Raises:
            InvalidSpecifierError: If ``spec`` is not a named exact version.
        """
        parsed = self.parse(spec)
        if parsed.type != "version" or parsed.name is None:
            raise InvalidSpecifierError(
                f"Package URLs require a named exact version, got {parsed.type} spec '{spec}'"
            )
        name = "%40" + parsed.name[1:] if parsed.name.startswith("@") else parsed.name
        return f"pkg:npm/{name}@{parsed.raw_spec}"
