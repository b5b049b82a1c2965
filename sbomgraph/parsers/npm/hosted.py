"""Detection of repositories on well-known git hosts.

Recognizes GitHub, GitLab, Bitbucket and Gist references in all the
forms npm accepts: ``github:user/repo`` shortcuts, bare ``user/repo``
GitHub shorthands, scp-like ``git@host:user/repo.git`` strings and
``git+ssh``/``git+https``/``https``/``git`` URLs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import unquote, urlsplit

HOST_DOMAINS = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
    "gist": "gist.github.com",
}
_DOMAIN_HOSTS = {domain: host for host, domain in HOST_DOMAINS.items()}

_GIT_PROTOCOLS = {"git", "git+ssh", "git+https", "git+http", "ssh", "https", "http"}
_SCP_LIKE = re.compile(r"^(?:[^@/:\s]+@)?(?P<host>[^@/:\s]+):(?P<path>(?!\d+/)[^\s]+)$")
_SSH_SCP_URL = re.compile(
    r"^(?:git\+)?ssh://(?:[^@/:\s]+@)?(?P<host>[^@/:\s]+):(?P<path>(?!\d+/)[^\s]+)$"
)
_SHORTHAND = re.compile(r"^(?![.\-])[A-Za-z0-9_.\-]+/(?![.\-])[A-Za-z0-9_.\-]+$")


@dataclass(frozen=True)
class HostedRepo:
    """A repository on a known git host.

    Attributes:
        host: Host key (``github``, ``gitlab``, ``bitbucket``, ``gist``).
        user: Owner or group path; optional for gists.
        project: Repository (or gist id) without a ``.git`` suffix.
        committish: Branch, tag or commit after ``#``, if any.
    """

    host: str
    user: Optional[str]
    project: str
    committish: Optional[str] = None

    @property
    def domain(self) -> str:
        return HOST_DOMAINS[self.host]

    def browse_url(self) -> str:
        """Web page of the repository."""
        if self.host == "gist":
            return f"https://{self.domain}/{self.project}"
        return f"https://{self.domain}/{self.user}/{self.project}"

    def docs_url(self) -> str:
        """Readme anchor of the repository page, used as a homepage."""
        return f"{self.browse_url()}#readme"

    def https_url(self) -> str:
        """Clone URL in ``git+https`` form."""
        return f"git+{self.browse_url()}.git"


def _strip_git_suffix(name: str) -> str:
    return name[:-4] if name.endswith(".git") else name


def _from_segments(host: str, segments: List[str], committish: Optional[str]) -> Optional[HostedRepo]:
    if host == "gist":
        if not segments:
            return None
        user = segments[0] if len(segments) > 1 else None
        return HostedRepo("gist", user, _strip_git_suffix(segments[-1]), committish)

    if host == "gitlab":
        if "-" in segments:
            cut = segments.index("-")
            if segments[cut + 1:cut + 2] == ["archive"]:
                return None
            segments = segments[:cut]
        if len(segments) < 2:
            return None
        return HostedRepo(
            "gitlab", "/".join(segments[:-1]), _strip_git_suffix(segments[-1]), committish
        )

    if len(segments) < 2:
        return None
    user, project = segments[0], _strip_git_suffix(segments[1])
    extra = segments[2:]
    if extra:
        # Only tree views are repositories; archives and raw files are not.
        if host != "github" or extra[0] != "tree":
            return None
        committish = committish or "/".join(extra[1:]) or None
    if not user or not project:
        return None
    return HostedRepo(host, user, project, committish)


def from_url(spec: Optional[str]) -> Optional[HostedRepo]:
    """Return the hosted repository ``spec`` refers to, if any.

    Args:
        spec: Shortcut, shorthand or URL.

    Returns:
        Optional[HostedRepo]: Repository info, or None for anything that is
        not a repository on a known host.
    """
    if not spec:
        return None
    spec = spec.strip()
    body, _, fragment = spec.partition("#")
    committish = unquote(fragment) if fragment else None

    prefix, sep, rest = body.partition(":")
    if sep and prefix in HOST_DOMAINS and not rest.startswith("//"):
        segments = [s for s in rest.split("/") if s]
        return _from_segments(prefix, segments, committish)

    if _SHORTHAND.match(body):
        user, project = body.split("/")
        return HostedRepo("github", user, _strip_git_suffix(project), committish)

    scp = _SSH_SCP_URL.match(body) if "://" in body else _SCP_LIKE.match(body)
    if scp:
        host_name, path = scp.group("host"), scp.group("path")
    else:
        parts = urlsplit(body)
        if parts.scheme not in _GIT_PROTOCOLS or not parts.hostname:
            return None
        host_name, path = parts.hostname, parts.path

    host_name = host_name.lower()
    if host_name.startswith("www."):
        host_name = host_name[4:]
    host = _DOMAIN_HOSTS.get(host_name)
    if host is None:
        return None
    segments = [unquote(s) for s in path.split("/") if s]
    return _from_segments(host, segments, committish)
