"""Tests for hosted git repository detection."""

import pytest

from sbomgraph.parsers.npm.hosted import from_url


@pytest.mark.parametrize(
    ("spec", "host", "user", "project", "committish"),
    [
        ("github:npm/cli", "github", "npm", "cli", None),
        ("npm/cli#v10.0.0", "github", "npm", "cli", "v10.0.0"),
        ("git+ssh://git@github.com/npm/cli.git#abc123", "github", "npm", "cli", "abc123"),
        ("https://github.com/npm/cli", "github", "npm", "cli", None),
        ("https://www.github.com/npm/cli/tree/main", "github", "npm", "cli", "main"),
        ("git@gitlab.com:group/sub/repo.git", "gitlab", "group/sub", "repo", None),
        ("gitlab:group/repo", "gitlab", "group", "repo", None),
        ("https://bitbucket.org/team/repo.git", "bitbucket", "team", "repo", None),
        ("gist:11081aaa281", "gist", None, "11081aaa281", None),
    ],
)
def test_from_url_recognizes_hosted_repositories(spec, host, user, project, committish) -> None:
    """Shortcuts, shorthands, scp-like strings and URLs are recognized."""
    repo = from_url(spec)

    assert repo is not None
    assert (repo.host, repo.user, repo.project, repo.committish) == (
        host,
        user,
        project,
        committish,
    )


@pytest.mark.parametrize(
    "spec",
    [
        None,
        "",
        "https://registry.npmjs.org/foo/-/foo-1.0.0.tgz",
        "https://github.com/npm/cli/archive/v1.0.0.tar.gz",
        "https://gitlab.com/group/repo/-/archive/main/repo-main.tar.gz",
        "git+https://git.example.com/repo.git",
        "file:../local",
        "foo@1.0.0",
    ],
)
def test_from_url_ignores_other_sources(spec) -> None:
    """Registry tarballs, archives and unknown hosts are not hosted repos."""
    assert from_url(spec) is None


def test_hosted_repo_urls() -> None:
    """Derived URLs follow the host conventions."""
    repo = from_url("github:npm/cli")

    assert repo.browse_url() == "https://github.com/npm/cli"
    assert repo.docs_url() == "https://github.com/npm/cli#readme"
    assert repo.https_url() == "git+https://github.com/npm/cli.git"
