"""Tests for package record construction."""

import base64
import hashlib
from typing import Optional

import pytest

from sbomgraph.errors import InvalidPackageIdentifier, MalformedChecksum
from sbomgraph.graph.models import GraphNode
from sbomgraph.parsers import NPM_ECOSYSTEM
from sbomgraph.sbom.packages import build_package


def _node(identifier: str, resolved: Optional[str] = None, **kwargs) -> GraphNode:
    name, _, version = identifier.rpartition("@")
    kwargs.setdefault("location", f"node_modules/{name}")
    return GraphNode(identifier=identifier, name=name, version=version, resolved=resolved, **kwargs)


def _sri(algorithm: str, payload: bytes) -> tuple:
    digest = hashlib.new(algorithm, payload).digest()
    return f"{algorithm}-{base64.b64encode(digest).decode('ascii')}", digest.hex()


def test_build_package_full_record() -> None:
    """All manifest-derived fields are carried over."""
    integrity, hex_digest = _sri("sha512", b"left-pad")
    node = _node(
        "left-pad@1.3.0",
        "https://registry.npmjs.org/left-pad/-/left-pad-1.3.0.tgz",
        integrity=integrity,
        package={
            "name": "left-pad",
            "version": "1.3.0",
            "description": "String left pad",
            "homepage": "https://github.com/stevemao/left-pad#readme",
            "license": "WTFPL",
        },
    )

    record = build_package(node, NPM_ECOSYSTEM).model_dump(by_alias=True, exclude_none=True, mode="json")

    assert record == {
        "name": "left-pad",
        "SPDXID": "SPDXRef-Package-left-pad-1.3.0",
        "versionInfo": "1.3.0",
        "packageFileName": "node_modules/left-pad",
        "description": "String left pad",
        "downloadLocation": "https://registry.npmjs.org/left-pad/-/left-pad-1.3.0.tgz",
        "filesAnalyzed": False,
        "homepage": "https://github.com/stevemao/left-pad#readme",
        "licenseDeclared": "WTFPL",
        "externalRefs": [
            {
                "referenceCategory": "PACKAGE-MANAGER",
                "referenceType": "purl",
                "referenceLocator": "pkg:npm/left-pad@1.3.0",
            }
        ],
        "checksums": [{"algorithm": "SHA512", "checksumValue": hex_digest}],
    }


def test_build_package_defaults_missing_manifest_fields() -> None:
    """Missing license and homepage become NOASSERTION; description is absent."""
    record = build_package(_node("bare@0.0.1"), NPM_ECOSYSTEM)
    data = record.model_dump(by_alias=True, exclude_none=True)

    assert data["licenseDeclared"] == "NOASSERTION"
    assert data["homepage"] == "NOASSERTION"
    assert data["downloadLocation"] == "NOASSERTION"
    assert "description" not in data
    assert "checksums" not in data
    assert "primaryPackagePurpose" not in data


def test_build_package_treats_empty_strings_as_missing() -> None:
    """Empty manifest values are not asserted."""
    node = _node("bare@0.0.1", package={"description": "", "homepage": "", "license": ""})
    record = build_package(node, NPM_ECOSYSTEM)

    assert record.description is None
    assert record.homepage == "NOASSERTION"
    assert record.license_declared == "NOASSERTION"


def test_build_package_upper_cases_package_type() -> None:
    """The purpose hint is upper-cased."""
    record = build_package(_node("app@1.0.0"), NPM_ECOSYSTEM, package_type="application")
    assert record.primary_package_purpose == "APPLICATION"


def test_build_package_normalizes_manifest_in_place() -> None:
    """The node's manifest is enriched as a visible side effect."""
    package = {"repository": "acme/widget"}
    node = _node("widget@2.0.0", package=package)

    record = build_package(node, NPM_ECOSYSTEM)

    assert node.package is package
    assert package["name"] == ""
    assert package["version"] == ""
    assert package["repository"] == {"type": "git", "url": "git+https://github.com/acme/widget.git"}
    assert record.homepage == "https://github.com/acme/widget#readme"


def test_build_package_picks_strongest_checksum() -> None:
    """With several digests the strongest algorithm is emitted."""
    sha1, _ = _sri("sha1", b"payload")
    sha512, sha512_hex = _sri("sha512", b"payload")
    node = _node("multi@1.0.0", integrity=f"{sha1} {sha512}")

    record = build_package(node, NPM_ECOSYSTEM)

    assert len(record.checksums) == 1
    assert record.checksums[0].algorithm == "SHA512"
    assert record.checksums[0].checksum_value == sha512_hex


def test_build_package_git_source_purl() -> None:
    """Git sources add a vcs_url qualifier and keep their download location."""
    source = "git+ssh://git@github.com/acme/tool.git#0123abc"
    record = build_package(_node("tool@1.0.0", source), NPM_ECOSYSTEM)

    assert record.external_refs[0].reference_locator == f"pkg:npm/tool@1.0.0?vcs_url={source}"
    assert record.download_location == source


@pytest.mark.parametrize("integrity", ["garbage", "sha512-not*base64!"])
def test_build_package_malformed_integrity_fails(integrity: str) -> None:
    """Malformed integrity strings abort with the node identifier attached."""
    node = _node("broken@1.0.0", integrity=integrity)

    with pytest.raises(MalformedChecksum) as excinfo:
        build_package(node, NPM_ECOSYSTEM)

    assert excinfo.value.identifier == "broken@1.0.0"
    assert "broken@1.0.0" in str(excinfo.value)


def test_build_package_malformed_integrity_omitted_under_omit_policy() -> None:
    """The omit policy drops the checksum and keeps the package."""
    node = _node("broken@1.0.0", integrity="garbage")

    record = build_package(node, NPM_ECOSYSTEM, checksum_policy="omit")

    assert record.checksums is None


@pytest.mark.parametrize("identifier", ["foo@^1.0.0", "foo@latest", "app@", "foo@npm:bar@1.0.0"])
def test_build_package_rejects_non_version_identifiers(identifier: str) -> None:
    """Identifiers without an exact version cannot be turned into purls."""
    node = _node(identifier)

    with pytest.raises(InvalidPackageIdentifier) as excinfo:
        build_package(node, NPM_ECOSYSTEM)

    assert excinfo.value.identifier == identifier
