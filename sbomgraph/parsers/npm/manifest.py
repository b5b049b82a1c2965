"""Normalization of package.json manifests.

Applies the subset of npm's conventional manifest fixes that matter for
an SBOM: name, version, description, license, repository and homepage.
Normalization happens in place on the given mapping.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict

from sbomgraph.parsers.npm import hosted
from sbomgraph.parsers.npm.specifier import clean_version

logger = logging.getLogger("sbomgraph.parsers.npm.manifest")

_HAS_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class NpmManifestNormalizer:
    """In-place package.json normalizer."""

    def normalize(self, manifest: Dict[str, Any]) -> Dict[str, Any]:
        """Fill conventional defaults on ``manifest``.

        Args:
            manifest: package.json mapping, mutated in place.

        Returns:
            Dict[str, Any]: The same mapping.
        """
        self._fix_name(manifest)
        self._fix_version(manifest)
        self._fix_description(manifest)
        self._fix_license(manifest)
        self._fix_repository(manifest)
        self._fix_homepage(manifest)
        return manifest

    @staticmethod
    def _fix_name(manifest: Dict[str, Any]) -> None:
        name = manifest.get("name")
        manifest["name"] = name.strip() if isinstance(name, str) else ""

    @staticmethod
    def _fix_version(manifest: Dict[str, Any]) -> None:
        version = manifest.get("version")
        if not version or not isinstance(version, str):
            manifest["version"] = ""
            return
        cleaned = clean_version(version)
        if cleaned is None:
            logger.warning(
                "Keeping invalid version %r of %s", version, manifest.get("name") or "<unnamed>"
            )
            return
        manifest["version"] = cleaned

    @staticmethod
    def _fix_description(manifest: Dict[str, Any]) -> None:
        if "description" in manifest and not isinstance(manifest["description"], str):
            del manifest["description"]

    @staticmethod
    def _fix_license(manifest: Dict[str, Any]) -> None:
        license_value = manifest.get("license")
        if license_value is None and "licence" in manifest:
            license_value = manifest.pop("licence")
        if isinstance(license_value, dict):
            license_value = license_value.get("type")
        if isinstance(license_value, str) and license_value.strip():
            manifest["license"] = license_value.strip()
        elif "license" in manifest:
            del manifest["license"]

    @staticmethod
    def _fix_repository(manifest: Dict[str, Any]) -> None:
        repository = manifest.get("repository")
        if isinstance(repository, str):
            repository = {"type": "git", "url": repository}
        if not isinstance(repository, dict) or not isinstance(repository.get("url"), str):
            return
        url = repository["url"]
        repo = hosted.from_url(url)
        if repo is not None and "://" not in url and "@" not in url:
            # Shorthands such as "user/repo" or "github:user/repo" become clone URLs.
            repository["url"] = repo.https_url()
        manifest["repository"] = repository

    @staticmethod
    def _fix_homepage(manifest: Dict[str, Any]) -> None:
        homepage = manifest.get("homepage")
        if homepage is None or homepage == "":
            repository = manifest.get("repository")
            url = repository.get("url") if isinstance(repository, dict) else None
            repo = hosted.from_url(url) if isinstance(url, str) else None
            if repo is not None:
                manifest["homepage"] = repo.docs_url()
            return
        if not isinstance(homepage, str):
            del manifest["homepage"]
            return
        if not _HAS_SCHEME.match(homepage):
            manifest["homepage"] = f"http://{homepage}"
