"""SPDX 2.3 document models.

Models are frozen pydantic models with snake_case fields and the SPDX
JSON camelCase names as aliases. ``SpdxDocument.to_dict`` produces the
JSON-ready mapping; optional fields left as None are omitted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SPDX_SCHEMA_VERSION = "SPDX-2.3"
SPDX_DATA_LICENSE = "CC0-1.0"
SPDX_DOCUMENT_ID = "SPDXRef-DOCUMENT"
NO_ASSERTION = "NOASSERTION"

REF_CATEGORY_PACKAGE_MANAGER = "PACKAGE-MANAGER"
REF_TYPE_PURL = "purl"


class RelationshipType(str, Enum):
    """SPDX relationship types emitted by the projector."""

    DESCRIBES = "DESCRIBES"
    HAS_PREREQUISITE = "HAS_PREREQUISITE"
    OPTIONAL_DEPENDENCY_OF = "OPTIONAL_DEPENDENCY_OF"
    DEV_DEPENDENCY_OF = "DEV_DEPENDENCY_OF"
    DEPENDS_ON = "DEPENDS_ON"


class SpdxModel(BaseModel):
    """Base for all SPDX models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )


class ExternalRef(SpdxModel):
    reference_category: str = REF_CATEGORY_PACKAGE_MANAGER
    reference_type: str = REF_TYPE_PURL
    reference_locator: str


class Checksum(SpdxModel):
    algorithm: str
    checksum_value: str


class PackageRecord(SpdxModel):
    """One ``packages`` entry."""

    name: str
    spdx_id: str = Field(alias="SPDXID")
    version_info: str
    package_file_name: str
    description: Optional[str] = None
    primary_package_purpose: Optional[str] = None
    download_location: str = NO_ASSERTION
    files_analyzed: bool = False
    homepage: str = NO_ASSERTION
    license_declared: str = NO_ASSERTION
    external_refs: Tuple[ExternalRef, ...] = ()
    checksums: Optional[Tuple[Checksum, ...]] = None


class RelationshipRecord(SpdxModel):
    """One ``relationships`` entry."""

    spdx_element_id: str
    related_spdx_element: str
    relationship_type: RelationshipType


class CreationInfo(SpdxModel):
    created: str
    creators: Tuple[str, ...]


class SpdxDocument(SpdxModel):
    """A complete SPDX 2.3 document."""

    spdx_version: str = SPDX_SCHEMA_VERSION
    data_license: str = SPDX_DATA_LICENSE
    spdx_id: str = Field(default=SPDX_DOCUMENT_ID, alias="SPDXID")
    name: str
    document_namespace: str
    creation_info: CreationInfo
    document_describes: Tuple[str, ...]
    packages: Tuple[PackageRecord, ...]
    relationships: Tuple[RelationshipRecord, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Return the SPDX JSON representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
