"""Configuration schema definitions using Pydantic for validation.

Configuration errors surface as ``pydantic.ValidationError`` at
construction time rather than halfway through a projection.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OMITTABLE_KINDS = ("dev", "optional", "peer")


class ManagerInfo(BaseModel):
    """Identity of the package manager that produced the graph.

    Attributes:
        version: Manager version, embedded verbatim in the creator string.
        name: Manager name, e.g. ``npm``.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    name: str = "npm"

    @property
    def tool(self) -> str:
        """Creator entry in SPDX ``Tool:`` form."""
        return f"Tool: {self.name}/cli-{self.version}"


class SbomConfig(BaseModel):
    """Top-level configuration for SPDX projection.

    Attributes:
        ecosystem: Registry key of the specifier/integrity/manifest bundle.
        namespace_base: Base URL for generated document namespaces.
        checksum_policy: ``fail`` aborts on a malformed integrity string,
            ``omit`` drops the checksum for that package and continues.
        omit: Edge kinds whose exclusively reachable nodes are dropped
            when loading a graph.
    """

    ecosystem: str = "npm"
    namespace_base: str = "http://spdx.org/spdxdocs"
    checksum_policy: Literal["fail", "omit"] = "fail"
    omit: List[str] = Field(default_factory=list)

    @field_validator("namespace_base")
    @classmethod
    def validate_namespace_base(cls, v: str) -> str:
        """Require an http(s) base URL without trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"namespace_base must be an http(s) URL, got '{v}'")
        return v

    @field_validator("omit")
    @classmethod
    def validate_omit(cls, v: List[str]) -> List[str]:
        """Validate that omitted kinds are known edge kinds."""
        for kind in v:
            if kind not in OMITTABLE_KINDS:
                raise ValueError(
                    f"Invalid omit kind '{kind}'. Valid kinds: {OMITTABLE_KINDS}"
                )
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SbomConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            SbomConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
