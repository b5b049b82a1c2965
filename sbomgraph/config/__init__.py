"""Configuration schema and validation for sbomgraph."""

from .schema import ManagerInfo, SbomConfig

__all__ = [
    "ManagerInfo",
    "SbomConfig",
]
