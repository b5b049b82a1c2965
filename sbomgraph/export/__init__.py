"""Document writers."""

from sbomgraph.export.spdx import export_spdx

__all__ = ["export_spdx"]
