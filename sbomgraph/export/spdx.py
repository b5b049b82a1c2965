"""JSON export for SPDX documents."""

import json
import logging
from pathlib import Path

from sbomgraph.sbom.models import SpdxDocument

logger = logging.getLogger("sbomgraph.export.spdx")


def export_spdx(document: SpdxDocument, output_path: Path) -> None:
    """Write an SPDX document as JSON.

    Args:
        document: Projected document.
        output_path: Output file path.
    """
    logger.info("Exporting SPDX document to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(document.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info(
        "SPDX export completed: %d packages, %d relationships",
        len(document.packages),
        len(document.relationships),
    )
