"""SPDX command implementation."""

import logging
from pathlib import Path

from pydantic import ValidationError

from sbomgraph.config import ManagerInfo, SbomConfig
from sbomgraph.errors import SbomError
from sbomgraph.export import export_spdx
from sbomgraph.graph import load_graph
from sbomgraph.sbom import GraphProjector

logger = logging.getLogger("sbomgraph.cli.spdx")


def spdx_command(args) -> int:
    """Execute spdx command.

    Args:
        args: Parsed command-line arguments containing:
            - graph: Node-link JSON graph file
            - output: Output file path
            - package_type: Purpose of the root package (optional)
            - omit: Edge kinds to omit (optional)
            - manager_name / manager_version: Creator tool identity
            - namespace_base: Document namespace base URL (optional)
            - checksum_policy: fail or omit (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    graph_path = Path(args.graph)
    output_path = Path(args.output)

    try:
        config_data = {
            "omit": list(getattr(args, "omit", None) or []),
            "checksum_policy": getattr(args, "checksum_policy", None) or "fail",
            "ecosystem": getattr(args, "ecosystem", None) or "npm",
        }
        namespace_base = getattr(args, "namespace_base", None)
        if namespace_base:
            config_data["namespace_base"] = namespace_base
        config = SbomConfig.from_dict(config_data)
        manager = ManagerInfo(
            name=getattr(args, "manager_name", None) or "npm",
            version=args.manager_version,
        )
        projector = GraphProjector(config)
    except (ValidationError, KeyError) as err:
        logger.error("Invalid configuration: %s", err)
        return 2

    logger.info("Graph: %s", graph_path)
    logger.info("Output path: %s", output_path)

    try:
        nodes = load_graph(graph_path, omit=config.omit)
        document = projector.project(nodes, manager, getattr(args, "package_type", None))
        export_spdx(document, output_path)
    except SbomError as err:
        logger.error("SPDX generation failed: %s", err)
        return 1
    except OSError as err:
        logger.error("Cannot write %s: %s", output_path, err)
        return 1

    logger.info("Export successful: %s", output_path)
    return 0
