"""Main CLI entry point for sbomgraph.

Provides commands: spdx
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from sbomgraph import __version__
from sbomgraph.cli.spdx import spdx_command
from sbomgraph.config.schema import OMITTABLE_KINDS
from sbomgraph.parsers import EcosystemRegistry

logger = logging.getLogger("sbomgraph.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Sbomgraph - SPDX SBOM generation from dependency graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    spdx_parser = subparsers.add_parser(
        "spdx",
        help="Generate an SPDX 2.3 document from a dependency graph",
    )
    spdx_parser.add_argument(
        "graph",
        help="Dependency graph file (networkx node-link JSON)",
    )
    spdx_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output SPDX JSON file",
    )
    spdx_parser.add_argument(
        "--package-type",
        help="Purpose of the root package, e.g. library, application, framework",
    )
    spdx_parser.add_argument(
        "--omit",
        action="append",
        choices=OMITTABLE_KINDS,
        help="Dependency kind to leave out (repeatable)",
    )
    spdx_parser.add_argument(
        "--ecosystem",
        default="npm",
        help="Ecosystem whose specifier rules apply (default: npm)",
    )
    spdx_parser.add_argument(
        "--manager-name",
        default="npm",
        help="Package manager name recorded as document creator (default: npm)",
    )
    spdx_parser.add_argument(
        "--manager-version",
        required=True,
        help="Package manager version recorded as document creator",
    )
    spdx_parser.add_argument(
        "--namespace-base",
        help="Base URL of the document namespace (default: http://spdx.org/spdxdocs)",
    )
    spdx_parser.add_argument(
        "--checksum-policy",
        choices=("fail", "omit"),
        default="fail",
        help="What to do with malformed integrity strings (default: fail)",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger.debug(
        "Registered ecosystems: %s",
        ", ".join(EcosystemRegistry.get_instance().list_ecosystems()),
    )

    if args.command == "spdx":
        return spdx_command(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
