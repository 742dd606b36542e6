"""
cxgraph.cli - Command-line interface.

Main entry point for the cxgraph CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cxgraph import __version__
from cxgraph.commands import edge_cmd, export, summary
from cxgraph.config import get_config
from cxgraph.graph.references import GraphBuildError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cxgraph",
        description="Link NDEx CX network documents into a traversable graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cxgraph summary network.cx              # Count nodes, edges, evidence
  cxgraph edge network.cx 10              # Show edge 10 with citations
  cxgraph export network.cx -o graph.json # Linked graph as JSON
  cat network.cx | cxgraph summary -      # Read from stdin

Configuration (.cxgraph.toml):
  [graph]
  on_duplicate = "overwrite"   # or "error"

  [logging]
  level = "WARNING"
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cxgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Count the entities of a CX document",
    )
    summary_parser.add_argument("file", help="CX file, or - for stdin")
    summary_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # edge command
    edge_parser = subparsers.add_parser(
        "edge",
        help="Show an edge with its citations and supports",
    )
    edge_parser.add_argument("file", help="CX file, or - for stdin")
    edge_parser.add_argument("edge_id", type=int, help="Edge id")
    edge_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export the linked graph",
    )
    export_parser.add_argument("file", help="CX file, or - for stdin")
    export_parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format (default: json)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to PATH instead of stdout",
        metavar="PATH",
    )

    return parser


def configure_logging(args: argparse.Namespace, config: dict) -> None:
    """Set the root log level from flags, falling back to config."""
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, str(config["logging"]["level"]).upper())
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.config_data = get_config(args.config)
        configure_logging(args, args.config_data)

        if args.command == "summary":
            return summary.run(args)
        elif args.command == "edge":
            return edge_cmd.run(args)
        elif args.command == "export":
            return export.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except (GraphBuildError, OSError, ValueError) as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
