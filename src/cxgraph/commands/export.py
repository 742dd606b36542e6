"""
cxgraph.commands.export - Write a built graph as JSON or CSV.
"""

import argparse
import json
import sys
from pathlib import Path

from cxgraph.commands import load_graph
from cxgraph.graph.serialize import serialize_graph, to_csv


def run(args: argparse.Namespace) -> int:
    """Run the export command."""
    graph = load_graph(args)

    if args.format == "csv":
        output = to_csv(graph)
    else:
        output = json.dumps(serialize_graph(graph), indent=2) + "\n"

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0
