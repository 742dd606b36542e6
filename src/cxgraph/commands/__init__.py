"""
cxgraph.commands - CLI command implementations
"""

from __future__ import annotations

import argparse
import sys

from cxgraph.graph.builder import NetworkGraph
from cxgraph.graph.deserializer import NetworkFile, NetworkStdio
from cxgraph.graph.factory import build_graph
from cxgraph.graph.references import NetworkDecodeError

__all__ = [
    "edge_cmd",
    "export",
    "summary",
    "load_graph",
]


def load_graph(args: argparse.Namespace) -> NetworkGraph:
    """Build the graph for the FILE argument ("-" reads stdin)."""
    if args.file == "-":
        source = NetworkStdio(sys.stdin.read())
    else:
        source = NetworkFile(args.file)
    networks = list(source.deserialize())
    if len(networks) != 1:
        raise NetworkDecodeError(f"Expected one CX document in {args.file}, found {len(networks)}")
    return build_graph(networks[0], config=args.config_data)
