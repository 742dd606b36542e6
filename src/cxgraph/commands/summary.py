"""
cxgraph.commands.summary - Count the entities of a CX document.
"""

import argparse
import json

from cxgraph.commands import load_graph


def run(args: argparse.Namespace) -> int:
    """Run the summary command."""
    graph = load_graph(args)

    counts = {
        "nodes": graph.node_count(),
        "edges": graph.edge_count(),
        "citations": graph.citation_count(),
        "supports": graph.support_count(),
        "inferred_citations": sum(1 for _ in graph.inferred_supports()),
    }

    if args.json:
        print(json.dumps(counts, indent=2))
        return 0

    print(f"Network: {graph.source_id or '<unknown>'}")
    network_ids = {n.network_id for n in graph.all_nodes() if n.network_id}
    if network_ids:
        print(f"Network id: {', '.join(sorted(network_ids))}")
    print(f"  Nodes:      {counts['nodes']}")
    print(f"  Edges:      {counts['edges']}")
    print(f"  Citations:  {counts['citations']}")
    print(f"  Supports:   {counts['supports']}")
    print(f"    with inferred citation: {counts['inferred_citations']}")
    return 0
