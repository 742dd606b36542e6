"""
cxgraph.commands.edge_cmd - Show one edge with its evidence.
"""

import argparse
import json
import sys

from cxgraph.commands import load_graph
from cxgraph.graph.serialize import serialize_citation, serialize_edge, serialize_support


def run(args: argparse.Namespace) -> int:
    """Run the edge command."""
    graph = load_graph(args)
    edge = graph.find_edge(args.edge_id)
    if edge is None:
        print(f"Edge {args.edge_id} not found", file=sys.stderr)
        return 1

    if args.json:
        data = serialize_edge(edge)
        data["citations"] = [serialize_citation(c) for c in edge.citations]
        data["supports"] = [serialize_support(s) for s in edge.supports]
        print(json.dumps(data, indent=2))
        return 0

    subject = edge.subject
    object_ = edge.object
    print(f"Edge {edge.id}: {subject.label} --[{edge.interaction or '?'}]--> {object_.label}")

    for attribute in edge.attributes:
        print(f"  {attribute.name} = {attribute.value}")

    print(f"Citations ({edge.citation_count()}):")
    for citation in edge.citations:
        print(f"  [{citation.id}] {citation.external_id or ''}")
        text = citation.full_text()
        if text:
            print(f"      {text}")

    print(f"Supports ({edge.support_count()}):")
    for support in edge.supports:
        citation = support.citation
        if citation is None:
            cited = "uncited"
        elif support.citation_inferred:
            cited = f"citation {citation.id}, inferred"
        else:
            cited = f"citation {citation.id}"
        print(f"  [{support.id}] ({cited}) {support.text}")
    return 0
