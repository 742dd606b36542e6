"""Graph Serialization - Export NetworkGraph to JSON-compatible dicts and CSV.

Relationships are written as ids, so the output contains no cycles.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cxgraph.graph.builder import NetworkGraph
    from cxgraph.graph.entities import Attribute, Citation, Node, Support
    from cxgraph.graph.relations import Edge


def _serialize_attributes(attributes: tuple[Attribute, ...]) -> list[dict[str, Any]]:
    result = []
    for attribute in attributes:
        item: dict[str, Any] = {"name": attribute.name, "value": attribute.value}
        if attribute.data_type:
            item["data_type"] = attribute.data_type
        result.append(item)
    return result


def serialize_node(node: Node) -> dict[str, Any]:
    """Serialize a Node to a JSON-compatible dict.

    Args:
        node: The node to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {"id": node.id, "label": node.label}
    if node.represents is not None:
        result["represents"] = node.represents
    if node.network_id is not None:
        result["network_id"] = node.network_id
    if node.attributes:
        result["attributes"] = _serialize_attributes(node.attributes)

    edges = node.edges
    if edges:
        result["edges"] = [edge.id for edge in edges]
    return result


def serialize_edge(edge: Edge) -> dict[str, Any]:
    """Serialize an Edge with its endpoint and evidence ids."""
    subject = edge.subject
    object_ = edge.object
    result: dict[str, Any] = {
        "id": edge.id,
        "subject": subject.id if subject else None,
        "object": object_.id if object_ else None,
    }
    if edge.interaction is not None:
        result["interaction"] = edge.interaction
    if edge.attributes:
        result["attributes"] = _serialize_attributes(edge.attributes)
    if edge.citation_count():
        result["citations"] = [citation.id for citation in edge.citations]
    if edge.support_count():
        result["supports"] = [support.id for support in edge.supports]
    return result


def serialize_citation(citation: Citation) -> dict[str, Any]:
    """Serialize a Citation, including its aggregated text."""
    result: dict[str, Any] = {
        "id": citation.id,
        "external_id": citation.external_id,
        "supports": [support.id for support in citation.supports],
        "full_text": citation.full_text(),
    }
    if citation.title is not None:
        result["title"] = citation.title
    if citation.citation_type is not None:
        result["type"] = citation.citation_type
    return result


def serialize_support(support: Support) -> dict[str, Any]:
    citation = support.citation
    return {
        "id": support.id,
        "text": support.text,
        "citation": citation.id if citation else None,
        "citation_inferred": support.citation_inferred,
    }


def serialize_graph(graph: NetworkGraph) -> dict[str, Any]:
    """Serialize a NetworkGraph to a JSON-compatible dict.

    Args:
        graph: The graph to serialize.

    Returns:
        Dict with entity maps (keyed by id string) and metadata.
    """
    nodes = {str(n.id): serialize_node(n) for n in sorted(graph.all_nodes(), key=_by_id)}
    edges = {str(e.id): serialize_edge(e) for e in sorted(graph.all_edges(), key=_by_id)}
    citations = {
        str(c.id): serialize_citation(c) for c in sorted(graph.all_citations(), key=_by_id)
    }
    supports = {
        str(s.id): serialize_support(s) for s in sorted(graph.all_supports(), key=_by_id)
    }
    return {
        "nodes": nodes,
        "edges": edges,
        "citations": citations,
        "supports": supports,
        "metadata": {
            "source": graph.source_id,
            "node_count": len(nodes),
            "edge_count": len(edges),
            "citation_count": len(citations),
            "support_count": len(supports),
            "inferred_support_count": sum(1 for _ in graph.inferred_supports()),
        },
    }


def to_csv(graph: NetworkGraph) -> str:
    """Generate a CSV export with one row per edge.

    Args:
        graph: The NetworkGraph to export.

    Returns:
        CSV string, rows sorted by edge id.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)

    writer.writerow(
        [
            "edge_id",
            "subject_id",
            "subject_label",
            "interaction",
            "object_id",
            "object_label",
            "citations",
            "support_count",
        ]
    )

    for edge in sorted(graph.all_edges(), key=_by_id):
        subject = edge.subject
        object_ = edge.object
        citations = [c.external_id or str(c.id) for c in edge.citations]
        writer.writerow(
            [
                edge.id,
                subject.id if subject else "",
                subject.label if subject else "",
                edge.interaction or "",
                object_.id if object_ else "",
                object_.label if object_ else "",
                "; ".join(citations),
                edge.support_count(),
            ]
        )

    return output.getvalue()


def _by_id(entity: Any) -> int:
    return entity.id


__all__ = [
    "serialize_node",
    "serialize_edge",
    "serialize_citation",
    "serialize_support",
    "serialize_graph",
    "to_csv",
]
