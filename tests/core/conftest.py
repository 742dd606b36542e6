"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def builder():
    """Fresh GraphBuilder instance."""
    from cxgraph.graph.builder import GraphBuilder

    return GraphBuilder()


@pytest.fixture
def evidence_graph():
    """Graph with edge 10 (1 -> 2), citation 100 and support 1000 "X"."""
    from tests.core.graph_test_helpers import build_graph, evidence_network

    return build_graph(*evidence_network())


@pytest.fixture
def cx_document():
    """A small CX document as parsed JSON."""
    return [
        {"numberVerification": [{"longNumber": 281474976710655}]},
        {"nodes": [
            {"@id": 1, "n": "TP53", "r": "HGNC:11998"},
            {"@id": 2, "n": "MDM2", "r": "HGNC:6973"},
            {"@id": 3, "n": "apoptosis"},
        ]},
        {"ndexStatus": [{"externalId": "net-uuid-1", "nodeCount": 3}]},
        {"edges": [
            {"@id": 10, "s": 2, "t": 1, "i": "decreases"},
            {"@id": 11, "s": 1, "t": 3, "i": "increases"},
        ]},
        {"nodeAttributes": [{"po": 1, "n": "type", "v": "protein"}]},
        {"edgeAttributes": [{"po": [10, 11], "n": "evidence", "v": "curated", "d": "string"}]},
        {"citations": [
            {"@id": 100, "dc:identifier": "pmid:8875929", "dc:title": "MDM2 and p53"},
            {"@id": 101, "dc:identifier": "pmid:10065151"},
        ]},
        {"edgeCitations": [{"po": [10], "citations": [100]}]},
        {"supports": [
            {"@id": 1000, "text": "MDM2 binds p53."},
            {"@id": 1001, "text": "p53 induces apoptosis.", "citation": 101},
            {"@id": 1002, "text": "Orphan text.", "citation": 999},
        ]},
        {"edgeSupports": [
            {"po": [10], "supports": [1000]},
            {"po": [11], "supports": [1001, 1002]},
        ]},
        {"status": [{"error": "", "success": True}]},
    ]
