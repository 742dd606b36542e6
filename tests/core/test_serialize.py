"""Tests for Graph Serialization module."""

import csv
import io
import json

import pytest

from cxgraph.graph.factory import build_graph
from cxgraph.graph.serialize import (
    serialize_citation,
    serialize_edge,
    serialize_graph,
    serialize_node,
    serialize_support,
    to_csv,
)


@pytest.fixture
def sample_graph(cx_document):
    return build_graph(cx_document, config={"graph": {"on_duplicate": "overwrite"}})


class TestSerializeEntities:
    def test_serialize_node(self, sample_graph):
        data = serialize_node(sample_graph.find_node(1))
        assert data["id"] == 1
        assert data["label"] == "TP53"
        assert data["represents"] == "HGNC:11998"
        assert data["network_id"] == "net-uuid-1"
        assert data["attributes"] == [{"name": "type", "value": "protein"}]
        assert data["edges"] == [10, 11]

    def test_serialize_edge(self, sample_graph):
        data = serialize_edge(sample_graph.find_edge(10))
        assert data["subject"] == 2
        assert data["object"] == 1
        assert data["interaction"] == "decreases"
        assert data["citations"] == [100]
        assert data["supports"] == [1000]
        assert data["attributes"][0]["data_type"] == "string"

    def test_serialize_citation_includes_full_text(self, sample_graph):
        data = serialize_citation(sample_graph.find_citation(100))
        assert data["external_id"] == "pmid:8875929"
        assert data["title"] == "MDM2 and p53"
        assert data["supports"] == [1000]
        assert data["full_text"] == "MDM2 binds p53."

    def test_serialize_support(self, sample_graph):
        assert serialize_support(sample_graph.find_support(1000)) == {
            "id": 1000,
            "text": "MDM2 binds p53.",
            "citation": 100,
            "citation_inferred": True,
        }
        assert serialize_support(sample_graph.find_support(1002))["citation"] is None


class TestSerializeGraph:
    def test_graph_is_json_serializable(self, sample_graph):
        data = serialize_graph(sample_graph)
        assert json.loads(json.dumps(data)) == data

    def test_metadata_counts(self, sample_graph):
        meta = serialize_graph(sample_graph)["metadata"]
        assert meta["node_count"] == 3
        assert meta["edge_count"] == 2
        assert meta["citation_count"] == 2
        assert meta["support_count"] == 3
        assert meta["inferred_support_count"] == 1

    def test_entities_keyed_by_id(self, sample_graph):
        data = serialize_graph(sample_graph)
        assert list(data["nodes"]) == ["1", "2", "3"]
        assert list(data["edges"]) == ["10", "11"]


class TestToCsv:
    def test_one_row_per_edge(self, sample_graph):
        rows = list(csv.reader(io.StringIO(to_csv(sample_graph))))
        assert rows[0][0] == "edge_id"
        assert [row[0] for row in rows[1:]] == ["10", "11"]

    def test_row_content(self, sample_graph):
        rows = list(csv.DictReader(io.StringIO(to_csv(sample_graph))))
        first = rows[0]
        assert first["subject_label"] == "MDM2"
        assert first["object_label"] == "TP53"
        assert first["citations"] == "pmid:8875929"
        assert first["support_count"] == "1"
