"""Tests for CX deserialization."""

import json

import pytest

from cxgraph.graph.aspects import (
    AttributeRecord,
    EdgeCitationLink,
    EdgeRecord,
    NetworkIdRecord,
    NodeRecord,
    SupportRecord,
)
from cxgraph.graph.deserializer import (
    NetworkFile,
    NetworkSource,
    NetworkStdio,
    decode_aspect,
    decode_network,
    loads_network,
)
from cxgraph.graph.references import NetworkDecodeError


class TestDecodeAspect:
    """Tests for single aspect objects."""

    def test_nodes(self):
        aspect = decode_aspect({"nodes": [{"@id": 1, "n": "TP53", "r": "HGNC:11998"}]})
        assert aspect.nodes == (NodeRecord(id=1, label="TP53", represents="HGNC:11998"),)

    def test_edges(self):
        aspect = decode_aspect({"edges": [{"@id": 10, "s": 1, "t": 2, "i": "binds"}]})
        assert aspect.edges == (EdgeRecord(id=10, source_id=1, target_id=2, interaction="binds"),)

    def test_citation_fields(self):
        aspect = decode_aspect(
            {"citations": [{"@id": 5, "dc:identifier": "pmid:1", "dc:title": "T", "dc:type": "URI"}]}
        )
        citation = aspect.citations[0]
        assert citation.external_id == "pmid:1"
        assert citation.title == "T"
        assert citation.citation_type == "URI"

    def test_support_with_and_without_citation(self):
        aspect = decode_aspect(
            {"supports": [{"@id": 1, "text": "a", "citation": 5}, {"@id": 2}]}
        )
        assert aspect.supports == (
            SupportRecord(id=1, text="a", citation_id=5),
            SupportRecord(id=2, text="", citation_id=None),
        )

    def test_attribute_with_list_po(self):
        aspect = decode_aspect(
            {"edgeAttributes": [{"po": [10, 11], "n": "score", "v": "1", "d": "double"}]}
        )
        assert aspect.edge_attributes == (
            AttributeRecord(entity_id=10, name="score", value="1", data_type="double"),
            AttributeRecord(entity_id=11, name="score", value="1", data_type="double"),
        )

    def test_link_tables(self):
        aspect = decode_aspect(
            {
                "edgeCitations": [{"po": [10, 11], "citations": [5]}],
                "edgeSupports": [{"po": 10, "supports": [1, 2]}],
            }
        )
        assert aspect.edge_citations == (EdgeCitationLink(edge_ids=(10, 11), citation_ids=(5,)),)
        assert aspect.edge_supports[0].edge_ids == (10,)
        assert aspect.edge_supports[0].support_ids == (1, 2)

    def test_network_id(self):
        aspect = decode_aspect({"ndexStatus": [{"externalId": "abc", "nodeCount": 2}, {}]})
        assert aspect.network_ids == (NetworkIdRecord(external_id="abc"),)

    def test_numeric_string_ids_accepted(self):
        aspect = decode_aspect({"nodes": [{"@id": "7"}]})
        assert aspect.nodes[0].id == 7

    def test_unknown_aspects_ignored(self):
        aspect = decode_aspect({"cartesianLayout": [{"node": 1, "x": 0, "y": 0}]})
        assert aspect.is_empty()

    def test_missing_id_rejected(self):
        with pytest.raises(NetworkDecodeError, match="@id"):
            decode_aspect({"nodes": [{"n": "no id"}]})

    def test_bad_id_rejected(self):
        with pytest.raises(NetworkDecodeError, match="integer"):
            decode_aspect({"edges": [{"@id": 1, "s": "x", "t": 2}]})

    def test_boolean_id_rejected(self):
        with pytest.raises(NetworkDecodeError):
            decode_aspect({"nodes": [{"@id": True}]})

    def test_non_array_aspect_rejected(self):
        with pytest.raises(NetworkDecodeError, match="array"):
            decode_aspect({"nodes": {"@id": 1}})


class TestDecodeNetwork:
    """Tests for whole documents."""

    def test_aspects_keep_document_order(self, cx_document):
        network = decode_network(cx_document)
        assert len(network) == len(cx_document)
        assert network.aspects[1].nodes[0].label == "TP53"
        assert network.aspects[2].network_ids[0].external_id == "net-uuid-1"

    def test_wrapped_data(self, cx_document):
        network = decode_network({"data": cx_document})
        assert len(network) == len(cx_document)

    def test_not_a_list_rejected(self):
        with pytest.raises(NetworkDecodeError, match="list of aspects"):
            decode_network({"nodes": []})

    def test_loads_invalid_json(self):
        with pytest.raises(NetworkDecodeError, match="not valid JSON"):
            loads_network("[{", source_id="broken.cx")


class TestSources:
    """Tests for NetworkFile and NetworkStdio."""

    def test_file_source(self, tmp_path, cx_document):
        path = tmp_path / "net.cx"
        path.write_text(json.dumps(cx_document), encoding="utf-8")

        networks = list(NetworkFile(path).deserialize())

        assert len(networks) == 1
        assert networks[0].source_id == str(path)

    def test_directory_source(self, tmp_path, cx_document):
        (tmp_path / "a.cx").write_text(json.dumps(cx_document), encoding="utf-8")
        (tmp_path / "b.json").write_text("[]", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("skip", encoding="utf-8")

        contexts = [ctx for ctx, _ in NetworkFile(tmp_path).iterate_sources()]

        assert [ctx.source_type for ctx in contexts] == ["file", "file"]
        assert sorted(ctx.metadata["path"].name for ctx in contexts) == ["a.cx", "b.json"]

    def test_stdio_source(self, cx_document):
        source = NetworkStdio(json.dumps(cx_document))
        network = next(source.deserialize())
        assert network.source_id == "<stdin>"

    def test_sources_satisfy_protocol(self, tmp_path):
        assert isinstance(NetworkFile(tmp_path), NetworkSource)
        assert isinstance(NetworkStdio("[]"), NetworkSource)
