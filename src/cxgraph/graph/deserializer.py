"""Network deserialization - CX JSON to aspect records.

This module provides the decoder that turns a CX document (a JSON array
of aspect objects, optionally wrapped as {"data": [...]}) into a
Network, and the sources it can be read from (files, stdin).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Protocol, runtime_checkable

from cxgraph.graph.aspects import (
    Aspect,
    AttributeRecord,
    CitationRecord,
    EdgeCitationLink,
    EdgeRecord,
    EdgeSupportLink,
    Network,
    NetworkIdRecord,
    NodeRecord,
    SupportRecord,
)
from cxgraph.graph.references import NetworkDecodeError

logger = logging.getLogger(__name__)


def _as_id(value: Any, what: str) -> int:
    """Convert a CX id to int; numeric strings are accepted."""
    if isinstance(value, bool):
        raise NetworkDecodeError(f"{what}: expected an integer id, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise NetworkDecodeError(f"{what}: expected an integer id, got {value!r}")


def _as_ids(value: Any, what: str) -> tuple[int, ...]:
    """Convert a single id or a list of ids."""
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(_as_id(v, what) for v in value)
    return (_as_id(value, what),)


def _require(raw: dict[str, Any], key: str, aspect: str) -> Any:
    if key not in raw:
        raise NetworkDecodeError(f"{aspect} element is missing {key!r}: {raw!r}")
    return raw[key]


def _optional_id(raw: dict[str, Any], key: str, what: str) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    return _as_id(value, what)


def _decode_node(raw: dict[str, Any]) -> list[NodeRecord]:
    return [
        NodeRecord(
            id=_as_id(_require(raw, "@id", "nodes"), "nodes.@id"),
            label=raw.get("n") or "",
            represents=raw.get("r"),
        )
    ]


def _decode_edge(raw: dict[str, Any]) -> list[EdgeRecord]:
    return [
        EdgeRecord(
            id=_as_id(_require(raw, "@id", "edges"), "edges.@id"),
            source_id=_as_id(_require(raw, "s", "edges"), "edges.s"),
            target_id=_as_id(_require(raw, "t", "edges"), "edges.t"),
            interaction=raw.get("i"),
        )
    ]


def _decode_citation(raw: dict[str, Any]) -> list[CitationRecord]:
    return [
        CitationRecord(
            id=_as_id(_require(raw, "@id", "citations"), "citations.@id"),
            external_id=raw.get("dc:identifier"),
            title=raw.get("dc:title"),
            citation_type=raw.get("dc:type"),
        )
    ]


def _decode_support(raw: dict[str, Any]) -> list[SupportRecord]:
    return [
        SupportRecord(
            id=_as_id(_require(raw, "@id", "supports"), "supports.@id"),
            text=raw.get("text") or "",
            citation_id=_optional_id(raw, "citation", "supports.citation"),
        )
    ]


def _decode_attribute(aspect: str) -> Callable[[dict[str, Any]], list[AttributeRecord]]:
    """Attribute decoder; a list-valued `po` yields one record per id."""

    def decode(raw: dict[str, Any]) -> list[AttributeRecord]:
        entity_ids = _as_ids(_require(raw, "po", aspect), f"{aspect}.po")
        name = _require(raw, "n", aspect)
        return [
            AttributeRecord(
                entity_id=entity_id,
                name=name,
                value=raw.get("v"),
                data_type=raw.get("d"),
            )
            for entity_id in entity_ids
        ]

    return decode


def _decode_network_id(raw: dict[str, Any]) -> list[NetworkIdRecord]:
    """Status records without `externalId` carry no network id and are
    skipped, so they never clear ids set by an earlier record."""
    external_id = raw.get("externalId")
    if external_id is None:
        return []
    return [NetworkIdRecord(external_id=str(external_id))]


def _decode_edge_citation(raw: dict[str, Any]) -> list[EdgeCitationLink]:
    return [
        EdgeCitationLink(
            edge_ids=_as_ids(raw.get("po"), "edgeCitations.po"),
            citation_ids=_as_ids(raw.get("citations"), "edgeCitations.citations"),
        )
    ]


def _decode_edge_support(raw: dict[str, Any]) -> list[EdgeSupportLink]:
    return [
        EdgeSupportLink(
            edge_ids=_as_ids(raw.get("po"), "edgeSupports.po"),
            support_ids=_as_ids(raw.get("supports"), "edgeSupports.supports"),
        )
    ]


# CX aspect name -> (Aspect field, element decoder)
ASPECT_DECODERS: dict[str, tuple[str, Callable[[dict[str, Any]], list[Any]]]] = {
    "nodes": ("nodes", _decode_node),
    "citations": ("citations", _decode_citation),
    "ndexStatus": ("network_ids", _decode_network_id),
    "nodeAttributes": ("node_attributes", _decode_attribute("nodeAttributes")),
    "edgeAttributes": ("edge_attributes", _decode_attribute("edgeAttributes")),
    "edges": ("edges", _decode_edge),
    "edgeCitations": ("edge_citations", _decode_edge_citation),
    "supports": ("supports", _decode_support),
    "edgeSupports": ("edge_supports", _decode_edge_support),
}


def decode_aspect(raw: Any) -> Aspect:
    """Decode one aspect object of a CX document.

    Args:
        raw: A JSON object mapping aspect names to element arrays.

    Returns:
        Aspect with the recognised arrays filled in.

    Raises:
        NetworkDecodeError: If the structure is not as expected.
    """
    if not isinstance(raw, dict):
        raise NetworkDecodeError(f"Aspect must be a JSON object, got {type(raw).__name__}")

    values: dict[str, list[Any]] = {}
    for name, elements in raw.items():
        decoder = ASPECT_DECODERS.get(name)
        if decoder is None:
            logger.debug("Ignoring aspect %r", name)
            continue
        if not isinstance(elements, list):
            raise NetworkDecodeError(f"Aspect {name!r} must be an array")

        field_name, decode = decoder
        records = values.setdefault(field_name, [])
        for element in elements:
            if not isinstance(element, dict):
                raise NetworkDecodeError(f"{name} element must be a JSON object: {element!r}")
            records.extend(decode(element))

    return Aspect(**{name: tuple(records) for name, records in values.items()})


def decode_network(data: Any, source_id: str | None = None) -> Network:
    """Decode a parsed CX document.

    Args:
        data: List of aspect objects, or a dict with a "data" list.
        source_id: Where the document came from.

    Returns:
        Network with aspects in document order.
    """
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if not isinstance(data, list):
        raise NetworkDecodeError(
            f"CX document must be a list of aspects, got {type(data).__name__}"
        )
    return Network(aspects=tuple(decode_aspect(a) for a in data), source_id=source_id)


def loads_network(content: str, source_id: str | None = None) -> Network:
    """Decode CX JSON text."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise NetworkDecodeError(f"{source_id or 'CX document'} is not valid JSON: {e}") from e
    return decode_network(data, source_id=source_id)


@dataclass
class SourceContext:
    """Context for a source being deserialized.

    Attributes:
        source_type: Type of source ("file", "stdin").
        source_id: Identifier for the source (file path, etc.).
        metadata: Additional metadata about the source.
    """

    source_type: str
    source_id: str
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class NetworkSource(Protocol):
    """Protocol for network sources."""

    def iterate_sources(self) -> Iterator[tuple[SourceContext, str]]:
        """Yield (SourceContext, content) pairs."""
        ...

    def deserialize(self) -> Iterator[Network]:
        """Yield one decoded Network per source."""
        ...


class NetworkFile:
    """Deserializer for one CX file or a directory of them."""

    def __init__(self, path: Path | str, patterns: list[str] | None = None) -> None:
        """Initialize file deserializer.

        Args:
            path: Path to a file or directory.
            patterns: Glob patterns for a directory (default: ["*.cx", "*.json"]).
        """
        self.path = Path(path)
        self.patterns = patterns or ["*.cx", "*.json"]

    def iterate_sources(self) -> Iterator[tuple[SourceContext, str]]:
        if self.path.is_dir():
            seen: set[Path] = set()
            for pattern in self.patterns:
                for file_path in sorted(self.path.glob(pattern)):
                    if file_path.is_file() and file_path not in seen:
                        seen.add(file_path)
                        yield self._read_file(file_path)
        else:
            yield self._read_file(self.path)

    def _read_file(self, file_path: Path) -> tuple[SourceContext, str]:
        content = file_path.read_text(encoding="utf-8")
        ctx = SourceContext(
            source_type="file",
            source_id=str(file_path),
            metadata={"path": file_path},
        )
        return ctx, content

    def deserialize(self) -> Iterator[Network]:
        for ctx, content in self.iterate_sources():
            logger.debug("Decoding %s", ctx.source_id)
            yield loads_network(content, source_id=ctx.source_id)


class NetworkStdio:
    """Deserializer for content read from stdin."""

    def __init__(self, content: str, source_id: str = "<stdin>") -> None:
        self.content = content
        self.source_id = source_id

    def iterate_sources(self) -> Iterator[tuple[SourceContext, str]]:
        yield SourceContext(source_type="stdin", source_id=self.source_id), self.content

    def deserialize(self) -> Iterator[Network]:
        for ctx, content in self.iterate_sources():
            yield loads_network(content, source_id=ctx.source_id)


__all__ = [
    "ASPECT_DECODERS",
    "decode_aspect",
    "decode_network",
    "loads_network",
    "SourceContext",
    "NetworkSource",
    "NetworkFile",
    "NetworkStdio",
]
