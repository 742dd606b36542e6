"""Aspects - Decoded records of a CX network document.

These are the immutable inputs of graph construction. Each record mirrors
one element of a CX aspect array; relationships are still expressed as
numeric ids here. GraphBuilder turns them into linked entities.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Iterator


@dataclass(frozen=True)
class NodeRecord:
    """A node element (`nodes` aspect)."""

    id: int
    label: str = ""
    represents: str | None = None


@dataclass(frozen=True)
class EdgeRecord:
    """An edge element (`edges` aspect).

    Attributes:
        id: Edge id.
        source_id: Id of the subject node.
        target_id: Id of the object node.
        interaction: Predicate label of the statement, if any.
    """

    id: int
    source_id: int
    target_id: int
    interaction: str | None = None


@dataclass(frozen=True)
class CitationRecord:
    """A citation element (`citations` aspect)."""

    id: int
    external_id: str | None = None  # dc:identifier
    title: str | None = None
    citation_type: str | None = None


@dataclass(frozen=True)
class SupportRecord:
    """A support element (`supports` aspect).

    `citation_id` is the declared citation; it may not resolve.
    """

    id: int
    text: str = ""
    citation_id: int | None = None


@dataclass(frozen=True)
class AttributeRecord:
    """A node or edge attribute (`nodeAttributes` / `edgeAttributes`)."""

    entity_id: int
    name: str
    value: Any = None
    data_type: str | None = None


@dataclass(frozen=True)
class NetworkIdRecord:
    """A network-id annotation (`ndexStatus` aspect)."""

    external_id: str


@dataclass(frozen=True)
class EdgeCitationLink:
    """Batch link: every listed edge is backed by all listed citations."""

    edge_ids: tuple[int, ...] = ()
    citation_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class EdgeSupportLink:
    """Batch link: every listed edge is justified by all listed supports."""

    edge_ids: tuple[int, ...] = ()
    support_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class Aspect:
    """One bag of arrays from the document.

    Any subset of the arrays may be present; absent arrays are empty.
    """

    nodes: tuple[NodeRecord, ...] = ()
    citations: tuple[CitationRecord, ...] = ()
    network_ids: tuple[NetworkIdRecord, ...] = ()
    node_attributes: tuple[AttributeRecord, ...] = ()
    edge_attributes: tuple[AttributeRecord, ...] = ()
    edges: tuple[EdgeRecord, ...] = ()
    edge_citations: tuple[EdgeCitationLink, ...] = ()
    supports: tuple[SupportRecord, ...] = ()
    edge_supports: tuple[EdgeSupportLink, ...] = ()

    def is_empty(self) -> bool:
        """True if the aspect carries no records at all."""
        return not any(getattr(self, f.name) for f in fields(self))

    def record_count(self) -> int:
        """Return the total number of records in all arrays."""
        return sum(len(getattr(self, f.name)) for f in fields(self))


@dataclass(frozen=True)
class Network:
    """A decoded network document: aspects in document order."""

    aspects: tuple[Aspect, ...] = ()
    source_id: str | None = None

    def __iter__(self) -> Iterator[Aspect]:
        yield from self.aspects

    def __len__(self) -> int:
        return len(self.aspects)


__all__ = [
    "NodeRecord",
    "EdgeRecord",
    "CitationRecord",
    "SupportRecord",
    "AttributeRecord",
    "NetworkIdRecord",
    "EdgeCitationLink",
    "EdgeSupportLink",
    "Aspect",
    "Network",
]
