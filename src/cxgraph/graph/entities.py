"""Entities - Linked records of a materialized network graph.

This module provides the entity types that GraphBuilder populates:
- EntityKind: Enum of entity tables
- Attribute: Name/value pair attached to a node or edge
- Entity: Base class holding the id and the handle on the owning tables
- Node, Citation, Support: Entities with their relationship accessors

Relationships are stored as slots, positions in the graph's per-kind
entity lists, and resolved on every read. A slot never changes once
assigned, so an entity replaced by a later one with the same id keeps
its own relationships. An entity only holds a weak reference to the
tables, so the graph stays the sole owner of every entity.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterator

if TYPE_CHECKING:
    from cxgraph.graph.builder import EntityTables
    from cxgraph.graph.relations import Edge


class EntityKind(Enum):
    """Entity tables of a network graph."""

    NODE = "node"
    EDGE = "edge"
    CITATION = "citation"
    SUPPORT = "support"


@dataclass(frozen=True)
class Attribute:
    """A named value attached to a node or edge.

    Attributes:
        name: Attribute name (CX `n`).
        value: Attribute value (CX `v`), any JSON value.
        data_type: Declared CX data type (`d`), e.g. "list_of_string".
    """

    name: str
    value: Any = None
    data_type: str | None = None


@dataclass(eq=False)
class Entity:
    """Base for every entity owned by a network graph.

    Entities compare by identity. `_arena` and `_slot` are set when the
    entity is registered in the tables.
    """

    kind: ClassVar[EntityKind]

    id: int
    _arena: weakref.ReferenceType[EntityTables] | None = field(
        default=None, init=False, repr=False
    )
    _slot: int | None = field(default=None, init=False, repr=False)

    def bind(self, tables: EntityTables, slot: int) -> None:
        """Attach this entity to the tables that own it."""
        self._arena = weakref.ref(tables)
        self._slot = slot

    @property
    def slot(self) -> int:
        """Position of this entity in its kind's list."""
        if self._slot is None:
            raise ValueError(f"{self.kind.value} {self.id} is not registered in a graph")
        return self._slot

    @property
    def is_bound(self) -> bool:
        """True if the owning tables are still alive."""
        return self._arena is not None and self._arena() is not None

    def _tables(self) -> EntityTables:
        tables = self._arena() if self._arena is not None else None
        if tables is None:
            raise ReferenceError(
                f"{self.kind.value} {self.id} is not owned by a live graph"
            )
        return tables


@dataclass(eq=False)
class Node(Entity):
    """A node of the network.

    Attributes:
        id: Node id.
        label: Display name (CX `n`).
        represents: External concept the node stands for (CX `r`).
        network_id: External id of the network, set by annotation.
    """

    kind: ClassVar[EntityKind] = EntityKind.NODE

    label: str = ""
    represents: str | None = None
    network_id: str | None = None

    _attributes: list[Attribute] = field(default_factory=list, init=False, repr=False)
    _edge_slots: list[int] = field(default_factory=list, init=False, repr=False)

    def add_attribute(self, attribute: Attribute) -> None:
        """Append an attribute, keeping document order."""
        self._attributes.append(attribute)

    def add_edge(self, edge: Edge) -> None:
        """Record an incident edge.

        An edge whose subject and object are both this node is recorded
        twice, once per side.
        """
        self._edge_slots.append(edge.slot)

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return tuple(self._attributes)

    def iter_edges(self) -> Iterator[Edge]:
        """Iterate over incident edges, as subject or object."""
        tables = self._tables()
        for slot in self._edge_slots:
            yield tables.entity(EntityKind.EDGE, slot)

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(self.iter_edges())

    def edge_count(self) -> int:
        """Return number of incident edge entries."""
        return len(self._edge_slots)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Return the value of the last attribute with this name."""
        for attribute in reversed(self._attributes):
            if attribute.name == name:
                return attribute.value
        return default


@dataclass(eq=False)
class Citation(Entity):
    """A bibliographic reference backing one or more edges.

    Attributes:
        id: Citation id.
        external_id: External identifier (`dc:identifier`), e.g. "pmid:123".
        title: Citation title (`dc:title`).
        citation_type: Citation type (`dc:type`).
    """

    kind: ClassVar[EntityKind] = EntityKind.CITATION

    external_id: str | None = None
    title: str | None = None
    citation_type: str | None = None

    _support_slots: list[int] = field(default_factory=list, init=False, repr=False)

    def add_support(self, support: Support) -> None:
        """Record a support citing this citation.

        Each support is listed once, however often it is added.
        """
        if support.slot not in self._support_slots:
            self._support_slots.append(support.slot)

    def iter_supports(self) -> Iterator[Support]:
        """Iterate over supports in the order they were linked."""
        tables = self._tables()
        for slot in self._support_slots:
            yield tables.entity(EntityKind.SUPPORT, slot)

    @property
    def supports(self) -> tuple[Support, ...]:
        return tuple(self.iter_supports())

    def support_count(self) -> int:
        return len(self._support_slots)

    def full_text(self) -> str:
        """Join the text of every linked support with single spaces.

        Computed on each call. Empty texts still contribute a segment, so
        two empty supports give a single space.
        """
        return " ".join(support.text or "" for support in self.iter_supports())


@dataclass(eq=False)
class Support(Entity):
    """A fragment of evidence text.

    Attributes:
        id: Support id.
        text: The evidence text.
        declared_citation_id: Citation id given in the document, which
            may not resolve.
        citation_inferred: True if the citation was assigned by inference
            from an edge rather than declared.
    """

    kind: ClassVar[EntityKind] = EntityKind.SUPPORT

    text: str = ""
    declared_citation_id: int | None = None

    _citation_slot: int | None = field(default=None, init=False, repr=False)
    citation_inferred: bool = field(default=False, init=False)

    def set_citation(self, citation: Citation, inferred: bool = False) -> None:
        """Point this support at a citation."""
        self._citation_slot = citation.slot
        self.citation_inferred = inferred

    def has_citation(self) -> bool:
        return self._citation_slot is not None

    @property
    def citation(self) -> Citation | None:
        """The resolved citation, or None."""
        if self._citation_slot is None:
            return None
        return self._tables().entity(EntityKind.CITATION, self._citation_slot)


__all__ = [
    "EntityKind",
    "Attribute",
    "Entity",
    "Node",
    "Citation",
    "Support",
]
