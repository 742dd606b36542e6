"""Relations - Edges and their evidence.

This module defines the Edge entity: a statement connecting a subject
node to an object node, backed by citations and supports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Iterable, Iterator

from cxgraph.graph.entities import Attribute, Entity, EntityKind

if TYPE_CHECKING:
    from cxgraph.graph.entities import Citation, Node, Support


@dataclass(eq=False)
class Edge(Entity):
    """A directed statement between two nodes.

    Attributes:
        id: Edge id.
        source_id: Id of the subject node as declared in the document.
        target_id: Id of the object node as declared in the document.
        interaction: Predicate label (CX `i`).
    """

    kind: ClassVar[EntityKind] = EntityKind.EDGE

    source_id: int = 0
    target_id: int = 0
    interaction: str | None = None

    _attributes: list[Attribute] = field(default_factory=list, init=False, repr=False)
    _subject_slot: int | None = field(default=None, init=False, repr=False)
    _object_slot: int | None = field(default=None, init=False, repr=False)
    _citation_slots: list[int] = field(default_factory=list, init=False, repr=False)
    _support_slots: list[int] = field(default_factory=list, init=False, repr=False)

    def connect(self, subject: Node, object_: Node) -> None:
        """Link this edge to its endpoints, recording it on both nodes.

        The edge and both nodes must already be registered.
        """
        self._subject_slot = subject.slot
        self._object_slot = object_.slot
        subject.add_edge(self)
        object_.add_edge(self)

    def add_attribute(self, attribute: Attribute) -> None:
        self._attributes.append(attribute)

    def set_citations(self, citations: Iterable[Citation]) -> None:
        """Replace the citation list."""
        self._citation_slots = [citation.slot for citation in citations]

    def set_supports(self, supports: Iterable[Support]) -> None:
        """Replace the support list."""
        self._support_slots = [support.slot for support in supports]

    @property
    def subject(self) -> Node | None:
        if self._subject_slot is None:
            return None
        return self._tables().entity(EntityKind.NODE, self._subject_slot)

    @property
    def object(self) -> Node | None:
        if self._object_slot is None:
            return None
        return self._tables().entity(EntityKind.NODE, self._object_slot)

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return tuple(self._attributes)

    def iter_citations(self) -> Iterator[Citation]:
        tables = self._tables()
        for slot in self._citation_slots:
            yield tables.entity(EntityKind.CITATION, slot)

    @property
    def citations(self) -> tuple[Citation, ...]:
        return tuple(self.iter_citations())

    def citation_count(self) -> int:
        return len(self._citation_slots)

    def iter_supports(self) -> Iterator[Support]:
        tables = self._tables()
        for slot in self._support_slots:
            yield tables.entity(EntityKind.SUPPORT, slot)

    @property
    def supports(self) -> tuple[Support, ...]:
        return tuple(self.iter_supports())

    def support_count(self) -> int:
        return len(self._support_slots)

    @property
    def is_self_loop(self) -> bool:
        """True if subject and object are the same node."""
        return self._subject_slot is not None and self._subject_slot == self._object_slot


__all__ = ["Edge"]
