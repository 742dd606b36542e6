"""Graph Builder - Links a decoded CX network into a NetworkGraph.

This module provides:
- EntityTables: the per-kind entity lists and id indexes of a graph
- NetworkGraph: read-only container handed to consumers
- GraphBuilder: runs the linking passes over aspects in document order
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

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
from cxgraph.graph.entities import (
    Attribute,
    Citation,
    Entity,
    EntityKind,
    Node,
    Support,
)
from cxgraph.graph.references import DuplicateIdError, GraphBuildError
from cxgraph.graph.relations import Edge
from cxgraph.utilities.lookup import resolve, resolve_all, resolve_optional, select

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("overwrite", "error")


class EntityTables:
    """Owning tables of one graph, one per entity kind.

    Every registered entity is appended to its kind's list and keeps that
    slot for good. The id tables map each id to the entity registered
    last under it; an entity displaced by a duplicate id stays in its
    slot, still reachable from whatever was linked to it.

    Ids are unique within a table only; node 1 and edge 1 are unrelated.
    """

    def __init__(self) -> None:
        self.nodes: dict[int, Node] = {}
        self.edges: dict[int, Edge] = {}
        self.citations: dict[int, Citation] = {}
        self.supports: dict[int, Support] = {}
        self._slots: dict[EntityKind, list[Entity]] = {kind: [] for kind in EntityKind}

    def register(self, entity: Entity) -> Entity | None:
        """Give an entity the next slot and point its id at it.

        Returns the entity previously registered under the same id, if any.
        """
        slots = self._slots[entity.kind]
        entity.bind(self, len(slots))
        slots.append(entity)
        table = self.table(entity.kind)
        previous = table.get(entity.id)
        table[entity.id] = entity
        return previous

    def entity(self, kind: EntityKind, slot: int) -> Entity:
        """Return the entity held in a slot."""
        return self._slots[kind][slot]

    def table(self, kind: EntityKind) -> dict:
        """Return the table holding entities of this kind."""
        if kind == EntityKind.NODE:
            return self.nodes
        if kind == EntityKind.EDGE:
            return self.edges
        if kind == EntityKind.CITATION:
            return self.citations
        return self.supports


@dataclass
class NetworkGraph:
    """A fully linked network, immutable once returned by GraphBuilder.

    Accessors return tuples so readers never iterate a live table.

    The graph is the only owner of its entities. Keep a reference to it
    while following relationships: once it is garbage collected, accessors
    such as `edge.subject` raise ReferenceError. A chained call like
    `build_graph(path).all_edges()[0].subject` fails for that reason.

    all_nodes() and the other accessors return the entity registered last
    under each id.

    Attributes:
        source_id: Where the document came from, if known.
    """

    source_id: str | None = None

    _tables: EntityTables = field(default_factory=EntityTables, repr=False)

    def all_nodes(self) -> tuple[Node, ...]:
        """Return every registered node, in no guaranteed order."""
        return tuple(self._tables.nodes.values())

    def all_edges(self) -> tuple[Edge, ...]:
        """Return every registered edge, in no guaranteed order."""
        return tuple(self._tables.edges.values())

    def all_citations(self) -> tuple[Citation, ...]:
        return tuple(self._tables.citations.values())

    def all_supports(self) -> tuple[Support, ...]:
        return tuple(self._tables.supports.values())

    def find_node(self, node_id: int) -> Node | None:
        return self._tables.nodes.get(node_id)

    def find_edge(self, edge_id: int) -> Edge | None:
        return self._tables.edges.get(edge_id)

    def find_citation(self, citation_id: int) -> Citation | None:
        return self._tables.citations.get(citation_id)

    def find_support(self, support_id: int) -> Support | None:
        return self._tables.supports.get(support_id)

    def node_count(self) -> int:
        return len(self._tables.nodes)

    def edge_count(self) -> int:
        return len(self._tables.edges)

    def citation_count(self) -> int:
        return len(self._tables.citations)

    def support_count(self) -> int:
        return len(self._tables.supports)

    def inferred_supports(self) -> Iterator[Support]:
        """Iterate over supports whose citation was inferred from an edge."""
        for support in self._tables.supports.values():
            if support.citation_inferred:
                yield support


class GraphBuilder:
    """Builder for constructing a NetworkGraph from decoded aspects.

    Usage:
        builder = GraphBuilder()
        builder.add_network(network)
        graph = builder.build()

    Each aspect runs the same fixed pass sequence; a pass may only rely on
    entities registered by earlier passes of this aspect or by earlier
    aspects. A builder whose construction failed never produces a graph,
    and a builder produces at most one graph.
    """

    def __init__(self, on_duplicate: str = "overwrite", source_id: str | None = None) -> None:
        """Initialize the graph builder.

        Args:
            on_duplicate: "overwrite" (last write wins) or "error".
            source_id: Where the document came from, for the graph.
        """
        if on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(
                f"on_duplicate must be one of {DUPLICATE_POLICIES}, got {on_duplicate!r}"
            )
        self.on_duplicate = on_duplicate
        self.source_id = source_id
        self._tables = EntityTables()
        self._aspect_count = 0
        self._failure: GraphBuildError | None = None
        self._built = False

    def add_network(self, network: Network) -> None:
        """Process every aspect of a network in document order."""
        if self.source_id is None:
            self.source_id = network.source_id
        for aspect in network.aspects:
            self.add_aspect(aspect)

    def add_aspect(self, aspect: Aspect) -> None:
        """Run all linking passes over one aspect.

        Raises:
            UnresolvedReferenceError: If a required id is not registered.
            DuplicateIdError: If an id repeats and duplicates are rejected.
        """
        self._check_open()
        self._aspect_count += 1
        try:
            self._add_nodes(aspect.nodes)
            self._add_citations(aspect.citations)

            self._annotate_nodes_with_network_id(aspect.network_ids)
            self._connect_attributes_to_nodes(aspect.node_attributes)
            self._connect_attributes_to_edges(aspect.edge_attributes)

            self._connect_nodes_and_edges(aspect.edges)
            self._connect_edges_to_citations(aspect.edge_citations)
            self._connect_supports_to_citations(aspect.supports)
            self._interconnect_edges_supports_and_citations(aspect.edge_supports)
        except GraphBuildError as e:
            self._failure = e
            logger.debug("Aspect %d failed: %s", self._aspect_count, e)
            raise

        if not aspect.is_empty():
            logger.debug(
                "Aspect %d linked (%d records)", self._aspect_count, aspect.record_count()
            )

    def build(self) -> NetworkGraph:
        """Hand the linked tables over to a new NetworkGraph."""
        self._check_open()
        self._built = True
        graph = NetworkGraph(source_id=self.source_id, _tables=self._tables)
        logger.info(
            "Built graph from %d aspects: %d nodes, %d edges, %d citations, %d supports",
            self._aspect_count,
            graph.node_count(),
            graph.edge_count(),
            graph.citation_count(),
            graph.support_count(),
        )
        return graph

    def _check_open(self) -> None:
        if self._failure is not None:
            raise GraphBuildError(
                f"Construction already failed and cannot continue: {self._failure}"
            )
        if self._built:
            raise GraphBuildError("Graph already built; use a new GraphBuilder")

    def _register(self, entity: Entity) -> None:
        if entity.id in self._tables.table(entity.kind):
            if self.on_duplicate == "error":
                raise DuplicateIdError(entity.kind.value, entity.id)
            logger.warning("Duplicate %s id %d overwrites earlier entry", entity.kind.value, entity.id)
        self._tables.register(entity)

    # Pass 1
    def _add_nodes(self, records: Iterable[NodeRecord]) -> None:
        for record in records:
            self._register(Node(id=record.id, label=record.label, represents=record.represents))

    # Pass 2
    def _add_citations(self, records: Iterable[CitationRecord]) -> None:
        for record in records:
            self._register(
                Citation(
                    id=record.id,
                    external_id=record.external_id,
                    title=record.title,
                    citation_type=record.citation_type,
                )
            )

    # Pass 3: applies to every node registered so far, not only this aspect's
    def _annotate_nodes_with_network_id(self, records: Iterable[NetworkIdRecord]) -> None:
        for record in records:
            for node in self._tables.nodes.values():
                node.network_id = record.external_id

    # Pass 4
    def _connect_attributes_to_nodes(self, records: Iterable[AttributeRecord]) -> None:
        for record in records:
            node = resolve(
                self._tables.nodes, record.entity_id, "node", "attaching node attributes"
            )
            node.add_attribute(_to_attribute(record))

    # Pass 5: edges must come from an earlier aspect
    def _connect_attributes_to_edges(self, records: Iterable[AttributeRecord]) -> None:
        for record in records:
            edge = resolve(
                self._tables.edges, record.entity_id, "edge", "attaching edge attributes"
            )
            edge.add_attribute(_to_attribute(record))

    # Pass 6
    def _connect_nodes_and_edges(self, records: Iterable[EdgeRecord]) -> None:
        for record in records:
            self._connect_edge_to_source_and_target(record)

    def _connect_edge_to_source_and_target(self, record: EdgeRecord) -> None:
        context = f"connecting edge {record.id}"
        subject = resolve(self._tables.nodes, record.source_id, "node", context)
        object_ = resolve(self._tables.nodes, record.target_id, "node", context)

        edge = Edge(
            id=record.id,
            source_id=record.source_id,
            target_id=record.target_id,
            interaction=record.interaction,
        )
        self._register(edge)
        edge.connect(subject, object_)

    # Pass 7
    def _connect_edges_to_citations(self, links: Iterable[EdgeCitationLink]) -> None:
        for link in links:
            context = "linking edges to citations"
            related_edges = resolve_all(self._tables.edges, link.edge_ids, "edge", context)
            related_citations = resolve_all(
                self._tables.citations, link.citation_ids, "citation", context
            )
            for edge in related_edges:
                edge.set_citations(related_citations)

    # Pass 8: an unresolved citation id is tolerated
    def _connect_supports_to_citations(self, records: Iterable[SupportRecord]) -> None:
        for record in records:
            citation = resolve_optional(self._tables.citations, record.citation_id)
            support = Support(
                id=record.id,
                text=record.text,
                declared_citation_id=record.citation_id,
            )
            if citation is not None:
                support.set_citation(citation)
            elif record.citation_id is not None:
                logger.debug(
                    "Support %d cites unknown citation %d", record.id, record.citation_id
                )
            self._register(support)
            if citation is not None:
                citation.add_support(support)

    # Pass 9
    def _interconnect_edges_supports_and_citations(
        self, links: Iterable[EdgeSupportLink]
    ) -> None:
        for link in links:
            related_edges = self._connect_edges_to_supports(link)
            self._infer_citation_for_supports(related_edges)
            self._connect_citations_to_supports(link)

    def _connect_edges_to_supports(self, link: EdgeSupportLink) -> list[Edge]:
        context = "linking edges to supports"
        related_edges = resolve_all(self._tables.edges, link.edge_ids, "edge", context)
        related_supports = resolve_all(
            self._tables.supports, link.support_ids, "support", context
        )
        for edge in related_edges:
            edge.set_supports(related_supports)
        return related_edges

    def _infer_citation_for_supports(self, edges: Iterable[Edge]) -> None:
        """Give an edge's supports its citation when that is unambiguous.

        Fires only if the edge has exactly one citation and none of its
        supports carries a citation yet.
        """
        for edge in edges:
            if edge.citation_count() != 1:
                continue
            supports = edge.supports
            if select(Support.has_citation, supports):
                continue
            citation = edge.citations[0]
            for support in supports:
                support.set_citation(citation, inferred=True)
            if supports:
                logger.debug(
                    "Inferred citation %d for %d supports of edge %d",
                    citation.id,
                    len(supports),
                    edge.id,
                )

    def _connect_citations_to_supports(self, link: EdgeSupportLink) -> None:
        related_supports = resolve_all(
            self._tables.supports, link.support_ids, "support", "linking citations to supports"
        )
        for support in related_supports:
            citation = support.citation
            if citation is not None:
                citation.add_support(support)


def _to_attribute(record: AttributeRecord) -> Attribute:
    return Attribute(name=record.name, value=record.value, data_type=record.data_type)


__all__ = [
    "DUPLICATE_POLICIES",
    "EntityTables",
    "NetworkGraph",
    "GraphBuilder",
]
