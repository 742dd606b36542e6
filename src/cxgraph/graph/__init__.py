"""Graph module - Linked network graph built from CX aspects.

Exports:
- EntityKind: Enum of entity tables
- Attribute: Name/value pair on a node or edge
- Node, Edge, Citation, Support: Linked entities
- NetworkGraph: Read-only container of a built graph
- GraphBuilder: Runs the linking passes over aspects
- GraphBuildError, UnresolvedReferenceError, DuplicateIdError,
  NetworkDecodeError: Construction errors

Note: use graph.factory.build_graph() to construct a graph from a file
or parsed CX JSON.
"""

from cxgraph.graph.builder import GraphBuilder, NetworkGraph
from cxgraph.graph.entities import Attribute, Citation, EntityKind, Node, Support
from cxgraph.graph.references import (
    BrokenReference,
    DuplicateIdError,
    GraphBuildError,
    NetworkDecodeError,
    UnresolvedReferenceError,
)
from cxgraph.graph.relations import Edge

__all__ = [
    "EntityKind",
    "Attribute",
    "Node",
    "Edge",
    "Citation",
    "Support",
    "NetworkGraph",
    "GraphBuilder",
    "BrokenReference",
    "GraphBuildError",
    "UnresolvedReferenceError",
    "DuplicateIdError",
    "NetworkDecodeError",
]
