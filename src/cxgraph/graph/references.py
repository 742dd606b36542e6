"""Construction errors for NetworkGraph.

This module provides the exception hierarchy raised while decoding and
linking a network, and the BrokenReference record that describes an id
which could not be resolved.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BrokenReference:
    """A reference to an id that is not registered in its table.

    Attributes:
        kind: Entity kind that was looked up ("node", "edge", ...).
        entity_id: The id that was referenced but doesn't exist.
        context: Linking pass that made the reference.
    """

    kind: str
    entity_id: int
    context: str

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.context}: {self.kind} {self.entity_id} (missing)"


class GraphBuildError(Exception):
    """Base class for every error that aborts graph construction."""


class UnresolvedReferenceError(GraphBuildError, LookupError):
    """A required id did not resolve against its entity table."""

    def __init__(self, kind: str, entity_id: int, context: str) -> None:
        self.reference = BrokenReference(kind=kind, entity_id=entity_id, context=context)
        super().__init__(
            f"Unresolved {kind} reference {entity_id} while {context}"
        )

    @property
    def kind(self) -> str:
        return self.reference.kind

    @property
    def entity_id(self) -> int:
        return self.reference.entity_id


class DuplicateIdError(GraphBuildError, ValueError):
    """An id was registered twice while duplicates are rejected."""

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"Duplicate {kind} id {entity_id}")


class NetworkDecodeError(GraphBuildError, ValueError):
    """The CX document does not have the expected structure."""


__all__ = [
    "BrokenReference",
    "GraphBuildError",
    "UnresolvedReferenceError",
    "DuplicateIdError",
    "NetworkDecodeError",
]
