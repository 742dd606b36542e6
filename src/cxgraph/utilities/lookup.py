"""Lookup - Map-by-id and filter helpers used by the graph builder."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, TypeVar

from cxgraph.graph.references import UnresolvedReferenceError

T = TypeVar("T")


def resolve(table: Mapping[int, T], entity_id: int, kind: str, context: str) -> T:
    """Look up a required id.

    Args:
        table: Entity table to search.
        entity_id: Id to resolve.
        kind: Entity kind, used in the error.
        context: Linking pass doing the lookup, used in the error.

    Returns:
        The registered entity.

    Raises:
        UnresolvedReferenceError: If the id is not in the table.
    """
    try:
        return table[entity_id]
    except KeyError:
        raise UnresolvedReferenceError(kind, entity_id, context) from None


def resolve_all(
    table: Mapping[int, T], entity_ids: Iterable[int], kind: str, context: str
) -> list[T]:
    """Resolve every id in order; fails on the first missing one."""
    return [resolve(table, entity_id, kind, context) for entity_id in entity_ids]


def resolve_optional(table: Mapping[int, T], entity_id: int | None) -> T | None:
    """Look up an id whose absence is tolerated."""
    if entity_id is None:
        return None
    return table.get(entity_id)


def select(predicate: Callable[[T], bool], items: Iterable[T]) -> list[T]:
    """Return the items matching predicate, preserving order."""
    return [item for item in items if predicate(item)]
