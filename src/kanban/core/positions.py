"""Sparse fractional positions for ordered siblings (columns in a board, tasks in a column)."""

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Any, TypeVar

POSITION_GAP = 1000.0

T = TypeVar("T")


def append_position(existing_positions: Iterable[float]) -> float:
    """
    Position for a new sibling appended after all existing ones.

    Args:
        existing_positions: Positions of the current siblings

    Returns:
        ``max + POSITION_GAP``, or ``POSITION_GAP`` when there are no siblings
    """
    positions = list(existing_positions)
    if not positions:
        return POSITION_GAP
    return max(positions) + POSITION_GAP


def move(entity: Any, parent_attr: str, new_parent_id: int, new_position: float) -> Any:
    """
    Place an entity under a parent at a client-supplied position.

    The position is taken verbatim: no validation, collision detection or
    rebalancing. Duplicate positions leave the relative order of the tied
    siblings up to the store.
    """
    setattr(entity, parent_attr, new_parent_id)
    entity.position = float(new_position)
    entity.updated_at = datetime.now(UTC)
    return entity


def renumber(siblings: Sequence[T]) -> list[T]:
    """
    Reassign evenly spaced positions (1000, 2000, ...) keeping the current order.

    Ties are broken by id so the result is deterministic. This is an explicit
    maintenance pass for precision exhaustion and duplicate positions; ``move``
    never calls it.
    """
    ordered = sorted(siblings, key=lambda s: (s.position, s.id))
    now = datetime.now(UTC)
    for index, sibling in enumerate(ordered, start=1):
        sibling.position = index * POSITION_GAP
        sibling.updated_at = now
    return ordered
