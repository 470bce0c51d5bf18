"""Pure rank planning helpers for progression steps.

Computes contiguous 1-based ranks for an ordered list of steps without
touching any backend. The step sequence driver applies the resulting plan
one call at a time; these helpers are the single source of truth for which
ranks need to change.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

from versecatalog.models.catalog import Step

T = TypeVar("T")


def plan_rank_changes(steps: Sequence[Step]) -> List[Tuple[int, int]]:
    """Return ``(step_id, new_rank)`` for every step whose rank is off.

    ``steps`` is taken in its current list order; position ``i`` must carry
    rank ``i + 1``. Steps already at their position are omitted, so the plan
    is the minimal set of single-step updates reaching a dense ranking.
    """
    return [
        (step.id, position)
        for position, step in enumerate(steps, start=1)
        if step.step_order != position
    ]


def swapped(items: Sequence[T], i: int, j: int) -> List[T]:
    """Return a copy of ``items`` with positions ``i`` and ``j`` exchanged."""
    working = list(items)
    working[i], working[j] = working[j], working[i]
    return working


def is_dense(steps: Sequence[Step]) -> bool:
    """True when ranks follow list order exactly as 1..N."""
    return all(step.step_order == position for position, step in enumerate(steps, start=1))


def ranks(steps: Sequence[Step]) -> List[int]:
    return [step.step_order for step in steps]


def ordered_by_rank(steps: Sequence[Step]) -> List[Step]:
    """Sort by rank with id as tie-break, matching the backend's listing order."""
    return sorted(steps, key=lambda s: (s.step_order, s.id))


__all__ = ["plan_rank_changes", "swapped", "is_dense", "ranks", "ordered_by_rank"]
