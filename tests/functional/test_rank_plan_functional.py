"""Functional tests for the pure rank planner (no backend involved)."""

from __future__ import annotations

from versecatalog.logic.rank_plan import is_dense, ordered_by_rank, plan_rank_changes, swapped
from versecatalog.models.catalog import Step, VerseLink


def _steps(*pairs):
    return [Step(id=sid, step_order=rank, verse=VerseLink(id=100 + sid)) for sid, rank in pairs]


def test_dense_list_needs_no_changes():
    steps = _steps((1, 1), (2, 2), (3, 3))
    assert plan_rank_changes(steps) == []
    assert is_dense(steps)


def test_gap_after_removal_touches_only_tail():
    steps = _steps((1, 1), (3, 3), (4, 4))
    assert plan_rank_changes(steps) == [(3, 2), (4, 3)]
    assert not is_dense(steps)


def test_swap_plans_both_swapped_steps():
    steps = swapped(_steps((1, 1), (2, 2), (3, 3), (4, 4)), 1, 2)
    assert [s.id for s in steps] == [1, 3, 2, 4]
    assert plan_rank_changes(steps) == [(3, 2), (2, 3)]


def test_swap_over_partial_state_covers_every_misplaced_step():
    # A previous walk left the last step at rank 4 instead of 3
    steps = swapped(_steps((1, 1), (3, 2), (4, 4)), 0, 1)
    assert plan_rank_changes(steps) == [(3, 1), (1, 2), (4, 3)]


def test_swapped_returns_copy():
    items = ["a", "b", "c"]
    assert swapped(items, 0, 2) == ["c", "b", "a"]
    assert items == ["a", "b", "c"]


def test_ordered_by_rank_breaks_ties_by_id():
    steps = _steps((5, 2), (2, 1), (3, 2))
    assert [s.id for s in ordered_by_rank(steps)] == [2, 3, 5]
