"""Functional test fixtures.

Seeds an in-memory backend with a small catalog (two books, five verses,
one empty progression) and provides a failure-injecting variant so the
partial-failure paths can be driven deterministically. Coroutines are run
with ``asyncio.run`` so no async test plugin is needed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

import pytest

from versecatalog.logic import events
from versecatalog.logic.errors import BackendRejection
from versecatalog.logic.inmemory_backend import InMemoryBackend


def run(coro: Any) -> Any:
    return asyncio.run(coro)


class FlakyBackend(InMemoryBackend):
    """In-memory backend that rejects selected calls.

    ``fail_calls`` holds call names that always fail; ``fail_rank_updates``
    holds ``(step_id, rank)`` pairs whose rank update fails. Failed calls
    are still recorded in ``calls``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_calls: Set[str] = set()
        self.fail_rank_updates: Set[Tuple[int, int]] = set()

    def _maybe_fail(self, name: str, args: Tuple[Any, ...]) -> None:
        if name in self.fail_calls:
            self.calls.append((name, args))
            raise BackendRejection(f"{name} refused", status=500, errors=[f"{name} refused"])

    async def create_step(self, progression_id: int, verse_id: int, rank: int):
        self._maybe_fail("create_step", (progression_id, verse_id, rank))
        return await super().create_step(progression_id, verse_id, rank)

    async def update_step_rank(self, progression_id: int, step_id: int, rank: int):
        self._maybe_fail("update_step_rank", (progression_id, step_id, rank))
        if (step_id, rank) in self.fail_rank_updates:
            self.calls.append(("update_step_rank", (progression_id, step_id, rank)))
            raise BackendRejection("rank update refused", status=500, errors=["rank update refused"])
        return await super().update_step_rank(progression_id, step_id, rank)

    async def delete_step(self, progression_id: int, step_id: int) -> None:
        self._maybe_fail("delete_step", (progression_id, step_id))
        await super().delete_step(progression_id, step_id)

    async def add_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        self._maybe_fail("add_edge", (source_verse_id, target_verse_id))
        await super().add_edge(source_verse_id, target_verse_id)

    async def remove_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        self._maybe_fail("remove_edge", (source_verse_id, target_verse_id))
        await super().remove_edge(source_verse_id, target_verse_id)


@dataclass
class Catalog:
    backend: FlakyBackend
    progression_id: int
    verse_ids: List[int] = field(default_factory=list)
    categories: Dict[str, int] = field(default_factory=dict)

    def reset_calls(self) -> None:
        self.backend.calls.clear()


def seed_catalog(backend: FlakyBackend) -> Catalog:
    genesis = backend.add_book("Genesis", "Gen", "old_testament", 50)
    john = backend.add_book("John", "Jhn", "new_testament", 21)
    grace = backend.add_category("Grace", "yellow", "Unmerited favour")
    creation = backend.add_category("Creation", "green")
    verses = [
        backend.add_verse(genesis.id, 1, 1, category_ids=[creation.id]),
        backend.add_verse(genesis.id, 1, 26, 27, category_ids=[creation.id]),
        backend.add_verse(john.id, 1, 1, 3),
        backend.add_verse(john.id, 3, 16, category_ids=[grace.id]),
        backend.add_verse(john.id, 10, 10, notes="Abundant life"),
    ]
    progression = run(backend.create_progression("The Gospel Progression", "From creation to new life"))
    backend.calls.clear()
    return Catalog(
        backend=backend,
        progression_id=progression.id,
        verse_ids=[v.id for v in verses],
        categories={"grace": grace.id, "creation": creation.id},
    )


@pytest.fixture
def catalog() -> Catalog:
    events.EVENT_BUFFER.clear()
    return seed_catalog(FlakyBackend())
