"""Process-local resource backend (dev/test only).

Holds books, categories, verses, cross-reference edges, progressions and
steps in plain dicts and answers the same calls as the REST backend. It
enforces the remote authority's own rules (positive ranks, no self or
duplicate edge, one step per verse per progression) and derives each
verse's incoming references when the verse is fetched.

Every backend call is appended to ``calls`` as ``(name, args)`` so tests
can assert exactly which round-trips an operation made.
"""

from __future__ import annotations

from itertools import count
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import logging

from versecatalog.logic.errors import BackendRejection, StaleReferenceError
from versecatalog.logic.rank_plan import ordered_by_rank
from versecatalog.logic.verse_reference import format_reference
from versecatalog.models.catalog import (
    BibleBook,
    Category,
    Progression,
    Step,
    Verse,
    VerseLink,
)

logger = logging.getLogger(__name__)


def _unprocessable(detail: str) -> BackendRejection:
    return BackendRejection(detail, status=422, errors=[detail])


class InMemoryBackend:
    def __init__(self) -> None:
        self._ids = count(1)
        self.books: Dict[int, BibleBook] = {}
        self.categories: Dict[int, Category] = {}
        # verse_id -> {book_id, chapter, verse_start, verse_end, notes, category_ids}
        self.verses: Dict[int, Dict[str, Any]] = {}
        # (source_verse_id, target_verse_id)
        self.edges: Set[Tuple[int, int]] = set()
        # progression_id -> {name, description}
        self.progressions: Dict[int, Dict[str, Any]] = {}
        # step_id -> {progression_id, verse_id, step_order}
        self.steps: Dict[int, Dict[str, int]] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    # ---- seeding ------------------------------------------------------

    def add_book(self, name: str, abbreviation: str = "", testament: str = "old_testament", chapter_count: int = 1) -> BibleBook:
        book_id = next(self._ids)
        book = BibleBook(
            id=book_id,
            name=name,
            abbreviation=abbreviation or name[:3],
            testament=testament,
            book_order=len(self.books) + 1,
            chapter_count=chapter_count,
        )
        self.books[book_id] = book
        return book

    def add_category(self, name: str, color_code: str = "", meaning: Optional[str] = None) -> Category:
        category = Category(id=next(self._ids), name=name, color_code=color_code, meaning=meaning)
        self.categories[category.id] = category
        return category

    def add_verse(
        self,
        book_id: int,
        chapter: int,
        verse_start: int,
        verse_end: Optional[int] = None,
        notes: Optional[str] = None,
        category_ids: Iterable[int] = (),
    ) -> Verse:
        if book_id not in self.books:
            raise _unprocessable(f"bible book {book_id} does not exist")
        # Validates the numbers before anything is stored
        format_reference(self.books[book_id].name, chapter, verse_start, verse_end)
        verse_id = next(self._ids)
        self.verses[verse_id] = {
            "book_id": book_id,
            "chapter": chapter,
            "verse_start": verse_start,
            "verse_end": verse_end,
            "notes": notes,
            "category_ids": [c for c in category_ids if c in self.categories],
        }
        return self._verse(verse_id)

    def delete_verse(self, verse_id: int) -> None:
        """Remove a verse with its edges and steps, as a concurrent actor would."""
        logger.info("inmemory.delete_verse verse_id=%s", verse_id)
        self.verses.pop(verse_id, None)
        self.edges = {(s, t) for (s, t) in self.edges if verse_id not in (s, t)}
        for step_id in [sid for sid, row in self.steps.items() if row["verse_id"] == verse_id]:
            del self.steps[step_id]

    # ---- helpers ------------------------------------------------------

    def _reference(self, verse_id: int) -> str:
        row = self.verses[verse_id]
        return format_reference(
            self.books[row["book_id"]].name,
            row["chapter"],
            row["verse_start"],
            row["verse_end"],
        )

    def _link(self, verse_id: int) -> VerseLink:
        return VerseLink(id=verse_id, reference=self._reference(verse_id))

    def _verse(self, verse_id: int) -> Verse:
        row = self.verses[verse_id]
        return Verse(
            id=verse_id,
            reference=self._reference(verse_id),
            bible_book=self.books[row["book_id"]],
            chapter=row["chapter"],
            verse_start=row["verse_start"],
            verse_end=row["verse_end"],
            notes=row["notes"],
            categories=[self.categories[c] for c in row["category_ids"] if c in self.categories],
            referenced_verses=[self._link(t) for (s, t) in sorted(self.edges) if s == verse_id],
            referencing_verses=[self._link(s) for (s, t) in sorted(self.edges) if t == verse_id],
        )

    def _step(self, step_id: int) -> Step:
        row = self.steps[step_id]
        return Step(id=step_id, step_order=row["step_order"], verse=self._link(row["verse_id"]))

    def _require_verse(self, verse_id: int) -> None:
        if verse_id not in self.verses:
            raise StaleReferenceError(f"verse {verse_id} not found", status=404)

    def _require_progression(self, progression_id: int) -> None:
        if progression_id not in self.progressions:
            raise StaleReferenceError(f"progression {progression_id} not found", status=404)

    def _require_step(self, progression_id: int, step_id: int) -> None:
        self._require_progression(progression_id)
        row = self.steps.get(step_id)
        if row is None or row["progression_id"] != progression_id:
            raise StaleReferenceError(f"step {step_id} not found", status=404)

    # ---- step primitives ----------------------------------------------

    async def create_step(self, progression_id: int, verse_id: int, rank: int) -> Step:
        self.calls.append(("create_step", (progression_id, verse_id, rank)))
        self._require_progression(progression_id)
        self._require_verse(verse_id)
        if rank < 1:
            raise _unprocessable("step_order must be greater than 0")
        if any(
            row["progression_id"] == progression_id and row["verse_id"] == verse_id
            for row in self.steps.values()
        ):
            raise _unprocessable("verse has already been taken")
        step_id = next(self._ids)
        self.steps[step_id] = {"progression_id": progression_id, "verse_id": verse_id, "step_order": rank}
        return self._step(step_id)

    async def update_step_rank(self, progression_id: int, step_id: int, rank: int) -> Step:
        self.calls.append(("update_step_rank", (progression_id, step_id, rank)))
        self._require_step(progression_id, step_id)
        if rank < 1:
            raise _unprocessable("step_order must be greater than 0")
        self.steps[step_id]["step_order"] = rank
        return self._step(step_id)

    async def delete_step(self, progression_id: int, step_id: int) -> None:
        self.calls.append(("delete_step", (progression_id, step_id)))
        self._require_step(progression_id, step_id)
        del self.steps[step_id]

    # ---- edge primitives ----------------------------------------------

    async def add_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        self.calls.append(("add_edge", (source_verse_id, target_verse_id)))
        self._require_verse(source_verse_id)
        self._require_verse(target_verse_id)
        if source_verse_id == target_verse_id:
            raise _unprocessable("a verse cannot reference itself")
        if (source_verse_id, target_verse_id) in self.edges:
            raise _unprocessable("reference already exists")
        self.edges.add((source_verse_id, target_verse_id))

    async def remove_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        self.calls.append(("remove_edge", (source_verse_id, target_verse_id)))
        self._require_verse(source_verse_id)
        if (source_verse_id, target_verse_id) not in self.edges:
            raise StaleReferenceError("reference not found", status=404)
        self.edges.discard((source_verse_id, target_verse_id))

    async def fetch_verse(self, verse_id: int) -> Verse:
        self.calls.append(("fetch_verse", (verse_id,)))
        self._require_verse(verse_id)
        return self._verse(verse_id)

    # ---- progression lifecycle ----------------------------------------

    async def fetch_progression(self, progression_id: int) -> Progression:
        self.calls.append(("fetch_progression", (progression_id,)))
        self._require_progression(progression_id)
        row = self.progressions[progression_id]
        steps = [self._step(sid) for sid, s in self.steps.items() if s["progression_id"] == progression_id]
        return Progression(
            id=progression_id,
            name=row["name"],
            description=row["description"],
            steps=ordered_by_rank(steps),
        )

    async def create_progression(self, name: str, description: Optional[str] = None) -> Progression:
        self.calls.append(("create_progression", (name, description)))
        if not str(name or "").strip():
            raise _unprocessable("name can't be blank")
        progression_id = next(self._ids)
        self.progressions[progression_id] = {"name": name, "description": description}
        return await self.fetch_progression(progression_id)

    async def update_progression(
        self,
        progression_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Progression:
        self.calls.append(("update_progression", (progression_id, name, description)))
        self._require_progression(progression_id)
        row = self.progressions[progression_id]
        if name is not None:
            if not name.strip():
                raise _unprocessable("name can't be blank")
            row["name"] = name
        if description is not None:
            row["description"] = description or None
        return await self.fetch_progression(progression_id)

    async def delete_progression(self, progression_id: int) -> None:
        self.calls.append(("delete_progression", (progression_id,)))
        self._require_progression(progression_id)
        del self.progressions[progression_id]
        for step_id in [sid for sid, row in self.steps.items() if row["progression_id"] == progression_id]:
            del self.steps[step_id]

    async def list_verses(
        self,
        bible_book_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[Verse]:
        self.calls.append(("list_verses", (bible_book_id, category_id)))
        verses = []
        for verse_id, row in self.verses.items():
            if bible_book_id is not None and row["book_id"] != bible_book_id:
                continue
            if category_id is not None and category_id not in row["category_ids"]:
                continue
            verses.append(self._verse(verse_id))
        return verses

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


__all__ = ["InMemoryBackend"]
