"""Pydantic models for catalog resources as exchanged with the backend.

Field names follow the REST wire format so payloads validate directly
with ``model_validate``.
"""

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class BibleBook(BaseModel):
    id: int
    name: str
    abbreviation: str = ""
    testament: str = "old_testament"
    book_order: int = 0
    chapter_count: int = 0


class Category(BaseModel):
    id: int
    name: str
    meaning: Optional[str] = None
    color_code: str = ""


class VerseLink(BaseModel):
    """Lightweight pointer to a verse: id plus display reference."""

    id: int
    reference: str = ""


class Verse(BaseModel):
    id: int
    reference: str = ""
    bible_book: Optional[BibleBook] = None
    chapter: int = 1
    verse_start: int = 1
    verse_end: Optional[int] = None
    notes: Optional[str] = None
    categories: List[Category] = Field(default_factory=list)
    # Outgoing edges (this verse references them)
    referenced_verses: List[VerseLink] = Field(default_factory=list)
    # Incoming edges; derived by the backend, read-only here
    referencing_verses: List[VerseLink] = Field(default_factory=list)

    def link(self) -> VerseLink:
        return VerseLink(id=self.id, reference=self.reference)


class Step(BaseModel):
    id: int
    step_order: int = Field(gt=0)
    verse: VerseLink


class Progression(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    steps: List[Step] = Field(default_factory=list)


class ProgressionDraft(BaseModel):
    name: str
    description: Optional[str] = None


class ProgressionPatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


__all__ = [
    "BibleBook",
    "Category",
    "VerseLink",
    "Verse",
    "Step",
    "Progression",
    "ProgressionDraft",
    "ProgressionPatch",
]
