"""Display formatting for verse references ("John 3:16", "Genesis 1:1-3")."""

from __future__ import annotations

from typing import Optional

from versecatalog.logic.errors import CatalogValidationError


def format_reference(book: str, chapter: int, verse_start: int, verse_end: Optional[int] = None) -> str:
    if chapter < 1 or verse_start < 1:
        raise CatalogValidationError("chapter and verse must be positive", code="INVALID_REFERENCE")
    if verse_end is not None and verse_end < verse_start:
        raise CatalogValidationError("verse_end precedes verse_start", code="INVALID_REFERENCE")
    text = f"{book} {chapter}:{verse_start}"
    if verse_end is not None and verse_end != verse_start:
        text += f"-{verse_end}"
    return text


__all__ = ["format_reference"]
