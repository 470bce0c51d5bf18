"""Helpers shared by the step modules; defines no steps itself."""

from __future__ import annotations

import re
from typing import Any, List

_REFERENCE = re.compile(r"^(?P<book>.+?) (?P<chapter>\d+):(?P<start>\d+)(?:-(?P<end>\d+))?$")


def split_list(text: str) -> List[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def seed_verse(context: Any, reference: str) -> int:
    """Create the verse named by ``reference`` (e.g. "John 1:1-3"), adding its book on first use."""
    match = _REFERENCE.match(reference.strip())
    assert match, f"Unparseable verse reference: {reference!r}"
    name = match.group("book")
    if name not in context.books:
        context.books[name] = context.backend.add_book(name).id
    end = match.group("end")
    verse = context.backend.add_verse(
        context.books[name],
        int(match.group("chapter")),
        int(match.group("start")),
        int(end) if end else None,
    )
    context.verses[reference.strip()] = verse.id
    return verse.id
