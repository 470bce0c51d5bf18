"""Functional tests for catalog value helpers: references and colour codes."""

from __future__ import annotations

import pytest

from versecatalog.logic.errors import CatalogValidationError
from versecatalog.logic.verse_reference import format_reference
from versecatalog.models.catalog import Verse
from versecatalog.models.category_colors import CATEGORY_STYLES, DEFAULT_STYLE, ColorCode, is_known, style_for


@pytest.mark.parametrize(
    "args,expected",
    [
        (("John", 3, 16), "John 3:16"),
        (("Genesis", 1, 1, 3), "Genesis 1:1-3"),
        (("Psalms", 23, 4, 4), "Psalms 23:4"),
    ],
)
def test_format_reference(args, expected):
    assert format_reference(*args) == expected


@pytest.mark.parametrize("args", [("John", 0, 1), ("John", 3, 0), ("John", 3, 16, 10)])
def test_format_reference_rejects_invalid_numbers(args):
    with pytest.raises(CatalogValidationError):
        format_reference(*args)


def test_all_thirteen_colour_codes_have_styles():
    assert len(CATEGORY_STYLES) == 13
    assert style_for(ColorCode.PINK_BLACK) == "bg-pink-900 text-white"
    assert style_for(" Yellow ") == "bg-amber-400 text-black"


@pytest.mark.parametrize("code", ["magenta", "", None])
def test_unknown_colour_falls_back_to_default(code):
    assert style_for(code) == DEFAULT_STYLE
    assert not is_known(code)


def test_style_table_is_read_only():
    with pytest.raises(TypeError):
        CATEGORY_STYLES["magenta"] = "x"  # type: ignore[index]


def test_verse_payload_validates_from_wire_format():
    verse = Verse.model_validate(
        {
            "id": 7,
            "reference": "John 3:16",
            "chapter": 3,
            "verse_start": 16,
            "verse_end": None,
            "notes": None,
            "categories": [{"id": 1, "name": "Grace", "meaning": "", "color_code": "yellow"}],
            "referenced_verses": [{"id": 8, "reference": "Romans 5:8"}],
            "created_at": "2024-01-01T00:00:00Z",
        }
    )
    assert verse.referenced_verses[0].id == 8
    assert verse.referencing_verses == []
    assert verse.link().reference == "John 3:16"
