"""Fixed colour vocabulary for category tags.

Provides a simple constants container instead of an Enum, plus a
read-only mapping of colour code to style token.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


class ColorCode:
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    BLUE = "blue"
    TEAL = "teal"
    PINK = "pink"
    PINK_BLACK = "pink-black"
    RED_BLACK = "red-black"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    LIGHT_GREEN = "light-green"
    BROWN = "brown"


DEFAULT_STYLE = "bg-gray-500 text-white"

CATEGORY_STYLES: Mapping[str, str] = MappingProxyType({
    ColorCode.YELLOW: "bg-amber-400 text-black",
    ColorCode.PURPLE: "bg-violet-500 text-white",
    ColorCode.ORANGE: "bg-orange-500 text-white",
    ColorCode.BLUE: "bg-blue-500 text-white",
    ColorCode.TEAL: "bg-teal-500 text-white",
    ColorCode.PINK: "bg-pink-500 text-white",
    ColorCode.PINK_BLACK: "bg-pink-900 text-white",
    ColorCode.RED_BLACK: "bg-red-900 text-white",
    ColorCode.BLACK: "bg-gray-800 text-white",
    ColorCode.RED: "bg-red-500 text-white",
    ColorCode.GREEN: "bg-green-500 text-white",
    ColorCode.LIGHT_GREEN: "bg-green-300 text-black",
    ColorCode.BROWN: "bg-amber-800 text-white",
})


def style_for(color_code: str | None) -> str:
    """Return the style token for ``color_code``; unknown codes get the default."""
    return CATEGORY_STYLES.get(str(color_code or "").strip().lower(), DEFAULT_STYLE)


def is_known(color_code: str | None) -> bool:
    return str(color_code or "").strip().lower() in CATEGORY_STYLES


__all__ = ["ColorCode", "CATEGORY_STYLES", "DEFAULT_STYLE", "style_for", "is_known"]
