"""Category colour lookup."""

from __future__ import annotations

from fastapi import APIRouter

from versecatalog.models.category_colors import is_known, style_for
from versecatalog.models.response_types import CategoryStyle

router = APIRouter(prefix="/categories")


@router.get("/colors/{color_code}", response_model=CategoryStyle)
def category_style(color_code: str) -> CategoryStyle:
    return CategoryStyle(color_code=color_code, style=style_for(color_code), known=is_known(color_code))


__all__ = ["router"]
