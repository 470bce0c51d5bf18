"""APIRouter registration for the verse catalog service."""

from __future__ import annotations

from fastapi import APIRouter

from versecatalog.routes.categories import router as categories_router
from versecatalog.routes.progressions import router as progressions_router
from versecatalog.routes.verses import router as verses_router

api_router = APIRouter()
api_router.include_router(progressions_router, tags=["Progressions"])
api_router.include_router(verses_router, tags=["Verses", "References"])
api_router.include_router(categories_router, tags=["Categories"])

__all__ = ["api_router"]
