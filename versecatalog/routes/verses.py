"""Verse cross-reference routes.

Adding or removing a reference always answers with the source verse as
re-fetched from the backend. The target's "referenced by" list is only
current once the target itself is requested.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.operation_guard import OperationGuard
from versecatalog.logic.reference_graph import ReferenceGraphEditor
from versecatalog.models.catalog import Verse
from versecatalog.models.response_types import ReferenceCreate
from versecatalog.routes.deps import get_backend, get_guard

router = APIRouter(prefix="/verses")
logger = logging.getLogger(__name__)

_KIND = "verse"


@router.get("/{verse_id}", response_model=Verse)
async def get_verse(verse_id: int, backend: ResourceBackend = Depends(get_backend)) -> Verse:
    return await backend.fetch_verse(verse_id)


@router.post("/{verse_id}/references", response_model=Verse, status_code=201)
async def add_reference(
    verse_id: int,
    payload: ReferenceCreate,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> Verse:
    async with guard.claim(_KIND, verse_id):
        editor = await ReferenceGraphEditor.load(backend, verse_id)
        return await editor.add_reference(payload.referenced_verse_id)


@router.delete("/{verse_id}/references/{target_id}", response_model=Verse)
async def remove_reference(
    verse_id: int,
    target_id: int,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> Verse:
    async with guard.claim(_KIND, verse_id):
        editor = await ReferenceGraphEditor.load(backend, verse_id)
        return await editor.remove_reference(target_id)


__all__ = ["router"]
