"""Progression and step routes.

Each step mutation fetches the progression, builds a ``StepSequence`` from
the backend's record, performs exactly one operation and returns the
resulting order. A second mutation on the same progression while one is
in flight is rejected with 409.
"""

from __future__ import annotations

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Response

from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.errors import CatalogValidationError
from versecatalog.logic.operation_guard import OperationGuard
from versecatalog.logic.step_sequence import StepSequence
from versecatalog.models.catalog import Progression, ProgressionDraft, ProgressionPatch, Verse
from versecatalog.models.response_types import AppendResult, StepCreate, StepMove, StepOrder, StepsView
from versecatalog.routes.deps import get_backend, get_guard

router = APIRouter(prefix="/progressions")
logger = logging.getLogger(__name__)

_KIND = "progression"


def _view(seq: StepSequence) -> StepsView:
    return StepsView(
        progression_id=seq.progression_id,
        steps=seq.steps,
        needs_renumbering=seq.needs_renumbering,
    )


def _require_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise CatalogValidationError("name is required", code="NAME_REQUIRED")
    return name.strip()


@router.get("/{progression_id}", response_model=Progression)
async def get_progression(progression_id: int, backend: ResourceBackend = Depends(get_backend)) -> Progression:
    return await backend.fetch_progression(progression_id)


@router.post("", response_model=Progression, status_code=201)
async def create_progression(
    payload: ProgressionDraft,
    backend: ResourceBackend = Depends(get_backend),
) -> Progression:
    """Create an empty progression; steps are attached afterwards."""
    name = _require_name(payload.name)
    progression = await backend.create_progression(name, payload.description or None)
    logger.info("progressions.create id=%s name=%s", progression.id, name)
    return progression


@router.patch("/{progression_id}", response_model=Progression)
async def update_progression(
    progression_id: int,
    payload: ProgressionPatch,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> Progression:
    name = _require_name(payload.name) if payload.name is not None else None
    async with guard.claim(_KIND, progression_id):
        return await backend.update_progression(progression_id, name, payload.description)


@router.delete("/{progression_id}", status_code=204)
async def delete_progression(
    progression_id: int,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> Response:
    """Delete a progression together with its steps."""
    async with guard.claim(_KIND, progression_id):
        await backend.delete_progression(progression_id)
    logger.info("progressions.delete id=%s", progression_id)
    return Response(status_code=204)


@router.post("/{progression_id}/steps", response_model=AppendResult, status_code=201)
async def append_step(
    progression_id: int,
    payload: StepCreate,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> AppendResult:
    async with guard.claim(_KIND, progression_id):
        seq = await StepSequence.load(backend, progression_id)
        step = await seq.append(payload.verse_id)
    return AppendResult(step=step, **_view(seq).model_dump())


@router.delete("/{progression_id}/steps/{step_id}", response_model=StepsView)
async def remove_step(
    progression_id: int,
    step_id: int,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> StepsView:
    async with guard.claim(_KIND, progression_id):
        seq = await StepSequence.load(backend, progression_id)
        await seq.remove(step_id)
    return _view(seq)


@router.post("/{progression_id}/steps/renumber", response_model=StepsView)
async def renumber_steps(
    progression_id: int,
    payload: Optional[StepOrder] = None,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> StepsView:
    """Finish a rank walk that an earlier partial failure interrupted.

    Without a body the stored order is renumbered as loaded; steps left on
    the same rank then fall back to id order. Pass the ``order`` from the
    409 problem body as ``step_ids`` to complete an interrupted move.
    """
    async with guard.claim(_KIND, progression_id):
        seq = await StepSequence.load(backend, progression_id)
        if payload is not None:
            await seq.reorder(payload.step_ids)
        else:
            await seq.renumber()
    return _view(seq)


@router.post("/{progression_id}/steps/{step_id}/move", response_model=StepsView)
async def move_step(
    progression_id: int,
    step_id: int,
    payload: StepMove,
    backend: ResourceBackend = Depends(get_backend),
    guard: OperationGuard = Depends(get_guard),
) -> StepsView:
    async with guard.claim(_KIND, progression_id):
        seq = await StepSequence.load(backend, progression_id)
        await seq.move(seq.index_of(step_id), payload.direction)
    return _view(seq)


@router.get("/{progression_id}/available-verses", response_model=List[Verse])
async def available_verses(
    progression_id: int,
    bible_book_id: Optional[int] = None,
    category_id: Optional[int] = None,
    backend: ResourceBackend = Depends(get_backend),
) -> List[Verse]:
    """Verses that can still be appended to the progression."""
    seq = await StepSequence.load(backend, progression_id)
    return seq.available_verses(await backend.list_verses(bible_book_id, category_id))


__all__ = ["router"]
