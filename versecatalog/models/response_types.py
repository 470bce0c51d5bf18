"""Pydantic models for request and response bodies of the HTTP surface."""

from __future__ import annotations

from typing import List
from pydantic import BaseModel

from versecatalog.models.catalog import Step


class StepCreate(BaseModel):
    verse_id: int


class StepMove(BaseModel):
    direction: str


class StepOrder(BaseModel):
    """Full step order to walk the ranks into; every step id exactly once."""
    step_ids: List[int]


class ReferenceCreate(BaseModel):
    referenced_verse_id: int


class StepsView(BaseModel):
    """Ordered steps of one progression after an operation.

    ``needs_renumbering`` is true when ranks no longer run 1..N in display
    order, which only happens after a partially failed renumbering.
    """
    progression_id: int
    steps: List[Step]
    needs_renumbering: bool = False


class AppendResult(StepsView):
    step: Step


class CategoryStyle(BaseModel):
    color_code: str
    style: str
    known: bool


__all__ = [
    "StepCreate",
    "StepMove",
    "StepOrder",
    "ReferenceCreate",
    "StepsView",
    "AppendResult",
    "CategoryStyle",
]
