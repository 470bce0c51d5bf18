"""Progression step sequence kept in sync with the backend.

Holds the ordered steps of one progression and reconciles append, remove
and move with a backend that only offers create-with-rank, update-one-rank
and delete-one. Local state changes only after the matching backend call
has succeeded, and rank updates are issued one at a time so a failure
leaves a deterministic prefix applied.

Callers must serialise operations on a given sequence; nothing here queues
or coalesces concurrent requests.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple
import logging

from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.errors import (
    BackendRejection,
    CatalogValidationError,
    PartialRenumberError,
)
from versecatalog.logic.events import (
    STEP_APPENDED,
    STEP_REMOVED,
    STEPS_RENUMBERED,
    publish,
)
from versecatalog.logic.rank_plan import is_dense, ordered_by_rank, plan_rank_changes, swapped
from versecatalog.models.catalog import Step, Verse
from versecatalog.models.move_direction import MoveDirection

logger = logging.getLogger(__name__)


class StepSequence:
    def __init__(
        self,
        backend: ResourceBackend,
        progression_id: int,
        steps: Iterable[Step] = (),
    ) -> None:
        self._backend = backend
        self.progression_id = progression_id
        self._steps: List[Step] = ordered_by_rank(list(steps))

    @classmethod
    async def load(cls, backend: ResourceBackend, progression_id: int) -> "StepSequence":
        """Build a sequence from the backend's current record of the progression."""
        progression = await backend.fetch_progression(progression_id)
        return cls(backend, progression.id, progression.steps)

    # ---- read helpers -------------------------------------------------

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def ranks(self) -> List[int]:
        return [s.step_order for s in self._steps]

    def verse_ids(self) -> List[int]:
        return [s.verse.id for s in self._steps]

    @property
    def needs_renumbering(self) -> bool:
        """True after a partial failure left ranks out of line with positions."""
        return not is_dense(self._steps)

    def index_of(self, step_id: int) -> int:
        for index, step in enumerate(self._steps):
            if step.id == step_id:
                return index
        raise CatalogValidationError(
            f"step {step_id} is not part of progression {self.progression_id}",
            code="STEP_NOT_FOUND",
        )

    def available_verses(self, verses: Sequence[Verse]) -> List[Verse]:
        """Filter ``verses`` down to those not yet represented by a step."""
        taken = set(self.verse_ids())
        return [v for v in verses if v.id not in taken]

    def snapshot(self) -> List[Tuple[int, int, int]]:
        """``(step_id, verse_id, rank)`` triples in display order."""
        return [(s.id, s.verse.id, s.step_order) for s in self._steps]

    # ---- operations ---------------------------------------------------

    async def append(self, verse_id: int) -> Step:
        """Add ``verse_id`` as the last step with rank N+1."""
        if verse_id in self.verse_ids():
            raise CatalogValidationError(
                f"verse {verse_id} is already in progression {self.progression_id}",
                code="DUPLICATE_STEP",
            )
        rank = len(self._steps) + 1
        if self.needs_renumbering:
            logger.warning(
                "step_sequence.append over unrenumbered ranks progression_id=%s ranks=%s new_rank=%s",
                self.progression_id,
                self.ranks(),
                rank,
            )
        step = await self._backend.create_step(self.progression_id, verse_id, rank)
        self._steps.append(step)
        logger.info(
            "step_sequence.append progression_id=%s verse_id=%s step_id=%s rank=%s",
            self.progression_id,
            verse_id,
            step.id,
            step.step_order,
        )
        publish(STEP_APPENDED, {"progression_id": self.progression_id, "step_id": step.id, "rank": rank})
        return step

    async def remove(self, step_id: int) -> List[Step]:
        """Delete a step, then close the gap in the ranks behind it."""
        index = self.index_of(step_id)
        await self._backend.delete_step(self.progression_id, step_id)
        del self._steps[index]
        logger.info(
            "step_sequence.remove progression_id=%s step_id=%s remaining=%s",
            self.progression_id,
            step_id,
            len(self._steps),
        )
        publish(STEP_REMOVED, {"progression_id": self.progression_id, "step_id": step_id})
        await self._apply_ranks(list(self._steps), already_mutated=True)
        return self.steps

    async def move(self, index: int, direction: str) -> List[Step]:
        """Swap the step at ``index`` with its neighbour in ``direction``.

        Moving the first step up or the last step down is a no-op that makes
        no backend call. Indexes outside the list are rejected.
        """
        if direction not in MoveDirection.ALL:
            raise CatalogValidationError(
                f"direction must be one of {sorted(MoveDirection.ALL)}",
                code="INVALID_DIRECTION",
            )
        if not 0 <= index < len(self._steps):
            raise CatalogValidationError(
                f"index {index} is outside 0..{len(self._steps) - 1}",
                code="MOVE_OUT_OF_RANGE",
            )
        target = index - 1 if direction == MoveDirection.UP else index + 1
        if not 0 <= target < len(self._steps):
            logger.info(
                "step_sequence.move boundary no-op progression_id=%s index=%s direction=%s",
                self.progression_id,
                index,
                direction,
            )
            return self.steps
        await self._apply_ranks(swapped(self._steps, index, target), already_mutated=False)
        return self.steps

    async def renumber(self) -> List[Step]:
        """Re-run the rank walk over the current order, e.g. after a partial failure."""
        await self._apply_ranks(list(self._steps), already_mutated=False)
        return self.steps

    async def reorder(self, step_ids: Sequence[int]) -> List[Step]:
        """Walk the ranks into the order given by ``step_ids``.

        ``step_ids`` must name every current step exactly once. Used to finish
        a walk that a partial failure interrupted, since ranks alone cannot
        tell two steps left on the same rank apart.
        """
        ids = list(step_ids)
        if sorted(ids) != sorted(s.id for s in self._steps):
            raise CatalogValidationError(
                f"order must list each step of progression {self.progression_id} exactly once",
                code="INVALID_ORDER",
            )
        by_id = {s.id: s for s in self._steps}
        await self._apply_ranks([by_id[i] for i in ids], already_mutated=False)
        return self.steps

    async def _apply_ranks(self, working: List[Step], *, already_mutated: bool) -> None:
        """Issue rank updates for ``working`` one by one, applying each on success.

        ``working`` becomes the local order as soon as the first update is
        confirmed (or immediately when no update is needed). A failing call
        stops the walk; if anything was already confirmed in this logical
        operation the failure is reported as ``PartialRenumberError``.
        """
        plan = plan_rank_changes(working)
        if not plan:
            self._steps = working
            return
        applied: List[Tuple[int, int]] = []
        for step_id, rank in plan:
            try:
                await self._backend.update_step_rank(self.progression_id, step_id, rank)
            except BackendRejection as exc:
                logger.error(
                    "step_sequence.renumber failed progression_id=%s step_id=%s rank=%s applied=%s",
                    self.progression_id,
                    step_id,
                    rank,
                    applied,
                    exc_info=True,
                )
                if applied or already_mutated:
                    raise PartialRenumberError(
                        f"renumbering stopped at step {step_id}; {len(applied)} of {len(plan)} ranks applied",
                        applied=applied,
                        cause=exc,
                        order=[s.id for s in working],
                    ) from exc
                raise
            if not applied:
                self._steps = working
            self._set_rank(step_id, rank)
            applied.append((step_id, rank))
        logger.info(
            "step_sequence.renumber progression_id=%s applied=%s ranks=%s",
            self.progression_id,
            applied,
            self.ranks(),
        )
        publish(STEPS_RENUMBERED, {"progression_id": self.progression_id, "applied": applied})

    def _set_rank(self, step_id: int, rank: int) -> None:
        index = self.index_of(step_id)
        self._steps[index] = self._steps[index].model_copy(update={"step_order": rank})


__all__ = ["StepSequence"]
