"""In-flight registry that serialises mutations per progression or verse.

The step sequence and reference graph components assume their caller never
overlaps two operations on the same record. The HTTP host honours that by
claiming a key for the duration of a mutation and rejecting any second
claim outright; requests are never queued.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Set, Tuple
import logging

from versecatalog.logic.errors import OperationInProgressError

logger = logging.getLogger(__name__)

Key = Tuple[str, int]


class OperationGuard:
    def __init__(self) -> None:
        self._busy: Set[Key] = set()

    def is_busy(self, kind: str, record_id: int) -> bool:
        return (kind, record_id) in self._busy

    @asynccontextmanager
    async def claim(self, kind: str, record_id: int) -> AsyncIterator[None]:
        key = (kind, record_id)
        if key in self._busy:
            logger.info("operation_guard.rejected kind=%s id=%s", kind, record_id)
            raise OperationInProgressError(f"another change to {kind} {record_id} is still in progress")
        self._busy.add(key)
        try:
            yield
        finally:
            self._busy.discard(key)


__all__ = ["OperationGuard"]
