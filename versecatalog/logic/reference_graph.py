"""Cross-reference editing for a single source verse.

Adds and removes directed "references" edges through single-edge backend
calls. After every confirmed change the source verse is fetched again so
its outgoing list and any backend-derived fields are authoritative; the
edge set is never patched locally.

The incoming ("referenced by") list of a verse is read-only here. An edge
added from X to Y shows up in Y's incoming list only once Y itself is
fetched.
"""

from __future__ import annotations

from typing import List
import logging

from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.errors import CatalogValidationError
from versecatalog.logic.events import REFERENCE_ADDED, REFERENCE_REMOVED, publish
from versecatalog.models.catalog import Verse

logger = logging.getLogger(__name__)


class ReferenceGraphEditor:
    def __init__(self, backend: ResourceBackend, verse: Verse) -> None:
        self._backend = backend
        self._verse = verse

    @classmethod
    async def load(cls, backend: ResourceBackend, verse_id: int) -> "ReferenceGraphEditor":
        return cls(backend, await backend.fetch_verse(verse_id))

    @property
    def verse(self) -> Verse:
        return self._verse

    @property
    def source_id(self) -> int:
        return self._verse.id

    def outgoing_ids(self) -> List[int]:
        return [link.id for link in self._verse.referenced_verses]

    def incoming_ids(self) -> List[int]:
        return [link.id for link in self._verse.referencing_verses]

    async def refresh(self) -> Verse:
        """Replace the local record with the backend's current one."""
        self._verse = await self._backend.fetch_verse(self.source_id)
        return self._verse

    async def add_reference(self, target_id: int) -> Verse:
        if target_id == self.source_id:
            raise CatalogValidationError("a verse cannot reference itself", code="SELF_REFERENCE")
        if target_id in self.outgoing_ids():
            raise CatalogValidationError(
                f"verse {self.source_id} already references verse {target_id}",
                code="DUPLICATE_REFERENCE",
            )
        await self._backend.add_edge(self.source_id, target_id)
        logger.info("reference_graph.add source=%s target=%s", self.source_id, target_id)
        publish(REFERENCE_ADDED, {"source": self.source_id, "target": target_id})
        return await self.refresh()

    async def remove_reference(self, target_id: int) -> Verse:
        if target_id not in self.outgoing_ids():
            raise CatalogValidationError(
                f"verse {self.source_id} does not reference verse {target_id}",
                code="REFERENCE_NOT_FOUND",
            )
        await self._backend.remove_edge(self.source_id, target_id)
        logger.info("reference_graph.remove source=%s target=%s", self.source_id, target_id)
        publish(REFERENCE_REMOVED, {"source": self.source_id, "target": target_id})
        return await self.refresh()


__all__ = ["ReferenceGraphEditor"]
