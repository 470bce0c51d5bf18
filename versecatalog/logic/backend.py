"""Resource backend collaborator contract.

The step sequence and reference graph components depend only on this
protocol. Each call is one request/response round-trip; implementations
raise ``BackendRejection`` (or ``StaleReferenceError`` for not-found) on
failure and must not retry.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from versecatalog.models.catalog import Progression, Step, Verse


@runtime_checkable
class ResourceBackend(Protocol):
    # Step primitives
    async def create_step(self, progression_id: int, verse_id: int, rank: int) -> Step: ...

    async def update_step_rank(self, progression_id: int, step_id: int, rank: int) -> Optional[Step]: ...

    async def delete_step(self, progression_id: int, step_id: int) -> None: ...

    # Edge primitives
    async def add_edge(self, source_verse_id: int, target_verse_id: int) -> None: ...

    async def remove_edge(self, source_verse_id: int, target_verse_id: int) -> None: ...

    async def fetch_verse(self, verse_id: int) -> Verse: ...

    # Progression lifecycle and listing
    async def fetch_progression(self, progression_id: int) -> Progression: ...

    async def create_progression(self, name: str, description: Optional[str] = None) -> Progression: ...

    async def update_progression(
        self,
        progression_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Progression: ...

    async def delete_progression(self, progression_id: int) -> None: ...

    async def list_verses(
        self,
        bible_book_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[Verse]: ...


__all__ = ["ResourceBackend"]
