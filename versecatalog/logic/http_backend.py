"""REST/JSON resource backend over ``httpx.AsyncClient``.

Speaks the reference deployment's routes under ``{base_url}{api_prefix}``:

- ``POST   /progressions/{id}/steps``            ``{"step": {"verse_id", "step_order"}}``
- ``PATCH  /progressions/{id}/steps/{step_id}``  ``{"step": {"step_order"}}``
- ``DELETE /progressions/{id}/steps/{step_id}``
- ``POST   /verses/{id}/references``             ``{"referenced_verse_id"}``
- ``DELETE /verses/{id}/references/{target_id}``
- ``GET    /verses/{id}`` and ``GET /progressions/{id}``

Non-2xx responses raise ``BackendRejection`` with the server's ``errors``
list preserved; 404 raises ``StaleReferenceError``. Transport failures
raise ``BackendRejection`` with ``status=None``. A 2xx body that is not
JSON or does not fit the expected model raises ``BackendRejection`` with
that 2xx status. No call is retried.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type
import logging

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from versecatalog.config import BackendConfig
from versecatalog.logic.errors import BackendRejection, StaleReferenceError
from versecatalog.models.catalog import Progression, Step, Verse

logger = logging.getLogger(__name__)


def _error_list(response: httpx.Response) -> List[Any]:
    try:
        body = response.json()
    except ValueError:
        return [response.text] if response.text else []
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            return errors
        if isinstance(errors, dict):
            return [f"{k} {m}" for k, msgs in errors.items() for m in (msgs if isinstance(msgs, list) else [msgs])]
        if body.get("error"):
            return [body["error"]]
    return []


class HttpResourceBackend:
    def __init__(
        self,
        config: Optional[BackendConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or BackendConfig()
        self._prefix = "/" + self._config.api_prefix.strip("/") if self._config.api_prefix.strip("/") else ""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        model: Optional[Type[BaseModel]] = None,
        many: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Send one request and return its body, validated into ``model`` when given.

        A 2xx body that is not JSON or does not fit ``model`` raises
        ``BackendRejection`` carrying the response status.
        """
        url = f"{self._prefix}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("backend.transport_error method=%s url=%s", method, url, exc_info=True)
            raise BackendRejection(f"{method} {url} failed: {exc}", status=None) from exc
        if response.status_code == 404:
            raise StaleReferenceError(f"{method} {url} not found", status=404, errors=_error_list(response))
        if response.is_error:
            errors = _error_list(response)
            logger.error("backend.rejected method=%s url=%s status=%s errors=%s", method, url, response.status_code, errors)
            detail = ", ".join(str(e) for e in errors) or f"{method} {url} returned {response.status_code}"
            raise BackendRejection(detail, status=response.status_code, errors=errors)
        if response.status_code == 204 or not response.content:
            if model is None:
                return None
            raise self._unreadable(method, url, response, "empty body")
        try:
            body = response.json()
            if model is None:
                return body
            if many:
                if not isinstance(body, list):
                    raise ValueError(f"expected a list, got {type(body).__name__}")
                return [model.model_validate(item) for item in body]
            return model.model_validate(body)
        except (ValueError, PydanticValidationError) as exc:
            raise self._unreadable(method, url, response, str(exc)) from exc

    @staticmethod
    def _unreadable(method: str, url: str, response: httpx.Response, reason: str) -> BackendRejection:
        logger.error("backend.unreadable method=%s url=%s status=%s reason=%s", method, url, response.status_code, reason)
        return BackendRejection(
            f"{method} {url} returned an unreadable body",
            status=response.status_code,
            errors=[reason],
        )

    # ---- step primitives ----------------------------------------------

    async def create_step(self, progression_id: int, verse_id: int, rank: int) -> Step:
        return await self._request(
            "POST",
            f"/progressions/{progression_id}/steps",
            model=Step,
            json={"step": {"verse_id": verse_id, "step_order": rank}},
        )

    async def update_step_rank(self, progression_id: int, step_id: int, rank: int) -> Optional[Step]:
        # Callers apply the rank they sent; the response body is not read
        await self._request(
            "PATCH",
            f"/progressions/{progression_id}/steps/{step_id}",
            json={"step": {"step_order": rank}},
        )
        return None

    async def delete_step(self, progression_id: int, step_id: int) -> None:
        await self._request("DELETE", f"/progressions/{progression_id}/steps/{step_id}")

    # ---- edge primitives ----------------------------------------------

    async def add_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        await self._request(
            "POST",
            f"/verses/{source_verse_id}/references",
            json={"referenced_verse_id": target_verse_id},
        )

    async def remove_edge(self, source_verse_id: int, target_verse_id: int) -> None:
        await self._request("DELETE", f"/verses/{source_verse_id}/references/{target_verse_id}")

    async def fetch_verse(self, verse_id: int) -> Verse:
        return await self._request("GET", f"/verses/{verse_id}", model=Verse)

    # ---- progression lifecycle ----------------------------------------

    async def fetch_progression(self, progression_id: int) -> Progression:
        return await self._request("GET", f"/progressions/{progression_id}", model=Progression)

    async def create_progression(self, name: str, description: Optional[str] = None) -> Progression:
        payload: Dict[str, Any] = {"name": name}
        if description:
            payload["description"] = description
        return await self._request("POST", "/progressions", model=Progression, json={"progression": payload})

    async def update_progression(
        self,
        progression_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Progression:
        payload = {k: v for k, v in (("name", name), ("description", description)) if v is not None}
        return await self._request(
            "PATCH",
            f"/progressions/{progression_id}",
            model=Progression,
            json={"progression": payload},
        )

    async def delete_progression(self, progression_id: int) -> None:
        await self._request("DELETE", f"/progressions/{progression_id}")

    async def list_verses(
        self,
        bible_book_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[Verse]:
        params = {k: v for k, v in (("bible_book_id", bible_book_id), ("category_id", category_id)) if v is not None}
        return await self._request("GET", "/verses", model=Verse, many=True, params=params)


__all__ = ["HttpResourceBackend"]
