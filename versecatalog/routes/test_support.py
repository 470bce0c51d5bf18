"""Test support routes.

Provides test-only endpoints used by integration tests to reset the
in-memory backend and to observe buffered domain events.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
import logging

from versecatalog.logic import events as _events
from versecatalog.logic.inmemory_backend import InMemoryBackend

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/__test__/reset-state", summary="Test-only reset state")
def reset_state(request: Request) -> Response:
    """Clear the event buffer and swap in a fresh in-memory backend.

    Only applies when the app runs on the in-memory backend; returns 204.
    """
    _events.EVENT_BUFFER.clear()
    if isinstance(request.app.state.backend, InMemoryBackend):
        request.app.state.backend = InMemoryBackend()
    else:
        logger.info("reset-state skipped backend reset for %s", type(request.app.state.backend).__name__)
    return Response(status_code=204)


@router.get("/__test__/events", summary="Test-only buffered events")
def read_events(clear: bool = True) -> JSONResponse:
    return JSONResponse({"events": _events.get_buffered_events(clear=clear)})


__all__ = ["router"]
