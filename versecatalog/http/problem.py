"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses for catalog errors, HTTP errors,
request validation failures and anything unexpected.
"""

from __future__ import annotations

import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from versecatalog.logic.errors import CatalogError
from versecatalog.logic.problem_factory import problem_from_error

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:  # noqa: D401
    problem = problem_from_error(exc)
    return JSONResponse(problem, status_code=int(problem["status"]), media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        detail.setdefault("status", status)
    else:
        detail = {"title": "Error", "status": status, "detail": str(exc.detail or "")}
    return JSONResponse(
        detail,
        status_code=status,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "code": "REQUEST_INVALID",
        "errors": [
            {"path": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ],
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "handle_catalog_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
