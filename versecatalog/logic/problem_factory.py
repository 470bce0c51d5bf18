"""Centralised construction of problem+json payloads for catalog errors.

Maps each ``CatalogError`` subtype to an HTTP status and a dict payload so
route modules never embed status numbers or code literals.
"""

from __future__ import annotations

from typing import Dict
import logging

from versecatalog.logic.errors import (
    BackendRejection,
    CatalogError,
    CatalogValidationError,
    OperationInProgressError,
    PartialRenumberError,
    StaleReferenceError,
)

logger = logging.getLogger(__name__)


def status_for(exc: CatalogError) -> int:
    """Return the HTTP status used to report ``exc``.

    Order matters: subclasses are checked before their parents.
    """
    if isinstance(exc, CatalogValidationError):
        return 422
    if isinstance(exc, (OperationInProgressError, PartialRenumberError)):
        return 409
    if isinstance(exc, StaleReferenceError):
        return 404
    if isinstance(exc, BackendRejection):
        # Upstream client errors pass through; anything else is a bad gateway
        if exc.status is not None and 400 <= exc.status < 500:
            return exc.status
        return 502
    return 500


_TITLES = {
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
}


def problem_from_error(exc: CatalogError) -> Dict[str, object]:
    """Return the problem+json body describing ``exc``."""
    status = status_for(exc)
    problem: Dict[str, object] = {
        "type": "about:blank",
        "title": _TITLES.get(status, "Error"),
        "status": status,
        "detail": exc.message,
        "code": exc.code,
    }
    if isinstance(exc, BackendRejection) and exc.errors:
        problem["errors"] = list(exc.errors)
    if isinstance(exc, PartialRenumberError):
        problem["applied"] = [{"step_id": sid, "step_order": rank} for sid, rank in exc.applied]
        if exc.order:
            problem["order"] = list(exc.order)
    logger.info("error_handler.handle code=%s status=%s", exc.code, status)
    return problem


__all__ = ["status_for", "problem_from_error"]
