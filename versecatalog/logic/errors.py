"""Error types raised by the step sequence and reference graph components.

Every failure surfaces to the caller as a ``CatalogError`` so hosts can
render one uniform message. Validation failures are detected locally
before any backend call; the remaining types wrap a backend outcome.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple


class CatalogError(Exception):
    code = "CATALOG_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class CatalogValidationError(CatalogError, ValueError):
    """Rejected locally; no backend round-trip was made."""

    code = "VALIDATION_FAILED"


class BackendRejection(CatalogError):
    """A remote call failed or returned an error payload."""

    code = "BACKEND_REJECTED"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        errors: Optional[List[Any]] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message, code=code)
        self.status = status
        self.errors = list(errors or [])


class StaleReferenceError(BackendRejection):
    """The referenced entity no longer exists on the backend."""

    code = "STALE_REFERENCE"


class PartialRenumberError(BackendRejection):
    """A rank-update cascade stopped partway through.

    ``applied`` lists the ``(step_id, rank)`` updates confirmed before the
    failing call; they stay applied locally. ``order`` is the step order the
    walk was establishing, which a caller can resubmit to finish it.
    ``cause`` is the rejection of the failing call.
    """

    code = "PARTIAL_RENUMBER"

    def __init__(
        self,
        message: str,
        *,
        applied: List[Tuple[Any, int]],
        cause: BackendRejection,
        order: Optional[List[Any]] = None,
    ) -> None:
        super().__init__(message, status=cause.status, errors=cause.errors)
        self.applied = list(applied)
        self.order = list(order or [])
        self.cause = cause


class OperationInProgressError(CatalogError):
    code = "OPERATION_IN_PROGRESS"


__all__ = [
    "CatalogError",
    "CatalogValidationError",
    "BackendRejection",
    "StaleReferenceError",
    "PartialRenumberError",
    "OperationInProgressError",
]
