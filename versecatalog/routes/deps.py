"""Request-scoped accessors for objects held on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.operation_guard import OperationGuard


def get_backend(request: Request) -> ResourceBackend:
    return request.app.state.backend


def get_guard(request: Request) -> OperationGuard:
    return request.app.state.guard


__all__ = ["get_backend", "get_guard"]
