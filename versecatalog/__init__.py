"""FastAPI application package for the verse catalog service.

Hosts the progression step sequence and the verse cross-reference editor
over a remote resource backend. Core state logic lives in
`versecatalog/logic/`, request/response models in `versecatalog/models/`
and route handlers in `versecatalog/routes/`.
"""

from __future__ import annotations

from versecatalog.main import create_app

__all__ = ["create_app"]
