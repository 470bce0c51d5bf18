"""Configuration utilities for the verse catalog service.

This module loads application configuration with the following rules:
- Primary source: `versecatalog_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("versecatalog_config.json")
logger = logging.getLogger(__name__)

BACKEND_MODES = {"http", "memory"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class BackendConfig(BaseModel):
    base_url: str = "http://localhost:3000"
    api_prefix: str = "/api/v1"
    timeout_seconds: float = Field(default=10.0, gt=0)
    mode: str = "memory"

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("backend.base_url must be a non-empty string")
        if not v.startswith(("http://", "https://")):
            raise ValueError("backend.base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("mode")
    @classmethod
    def mode_must_be_allowed(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in BACKEND_MODES:
            raise ValueError(f"backend.mode must be one of {sorted(BACKEND_MODES)}")
        return v


class AppConfig(BaseModel):
    backend: BackendConfig
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR")
        return v


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) versecatalog_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    base_url = (
        _env("VERSECATALOG_BACKEND_URL")
        or _read_config_file("backend.url")
        or _base("backend.base_url", "http://localhost:3000")
    )
    api_prefix = _env("VERSECATALOG_API_PREFIX") or _read_config_file("backend.api_prefix") or _base("backend.api_prefix", "/api/v1")
    timeout_text = _env("VERSECATALOG_TIMEOUT_SECONDS") or _read_config_file("backend.timeout_seconds") or _base("backend.timeout_seconds", "10")
    mode = _env("VERSECATALOG_BACKEND_MODE") or _read_config_file("backend.mode") or _base("backend.mode", "memory")
    log_level = _env("VERSECATALOG_LOG_LEVEL") or _read_config_file("log_level") or _base("log_level", "INFO")
    cors_text = _env("VERSECATALOG_CORS_ORIGINS") or _read_config_file("cors.origins")
    if cors_text is None and isinstance(base.get("cors_origins"), list):
        cors_origins = [str(o).strip() for o in base["cors_origins"] if str(o).strip()]
    else:
        cors_text = cors_text or _base("cors_origins", "*")
        cors_origins = [o.strip() for o in str(cors_text).split(",") if o.strip()]

    try:
        cfg = AppConfig(
            backend=BackendConfig(
                base_url=str(base_url).strip(),
                api_prefix=str(api_prefix).strip(),
                timeout_seconds=float(str(timeout_text).strip()),
                mode=str(mode),
            ),
            log_level=str(log_level),
            cors_origins=cors_origins or ["*"],
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        # Surface actionable message
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "BackendConfig",
    "BACKEND_MODES",
    "load_config",
]
