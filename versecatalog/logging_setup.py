"""Central logging configuration for the verse catalog service.

A single stdout handler on the root logger serves every module logger.
The ``versecatalog`` logger follows the configured level; httpx request
lines are kept at WARNING so backend traffic does not drown the log.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def _dict_config(level: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": "INFO", "handlers": ["console"]},
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
            "versecatalog": {"level": level},
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Configure application-wide logging once.

    When the root logger already has handlers (reloaders, test runners)
    only the ``versecatalog`` level is updated.
    """
    level = (level or "INFO").upper()
    if logging.getLogger().handlers:
        logging.getLogger("versecatalog").setLevel(level)
        return
    dictConfig(_dict_config(level))
