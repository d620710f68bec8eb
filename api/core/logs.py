"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_level() -> str:
    raw = os.environ.get("LOG_LEVEL", "").strip().upper()
    if raw in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return raw
    return "INFO"


def configure_logging() -> None:
    root = logging.getLogger()
    if root.handlers:
        # uvicorn or pytest already installed handlers; only adjust the level.
        root.setLevel(log_level())
        return None
    logging.basicConfig(level=log_level(), format=LOG_FORMAT)
