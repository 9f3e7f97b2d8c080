"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys

# The presentation layer polls /state every frame; per-request access lines drown match output.
_NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", quiet_access_log: bool = True) -> None:
    """Configure the root logger with a compact format for match output."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    if quiet_access_log:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
