"""Structured JSON logging configuration for applications embedding the reconciler."""

from __future__ import annotations

import logging

from pythonjsonlogger import json as jsonlogger

from shared.log import TRACE


def resolve_level(log_level: str) -> int:
    """Map a level name ("trace", "debug", "info", ...) to a logging level.

    Unknown names fall back to INFO.
    """
    if log_level.lower() == "trace":
        return TRACE
    level = getattr(logging, log_level.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str) -> None:
    """Configure root logger with structured JSON output.

    Output format: {"ts": "...", "level": "...", "name": "...", "msg": "..."}

    The reconciler modules never call this themselves; it is for the
    application that owns the process.

    Args:
        log_level: Logging level string (e.g., "info", "debug", "warning").
    """
    level = resolve_level(log_level)

    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={
            "asctime": "ts",
            "levelname": "level",
            "message": "msg",
        },
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # Clear any existing handlers to avoid duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
