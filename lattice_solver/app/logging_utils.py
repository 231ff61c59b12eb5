from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any


SERVICE_NAME = "lattice-solver"
LOGGER_NAME = "lattice_solver"
LOG_LEVEL_ENV = "LATTICE_SOLVER_LOG_LEVEL"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_log_level(name: str | None) -> int:
    """Maps a level name such as "debug" or "WARN" to a logging level; anything else is INFO."""
    if not name:
        return logging.INFO
    return LEVELS.get(name.strip().upper(), logging.INFO)


def _timestamp_utc_microseconds() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _serialize_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=True)
    return json.dumps(value, ensure_ascii=True, default=str)


def format_log_line(level: str, event: str, **fields: Any) -> str:
    rendered = [f"{key}={_serialize_value(value)}" for key, value in fields.items()]
    head = [
        _timestamp_utc_microseconds(),
        f"service={SERVICE_NAME}",
        f"level={logging.getLevelName(resolve_log_level(level))}",
        f"event={event}",
    ]
    return " | ".join(head + rendered)


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_lattice_solver_configured", False):
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(os.getenv(LOG_LEVEL_ENV)))
    logger.propagate = False
    logger._lattice_solver_configured = True  # type: ignore[attr-defined]
    return logger


def log_event(logger: logging.Logger, level: str, event: str, **fields: Any) -> None:
    levelno = resolve_log_level(level)
    # solve.branch fires per machine; skip rendering when DEBUG is off.
    if not logger.isEnabledFor(levelno):
        return
    logger.log(levelno, format_log_line(level, event, **fields))
