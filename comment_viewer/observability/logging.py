"""Centralised logging helpers for the comment viewer."""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str = "comment_viewer") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def parse_level(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    return _LEVEL_MAP.get(value.strip().lower(), logging.INFO)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    stdout carries the LSP stream, so log output never goes there.
    """

    root_logger = get_logger("comment_viewer")
    root_logger.setLevel(parse_level(level))
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        root_logger.propagate = False
    return root_logger


def log_intent_event(
    intent: str,
    *,
    applied: bool,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured log entry for a handled view intent."""

    payload: Dict[str, Any] = {"intent": intent, "applied": applied}
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("comment_viewer.intents")
    target_logger.debug(
        "Handled %s intent (applied=%s)",
        intent,
        applied,
        extra={"comment_viewer_event": "intent", "comment_viewer_data": payload},
    )
