"""Logging helpers for the comment viewer."""

from .logging import configure_logging, get_logger, log_intent_event

__all__ = ["configure_logging", "get_logger", "log_intent_event"]
