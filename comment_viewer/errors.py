"""Error model for the comment viewer."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class ViewerError(Exception):
    """Base class for errors raised inside the comment viewer."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        if self.code:
            components[-1] = f"{components[-1]} ({self.code})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class MessageError(ViewerError):
    """Raised when a message from the sidebar view cannot be decoded."""

    code = "VIEWER_MESSAGE"

    def __init__(self, message: str, *, payload: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.payload = payload


class UnknownCommandError(MessageError):
    """Raised when the ``command`` tag names no known intent."""

    code = "VIEWER_UNKNOWN_COMMAND"


class MalformedMessageError(MessageError):
    """Raised when a known command carries an invalid payload."""

    code = "VIEWER_MALFORMED_MESSAGE"


class ConfigError(ViewerError):
    """Raised when a configuration file cannot be read or holds invalid values."""

    code = "VIEWER_CONFIG"


__all__ = [
    "ViewerError",
    "MessageError",
    "UnknownCommandError",
    "MalformedMessageError",
    "ConfigError",
]
