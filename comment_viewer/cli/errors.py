"""
Error handling for the comment viewer CLI.

Exceptions carry a machine-readable code and an optional hint so the
top-level handler can print a consistent message and exit non-zero.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Configuration file could not be read or holds invalid values."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIRuntimeError(CLIError):
    """Failure while a command was executing."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_RUNTIME_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """
    Required file not found.

    Raised when:
    - The file passed to ``scan`` does not exist
    - An explicit ``--config`` path is missing
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format exception for CLI display with context and hints.

    Examples:
        >>> print(format_cli_error(CLIFileNotFoundError("No such file: a.html", hint="Check the path")))
        Error [CLI_FILE_NOT_FOUND]: No such file: a.html
        Hint: Check the path
    """
    lines = []

    if isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        error_type = exc.__class__.__name__
        lines.append(f"Error: {error_type}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """Current exception traceback, truncated to the CLI trace limit."""
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Explicit flag or COMMENT_VIEWER_VERBOSE/COMMENT_VIEWER_DEBUG."""
    return verbose_flag or _env_flag("COMMENT_VIEWER_VERBOSE") or _env_flag("COMMENT_VIEWER_DEBUG")


def cli_reraise_enabled() -> bool:
    """COMMENT_VIEWER_RERAISE or COMMENT_VIEWER_DEBUG re-raise instead of exiting."""
    return _env_flag("COMMENT_VIEWER_RERAISE") or _env_flag("COMMENT_VIEWER_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print *exc* for the user and exit with *exit_code*.

    Note:
        This function calls sys.exit() and does not return.
    """
    verbose_effective = cli_verbose_enabled(verbose)
    if cli_reraise_enabled():
        raise exc

    error_message = format_cli_error(
        exc,
        verbose=verbose_effective,
        include_traceback=verbose_effective
    )
    print(error_message, file=sys.stderr)
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIRuntimeError",
    "CLIFileNotFoundError",
    "format_cli_error",
    "handle_cli_exception",
    "cli_verbose_enabled",
    "cli_reraise_enabled",
]
