"""Configuration support for the comment viewer."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from .errors import ConfigError

CONFIG_FILENAMES = ("comment-viewer.toml", ".commentviewerrc")
LOG_LEVEL_ENV = "COMMENT_VIEWER_LOG_LEVEL"

_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_LOG_LEVELS = {"debug", "info", "warn", "warning", "error"}


@dataclass(frozen=True)
class ViewerConfig:
    """Resolved settings for the sidebar and its intents."""

    emphasis_delay_ms: int = 500
    emphasis_color: str = "#ffe58f"
    placeholder: str = "No comments found."
    log_level: str = "info"
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def emphasis_delay(self) -> float:
        """Emphasis lifetime in seconds, as schedulers expect it."""

        return self.emphasis_delay_ms / 1000.0

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "ViewerConfig":
        """Return a copy with *overrides* (same keys as the file format) applied."""

        if not overrides:
            return self
        values = _parse_section(overrides)
        return replace(self, **values)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError("TOML parsing requires Python 3.11 or later.")
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _parse_section(data: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    if "emphasis_delay_ms" in data:
        try:
            delay = int(data["emphasis_delay_ms"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"emphasis_delay_ms must be an integer, got {data['emphasis_delay_ms']!r}") from exc
        if delay < 0:
            raise ConfigError("emphasis_delay_ms must not be negative")
        values["emphasis_delay_ms"] = delay
    if "emphasis_color" in data:
        color = str(data["emphasis_color"])
        if not _COLOR_PATTERN.match(color):
            raise ConfigError(
                f"emphasis_color must be a hex colour, got {color!r}",
                hint="Use a value such as '#ffe58f'",
            )
        values["emphasis_color"] = color
    if "placeholder" in data:
        values["placeholder"] = str(data["placeholder"])
    if "log_level" in data:
        level = str(data["log_level"]).lower()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log_level {level!r}", hint="Use debug, info, warn or error")
        values["log_level"] = level
    return values


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILENAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_config(root: Path, explicit: Optional[Path] = None) -> ViewerConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    defaults = ViewerConfig()
    if config_path is None:
        return _apply_env(defaults)

    try:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Could not read {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a table of settings")

    # Settings may live at top level or under a [viewer] table.
    section = data.get("viewer") if isinstance(data.get("viewer"), dict) else data
    values = _parse_section(section)
    config = replace(defaults, source=config_path, raw=data, **values)
    return _apply_env(config)


def _apply_env(config: ViewerConfig) -> ViewerConfig:
    level = os.getenv(LOG_LEVEL_ENV)
    if not level:
        return config
    return config.merged({"log_level": level})


__all__ = [
    "ViewerConfig",
    "CONFIG_FILENAMES",
    "LOG_LEVEL_ENV",
    "locate_config_file",
    "load_config",
]
