from __future__ import annotations

import json

import pytest

from comment_viewer.config import LOG_LEVEL_ENV, ViewerConfig, load_config, locate_config_file
from comment_viewer.errors import ConfigError


@pytest.fixture(autouse=True)
def _clear_log_env(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


def test_defaults_without_config_file(tmp_path) -> None:
    config = load_config(tmp_path)
    assert config == ViewerConfig()
    assert config.emphasis_delay == 0.5
    assert config.source is None


def test_toml_viewer_table(tmp_path) -> None:
    path = tmp_path / "comment-viewer.toml"
    path.write_text('[viewer]\nemphasis_delay_ms = 750\nemphasis_color = "#336699"\n', encoding="utf-8")
    config = load_config(tmp_path)
    assert config.emphasis_delay_ms == 750
    assert config.emphasis_color == "#336699"
    assert config.source == path.resolve()


def test_json_rc_file(tmp_path) -> None:
    (tmp_path / ".commentviewerrc").write_text(json.dumps({"placeholder": "Empty"}), encoding="utf-8")
    assert load_config(tmp_path).placeholder == "Empty"


def test_toml_wins_over_rc(tmp_path) -> None:
    (tmp_path / "comment-viewer.toml").write_text('placeholder = "from toml"\n', encoding="utf-8")
    (tmp_path / ".commentviewerrc").write_text('{"placeholder": "from rc"}', encoding="utf-8")
    assert locate_config_file(tmp_path).name == "comment-viewer.toml"
    assert load_config(tmp_path).placeholder == "from toml"


def test_explicit_path(tmp_path) -> None:
    explicit = tmp_path / "custom.json"
    explicit.write_text('{"log_level": "debug"}', encoding="utf-8")
    assert load_config(tmp_path, explicit).log_level == "debug"


def test_env_overrides_log_level(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")
    assert load_config(tmp_path).log_level == "error"


@pytest.mark.parametrize(
    "content",
    [
        '{"emphasis_delay_ms": "soon"}',
        '{"emphasis_delay_ms": -5}',
        '{"emphasis_color": "yellow"}',
        '{"log_level": "loud"}',
        "not json",
        "[1, 2]",
    ],
)
def test_invalid_values_raise_config_error(tmp_path, content: str) -> None:
    (tmp_path / ".commentviewerrc").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_merged_applies_overrides() -> None:
    config = ViewerConfig().merged({"emphasis_delay_ms": 100})
    assert config.emphasis_delay_ms == 100
    assert config.emphasis_color == ViewerConfig().emphasis_color
    assert ViewerConfig().merged(None) == ViewerConfig()
