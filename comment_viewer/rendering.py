"""Jinja2 rendering of the sidebar webview markup."""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from .config import ViewerConfig
from .extractor import Snapshot
from .messages import HIGHLIGHT_LINE, INSERT_HTML_COMMENT, SET_COMMENTS

_ENVIRONMENT: Optional[Environment] = None


def _environment() -> Environment:
    global _ENVIRONMENT
    if _ENVIRONMENT is None:
        _ENVIRONMENT = Environment(
            loader=PackageLoader("comment_viewer", "templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
    return _ENVIRONMENT


def render_sidebar(snapshot: Snapshot, config: Optional[ViewerConfig] = None) -> str:
    """Render the full sidebar document with *snapshot* as its initial list.

    The embedded script replaces the list on every ``setComments`` message
    and posts ``highlightLine`` / ``insertHtmlComment`` back to the host.
    """

    config = config or ViewerConfig()
    template = _environment().get_template("sidebar.html")
    return template.render(
        comments=snapshot,
        placeholder=config.placeholder,
        commands={
            "highlight": HIGHLIGHT_LINE,
            "insert": INSERT_HTML_COMMENT,
            "set": SET_COMMENTS,
        },
    )


__all__ = ["render_sidebar"]
