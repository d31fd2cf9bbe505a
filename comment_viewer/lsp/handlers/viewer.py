"""Sidebar commands sent by the client through ``workspace/executeCommand``."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from lsprotocol.types import Position

from ...rendering import render_sidebar

POST_MESSAGE_COMMAND = "commentViewer.postMessage"
SET_ACTIVE_EDITOR_COMMAND = "commentViewer.setActiveEditor"
SET_CURSOR_COMMAND = "commentViewer.setCursor"
RESOLVE_VIEW_COMMAND = "commentViewer.resolveView"
DISPOSE_VIEW_COMMAND = "commentViewer.disposeView"

COMMANDS = (
    POST_MESSAGE_COMMAND,
    SET_ACTIVE_EDITOR_COMMAND,
    SET_CURSOR_COMMAND,
    RESOLVE_VIEW_COMMAND,
    DISPOSE_VIEW_COMMAND,
)


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    as_dict = getattr(payload, "_asdict", None)
    if callable(as_dict):
        return as_dict()
    return {}


def register(server) -> None:
    workspace = server.documents

    @server.command(POST_MESSAGE_COMMAND)
    def _post_message(ls, payload: Optional[Dict[str, Any]] = None) -> Dict[str, bool]:
        handled = ls.presenter.receive(_as_mapping(payload) if payload is not None else None)
        return {"handled": handled}

    @server.command(SET_ACTIVE_EDITOR_COMMAND)
    def _set_active_editor(ls, payload: Optional[Dict[str, Any]] = None) -> None:
        uri = _as_mapping(payload).get("uri")
        workspace.set_active(str(uri) if uri else None)

    @server.command(SET_CURSOR_COMMAND)
    def _set_cursor(ls, payload: Optional[Dict[str, Any]] = None) -> Dict[str, bool]:
        data = _as_mapping(payload)
        uri = data.get("uri")
        line = data.get("line")
        character = data.get("character")
        if not isinstance(uri, str) or not isinstance(line, int) or not isinstance(character, int):
            ls.logger.debug("Ignoring malformed cursor update: %r", payload)
            return {"updated": False}
        return {"updated": workspace.set_cursor(uri, Position(line=line, character=character))}

    @server.command(RESOLVE_VIEW_COMMAND)
    def _resolve_view(ls, *_: Any) -> Dict[str, str]:
        ls.attach_view()
        return {"html": render_sidebar(ls.presenter.snapshot, ls.config)}

    @server.command(DISPOSE_VIEW_COMMAND)
    def _dispose_view(ls, *_: Any) -> None:
        ls.presenter.detach_view()


__all__ = ["register", "COMMANDS"]
