"""Editor host implementation backed by a language client."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Dict, Optional, Set

from lsprotocol.types import (
    WINDOW_SHOW_DOCUMENT,
    WORKSPACE_APPLY_EDIT,
    ApplyWorkspaceEditParams,
    Position,
    Range,
    ShowDocumentParams,
    TextEdit,
    WorkspaceEdit,
)

from ..observability.logging import get_logger
from .workspace import DocumentWorkspace

POST_MESSAGE_NOTIFICATION = "commentViewer/postMessage"
REVEAL_RANGE_NOTIFICATION = "commentViewer/revealRange"
ADD_EMPHASIS_NOTIFICATION = "commentViewer/addEmphasis"
REMOVE_EMPHASIS_NOTIFICATION = "commentViewer/removeEmphasis"

REVEAL_IN_CENTER = "InCenter"


def range_to_dict(span: Range) -> Dict[str, Dict[str, int]]:
    return {
        "start": {"line": span.start.line, "character": span.start.character},
        "end": {"line": span.end.line, "character": span.end.character},
    }


class LspEmphasis:
    """Client-side decoration that is removed once by :meth:`dispose`."""

    def __init__(self, host: "LspEditorHost", uri: str, emphasis_id: int) -> None:
        self._host = host
        self.uri = uri
        self.id = emphasis_id
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self._host.notify(REMOVE_EMPHASIS_NOTIFICATION, {"uri": self.uri, "id": self.id})


class LspView:
    """Sidebar view living in the client; messages travel as notifications."""

    def __init__(self, host: "LspEditorHost") -> None:
        self._host = host

    def post_message(self, message: dict) -> None:
        self._host.notify(POST_MESSAGE_NOTIFICATION, message)


class LspEditorHost:
    """Implements the editor host capabilities over LSP.

    Reveal and emphasis are custom notifications the client paints; the
    insertion goes through ``workspace/applyEdit`` followed by
    ``window/showDocument`` to park the cursor.
    """

    def __init__(self, server: Any, workspace: DocumentWorkspace) -> None:
        self.logger = get_logger("comment_viewer.lsp.host")
        self._server = server
        self.workspace = workspace
        self.active_document_changed = workspace.active_document_changed
        self.active_content_changed = workspace.active_content_changed
        self._emphasis_ids = itertools.count(1)
        self._pending_edits: Set[asyncio.Future] = set()

    @property
    def pending_edits(self) -> Set[asyncio.Future]:
        return set(self._pending_edits)

    def notify(self, method: str, params: Dict[str, Any]) -> None:
        self._server.protocol.notify(method, params)

    # ------------------------------------------------------------------
    # EditorHost
    # ------------------------------------------------------------------
    def active_text(self) -> Optional[str]:
        return self.workspace.active_text()

    def reveal_range(self, span: Range) -> None:
        uri = self.workspace.active_uri
        if uri is None:
            return
        self.notify(
            REVEAL_RANGE_NOTIFICATION,
            {"uri": uri, "range": range_to_dict(span), "revealType": REVEAL_IN_CENTER},
        )

    def add_emphasis(self, span: Range, *, color: str) -> LspEmphasis:
        uri = self.workspace.active_uri or ""
        emphasis = LspEmphasis(self, uri, next(self._emphasis_ids))
        self.notify(
            ADD_EMPHASIS_NOTIFICATION,
            {
                "uri": uri,
                "id": emphasis.id,
                "range": range_to_dict(span),
                "backgroundColor": color,
                "isWholeLine": True,
            },
        )
        return emphasis

    def insert_at_cursor(self, text: str, cursor_offset_after: int) -> bool:
        document = self.workspace.active_document
        if document is None:
            return False
        position = document.clamp(document.cursor)
        cursor_after = Position(line=position.line, character=position.character + cursor_offset_after)
        # Later inserts must land after this one even before the client echoes the selection.
        document.cursor = cursor_after
        task = asyncio.ensure_future(self._apply_insert(document.uri, position, text, cursor_after))
        self._pending_edits.add(task)
        task.add_done_callback(self._finish_edit)
        return True

    def _finish_edit(self, task: asyncio.Future) -> None:
        self._pending_edits.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("Comment insertion task failed: %s", exc)

    async def _apply_insert(self, uri: str, position: Position, text: str, cursor_after: Position) -> bool:
        edit = WorkspaceEdit(changes={uri: [TextEdit(range=Range(start=position, end=position), new_text=text)]})
        try:
            result = await self._server.protocol.send_request_async(
                WORKSPACE_APPLY_EDIT,
                ApplyWorkspaceEditParams(edit=edit, label="Insert HTML comment"),
            )
        except Exception as exc:
            self.logger.warning("Comment insertion in %s failed: %s", uri, exc)
            self._restore_cursor(uri, position, cursor_after)
            return False
        if not getattr(result, "applied", False):
            self.logger.warning("Client rejected comment insertion in %s: %s", uri, getattr(result, "failure_reason", None))
            self._restore_cursor(uri, position, cursor_after)
            return False
        try:
            await self._server.protocol.send_request_async(
                WINDOW_SHOW_DOCUMENT,
                ShowDocumentParams(uri=uri, take_focus=True, selection=Range(start=cursor_after, end=cursor_after)),
            )
        except Exception as exc:
            # The edit is in; only the client-side caret placement failed.
            self.logger.warning("Could not place cursor in %s: %s", uri, exc)
        return True

    def _restore_cursor(self, uri: str, position: Position, cursor_after: Position) -> None:
        document = self.workspace.document(uri)
        if document is not None and document.cursor == cursor_after:
            document.cursor = position


__all__ = [
    "LspEditorHost",
    "LspEmphasis",
    "LspView",
    "range_to_dict",
    "POST_MESSAGE_NOTIFICATION",
    "REVEAL_RANGE_NOTIFICATION",
    "ADD_EMPHASIS_NOTIFICATION",
    "REMOVE_EMPHASIS_NOTIFICATION",
]
