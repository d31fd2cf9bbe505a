"""Keeps the sidebar snapshot in step with the active document."""

from __future__ import annotations

from typing import Callable, List

from .extractor import Snapshot, extract
from .host import EditorHost
from .messages import SetComments
from .observability.logging import get_logger


class Synchronizer:
    """Re-scans the active document on every focus or content change.

    Each trigger produces one full :func:`extract` pass and one
    ``setComments`` message handed to *post_message*.  There is no
    debouncing and no diffing against the previous snapshot.
    """

    def __init__(self, host: EditorHost, post_message: Callable[[SetComments], None]) -> None:
        self.logger = get_logger("comment_viewer.sync")
        self._host = host
        self._post_message = post_message
        self._disconnects: List[Callable[[], None]] = [
            host.active_document_changed.connect(self._on_active_document_changed),
            host.active_content_changed.connect(self._on_active_content_changed),
        ]
        self.refresh()

    def refresh(self) -> Snapshot:
        text = self._host.active_text()
        snapshot: Snapshot = () if text is None else extract(text)
        self.logger.debug("Posting %d comment(s)", len(snapshot))
        self._post_message(SetComments.from_snapshot(snapshot))
        return snapshot

    def dispose(self) -> None:
        for disconnect in self._disconnects:
            disconnect()
        self._disconnects.clear()

    def _on_active_document_changed(self, *_: object) -> None:
        self.refresh()

    def _on_active_content_changed(self, *_: object) -> None:
        self.refresh()


__all__ = ["Synchronizer"]
