"""Open-document registry and active-editor tracking for the language server."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from lsprotocol.types import Position, TextDocumentContentChangeEvent, TextDocumentItem

from ..host import Signal
from ..observability.logging import get_logger
from .state import UTF16, DocumentState


class DocumentWorkspace:
    """Tracks open documents, which one is active and where its cursor is.

    Fires :attr:`active_document_changed` whenever the active URI changes and
    :attr:`active_content_changed` after each edit to the active document.
    """

    def __init__(self, position_encoding: str = UTF16) -> None:
        self.logger = get_logger("comment_viewer.lsp.workspace")
        self.position_encoding = position_encoding
        self._open_documents: Dict[str, DocumentState] = {}
        self._active_uri: Optional[str] = None
        self.active_document_changed = Signal()
        self.active_content_changed = Signal()

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def did_open(self, item: TextDocumentItem) -> DocumentState:
        document = DocumentState(
            uri=item.uri,
            text=item.text,
            version=item.version,
            position_encoding=self.position_encoding,
        )
        self._open_documents[item.uri] = document
        # A freshly opened document takes focus in the editor.
        if item.uri == self._active_uri:
            self.active_content_changed.emit(item.uri)
        else:
            self.set_active(item.uri)
        return document

    def did_change(
        self,
        uri: str,
        version: int,
        changes: Sequence[TextDocumentContentChangeEvent],
    ) -> Optional[DocumentState]:
        document = self._open_documents.get(uri)
        if document is None:
            self.logger.debug("Change for unknown document %s ignored", uri)
            return None
        document.apply_changes(changes, version)
        if uri == self._active_uri:
            self.active_content_changed.emit(uri)
        return document

    def did_close(self, uri: str) -> None:
        self._open_documents.pop(uri, None)
        if uri == self._active_uri:
            self.set_active(None)

    def document(self, uri: str) -> Optional[DocumentState]:
        return self._open_documents.get(uri)

    # ------------------------------------------------------------------
    # Focus and cursor
    # ------------------------------------------------------------------
    @property
    def active_uri(self) -> Optional[str]:
        return self._active_uri

    @property
    def active_document(self) -> Optional[DocumentState]:
        if self._active_uri is None:
            return None
        return self._open_documents.get(self._active_uri)

    def set_active(self, uri: Optional[str]) -> None:
        if uri is not None and uri not in self._open_documents:
            self.logger.debug("Focus moved to untracked document %s; treating as no document", uri)
            uri = None
        if uri == self._active_uri:
            return
        self._active_uri = uri
        self.active_document_changed.emit(uri)

    def set_cursor(self, uri: str, position: Position) -> bool:
        document = self._open_documents.get(uri)
        if document is None:
            return False
        document.cursor = document.clamp(position)
        return True

    def active_text(self) -> Optional[str]:
        document = self.active_document
        return document.text if document is not None else None


__all__ = ["DocumentWorkspace"]
