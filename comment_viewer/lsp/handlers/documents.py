"""Text document lifecycle handlers."""

from __future__ import annotations

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
)

from ..workspace import DocumentWorkspace


def register(server) -> None:
    workspace: DocumentWorkspace = server.documents

    @server.feature("textDocument/didOpen")
    async def _did_open(ls, params: DidOpenTextDocumentParams) -> None:
        workspace.did_open(params.text_document)

    @server.feature("textDocument/didChange")
    async def _did_change(ls, params: DidChangeTextDocumentParams) -> None:
        if not params.content_changes:
            return
        workspace.did_change(
            params.text_document.uri,
            params.text_document.version or 0,
            params.content_changes,
        )

    @server.feature("textDocument/didClose")
    async def _did_close(ls, params: DidCloseTextDocumentParams) -> None:
        workspace.did_close(params.text_document.uri)
