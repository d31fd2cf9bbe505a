from __future__ import annotations

from lsprotocol.types import Position, Range, TextDocumentContentChangePartial

from comment_viewer.lsp.workspace import DocumentWorkspace


def _record(workspace: DocumentWorkspace):
    events = []
    workspace.active_document_changed.connect(lambda uri: events.append(("active", uri)))
    workspace.active_content_changed.connect(lambda uri: events.append(("content", uri)))
    return events


def test_open_makes_document_active(documents, item_factory) -> None:
    events = _record(documents)
    documents.did_open(item_factory("file:///a.html", "<!-- a -->"))
    assert documents.active_uri == "file:///a.html"
    assert documents.active_text() == "<!-- a -->"
    assert events == [("active", "file:///a.html")]


def test_reopening_active_document_counts_as_content_change(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "one"))
    events = _record(documents)
    documents.did_open(item_factory("file:///a.html", "two", version=2))
    assert events == [("content", "file:///a.html")]
    assert documents.active_text() == "two"


def test_change_to_active_document_fires_content_event(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "abc"))
    events = _record(documents)
    change = TextDocumentContentChangePartial(
        range=Range(start=Position(line=0, character=3), end=Position(line=0, character=3)),
        text="<!-- d -->",
    )
    documents.did_change("file:///a.html", 2, [change])
    assert documents.active_text() == "abc<!-- d -->"
    assert events == [("content", "file:///a.html")]


def test_change_to_background_document_is_silent(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "a"))
    documents.did_open(item_factory("file:///b.html", "b"))
    events = _record(documents)
    change = TextDocumentContentChangePartial(
        range=Range(start=Position(line=0, character=0), end=Position(line=0, character=1)),
        text="z",
    )
    documents.did_change("file:///a.html", 2, [change])
    assert events == []
    assert documents.document("file:///a.html").text == "z"


def test_change_to_unknown_document_is_ignored(documents) -> None:
    assert documents.did_change("file:///missing.html", 1, []) is None


def test_focus_switching(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "a"))
    documents.did_open(item_factory("file:///b.html", "b"))
    events = _record(documents)
    documents.set_active("file:///a.html")
    documents.set_active("file:///a.html")
    documents.set_active(None)
    assert events == [("active", "file:///a.html"), ("active", None)]
    assert documents.active_text() is None


def test_focus_on_untracked_document_detaches(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "a"))
    documents.set_active("output:panel")
    assert documents.active_uri is None


def test_closing_active_document_detaches(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "a"))
    events = _record(documents)
    documents.did_close("file:///a.html")
    assert events == [("active", None)]
    assert documents.document("file:///a.html") is None


def test_cursor_updates_are_clamped(documents, item_factory) -> None:
    documents.did_open(item_factory("file:///a.html", "ab\ncd"))
    assert documents.set_cursor("file:///a.html", Position(line=1, character=10)) is True
    assert documents.active_document.cursor == Position(line=1, character=2)
    assert documents.set_cursor("file:///missing.html", Position(line=0, character=0)) is False


def test_documents_inherit_workspace_encoding(item_factory) -> None:
    workspace = DocumentWorkspace(position_encoding="utf-8")
    document = workspace.did_open(item_factory("file:///a.html", "é"))
    assert document.position_encoding == "utf-8"
    assert workspace.set_cursor("file:///a.html", Position(line=0, character=9)) is True
    assert document.cursor == Position(line=0, character=2)
