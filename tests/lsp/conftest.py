from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest
from lsprotocol.types import ApplyWorkspaceEditResult, TextDocumentItem

from comment_viewer.lsp.workspace import DocumentWorkspace


class FakeProtocol:
    """Records notifications and answers client requests."""

    def __init__(self) -> None:
        self.notifications: List[Tuple[str, Any]] = []
        self.requests: List[Tuple[str, Any]] = []
        self.apply_edit_result = ApplyWorkspaceEditResult(applied=True)
        self.request_errors: Dict[str, BaseException] = {}

    def notify(self, method: str, params: Any = None) -> None:
        self.notifications.append((method, params))

    async def send_request_async(self, method: str, params: Any = None) -> Any:
        self.requests.append((method, params))
        if method in self.request_errors:
            raise self.request_errors[method]
        if method == "workspace/applyEdit":
            return self.apply_edit_result
        return None

    def sent(self, method: str) -> List[Dict[str, Any]]:
        return [params for name, params in self.notifications if name == method]


class FakeServer:
    def __init__(self) -> None:
        self.protocol = FakeProtocol()


def make_item(uri: str, text: str, *, version: int = 1) -> TextDocumentItem:
    return TextDocumentItem(uri=uri, language_id="html", version=version, text=text)


@pytest.fixture()
def fake_server() -> FakeServer:
    return FakeServer()


@pytest.fixture()
def documents() -> DocumentWorkspace:
    return DocumentWorkspace()


@pytest.fixture()
def item_factory():
    return make_item
