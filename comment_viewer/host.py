"""Capability interface between the comment viewer core and an editor host.

The synchronizer and presenter only ever see these protocols; the language
server adapter in :mod:`comment_viewer.lsp.host` is one implementation and
the test-suite ships an in-memory one.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Protocol

from lsprotocol.types import Range


class Disposable(Protocol):
    def dispose(self) -> None:
        ...


class Signal:
    """Ordered list of callbacks fired synchronously on :meth:`emit`."""

    def __init__(self) -> None:
        self._callbacks: List[Callable[..., None]] = []

    def connect(self, callback: Callable[..., None]) -> Callable[[], None]:
        """Register *callback* and return a function that disconnects it."""

        self._callbacks.append(callback)

        def _disconnect() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _disconnect

    def emit(self, *args: Any) -> None:
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)


class EditorHost(Protocol):
    """What the core needs from the hosting editor."""

    #: Fired when focus moves to another document or away from all documents.
    active_document_changed: Signal
    #: Fired after every edit to the active document.
    active_content_changed: Signal

    def active_text(self) -> Optional[str]:
        """Full text of the active document, or ``None`` when none is active."""
        ...

    def reveal_range(self, span: Range) -> None:
        """Scroll so *span* is vertically centred in the viewport."""
        ...

    def add_emphasis(self, span: Range, *, color: str) -> Disposable:
        """Paint a whole-line background over *span* until disposed."""
        ...

    def insert_at_cursor(self, text: str, cursor_offset_after: int) -> bool:
        """Insert *text* at the cursor as one edit, then park the cursor.

        The cursor ends up *cursor_offset_after* characters past the original
        insertion point with an empty selection.  Returns ``False`` when there
        is no cursor to insert at.
        """
        ...


class View(Protocol):
    """Rendering surface that receives outbound messages."""

    def post_message(self, message: dict) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = [
    "Disposable",
    "Signal",
    "EditorHost",
    "View",
    "Scheduler",
    "AsyncioScheduler",
]
