"""Shared fakes and fixtures for the comment viewer tests."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from lsprotocol.types import Range

from comment_viewer.config import ViewerConfig
from comment_viewer.host import Signal
from comment_viewer.presenter import Presenter


class FakeEmphasis:
    def __init__(self, span: Range, color: str) -> None:
        self.span = span
        self.color = color
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


class InMemoryHost:
    """Editor host holding one optional document and an offset-based cursor."""

    def __init__(self) -> None:
        self.active_document_changed = Signal()
        self.active_content_changed = Signal()
        self.text: Optional[str] = None
        self.cursor: Optional[int] = None
        self.revealed: List[Range] = []
        self.emphases: List[FakeEmphasis] = []
        self.inserts: List[Tuple[int, str]] = []

    def open(self, text: str, cursor: int = 0) -> None:
        self.text = text
        self.cursor = cursor
        self.active_document_changed.emit("memory://doc")

    def close(self) -> None:
        self.text = None
        self.cursor = None
        self.active_document_changed.emit(None)

    def edit(self, text: str) -> None:
        self.text = text
        self.active_content_changed.emit("memory://doc")

    def active_text(self) -> Optional[str]:
        return self.text

    def reveal_range(self, span: Range) -> None:
        self.revealed.append(span)

    def add_emphasis(self, span: Range, *, color: str) -> FakeEmphasis:
        emphasis = FakeEmphasis(span, color)
        self.emphases.append(emphasis)
        return emphasis

    def live_emphases(self) -> List[FakeEmphasis]:
        return [emphasis for emphasis in self.emphases if not emphasis.disposed]

    def insert_at_cursor(self, text: str, cursor_offset_after: int) -> bool:
        if self.text is None or self.cursor is None:
            return False
        position = self.cursor
        self.inserts.append((position, text))
        self.cursor = position + cursor_offset_after
        self.edit(self.text[:position] + text + self.text[position:])
        return True


class ManualScheduler:
    """Scheduler driven by explicit :meth:`advance` calls (seconds)."""

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> Tuple[float, int]:
        self._counter += 1
        entry = (self.now + delay, self._counter, callback)
        self._pending.append(entry)
        return entry[:2]

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted(entry for entry in self._pending if entry[0] <= target + 1e-9)
            if not due:
                break
            entry = due[0]
            self._pending.remove(entry)
            self.now = entry[0]
            entry[2]()
        self.now = target


class RecordingView:
    def __init__(self) -> None:
        self.messages: List[Dict[str, Any]] = []

    def post_message(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def last(self) -> Dict[str, Any]:
        return self.messages[-1]


@pytest.fixture()
def host() -> InMemoryHost:
    return InMemoryHost()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture()
def presenter(host: InMemoryHost, scheduler: ManualScheduler, view: RecordingView) -> Presenter:
    presenter = Presenter(host, scheduler, ViewerConfig())
    presenter.attach_view(view)
    return presenter


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handler/propagation changes made by ``configure_logging``."""

    logger = logging.getLogger("comment_viewer")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)
