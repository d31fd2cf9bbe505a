"""Sidebar presenter: snapshot rendering and intent handling.

The presenter sits between the synchronizer's ``setComments`` stream and the
rendering surface.  In the other direction it decodes ``highlightLine`` and
``insertHtmlComment`` messages from the view and drives the editor host.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from lsprotocol.types import Range

from .config import ViewerConfig
from .errors import MessageError
from .extractor import COMMENT_TEMPLATE, TEMPLATE_CURSOR_OFFSET, Snapshot, line_span
from .host import Disposable, EditorHost, Scheduler, View
from .messages import HighlightLine, InsertHtmlComment, SetComments, decode_inbound, encode
from .observability.logging import get_logger, log_intent_event


class PresenterState(Enum):
    DETACHED = "detached"
    ATTACHED = "attached"


class Presenter:
    """Renders snapshots and turns view gestures into editor effects."""

    def __init__(
        self,
        host: EditorHost,
        scheduler: Scheduler,
        config: Optional[ViewerConfig] = None,
    ) -> None:
        self.logger = get_logger("comment_viewer.presenter")
        self.config = config or ViewerConfig()
        self._host = host
        self._scheduler = scheduler
        self._view: Optional[View] = None
        self._snapshot: Snapshot = ()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> PresenterState:
        if self._host.active_text() is None:
            return PresenterState.DETACHED
        return PresenterState.ATTACHED

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def view(self) -> Optional[View]:
        return self._view

    def attach_view(self, view: View) -> None:
        self._view = view

    def detach_view(self) -> None:
        self._view = None

    # ------------------------------------------------------------------
    # Outbound: synchronizer -> view
    # ------------------------------------------------------------------
    def update(self, message: SetComments) -> None:
        """Display entry point for the synchronizer.

        Messages arriving while no view is attached are dropped.
        """

        if self._view is None:
            self.logger.debug("No sidebar view attached; dropping %d comment(s)", len(message.comments))
            return
        self._snapshot = message.snapshot()
        self._view.post_message(encode(message))

    def render(self, snapshot: Optional[Snapshot] = None) -> Union[List[str], str]:
        """Item labels for *snapshot*, or the placeholder text when it is empty."""

        items = self._snapshot if snapshot is None else snapshot
        if not items:
            return self.config.placeholder
        return [annotation.label() for annotation in items]

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def click(self, index: int) -> Optional[HighlightLine]:
        """Translate a click on item *index* into a highlight request."""

        if index < 0 or index >= len(self._snapshot):
            return None
        message = HighlightLine(line=self._snapshot[index].line)
        self.receive(encode(message))
        return message

    def request_insert(self) -> InsertHtmlComment:
        message = InsertHtmlComment()
        self.receive(encode(message))
        return message

    # ------------------------------------------------------------------
    # Inbound: view -> host
    # ------------------------------------------------------------------
    def receive(self, payload: Any) -> bool:
        """Decode and handle one view message; returns whether it took effect."""

        try:
            message = decode_inbound(payload)
        except MessageError as exc:
            self.logger.warning("Ignoring view message: %s", exc.format())
            return False
        if isinstance(message, HighlightLine):
            return self.highlight_line(message.line)
        return self.insert_comment()

    def highlight_line(self, line: int) -> bool:
        text = self._host.active_text()
        span = line_span(text, line) if text is not None else None
        if span is None:
            log_intent_event("highlightLine", applied=False, extras={"line": line})
            return False
        self._host.reveal_range(span)
        emphasis = self._host.add_emphasis(span, color=self.config.emphasis_color)
        self._schedule_removal(emphasis, span)
        log_intent_event("highlightLine", applied=True, extras={"line": line})
        return True

    def insert_comment(self) -> bool:
        if self._host.active_text() is None:
            log_intent_event("insertHtmlComment", applied=False)
            return False
        applied = self._host.insert_at_cursor(COMMENT_TEMPLATE, TEMPLATE_CURSOR_OFFSET)
        log_intent_event("insertHtmlComment", applied=applied)
        return applied

    def _schedule_removal(self, emphasis: Disposable, span: Range) -> None:
        # Each emphasis owns its timer; later highlights never cancel it.
        def _remove() -> None:
            emphasis.dispose()
            self.logger.debug("Removed emphasis on line %d", span.start.line)

        self._scheduler.call_later(self.config.emphasis_delay, _remove)


__all__ = ["Presenter", "PresenterState"]
