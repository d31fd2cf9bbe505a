"""Message vocabulary shared by the presenter and the sidebar view.

Two narrow channels cross the view boundary:

* inbound (view -> presenter): ``highlightLine`` and ``insertHtmlComment``;
* outbound (presenter -> view): ``setComments``.

``line`` is always transmitted 0-indexed; the +1 for display is applied only
when rendering labels.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from .errors import MalformedMessageError, UnknownCommandError
from .extractor import Annotation, Snapshot

HIGHLIGHT_LINE = "highlightLine"
INSERT_HTML_COMMENT = "insertHtmlComment"
SET_COMMENTS = "setComments"


class HighlightLine(BaseModel):
    """Reveal and temporarily emphasise one line of the active document."""

    model_config = ConfigDict(frozen=True)

    command: Literal["highlightLine"] = HIGHLIGHT_LINE
    line: StrictInt


class InsertHtmlComment(BaseModel):
    """Insert the comment template at the active cursor."""

    model_config = ConfigDict(frozen=True)

    command: Literal["insertHtmlComment"] = INSERT_HTML_COMMENT


class CommentEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    line: StrictInt


class SetComments(BaseModel):
    """Full replacement of the list shown by the view."""

    model_config = ConfigDict(frozen=True)

    command: Literal["setComments"] = SET_COMMENTS
    comments: List[CommentEntry] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SetComments":
        return cls(comments=[CommentEntry(text=item.text, line=item.line) for item in snapshot])

    def snapshot(self) -> Snapshot:
        return tuple(Annotation(text=entry.text, line=entry.line) for entry in self.comments)


InboundMessage = Annotated[Union[HighlightLine, InsertHtmlComment], Field(discriminator="command")]

_INBOUND_ADAPTER: TypeAdapter = TypeAdapter(InboundMessage)
_INBOUND_COMMANDS = frozenset({HIGHLIGHT_LINE, INSERT_HTML_COMMENT})


def decode_inbound(payload: Any) -> Union[HighlightLine, InsertHtmlComment]:
    """Validate a raw view payload into one of the inbound message models.

    Raises :class:`UnknownCommandError` for a missing or unrecognised
    ``command`` tag and :class:`MalformedMessageError` when the fields do not
    validate (for example a non-integer ``line``).
    """

    if isinstance(payload, (HighlightLine, InsertHtmlComment)):
        return payload
    if not isinstance(payload, Mapping):
        raise MalformedMessageError(f"Expected a message object, got {type(payload).__name__}")
    command = payload.get("command")
    if command not in _INBOUND_COMMANDS:
        raise UnknownCommandError(f"Unknown view command: {command!r}", payload=payload)
    try:
        return _INBOUND_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise MalformedMessageError(
            f"Invalid '{command}' message: {exc.errors()[0]['msg']}",
            payload=payload,
        ) from exc


def encode(message: BaseModel) -> Dict[str, Any]:
    return message.model_dump()


__all__ = [
    "HIGHLIGHT_LINE",
    "INSERT_HTML_COMMENT",
    "SET_COMMENTS",
    "HighlightLine",
    "InsertHtmlComment",
    "CommentEntry",
    "SetComments",
    "InboundMessage",
    "decode_inbound",
    "encode",
]
