"""Document level state tracking for the comment viewer language server."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Sequence

from lsprotocol.types import Position, TextDocumentContentChangeEvent

UTF8 = "utf-8"
UTF16 = "utf-16"
UTF32 = "utf-32"

# LSP only recognises these three line terminators.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _char_width(char: str, encoding: str) -> int:
    if encoding == UTF8:
        return len(char.encode("utf-8"))
    if encoding == UTF16:
        return 2 if ord(char) > 0xFFFF else 1
    return 1


def column_to_index(line: str, character: int, encoding: str = UTF16) -> int:
    """Map an LSP column on *line* to a string index, clamped to the line."""

    if character <= 0:
        return 0
    if encoding == UTF32:
        return min(character, len(line))
    units = 0
    for index, char in enumerate(line):
        if units >= character:
            return index
        units += _char_width(char, encoding)
    return len(line)


def index_to_column(line: str, index: int, encoding: str = UTF16) -> int:
    if encoding == UTF32:
        return index
    return sum(_char_width(char, encoding) for char in line[:index])


@dataclass
class DocumentState:
    """Text and line bookkeeping for one open text document.

    Positions are in the client's negotiated encoding (UTF-16 unless the
    client agreed on something else); ``cursor`` is stored the same way.
    """

    uri: str
    text: str
    version: int
    cursor: Position = field(default_factory=lambda: Position(line=0, character=0))
    position_encoding: str = UTF16
    lines: List[str] = field(init=False)
    _line_offsets: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._set_text(self.text)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def update(self, text: str, version: int) -> None:
        self._set_text(text)
        self.version = version

    def apply_changes(self, changes: Sequence[TextDocumentContentChangeEvent], version: int) -> str:
        text = self.text
        for change in changes:
            change_range = getattr(change, "range", None)
            if change_range is None:
                text = change.text
                self._set_text(text)
                continue
            start = self.offset_at(change_range.start)
            end = self.offset_at(change_range.end)
            text = text[:start] + change.text + text[end:]
            self._set_text(text)
        self.version = version
        return text

    def offset_at(self, position: Position) -> int:
        line_index = min(max(position.line, 0), len(self.lines) - 1)
        line = self.lines[line_index]
        return self._line_offsets[line_index] + column_to_index(line, position.character, self.position_encoding)

    def clamp(self, position: Position) -> Position:
        line_index = min(max(position.line, 0), len(self.lines) - 1)
        line = self.lines[line_index]
        index = column_to_index(line, position.character, self.position_encoding)
        return Position(line=line_index, character=index_to_column(line, index, self.position_encoding))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_text(self, text: str) -> None:
        self.text = text
        self.lines = _LINE_BREAK.split(text)
        self._recompute_line_offsets()

    def _recompute_line_offsets(self) -> None:
        offsets: List[int] = [0]
        for match in _LINE_BREAK.finditer(self.text):
            offsets.append(match.end())
        self._line_offsets = offsets


__all__ = ["DocumentState", "column_to_index", "index_to_column", "UTF8", "UTF16", "UTF32"]
