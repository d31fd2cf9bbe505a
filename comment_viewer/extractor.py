"""Scanner that pulls ``<!-- ... -->`` annotations out of document text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from lsprotocol.types import Position, Range

OPEN_MARKER = "<!--"
CLOSE_MARKER = "-->"

# Opening marker, one space of padding on each side of the (empty) body.
COMMENT_TEMPLATE = f"{OPEN_MARKER}  {CLOSE_MARKER}"
# Cursor lands between the two inner spaces.
TEMPLATE_CURSOR_OFFSET = len(OPEN_MARKER) + 1

_COMMENT_PATTERN = re.compile(re.escape(OPEN_MARKER) + r"(.*?)" + re.escape(CLOSE_MARKER), re.DOTALL)


@dataclass(frozen=True, slots=True)
class Annotation:
    """One extracted comment: trimmed body text and 0-indexed line."""

    text: str
    line: int

    def label(self) -> str:
        """Human facing label; lines are displayed 1-indexed."""

        return f"Line {self.line + 1}: {self.text}"

    def to_dict(self) -> Dict[str, Union[str, int]]:
        return {"text": self.text, "line": self.line}


Snapshot = Tuple[Annotation, ...]


def extract(text: str) -> Snapshot:
    """Return every annotation in *text* in document order.

    Matches are non-greedy and may span lines; the first closing marker after
    an opening marker ends the match.  The reported line is that of the
    opening marker.
    """

    annotations = []
    newlines_seen = 0
    scanned_to = 0
    for match in _COMMENT_PATTERN.finditer(text):
        start = match.start()
        newlines_seen += text.count("\n", scanned_to, start)
        scanned_to = start
        annotations.append(Annotation(text=match.group(1).strip(), line=newlines_seen))
    return tuple(annotations)


def line_count(text: str) -> int:
    return text.count("\n") + 1


def line_span(text: str, line: int) -> Optional[Range]:
    """Full-line range for *line*, or ``None`` when the index is out of range."""

    if isinstance(line, bool) or not isinstance(line, int):
        return None
    if line < 0 or line >= line_count(text):
        return None
    content = text.split("\n")[line]
    if content.endswith("\r"):
        content = content[:-1]
    return Range(
        start=Position(line=line, character=0),
        end=Position(line=line, character=len(content)),
    )


__all__ = [
    "Annotation",
    "Snapshot",
    "extract",
    "line_count",
    "line_span",
    "OPEN_MARKER",
    "CLOSE_MARKER",
    "COMMENT_TEMPLATE",
    "TEMPLATE_CURSOR_OFFSET",
]
