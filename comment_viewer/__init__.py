"""
Code Comment Viewer.

Extracts ``<!-- ... -->`` annotations from the active editor document and
keeps a sidebar list of them in step with live edits.  Selecting an entry
reveals and briefly emphasises its line; the sidebar's insert button drops a
fresh comment template at the cursor.

The package is organised into several modules:

* ``extractor`` – the pure scanner producing :class:`Annotation` values.
* ``sync`` – the synchronizer that re-scans the active document whenever
  the host reports a focus or content change.
* ``presenter`` – snapshot rendering plus handling of the ``highlightLine``
  and ``insertHtmlComment`` intents.
* ``host`` – the capability interface the core uses to talk to an editor.
* ``lsp`` – a pygls language server implementing that interface.
* ``cli`` – the ``comment-viewer`` command line entry point.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("code-comment-viewer")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = ["__version__"]
