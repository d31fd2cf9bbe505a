"""Handler registration helpers."""

from __future__ import annotations

from . import documents, viewer


def register_all(server) -> None:
    documents.register(server)
    viewer.register(server)


__all__ = ["register_all"]
