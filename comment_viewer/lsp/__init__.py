"""Language Server Protocol binding for the comment viewer."""

from .server import CommentViewerLanguageServer, create_server

__all__ = [
    "CommentViewerLanguageServer",
    "create_server",
]
