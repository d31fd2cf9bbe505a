"""pygls based language server entrypoint."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from lsprotocol.types import InitializedParams, InitializeParams
from pygls.lsp.server import LanguageServer

from comment_viewer import __version__

from ..config import ViewerConfig
from ..errors import ConfigError
from ..host import AsyncioScheduler, Scheduler
from ..observability.logging import configure_logging, get_logger
from ..presenter import Presenter
from ..sync import Synchronizer
from .handlers import register_all
from .host import LspEditorHost, LspView
from .workspace import DocumentWorkspace

INIT_OPTIONS_KEY = "commentViewer"


class CommentViewerLanguageServer(LanguageServer):
    """LanguageServer wiring the comment viewer core to a language client."""

    def __init__(self, config: Optional[ViewerConfig] = None, scheduler: Optional[Scheduler] = None) -> None:
        super().__init__("comment-viewer", __version__)
        self.logger = get_logger("comment_viewer.lsp")
        self.config = config or ViewerConfig()
        self.documents = DocumentWorkspace()
        self.editor_host = LspEditorHost(self, self.documents)
        self.presenter = Presenter(self.editor_host, scheduler or AsyncioScheduler(), self.config)
        self.synchronizer = Synchronizer(self.editor_host, self.presenter.update)
        register_all(self)
        self._register_lifecycle_handlers()

    def attach_view(self) -> None:
        self.presenter.attach_view(LspView(self.editor_host))
        self.synchronizer.refresh()

    def apply_initialization_options(self, options: Any) -> None:
        if not isinstance(options, Mapping):
            return
        overrides = options.get(INIT_OPTIONS_KEY)
        if not isinstance(overrides, Mapping):
            return
        try:
            self.config = self.config.merged(overrides)
        except ConfigError as exc:
            self.logger.warning("Ignoring client settings: %s", exc.format())
            return
        self.presenter.config = self.config

    def apply_position_encoding(self, kind: Any) -> None:
        """Adopt the column encoding agreed with the client during initialize."""

        if kind is None:
            return
        self.documents.position_encoding = str(getattr(kind, "value", kind))

    def _register_lifecycle_handlers(self) -> None:
        @self.feature("initialize")
        def _on_initialize(ls: "CommentViewerLanguageServer", params: InitializeParams) -> None:
            ls.apply_initialization_options(params.initialization_options)

        @self.feature("initialized")
        async def _on_initialized(ls: "CommentViewerLanguageServer", params: InitializedParams) -> None:  # noqa: ARG001
            ls.apply_position_encoding(ls.server_capabilities.position_encoding)
            ls.logger.info(
                "Comment viewer ready (emphasis %d ms, colour %s)",
                ls.config.emphasis_delay_ms,
                ls.config.emphasis_color,
            )

        @self.feature("shutdown")
        def _on_shutdown(ls: "CommentViewerLanguageServer", *_: Any) -> None:
            ls.presenter.detach_view()
            ls.synchronizer.dispose()


def create_server(config: Optional[ViewerConfig] = None) -> CommentViewerLanguageServer:
    return CommentViewerLanguageServer(config)


def main(config: Optional[ViewerConfig] = None) -> None:
    config = config or ViewerConfig()
    configure_logging(config.log_level)
    server = create_server(config)
    server.logger.info("Starting comment viewer LSP (pid=%s)", os.getpid())
    server.start_io()


if __name__ == "__main__":  # pragma: no cover
    main()
