"""
Subcommand handlers for the comment viewer CLI.

``scan`` runs the extractor over a file and prints the resulting snapshot;
``lsp`` starts the language server over stdio.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from comment_viewer.config import ViewerConfig
from comment_viewer.extractor import extract
from comment_viewer.messages import SetComments, encode

from .errors import CLIFileNotFoundError, CLIRuntimeError, handle_cli_exception


def _config(args: argparse.Namespace) -> ViewerConfig:
    return getattr(args, "viewer_config", None) or ViewerConfig()


def cmd_scan(args: argparse.Namespace) -> None:
    """
    Handle the 'scan' subcommand.

    Prints one ``Line N: text`` label per comment (or the placeholder),
    the ``setComments`` message as JSON, or the rendered sidebar markup.

    Examples:
        >>> args = argparse.Namespace(file='page.html', format='text')
        >>> cmd_scan(args)  # doctest: +SKIP
        Line 2: note
    """
    try:
        path = Path(args.file)
        if not path.is_file():
            raise CLIFileNotFoundError(
                f"No such file: {path}",
                hint="Pass the path of a text document to scan",
            )
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CLIRuntimeError(f"Could not read {path}: {exc}", context={"path": str(path)}) from exc

        config = _config(args)
        snapshot = extract(text)
        output_format = getattr(args, "format", "text")
        if output_format == "json":
            print(json.dumps(encode(SetComments.from_snapshot(snapshot)), indent=2))
        elif output_format == "html":
            from comment_viewer.rendering import render_sidebar

            sys.stdout.write(render_sidebar(snapshot, config))
        else:
            if not snapshot:
                print(config.placeholder)
            for annotation in snapshot:
                print(annotation.label())
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def cmd_lsp(args: argparse.Namespace) -> None:
    """
    Handle the 'lsp' subcommand to launch the comment viewer language server.

    Raises:
        SystemExit: If the language server fails to start
    """
    try:
        from comment_viewer.lsp.server import main as serve

        print(f"Starting comment viewer language server (pid={os.getpid()})", file=sys.stderr)
        try:
            serve(_config(args))
        except KeyboardInterrupt:
            print("Language server interrupted by user.", file=sys.stderr)
        except Exception as exc:
            raise CLIRuntimeError(
                f"Language server stopped unexpectedly: {exc}",
            ) from exc
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_scan", "cmd_lsp"]
