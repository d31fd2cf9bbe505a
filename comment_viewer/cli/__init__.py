"""
Comment viewer CLI entry point.

Parses global options, resolves the workspace configuration and dispatches
to the subcommands in :mod:`comment_viewer.cli.commands`.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from comment_viewer import __version__
from comment_viewer.config import load_config
from comment_viewer.errors import ConfigError
from comment_viewer.observability.logging import configure_logging

from .commands import cmd_lsp, cmd_scan
from .errors import CLIConfigError, CLIFileNotFoundError, handle_cli_exception


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List and navigate <!-- --> comment annotations in text documents",
        prog="comment-viewer"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a comment-viewer.toml or .commentviewerrc file'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Directory searched for configuration (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set COMMENT_VIEWER_LOG_LEVEL)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks for CLI errors (or set COMMENT_VIEWER_VERBOSE=1)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    scan_parser = subparsers.add_parser(
        'scan',
        help='Print the comment annotations found in a file'
    )
    scan_parser.add_argument('file', help='Path to the document to scan')
    scan_parser.add_argument(
        '--format',
        choices=['text', 'json', 'html'],
        default='text',
        help='Output labels, the setComments message, or the sidebar markup (default: text)'
    )
    scan_parser.set_defaults(func=cmd_scan)

    lsp_parser = subparsers.add_parser(
        'lsp',
        help='Start the comment viewer language server on stdio'
    )
    lsp_parser.set_defaults(func=cmd_lsp)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Examples:
        >>> main(['scan', 'index.html'])  # doctest: +SKIP
        >>> main(['lsp'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'command', None):
        parser.print_help()
        sys.exit(1)

    try:
        workspace_root = Path(args.workspace).resolve() if args.workspace else Path.cwd()
        explicit = Path(args.config).resolve() if args.config else None
        if explicit is not None and not explicit.exists():
            raise CLIFileNotFoundError(
                f"Configuration file not found: {explicit}",
                hint="Omit --config to use comment-viewer.toml from the workspace",
            )
        try:
            config = load_config(workspace_root, explicit)
        except ConfigError as exc:
            raise CLIConfigError(exc.message, hint=exc.hint) from exc
        if args.log_level:
            config = replace(config, log_level=args.log_level)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)
        return

    configure_logging(config.log_level)
    args.viewer_config = config
    args.func(args)


__all__ = ["main", "build_parser"]
