"""
Sprout CLI entry point.

This module provides the main command-line interface for the Sprout
language, dispatching subcommands to focused command modules while
keeping the original ``sprout INPUT [OUTPUT]`` invocation working.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from sprout import __version__
from sprout.lang import LANGUAGE_VERSION

from .commands import cmd_build, cmd_check, cmd_tokens
from .context import CLIContext
from .errors import handle_cli_exception
from .loading import load_workspace
from .validation import SOURCE_SUFFIXES

VALID_COMMANDS = {'build', 'check', 'tokens', 'help'}

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _configure_logging(args) -> None:
    """Configure the sprout logger from --log-level or SPROUT_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('SPROUT_LOG_LEVEL', 'warn')
    ).lower()

    numeric_level = LOG_LEVELS.get(log_level, logging.WARNING)

    sprout_logger = logging.getLogger('sprout')
    sprout_logger.setLevel(numeric_level)

    if sprout_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    sprout_logger.addHandler(handler)
    sprout_logger.propagate = False


def _is_legacy_invocation(argv) -> bool:
    if not argv:
        return False
    first = argv[0]
    if first.startswith('-') or first in VALID_COMMANDS:
        return False
    return first.endswith(SOURCE_SUFFIXES) or Path(first).exists()


def create_parser(workspace_root: Path, config_path: Optional[Path]) -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands registered."""
    parser = argparse.ArgumentParser(
        description="Sprout language compiler - turn .sprout scripts into JavaScript",
        prog="sprout"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} (language {LANGUAGE_VERSION})"
    )
    parser.add_argument(
        '--config',
        default=str(config_path) if config_path else None,
        help='Path to a sprout.toml configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set SPROUT_VERBOSE=1)'
    )
    parser.add_argument(
        '--workspace',
        default=str(workspace_root),
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level for compiler diagnostics (or set SPROUT_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Build subcommand
    build_parser = subparsers.add_parser(
        'build',
        help='Compile a .sprout script or the Sprout blocks of an .html file'
    )
    build_parser.add_argument('file', help='Path to the .sprout or .html input file')
    build_parser.add_argument(
        'output', nargs='?', default=None,
        help='Output file (default: <name>.js or <name>.compiled.html)'
    )
    build_parser.add_argument(
        '--runtime', default=None,
        help='Runtime bundle to include (or set SPROUT_RUNTIME)'
    )
    build_parser.add_argument(
        '--no-runtime', action='store_true',
        help='Do not include the runtime bundle in the output'
    )
    build_parser.add_argument(
        '--print-ast', action='store_true',
        help='Print the parsed AST before writing the output'
    )
    build_parser.set_defaults(func=cmd_build)

    # Check subcommand
    check_parser = subparsers.add_parser(
        'check',
        help='Parse a file and report errors without writing output'
    )
    check_parser.add_argument('file', help='Path to the .sprout or .html input file')
    check_parser.add_argument(
        '--print-ast', action='store_true', help='Print the parsed AST as a tree'
    )
    check_parser.set_defaults(func=cmd_check)

    # Tokens subcommand
    tokens_parser = subparsers.add_parser(
        'tokens',
        help='Print the token stream of a .sprout file'
    )
    tokens_parser.add_argument('file', help='Path to the .sprout source file')
    tokens_parser.set_defaults(func=cmd_tokens)

    # Help subcommand
    help_parser = subparsers.add_parser('help', help='Show this help message')
    help_parser.set_defaults(func=lambda args: parser.print_help())

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Compile a script next to its source:
        >>> main(['build', 'app.sprout'])  # doctest: +SKIP
        Sprout: wrote app.js

        Legacy invocation:
        >>> main(['index.html', 'dist/index.html'])  # doctest: +SKIP
        Sprout: wrote dist/index.html
    """
    if argv is None:
        argv = sys.argv[1:]

    # Legacy invocation support: convert bare input file to 'build' command
    if _is_legacy_invocation(argv):
        print(
            "Note: Using legacy invocation. Consider using 'sprout build' instead.",
            file=sys.stderr
        )
        argv = ['build'] + list(argv)

    # Pre-parse to get workspace and config before the full parser exists
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('--config')
    pre_parser.add_argument('--workspace')
    pre_args, _ = pre_parser.parse_known_args(argv)

    workspace_root = (
        Path(pre_args.workspace).resolve()
        if pre_args.workspace
        else Path.cwd()
    )
    config_path = (
        Path(pre_args.config).resolve()
        if pre_args.config
        else None
    )

    parser = create_parser(workspace_root, config_path)
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)
    _configure_logging(args)

    try:
        config = load_workspace(workspace_root, config_path)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    args.cli_context = CLIContext(workspace_root=workspace_root, config=config)

    # Execute command
    args.func(args)


__all__ = ["main", "create_parser"]
