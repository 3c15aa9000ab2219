"""
Build command implementation.

This module handles the 'build' subcommand which compiles a .sprout file
to a JavaScript bundle, or every embedded Sprout block of an .html file
into a compiled copy of the document.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from sprout.codegen.html import transform_html
from sprout.codegen.templates import render_bundle
from sprout.compiler import compile_source

from ..context import get_cli_context
from ..errors import CLIBuildError, handle_cli_exception, wrap_exception
from ..loading import (
    display_path,
    load_runtime,
    read_source,
    resolve_output_path,
    resolve_runtime_path,
)
from ..output import print_ast
from ..validation import is_html_source, validate_source_file

logger = logging.getLogger(__name__)


def _runtime_source(args: argparse.Namespace, ctx) -> Optional[str]:
    """Load the runtime bundle unless it has been switched off."""
    explicit = getattr(args, "runtime", None)
    if getattr(args, "no_runtime", False):
        return None
    if not explicit and not ctx.config.defaults.include_runtime:
        return None
    path = resolve_runtime_path(explicit, ctx.config.defaults, ctx.workspace_root)
    logger.debug("Using runtime bundle %s", path)
    return load_runtime(path)


def write_output(path: Path, content: str) -> None:
    """
    Write compiled output, creating the parent directory when needed.

    Raises:
        CLIBuildError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise wrap_exception(
            exc,
            message=f"Could not write output file: {path}",
            error_class=CLIBuildError,
            hint="Check that the output directory is writable",
        ) from exc


def cmd_build(args: argparse.Namespace) -> None:
    """
    Handle the 'build' subcommand.

    This command:
    1. Validates and reads the input file
    2. Loads the runtime bundle unless disabled
    3. Compiles the source, or each Sprout block of an HTML document
    4. Writes the result and reports the output path

    Args:
        args: Parsed command-line arguments containing:
            - file: Path to the .sprout or .html input
            - output: Output path (optional)
            - runtime: Runtime bundle path (optional)
            - no_runtime: Omit the runtime bundle (optional)
            - print_ast: Print the AST before writing (optional)

    Raises:
        SystemExit: On any error during the build

    Examples:
        >>> cmd_build(argparse.Namespace(file='app.sprout', output=None, ...))  # doctest: +SKIP
        Sprout: wrote app.js
    """
    try:
        ctx = get_cli_context(args)
        defaults = ctx.config.defaults
        source_path = validate_source_file(args.file)
        output_path = resolve_output_path(
            source_path,
            getattr(args, "output", None),
            out_dir=defaults.out_dir,
        )

        runtime = _runtime_source(args, ctx)
        source = read_source(source_path)

        if is_html_source(source_path):
            content = transform_html(
                source,
                runtime,
                defaults.script_type,
                path=str(source_path),
            )
        else:
            result = compile_source(source, str(source_path))
            if getattr(args, "print_ast", False):
                print_ast(result.program)
            content = result.code if runtime is None else render_bundle(runtime, result.code)

        write_output(output_path, content)
        print(f"Sprout: wrote {display_path(output_path)}")

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
