"""
Check command implementation.

Parses a .sprout file, or every Sprout block of an .html file, without
generating code and reports how many top-level statements were found.
"""

import argparse
from typing import List

from sprout.ast import Program
from sprout.codegen.html import document_lines, script_pattern
from sprout.lang.parser import parse_program

from ..context import get_cli_context
from ..errors import handle_cli_exception
from ..loading import display_path, read_source
from ..output import print_ast, print_success
from ..validation import is_html_source, validate_source_file


def _parse_html_blocks(text: str, script_type: str, path: str) -> List[Program]:
    programs = []
    for match in script_pattern(script_type).finditer(text):
        with document_lines(text, match):
            programs.append(parse_program(match.group(1), path))
    return programs


def cmd_check(args: argparse.Namespace) -> None:
    """
    Handle the 'check' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - file: Path to the .sprout or .html source file
            - print_ast: Print the parsed AST as a tree (optional)

    Raises:
        SystemExit: On lexer, parser or file errors
    """
    try:
        ctx = get_cli_context(args)
        source_path = validate_source_file(args.file)
        text = read_source(source_path)

        if is_html_source(source_path):
            programs = _parse_html_blocks(text, ctx.config.defaults.script_type, str(source_path))
        else:
            programs = [parse_program(text, str(source_path))]

        if getattr(args, "print_ast", False):
            for program in programs:
                print_ast(program)

        count = sum(len(program.body) for program in programs)
        noun = "statement" if count == 1 else "statements"
        summary = f"{display_path(source_path)}: {count} top-level {noun}"
        if is_html_source(source_path):
            summary += f" in {len(programs)} block(s)"
        print_success(summary)

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
