"""
Tokens command implementation.

Prints the token stream of a .sprout file as a table, mostly useful when
a statement does not parse the way its author expects.
"""

import argparse

from sprout.lang.parser.grammar.lexer import tokenize

from ..errors import handle_cli_exception
from ..loading import display_path, read_source
from ..output import print_tokens
from ..validation import validate_source_file


def cmd_tokens(args: argparse.Namespace) -> None:
    """Handle the 'tokens' subcommand."""
    try:
        source_path = validate_source_file(args.file)
        tokens = tokenize(read_source(source_path), str(source_path))
        print_tokens(tokens, title=f"{display_path(source_path)} ({len(tokens)} tokens)")

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
