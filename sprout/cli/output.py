"""
Output formatting for CLI operations.

This module renders parsed programs and token streams with rich, and
prints the short status lines the commands report.
"""

import dataclasses
from enum import Enum
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from sprout.ast import Node, Program
from sprout.lang.parser.grammar.lexer import Token

console = Console()


def _describe_value(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    return repr(value)


def _add_node(parent: Tree, label: str, value: Any) -> None:
    if isinstance(value, Node) or dataclasses.is_dataclass(value):
        branch = parent.add(f"{label}[bold blue]{type(value).__name__}[/bold blue]")
        for item in dataclasses.fields(value):
            _add_node(branch, f"[cyan]{item.name}[/cyan]: ", getattr(value, item.name))
    elif isinstance(value, list):
        if not value:
            parent.add(f"{label}[dim](empty)[/dim]")
            return
        branch = parent.add(f"{label}[dim]{len(value)} item(s)[/dim]")
        for index, item in enumerate(value):
            _add_node(branch, f"[dim]{index}[/dim] ", item)
    elif value is None:
        parent.add(f"{label}[dim]None[/dim]")
    else:
        parent.add(f"{label}[green]{escape(_describe_value(value))}[/green]")


def build_ast_tree(program: Program) -> Tree:
    """
    Build a rich tree mirroring the dataclass structure of a program.

    Examples:
        >>> tree = build_ast_tree(parse_program("let n = 1"))  # doctest: +SKIP
        >>> console.print(tree)  # doctest: +SKIP
        Program (path: app.sprout)
        └── 0 LetStatement
            ├── name: 'n'
            └── value: Literal
    """
    title = f"[bold blue]Program[/bold blue] [dim](path: {escape(program.path or '<source>')})[/dim]"
    tree = Tree(title)
    for index, statement in enumerate(program.body):
        _add_node(tree, f"[dim]{index}[/dim] ", statement)
    return tree


def build_token_table(tokens: List[Token], title: Optional[str] = None) -> Table:
    """Build a rich table listing one token per row."""
    table = Table(title=title or f"Tokens ({len(tokens)} total)")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Col", justify="right", style="dim")
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="green")

    for token in tokens:
        table.add_row(
            str(token.line),
            str(token.column),
            token.type.name,
            escape(repr(token.value)),
        )
    return table


def print_ast(program: Program) -> None:
    console.print(build_ast_tree(program))


def print_tokens(tokens: List[Token], title: Optional[str] = None) -> None:
    console.print(build_token_table(tokens, title))


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Parsed 3 statements")
        ✓ Parsed 3 statements
    """
    print(f"✓ {message}")


__all__ = [
    "console",
    "build_ast_tree",
    "build_token_table",
    "print_ast",
    "print_tokens",
    "print_success",
]
