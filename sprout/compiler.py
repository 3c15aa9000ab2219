"""Compiler driver: Sprout source text in, runnable JavaScript out."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from sprout.ast import Program
from sprout.codegen.javascript import INDENT, CodeGenerator
from sprout.codegen.templates import render_program
from sprout.lang.parser import parse_program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileResult:
    """Compiled script plus the program it was generated from."""

    code: str
    program: Program


def indent_lines(text: str, level: int) -> str:
    """
    Indent every non-empty line of ``text`` by ``level`` levels.

    A trailing empty line is dropped and the result always ends with a
    single newline; empty input stays empty.
    """
    if not text:
        return ""
    prefix = INDENT * level
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return "\n".join(f"{prefix}{line}" if line else line for line in lines) + "\n"


def compile_source(source: str, path: str = "") -> CompileResult:
    """
    Compile Sprout source into a complete script.

    The generated body is wrapped in ``Sprout.run((sprout) => { ... });``
    with ``state`` and the standard library helpers bound as locals.

    Raises:
        LexError: If the source cannot be tokenized
        SproutSyntaxError: If the source does not parse
    """
    started = time.perf_counter()
    program = parse_program(source, path)
    body = CodeGenerator().generate(program)
    code = render_program(indent_lines(body, 1))
    logger.debug(
        "Compiled %s in %.2fms",
        path or "<source>",
        (time.perf_counter() - started) * 1000,
    )
    return CompileResult(code=code, program=program)


__all__ = ["CompileResult", "compile_source", "indent_lines"]
