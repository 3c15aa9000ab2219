"""Compile Sprout blocks embedded in HTML documents.

Every ``<script type="text/sprout">`` element is compiled on its own and
replaced by a plain ``<script>`` element holding the generated code. The
runtime bundle is inserted once, just before the first compiled block.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator, Optional

from sprout.compiler import compile_source
from sprout.lang.parser.errors import SproutError

from .templates import render_runtime_tag, render_script_tag

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_TYPE = "text/sprout"

_SCRIPT_CLOSE = re.compile(r"</(script)", re.IGNORECASE)


def script_pattern(script_type: str = DEFAULT_SCRIPT_TYPE) -> re.Pattern:
    """Regular expression matching a script element of the given type."""
    return re.compile(
        r"<script\s+[^>]*type=[\"']" + re.escape(script_type) + r"[\"'][^>]*>([\s\S]*?)</script>",
        re.IGNORECASE,
    )


def escape_script_close(code: str) -> str:
    """Keep compiled code from closing its enclosing script element early."""
    return _SCRIPT_CLOSE.sub(r"<\\/\1", code)


@contextmanager
def document_lines(html: str, match: re.Match) -> Iterator[None]:
    """Shift the line of a compiler error raised inside a block to the document line."""
    line_offset = html.count("\n", 0, match.start(1))
    try:
        yield
    except SproutError as exc:
        if exc.line is not None:
            exc.line += line_offset
        raise


def transform_html(
    html: str,
    runtime: Optional[str] = None,
    script_type: str = DEFAULT_SCRIPT_TYPE,
    *,
    path: str = "",
) -> str:
    """
    Replace every embedded Sprout block with compiled JavaScript.

    Args:
        html: Document text
        runtime: Runtime bundle source, injected before the first block;
            ``None`` leaves the document without a runtime tag
        script_type: Script ``type`` attribute that marks Sprout blocks
        path: Document path for error reporting

    Returns:
        The transformed document. A document without Sprout blocks is
        returned unchanged.

    Raises:
        LexError, SproutSyntaxError: From the first block that fails to
        compile; line numbers refer to the whole document.
    """
    injected = False
    blocks = 0

    def replace(match: re.Match) -> str:
        nonlocal injected, blocks
        with document_lines(html, match):
            code = compile_source(match.group(1), path).code

        runtime_tag = ""
        if runtime is not None and not injected:
            runtime_tag = render_runtime_tag(runtime)
        injected = True
        blocks += 1
        return runtime_tag + render_script_tag(escape_script_close(code))

    result = script_pattern(script_type).sub(replace, html)
    if blocks == 0:
        logger.warning("No <script type=%r> blocks found in %s", script_type, path or "document")
    else:
        logger.debug("Compiled %d embedded blocks in %s", blocks, path or "document")
    return result


__all__ = [
    "DEFAULT_SCRIPT_TYPE",
    "script_pattern",
    "escape_script_close",
    "document_lines",
    "transform_html",
]
