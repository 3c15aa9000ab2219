"""JavaScript generation for Sprout programs.

HTML embedding lives in ``sprout.codegen.html``; it depends on the
compiler driver and is imported from there directly.
"""

from .javascript import (
    CodeGenerator,
    escape_unsafe_chars,
    format_number,
    format_object_key,
    generate_javascript,
    js_string,
)
from .templates import render_bundle, render_program

__all__ = [
    "CodeGenerator",
    "generate_javascript",
    "escape_unsafe_chars",
    "format_number",
    "format_object_key",
    "js_string",
    "render_bundle",
    "render_program",
]
