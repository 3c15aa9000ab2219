"""Output wrappers for compiled Sprout code.

The generated statement body is placed into a small set of fixed text
templates: the ``Sprout.run`` prelude and epilogue, the standalone
bundle that prepends the runtime, and the script tags used when a
compiled block is spliced back into an HTML document.
"""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined

# Names destructured from the runtime's standard library in the prelude
STD_NAMESPACES = ("time", "random", "list", "json", "url")

PROGRAM_TEMPLATE = "program.js"
BUNDLE_TEMPLATE = "bundle.js"
RUNTIME_TAG_TEMPLATE = "runtime_tag.html"
SCRIPT_TAG_TEMPLATE = "script_tag.html"

_TEMPLATES = {
    PROGRAM_TEMPLATE: (
        "Sprout.run((sprout) => {\n"
        "  const state = sprout.state;\n"
        "  const std = sprout.std;\n"
        "  const { {{ std_namespaces | join(', ') }} } = std;\n"
        "{{ body }}});\n"
    ),
    BUNDLE_TEMPLATE: "{{ runtime }}\n{{ code }}",
    RUNTIME_TAG_TEMPLATE: "<script>\n{{ runtime }}\n</script>\n",
    SCRIPT_TAG_TEMPLATE: "<script>\n{{ code }}</script>",
}

_environment = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=False,  # Output is JavaScript, values are inserted verbatim
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def render(template_name: str, **context: Any) -> str:
    """Render one of the output templates."""
    return _environment.get_template(template_name).render(**context)


def render_program(body: str) -> str:
    """Wrap an already indented statement body in the ``Sprout.run`` prelude."""
    return render(PROGRAM_TEMPLATE, body=body, std_namespaces=STD_NAMESPACES)


def render_bundle(runtime: str, code: str) -> str:
    """Prepend the runtime bundle to compiled code."""
    return render(BUNDLE_TEMPLATE, runtime=runtime, code=code)


def render_runtime_tag(runtime: str) -> str:
    return render(RUNTIME_TAG_TEMPLATE, runtime=runtime)


def render_script_tag(code: str) -> str:
    return render(SCRIPT_TAG_TEMPLATE, code=code)


__all__ = [
    "STD_NAMESPACES",
    "render",
    "render_program",
    "render_bundle",
    "render_runtime_tag",
    "render_script_tag",
]
