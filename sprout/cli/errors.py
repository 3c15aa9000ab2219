"""
Error reporting for the Sprout CLI.

Commands raise ``CLIError`` subclasses for problems with paths, config
files and output. Those, compiler errors from the lexer and parser, and
anything unexpected all reach the terminal through ``handle_cli_exception``.
"""

import os
import sys
import traceback
from typing import Any, Dict, List, Optional

from sprout.lang.parser.errors import SproutError


# Tracebacks longer than this are cut off in CLI output
_CLI_TRACE_LIMIT = 4000

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class CLIError(Exception):
    """
    A failure the CLI reports to the user without a traceback.

    Attributes:
        message: What went wrong
        code: Stable identifier, e.g. ``CLI_FILE_NOT_FOUND``
        hint: What the user can do about it
        context: Extra key/value details shown in verbose mode
    """

    default_code = "CLI_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Unreadable or malformed sprout.toml / .sproutrc."""

    default_code = "CLI_CONFIG_ERROR"


class CLIValidationError(CLIError):
    """A command argument that cannot be used, such as a directory given as input."""

    default_code = "CLI_VALIDATION_ERROR"


class CLIBuildError(CLIError):
    """Compiled output could not be written."""

    default_code = "CLI_BUILD_ERROR"


class CLIFileNotFoundError(CLIError):
    """The input file or the runtime bundle does not exist."""

    default_code = "CLI_FILE_NOT_FOUND"


def _headline(exc: BaseException) -> str:
    if isinstance(exc, CLIError):
        return f"Error [{exc.code}]: {exc.message}"
    if isinstance(exc, SproutError):
        # str() of a compiler error already carries location and details
        return f"Error: {exc}"
    return f"Error: {type(exc).__name__}: {exc}"


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Render an exception the way the CLI prints it.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Bad path", hint="Pass a file")))
        Error [CLI_VALIDATION_ERROR]: Bad path
        Hint: Pass a file
    """
    lines: List[str] = [_headline(exc)]

    if isinstance(exc, CLIError):
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt(exc))

    return "\n".join(lines)


def format_traceback_excerpt(exc: BaseException) -> str:
    """The exception's traceback, cut to ``_CLI_TRACE_LIMIT`` characters."""
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()
    if len(trace) > _CLI_TRACE_LIMIT:
        trace = trace[:_CLI_TRACE_LIMIT - 3] + "..."
    return trace


def wrap_exception(
    exc: BaseException,
    *,
    message: str,
    error_class: type = CLIBuildError,
    hint: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> CLIError:
    """
    Turn a low-level exception into a CLI error, keeping its text in the context.

    Examples:
        >>> err = wrap_exception(OSError("disk full"), message="Could not write app.js")
        >>> err.code, err.context["original_type"]
        ('CLI_BUILD_ERROR', 'OSError')
    """
    details = dict(context or {})
    details["original_exception"] = str(exc)
    details["original_type"] = type(exc).__name__
    return error_class(message, hint=hint, context=details)


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """True when --verbose was given or SPROUT_VERBOSE is set to a truthy value."""
    if verbose_flag:
        return True
    return os.getenv("SPROUT_VERBOSE", "").strip().lower() in _TRUTHY


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit.

    Verbose mode adds the error context and a traceback. Never returns.
    """
    show_details = cli_verbose_enabled(verbose)
    print(
        format_cli_error(exc, verbose=show_details, include_traceback=show_details),
        file=sys.stderr,
    )
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIValidationError",
    "CLIBuildError",
    "CLIFileNotFoundError",
    "format_cli_error",
    "format_traceback_excerpt",
    "wrap_exception",
    "cli_verbose_enabled",
    "handle_cli_exception",
]
