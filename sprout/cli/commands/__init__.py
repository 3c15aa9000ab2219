"""
CLI command modules.

Each module implements one subcommand of the Sprout CLI.
"""

from .build import cmd_build
from .check import cmd_check
from .tokens import cmd_tokens

__all__ = ["cmd_build", "cmd_check", "cmd_tokens"]
