"""
Main entry point for the Sprout CLI when run as a module.

This allows the CLI to be executed using:
    python -m sprout.cli

or the equivalent ``sprout`` console script entry point.
"""

from . import main

if __name__ == '__main__':
    main()
