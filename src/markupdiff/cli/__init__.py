#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for markupdiff.

This module provides the ``markupdiff`` entry point. Each subcommand parses
its own arguments and is imported only when it runs.

Examples
--------
Compare two files:
    $ markupdiff diff old.html new.html

Show saved comparisons:
    $ markupdiff history list --rich

"""

import logging
import sys

from markupdiff.cli.builder import COMMANDS, EXIT_VALIDATION_ERROR, create_parser

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str]) -> int | None:
    """Run the subcommand named by ``args[0]``.

    Returns
    -------
    int or None
        Exit code of the subcommand, None when ``args[0]`` names no command

    """
    command, rest = args[0], args[1:]

    if command == "diff":
        from markupdiff.cli.commands.diff import handle_diff_command

        return handle_diff_command(rest)

    if command == "history":
        from markupdiff.cli.commands.history import handle_history_command

        return handle_history_command(rest)

    if command == "settings":
        from markupdiff.cli.commands.settings import handle_settings_command

        return handle_settings_command(rest)

    return None


def main(args: list[str] | None = None) -> int:
    """Execute the markupdiff CLI."""
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    if not args or args[0].startswith("-"):
        try:
            parser.parse_args(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 0
        parser.print_help()
        return 0

    result = dispatch_command(args)
    if result is not None:
        return result

    print(f"Error: unknown command '{args[0]}'. Choose from: {', '.join(COMMANDS)}", file=sys.stderr)
    return EXIT_VALIDATION_ERROR


__all__ = ["dispatch_command", "main"]
