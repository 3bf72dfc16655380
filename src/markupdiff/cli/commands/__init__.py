#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Subcommand handlers for the markupdiff CLI.

Each module exposes a ``handle_<name>_command(args) -> int`` function that
parses its own arguments. They are imported lazily by
:func:`markupdiff.cli.dispatch_command`.
"""
