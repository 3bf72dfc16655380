#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared argparse building blocks and exit codes for the markupdiff CLI."""

from __future__ import annotations

import argparse
import logging

from markupdiff.exceptions import ParsingError, StorageError, ValidationError
from markupdiff.logging_utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

COMMANDS = {
    "diff": "Compare two files as lines and as markup trees",
    "history": "List, show, delete or clear saved comparisons",
    "settings": "Show, change or reset the persisted diff settings",
}


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (StorageError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    return EXIT_ERROR


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the state, config and logging options every command accepts."""
    group = parser.add_argument_group("common options")
    group.add_argument(
        "--state-file",
        help="JSON file holding settings and history (default: $MARKUPDIFF_STATE_DIR/state.json or "
        "~/.markupdiff/state.json)",
    )
    group.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    group.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    group.add_argument("--log-file", help="Also write log records to this file")
    group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")


def setup_logging(parsed_args: argparse.Namespace) -> None:
    """Configure logging from the common options; ``--trace`` wins over ``--log-level``."""
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser used for ``--help`` and ``--version``.

    Subcommands parse their own arguments; this parser only describes them.
    """
    from markupdiff import __version__

    commands = "\n".join(f"  {name:<10}{description}" for name, description in COMMANDS.items())
    parser = argparse.ArgumentParser(
        prog="markupdiff",
        description="Line and markup tree diffs with saved history.",
        epilog=f"commands:\n{commands}\n\nRun 'markupdiff <command> --help' for command options.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-v", action="version", version=f"markupdiff {__version__}")
    return parser
