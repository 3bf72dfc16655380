#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/markupdiff/cli/commands/settings.py
"""Persisted settings command.

``show`` prints the settings stored in the state file, ``set`` changes one or
more of them (``KEY=VALUE``, keys in snake_case, kebab-case or camelCase) and
``reset`` restores the defaults. Configuration files do not apply here; they
only affect ``diff``.
"""
import argparse
import json
import sys
from dataclasses import fields
from typing import Any

import yaml

from markupdiff.cli.builder import (
    EXIT_VALIDATION_ERROR,
    add_common_arguments,
    get_exit_code_for_exception,
    setup_logging,
)
from markupdiff.cli.commands.shared import open_session
from markupdiff.exceptions import MarkupDiffError, ValidationError
from markupdiff.settings import DiffSettings


def _create_settings_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markupdiff settings",
        description="Show or change the persisted diff settings",
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    show_parser = subparsers.add_parser("show", help="Print the current settings")
    show_parser.add_argument("--json", action="store_true", help="Print the stored JSON form")
    add_common_arguments(show_parser)

    set_parser = subparsers.add_parser("set", help="Change settings")
    set_parser.add_argument("assignments", nargs="+", metavar="KEY=VALUE", help="e.g. context_lines=5")
    add_common_arguments(set_parser)

    reset_parser = subparsers.add_parser("reset", help="Restore default settings")
    add_common_arguments(reset_parser)

    return parser


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` strings into settings keyword arguments.

    Values are read as YAML scalars, so ``true``/``no`` become booleans and
    ``5`` an integer; the settings validation decides whether they fit.

    Raises
    ------
    ValidationError
        On a malformed assignment or an unknown key

    """
    changes: dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw_value = assignment.partition("=")
        if not sep or not key:
            raise ValidationError(f"Expected KEY=VALUE, got '{assignment}'", parameter_value=assignment)

        name = DiffSettings.resolve_field_name(key.strip())
        if name is None:
            raise ValidationError(
                f"Unknown setting '{key}'. Known settings: {', '.join(DiffSettings.field_names())}",
                parameter_name=key,
            )

        try:
            changes[name] = yaml.safe_load(raw_value.strip())
        except yaml.YAMLError as e:
            raise ValidationError(
                f"Cannot read value for {name}: {raw_value!r}",
                parameter_name=name,
                parameter_value=raw_value,
                original_error=e,
            ) from e
    return changes


def _print_settings(settings: DiffSettings, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(settings.to_dict(), indent=2))
        return
    for f in fields(settings):
        print(f"{f.name:<18} = {json.dumps(getattr(settings, f.name))}  # {f.metadata.get('help', '')}")


def handle_settings_command(args: list[str] | None = None) -> int:
    """Handle the settings command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'settings')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_settings_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    setup_logging(parsed)

    try:
        session = open_session(parsed, with_config=False)
    except (argparse.ArgumentTypeError, MarkupDiffError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if parsed.action == "show":
        _print_settings(session.settings, as_json=parsed.json)
        return 0

    if parsed.action == "reset":
        _print_settings(session.reset_settings())
        return 0

    try:
        updated = session.update_settings(**parse_assignments(parsed.assignments))
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    _print_settings(updated)
    return 0
