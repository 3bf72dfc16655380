#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/markupdiff/cli/commands/history.py
"""Saved comparison history command.

Subcommands:

- ``list [--search TERM] [--rich]``: saved entries, most recent first
- ``show ID``: re-run the line diff of one entry
- ``delete ID``: remove one entry
- ``clear [--yes]``: remove every entry after confirmation
"""
import argparse
import sys
from typing import Sequence

from markupdiff.cli.builder import (
    EXIT_ERROR,
    EXIT_VALIDATION_ERROR,
    add_common_arguments,
    get_exit_code_for_exception,
    setup_logging,
)
from markupdiff.cli.commands.shared import open_session
from markupdiff.diff.renderers.unified import UnifiedLineRenderer
from markupdiff.exceptions import MarkupDiffError
from markupdiff.history import HistoryEntry
from markupdiff.session import DiffSession


def _create_history_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markupdiff history",
        description="Manage saved comparisons",
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    list_parser = subparsers.add_parser("list", help="List saved comparisons")
    list_parser.add_argument("--search", "-s", default="", help="Only entries whose title or file names contain TERM")
    list_parser.add_argument("--rich", action="store_true", help="Render a table with rich")
    add_common_arguments(list_parser)

    show_parser = subparsers.add_parser("show", help="Show the line diff of a saved comparison")
    show_parser.add_argument("entry_id", metavar="ID", help="Entry id (see 'history list')")
    show_parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize output: auto (default, if terminal), always, never",
    )
    add_common_arguments(show_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a saved comparison")
    delete_parser.add_argument("entry_id", metavar="ID", help="Entry id (see 'history list')")
    add_common_arguments(delete_parser)

    clear_parser = subparsers.add_parser("clear", help="Delete every saved comparison")
    clear_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    add_common_arguments(clear_parser)

    return parser


def _format_changes(entry: HistoryEntry) -> str:
    return f"+{entry.changes.added} -{entry.changes.removed}"


def _render_plain(entries: Sequence[HistoryEntry]) -> None:
    for entry in entries:
        date = entry.date.strftime("%Y-%m-%d %H:%M")
        print(
            f"{entry.id}  {date}  {entry.title}  "
            f"({entry.left_file_name} -> {entry.right_file_name})  {_format_changes(entry)}"
        )


def _render_rich(entries: Sequence[HistoryEntry]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Saved comparisons ({len(entries)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date", style="yellow")
    table.add_column("Title", style="white")
    table.add_column("Files", style="blue")
    table.add_column("Changes", style="magenta")

    for entry in entries:
        table.add_row(
            entry.id,
            entry.date.strftime("%Y-%m-%d %H:%M"),
            entry.title,
            f"{entry.left_file_name} -> {entry.right_file_name}",
            f"[green]+{entry.changes.added}[/green] [red]-{entry.changes.removed}[/red]",
        )

    Console().print(table)


def _list(session: DiffSession, parsed: argparse.Namespace) -> int:
    entries = session.search_history(parsed.search)
    if not entries:
        print("No saved comparisons." if not parsed.search else f"No saved comparisons match '{parsed.search}'.")
        return 0

    if parsed.rich:
        _render_rich(entries)
    else:
        _render_plain(entries)
    return 0


def _show(session: DiffSession, parsed: argparse.Namespace) -> int:
    if not session.load_diff_from_history(parsed.entry_id):
        print(f"Error: no history entry with id {parsed.entry_id}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    entry = session.get_history_entry(parsed.entry_id)
    assert entry is not None
    print(f"{entry.title}  [{entry.date.isoformat()}]")
    print(f"--- {entry.left_file_name}")
    print(f"+++ {entry.right_file_name}")

    if session.diff_document is None:
        print(f"Error: {session.error}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    use_color = parsed.color == "always" or (parsed.color == "auto" and sys.stdout.isatty())
    renderer = UnifiedLineRenderer(use_color=use_color, show_line_numbers=session.settings.show_line_numbers)
    for line in renderer.render(session.diff_document):
        print(line)
    return 0


def _delete(session: DiffSession, parsed: argparse.Namespace) -> int:
    if not session.delete_diff_from_history(parsed.entry_id):
        print(f"Error: no history entry with id {parsed.entry_id}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    print(f"Deleted {parsed.entry_id}", file=sys.stderr)
    return 0


def _ask(message: str) -> bool:
    from rich.prompt import Confirm

    if not sys.stdin.isatty():
        print("Error: refusing to clear history without confirmation (use --yes)", file=sys.stderr)
        return False
    return Confirm.ask(message, default=False)


def handle_history_command(args: list[str] | None = None) -> int:
    """Handle the history command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'history')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_history_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    setup_logging(parsed)

    confirm = (lambda _message: True) if getattr(parsed, "yes", False) else _ask
    try:
        session = open_session(parsed, with_config=parsed.action == "show", confirm=confirm)
    except (argparse.ArgumentTypeError, MarkupDiffError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if parsed.action == "list":
        return _list(session, parsed)
    if parsed.action == "show":
        return _show(session, parsed)
    if parsed.action == "delete":
        return _delete(session, parsed)

    if not session.clear_history():
        print("History not cleared.", file=sys.stderr)
        return EXIT_ERROR
    print("History cleared.", file=sys.stderr)
    return 0
