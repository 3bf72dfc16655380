#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/markupdiff/cli/commands/diff.py
"""Document comparison command.

This module provides the diff command, which compares two files both line
by line (with bounded context) and as markup trees aligned by ``key``, and
prints the result as colored text or JSON. The comparison can be saved to the
persisted history with ``--save``.
"""
import argparse
import sys
from pathlib import Path
from typing import Any

from markupdiff.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    add_common_arguments,
    get_exit_code_for_exception,
    setup_logging,
)
from markupdiff.cli.commands.shared import open_session, read_input
from markupdiff.diff.context import DiffDocument, build_diff_document
from markupdiff.diff.renderers.json import JsonDiffRenderer
from markupdiff.diff.renderers.tree import TreeDiffRenderer
from markupdiff.diff.renderers.unified import UnifiedLineRenderer
from markupdiff.diff.stats import summarize_tree
from markupdiff.exceptions import MarkupDiffError
from markupdiff.markup.nodes import AlignedNode


def _validate_context_lines(value: str) -> int:
    """Validate context lines is a non-negative integer.

    Parameters
    ----------
    value : str
        Context lines value as string

    Returns
    -------
    int
        Validated context lines value

    Raises
    ------
    argparse.ArgumentTypeError
        If value is not a non-negative integer

    """
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"context lines must be an integer, got '{value}'") from e

    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"context lines must be non-negative, got {ivalue}")

    return ivalue


def _create_diff_parser() -> argparse.ArgumentParser:
    """Create argparse parser for diff command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for diff command

    """
    parser = argparse.ArgumentParser(
        prog="markupdiff diff",
        description="Compare two files as lines and as markup trees aligned by their 'key' attribute",
        add_help=True,
    )

    # Positional arguments
    parser.add_argument("original", help="Original file (use '-' for stdin)")
    parser.add_argument("modified", help="Modified file (use '-' for stdin)")

    # Output options
    parser.add_argument(
        "--mode",
        "-m",
        choices=["lines", "tree", "both"],
        default="lines",
        help="What to compare: lines (default), tree (markup structure), or both",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json (structured)",
    )
    parser.add_argument("--output", "-o", help="Write diff to file (default: stdout)")
    parser.add_argument(
        "--color",
        dest="color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize output: auto (default, if terminal), always, never",
    )

    # Comparison options; unset flags fall back to the persisted settings
    parser.add_argument(
        "--ignore-whitespace",
        "-w",
        action="store_true",
        help="Ignore whitespace changes (like diff -w)",
    )
    parser.add_argument(
        "--ignore-case",
        "-i",
        action="store_true",
        help="Ignore case differences (like diff -i)",
    )
    parser.add_argument(
        "--context",
        "-C",
        type=_validate_context_lines,
        default=None,
        help="Number of context lines (default: from settings, initially 3)",
    )
    parser.add_argument(
        "--no-line-numbers",
        dest="show_line_numbers",
        action="store_false",
        default=None,
        help="Omit line numbers",
    )

    parser.add_argument("--save", metavar="TITLE", help="Save this comparison to the history under TITLE")

    add_common_arguments(parser)
    return parser


def _setting_overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if parsed.ignore_whitespace:
        overrides["ignore_whitespace"] = True
    if parsed.ignore_case:
        overrides["ignore_case"] = True
    if parsed.context is not None:
        overrides["context_lines"] = parsed.context
    if parsed.show_line_numbers is not None:
        overrides["show_line_numbers"] = parsed.show_line_numbers
    return overrides


def _use_color(parsed: argparse.Namespace) -> bool:
    if parsed.color == "always":
        return True
    if parsed.color == "auto" and not parsed.output:
        return sys.stdout.isatty()
    return False


def _render_text(
    parsed: argparse.Namespace,
    labels: tuple[str, str],
    document: DiffDocument | None,
    tree: tuple[AlignedNode, ...] | None,
    show_line_numbers: bool,
) -> str:
    use_color = _use_color(parsed)
    sections: list[str] = []

    if document is not None:
        lines = [f"--- {labels[0]}", f"+++ {labels[1]}"]
        lines.extend(UnifiedLineRenderer(use_color=use_color, show_line_numbers=show_line_numbers).render(document))
        sections.append("\n".join(lines))

    if tree is not None:
        body = "\n".join(TreeDiffRenderer(use_color=use_color).render(tree))
        sections.append(f"Tree diff:\n{body}" if document is not None else body)

    return "\n\n".join(sections)


def handle_diff_command(args: list[str] | None = None) -> int:
    """Handle diff command to compare two files.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'diff')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_diff_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    setup_logging(parsed)

    stdin_state: dict[str, bool] = {}
    try:
        original_text, original_label = read_input(parsed.original, stdin_state)
        modified_text, modified_label = read_input(parsed.modified, stdin_state)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        session = open_session(parsed, **_setting_overrides(parsed))
    except (argparse.ArgumentTypeError, MarkupDiffError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    session.set_before_code(original_text)
    session.set_after_code(modified_text)
    session.set_contents(original_text, modified_text)
    session.compute_diff()

    want_lines = parsed.mode in ("lines", "both")
    want_tree = parsed.mode in ("tree", "both")

    if want_tree and session.diffed_tree is None:
        print(f"Error: {session.error}", file=sys.stderr)
        return EXIT_PARSING_ERROR

    document = session.diff_document
    if want_lines and document is None:
        # The session only diffs lines when both inputs are non-empty
        try:
            document = build_diff_document(original_text, modified_text, session.settings)
        except MarkupDiffError as e:
            print(f"Error: {e}", file=sys.stderr)
            return get_exit_code_for_exception(e)

    shown_document = document if want_lines else None
    shown_tree = session.diffed_tree if want_tree else None

    has_changes = (shown_document is not None and shown_document.has_changes) or (
        shown_tree is not None and summarize_tree(shown_tree).total_changes > 0
    )
    if not has_changes:
        print("No differences found.", file=sys.stderr)

    if parsed.format == "json":
        output = JsonDiffRenderer().render(shown_document, shown_tree)
    else:
        output = _render_text(
            parsed,
            (original_label, modified_label),
            shown_document,
            shown_tree,
            session.settings.show_line_numbers,
        )

    if parsed.output:
        output_path = Path(parsed.output)
        try:
            output_path.write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error writing {output_path}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        print(f"Diff written to: {output_path}", file=sys.stderr)
    elif output:
        print(output)

    if parsed.save:
        entry = session.save_diff_to_history(parsed.save, original_label, modified_label)
        if entry is None:
            print("Not saved to history: both inputs must be non-empty", file=sys.stderr)
        else:
            print(f"Saved to history as {entry.id}", file=sys.stderr)

    return 0
