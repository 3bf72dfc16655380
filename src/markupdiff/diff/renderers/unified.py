#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/renderers/unified.py
"""Plain-text line diff renderer with optional ANSI colors.

Each :class:`~markupdiff.diff.context.LineChange` becomes one output line
prefixed like a unified diff body (``+`` added, ``-`` removed, space for
context), optionally preceded by its line number.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from markupdiff.diff.context import LineChange

RED = "\033[31m"
GREEN = "\033[32m"
DIM = "\033[2m"
RESET = "\033[0m"

_PREFIXES = {"added": "+", "removed": "-", "unchanged": " "}


class UnifiedLineRenderer:
    """Render line changes as ``+``/``-``/space prefixed text.

    Parameters
    ----------
    use_color : bool, default = True
        If True, add ANSI color codes to output
    show_line_numbers : bool, default = True
        If True, prefix each line with its line number column (blank when the
        change carries no number)

    Examples
    --------
    Render a session's diff:
        >>> renderer = UnifiedLineRenderer(use_color=False)
        >>> for line in renderer.render(session.diff_document):
        ...     print(line)

    """

    def __init__(
        self,
        use_color: bool = True,
        show_line_numbers: bool = True,
    ):
        """Initialize the line renderer."""
        self.use_color = use_color
        self.show_line_numbers = show_line_numbers

    def _number_column(self, changes: list[LineChange]) -> tuple[int, bool]:
        numbers = [c.line_number for c in changes if c.line_number is not None]
        if not self.show_line_numbers or not numbers:
            return 0, False
        return len(str(max(numbers))), True

    def render(self, changes: Iterable[LineChange]) -> Iterator[str]:
        """Render line changes.

        Parameters
        ----------
        changes : iterable of LineChange
            Typically a :class:`~markupdiff.diff.context.DiffDocument`

        Yields
        ------
        str
            One rendered line per change

        """
        materialized = list(changes)
        width, numbered = self._number_column(materialized)

        for change in materialized:
            line = f"{_PREFIXES[change.classification]}{change.text}"
            if numbered:
                number = "" if change.line_number is None else str(change.line_number)
                gutter = f"{number:>{width}} "
                if self.use_color:
                    gutter = f"{DIM}{gutter}{RESET}"
                line = f"{gutter}{line}"

            if self.use_color and change.classification == "added":
                yield f"{GREEN}{line}{RESET}"
            elif self.use_color and change.classification == "removed":
                yield f"{RED}{line}{RESET}"
            else:
                yield line


def render_lines(changes: Iterable[LineChange], use_color: bool = False, show_line_numbers: bool = True) -> str:
    """Render line changes into one newline-joined string."""
    renderer = UnifiedLineRenderer(use_color=use_color, show_line_numbers=show_line_numbers)
    return "\n".join(renderer.render(changes))
