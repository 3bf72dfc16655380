#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/context.py
"""Context windowing of line diffs.

Raw runs from :mod:`markupdiff.diff.line_diff` are expanded into one
:class:`LineChange` per line and long unchanged stretches are compressed so
that only a bounded number of context lines remains next to each change
region.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from markupdiff.constants import LineClassification
from markupdiff.diff.line_diff import DiffRun, line_diff
from markupdiff.diff.stats import ChangeSummary
from markupdiff.exceptions import ValidationError

if TYPE_CHECKING:
    from markupdiff.settings import DiffSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LineChange:
    """One line of a diff.

    Parameters
    ----------
    text : str
        Line content without its terminator
    classification : {"added", "removed", "unchanged"}
        How the line differs between the two inputs
    line_number : int or None, default = None
        1-based position in the resulting (after) numbering. Removed lines
        carry the number the next surviving line will get. ``None`` when line
        numbering is disabled.

    """

    text: str
    classification: LineClassification
    line_number: Optional[int] = None

    @property
    def is_change(self) -> bool:
        return self.classification != "unchanged"


class DiffDocument:
    """Windowed line diff ready for rendering.

    Behaves like an immutable sequence of :class:`LineChange` entries.

    Parameters
    ----------
    changes : iterable of LineChange
        Entries in display order
    context_lines : int
        Number of context lines the document was built with

    """

    def __init__(self, changes: Iterable[LineChange], context_lines: int) -> None:
        self._changes = tuple(changes)
        self.context_lines = context_lines

    @property
    def changes(self) -> tuple[LineChange, ...]:
        return self._changes

    def __iter__(self) -> Iterator[LineChange]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __getitem__(self, index: int) -> LineChange:
        return self._changes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffDocument):
            return NotImplemented
        return self._changes == other._changes and self.context_lines == other.context_lines

    def __repr__(self) -> str:
        return f"DiffDocument(changes={len(self._changes)}, context_lines={self.context_lines})"

    @property
    def has_changes(self) -> bool:
        return any(change.is_change for change in self._changes)

    def summary(self) -> ChangeSummary:
        """Count the entries of each classification."""
        added = removed = unchanged = 0
        for change in self._changes:
            if change.classification == "added":
                added += 1
            elif change.classification == "removed":
                removed += 1
            else:
                unchanged += 1
        return ChangeSummary(added=added, removed=removed, unchanged=unchanged)

    def lines_of(self, *classifications: LineClassification) -> list[str]:
        """Return the text of every entry whose classification is listed."""
        return [change.text for change in self._changes if change.classification in classifications]


def expand_runs(runs: Iterable[DiffRun], *, show_line_numbers: bool = True) -> Iterator[LineChange]:
    """Expand runs into per-line changes with resulting-side line numbers."""
    line_number = 1
    for run in runs:
        classification = run.classification
        for line in run.lines():
            yield LineChange(
                text=line,
                classification=classification,
                line_number=line_number if show_line_numbers else None,
            )
            if not run.removed:
                line_number += 1


def apply_context(
    runs: Iterable[DiffRun],
    context_lines: int,
    *,
    show_line_numbers: bool = True,
) -> DiffDocument:
    """Build a :class:`DiffDocument` keeping bounded context around changes.

    Unchanged lines are held in a sliding buffer of the ``context_lines``
    most recent ones. The buffer is flushed, oldest first, in front of a
    changed line that opens a new change region: the first change, a change
    whose classification differs from the last emitted change (so a removed
    run directly followed by an added run counts as two regions), or a change
    that follows an unchanged line. Whatever is still buffered at the end is
    flushed too. Changed lines are always kept.

    Parameters
    ----------
    runs : iterable of DiffRun
        Runs from :func:`~markupdiff.diff.line_diff.line_diff`
    context_lines : int
        Maximum unchanged lines retained per gap, ``>= 0``
    show_line_numbers : bool, default = True
        Populate :attr:`LineChange.line_number`

    Returns
    -------
    DiffDocument
        The windowed diff

    Raises
    ------
    ValidationError
        If ``context_lines`` is negative

    """
    if context_lines < 0:
        raise ValidationError(
            f"context_lines must be non-negative, got {context_lines}",
            parameter_name="context_lines",
            parameter_value=context_lines,
        )

    output: list[LineChange] = []
    buffer: deque[LineChange] = deque(maxlen=context_lines)
    last_change: Optional[LineClassification] = None
    previous_unchanged = False

    for change in expand_runs(runs, show_line_numbers=show_line_numbers):
        if not change.is_change:
            if context_lines:
                buffer.append(change)
            previous_unchanged = True
            continue

        if last_change is None or last_change != change.classification or previous_unchanged:
            output.extend(buffer)
            buffer.clear()

        output.append(change)
        last_change = change.classification
        previous_unchanged = False

    output.extend(buffer)
    return DiffDocument(output, context_lines=context_lines)


def build_diff_document(before: str, after: str, settings: DiffSettings) -> DiffDocument:
    """Run the line differ and context windowing with the given settings."""
    runs = line_diff(
        before,
        after,
        ignore_whitespace=settings.ignore_whitespace,
        ignore_case=settings.ignore_case,
    )
    document = apply_context(
        runs,
        settings.context_lines,
        show_line_numbers=settings.show_line_numbers,
    )
    logger.debug("Built diff document with %d entries", len(document))
    return document
