#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/line_diff.py
"""Line-level differencing of two text blobs.

The sequence alignment itself is delegated to :class:`difflib.SequenceMatcher`;
this module is responsible for splitting texts into lines, applying the
whitespace/case normalization rules identically to both inputs, and packing
the matcher's opcodes into ordered runs of added, removed and unchanged lines.
"""

from __future__ import annotations

import difflib
import logging
import re
from dataclasses import dataclass
from typing import Callable

from markupdiff.constants import LineClassification

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class DiffRun:
    """A maximal span of contiguous lines sharing one classification.

    ``value`` keeps the original line terminators, so a run of two lines
    reads ``"first\\nsecond\\n"``. At most one of ``added``/``removed`` is
    true; neither means the lines are unchanged.
    """

    value: str
    added: bool = False
    removed: bool = False

    @property
    def classification(self) -> LineClassification:
        if self.added:
            return "added"
        if self.removed:
            return "removed"
        return "unchanged"

    def lines(self) -> list[str]:
        """Split the run into lines without terminators.

        A single trailing empty segment created by a terminal newline is
        dropped; it does not count as a line.
        """
        parts = self.value.split("\n")
        if parts and parts[-1] == "":
            parts.pop()
        return parts


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip both ends.

    Parameters
    ----------
    text : str
        Text to normalize

    Returns
    -------
    str
        Normalized text with consistent whitespace

    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_text(text: str, *, ignore_whitespace: bool = False, ignore_case: bool = False) -> str:
    """Apply comparison normalizations to a whole text.

    Whitespace normalization works line by line so line breaks survive and
    the result can still be diffed line-wise.

    Parameters
    ----------
    text : str
        Raw input text
    ignore_whitespace : bool, default = False
        Collapse interior whitespace runs and trim each line
    ignore_case : bool, default = False
        Lowercase the text

    Returns
    -------
    str
        Normalized text

    """
    if ignore_whitespace:
        text = "\n".join(normalize_whitespace(line) for line in text.split("\n"))
    if ignore_case:
        text = text.lower()
    return text


def split_lines(text: str) -> list[str]:
    """Split text into lines, keeping each line's ``\\n`` terminator."""
    return _LINE_RE.findall(text)


def _comparison_key(ignore_whitespace: bool, ignore_case: bool) -> Callable[[str], str]:
    def key(line: str) -> str:
        if ignore_whitespace:
            line = normalize_whitespace(line)
        if ignore_case:
            line = line.lower()
        return line

    return key


def _append_run(runs: list[DiffRun], lines: list[str], *, added: bool = False, removed: bool = False) -> None:
    if not lines:
        return
    value = "".join(lines)
    if runs and runs[-1].added == added and runs[-1].removed == removed:
        runs[-1] = DiffRun(runs[-1].value + value, added=added, removed=removed)
    else:
        runs.append(DiffRun(value, added=added, removed=removed))


def diff_lines(
    before: str,
    after: str,
    *,
    ignore_whitespace: bool = False,
    ignore_case: bool = False,
) -> list[DiffRun]:
    """Diff two texts line by line.

    Lines are compared through a key that optionally ignores whitespace and
    case; the emitted run values are always the original lines. Unchanged
    runs take their text from ``after``. When a region was replaced, its
    removed run precedes its added run.

    Parameters
    ----------
    before : str
        Original text
    after : str
        Modified text
    ignore_whitespace : bool, default = False
        Compare lines with whitespace runs collapsed and ends trimmed
    ignore_case : bool, default = False
        Compare lines case-insensitively

    Returns
    -------
    list of DiffRun
        Runs in the order of the original lines

    """
    before_lines = split_lines(before)
    after_lines = split_lines(after)
    key = _comparison_key(ignore_whitespace, ignore_case)

    matcher = difflib.SequenceMatcher(
        None,
        [key(line) for line in before_lines],
        [key(line) for line in after_lines],
        autojunk=False,
    )

    runs: list[DiffRun] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append_run(runs, after_lines[j1:j2])
        elif tag == "delete":
            _append_run(runs, before_lines[i1:i2], removed=True)
        elif tag == "insert":
            _append_run(runs, after_lines[j1:j2], added=True)
        else:  # replace
            _append_run(runs, before_lines[i1:i2], removed=True)
            _append_run(runs, after_lines[j1:j2], added=True)

    return runs


def line_diff(
    before: str,
    after: str,
    *,
    ignore_whitespace: bool = False,
    ignore_case: bool = False,
) -> list[DiffRun]:
    """Normalize both texts consistently, then diff them line by line.

    This is the entry point used by the session: normalization is applied to
    the inputs themselves (so reported lines are normalized too) and the same
    options are forwarded to :func:`diff_lines`.
    """
    before_normalized = normalize_text(before, ignore_whitespace=ignore_whitespace, ignore_case=ignore_case)
    after_normalized = normalize_text(after, ignore_whitespace=ignore_whitespace, ignore_case=ignore_case)

    runs = diff_lines(
        before_normalized,
        after_normalized,
        ignore_whitespace=ignore_whitespace,
        ignore_case=ignore_case,
    )
    logger.debug("Line diff produced %d runs", len(runs))
    return runs
