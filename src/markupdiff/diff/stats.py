#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/stats.py
"""Summary counts and statistics for line and tree diffs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from markupdiff.markup.nodes import AlignedNode, AlignmentStatus, walk_aligned


@dataclass(frozen=True)
class ChangeSummary:
    """Counts of added, removed and unchanged lines."""

    added: int = 0
    removed: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.removed

    def to_dict(self) -> dict[str, int]:
        return {"added": self.added, "removed": self.removed, "unchanged": self.unchanged}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChangeSummary:
        return cls(
            added=int(data.get("added", 0)),
            removed=int(data.get("removed", 0)),
            unchanged=int(data.get("unchanged", 0)),
        )


@dataclass(frozen=True)
class TreeSummary:
    """Counts of aligned nodes per status, over every node of a forest."""

    added: int = 0
    removed: int = 0
    updated: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.removed + self.updated

    def to_dict(self) -> dict[str, int]:
        return {
            "added": self.added,
            "removed": self.removed,
            "updated": self.updated,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class DiffStatistics:
    """Figures shown next to a line diff.

    Parameters
    ----------
    summary : ChangeSummary
        Line counts of the current diff
    left_size : int
        Size of the left input in UTF-8 bytes
    right_size : int
        Size of the right input in UTF-8 bytes

    """

    summary: ChangeSummary
    left_size: int
    right_size: int

    @property
    def total_changes(self) -> int:
        return self.summary.total_changes

    @property
    def change_percentage(self) -> int:
        """Changed lines as a rounded share of all counted lines."""
        total = self.summary.total_changes
        if total == 0:
            return 0
        return round(total / (total + self.summary.unchanged) * 100)

    @property
    def size_difference(self) -> int:
        return self.right_size - self.left_size

    @property
    def size_difference_percentage(self) -> int:
        if self.left_size == 0:
            return 0
        return round(self.size_difference / self.left_size * 100)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.summary.to_dict(),
            "totalChanges": self.total_changes,
            "changePercentage": self.change_percentage,
            "leftSize": self.left_size,
            "rightSize": self.right_size,
            "sizeDifference": self.size_difference,
            "sizeDifferencePercentage": self.size_difference_percentage,
        }


def summarize_tree(forest: Sequence[AlignedNode]) -> TreeSummary:
    """Count aligned nodes by status, descending into every subtree."""
    counts = dict.fromkeys(AlignmentStatus, 0)
    for _depth, node in walk_aligned(forest):
        counts[node.status] += 1
    return TreeSummary(
        added=counts[AlignmentStatus.ADDED],
        removed=counts[AlignmentStatus.REMOVED],
        updated=counts[AlignmentStatus.UPDATED],
        unchanged=counts[AlignmentStatus.UNCHANGED],
    )


def text_size(text: str) -> int:
    """Return the UTF-8 encoded size of a text in bytes."""
    return len(text.encode("utf-8"))


def compute_statistics(summary: ChangeSummary, left: str, right: str) -> DiffStatistics:
    """Build :class:`DiffStatistics` for a summary and its two input texts."""
    return DiffStatistics(summary=summary, left_size=text_size(left), right_size=text_size(right))
