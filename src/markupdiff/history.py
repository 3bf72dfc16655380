#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/history.py
"""Saved diff snapshots.

A :class:`HistoryEntry` records both inputs of a comparison together with
the change counts at the time it was saved. Entries are immutable; the
session only ever prepends, deletes or clears them.

The persisted form is a JSON array of objects with camelCase keys and the
``date`` stored as an ISO-8601 string.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Sequence

from markupdiff.diff.stats import ChangeSummary
from markupdiff.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """One saved comparison.

    Parameters
    ----------
    id : str
        Unique identifier, derived from the save time in milliseconds
    date : datetime
        Timezone-aware save time
    title : str
        User supplied title
    left_file_name : str
        Label of the left (original) input
    right_file_name : str
        Label of the right (modified) input
    left_content : str
        Left input text
    right_content : str
        Right input text
    changes : ChangeSummary
        Line counts of the diff when saved

    """

    id: str
    date: datetime
    title: str
    left_file_name: str
    right_file_name: str
    left_content: str
    right_content: str
    changes: ChangeSummary

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title and file names."""
        needle = term.lower()
        return any(
            needle in value.lower() for value in (self.title, self.left_file_name, self.right_file_name)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "title": self.title,
            "leftFileName": self.left_file_name,
            "rightFileName": self.right_file_name,
            "leftContent": self.left_content,
            "rightContent": self.right_content,
            "changes": self.changes.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Rebuild an entry from :meth:`to_dict` output.

        Raises
        ------
        ValidationError
            If a required field is missing, ``changes`` is not an object or the
            date is not ISO-8601

        """
        try:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            changes = data.get("changes") or {}
            if not isinstance(changes, dict):
                raise TypeError(f"changes must be an object, got {type(changes).__name__}")
            date = datetime.fromisoformat(str(data["date"]).replace("Z", "+00:00"))
            return cls(
                id=str(data["id"]),
                date=date if date.tzinfo else date.replace(tzinfo=timezone.utc),
                title=str(data.get("title", "")),
                left_file_name=str(data.get("leftFileName", "")),
                right_file_name=str(data.get("rightFileName", "")),
                left_content=str(data["leftContent"]),
                right_content=str(data["rightContent"]),
                changes=ChangeSummary.from_dict(changes),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid history entry: {e}", parameter_name="history", original_error=e) from e


def new_entry_id(existing: Iterable[str] = ()) -> str:
    """Return a millisecond timestamp id not present in ``existing``."""
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def dump_history(entries: Sequence[HistoryEntry]) -> str:
    """Serialize entries (most recent first) to a JSON string."""
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)


def load_history(payload: Optional[str]) -> list[HistoryEntry]:
    """Parse a persisted history payload.

    An absent payload yields an empty history. A payload that is not a JSON
    array is logged and treated as empty; individual invalid entries are
    logged and skipped.
    """
    if not payload:
        return []
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.error("Error parsing saved history: %s", e)
        return []
    if not isinstance(raw, list):
        logger.error("Saved history must be a JSON array, got %s", type(raw).__name__)
        return []

    entries: list[HistoryEntry] = []
    for item in raw:
        try:
            entries.append(HistoryEntry.from_dict(item))
        except ValidationError as e:
            logger.warning("Skipping history entry: %s", e.message)
    return entries
