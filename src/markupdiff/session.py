#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/session.py
"""Stateful coordination of line and tree diffs.

:class:`DiffSession` owns the current inputs, the settings, the last computed
results and the saved history of one user session. Settings and history are
loaded from an injected :class:`~markupdiff.storage.KeyValueStore` when the
session is created and written back after every change to them.

Everything runs synchronously on the calling thread. ``is_computing`` is
only true while :meth:`DiffSession.compute_diff` is running.

Examples
--------
    >>> session = DiffSession()
    >>> session.set_left_content("a\\nb\\nc\\n")
    >>> session.set_right_content("a\\nx\\nc\\n")
    >>> [c.classification for c in session.diff_document]
    ['unchanged', 'removed', 'added', 'unchanged']

"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from markupdiff.constants import (
    CLEAR_HISTORY_PROMPT,
    HISTORY_STORE_KEY,
    SAMPLE_AFTER_MARKUP,
    SAMPLE_BEFORE_MARKUP,
    SETTINGS_STORE_KEY,
)
from markupdiff.diff.context import DiffDocument, build_diff_document
from markupdiff.diff.stats import ChangeSummary, DiffStatistics, TreeSummary, compute_statistics, summarize_tree
from markupdiff.diff.tree_align import align_forest
from markupdiff.exceptions import DiffComputationError, MarkupDiffError, ParsingError, StorageError
from markupdiff.history import HistoryEntry, dump_history, load_history, new_entry_id
from markupdiff.markup.nodes import AlignedNode, MarkupNode
from markupdiff.markup.parser import parse_markup
from markupdiff.settings import DiffSettings
from markupdiff.storage import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)

MarkupParser = Callable[[str], "tuple[MarkupNode, ...]"]
ConfirmCallback = Callable[[str], bool]


class DiffSession:
    """Coordinator for the line diff, the tree diff and their history.

    Parameters
    ----------
    store : KeyValueStore, optional
        Persistence for settings and history, defaults to an
        :class:`~markupdiff.storage.InMemoryStore`
    confirm : callable, optional
        ``confirm(message) -> bool`` asked before the whole history is
        cleared. Without one, clearing is refused.
    parser : callable, optional
        Markup parser returning a forest, defaults to
        :func:`~markupdiff.markup.parser.parse_markup`
    before_code : str, optional
        Initial "before" markup, defaults to a small sample document
    after_code : str, optional
        Initial "after" markup, defaults to a small sample document
    settings : DiffSettings, optional
        Settings to start from instead of the persisted ones. They are not
        written back until :meth:`update_settings` or :meth:`reset_settings`
        is called.

    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        confirm: Optional[ConfirmCallback] = None,
        parser: Optional[MarkupParser] = None,
        before_code: str = SAMPLE_BEFORE_MARKUP,
        after_code: str = SAMPLE_AFTER_MARKUP,
        settings: Optional[DiffSettings] = None,
    ) -> None:
        self._store: KeyValueStore = store if store is not None else InMemoryStore()
        self._confirm = confirm
        self._parse = parser or parse_markup

        self._left_content = ""
        self._right_content = ""
        self._before_code = before_code
        self._after_code = after_code

        self._diff_document: Optional[DiffDocument] = None
        self._before_tree: Optional[tuple[MarkupNode, ...]] = None
        self._after_tree: Optional[tuple[MarkupNode, ...]] = None
        self._diffed_tree: Optional[tuple[AlignedNode, ...]] = None
        self._is_computing = False
        self._error: Optional[str] = None

        self._settings = settings if settings is not None else self._load_settings()
        self._history: list[HistoryEntry] = load_history(self._read(HISTORY_STORE_KEY))

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def left_content(self) -> str:
        return self._left_content

    @property
    def right_content(self) -> str:
        return self._right_content

    @property
    def before_code(self) -> str:
        return self._before_code

    @property
    def after_code(self) -> str:
        return self._after_code

    @property
    def settings(self) -> DiffSettings:
        return self._settings

    @property
    def diff_document(self) -> Optional[DiffDocument]:
        return self._diff_document

    @property
    def before_tree(self) -> Optional[tuple[MarkupNode, ...]]:
        return self._before_tree

    @property
    def after_tree(self) -> Optional[tuple[MarkupNode, ...]]:
        return self._after_tree

    @property
    def diffed_tree(self) -> Optional[tuple[AlignedNode, ...]]:
        return self._diffed_tree

    @property
    def is_computing(self) -> bool:
        return self._is_computing

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except (StorageError, OSError) as e:
            logger.error("Could not load %s: %s", key, e)
            return None

    def _write(self, key: str, payload: str) -> None:
        try:
            self._store.set(key, payload)
        except (StorageError, OSError) as e:
            logger.warning("Could not persist %s: %s", key, e)

    def _load_settings(self) -> DiffSettings:
        payload = self._read(SETTINGS_STORE_KEY)
        if not payload:
            return DiffSettings()
        try:
            data = json.loads(payload)
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return DiffSettings.from_dict(data)
        except (ValueError, TypeError, MarkupDiffError) as e:
            logger.error("Error parsing saved settings, using defaults: %s", e)
            return DiffSettings()

    def _save_settings(self) -> None:
        self._write(SETTINGS_STORE_KEY, json.dumps(self._settings.to_dict()))

    def _save_history(self) -> None:
        self._write(HISTORY_STORE_KEY, dump_history(self._history))

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def set_left_content(self, content: str) -> None:
        """Replace the left text; refresh the line diff when both sides are set."""
        self._left_content = content
        if content and self._right_content:
            self._refresh_line_diff(content, self._right_content)

    def set_right_content(self, content: str) -> None:
        """Replace the right text; refresh the line diff when both sides are set."""
        self._right_content = content
        if self._left_content and content:
            self._refresh_line_diff(self._left_content, content)

    def set_contents(self, left: str, right: str) -> None:
        """Replace both texts without recomputing; :meth:`compute_diff` refreshes the results."""
        self._left_content = left
        self._right_content = right

    def set_before_code(self, code: str) -> None:
        self._before_code = code

    def set_after_code(self, code: str) -> None:
        self._after_code = code

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def _parse_side(self, markup: str, stage: str) -> tuple[MarkupNode, ...]:
        try:
            return tuple(self._parse(markup))
        except ParsingError as e:
            e.parsing_stage = e.parsing_stage or stage
            raise
        except Exception as e:
            raise ParsingError(f"Failed to parse {stage} markup: {e}", parsing_stage=stage, original_error=e) from e

    def _compute_tree(self) -> None:
        before_tree = self._parse_side(self._before_code, "before")
        after_tree = self._parse_side(self._after_code, "after")
        try:
            diffed = align_forest(before_tree, after_tree)
        except Exception as e:
            raise DiffComputationError(f"Tree alignment failed: {e}", component="tree_align", original_error=e) from e

        self._before_tree = before_tree
        self._after_tree = after_tree
        self._diffed_tree = diffed

    def _compute_lines(self, left: str, right: str) -> None:
        try:
            document = build_diff_document(left, right, self._settings)
        except Exception as e:
            raise DiffComputationError(f"Line diff failed: {e}", component="line_diff", original_error=e) from e
        self._diff_document = document

    def _line_sources(self) -> Optional[tuple[str, str]]:
        if self._left_content and self._right_content:
            return self._left_content, self._right_content
        if self._before_code and self._after_code:
            return self._before_code, self._after_code
        return None

    def _refresh_line_diff(self, left: str, right: str) -> None:
        self._error = None
        try:
            self._compute_lines(left, right)
        except DiffComputationError as e:
            logger.error("%s", e.message)
            self._error = f"Error computing diff: {e.message}"

    def compute_diff(self) -> None:
        """Recompute both the tree diff and the line diff.

        The tree diff compares ``before_code`` with ``after_code``. The line
        diff compares the left/right texts when both are non-empty, otherwise
        the before/after markup when both are non-empty. A failure in one
        does not stop the other; failures are recorded in :attr:`error` and
        leave the previous result of the failing half in place.
        """
        self._is_computing = True
        self._error = None
        messages: list[str] = []
        try:
            try:
                self._compute_tree()
            except ParsingError as e:
                logger.warning("Markup parsing failed (%s): %s", e.parsing_stage, e.message)
                messages.append(f"Failed to parse markup: {e.message}")
            except MarkupDiffError as e:
                logger.error("%s", e.message)
                messages.append(f"Error computing diff: {e.message}")

            sources = self._line_sources()
            if sources is not None:
                try:
                    self._compute_lines(*sources)
                except MarkupDiffError as e:
                    logger.error("%s", e.message)
                    messages.append(f"Error computing diff: {e.message}")
        except Exception as e:
            logger.exception("Unexpected failure while computing diff")
            messages.append(f"Error computing diff: {e}")
        finally:
            self._is_computing = False

        if messages:
            self._error = "; ".join(messages)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def update_settings(self, **changes: object) -> DiffSettings:
        """Merge ``changes`` into the settings and persist them.

        Results are not recomputed; call :meth:`compute_diff` to apply the
        new settings.

        Raises
        ------
        ValidationError
            If a name is unknown or a value is invalid; settings stay as they were

        """
        self._settings = self._settings.create_updated(**changes)
        self._save_settings()
        return self._settings

    def reset_settings(self) -> DiffSettings:
        """Restore default settings and persist them."""
        self._settings = DiffSettings()
        self._save_settings()
        return self._settings

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def save_diff_to_history(
        self,
        title: str,
        left_file_name: str,
        right_file_name: str,
    ) -> Optional[HistoryEntry]:
        """Snapshot the current left/right texts at the front of the history.

        Does nothing and returns ``None`` if either text is empty.
        """
        if not self._left_content or not self._right_content:
            logger.debug("Not saving history entry: content is empty")
            return None

        changes = self._diff_document.summary() if self._diff_document is not None else ChangeSummary()
        entry = HistoryEntry(
            id=new_entry_id(item.id for item in self._history),
            date=datetime.now(timezone.utc),
            title=title,
            left_file_name=left_file_name,
            right_file_name=right_file_name,
            left_content=self._left_content,
            right_content=self._right_content,
            changes=changes,
        )
        self._history.insert(0, entry)
        self._save_history()
        return entry

    def get_history_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((entry for entry in self._history if entry.id == entry_id), None)

    def load_diff_from_history(self, entry_id: str) -> bool:
        """Restore the texts of a saved entry and recompute the line diff.

        Returns False (and changes nothing) when no entry has this id.
        """
        entry = self.get_history_entry(entry_id)
        if entry is None:
            logger.debug("History entry %s not found", entry_id)
            return False

        self._left_content = entry.left_content
        self._right_content = entry.right_content
        self._refresh_line_diff(entry.left_content, entry.right_content)
        return True

    def delete_diff_from_history(self, entry_id: str) -> bool:
        """Remove one entry. Returns whether anything was removed."""
        remaining = [entry for entry in self._history if entry.id != entry_id]
        if len(remaining) == len(self._history):
            return False
        self._history = remaining
        self._save_history()
        return True

    def clear_history(self) -> bool:
        """Remove every entry after the confirmation callback agrees."""
        if self._confirm is None or not self._confirm(CLEAR_HISTORY_PROMPT):
            logger.debug("Clearing history was not confirmed")
            return False
        self._history = []
        self._save_history()
        return True

    def search_history(self, term: str) -> tuple[HistoryEntry, ...]:
        """Return entries whose title or file names contain ``term``."""
        if not term:
            return self.history
        return tuple(entry for entry in self._history if entry.matches(term))

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(self) -> DiffStatistics:
        """Line counts of the current diff plus input sizes."""
        summary = self._diff_document.summary() if self._diff_document is not None else ChangeSummary()
        return compute_statistics(summary, self._left_content, self._right_content)

    def tree_summary(self) -> TreeSummary:
        return summarize_tree(self._diffed_tree or ())
