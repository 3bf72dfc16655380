"""Unit tests for context windowing of line diffs."""

import pytest

from markupdiff.diff.context import DiffDocument, LineChange, apply_context, build_diff_document, expand_runs
from markupdiff.diff.line_diff import DiffRun, line_diff
from markupdiff.diff.stats import ChangeSummary
from markupdiff.exceptions import ValidationError
from markupdiff.settings import DiffSettings


def _pairs(document):
    return [(change.classification, change.text) for change in document]


@pytest.mark.unit
class TestExpandRuns:
    """Tests for expand_runs function."""

    def test_one_change_per_line(self):
        changes = list(expand_runs([DiffRun("a\nb\n"), DiffRun("c\n", added=True)]))
        assert [c.text for c in changes] == ["a", "b", "c"]
        assert [c.classification for c in changes] == ["unchanged", "unchanged", "added"]

    def test_line_numbers_skip_removed_lines(self):
        runs = [DiffRun("a\n"), DiffRun("b\n", removed=True), DiffRun("x\n", added=True), DiffRun("c\n")]
        assert [c.line_number for c in expand_runs(runs)] == [1, 2, 2, 3]

    def test_line_numbers_disabled(self):
        changes = list(expand_runs([DiffRun("a\nb\n")], show_line_numbers=False))
        assert all(c.line_number is None for c in changes)


@pytest.mark.unit
class TestApplyContext:
    """Tests for apply_context function."""

    def test_replaced_line_with_one_context_line(self):
        """One line of context stays on each side of a single replaced line."""
        document = apply_context(line_diff("a\nb\nc\n", "a\nx\nc\n"), 1)
        assert _pairs(document) == [
            ("unchanged", "a"),
            ("removed", "b"),
            ("added", "x"),
            ("unchanged", "c"),
        ]

    def test_long_prefix_is_trimmed_to_most_recent_lines(self, sample_lines):
        document = apply_context(line_diff(*sample_lines), 2)
        texts = [c.text for c in document]
        assert texts[:2] == ["line 3", "line 4"]
        assert "line 1" not in texts

    def test_trailing_buffer_keeps_most_recent_lines(self, sample_lines):
        """Context after the last change is the tail of the input."""
        document = apply_context(line_diff(*sample_lines), 1)
        assert _pairs(document) == [
            ("unchanged", "line 4"),
            ("removed", "line 5"),
            ("added", "LINE FIVE"),
            ("unchanged", "line 9"),
        ]

    def test_line_numbers_follow_the_after_side(self, sample_lines):
        document = apply_context(line_diff(*sample_lines), 1)
        assert [c.line_number for c in document] == [4, 5, 5, 9]

    def test_zero_context_keeps_only_changes(self, sample_lines):
        document = apply_context(line_diff(*sample_lines), 0)
        assert _pairs(document) == [("removed", "line 5"), ("added", "LINE FIVE")]

    def test_large_context_keeps_everything(self, sample_lines):
        before, after = sample_lines
        document = apply_context(line_diff(before, after), 100)
        assert len(document) == 10

    def test_no_changes_keeps_only_the_tail(self):
        document = apply_context(line_diff("a\nb\nc\nd\n", "a\nb\nc\nd\n"), 2)
        assert _pairs(document) == [("unchanged", "c"), ("unchanged", "d")]
        assert not document.has_changes

    def test_gap_between_changes_is_bounded(self):
        before = "x1\na\nb\nc\nd\nx2\n"
        after = "y1\na\nb\nc\nd\ny2\n"
        document = apply_context(line_diff(before, after), 1)
        assert _pairs(document) == [
            ("removed", "x1"),
            ("added", "y1"),
            ("unchanged", "d"),
            ("removed", "x2"),
            ("added", "y2"),
        ]

    def test_removed_then_added_keeps_order(self):
        """A removed run directly followed by an added run stays in order."""
        document = apply_context(line_diff("keep\nold\n", "keep\nnew\n"), 3)
        assert _pairs(document) == [("unchanged", "keep"), ("removed", "old"), ("added", "new")]

    def test_changes_are_never_dropped(self):
        before = "\n".join(f"line {i}" for i in range(50)) + "\n"
        after = before.replace("line 10\n", "changed 10\n").replace("line 40\n", "changed 40\n")
        document = apply_context(line_diff(before, after), 0)
        assert document.lines_of("removed") == ["line 10", "line 40"]
        assert document.lines_of("added") == ["changed 10", "changed 40"]

    def test_negative_context_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            apply_context([], -1)
        assert exc_info.value.parameter_name == "context_lines"

    def test_empty_runs(self):
        document = apply_context([], 3)
        assert len(document) == 0
        assert document.context_lines == 3


@pytest.mark.unit
class TestDiffDocument:
    """Tests for the DiffDocument container."""

    def test_sequence_behaviour(self):
        changes = [LineChange("a", "unchanged", 1), LineChange("b", "added", 2)]
        document = DiffDocument(changes, context_lines=3)
        assert len(document) == 2
        assert document[1].text == "b"
        assert list(document) == changes
        assert document.changes == tuple(changes)

    def test_summary_counts(self):
        document = apply_context(line_diff("a\nb\nc\n", "a\nx\nc\ny\n"), 3)
        assert document.summary() == ChangeSummary(added=2, removed=1, unchanged=2)

    def test_equality(self):
        first = apply_context(line_diff("a\n", "b\n"), 1)
        second = apply_context(line_diff("a\n", "b\n"), 1)
        assert first == second
        assert first != apply_context(line_diff("a\n", "b\n"), 2)

    def test_is_change(self):
        assert LineChange("a", "added").is_change
        assert not LineChange("a", "unchanged").is_change


@pytest.mark.unit
class TestBuildDiffDocument:
    """Tests for build_diff_document function."""

    def test_uses_settings(self):
        settings = DiffSettings(ignore_case=True, context_lines=0, show_line_numbers=False)
        document = build_diff_document("Same\nOld\n", "same\nNew\n", settings)
        assert _pairs(document) == [("removed", "old"), ("added", "new")]
        assert all(c.line_number is None for c in document)
        assert document.context_lines == 0

    def test_ignore_whitespace(self):
        settings = DiffSettings(ignore_whitespace=True)
        document = build_diff_document("a  b\n", "a b \n", settings)
        assert not document.has_changes
