"""Unit tests for the DiffSession orchestrator."""

import json
import logging

import pytest

from markupdiff.constants import CLEAR_HISTORY_PROMPT, SAMPLE_BEFORE_MARKUP
from markupdiff.diff.context import build_diff_document
from markupdiff.exceptions import StorageError, ValidationError
from markupdiff.markup.nodes import AlignmentStatus, walk_aligned
from markupdiff.markup.parser import parse_markup
from markupdiff.session import DiffSession
from markupdiff.settings import DiffSettings
from markupdiff.storage import InMemoryStore


class FailingStore:
    """Store whose reads and writes always fail."""

    def get(self, key):
        raise StorageError(f"cannot read {key}", key=key)

    def set(self, key, value):
        raise StorageError(f"cannot write {key}", key=key)


def failing_parser(markup):
    if "BAD" in markup:
        raise RuntimeError("boom")
    return parse_markup(markup)


def pairs(document):
    return [(change.classification, change.text) for change in document]


@pytest.fixture
def session(memory_store):
    return DiffSession(memory_store)


@pytest.mark.unit
class TestInitialState:
    """Test a freshly created session."""

    def test_defaults(self, session):
        assert session.settings == DiffSettings()
        assert session.history == ()
        assert session.left_content == ""
        assert session.right_content == ""
        assert session.before_code == SAMPLE_BEFORE_MARKUP
        assert session.diff_document is None
        assert session.diffed_tree is None
        assert session.is_computing is False
        assert session.error is None

    def test_loads_persisted_settings(self):
        store = InMemoryStore({"diffSettings": json.dumps({"contextLines": 9, "ignoreCase": True})})
        settings = DiffSession(store).settings
        assert settings.context_lines == 9
        assert settings.ignore_case is True

    def test_corrupt_settings_fall_back_to_defaults(self, caplog):
        store = InMemoryStore({"diffSettings": "{not json"})
        with caplog.at_level(logging.ERROR, logger="markupdiff.session"):
            assert DiffSession(store).settings == DiffSettings()
        assert "Error parsing saved settings" in caplog.text

    def test_invalid_settings_fall_back_to_defaults(self):
        store = InMemoryStore({"diffSettings": json.dumps({"contextLines": -4})})
        assert DiffSession(store).settings == DiffSettings()

    def test_unreadable_store(self):
        session = DiffSession(FailingStore())
        assert session.settings == DiffSettings()
        assert session.history == ()

    def test_malformed_history_entry_is_skipped(self):
        entry = {
            "id": "1",
            "date": "2025-01-01T00:00:00Z",
            "leftContent": "a",
            "rightContent": "b",
            "changes": [1, 2],
        }
        store = InMemoryStore({"diffHistory": json.dumps([entry])})
        assert DiffSession(store).history == ()

    def test_explicit_settings_are_not_persisted(self, memory_store):
        session = DiffSession(memory_store, settings=DiffSettings(context_lines=0))
        assert session.settings.context_lines == 0
        assert memory_store.get("diffSettings") is None


@pytest.mark.unit
class TestContentSetters:
    """Test the left/right and before/after setters."""

    def test_line_diff_refreshes_when_both_sides_set(self, session):
        session.set_left_content("a\nb\nc\n")
        assert session.diff_document is None
        session.set_right_content("a\nx\nc\n")
        assert pairs(session.diff_document) == [
            ("unchanged", "a"),
            ("removed", "b"),
            ("added", "x"),
            ("unchanged", "c"),
        ]

    def test_setting_again_recomputes(self, session):
        session.set_left_content("a\n")
        session.set_right_content("b\n")
        session.set_right_content("a\n")
        assert not session.diff_document.has_changes

    def test_refresh_clears_previous_error(self, session, monkeypatch):
        real_build = build_diff_document
        calls = []

        def flaky_build(before, after, settings):
            calls.append(before)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return real_build(before, after, settings)

        monkeypatch.setattr("markupdiff.session.build_diff_document", flaky_build)
        session.set_left_content("a\n")
        session.set_right_content("b\n")
        assert "boom" in session.error

        session.set_right_content("c\n")
        assert session.error is None
        assert pairs(session.diff_document) == [("removed", "a"), ("added", "c")]

    def test_set_contents_does_not_compute(self, session):
        session.set_contents("a\n", "b\n")
        assert session.left_content == "a\n"
        assert session.right_content == "b\n"
        assert session.diff_document is None

        session.compute_diff()
        assert pairs(session.diff_document) == [("removed", "a"), ("added", "b")]

    def test_code_setters_do_not_compute(self, session):
        session.set_before_code("<p>a</p>")
        session.set_after_code("<p>b</p>")
        assert session.before_code == "<p>a</p>"
        assert session.diffed_tree is None


@pytest.mark.unit
class TestComputeDiff:
    """Test DiffSession.compute_diff."""

    def test_computes_tree_and_lines_from_markup(self, session):
        session.set_before_code('<ul><li key="1">Item 1</li></ul>')
        session.set_after_code('<ul><li key="1">Item 1 updated</li></ul>')
        session.compute_diff()

        assert session.error is None
        ul = session.diffed_tree[0]
        assert ul.status is AlignmentStatus.UNCHANGED
        assert ul.children[0].status is AlignmentStatus.UPDATED
        assert session.before_tree is not None
        assert session.after_tree is not None
        assert session.diff_document.lines_of("added") == ['<ul><li key="1">Item 1 updated</li></ul>']

    def test_line_diff_prefers_left_and_right(self, session):
        session.set_left_content("left\n")
        session.set_right_content("right\n")
        session.compute_diff()
        assert pairs(session.diff_document) == [("removed", "left"), ("added", "right")]

    def test_sample_markup_by_default(self, session):
        session.compute_diff()
        assert session.diffed_tree[0].tag_name == "div"
        assert session.diff_document.has_changes

    def test_is_computing_only_during_compute(self, memory_store):
        observed = []
        holder = {}

        def recording_parser(markup):
            observed.append(holder["session"].is_computing)
            return parse_markup(markup)

        holder["session"] = DiffSession(memory_store, parser=recording_parser)
        holder["session"].compute_diff()
        assert observed == [True, True]
        assert holder["session"].is_computing is False

    def test_parse_error_keeps_previous_tree(self, memory_store):
        session = DiffSession(memory_store, parser=failing_parser)
        session.compute_diff()
        previous_tree = session.diffed_tree
        assert previous_tree is not None

        session.set_before_code("BAD markup")
        session.compute_diff()

        assert session.error.startswith("Failed to parse markup:")
        assert "boom" in session.error
        assert session.diffed_tree is previous_tree
        assert session.is_computing is False

    def test_parse_error_does_not_abort_line_diff(self, memory_store):
        session = DiffSession(memory_store, parser=failing_parser, before_code="BAD\n", after_code="GOOD\n")
        session.compute_diff()
        assert session.diffed_tree is None
        assert pairs(session.diff_document) == [("removed", "BAD"), ("added", "GOOD")]

    def test_error_is_cleared_by_next_success(self, memory_store):
        session = DiffSession(memory_store, parser=failing_parser, before_code="BAD")
        session.compute_diff()
        assert session.error is not None
        session.set_before_code("<p>fine</p>")
        session.compute_diff()
        assert session.error is None

    def test_tree_statistics(self, session):
        session.set_before_code("<p>a</p>")
        session.set_after_code("<p>b</p><p>c</p>")
        session.compute_diff()
        summary = session.tree_summary()
        assert summary.added == 2
        assert summary.updated == 2


@pytest.mark.unit
class TestSettingsOperations:
    """Test update_settings and reset_settings."""

    def test_update_persists(self, session, memory_store):
        session.update_settings(context_lines=5, ignore_case=True)
        stored = json.loads(memory_store.get("diffSettings"))
        assert stored["contextLines"] == 5
        assert stored["ignoreCase"] is True

    def test_update_does_not_recompute(self, session):
        session.set_left_content("a\nb\nc\n")
        session.set_right_content("a\nx\nc\n")
        before_update = session.diff_document

        session.update_settings(context_lines=0)
        assert session.diff_document is before_update

        session.compute_diff()
        assert pairs(session.diff_document) == [("removed", "b"), ("added", "x")]

    def test_invalid_update_keeps_settings(self, session, memory_store):
        with pytest.raises(ValidationError):
            session.update_settings(context_lines=-1)
        assert session.settings == DiffSettings()
        assert memory_store.get("diffSettings") is None

    def test_reset(self, session, memory_store):
        session.update_settings(context_lines=8)
        assert session.reset_settings() == DiffSettings()
        assert json.loads(memory_store.get("diffSettings"))["contextLines"] == 3

    def test_persisted_across_sessions(self, memory_store):
        DiffSession(memory_store).update_settings(ignore_whitespace=True)
        assert DiffSession(memory_store).settings.ignore_whitespace is True

    def test_storage_failure_is_logged(self, caplog):
        session = DiffSession(FailingStore())
        with caplog.at_level(logging.WARNING, logger="markupdiff.session"):
            session.update_settings(context_lines=1)
        assert session.settings.context_lines == 1
        assert "Could not persist diffSettings" in caplog.text


@pytest.mark.unit
class TestHistoryOperations:
    """Test saving, loading, deleting, clearing and searching history."""

    @pytest.fixture
    def filled(self, memory_store):
        session = DiffSession(memory_store, confirm=lambda message: True)
        session.set_left_content("a\nb\n")
        session.set_right_content("a\nc\n")
        session.save_diff_to_history("first", "one.txt", "two.txt")
        session.set_left_content("x\n")
        session.set_right_content("y\n")
        session.save_diff_to_history("second", "left.html", "right.html")
        return session

    def test_save_with_empty_content_is_a_no_op(self, session, memory_store):
        session.set_right_content("something\n")
        assert session.save_diff_to_history("title", "l", "r") is None
        assert session.history == ()
        assert memory_store.get("diffHistory") is None

    def test_save_prepends_and_persists(self, filled, memory_store):
        assert [entry.title for entry in filled.history] == ["second", "first"]
        stored = json.loads(memory_store.get("diffHistory"))
        assert [item["title"] for item in stored] == ["second", "first"]

    def test_saved_entry_contents(self, filled):
        entry = filled.history[1]
        assert entry.left_content == "a\nb\n"
        assert entry.right_content == "a\nc\n"
        assert entry.left_file_name == "one.txt"
        assert entry.changes.added == 1
        assert entry.changes.removed == 1
        assert entry.date.tzinfo is not None

    def test_ids_are_unique(self, filled):
        ids = [entry.id for entry in filled.history]
        assert len(set(ids)) == len(ids)

    def test_history_reloads(self, filled, memory_store):
        assert DiffSession(memory_store).history == filled.history

    def test_load(self, filled):
        first = filled.history[1]
        assert filled.load_diff_from_history(first.id) is True
        assert filled.left_content == "a\nb\n"
        assert filled.right_content == "a\nc\n"
        assert filled.diff_document.lines_of("added") == ["c"]

    def test_load_unknown_id(self, filled):
        assert filled.load_diff_from_history("nope") is False
        assert filled.left_content == "x\n"

    def test_delete(self, filled, memory_store):
        target = filled.history[0].id
        assert filled.delete_diff_from_history(target) is True
        assert [entry.title for entry in filled.history] == ["first"]
        assert len(json.loads(memory_store.get("diffHistory"))) == 1
        assert filled.delete_diff_from_history(target) is False

    def test_clear_with_confirmation(self, filled, memory_store):
        assert filled.clear_history() is True
        assert filled.history == ()
        assert json.loads(memory_store.get("diffHistory")) == []

    def test_clear_declined(self, memory_store):
        prompts = []

        def decline(message):
            prompts.append(message)
            return False

        session = DiffSession(memory_store, confirm=decline)
        session.set_left_content("a\n")
        session.set_right_content("b\n")
        session.save_diff_to_history("t", "l", "r")

        assert session.clear_history() is False
        assert len(session.history) == 1
        assert prompts == [CLEAR_HISTORY_PROMPT]

    def test_clear_without_callback_is_refused(self, memory_store):
        session = DiffSession(memory_store)
        session.set_left_content("a\n")
        session.set_right_content("b\n")
        session.save_diff_to_history("t", "l", "r")
        assert session.clear_history() is False
        assert len(session.history) == 1

    def test_search(self, filled):
        assert [entry.title for entry in filled.search_history("HTML")] == ["second"]
        assert [entry.title for entry in filled.search_history("fir")] == ["first"]
        assert len(filled.search_history("")) == 2
        assert filled.search_history("zzz") == ()

    def test_history_is_read_only_snapshot(self, filled):
        snapshot = filled.history
        filled.delete_diff_from_history(snapshot[0].id)
        assert len(snapshot) == 2


@pytest.mark.unit
class TestStatistics:
    """Test DiffSession.statistics."""

    def test_without_diff(self, session):
        stats = session.statistics()
        assert stats.total_changes == 0
        assert stats.left_size == 0

    def test_with_diff(self, session):
        session.set_left_content("a\nb\nc\n")
        session.set_right_content("a\nx\nc\nd\n")
        stats = session.statistics()
        assert stats.summary.added == 2
        assert stats.summary.removed == 1
        assert stats.left_size == 6
        assert stats.right_size == 8
        assert stats.size_difference == 2
        assert stats.change_percentage == 60


@pytest.mark.unit
class TestWalk:
    """Aligned results can be walked depth first."""

    def test_walk_depths(self, session):
        session.set_before_code("<div><p>a</p></div>")
        session.set_after_code("<div><p>a</p></div>")
        session.compute_diff()
        assert [(depth, node.kind.value) for depth, node in walk_aligned(session.diffed_tree)] == [
            (0, "element"),
            (1, "element"),
            (2, "text"),
        ]
