"""Unit tests for the history CLI command."""

import io

import pytest

from markupdiff.cli.commands.history import _create_history_parser, handle_history_command
from markupdiff.session import DiffSession
from markupdiff.storage import JsonFileStore


@pytest.fixture
def saved_entries():
    """Save two comparisons in the default state file; newest first."""
    session = DiffSession(JsonFileStore())
    session.set_left_content("a\nb\nc\n")
    session.set_right_content("a\nx\nc\n")
    first = session.save_diff_to_history("Typo fix", "old.txt", "new.txt")
    session.set_right_content("a\nb\nc\nd\n")
    second = session.save_diff_to_history("Append line", "old.txt", "longer.txt")
    return second, first


@pytest.mark.unit
@pytest.mark.cli
class TestHistoryParser:
    """Test _create_history_parser()."""

    def test_requires_action(self):
        with pytest.raises(SystemExit):
            _create_history_parser().parse_args([])

    def test_list_defaults(self):
        args = _create_history_parser().parse_args(["list"])
        assert args.search == ""
        assert args.rich is False

    def test_clear_yes(self):
        assert _create_history_parser().parse_args(["clear", "-y"]).yes is True


@pytest.mark.unit
@pytest.mark.cli
class TestHistoryList:
    """Test 'history list'."""

    def test_empty(self, capsys):
        assert handle_history_command(["list"]) == 0
        assert "No saved comparisons." in capsys.readouterr().out

    def test_plain(self, saved_entries, capsys):
        newest, oldest = saved_entries
        assert handle_history_command(["list"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith(newest.id)
        assert "Append line" in lines[0]
        assert "(old.txt -> longer.txt)" in lines[0]
        assert lines[1].endswith("+1 -1")

    def test_search(self, saved_entries, capsys):
        handle_history_command(["list", "--search", "TYPO"])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert "Typo fix" in lines[0]

    def test_search_without_match(self, saved_entries, capsys):
        handle_history_command(["list", "-s", "nothing"])
        assert "No saved comparisons match 'nothing'." in capsys.readouterr().out

    def test_rich_table(self, saved_entries, capsys):
        assert handle_history_command(["list", "--rich"]) == 0
        out = capsys.readouterr().out
        assert "Saved comparisons (2)" in out
        assert saved_entries[0].id in out

    def test_explicit_state_file(self, tmp_path, capsys):
        state_file = tmp_path / "other.json"
        session = DiffSession(JsonFileStore(state_file))
        session.set_left_content("1\n")
        session.set_right_content("2\n")
        session.save_diff_to_history("Elsewhere", "l", "r")

        handle_history_command(["list", "--state-file", str(state_file)])
        assert "Elsewhere" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestHistoryShow:
    """Test 'history show'."""

    def test_show(self, saved_entries, capsys):
        oldest = saved_entries[1]
        assert handle_history_command(["show", oldest.id, "--color", "never"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Typo fix")
        assert lines[1:3] == ["--- old.txt", "+++ new.txt"]
        assert lines[3:] == ["1  a", "2 -b", "2 +x", "3  c"]

    def test_show_uses_config(self, saved_entries, tmp_path, capsys):
        (tmp_path / ".markupdiff.json").write_text('{"contextLines": 0, "showLineNumbers": false}')
        handle_history_command(["show", saved_entries[1].id])
        assert capsys.readouterr().out.splitlines()[3:] == ["-b", "+x"]

    def test_unknown_id(self, saved_entries, capsys):
        assert handle_history_command(["show", "404"]) == 3
        assert "no history entry with id 404" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestHistoryDelete:
    """Test 'history delete'."""

    def test_delete(self, saved_entries, capsys):
        newest, oldest = saved_entries
        assert handle_history_command(["delete", newest.id]) == 0
        assert f"Deleted {newest.id}" in capsys.readouterr().err
        assert [entry.id for entry in DiffSession(JsonFileStore()).history] == [oldest.id]

    def test_unknown_id(self, saved_entries):
        assert handle_history_command(["delete", "404"]) == 3
        assert len(DiffSession(JsonFileStore()).history) == 2


@pytest.mark.unit
@pytest.mark.cli
class TestHistoryClear:
    """Test 'history clear'."""

    def test_clear_with_yes(self, saved_entries, capsys):
        assert handle_history_command(["clear", "--yes"]) == 0
        assert "History cleared." in capsys.readouterr().err
        assert DiffSession(JsonFileStore()).history == ()

    def test_clear_refused_without_terminal(self, saved_entries, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert handle_history_command(["clear"]) == 1
        err = capsys.readouterr().err
        assert "use --yes" in err
        assert "History not cleared." in err
        assert len(DiffSession(JsonFileStore()).history) == 2

    def test_clear_declined_at_prompt(self, saved_entries, monkeypatch):
        monkeypatch.setattr("markupdiff.cli.commands.history._ask", lambda message: False)
        assert handle_history_command(["clear"]) == 1
        assert len(DiffSession(JsonFileStore()).history) == 2
