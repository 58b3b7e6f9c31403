"""Tests for TbfCompleter."""

import pytest
from pathlib import Path
from unittest.mock import patch

from prompt_toolkit.document import Document

from cli.completer import TbfCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    """Create a TbfCompleter instance."""
    return TbfCompleter()


@pytest.fixture
def work_dir(tmp_path):
    """
    Create a temporary working directory with test files.

    Returns:
        Path to the working directory
    """
    (tmp_path / "document.txt").write_text("content")
    (tmp_path / "image.png").write_text("content")
    (tmp_path / ".hidden").write_text("content")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "notes.md").write_text("content")
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


def get_completions_display(completer, text):
    """Helper to get list of completion display texts from completer."""
    doc = Document(text, len(text))
    return [c.display for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        """Empty input should suggest all commands."""
        completions = get_completions_list(completer, "")
        for cmd in COMMANDS:
            assert cmd in completions

    def test_partial_command_filters(self, completer):
        """Partial command should filter to matching commands."""
        completions = get_completions_list(completer, "re")
        assert completions == ["retag", "remove"]

    def test_command_completion_case_insensitive(self, completer):
        """Command completion should be case insensitive."""
        assert get_completions_list(completer, "EX") == ["export", "exit"]


class TestPathCompletion:
    """Tests for path completion in add and update."""

    def test_add_shows_working_directory(self, completer, work_dir):
        """After 'add ', should list files and directories of the cwd."""
        with patch.object(Path, "cwd", return_value=work_dir):
            completions = get_completions_list(completer, "add ")
        assert completions == ["docs/", "document.txt", "image.png"]

    def test_partial_filename(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            completions = get_completions_list(completer, "add doc")
        assert completions == ["docs/", "document.txt"]

    def test_descends_into_directory(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            completions = get_completions_list(completer, "add docs/")
        assert completions == ["docs/notes.md"]

    def test_hidden_files_need_dot_prefix(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            completions = get_completions_list(completer, "add .h")
        assert completions == [".hidden"]

    def test_already_added_files_excluded(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            completions = get_completions_list(completer, "add document.txt ")
        assert "document.txt" not in completions
        assert "image.png" in completions

    def test_no_paths_after_separator(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            assert get_completions_list(completer, "add document.txt -- ") == []

    def test_update_completes_second_argument_only(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            assert get_completions_list(completer, "update ") == []
            assert "image.png" in get_completions_list(completer, "update 100 ")

    def test_other_commands_have_no_path_completion(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            assert get_completions_list(completer, "list ") == []

    def test_no_match_message(self, completer, work_dir):
        with patch.object(Path, "cwd", return_value=work_dir):
            displays = get_completions_display(completer, "add zzz")
        assert len(displays) == 1
        assert "(no files found)" in str(displays[0])
