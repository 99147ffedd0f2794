"""Tests for projfind.sources.base module."""

from __future__ import annotations

from pathlib import Path

import pytest

from projfind.core.types import LocationHit
from projfind.sources.base import (
    CandidateSource,
    CommandResult,
    SubprocessRunner,
    find_project_root,
    parse_location,
)
from projfind.utils.error_handling import ErrorCategory, SourceError


class TestCommandResult:
    """Tests for CommandResult."""

    def test_lines_skip_blanks(self):
        result = CommandResult(0, "a.py\n\nb.py\n")
        assert result.lines == ["a.py", "b.py"]

    def test_default_stderr(self):
        assert CommandResult(1, "").stderr == ""


class TestParseLocation:
    """Tests for parse_location."""

    def test_with_content(self):
        assert parse_location("src/a.py:12:def foo():") == LocationHit(
            "src/a.py", 12, "def foo():"
        )

    def test_content_with_colons(self):
        hit = parse_location("a.js:3:const url = 'http://x:80';")
        assert hit.content == "const url = 'http://x:80';"

    def test_without_content(self):
        assert parse_location("a.py:7") == LocationHit("a.py", 7, "")

    def test_leading_dot_slash(self):
        assert parse_location("./lib/b.go:1:package b").file == "lib/b.go"

    def test_tagged(self):
        hit = parse_location("[fn] a.go:4:func Door() {")
        assert hit == LocationHit("a.go", 4, "func Door() {", tag="fn")

    @pytest.mark.parametrize("line", ["", "no location here", "a.py:x:1", "a.py"])
    def test_not_a_location(self, line):
        assert parse_location(line) is None


class TestFindProjectRoot:
    """Tests for find_project_root."""

    def test_git_toplevel(self, tmp_path: Path, fake_runner):
        runner = fake_runner({"git": CommandResult(0, "/work/repo\n")})
        assert find_project_root(tmp_path, runner) == Path("/work/repo")
        args, cwd = runner.calls[0]
        assert args == ["git", "rev-parse", "--show-toplevel"]
        assert cwd == tmp_path.resolve()

    def test_not_a_repository(self, tmp_path: Path, fake_runner):
        runner = fake_runner({"git": CommandResult(128, "", "fatal: not a git repository")})
        assert find_project_root(tmp_path, runner) == tmp_path.resolve()

    def test_git_missing(self, tmp_path: Path, fake_runner):
        runner = fake_runner(tools=())
        assert find_project_root(tmp_path, runner) == tmp_path.resolve()
        assert runner.calls == []


class TestSubprocessRunner:
    """Tests for SubprocessRunner."""

    def test_unknown_tool_unavailable(self):
        assert not SubprocessRunner().available("projfind-no-such-tool")

    def test_missing_executable_raises(self, tmp_path: Path):
        with pytest.raises(SourceError) as exc_info:
            SubprocessRunner().run(["projfind-no-such-tool", "--version"], tmp_path)
        assert exc_info.value.category == ErrorCategory.EXTERNAL_TOOL
        assert exc_info.value.command == ["projfind-no-such-tool", "--version"]


class _ListSource(CandidateSource):
    name = "list"

    def __init__(self, root, items):
        super().__init__(root)
        self.items = items

    def _collect(self):
        return list(self.items)


class TestCandidateSource:
    """Tests for the CandidateSource base class."""

    def test_collect_returns_items(self, tmp_path: Path):
        assert _ListSource(tmp_path, ["b", "a"]).collect() == ["b", "a"]

    def test_collect_logs_stats(self, tmp_path: Path, caplog):
        caplog.set_level("INFO", logger="projfind")
        _ListSource(tmp_path, ["b", "a"]).collect()
        assert "Collected 2 candidates from list" in caplog.text

    def test_label_is_str(self, tmp_path: Path):
        hit = LocationHit("a.py", 1, "x")
        assert _ListSource(tmp_path, []).label(hit) == "a.py:1 - x"
