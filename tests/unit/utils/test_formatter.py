"""Tests for projfind.utils.formatter module."""

from __future__ import annotations

import io

import orjson
from rich.console import Console

from projfind.core.session import NO_MATCHES_PLACEHOLDER
from projfind.core.types import MatchProfile, OutputFormat, ScoredCandidate, TodoItem
from projfind.utils.formatter import (
    format_results,
    format_text,
    highlight_label,
    render_rich_console,
    to_json_bytes,
)

RESULTS = [
    ScoredCandidate(item="Door.js", label="Door.js", score=2000, index=0),
    ScoredCandidate(item="dxoxr.txt", label="dxoxr.txt", score=7, index=2),
]


def _console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None)


class TestFormatText:
    """Tests for format_text."""

    def test_labels_one_per_line(self):
        assert format_text(RESULTS) == "Door.js\ndxoxr.txt"

    def test_with_scores(self):
        assert format_text(RESULTS, show_scores=True) == "2000  Door.js\n   7  dxoxr.txt"

    def test_placeholder(self):
        assert format_text([]) == NO_MATCHES_PLACEHOLDER


class TestJson:
    """Tests for to_json_bytes."""

    def test_payload(self):
        data = orjson.loads(to_json_bytes("door", RESULTS, total=3))
        assert data["query"] == "door"
        assert data["total_candidates"] == 3
        assert data["count"] == 2
        assert data["items"][0] == {"label": "Door.js", "score": 2000, "index": 0, "item": None}

    def test_structured_item(self):
        todo = TodoItem("a.js", 1, "TODO", "pooling", "// TODO: pooling")
        scored = [ScoredCandidate(item=todo, label=str(todo), score=2000, index=0)]
        data = orjson.loads(to_json_bytes("pool", scored, total=1))
        assert data["items"][0]["item"] == {
            "file": "a.js",
            "line": 1,
            "keyword": "TODO",
            "text": "pooling",
            "full_line": "// TODO: pooling",
        }

    def test_format_results_json(self):
        output = format_results("door", RESULTS, OutputFormat.JSON, total=3)
        assert orjson.loads(output)["count"] == 2

    def test_format_results_text(self):
        assert format_results("door", [], OutputFormat.TEXT) == NO_MATCHES_PLACEHOLDER


class TestRich:
    """Tests for rich rendering."""

    def test_highlight_substring(self):
        text = highlight_label("xDoor.js", "door")
        assert text.plain == "xDoor.js"
        assert [(span.start, span.end) for span in text.spans] == [(1, 2), (2, 3), (3, 4), (4, 5)]

    def test_highlight_path_fragments(self):
        text = highlight_label("src/app/x.ts", "src app", MatchProfile.PATH)
        assert len(text.spans) == 7

    def test_highlight_non_match(self):
        assert highlight_label("abc", "z").spans == []

    def test_table(self):
        console = _console()
        render_rich_console("door", RESULTS, console=console, show_scores=True, title="Files")
        output = console.file.getvalue()
        assert "Files" in output
        assert "Door.js" in output
        assert "2000" in output

    def test_empty_placeholder(self):
        console = _console()
        render_rich_console("zzz", [], console=console)
        assert NO_MATCHES_PLACEHOLDER in console.file.getvalue()
