"""
Core data types for projfind.

Candidates reach the matching engine as plain display strings. Structured
entries (TODO comments, grep hits) keep their fields in the dataclasses below
and render their display string through ``__str__``, so the ranker can match on
the string while carrying the original object through to selection.

Classes:
    MatchProfile: Scoring variant (plain lists vs. file paths)
    OutputFormat: CLI output formats
    ScoredCandidate: Transient (item, label, score, index) tuple of one pass
    TodoItem: A TODO/FIXME comment found in a project file
    LocationHit: A ``file:line`` hit from a content search
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MatchProfile(str, Enum):
    """Scoring variants of the matcher."""

    PLAIN = "plain"  # TODO and usage lists
    PATH = "path"  # file paths: path-aware fast path and boundary bonuses


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    RICH = "rich"


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A matched candidate together with its score and input position."""

    item: Any
    label: str
    score: int
    index: int


@dataclass(frozen=True, slots=True)
class TodoItem:
    file: str
    line: int
    keyword: str
    text: str
    full_line: str = ""

    def __str__(self) -> str:
        return f"[{self.keyword}] {self.file}:{self.line} - {self.text}"


@dataclass(frozen=True, slots=True)
class LocationHit:
    """A single ``file:line`` result of a grep-style search."""

    file: str
    line: int
    content: str
    tag: str | None = None

    def __str__(self) -> str:
        if self.tag:
            return f"[{self.tag}] {self.file}:{self.line}:{self.content}"
        return f"{self.file}:{self.line} - {self.content}"
