"""
TODO/FIXME comment scanner.

Scans the project file list (``git ls-files`` or a walk) for lines containing
one of the configured keywords, optionally followed by a colon, and turns each
into a TodoItem whose display string reads ``[TODO] path:line - text``.

Besides the built-in ignores, patterns listed in the project ignore file
(``.nvimignore`` by default, gitignore syntax) are skipped. Files that cannot
be read are recorded in an ErrorCollector and skipped.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..core.config import FinderConfig
from ..core.types import TodoItem
from ..utils.error_handling import ErrorCollector, handle_file_error
from ..utils.helpers import read_ignore_file, read_text
from .base import CandidateSource, CommandRunner
from .files import ProjectFileSource

_COMMENT_TAIL_RE = re.compile(r"\s*\*/$")
_HTML_COMMENT_TAIL_RE = re.compile(r"\s*-->\s*$")

IGNORE_FILE_TEMPLATE = """\
# {name} - Custom patterns to exclude from TODO search
# (In addition to .gitignore and built-in patterns)
#
# Examples:
# *.min.js              - Exclude minified JS
# vendor/               - Exclude vendor directory
# wp-content/plugins/*  - Exclude WordPress plugins

# Add your patterns below:
"""


def clean_todo_text(text: str) -> str:
    """Strip whitespace and trailing block-comment terminators."""
    text = text.strip()
    text = _COMMENT_TAIL_RE.sub("", text)
    text = _HTML_COMMENT_TAIL_RE.sub("", text)
    return text


def create_ignore_file(root: Path, name: str = ".nvimignore") -> tuple[Path, bool]:
    """Write a commented ignore-file template unless one already exists.

    Returns the path and whether it was created.
    """
    path = Path(root) / name
    if path.exists():
        return path, False
    path.write_text(IGNORE_FILE_TEMPLATE.format(name=name), encoding="utf-8")
    return path, True


class TodoSource(CandidateSource):
    """TODO comments across the project, or in a single file."""

    name = "todos"

    def __init__(
        self,
        root: Path,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
        error_collector: ErrorCollector | None = None,
        only_file: str | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        self.error_collector = error_collector or ErrorCollector()
        self.only_file = only_file
        self._patterns = [
            (kw, re.compile(re.escape(kw) + r":?\s*(.+)$")) for kw in self.config.todo_keywords
        ]

    def project_files(self) -> list[str]:
        """Project files minus built-in and ignore-file exclusions."""
        exclude = [
            *self.config.get_todo_exclude_patterns(),
            *read_ignore_file(self.root / self.config.ignore_file),
        ]
        files = ProjectFileSource(self.root, self.config, self.runner, exclude=exclude)
        return files.collect()

    def scan_text(self, rel_path: str, text: str) -> list[TodoItem]:
        """Extract TODO items from file contents, grouped by keyword."""
        lines = text.splitlines()
        todos: list[TodoItem] = []
        for keyword, pattern in self._patterns:
            for line_num, line in enumerate(lines, start=1):
                m = pattern.search(line)
                if m is None:
                    continue
                todos.append(
                    TodoItem(
                        file=rel_path,
                        line=line_num,
                        keyword=keyword,
                        text=clean_todo_text(m.group(1)),
                        full_line=line,
                    )
                )
        return todos

    def scan_file(self, rel_path: str) -> list[TodoItem]:
        """TODO items of one project file; unreadable files yield none."""
        full_path = self.root / rel_path
        try:
            text = read_text(full_path)
        except OSError as e:
            handle_file_error(full_path, "scan", e, self.error_collector, self.logger)
            return []
        if text is None:
            return []
        return self.scan_text(rel_path, text)

    def _collect(self) -> list[TodoItem]:
        if self.only_file is not None:
            return self.scan_file(self.only_file)

        files = self.project_files()
        self.logger.info(f"Scanning {len(files)} files for TODOs...")

        all_todos: list[TodoItem] = []
        file_count = 0
        for rel_path in files:
            todos = self.scan_file(rel_path)
            if todos:
                file_count += 1
                all_todos.extend(todos)

        self.logger.info(f"Found {len(all_todos)} TODOs in {file_count} files")
        return all_todos
