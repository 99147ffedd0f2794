"""
Configuration module for projfind.

This module defines the FinderConfig class which collects every tunable of the
candidate sources and the CLI: project root, exclude patterns, the per-project
ignore file, result caps and TODO keywords.

Example:
    >>> from projfind.core.config import FinderConfig
    >>> config = FinderConfig(root=Path("."), max_grep_results=200)
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..utils.error_handling import ConfigurationError
from .types import OutputFormat

# Assets and generated files that are never worth opening from a picker
DEFAULT_FILE_EXCLUDES: list[str] = [
    "*.svg",
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.ico",
    "*.webp",
    "*-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "*.lock",
    "*.min.js",
    "*.min.css",
    "dist/",
    "build/",
    "*.map",
]

DEFAULT_TODO_EXCLUDES: list[str] = [
    "node_modules/",
    "vendor/",
    "*.min.js",
    "*.min.css",
    "dist/",
    "build/",
    "*.lock",
    "package-lock.json",
]

# Directories skipped when walking a project that is not a git checkout
DEFAULT_PRUNE_DIRS: frozenset[str] = frozenset(
    {".git", "node_modules", "__pycache__", ".venv", "venv"}
)


@dataclass(slots=True)
class FinderConfig:
    # Scope
    root: Path | None = None  # None = git toplevel of the cwd, else the cwd
    exclude: list[str] | None = None  # None = DEFAULT_FILE_EXCLUDES
    todo_exclude: list[str] | None = None  # None = DEFAULT_TODO_EXCLUDES
    ignore_file: str = ".nvimignore"
    prune_dirs: frozenset[str] = field(default_factory=lambda: DEFAULT_PRUNE_DIRS)

    # Tools
    prefer_ripgrep: bool = True

    # Result caps
    max_grep_results: int = 1000
    max_usage_results: int = 500
    max_definition_results: int = 500
    max_function_hints: int = 15
    function_hint_min_length: int = 3

    # TODO scanner
    todo_keywords: tuple[str, ...] = ("TODO", "FIXME")

    # Output
    output_format: OutputFormat = OutputFormat.TEXT
    limit: int = 0  # 0 = print every ranked result

    def get_exclude_patterns(self) -> list[str]:
        """Get file-finder exclude patterns, using defaults if not specified."""
        if self.exclude is not None:
            return list(self.exclude)
        return list(DEFAULT_FILE_EXCLUDES)

    def get_todo_exclude_patterns(self) -> list[str]:
        """Get TODO-scanner exclude patterns, using defaults if not specified."""
        if self.todo_exclude is not None:
            return list(self.todo_exclude)
        return list(DEFAULT_TODO_EXCLUDES)

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        for name in (
            "max_grep_results",
            "max_usage_results",
            "max_definition_results",
            "max_function_hints",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(
                    f"{name} must be positive",
                    context={"field": name, "value": value},
                )

        if self.function_hint_min_length < 1:
            raise ConfigurationError(
                "function_hint_min_length must be at least 1",
                context={"field": "function_hint_min_length", "value": self.function_hint_min_length},
            )

        if self.limit < 0:
            raise ConfigurationError(
                "Result limit must be non-negative (0 = unlimited)",
                context={"field": "limit", "value": self.limit},
            )

        if not self.todo_keywords or any(not kw.strip() for kw in self.todo_keywords):
            raise ConfigurationError(
                "At least one non-empty TODO keyword is required",
                context={"field": "todo_keywords", "value": list(self.todo_keywords)},
            )

        if not self.ignore_file or "/" in self.ignore_file:
            raise ConfigurationError(
                "Ignore file must be a plain file name",
                context={"field": "ignore_file", "value": self.ignore_file},
            )

        if self.root is not None and not Path(self.root).is_dir():
            raise ConfigurationError(
                f"Project root does not exist or is not a directory: {self.root}",
                context={"field": "root", "value": str(self.root)},
            )
