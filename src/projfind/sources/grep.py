"""
Grep-backed candidate sources: content search, usages and function lookup.

ripgrep is preferred when installed, otherwise ``grep -rn`` is used. Both
print ``path:line:content`` records relative to the project root. Exit code 1
means "no matches" for both tools and is not an error.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from ..core.config import FinderConfig
from ..core.types import LocationHit, MatchProfile
from ..utils.error_handling import SourceError
from ..utils.helpers import build_pathspec, normalize_relpath
from .base import CandidateSource, CommandRunner, parse_location

RG_BASE = ["rg", "--line-number", "--no-heading", "--color=never"]
GREP_BASE = ["grep", "-rn", "--exclude-dir=.git", "--exclude-dir=node_modules"]

FUNCTION_TAG = "fn"

# Definition shapes across JS/TS, Python, Go, Rust and C-like languages;
# ``{name}`` is substituted with the escaped function name.
DEFINITION_PATTERNS = [
    r"function\s+{name}",
    r"{name}\s*[:=]\s*function",
    r"{name}\s*[:=]\s*\(",
    r"def\s+{name}\s*\(",
    r"func\s+{name}\s*\(",
    r"fn\s+{name}\s*\(",
    r"\s+{name}\s*\(",
    r"{name}\s*\([^)]*\)\s*\{{",
]


def looks_like_function_name(query: str, min_length: int = 3) -> bool:
    """
    Guess whether ``query`` is a function name being typed.

    True for queries of at least ``min_length`` characters that start with an
    ASCII capital (CamelCase) or contain an underscore (snake_case).
    """
    if len(query) < min_length:
        return False
    return ("A" <= query[0] <= "Z") or "_" in query


class GrepBackedSource(CandidateSource):
    """Base for sources that shell out to rg or grep."""

    def _search(
        self, patterns: list[str], rg_flags: Sequence[str] = (), grep_flags: Sequence[str] = ()
    ) -> list[str]:
        expr: list[str] = []
        for pattern in patterns:
            expr += ["-e", pattern]

        if self.config.prefer_ripgrep and self.runner.available("rg"):
            args = [*RG_BASE, *rg_flags, *expr, "."]
        elif self.runner.available("grep"):
            args = [*GREP_BASE, *grep_flags, *expr, "."]
        else:
            raise SourceError("No content search tool found (tried rg and grep)")

        result = self.runner.run(args, self.root)
        if result.returncode > 1:
            if not result.lines:
                raise SourceError(
                    f"{args[0]} failed: {result.stderr.strip() or 'unknown error'}",
                    command=args,
                    returncode=result.returncode,
                )
            # grep -r exits 2 on unreadable files but still prints matches
            self.logger.warning(
                f"{args[0]} reported errors, keeping partial results",
                returncode=result.returncode,
            )
        return [normalize_relpath(line) for line in result.lines]

    def _cap(self, items: list, limit: int) -> list:
        if len(items) > limit:
            self.logger.info(f"Showing first {limit} of {len(items)} {self.name} results")
            return items[:limit]
        return items


class ContentSearchSource(GrepBackedSource):
    """Lines containing ``pattern``, as raw ``path:line:content`` strings."""

    name = "grep"
    profile = MatchProfile.PATH

    def __init__(
        self,
        root: Path,
        pattern: str,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        self.pattern = pattern

    def _collect(self) -> list[str]:
        if not self.pattern:
            return []
        lines = self._search([self.pattern], rg_flags=["--smart-case"])
        return self._cap(lines, self.config.max_grep_results)


class UsageSource(GrepBackedSource):
    """Whole-word occurrences of a symbol."""

    name = "usages"

    def __init__(
        self,
        root: Path,
        symbol: str,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        self.symbol = symbol

    def _collect(self) -> list[LocationHit]:
        if not self.symbol:
            return []
        usages = []
        for line in self._search([self.symbol], rg_flags=["--word-regexp"], grep_flags=["-w"]):
            hit = parse_location(line)
            if hit is None or not hit.content.strip():
                continue
            usages.append(LocationHit(hit.file, hit.line, hit.content.strip()))
        return self._cap(usages, self.config.max_usage_results)


class FunctionHintSource(GrepBackedSource):
    """
    Function definitions resembling the file-finder query.

    Feeds extra ``[fn] path:line:content`` candidates into the file picker,
    but only while the query looks like a function name.
    """

    name = "function-hints"
    profile = MatchProfile.PATH

    def __init__(
        self,
        root: Path,
        query: str,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        self.query = query
        self.exclude_spec = build_pathspec(self.config.get_exclude_patterns())

    @property
    def active(self) -> bool:
        return looks_like_function_name(self.query, self.config.function_hint_min_length)

    def _collect(self) -> list[str]:
        if not self.active:
            return []
        q = re.escape(self.query)
        pattern = f"function.*{q}|{q}.*function|def.*{q}|{q}.*\\(|func.*{q}"
        lines = self._search([pattern], rg_flags=["-i"], grep_flags=["-i", "-E"])
        hints = []
        for line in lines[: self.config.max_function_hints]:
            hit = parse_location(line)
            if hit is not None and self.exclude_spec.match_file(hit.file):
                continue
            hints.append(f"[{FUNCTION_TAG}] {line}")
        return hints


class FunctionDefinitionSource(GrepBackedSource):
    """Definitions of a function name across common languages."""

    name = "functions"
    profile = MatchProfile.PATH

    def __init__(
        self,
        root: Path,
        function_name: str,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        self.function_name = function_name

    def _collect(self) -> list[str]:
        if not self.function_name:
            return []
        name = re.escape(self.function_name)
        seen: set[str] = set()
        results: list[str] = []
        # one search per shape keeps results grouped by definition style
        for template in DEFINITION_PATTERNS:
            pattern = template.format(name=name)
            for line in self._search([pattern], grep_flags=["-E"]):
                if line not in seen:
                    seen.add(line)
                    results.append(line)
        return self._cap(results, self.config.max_definition_results)
