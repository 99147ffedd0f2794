"""
Project file listing.

Uses ``git ls-files`` inside a git checkout, so ``.gitignore`` is honoured,
and a pruned directory walk elsewhere. Assets, lock files and build output are
dropped with gitignore-style exclude patterns.
"""

from __future__ import annotations

from pathlib import Path

from ..core.config import FinderConfig
from ..core.types import MatchProfile
from ..utils.helpers import build_pathspec, normalize_relpath, walk_files
from .base import CandidateSource, CommandRunner


class ProjectFileSource(CandidateSource):
    """All project files as root-relative POSIX paths."""

    name = "files"
    profile = MatchProfile.PATH

    def __init__(
        self,
        root: Path,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
        exclude: list[str] | None = None,
    ) -> None:
        super().__init__(root, config, runner)
        patterns = exclude if exclude is not None else self.config.get_exclude_patterns()
        self.exclude_spec = build_pathspec(patterns)

    def is_excluded(self, path: str) -> bool:
        return self.exclude_spec.match_file(path)

    def list_all(self) -> list[str]:
        """Every file under the root before exclusion."""
        if (self.root / ".git").is_dir() and self.runner.available("git"):
            result = self.runner.run(["git", "ls-files"], self.root)
            if result.returncode == 0:
                return [normalize_relpath(p) for p in result.lines]
            self.logger.warning(
                f"git ls-files failed ({result.returncode}), walking {self.root} instead",
                stderr=result.stderr.strip(),
            )
        return list(walk_files(self.root, self.config.prune_dirs))

    def _collect(self) -> list[str]:
        return [path for path in self.list_all() if not self.is_excluded(path)]
