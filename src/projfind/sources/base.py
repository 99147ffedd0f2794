"""
Candidate source interface and the command-runner seam.

Sources enumerate picker candidates (file paths, grep hits, TODO comments).
Every external process goes through a CommandRunner so sources can be tested
with a fake runner and the ranking core never touches processes at all.
"""

from __future__ import annotations

import re
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from ..core.config import FinderConfig
from ..core.types import LocationHit, MatchProfile
from ..utils.error_handling import SourceError
from ..utils.helpers import normalize_relpath
from ..utils.logging_config import get_logger

_LOCATION_RE = re.compile(r"^([^:]+):(\d+)(?::(.*))?$")
_TAG_RE = re.compile(r"^\[(\w+)\]\s*")


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def lines(self) -> list[str]:
        return [line for line in self.stdout.splitlines() if line]


class CommandRunner(Protocol):
    def available(self, tool: str) -> bool: ...

    def run(self, args: list[str], cwd: Path) -> CommandResult: ...


class SubprocessRunner:
    """Runs commands with ``subprocess`` and looks tools up on PATH."""

    def available(self, tool: str) -> bool:
        return shutil.which(tool) is not None

    def run(self, args: list[str], cwd: Path) -> CommandResult:
        try:
            proc = subprocess.run(
                args,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise SourceError(f"Failed to run {args[0]}: {e}", command=args) from e
        return CommandResult(proc.returncode, proc.stdout, proc.stderr)


def find_project_root(start: Path, runner: CommandRunner | None = None) -> Path:
    """Return the git toplevel containing ``start``, or ``start`` itself."""
    runner = runner or SubprocessRunner()
    start = start.resolve()
    if runner.available("git"):
        result = runner.run(["git", "rev-parse", "--show-toplevel"], start)
        if result.returncode == 0 and result.lines:
            return Path(result.lines[0])
    return start


def parse_location(line: str) -> LocationHit | None:
    """
    Parse a ``path:line[:content]`` record, optionally tagged (``[fn] ...``).

    Returns None for lines that do not carry a location.
    """
    tag = None
    tag_match = _TAG_RE.match(line)
    if tag_match:
        tag = tag_match.group(1)
        line = line[tag_match.end():]

    m = _LOCATION_RE.match(line)
    if not m:
        return None
    return LocationHit(
        file=normalize_relpath(m.group(1)),
        line=int(m.group(2)),
        content=m.group(3) or "",
        tag=tag,
    )


class CandidateSource(ABC):
    """Produces the ordered candidate list of one picker."""

    name: str = "source"
    profile: MatchProfile = MatchProfile.PLAIN

    def __init__(
        self,
        root: Path,
        config: FinderConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or FinderConfig()
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.logger = get_logger()

    @abstractmethod
    def _collect(self) -> list[Any]:
        ...

    def collect(self) -> list[Any]:
        """Enumerate candidates and log how many were produced."""
        start = time.perf_counter()
        items = self._collect()
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.logger.log_source_stats(self.name, len(items), elapsed_ms, root=str(self.root))
        return items

    def label(self, item: Any) -> str:
        """Display string the matcher sees for ``item``."""
        return str(item)
