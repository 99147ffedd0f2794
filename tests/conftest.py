"""
Shared test fixtures for projfind tests.

Candidate sources never start real processes here: every external command goes
through ``FakeRunner``, which replays canned ``CommandResult`` objects keyed by
the tool name.
"""

from pathlib import Path

import pytest

from projfind.sources.base import CommandResult
from projfind.utils.logging_config import configure_logging

SAMPLE_JS = """\
// TODO: add connection pooling
function openDoor(door) {
    return door.open();
}

/* FIXME handle locked doors */
const closeDoor = (door) => door.close();
"""

SAMPLE_PY = """\
def activate_door_handler(event):
    # TODO: debounce repeated events
    return event
"""


class FakeRunner:
    """CommandRunner double that records calls and replays canned results."""

    def __init__(self, results=None, tools=("rg", "grep", "git")):
        self.results = dict(results or {})
        self.tools = set(tools)
        self.calls = []

    def available(self, tool):
        return tool in self.tools

    def run(self, args, cwd):
        self.calls.append((list(args), Path(cwd)))
        result = self.results.get(args[0], CommandResult(1, ""))
        if callable(result):
            return result(args)
        if isinstance(result, list):
            return result.pop(0) if result else CommandResult(1, "")
        return result


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""

    def _make(results=None, tools=("rg", "grep", "git")):
        return FakeRunner(results, tools)

    return _make


@pytest.fixture
def sample_project(tmp_path):
    """A small non-git project with sources, assets and vendored code."""
    (tmp_path / "src" / "app").mkdir(parents=True)
    (tmp_path / "src" / "app" / "door.js").write_text(SAMPLE_JS, encoding="utf-8")
    (tmp_path / "src" / "app" / "logo.svg").write_text("<svg/>", encoding="utf-8")
    (tmp_path / "src" / "handlers.py").write_text(SAMPLE_PY, encoding="utf-8")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text(
        "// TODO: vendored\n", encoding="utf-8"
    )
    (tmp_path / "README.md").write_text("# Doors\n", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Give each test a fresh logger without console handlers."""
    configure_logging(enable_console=False)
    yield
    configure_logging(enable_console=False)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
    config.addinivalue_line("markers", "sources: Candidate source tests")
