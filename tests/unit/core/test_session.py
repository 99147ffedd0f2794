"""Tests for projfind.core.session module."""

from __future__ import annotations

import pytest

from projfind.core.session import NO_MATCHES_PLACEHOLDER, PickerSession
from projfind.core.types import MatchProfile, TodoItem
from projfind.utils.error_handling import SessionClosedError

DOORS = ["Door.js", "DoorManager.tsx", "random.txt"]


class TestQuery:
    """Tests for set_query re-ranking."""

    def test_initial_state(self):
        session = PickerSession(DOORS)
        assert session.query == ""
        assert session.results == DOORS
        assert session.selected == "Door.js"
        assert not session.closed

    def test_set_query_filters(self):
        session = PickerSession(DOORS)
        assert session.set_query("door") == ["Door.js", "DoorManager.tsx"]

    def test_set_query_resets_selection(self):
        session = PickerSession(DOORS)
        session.move_selection(2)
        session.set_query("door")
        assert session.selected_index == 0

    def test_recomputes_from_full_list(self):
        session = PickerSession(DOORS)
        session.set_query("doorm")
        assert session.results == ["DoorManager.tsx"]
        session.set_query("")
        assert session.results == DOORS

    def test_items_read_only_view(self):
        session = PickerSession(DOORS)
        assert session.items == tuple(DOORS)

    def test_input_list_not_mutated(self):
        candidates = list(DOORS)
        session = PickerSession(candidates)
        session.extend(["door.go"], for_query="")
        assert candidates == DOORS

    def test_path_profile(self):
        session = PickerSession(
            ["docs/app.md", "src/app/page.tsx"], profile=MatchProfile.PATH
        )
        assert session.set_query("src app") == ["src/app/page.tsx"]

    def test_scores(self):
        session = PickerSession(DOORS)
        session.set_query("door")
        assert [(sc.label, sc.score) for sc in session.scores()] == [
            ("Door.js", 2000),
            ("DoorManager.tsx", 2000),
        ]

    def test_structured_items(self):
        todos = [TodoItem("a.js", 1, "TODO", "pooling"), TodoItem("b.js", 2, "TODO", "cache")]
        session = PickerSession(todos, key=str)
        session.set_query("cache")
        assert session.selected is todos[1]


class TestExtend:
    """Tests for appending candidates produced later."""

    def test_extend_current_query(self):
        session = PickerSession(DOORS)
        session.set_query("door")
        assert session.extend(["[fn] door.go:3:func Door()"], for_query="door")
        assert session.results[-1] == "[fn] door.go:3:func Door()"
        assert len(session.items) == 4

    def test_stale_extend_dropped(self):
        session = PickerSession(DOORS)
        session.set_query("door")
        session.set_query("random")
        assert not session.extend(["door.go"], for_query="door")
        assert "door.go" not in session.items
        assert session.results == ["random.txt"]

    def test_empty_extend(self):
        session = PickerSession(DOORS)
        assert not session.extend([], for_query="")

    def test_selection_kept_in_range(self):
        session = PickerSession(DOORS)
        session.set_query("door")
        session.move_selection(1)
        session.extend(["door.go"], for_query="door")
        assert session.selected_index == 1
        assert session.selected == "DoorManager.tsx"


class TestSelection:
    """Tests for moving, selecting and cancelling."""

    def test_move_bounded(self):
        session = PickerSession(DOORS)
        assert session.move_selection(1) == 1
        assert session.move_selection(5) == 1
        assert session.move_selection(-3) == 1
        assert session.move_selection(-1) == 0

    def test_move_wraps(self):
        session = PickerSession(DOORS, wrap=True)
        assert session.move_selection(-1) == 2
        assert session.move_selection(1) == 0

    def test_move_on_empty_results(self):
        session = PickerSession(DOORS)
        session.set_query("zzz")
        assert session.move_selection(1) == 0
        assert session.selected is None

    def test_select_runs_callback_and_closes(self):
        chosen = []
        session = PickerSession(DOORS, on_select=chosen.append)
        session.set_query("door")
        session.move_selection(1)
        assert session.select() == "DoorManager.tsx"
        assert chosen == ["DoorManager.tsx"]
        assert session.closed

    def test_select_with_no_results(self):
        chosen = []
        session = PickerSession(DOORS, on_select=chosen.append)
        session.set_query("zzz")
        assert session.select() is None
        assert chosen == []
        assert not session.closed

    def test_cancel_closes(self):
        session = PickerSession(DOORS)
        session.cancel()
        assert session.closed

    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.set_query("a"),
            lambda s: s.extend(["x"], for_query=""),
            lambda s: s.move_selection(1),
            lambda s: s.select(),
        ],
    )
    def test_closed_session_rejects_use(self, operation):
        session = PickerSession(DOORS)
        session.select()
        with pytest.raises(SessionClosedError):
            operation(session)

    def test_sessions_are_independent(self):
        first = PickerSession(DOORS)
        second = PickerSession(DOORS)
        first.set_query("random")
        first.select()
        assert second.query == ""
        assert second.results == DOORS
        assert not second.closed


class TestRenderLines:
    """Tests for render_lines."""

    def test_marks_selected_row(self):
        session = PickerSession(DOORS)
        session.set_query("door")
        session.move_selection(1)
        assert session.render_lines() == ["  Door.js", "> DoorManager.tsx"]

    def test_placeholder_when_empty(self):
        session = PickerSession(DOORS)
        session.set_query("zzz")
        assert session.render_lines() == ["  " + NO_MATCHES_PLACEHOLDER]
