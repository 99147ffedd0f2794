"""
Picker session state.

A PickerSession is created by the caller for exactly one picker invocation and
owns everything that invocation needs: the full candidate list, the current
query, the ranked result and the selection. Nothing is shared between
sessions; once a selection is made or the picker is cancelled the session is
closed and rejects further use.

Example:
    >>> session = PickerSession(["src/app/page.tsx", "docs/app.md"], profile=MatchProfile.PATH)
    >>> session.set_query("src app")
    ['src/app/page.tsx']
    >>> session.select()
    'src/app/page.tsx'
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from ..search.ranker import LabelFunc, clamp_selection, rank, score_candidates
from ..utils.error_handling import SessionClosedError
from ..utils.logging_config import get_logger
from .types import MatchProfile, ScoredCandidate

T = TypeVar("T")

NO_MATCHES_PLACEHOLDER = "No matches found"
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "


class PickerSession(Generic[T]):
    """Query, ranked results and selection of a single picker invocation."""

    def __init__(
        self,
        items: Iterable[T],
        *,
        key: LabelFunc | None = None,
        profile: MatchProfile = MatchProfile.PLAIN,
        on_select: Callable[[T], Any] | None = None,
        wrap: bool = False,
    ) -> None:
        self._items: list[T] = list(items)
        self._key = key or str
        self.profile = profile
        self.on_select = on_select
        self.wrap = wrap

        self.query = ""
        self.results: list[T] = list(self._items)
        self.selected_index = 0
        self.closed = False
        self.logger = get_logger()

    @property
    def items(self) -> tuple[T, ...]:
        """The full candidate list, read-only."""
        return tuple(self._items)

    @property
    def selected(self) -> T | None:
        if not self.results:
            return None
        return self.results[self.selected_index]

    def label(self, item: T) -> str:
        return self._key(item)

    def _ensure_open(self, operation: str) -> None:
        if self.closed:
            raise SessionClosedError(operation)

    def _rerank(self) -> list[T]:
        start = time.perf_counter()
        self.results = rank(self._items, self.query, self.profile, self._key)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.logger.log_rank_complete(self.query, len(self._items), len(self.results), elapsed_ms)
        return self.results

    def set_query(self, query: str) -> list[T]:
        """Re-rank the full list for ``query`` and select the first row."""
        self._ensure_open("set query")
        self.query = query
        self._rerank()
        self.selected_index = 0
        return self.results

    def extend(self, items: Sequence[T], for_query: str) -> bool:
        """
        Append candidates produced asynchronously for ``for_query``.

        The append is dropped when the query has changed since the producer
        started, so results for an old query never leak into a newer one. The
        selection stays on the same row when possible.

        Returns:
            True if the items were merged
        """
        self._ensure_open("extend candidates")
        if for_query != self.query:
            self.logger.debug(
                f"Dropping {len(items)} stale candidates for query '{for_query}'",
                stale_query=for_query,
                query=self.query,
            )
            return False
        if not items:
            return False

        previous = self.selected
        self._items.extend(items)
        self._rerank()
        self.selected_index = clamp_selection(self.selected_index, self.results, previous)
        return True

    def scores(self) -> list[ScoredCandidate]:
        """Ranked results with their scores, in result order."""
        return score_candidates(self._items, self.query, self.profile, self._key)

    def move_selection(self, delta: int) -> int:
        """Move the selection by ``delta`` rows.

        Out-of-range moves are ignored unless the session wraps around.
        """
        self._ensure_open("move selection")
        if not self.results:
            return self.selected_index

        new_index = self.selected_index + delta
        if self.wrap:
            self.selected_index = new_index % len(self.results)
        elif 0 <= new_index < len(self.results):
            self.selected_index = new_index
        return self.selected_index

    def select(self) -> T | None:
        """Close the session with the current selection and run the callback.

        Does nothing while the result list is empty.
        """
        self._ensure_open("select")
        choice = self.selected
        if choice is None:
            return None

        self.closed = True
        if self.on_select is not None:
            self.on_select(choice)
        return choice

    def cancel(self) -> None:
        self.closed = True

    def render_lines(self) -> list[str]:
        """Display lines with a marker on the selected row."""
        if not self.results:
            return [UNSELECTED_MARKER + NO_MATCHES_PLACEHOLDER]
        return [
            (SELECTED_MARKER if i == self.selected_index else UNSELECTED_MARKER) + self._key(item)
            for i, item in enumerate(self.results)
        ]
