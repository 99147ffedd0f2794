"""
Output formatting for ranked picker results.

Key Functions:
    format_results: Main entry point for TEXT and JSON output
    to_json_bytes: JSON serialization using orjson
    format_text: Plain text, one candidate per line
    render_rich_console: Rich table with matched characters highlighted

An empty result renders the "No matches found" placeholder rather than an
empty list, so "nothing matched" is distinguishable from "no output".
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

import orjson
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.session import NO_MATCHES_PLACEHOLDER
from ..core.types import MatchProfile, OutputFormat, ScoredCandidate
from ..search.fuzzy import match_positions


def _item_payload(item: Any) -> Any:
    if is_dataclass(item) and not isinstance(item, type):
        return asdict(item)
    return None


def to_json_bytes(query: str, results: Sequence[ScoredCandidate], total: int) -> bytes:
    """
    Serialize ranked results with orjson.

    Structured candidates (TODO items, usage hits) are included under
    ``item`` next to their display ``label``.
    """
    payload = {
        "query": query,
        "total_candidates": total,
        "count": len(results),
        "items": [
            {
                "label": sc.label,
                "score": sc.score,
                "index": sc.index,
                "item": _item_payload(sc.item),
            }
            for sc in results
        ],
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def format_text(results: Sequence[ScoredCandidate], show_scores: bool = False) -> str:
    if not results:
        return NO_MATCHES_PLACEHOLDER
    if show_scores:
        width = max(len(str(sc.score)) for sc in results)
        return "\n".join(f"{sc.score:>{width}}  {sc.label}" for sc in results)
    return "\n".join(sc.label for sc in results)


def highlight_label(
    label: str, query: str, profile: MatchProfile = MatchProfile.PLAIN, style: str = "bold magenta"
) -> Text:
    """Rich Text of ``label`` with the characters matched by ``query`` styled."""
    text = Text(label)
    for pos in match_positions(label, query, profile):
        if pos < len(label):
            text.stylize(style, pos, pos + 1)
    return text


def render_rich_console(
    query: str,
    results: Sequence[ScoredCandidate],
    profile: MatchProfile = MatchProfile.PLAIN,
    console: Console | None = None,
    show_scores: bool = False,
    title: str | None = None,
) -> None:
    """Render ranked results as a rich table."""
    if console is None:
        console = Console()
    if not results:
        console.print(f"[dim]{NO_MATCHES_PLACEHOLDER}[/dim]")
        return

    table = Table(
        title=Text(title) if title else None, show_header=True, header_style="bold"
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Candidate")
    if show_scores:
        table.add_column("Score", justify="right")

    for rank_no, sc in enumerate(results, start=1):
        row: list[Any] = [str(rank_no), highlight_label(sc.label, query, profile)]
        if show_scores:
            row.append(str(sc.score))
        table.add_row(*row)
    console.print(table)


def format_results(
    query: str,
    results: Sequence[ScoredCandidate],
    fmt: OutputFormat,
    total: int = 0,
    show_scores: bool = False,
) -> str:
    """Format ranked results according to the specified output format."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes(query, results, total).decode("utf-8")
    return format_text(results, show_scores=show_scores)
