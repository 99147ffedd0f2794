"""
Command-line interface for projfind.

Each command runs one non-interactive picker pass: collect candidates from a
source, rank them against the query and print the ranked list.

Main Commands:
    files: Project files (optionally with function-definition hints)
    grep: Lines matching a content pattern
    usages: Whole-word usages of a symbol
    todos: TODO/FIXME comments
    functions: Function definitions by name
    rank: Rank lines read from stdin

Example Usage:
    $ projfind files "src app"
    $ projfind --root ~/code/site todos pooling --format json
    $ git ls-files | projfind rank door --profile path --show-scores
"""

from __future__ import annotations

import functools
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from .. import __version__
from ..core.config import FinderConfig
from ..core.session import PickerSession
from ..core.types import MatchProfile, OutputFormat
from ..sources import (
    CandidateSource,
    ContentSearchSource,
    FunctionDefinitionSource,
    FunctionHintSource,
    ProjectFileSource,
    TodoSource,
    UsageSource,
    create_ignore_file,
    find_project_root,
)
from ..utils.error_handling import SearchError, create_error_report
from ..utils.formatter import format_results, render_rich_console
from ..utils.logging_config import LogFormat, LogLevel, configure_logging, get_logger


@dataclass
class CliState:
    config: FinderConfig

    def project_root(self) -> Path:
        if self.config.root is not None:
            return Path(self.config.root).resolve()
        return find_project_root(Path.cwd())


def _handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn SearchError into a stderr message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SearchError as e:
            get_logger().debug("Command failed", category=e.category.value)
            click.echo(f"Error: {e.message}", err=True)
            for suggestion in e.suggestions:
                click.echo(f"  - {suggestion}", err=True)
            sys.exit(1)

    return wrapper


def _output_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--format",
        "fmt",
        type=click.Choice([e.value for e in OutputFormat]),
        default=OutputFormat.TEXT.value,
        help="Output format",
    )(func)
    func = click.option(
        "--limit", type=click.IntRange(min=0), default=0, help="Show at most N results (0 = all)"
    )(func)
    func = click.option(
        "--show-scores", is_flag=True, default=False, help="Print the match score of each result"
    )(func)
    return func


def _emit(
    session: PickerSession[Any],
    fmt: str,
    limit: int,
    show_scores: bool,
    title: str | None = None,
) -> None:
    scored = session.scores()
    if limit:
        scored = scored[:limit]

    output = OutputFormat(fmt)
    if output == OutputFormat.RICH:
        render_rich_console(
            session.query,
            scored,
            profile=session.profile,
            console=Console(),
            show_scores=show_scores,
            title=title,
        )
        return

    click.echo(format_results(session.query, scored, output, len(session.items), show_scores))


def _open_picker(
    source: CandidateSource, query: str, empty_notice: str
) -> PickerSession[Any] | None:
    items = source.collect()
    if not items:
        click.echo(empty_notice, err=True)
        return None
    session: PickerSession[Any] = PickerSession(items, key=source.label, profile=source.profile)
    session.set_query(query)
    return session


@click.group()
@click.version_option(__version__, prog_name="projfind")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: git toplevel of the current directory)",
)
@click.option("--no-rg", is_flag=True, default=False, help="Use grep even if ripgrep is installed")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Log level",
)
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Log file path")
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.pass_context
def cli(
    ctx: click.Context,
    root: Path | None,
    no_rg: bool,
    debug: bool,
    log_level: str,
    log_file: Path | None,
    log_format: str,
) -> None:
    """projfind - fuzzy pickers for files, grep hits, usages and TODOs"""
    configure_logging(
        level=LogLevel.DEBUG if debug else LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=log_file,
        enable_file=log_file is not None,
    )

    config = FinderConfig(root=root, prefer_ripgrep=not no_rg)
    try:
        config.validate()
    except SearchError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    ctx.obj = CliState(config=config)


@cli.command("files")
@click.argument("query", default="")
@click.option(
    "--with-functions",
    is_flag=True,
    default=False,
    help="Also list function definitions when the query looks like a function name",
)
@_output_options
@click.pass_obj
@_handle_errors
def files_cmd(
    state: CliState, query: str, with_functions: bool, fmt: str, limit: int, show_scores: bool
) -> None:
    """Find project files by fuzzy path match."""
    root = state.project_root()
    source = ProjectFileSource(root, state.config)
    session = _open_picker(source, query, "No files found in project")
    if session is None:
        return

    if with_functions:
        hints = FunctionHintSource(root, query, state.config, source.runner)
        if hints.active:
            session.extend(hints.collect(), for_query=query)

    _emit(session, fmt, limit, show_scores, title="Files")


@cli.command("grep")
@click.argument("pattern")
@click.argument("query", default="")
@_output_options
@click.pass_obj
@_handle_errors
def grep_cmd(
    state: CliState, pattern: str, query: str, fmt: str, limit: int, show_scores: bool
) -> None:
    """Search file contents for PATTERN, then fuzzy-filter the hits by QUERY."""
    source = ContentSearchSource(state.project_root(), pattern, state.config)
    session = _open_picker(source, query, f"No matches found for: {pattern}")
    if session is not None:
        _emit(session, fmt, limit, show_scores, title=f"grep {pattern}")


@cli.command("usages")
@click.argument("symbol")
@click.argument("query", default="")
@_output_options
@click.pass_obj
@_handle_errors
def usages_cmd(
    state: CliState, symbol: str, query: str, fmt: str, limit: int, show_scores: bool
) -> None:
    """List whole-word usages of SYMBOL."""
    source = UsageSource(state.project_root(), symbol, state.config)
    session = _open_picker(source, query, f"No usages found for: {symbol}")
    if session is not None:
        _emit(session, fmt, limit, show_scores, title=f"Usages of {symbol}")


@cli.command("functions")
@click.argument("name")
@click.argument("query", default="")
@_output_options
@click.pass_obj
@_handle_errors
def functions_cmd(
    state: CliState, name: str, query: str, fmt: str, limit: int, show_scores: bool
) -> None:
    """Find definitions of function NAME."""
    source = FunctionDefinitionSource(state.project_root(), name, state.config)
    session = _open_picker(source, query, f"No functions found matching: {name}")
    if session is not None:
        _emit(session, fmt, limit, show_scores, title=f"Definitions of {name}")


@cli.command("todos")
@click.argument("query", default="")
@click.option("--file", "only_file", default=None, help="Only scan this project-relative file")
@click.option(
    "--init-ignore", is_flag=True, default=False, help="Create the project ignore file and exit"
)
@click.option("--show-errors", is_flag=True, default=False, help="Report files that could not be read")
@_output_options
@click.pass_obj
@_handle_errors
def todos_cmd(
    state: CliState,
    query: str,
    only_file: str | None,
    init_ignore: bool,
    show_errors: bool,
    fmt: str,
    limit: int,
    show_scores: bool,
) -> None:
    """List TODO/FIXME comments, fuzzy-filtered by QUERY."""
    root = state.project_root()

    if init_ignore:
        path, created = create_ignore_file(root, state.config.ignore_file)
        if created:
            click.echo(f"Created {path}")
        else:
            click.echo(f"{path} already exists", err=True)
        return

    source = TodoSource(root, state.config, only_file=only_file)
    notice = "No TODOs found in current file" if only_file else "No TODOs found in project"
    session = _open_picker(source, query, notice)
    if session is not None:
        _emit(session, fmt, limit, show_scores, title="TODOs")

    if show_errors and source.error_collector.has_errors():
        click.echo(create_error_report(source.error_collector), err=True)


@cli.command("rank")
@click.argument("query")
@click.option(
    "--profile",
    type=click.Choice([p.value for p in MatchProfile]),
    default=MatchProfile.PLAIN.value,
    help="Scoring variant (path enables path-aware bonuses)",
)
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    show_default=True,
    help="File with one candidate per line (- reads stdin)",
)
@_output_options
@_handle_errors
def rank_cmd(
    query: str, profile: str, input_file: Any, fmt: str, limit: int, show_scores: bool
) -> None:
    """Rank candidate lines read from stdin (or --input) against QUERY."""
    lines: Sequence[str] = [line.rstrip("\r\n") for line in input_file if line.strip()]
    session: PickerSession[str] = PickerSession(lines, profile=MatchProfile(profile))
    session.set_query(query)
    _emit(session, fmt, limit, show_scores)


def main() -> None:
    cli(prog_name="projfind")


if __name__ == "__main__":
    main()
