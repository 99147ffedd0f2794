"""
projfind: fuzzy pickers for project files, grep hits, symbol usages and TODOs.

The heart of the package is a small matching engine: given a query and a list
of candidate strings it decides which candidates match and in what order they
are shown. Around it sit candidate sources that enumerate project files
(``git ls-files`` or a directory walk), content-search hits (ripgrep or grep)
and TODO comments, and a CLI that runs one picker pass per command.

Key Features:
    - **Tiered matching**: literal substring, path-aware substring, fuzzy subsequence
    - **Path-aware scoring**: separator, camelCase and snake_case boundary bonuses
    - **Stable ranking**: equal scores keep their input order
    - **Caller-owned sessions**: no state shared between picker invocations
    - **Stale-append guard**: late candidates for an old query are dropped

Main Classes:
    PickerSession: Query, ranked results and selection of one picker
    FinderConfig: Source settings, result caps and exclude patterns
    ProjectFileSource, ContentSearchSource, UsageSource,
    FunctionDefinitionSource, FunctionHintSource, TodoSource: Candidate sources

Example Usage:
    >>> from projfind import rank, MatchProfile
    >>> rank(["src/app/page.tsx", "docs/app.md"], "src app", MatchProfile.PATH)
    ['src/app/page.tsx']

    CLI usage:
        $ projfind files "src app"
        $ projfind todos pooling --format rich
"""

from .core.config import FinderConfig
from .core.session import NO_MATCHES_PLACEHOLDER, PickerSession
from .core.types import LocationHit, MatchProfile, OutputFormat, ScoredCandidate, TodoItem
from .search import clamp_selection, match, rank, score_candidates
from .sources import (
    ContentSearchSource,
    FunctionDefinitionSource,
    FunctionHintSource,
    ProjectFileSource,
    TodoSource,
    UsageSource,
)
from .utils.error_handling import (
    ConfigurationError,
    SearchError,
    SessionClosedError,
    SourceError,
)
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

# Package metadata
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Fuzzy pickers for project files, grep hits, symbol usages and TODOs"

__all__ = [
    # Main classes
    "PickerSession",
    "FinderConfig",
    # Matching
    "match",
    "rank",
    "score_candidates",
    "clamp_selection",
    "NO_MATCHES_PLACEHOLDER",
    # Data types
    "MatchProfile",
    "OutputFormat",
    "ScoredCandidate",
    "TodoItem",
    "LocationHit",
    # Sources
    "ProjectFileSource",
    "ContentSearchSource",
    "UsageSource",
    "FunctionDefinitionSource",
    "FunctionHintSource",
    "TodoSource",
    # Logging
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exceptions
    "SearchError",
    "ConfigurationError",
    "SourceError",
    "SessionClosedError",
    # Package metadata
    "__version__",
    "__license__",
    "__description__",
]
