"""
Core components of projfind.

- Configuration of sources, caps and output
- Data types shared by the matcher, the sources and the CLI

PickerSession lives in ``projfind.core.session`` and is re-exported from the
package root.
"""

from .config import FinderConfig
from .types import LocationHit, MatchProfile, OutputFormat, ScoredCandidate, TodoItem

__all__ = [
    "FinderConfig",
    # Data types
    "LocationHit",
    "MatchProfile",
    "OutputFormat",
    "ScoredCandidate",
    "TodoItem",
]
