"""
Candidate sources for the pickers.

Each source enumerates the candidate list of one picker: project files,
content-search hits, symbol usages, function definitions or TODO comments.
External tools run through an injectable CommandRunner.
"""

from .base import (
    CandidateSource,
    CommandResult,
    CommandRunner,
    SubprocessRunner,
    find_project_root,
    parse_location,
)
from .files import ProjectFileSource
from .grep import (
    ContentSearchSource,
    FunctionDefinitionSource,
    FunctionHintSource,
    UsageSource,
    looks_like_function_name,
)
from .todos import TodoSource, clean_todo_text, create_ignore_file

__all__ = [
    # Interfaces
    "CandidateSource",
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "find_project_root",
    "parse_location",
    # Sources
    "ProjectFileSource",
    "ContentSearchSource",
    "UsageSource",
    "FunctionHintSource",
    "FunctionDefinitionSource",
    "looks_like_function_name",
    "TodoSource",
    "clean_todo_text",
    "create_ignore_file",
]
