"""
Utility modules: error handling, logging, file helpers and output formatting.

Only error handling and logging are re-exported here; import the formatter and
helpers from their modules.
"""

from .error_handling import (
    ConfigurationError,
    ErrorCollector,
    FileAccessError,
    FilePermissionError,
    SearchError,
    SessionClosedError,
    SourceError,
    create_error_report,
    handle_file_error,
)
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "ConfigurationError",
    "ErrorCollector",
    "FileAccessError",
    "FilePermissionError",
    "SearchError",
    "SessionClosedError",
    "SourceError",
    "create_error_report",
    "handle_file_error",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
