"""
Error handling and reporting for projfind.

The matching engine itself never raises: a query that does not match is a
normal negative result. Errors come from the layers around it (reading files
during a TODO scan, running external search tools, invalid configuration,
misuse of a finished picker session) and are modelled here as a small
hierarchy rooted at SearchError, plus an ErrorCollector that lets a scan skip
unreadable files and report them afterwards.

Error Categories:
    - FILE_ACCESS: Missing or unreadable files
    - PERMISSION: Permission denied
    - EXTERNAL_TOOL: git / rg / grep failures
    - CONFIGURATION: Invalid settings
    - SESSION: Operations on a closed picker session
    - UNKNOWN: Anything else

Example:
    >>> from projfind.utils.error_handling import ErrorCollector, handle_file_error
    >>> collector = ErrorCollector()
    >>> try:
    ...     Path("missing.py").read_text()
    ... except OSError as e:
    ...     handle_file_error(Path("missing.py"), "read", e, collector)
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

import sys
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    EXTERNAL_TOOL = "external_tool"
    CONFIGURATION = "configuration"
    SESSION = "session"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for projfind errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class FileAccessError(SearchError):
    """Error accessing files."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            context=context,
        )


class FilePermissionError(SearchError):
    """Permission denied while reading a project file."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            file_path=file_path,
            suggestions=[
                "Check file permissions",
                "Add the path to the project ignore file",
            ],
            context=context,
        )


class SourceError(SearchError):
    """An external tool used to enumerate candidates failed."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = dict(context or {})
        if command is not None:
            merged_context["command"] = command
        if returncode is not None:
            merged_context["returncode"] = returncode

        super().__init__(
            message,
            category=ErrorCategory.EXTERNAL_TOOL,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Install ripgrep (rg) or make sure grep is on PATH",
                "Run the command manually to inspect its error output",
            ],
            context=merged_context,
        )
        self.command: list[str] | None = command
        self.returncode: int | None = returncode


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Check command-line options",
                "Use default configuration",
            ],
            context=context,
        )


class SessionClosedError(SearchError):
    """A picker session was used after a selection or cancellation."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot {operation}: picker session is closed",
            category=ErrorCategory.SESSION,
            severity=ErrorSeverity.MEDIUM,
            suggestions=["Create a new PickerSession for each picker invocation"],
            context={"operation": operation},
        )


class ErrorCollector:
    """Collects and manages errors during a candidate scan."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: Path | None = None,
        context: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions or suggestions or []
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = suggestions or []
            error_context = context or {}

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
            return ErrorCategory.FILE_ACCESS
        if isinstance(exception, PermissionError):
            return ErrorCategory.PERMISSION
        return ErrorCategory.UNKNOWN

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        return [error for error in self.errors if error.severity == severity]

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": len(self.errors),
            "by_category": {cat.value: n for cat, n in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self.error_counts.clear()


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> SearchError:
    """
    Classify a file-related exception, record it and log it.

    Args:
        file_path: Path to the file that caused the error
        operation: Operation being performed (e.g., "read", "scan")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error

    Returns:
        The classified SearchError
    """
    error: SearchError
    if isinstance(exception, (FileNotFoundError, IsADirectoryError)):
        error = FileAccessError(f"Cannot {operation} file: {exception}", file_path)
    elif isinstance(exception, PermissionError):
        error = FilePermissionError(f"Permission denied during {operation}: {exception}", file_path)
    else:
        error = SearchError(f"Unexpected error during {operation}: {exception}", file_path=file_path)

    if error_collector is not None:
        error_collector.add_error(error)

    if logger is not None:
        logger.log_file_error(str(file_path), error.message, stage=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred while collecting candidates."

    summary = error_collector.get_summary()

    report = ["Candidate Scan Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Skipped files:")
    for error in error_collector.errors:
        if error.file_path:
            report.append(f"  - {error.file_path}: {error.message}")

    return "\n".join(report)
