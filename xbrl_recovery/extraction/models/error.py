# Path: extraction/models/error.py
"""
Diagnostic Entry Model

Error classification for best-effort fact extraction.

This module defines:
- Severity levels (CRITICAL, ERROR, WARNING, INFO)
- Entry categories, one per kind of recoverable or fatal event
- ParsingError, a single diagnostic entry with its location

Nothing in the extraction pipeline raises these; they are recorded on
the per-parse Diagnostics ledger and returned with the result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from datetime import datetime


# ==============================================================================
# SEVERITY LEVELS
# ==============================================================================

class ErrorSeverity(Enum):
    """
    Diagnostic severity classification.

    Levels:
        CRITICAL: Nothing usable could be produced (e.g., unreadable archive)
        ERROR: Part of the document is unusable (e.g., no xbrl root element)
        WARNING: An element was skipped or a rule was bent (e.g., duplicate id)
        INFO: A recovery or fallback was applied
    """
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: 'ErrorSeverity') -> bool:
        """Enable severity comparison (CRITICAL > ERROR > WARNING > INFO)."""
        order = {
            ErrorSeverity.INFO: 0,
            ErrorSeverity.WARNING: 1,
            ErrorSeverity.ERROR: 2,
            ErrorSeverity.CRITICAL: 3
        }
        return order[self] < order[other]


# ==============================================================================
# ENTRY CATEGORIES
# ==============================================================================

class ErrorCategory(Enum):
    """
    Diagnostic kind, used for grouping and for assertions in callers.
    """
    # Input defects
    XML_MALFORMED = "XML_MALFORMED"
    XML_ENCODING = "XML_ENCODING"
    RECOVERY_APPLIED = "RECOVERY_APPLIED"
    NAMESPACE_FALLBACK = "NAMESPACE_FALLBACK"

    # Structural gaps
    MISSING_CONTEXT = "MISSING_CONTEXT"
    MISSING_UNIT = "MISSING_UNIT"
    INVALID_FACT = "INVALID_FACT"
    INVALID_PERIOD = "INVALID_PERIOD"
    SKIPPED_ELEMENT = "SKIPPED_ELEMENT"
    INVALID_VALUE = "INVALID_VALUE"

    # Contract violations
    DUPLICATE_ID = "DUPLICATE_ID"
    NESTING_DEPTH_EXCEEDED = "NESTING_DEPTH_EXCEEDED"
    CONTINUATION_UNRESOLVED = "CONTINUATION_UNRESOLVED"
    CONTINUATION_TRUNCATED = "CONTINUATION_TRUNCATED"

    # Document level
    NO_XBRL_ROOT = "NO_XBRL_ROOT"
    PARSE_FAILED = "PARSE_FAILED"
    STREAM_FAILED = "STREAM_FAILED"
    ARCHIVE_ERROR = "ARCHIVE_ERROR"

    # Other
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# DIAGNOSTIC ENTRY
# ==============================================================================

@dataclass
class ParsingError:
    """
    One diagnostic entry.

    Attributes:
        severity: Severity level
        category: Entry kind
        message: Human-readable message
        details: Additional details (optional)
        source_file: Document or archive member name (optional)
        line_number: Line number in source (optional)
        element_id: Id or tag of the problematic element (optional)
        context: Additional context data (optional)
        timestamp: When the entry was recorded
        recovered: Whether processing continued past the event
    """
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    details: Optional[str] = None
    source_file: Optional[str] = None
    line_number: Optional[int] = None
    element_id: Optional[str] = None
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    recovered: bool = True

    @property
    def kind(self) -> str:
        """Entry kind as a plain string."""
        return self.category.value

    @property
    def location(self) -> Optional[str]:
        """Best-effort location string ('file:line', 'line N' or element id)."""
        parts = []
        if self.source_file:
            parts.append(str(self.source_file))
        if self.line_number:
            parts.append(str(self.line_number) if parts else f"line {self.line_number}")
        location = ":".join(parts) if parts else None
        if self.element_id:
            location = f"{location} ({self.element_id})" if location else self.element_id
        return location

    def __str__(self) -> str:
        """String representation for logging."""
        parts = [f"[{self.severity.value}] {self.category.value}: {self.message}"]

        if self.location:
            parts.append(f"Location: {self.location}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the entry
        """
        return {
            'severity': self.severity.value,
            'category': self.category.value,
            'message': self.message,
            'details': self.details,
            'source_file': self.source_file,
            'line_number': self.line_number,
            'element_id': self.element_id,
            'context': self.context,
            'timestamp': self.timestamp.isoformat(),
            'recovered': self.recovered
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ParsingError':
        """
        Create an entry from a dictionary produced by to_dict().

        Args:
            data: Dictionary with entry data

        Returns:
            ParsingError instance
        """
        return cls(
            severity=ErrorSeverity(data['severity']),
            category=ErrorCategory(data['category']),
            message=data['message'],
            details=data.get('details'),
            source_file=data.get('source_file'),
            line_number=data.get('line_number'),
            element_id=data.get('element_id'),
            context=data.get('context', {}),
            timestamp=datetime.fromisoformat(data['timestamp']) if data.get('timestamp') else datetime.now(),
            recovered=data.get('recovered', True)
        )


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================

def create_error(
    severity: ErrorSeverity,
    category: ErrorCategory,
    message: str,
    **kwargs
) -> ParsingError:
    """
    Convenience function to create a ParsingError.

    Example:
        entry = create_error(
            ErrorSeverity.WARNING,
            ErrorCategory.MISSING_CONTEXT,
            "Fact 'us-gaap:Assets' has no contextRef",
            line_number=450
        )
    """
    return ParsingError(
        severity=severity,
        category=category,
        message=message,
        **kwargs
    )


def create_standard_error(category: ErrorCategory, message: str, **kwargs) -> ParsingError:
    """Create ERROR severity entry."""
    return create_error(ErrorSeverity.ERROR, category, message, **kwargs)


def create_warning(category: ErrorCategory, message: str, **kwargs) -> ParsingError:
    """Create WARNING severity entry."""
    return create_error(ErrorSeverity.WARNING, category, message, **kwargs)


def create_info(category: ErrorCategory, message: str, **kwargs) -> ParsingError:
    """Create INFO severity entry."""
    return create_error(ErrorSeverity.INFO, category, message, **kwargs)


__all__ = [
    'ErrorSeverity',
    'ErrorCategory',
    'ParsingError',
    'create_error',
    'create_standard_error',
    'create_warning',
    'create_info',
]
