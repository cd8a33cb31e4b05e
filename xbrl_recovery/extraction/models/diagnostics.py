# Path: extraction/models/diagnostics.py
"""
Parse Diagnostics

Per-parse ledger of counters and diagnostic entries.

This module handles:
- Extraction counters (found, parsed, skipped, nested, continuations)
- Recovery counters (malformed input, namespace fallback, encoding)
- Ordered warning/error entries with location
- Freezing the ledger once the parse result is assembled

A Diagnostics object is created at the start of one parse call, filled in
by every component, frozen with the result and never shared.

Example:
    diagnostics = Diagnostics(source='filing.htm')
    diagnostics.facts_found += 1
    diagnostics.warning(ErrorCategory.MISSING_UNIT, "Numeric fact without unitRef")
    diagnostics.freeze()
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..models.error import (
    ParsingError,
    ErrorSeverity,
    ErrorCategory,
)


logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    """
    Counters, elapsed time and diagnostic entries for one parse.

    Attributes:
        source: Source identifier attached to every entry
        facts_found: Fact elements encountered
        facts_parsed: Facts successfully built
        facts_skipped: Fact elements dropped (structural gaps, failures, depth cap)
        nested_extracted: Facts extracted from inside another fact element
        continuations_resolved: Continuation hops followed
        malformed_recoveries: Recovery strategies attempted beyond the first
        namespace_fallbacks: Catalog lookups used for undeclared prefixes
        encoding_recoveries: Decodes that needed replacement characters
        contexts_found: Contexts kept
        units_found: Units kept
        elapsed_ms: Wall time of the parse in milliseconds
        entries: Ordered diagnostic entries
    """
    source: Optional[str] = None

    facts_found: int = 0
    facts_parsed: int = 0
    facts_skipped: int = 0
    nested_extracted: int = 0
    continuations_resolved: int = 0
    malformed_recoveries: int = 0
    namespace_fallbacks: int = 0
    encoding_recoveries: int = 0
    contexts_found: int = 0
    units_found: int = 0

    elapsed_ms: float = 0.0
    entries: list[ParsingError] = field(default_factory=list)

    _frozen: bool = field(default=False, repr=False, compare=False)

    def __setattr__(self, name: str, value) -> None:
        if getattr(self, '_frozen', False):
            raise RuntimeError(f"Diagnostics are frozen; cannot set '{name}'")
        super().__setattr__(name, value)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(self, entry: ParsingError) -> ParsingError:
        """
        Append an entry and log it at the matching level.

        Raises:
            RuntimeError: If the ledger has been frozen
        """
        if self._frozen:
            raise RuntimeError("Diagnostics are frozen; cannot record new entries")

        if entry.source_file is None and self.source:
            entry.source_file = self.source

        self.entries.append(entry)

        if entry.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            logger.error(str(entry))
        elif entry.severity == ErrorSeverity.WARNING:
            logger.warning(str(entry))
        else:
            logger.debug(str(entry))

        return entry

    def add(
        self,
        severity: ErrorSeverity,
        category: ErrorCategory,
        message: str,
        **kwargs
    ) -> ParsingError:
        """Build and record an entry."""
        return self.record(ParsingError(
            severity=severity,
            category=category,
            message=message,
            **kwargs
        ))

    def info(self, category: ErrorCategory, message: str, **kwargs) -> ParsingError:
        return self.add(ErrorSeverity.INFO, category, message, **kwargs)

    def warning(self, category: ErrorCategory, message: str, **kwargs) -> ParsingError:
        return self.add(ErrorSeverity.WARNING, category, message, **kwargs)

    def error(self, category: ErrorCategory, message: str, **kwargs) -> ParsingError:
        return self.add(ErrorSeverity.ERROR, category, message, recovered=False, **kwargs)

    def skip_fact(self, category: ErrorCategory, message: str, **kwargs) -> ParsingError:
        """Count a dropped fact and record why as a warning."""
        self.facts_skipped += 1
        return self.warning(category, message, **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def freeze(self) -> 'Diagnostics':
        """Make the ledger read-only. Returns self for chaining."""
        if not self._frozen:
            self.entries = tuple(self.entries)
            object.__setattr__(self, '_frozen', True)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def warnings(self) -> list[ParsingError]:
        return [e for e in self.entries if e.severity == ErrorSeverity.WARNING]

    @property
    def errors(self) -> list[ParsingError]:
        return [e for e in self.entries
                if e.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)]

    def has_errors(self) -> bool:
        return any(e.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
                   for e in self.entries)

    def get_by_category(self, category: ErrorCategory) -> list[ParsingError]:
        return [e for e in self.entries if e.category == category]

    def count_by_category(self) -> dict[str, int]:
        counts = {}
        for entry in self.entries:
            counts[entry.category.value] = counts.get(entry.category.value, 0) + 1
        return counts

    @property
    def success_rate(self) -> float:
        """Percentage of found facts that were successfully built."""
        if self.facts_found == 0:
            return 100.0
        return (self.facts_parsed / self.facts_found) * 100.0

    def summary(self) -> str:
        """
        One-line summary for logs.

        Example:
            "facts 120/125 (96.0%), skipped 5, nested 3, continuations 2,
             recoveries 0, fallbacks 1, 2 warnings, 0 errors, 14.2 ms"
        """
        return (
            f"facts {self.facts_parsed}/{self.facts_found} ({self.success_rate:.1f}%), "
            f"skipped {self.facts_skipped}, nested {self.nested_extracted}, "
            f"continuations {self.continuations_resolved}, "
            f"recoveries {self.malformed_recoveries}, fallbacks {self.namespace_fallbacks}, "
            f"{len(self.warnings)} warnings, {len(self.errors)} errors, "
            f"{self.elapsed_ms:.1f} ms"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'source': self.source,
            'facts_found': self.facts_found,
            'facts_parsed': self.facts_parsed,
            'facts_skipped': self.facts_skipped,
            'nested_extracted': self.nested_extracted,
            'continuations_resolved': self.continuations_resolved,
            'malformed_recoveries': self.malformed_recoveries,
            'namespace_fallbacks': self.namespace_fallbacks,
            'encoding_recoveries': self.encoding_recoveries,
            'contexts_found': self.contexts_found,
            'units_found': self.units_found,
            'elapsed_ms': self.elapsed_ms,
            'success_rate': self.success_rate,
            'warning_count': len(self.warnings),
            'error_count': len(self.errors),
            'entries': [e.to_dict() for e in self.entries],
        }


__all__ = ['Diagnostics']
