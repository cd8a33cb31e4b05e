# Path: extraction/models/context.py
"""
Context Data Model

Context representation with entity, period, and dimensions.

This module defines:
- Context dataclass (complete context)
- EntityIdentifier (company identifiers)
- Period types (instant, duration, forever)
- DimensionMember (explicit or typed)
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from datetime import date
from enum import Enum

from ..foundation.qname import QNameParts


# ==============================================================================
# PERIOD TYPE
# ==============================================================================

class PeriodType(Enum):
    """
    Period type classification.

    Types:
        INSTANT: Single point in time
        DURATION: Time range (start to end)
        FOREVER: Permanent/unlimited timeframe (rare)
    """
    INSTANT = "instant"
    DURATION = "duration"
    FOREVER = "forever"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# ENTITY IDENTIFIER
# ==============================================================================

@dataclass(frozen=True)
class EntityIdentifier:
    """
    Entity identifier with scheme.

    Attributes:
        scheme: Identifier scheme URI
        value: Identifier value

    Common Schemes:
        - CIK (US SEC): http://www.sec.gov/CIK
        - LEI (International): http://standards.iso.org/iso/17442
    """
    scheme: Optional[str]
    value: Optional[str]

    def is_cik(self) -> bool:
        return bool(self.scheme) and 'sec.gov/cik' in self.scheme.lower()

    def is_lei(self) -> bool:
        return bool(self.scheme) and 'iso/17442' in self.scheme

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            'scheme': self.scheme,
            'value': self.value
        }


# ==============================================================================
# PERIOD
# ==============================================================================

@dataclass(frozen=True)
class Period:
    """
    Period (temporal context).

    Exactly one shape is populated: instant, start/end pair, or forever.
    Dates that could not be parsed are left as None.

    Usage:
        Period(period_type=PeriodType.INSTANT, instant=date(2023, 12, 31))

        Period(
            period_type=PeriodType.DURATION,
            start_date=date(2023, 1, 1),
            end_date=date(2023, 12, 31)
        )
    """
    period_type: PeriodType
    instant: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def is_instant(self) -> bool:
        return self.period_type == PeriodType.INSTANT

    def is_duration(self) -> bool:
        return self.period_type == PeriodType.DURATION

    def is_forever(self) -> bool:
        return self.period_type == PeriodType.FOREVER

    @property
    def end(self) -> Optional[date]:
        """Instant date or duration end date."""
        return self.instant if self.is_instant() else self.end_date

    def get_label(self) -> str:
        """
        Get human-readable period label.

        Returns:
            Formatted period string
        """
        if self.is_instant() and self.instant:
            return f"As of {self.instant.isoformat()}"
        elif self.is_duration() and self.start_date and self.end_date:
            return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"
        elif self.is_forever():
            return "Forever"
        else:
            return "Unknown period"

    def to_dict(self) -> dict[str, Any]:
        return {
            'period_type': self.period_type.value,
            'instant': self.instant.isoformat() if self.instant else None,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'label': self.get_label()
        }


# ==============================================================================
# DIMENSION MEMBER
# ==============================================================================

@dataclass(frozen=True)
class DimensionMember:
    """
    One dimension member of a context.

    Explicit members carry a member QName; typed members carry the
    opaque text of their value element.

    Attributes:
        dimension: Axis QName
        member: Member QName (explicit only)
        typed_value: Raw text value (typed only)
        from_scenario: True when declared under scenario rather than segment

    Example:
        DimensionMember(
            dimension=QNameParts("us-gaap", US_GAAP, "StatementGeographicalAxis"),
            member=QNameParts("co", CO, "AmericasMember")
        )
    """
    dimension: QNameParts
    member: Optional[QNameParts] = None
    typed_value: Optional[str] = None
    from_scenario: bool = False

    @property
    def is_typed(self) -> bool:
        return self.member is None

    @property
    def value(self) -> Optional[str]:
        """Member as text, whichever form it has."""
        if self.member is not None:
            return str(self.member)
        return self.typed_value

    def to_dict(self) -> dict[str, Any]:
        return {
            'dimension': str(self.dimension),
            'dimension_namespace': self.dimension.namespace_uri,
            'member': str(self.member) if self.member else None,
            'typed_value': self.typed_value,
            'type': 'typed' if self.is_typed else 'explicit',
            'container': 'scenario' if self.from_scenario else 'segment'
        }


# ==============================================================================
# CONTEXT
# ==============================================================================

@dataclass(frozen=True)
class Context:
    """
    Complete context.

    Attributes:
        id: Context ID (unique within document)
        entity: Entity identifier
        period: Period information (None when the context has no period)
        dimensions: Segment members first, then scenario members

    Example:
        Context(
            id="c1",
            entity=EntityIdentifier(
                scheme="http://www.sec.gov/CIK",
                value="0000320193"
            ),
            period=Period(
                period_type=PeriodType.INSTANT,
                instant=date(2023, 12, 31)
            )
        )
    """
    id: str
    entity: EntityIdentifier
    period: Optional[Period] = None
    dimensions: tuple[DimensionMember, ...] = field(default_factory=tuple)

    def has_dimensions(self) -> bool:
        return len(self.dimensions) > 0

    def is_instant(self) -> bool:
        return self.period is not None and self.period.is_instant()

    def is_duration(self) -> bool:
        return self.period is not None and self.period.is_duration()

    def get_dimension_value(self, axis_local_name: str) -> Optional[str]:
        """
        Get the member of a dimension by the axis local name.

        Args:
            axis_local_name: e.g. 'StatementGeographicalAxis'

        Returns:
            Member text or None when the context does not use the axis
        """
        for member in self.dimensions:
            if member.dimension.local_name == axis_local_name:
                return member.value
        return None

    def get_description(self) -> str:
        """Short human-readable summary of the context."""
        period = self.period.get_label() if self.period else "No period"
        if not self.dimensions:
            return period
        axes = ", ".join(f"{m.dimension.local_name}={m.value}" for m in self.dimensions)
        return f"{period} [{axes}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'entity': self.entity.to_dict(),
            'period': self.period.to_dict() if self.period else None,
            'dimensions': [d.to_dict() for d in self.dimensions],
            'has_dimensions': self.has_dimensions()
        }


__all__ = [
    'PeriodType',
    'EntityIdentifier',
    'Period',
    'DimensionMember',
    'Context',
]
