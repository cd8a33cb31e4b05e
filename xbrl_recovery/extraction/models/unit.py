# Path: extraction/models/unit.py
"""
Unit Data Model

Unit-of-measure representation for numeric facts.

This module defines:
- Measure (raw QName text plus resolved namespace/local name)
- Unit dataclass (simple, divide and multiply units)
- UnitType enum
- Currency extraction
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from enum import Enum

from ..constants import ISO4217_NS, XBRLI_NS


# ==============================================================================
# UNIT TYPE
# ==============================================================================

class UnitType(Enum):
    """
    Unit type classification.

    Types:
        SIMPLE: Single measure (e.g., USD, shares, pure)
        DIVIDE: Ratio with numerator and denominator (e.g., USD/share)
        MULTIPLY: Product of several measures
    """
    SIMPLE = "SIMPLE"
    DIVIDE = "DIVIDE"
    MULTIPLY = "MULTIPLY"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# MEASURE
# ==============================================================================

@dataclass(frozen=True)
class Measure:
    """
    One measure of a unit.

    Attributes:
        raw: Measure text as written (e.g., 'iso4217:USD')
        namespace_uri: Resolved namespace URI, None when unresolvable
        local_name: Local part of the QName
    """
    raw: str
    namespace_uri: Optional[str] = None
    local_name: Optional[str] = None

    @property
    def name(self) -> str:
        """Local name if known, else the raw text after the last colon."""
        if self.local_name:
            return self.local_name
        return self.raw.split(':')[-1]

    def is_currency(self) -> bool:
        if self.namespace_uri == ISO4217_NS:
            return True
        prefix = self.raw.split(':')[0].lower() if ':' in self.raw else ''
        return prefix in ('iso4217', 'currency')

    def to_dict(self) -> dict[str, Any]:
        return {
            'raw': self.raw,
            'namespace_uri': self.namespace_uri,
            'local_name': self.local_name,
        }


# ==============================================================================
# UNIT
# ==============================================================================

@dataclass(frozen=True)
class Unit:
    """
    Unit representation.

    Attributes:
        id: Unit ID (unique within document)
        unit_type: SIMPLE, DIVIDE or MULTIPLY
        measures: One measure for SIMPLE, several for MULTIPLY
        numerator: Numerator measures (DIVIDE only)
        denominator: Denominator measures (DIVIDE only)

    Examples:
        # Simple unit (USD)
        Unit(
            id="usd",
            unit_type=UnitType.SIMPLE,
            measures=(Measure("iso4217:USD", ISO4217_NS, "USD"),)
        )

        # Divide unit (USD per share)
        Unit(
            id="usd_per_share",
            unit_type=UnitType.DIVIDE,
            numerator=(Measure("iso4217:USD"),),
            denominator=(Measure("xbrli:shares"),)
        )
    """
    id: str
    unit_type: UnitType
    measures: tuple[Measure, ...] = field(default_factory=tuple)
    numerator: tuple[Measure, ...] = field(default_factory=tuple)
    denominator: tuple[Measure, ...] = field(default_factory=tuple)

    def is_simple(self) -> bool:
        return self.unit_type == UnitType.SIMPLE

    def is_divide(self) -> bool:
        return self.unit_type == UnitType.DIVIDE

    def is_monetary(self) -> bool:
        """
        Check if unit is monetary.

        Returns:
            True if a (numerator) measure is an ISO 4217 currency
        """
        return any(m.is_currency() for m in self.measures + self.numerator)

    def is_shares(self) -> bool:
        all_measures = self.measures + self.numerator + self.denominator
        return any(m.name.lower() == 'shares' for m in all_measures)

    def is_pure(self) -> bool:
        all_measures = self.measures + self.numerator
        return any(
            m.name.lower() == 'pure' and m.namespace_uri in (None, XBRLI_NS)
            for m in all_measures
        )

    def get_currency_code(self) -> Optional[str]:
        """
        Extract currency code from unit.

        Returns:
            Currency code (e.g., 'USD', 'EUR') or None

        Example:
            unit.measures = (Measure('iso4217:USD'),)
            unit.get_currency_code()  # Returns 'USD'
        """
        for measure in self.measures + self.numerator:
            if measure.is_currency():
                return measure.name.upper()
        return None

    def get_display_name(self) -> str:
        """
        Get human-readable unit name.

        Returns:
            Display name for unit
        """
        if self.is_divide():
            num = "*".join(m.name for m in self.numerator)
            den = "*".join(m.name for m in self.denominator)
            return f"{num} per {den}"

        if self.is_monetary():
            return self.get_currency_code() or "Currency"
        if self.is_shares():
            return "Shares"
        if self.is_pure():
            return "Pure"
        return "*".join(m.name for m in self.measures)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            'id': self.id,
            'unit_type': self.unit_type.value,
            'display_name': self.get_display_name(),
            'is_monetary': self.is_monetary(),
        }

        if self.is_divide():
            result['numerator'] = [m.to_dict() for m in self.numerator]
            result['denominator'] = [m.to_dict() for m in self.denominator]
        else:
            result['measures'] = [m.to_dict() for m in self.measures]

        if self.is_monetary():
            result['currency_code'] = self.get_currency_code()

        return result


__all__ = [
    'UnitType',
    'Measure',
    'Unit',
]
