# Path: extraction/models/fact.py
"""
Fact Data Model

Normalized fact representation shared by every extractor.

This module defines:
- Fact dataclass (one reported data point)
- FactKind enum (DECIMAL, STRING, UNKNOWN)
- Scale/sign normalization and decimals rounding helpers

Invariant: a DECIMAL fact always carries a unit reference and a STRING
fact never does. A non-nil fact carries exactly one of numeric_value and
string_value, a nil fact neither. Facts are created during extraction
and never mutated.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional
from enum import Enum

from ..foundation.qname import QNameParts


# ==============================================================================
# FACT KIND
# ==============================================================================

class FactKind(Enum):
    """
    Fact kind classification.

    Types:
        DECIMAL: Numeric fact with a unit
        STRING: Non-numeric fact
        UNKNOWN: Kind could not be determined
    """
    DECIMAL = "DECIMAL"
    STRING = "STRING"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# FACT DATA MODEL
# ==============================================================================

@dataclass(frozen=True)
class Fact:
    """
    Fact representation.

    Concept identity:
        namespace_uri: Resolved namespace of the concept (None if unresolved)
        local_name: Concept local name
        prefix: Prefix as written (metadata only, not part of identity)

    References:
        context_ref: Context ID
        unit_ref: Unit ID (numeric facts only)

    Values:
        raw_value: Text as found in the document (trimmed)
        numeric_value: Parsed number (numeric elements, None if nil/unparseable)
        string_value: Text value (STRING facts and unparseable numbers, None if nil)
        fact_type: DECIMAL, STRING or UNKNOWN (numeric element without a unit)

    Numeric attributes:
        decimals, precision: None when absent or 'INF'
        scale: Power-of-ten scale (inline only)
        sign: '-' when the inline sign attribute is set
        format: Transformation format tag (inline only)

    Metadata:
        is_nil: xsi:nil was true
        is_nested: Extracted from inside another fact element
        footnote_refs: Footnote ids referenced by the fact
        fact_id: The element's id attribute
        source_element: Tag of the source element
        source_line: Line number in the source document
    """
    # Concept identity
    local_name: str
    namespace_uri: Optional[str] = None
    prefix: Optional[str] = None

    # References
    context_ref: Optional[str] = None
    unit_ref: Optional[str] = None

    # Values
    raw_value: Optional[str] = None
    numeric_value: Optional[Decimal] = None
    string_value: Optional[str] = None
    fact_type: FactKind = FactKind.STRING

    # Numeric attributes
    decimals: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    sign: Optional[str] = None
    format: Optional[str] = None

    # Metadata
    is_nil: bool = False
    is_nested: bool = False
    footnote_refs: tuple[str, ...] = field(default_factory=tuple)
    fact_id: Optional[str] = None
    source_element: Optional[str] = None
    source_line: Optional[int] = None

    @property
    def qname(self) -> QNameParts:
        """Concept as a QNameParts value."""
        return QNameParts(self.prefix, self.namespace_uri, self.local_name)

    @property
    def concept(self) -> str:
        """Concept in prefix notation (e.g., 'us-gaap:Assets')."""
        return str(self.qname)

    @property
    def value(self) -> Any:
        """Resolved value: the number when one was parsed, the text otherwise."""
        if self.numeric_value is not None:
            return self.numeric_value
        return self.string_value

    def is_numeric(self) -> bool:
        return self.fact_type == FactKind.DECIMAL

    def has_unit(self) -> bool:
        return self.unit_ref is not None

    @property
    def normalized_value(self) -> Optional[Decimal]:
        """
        Numeric value with scale and sign applied.

        Returns:
            value * 10**scale, negated when sign is '-'; None for non-numeric
            or nil facts
        """
        if self.numeric_value is None:
            return None

        result = self.numeric_value
        if self.scale:
            result = result.scaleb(self.scale)
        if self.sign == '-':
            result = -result
        return result

    @property
    def rounded_value(self) -> Optional[Decimal]:
        """
        Normalized value rounded to the decimals attribute (half up).

        Negative decimals round to tens, hundreds, thousands and so on.
        """
        value = self.normalized_value
        if value is None or self.decimals is None:
            return value
        try:
            return value.quantize(Decimal(1).scaleb(-self.decimals), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return value

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary representation
        """
        return {
            'concept': self.concept,
            'namespace_uri': self.namespace_uri,
            'local_name': self.local_name,
            'prefix': self.prefix,
            'context_ref': self.context_ref,
            'unit_ref': self.unit_ref,
            'raw_value': self.raw_value,
            'numeric_value': str(self.numeric_value) if self.numeric_value is not None else None,
            'string_value': self.string_value,
            'fact_type': self.fact_type.value,
            'decimals': self.decimals,
            'precision': self.precision,
            'scale': self.scale,
            'sign': self.sign,
            'format': self.format,
            'is_nil': self.is_nil,
            'is_nested': self.is_nested,
            'footnote_refs': list(self.footnote_refs),
            'fact_id': self.fact_id,
            'source_element': self.source_element,
            'source_line': self.source_line,
        }


__all__ = [
    'FactKind',
    'Fact',
]
