# Path: extraction/models/parsed_instance.py
"""
Parsed Instance Model

Root output of a single-document parse.

This module defines:
- XbrlFormat enum (TRADITIONAL, INLINE, UNKNOWN)
- ParsedInstance, the immutable fact model plus diagnostics
- Query helpers used by downstream mappers

Example:
    instance = XBRLExtractor().parse(content, 'text/html')

    for fact in instance.get_facts_by_concept('Assets'):
        print(fact.context_ref, fact.numeric_value)

    if not instance.has_usable_data():
        print(instance.diagnostics.summary())
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional
from enum import Enum

from ..models.context import Context
from ..models.diagnostics import Diagnostics
from ..models.fact import Fact
from ..models.unit import Unit


# ==============================================================================
# FORMAT
# ==============================================================================

class XbrlFormat(Enum):
    """
    Detected document format.

    Types:
        TRADITIONAL: Standalone XML instance document
        INLINE: Facts embedded in HTML
        UNKNOWN: Neither could be established
    """
    TRADITIONAL = "TRADITIONAL"
    INLINE = "INLINE"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


def _readonly(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


# ==============================================================================
# PARSED INSTANCE
# ==============================================================================

@dataclass(frozen=True)
class ParsedInstance:
    """
    Complete result of one parse call.

    Attributes:
        source: Source identifier (file name, URL or caller-supplied label)
        format: TRADITIONAL, INLINE or UNKNOWN
        document_kind: Detector classification (e.g., 'INLINE_XBRL')
        encoding: Encoding used to decode the bytes
        namespaces: Declared prefix -> URI table (read-only)
        schema_refs: schemaRef hrefs in document order
        linkbase_refs: linkbaseRef hrefs in document order
        entity_identifier: Identifier of the first context's entity
        entity_scheme: Scheme of the first context's entity
        contexts: Context id -> Context (read-only)
        units: Unit id -> Unit (read-only)
        facts: Facts in extraction order
        diagnostics: Frozen diagnostics ledger
        parsed_at: When the parse finished
    """
    source: Optional[str]
    format: XbrlFormat
    diagnostics: Diagnostics
    document_kind: Optional[str] = None
    encoding: Optional[str] = None
    namespaces: Mapping[str, str] = field(default_factory=lambda: _readonly(None))
    schema_refs: tuple[str, ...] = field(default_factory=tuple)
    linkbase_refs: tuple[str, ...] = field(default_factory=tuple)
    entity_identifier: Optional[str] = None
    entity_scheme: Optional[str] = None
    contexts: Mapping[str, Context] = field(default_factory=lambda: _readonly(None))
    units: Mapping[str, Unit] = field(default_factory=lambda: _readonly(None))
    facts: tuple[Fact, ...] = field(default_factory=tuple)
    parsed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        # Normalize caller-supplied containers to read-only forms
        object.__setattr__(self, 'namespaces', _readonly(self.namespaces))
        object.__setattr__(self, 'contexts', _readonly(self.contexts))
        object.__setattr__(self, 'units', _readonly(self.units))
        object.__setattr__(self, 'facts', tuple(self.facts))
        object.__setattr__(self, 'schema_refs', tuple(self.schema_refs))
        object.__setattr__(self, 'linkbase_refs', tuple(self.linkbase_refs))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_context(self, context_id: str) -> Optional[Context]:
        return self.contexts.get(context_id)

    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return self.units.get(unit_id)

    def get_facts_by_concept(self, local_name: str) -> list[Fact]:
        """All facts whose concept local name matches (any namespace)."""
        return [f for f in self.facts if f.local_name == local_name]

    def get_facts_by_qname(self, namespace_uri: Optional[str], local_name: str) -> list[Fact]:
        """All facts with the exact concept identity."""
        return [f for f in self.facts
                if f.local_name == local_name and f.namespace_uri == namespace_uri]

    def get_facts_by_context(self, context_id: str) -> list[Fact]:
        return [f for f in self.facts if f.context_ref == context_id]

    def get_monetary_facts(self) -> list[Fact]:
        """Numeric facts whose unit is a currency."""
        result = []
        for fact in self.facts:
            unit = self.units.get(fact.unit_ref) if fact.unit_ref else None
            if unit is not None and unit.is_monetary():
                result.append(fact)
        return result

    def get_primary_context(self) -> Optional[Context]:
        """
        Most likely reporting context.

        Picks the non-dimensional context with the latest period end,
        falling back to the first context when no period is usable.

        Returns:
            Context or None if the document has no contexts
        """
        best = None
        for context in self.contexts.values():
            if context.has_dimensions() or context.period is None or context.period.end is None:
                continue
            if best is None or context.period.end > best.period.end:
                best = context
        if best is None and self.contexts:
            best = next(iter(self.contexts.values()))
        return best

    def has_usable_data(self) -> bool:
        """False means downstream consumers should treat the document as empty."""
        return len(self.facts) > 0

    @property
    def fact_count(self) -> int:
        return len(self.facts)

    def to_dict(self, include_facts: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Args:
            include_facts: Include facts, contexts and units

        Returns:
            Dictionary representation
        """
        result = {
            'source': self.source,
            'format': self.format.value,
            'document_kind': self.document_kind,
            'encoding': self.encoding,
            'namespaces': dict(self.namespaces),
            'schema_refs': list(self.schema_refs),
            'linkbase_refs': list(self.linkbase_refs),
            'entity_identifier': self.entity_identifier,
            'entity_scheme': self.entity_scheme,
            'fact_count': self.fact_count,
            'context_count': len(self.contexts),
            'unit_count': len(self.units),
            'parsed_at': self.parsed_at.isoformat(),
            'diagnostics': self.diagnostics.to_dict(),
        }

        if include_facts:
            result['contexts'] = {k: v.to_dict() for k, v in self.contexts.items()}
            result['units'] = {k: v.to_dict() for k, v in self.units.items()}
            result['facts'] = [f.to_dict() for f in self.facts]

        return result


__all__ = [
    'XbrlFormat',
    'ParsedInstance',
]
