# Path: extraction/models/__init__.py
"""
Models Module

Data models produced by the extraction pipeline.

Components:
    - error: Diagnostic entry model (severity, category, location)
    - diagnostics: Per-parse counters and entries
    - context: Entity, period and dimension members
    - unit: Units and measures
    - fact: Normalized fact
    - parsed_instance: Root output of one parse
    - config: Validated extractor settings
"""

from ..models.error import (
    ErrorSeverity,
    ErrorCategory,
    ParsingError,
    create_error,
    create_standard_error,
    create_warning,
    create_info,
)
from ..models.diagnostics import Diagnostics
from ..models.context import (
    PeriodType,
    EntityIdentifier,
    Period,
    DimensionMember,
    Context,
)
from ..models.unit import (
    UnitType,
    Measure,
    Unit,
)
from ..models.fact import (
    FactKind,
    Fact,
)
from ..models.parsed_instance import (
    XbrlFormat,
    ParsedInstance,
)
from ..models.config import ExtractorSettings

__all__ = [
    'ErrorSeverity',
    'ErrorCategory',
    'ParsingError',
    'create_error',
    'create_standard_error',
    'create_warning',
    'create_info',
    'Diagnostics',
    'PeriodType',
    'EntityIdentifier',
    'Period',
    'DimensionMember',
    'Context',
    'UnitType',
    'Measure',
    'Unit',
    'FactKind',
    'Fact',
    'XbrlFormat',
    'ParsedInstance',
    'ExtractorSettings',
]
