# Path: extraction/__init__.py
"""
XBRL Extraction Package

Fault-tolerant extraction of facts from traditional and inline XBRL
documents and filing packages.

This package provides:
- XBRLExtractor: Main orchestrator (parse, parse_package, stream)
- ParsedInstance: Immutable fact model plus diagnostics
- StreamingExtractor: Forward-only extraction for large documents
- PackageHandler: Filing package (ZIP) unpacking and classification

Example:
    from xbrl_recovery.extraction import XBRLExtractor

    extractor = XBRLExtractor()
    instance = extractor.parse(content, 'text/html')

    for fact in instance.facts:
        print(fact.concept, fact.value)
"""

# Main orchestrator
from .orchestrator import (
    XBRLExtractor,
    get_default_extractor,
    parse,
    parse_package,
)

# Models
from .models.error import ErrorSeverity, ErrorCategory, ParsingError
from .models.diagnostics import Diagnostics
from .models.context import Context, EntityIdentifier, Period, PeriodType, DimensionMember
from .models.unit import Unit, UnitType, Measure
from .models.fact import Fact, FactKind
from .models.parsed_instance import ParsedInstance, XbrlFormat
from .models.config import ExtractorSettings

# Packages and streaming
from .package.package_handler import PackageHandler, PackageResult
from .streaming.stream_parser import (
    StreamingExtractor,
    FactSink,
    CallbackSink,
    ListSink,
    StreamProgress,
    StreamResult,
    StreamMetadata,
    should_use_streaming,
)


__all__ = [
    # Main orchestrator
    'XBRLExtractor',
    'get_default_extractor',
    'parse',
    'parse_package',

    # Models
    'ErrorSeverity',
    'ErrorCategory',
    'ParsingError',
    'Diagnostics',
    'Context',
    'EntityIdentifier',
    'Period',
    'PeriodType',
    'DimensionMember',
    'Unit',
    'UnitType',
    'Measure',
    'Fact',
    'FactKind',
    'ParsedInstance',
    'XbrlFormat',
    'ExtractorSettings',

    # Packages and streaming
    'PackageHandler',
    'PackageResult',
    'StreamingExtractor',
    'FactSink',
    'CallbackSink',
    'ListSink',
    'StreamProgress',
    'StreamResult',
    'StreamMetadata',
    'should_use_streaming',
]
