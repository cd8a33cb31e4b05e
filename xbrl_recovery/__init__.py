# Path: xbrl_recovery/__init__.py
"""
xbrl_recovery

Extracts facts, contexts and units from real-world XBRL and inline XBRL
filings, recovering from malformed markup, bad encodings and missing
namespace declarations instead of failing.

Example:
    from xbrl_recovery import XBRLExtractor

    instance = XBRLExtractor().parse(content, 'text/html', source='filing.htm')

    print(f"{instance.fact_count} facts")
    for entry in instance.diagnostics.warnings:
        print(entry)
"""

from .core.config_loader import ConfigLoader
from .extraction import (
    XBRLExtractor,
    get_default_extractor,
    parse,
    parse_package,
    ErrorSeverity,
    ErrorCategory,
    ParsingError,
    Diagnostics,
    Context,
    EntityIdentifier,
    Period,
    PeriodType,
    DimensionMember,
    Unit,
    UnitType,
    Measure,
    Fact,
    FactKind,
    ParsedInstance,
    XbrlFormat,
    ExtractorSettings,
    PackageHandler,
    PackageResult,
    StreamingExtractor,
    FactSink,
    CallbackSink,
    ListSink,
    StreamProgress,
    StreamResult,
    StreamMetadata,
    should_use_streaming,
)

# Version info
__version__ = '1.0.0'


__all__ = [
    'ConfigLoader',
    'XBRLExtractor',
    'get_default_extractor',
    'parse',
    'parse_package',
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
    '__version__',
]
