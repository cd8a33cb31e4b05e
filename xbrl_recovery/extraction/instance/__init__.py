# Path: extraction/instance/__init__.py
"""
Instance document components.

Contexts, units and facts of traditional (standalone XML) instances.
The context and unit parsers also serve the inline and streaming paths.
"""

from ..instance.context_parser import ContextParser, parse_xbrl_date
from ..instance.unit_parser import UnitParser
from ..instance.fact_extractor import FactExtractor, parse_integer, is_nil, concept_from_tag

__all__ = [
    'ContextParser',
    'UnitParser',
    'FactExtractor',
    'parse_xbrl_date',
    'parse_integer',
    'is_nil',
    'concept_from_tag',
]
