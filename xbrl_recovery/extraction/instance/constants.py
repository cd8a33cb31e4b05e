# Path: extraction/instance/constants.py
"""
Instance Module Constants

Element names and formats used when reading contexts, units and facts.

Element names are lowercase local names because lookups are
case-insensitive (HTML-mode trees lowercase every tag).

NO HARDCODED values should exist in other instance module files - all constants
should be imported from this file or from ..constants.
"""

# ==============================================================================
# CONTEXT ELEMENTS
# ==============================================================================

ELEM_ENTITY = "entity"
ELEM_IDENTIFIER = "identifier"
ELEM_SEGMENT = "segment"
ELEM_SCENARIO = "scenario"
ELEM_PERIOD = "period"
ELEM_INSTANT = "instant"
ELEM_START_DATE = "startdate"
ELEM_END_DATE = "enddate"
ELEM_FOREVER = "forever"

# Period children, any of which fixes the period shape
PERIOD_SHAPE_ELEMENTS = frozenset({
    ELEM_INSTANT,
    ELEM_START_DATE,
    ELEM_END_DATE,
    ELEM_FOREVER,
})

# ==============================================================================
# DIMENSION ELEMENTS
# ==============================================================================

ELEM_EXPLICIT_MEMBER = "explicitmember"
ELEM_TYPED_MEMBER = "typedmember"

# ==============================================================================
# UNIT ELEMENTS
# ==============================================================================

ELEM_MEASURE = "measure"
ELEM_DIVIDE = "divide"
ELEM_UNIT_NUMERATOR = "unitnumerator"
ELEM_UNIT_DENOMINATOR = "unitdenominator"

# ==============================================================================
# DATES
# ==============================================================================

# ISO 8601 date (YYYY-MM-DD)
XBRL_DATE_FORMAT = '%Y-%m-%d'

# Separator before a time component in dateTime values
DATETIME_SEPARATOR = 'T'


__all__ = [
    'ELEM_ENTITY',
    'ELEM_IDENTIFIER',
    'ELEM_SEGMENT',
    'ELEM_SCENARIO',
    'ELEM_PERIOD',
    'ELEM_INSTANT',
    'ELEM_START_DATE',
    'ELEM_END_DATE',
    'ELEM_FOREVER',
    'PERIOD_SHAPE_ELEMENTS',
    'ELEM_EXPLICIT_MEMBER',
    'ELEM_TYPED_MEMBER',
    'ELEM_MEASURE',
    'ELEM_DIVIDE',
    'ELEM_UNIT_NUMERATOR',
    'ELEM_UNIT_DENOMINATOR',
    'XBRL_DATE_FORMAT',
    'DATETIME_SEPARATOR',
]
