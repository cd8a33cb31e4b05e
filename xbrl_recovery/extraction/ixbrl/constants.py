# Path: extraction/ixbrl/constants.py
"""
iXBRL Constants

Element names and patterns for facts embedded in HTML/XHTML.

Based on Inline XBRL 1.0 (2008 namespace) and 1.1 (2013 namespace).
Element names are lowercase local names: the HTML parser lowercases
every tag, so all lookups compare lowercase names.

NO HARDCODED values should exist in other ixbrl module files - all constants
should be imported from this file or from ..constants.
"""

import re

from ..constants import IX_NS, IX_NS_2008


# ==============================================================================
# iXBRL NAMESPACES
# ==============================================================================

# Both published inline namespaces; documents in either are accepted
IX_NAMESPACES = frozenset({IX_NS, IX_NS_2008})

# ==============================================================================
# iXBRL ELEMENT NAMES
# ==============================================================================

# Fact elements
IX_NON_FRACTION = 'nonfraction'
IX_NON_NUMERIC = 'nonnumeric'
IX_FRACTION = 'fraction'

IX_FACT_ELEMENTS = frozenset({
    IX_NON_FRACTION,
    IX_NON_NUMERIC,
    IX_FRACTION,
})

# Fact elements that carry a unitRef and a numeric value
IX_NUMERIC_ELEMENTS = frozenset({
    IX_NON_FRACTION,
    IX_FRACTION,
})

# Fraction parts
IX_NUMERATOR = 'numerator'
IX_DENOMINATOR = 'denominator'

# Structural elements
IX_CONTINUATION = 'continuation'    # Continuation for split content
IX_EXCLUDE = 'exclude'              # Content excluded from a fact value
IX_HIDDEN = 'hidden'                # Hidden facts section
IX_HEADER = 'header'                # Document header section
IX_RESOURCES = 'resources'          # Resources section (contexts, units)

# ==============================================================================
# CONTINUATIONS
# ==============================================================================

# Element ids that identify continuation targets (searched, case-insensitive)
CONTINUATION_ID_PATTERN = re.compile(r'continuation|continued|cont|_c\d*$', re.IGNORECASE)

# Separator between the pieces of a continued value
CONTINUATION_JOIN = ''

# ==============================================================================
# LIMITS (defaults; overridable through configuration)
# ==============================================================================

# Fact nesting depth at which a subtree is skipped
DEFAULT_MAX_NESTING_DEPTH = 10

# continuedAt hops followed before the rest of a chain is discarded
DEFAULT_MAX_CONTINUATION_HOPS = 2

# ==============================================================================
# NUMERIC ATTRIBUTES
# ==============================================================================

# sign attribute value that negates a fact
NEGATIVE_SIGN = '-'

# Raw value of a fraction fact
FRACTION_SEPARATOR = '/'


__all__ = [
    'IX_NAMESPACES',
    'IX_NON_FRACTION',
    'IX_NON_NUMERIC',
    'IX_FRACTION',
    'IX_FACT_ELEMENTS',
    'IX_NUMERIC_ELEMENTS',
    'IX_NUMERATOR',
    'IX_DENOMINATOR',
    'IX_CONTINUATION',
    'IX_EXCLUDE',
    'IX_HIDDEN',
    'IX_HEADER',
    'IX_RESOURCES',
    'CONTINUATION_ID_PATTERN',
    'CONTINUATION_JOIN',
    'DEFAULT_MAX_NESTING_DEPTH',
    'DEFAULT_MAX_CONTINUATION_HOPS',
    'NEGATIVE_SIGN',
    'FRACTION_SEPARATOR',
]
