# Path: extraction/constants.py
"""
Constants for the Extraction Package

Namespace URIs, element names and attribute names shared by every
component of the pipeline. Component-specific patterns and thresholds
live in each subpackage's own constants module.

NO HARDCODED values should exist in other modules - shared constants
are imported from this file.
"""

# ============================================================================
# XBRL INSTANCE NAMESPACES
# ============================================================================

XBRLI_NS = "http://www.xbrl.org/2003/instance"
XBRLDI_NS = "http://xbrl.org/2006/xbrldi"
XBRLDT_NS = "http://xbrl.org/2005/xbrldt"
LINK_NS = "http://www.xbrl.org/2003/linkbase"
XLINK_NS = "http://www.w3.org/1999/xlink"
XL_NS = "http://www.xbrl.org/2003/XLink"

# ============================================================================
# INLINE XBRL NAMESPACES
# ============================================================================

IX_NS = "http://www.xbrl.org/2013/inlineXBRL"
IX_NS_2008 = "http://www.xbrl.org/2008/inlineXBRL"

# ============================================================================
# XML STANDARD NAMESPACES
# ============================================================================

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
XHTML_NS = "http://www.w3.org/1999/xhtml"
ISO4217_NS = "http://www.xbrl.org/2003/iso4217"

# ============================================================================
# ELEMENT NAMES (local names, lowercase for case-insensitive matching)
# ============================================================================

ELEM_XBRL = "xbrl"
ELEM_CONTEXT = "context"
ELEM_UNIT = "unit"
ELEM_SCHEMA_REF = "schemaref"
ELEM_LINKBASE_REF = "linkbaseref"
ELEM_ROLE_REF = "roleref"
ELEM_ARCROLE_REF = "arcroleref"
ELEM_FOOTNOTE_LINK = "footnotelink"

# Children of the xbrl root that never carry facts
NON_FACT_ELEMENTS = frozenset({
    ELEM_CONTEXT,
    ELEM_UNIT,
    ELEM_SCHEMA_REF,
    ELEM_LINKBASE_REF,
    ELEM_ROLE_REF,
    ELEM_ARCROLE_REF,
    ELEM_FOOTNOTE_LINK,
})

# ============================================================================
# ATTRIBUTE NAMES (lowercase for case-insensitive matching)
# ============================================================================

ATTR_ID = "id"
ATTR_NAME = "name"
ATTR_CONTEXT_REF = "contextref"
ATTR_UNIT_REF = "unitref"
ATTR_DECIMALS = "decimals"
ATTR_PRECISION = "precision"
ATTR_SCALE = "scale"
ATTR_SIGN = "sign"
ATTR_FORMAT = "format"
ATTR_NIL = "nil"
ATTR_CONTINUED_AT = "continuedat"
ATTR_FOOTNOTE_REFS = "footnoterefs"
ATTR_HREF = "href"
ATTR_SCHEME = "scheme"
ATTR_DIMENSION = "dimension"

# Value that means "infinite precision" on decimals/precision
INFINITE_PRECISION = "INF"

# Attribute values that mark a nil fact
NIL_TRUE_VALUES = frozenset({"true", "1"})


__all__ = [
    'XBRLI_NS',
    'XBRLDI_NS',
    'XBRLDT_NS',
    'LINK_NS',
    'XLINK_NS',
    'XL_NS',
    'IX_NS',
    'IX_NS_2008',
    'XSI_NS',
    'XSD_NS',
    'XHTML_NS',
    'ISO4217_NS',
    'ELEM_XBRL',
    'ELEM_CONTEXT',
    'ELEM_UNIT',
    'ELEM_SCHEMA_REF',
    'ELEM_LINKBASE_REF',
    'ELEM_ROLE_REF',
    'ELEM_ARCROLE_REF',
    'ELEM_FOOTNOTE_LINK',
    'NON_FACT_ELEMENTS',
    'ATTR_ID',
    'ATTR_NAME',
    'ATTR_CONTEXT_REF',
    'ATTR_UNIT_REF',
    'ATTR_DECIMALS',
    'ATTR_PRECISION',
    'ATTR_SCALE',
    'ATTR_SIGN',
    'ATTR_FORMAT',
    'ATTR_NIL',
    'ATTR_CONTINUED_AT',
    'ATTR_FOOTNOTE_REFS',
    'ATTR_HREF',
    'ATTR_SCHEME',
    'ATTR_DIMENSION',
    'INFINITE_PRECISION',
    'NIL_TRUE_VALUES',
]
