# Path: extraction/foundation/constants.py
"""
Foundation Module Constants

Encoding detection, document classification and recovery-cascade
constants.

NO HARDCODED values should exist in other foundation module files - all
constants should be imported from this file.
"""

import re


# ==============================================================================
# ENCODING DETECTION
# ==============================================================================

# Declared content-type header charset
CONTENT_TYPE_CHARSET_PATTERN = re.compile(r'charset=([^;\s]+)', re.IGNORECASE)

# <?xml version="1.0" encoding="..."?>
XML_ENCODING_PATTERN = re.compile(
    r'<\?xml[^>]+encoding=["\']([^"\']+)["\']', re.IGNORECASE
)

# <meta charset="..."> (earlier attributes are skipped whole, so a charset
# inside a quoted content="..." value does not match)
HTML_META_CHARSET_PATTERN = re.compile(
    r'<meta(?:\s+[\w:-]+=(?:"[^"]*"|\'[^\']*\'|[^\s>"\']*))*\s+charset=["\']?([^"\'\s>;/]+)',
    re.IGNORECASE
)

# <meta http-equiv="Content-Type" content="text/html; charset=...">
HTML_CONTENT_TYPE_PATTERN = re.compile(
    r'content=["\'][^"\']*charset=([^"\'\s;]+)', re.IGNORECASE
)

# Byte-order marks, checked longest first
BOM_UTF8 = b'\xef\xbb\xbf'
BOM_UTF16_LE = b'\xff\xfe'
BOM_UTF16_BE = b'\xfe\xff'

BYTE_ORDER_MARKS = (
    (BOM_UTF8, 'utf-8'),
    (BOM_UTF16_LE, 'utf-16-le'),
    (BOM_UTF16_BE, 'utf-16-be'),
)

# Encoding names resolved before asking the codec registry
ENCODING_ALIASES = {
    'utf8': 'utf-8',
    'utf-8': 'utf-8',
    'us-ascii': 'ascii',
    'ascii': 'ascii',
    'iso-8859-1': 'latin-1',
    'iso8859-1': 'latin-1',
    'latin1': 'latin-1',
    'latin-1': 'latin-1',
    'windows-1252': 'cp1252',
    'cp1252': 'cp1252',
}

DEFAULT_ENCODING = 'utf-8'

# Bytes of the document head scanned for in-document declarations
ENCODING_SNIFF_BYTES = 1024

# Control characters that are never valid in XML 1.0 text
INVALID_XML_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

# Where the encoding came from
ENCODING_SOURCE_CONTENT_TYPE = 'content-type'
ENCODING_SOURCE_BOM = 'bom'
ENCODING_SOURCE_XML_DECLARATION = 'xml-declaration'
ENCODING_SOURCE_META_CHARSET = 'meta-charset'
ENCODING_SOURCE_META_CONTENT_TYPE = 'meta-content-type'
ENCODING_SOURCE_DEFAULT = 'default'


# ==============================================================================
# DOCUMENT CLASSIFICATION
# ==============================================================================

# Characters of the decoded document inspected by the classifier
KIND_SNIFF_CHARS = 2000

INLINE_MARKERS = ('xmlns:ix', 'ix:nonfraction', 'ix:nonnumeric', 'inlinexbrl')
XBRL_MARKERS = ('xbrli:xbrl', 'xmlns:xbrli')
XBRL_ROOT_MARKER = '<xbrl'
XBRL_ORG_MARKER = 'xbrl.org'
HTML_MARKERS = ('<!doctype html', '<html')
XML_DECLARATION_MARKER = '<?xml'
XML_TAG_OPEN_PATTERN = re.compile(r'^\s*<[a-z]')


# ==============================================================================
# RECOVERY CASCADE
# ==============================================================================

STRATEGY_STRICT_XML = 'strict_xml'
STRATEGY_LENIENT_HTML = 'lenient_html'
STRATEGY_LENIENT_XML = 'lenient_xml'
STRATEGY_REPAIRED_HTML = 'repaired_html'
STRATEGY_BODY_ONLY = 'body_only'
STRATEGY_SENTINEL = 'sentinel'

# Bare ampersand not starting a known entity or character reference
BARE_AMPERSAND_PATTERN = re.compile(r'&(?!(amp|lt|gt|apos|quot|#\d+|#x[0-9a-fA-F]+);)')
ESCAPED_AMPERSAND = '&amp;'

# name=value with an unquoted value
UNQUOTED_ATTRIBUTE_PATTERN = re.compile(r'(\w+)=([^"\'\s>][^"\'\s>]*)')
UNQUOTED_ATTRIBUTE_REPLACEMENT = r'\1="\2"'

# Void HTML elements that are not self-closed
VOID_ELEMENT_PATTERN = re.compile(
    r'<(br|hr|img|input|meta|link)([^>]*)(?<!/)>', re.IGNORECASE
)
VOID_ELEMENT_REPLACEMENT = r'<\1\2/>'

BODY_OPEN_MARKER = '<body'
BODY_CLOSE_MARKER = '</body>'

# Returned when every strategy fails
SENTINEL_DOCUMENT = '<html><body></body></html>'

# Elements an HTML parser adds on its own; a tree of only these is empty
HTML_SKELETON_ELEMENTS = frozenset({'html', 'head', 'body'})


# ==============================================================================
# NAMESPACE RESOLUTION
# ==============================================================================

# Trailing '/YYYY' or '/YYYY-MM-DD' version segment
NAMESPACE_VERSION_SUFFIX_PATTERN = re.compile(r'/\d{4}(-\d{2}-\d{2})?$')

# Company extension namespace stamped with a 10-digit CIK
CIK_NAMESPACE_PATTERN = re.compile(r'^https?://[\w.]+/\d{10}')

# Host part of an http(s) URI
NAMESPACE_HOST_PATTERN = re.compile(r'^https?://([^/]+)', re.IGNORECASE)

# Hosts that publish standard taxonomies (subdomains included)
STANDARD_NAMESPACE_HOSTS = (
    'xbrl.org',
    'fasb.org',
    'xbrl.sec.gov',
    'xbrl.us',
    'xbrl.ifrs.org',
    'w3.org',
)

# Prefix spellings rewritten before a second catalog lookup
PREFIX_SEPARATOR_FROM = '_'
PREFIX_SEPARATOR_TO = '-'
PREFIX_REWRITES = (
    ('usgaap', 'us-gaap'),
)


__all__ = [
    'CONTENT_TYPE_CHARSET_PATTERN',
    'XML_ENCODING_PATTERN',
    'HTML_META_CHARSET_PATTERN',
    'HTML_CONTENT_TYPE_PATTERN',
    'BOM_UTF8',
    'BOM_UTF16_LE',
    'BOM_UTF16_BE',
    'BYTE_ORDER_MARKS',
    'ENCODING_ALIASES',
    'DEFAULT_ENCODING',
    'ENCODING_SNIFF_BYTES',
    'INVALID_XML_CHARS_PATTERN',
    'ENCODING_SOURCE_CONTENT_TYPE',
    'ENCODING_SOURCE_BOM',
    'ENCODING_SOURCE_XML_DECLARATION',
    'ENCODING_SOURCE_META_CHARSET',
    'ENCODING_SOURCE_META_CONTENT_TYPE',
    'ENCODING_SOURCE_DEFAULT',
    'KIND_SNIFF_CHARS',
    'INLINE_MARKERS',
    'XBRL_MARKERS',
    'XBRL_ROOT_MARKER',
    'XBRL_ORG_MARKER',
    'HTML_MARKERS',
    'XML_DECLARATION_MARKER',
    'XML_TAG_OPEN_PATTERN',
    'STRATEGY_STRICT_XML',
    'STRATEGY_LENIENT_HTML',
    'STRATEGY_LENIENT_XML',
    'STRATEGY_REPAIRED_HTML',
    'STRATEGY_BODY_ONLY',
    'STRATEGY_SENTINEL',
    'BARE_AMPERSAND_PATTERN',
    'ESCAPED_AMPERSAND',
    'UNQUOTED_ATTRIBUTE_PATTERN',
    'UNQUOTED_ATTRIBUTE_REPLACEMENT',
    'VOID_ELEMENT_PATTERN',
    'VOID_ELEMENT_REPLACEMENT',
    'BODY_OPEN_MARKER',
    'BODY_CLOSE_MARKER',
    'SENTINEL_DOCUMENT',
    'HTML_SKELETON_ELEMENTS',
    'NAMESPACE_VERSION_SUFFIX_PATTERN',
    'CIK_NAMESPACE_PATTERN',
    'NAMESPACE_HOST_PATTERN',
    'STANDARD_NAMESPACE_HOSTS',
    'PREFIX_SEPARATOR_FROM',
    'PREFIX_SEPARATOR_TO',
    'PREFIX_REWRITES',
]
