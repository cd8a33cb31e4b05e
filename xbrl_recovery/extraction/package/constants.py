# Path: extraction/package/constants.py
"""
Package Module Constants

File classification rules for filing packages (ZIP archives).

All names are compared lowercase.

NO HARDCODED values should exist in other package module files - all constants
should be imported from this file.
"""

import re


# ==============================================================================
# HIDDEN MEMBERS
# ==============================================================================

HIDDEN_PREFIX = '.'
HIDDEN_PATH_MARKER = '/.'
MACOSX_DIRECTORY = '__macosx/'
PATH_SEPARATORS = ('/', '\\')

# ==============================================================================
# CLASSIFICATION
# ==============================================================================

# Linkbases (calculation, definition, label, presentation, reference, footnote)
LINKBASE_SUFFIXES = (
    '_cal.xml',
    '_def.xml',
    '_lab.xml',
    '_pre.xml',
    '_ref.xml',
    '_ftn.xml',
)

SCHEMA_SUFFIX = '.xsd'
XML_SUFFIX = '.xml'

# HTML-like members (inline candidates and the fallback scan)
HTML_SUFFIXES = ('.htm', '.html', '.xhtml')

# Report pages and summaries that are never instances
FILING_SUMMARY_NAME = 'filingsummary.xml'
REPORT_PAGE_PATTERN = re.compile(r'^r\d+\.xml$')

# Names that identify instance documents without looking inside
INSTANCE_SUFFIXES = ('_htm.xml', '_ins.xml', '_xbrl.xml')
DATED_INSTANCE_PATTERN = re.compile(r'-\d{8}\.xml$')

# Head markers of a traditional instance
INSTANCE_CONTENT_MARKERS = (
    '<xbrl',
    'xbrli:xbrl',
    'xmlns:xbrli',
    'xbrl.org/2003/instance',
)

# Head markers of an inline document
INLINE_CONTENT_MARKERS = (
    'xmlns:ix',
    'ix:nonfraction',
    'ix:nonnumeric',
    'inlinexbrl',
)

# ==============================================================================
# CONTENT TYPES
# ==============================================================================

CONTENT_TYPE_HTML = 'text/html'
CONTENT_TYPE_XHTML = 'application/xhtml+xml'
CONTENT_TYPE_XML = 'application/xml'
CONTENT_TYPE_OCTET_STREAM = 'application/octet-stream'

# ==============================================================================
# DEFAULTS (overridable through configuration)
# ==============================================================================

DEFAULT_PACKAGE_SNIFF_BYTES = 4096
DEFAULT_MAX_ARCHIVE_SIZE = 1024 * 1024 * 1024

# Encoding used only to inspect member heads for markers
SNIFF_ENCODING = 'ascii'


__all__ = [
    'HIDDEN_PREFIX',
    'HIDDEN_PATH_MARKER',
    'MACOSX_DIRECTORY',
    'PATH_SEPARATORS',
    'LINKBASE_SUFFIXES',
    'SCHEMA_SUFFIX',
    'XML_SUFFIX',
    'HTML_SUFFIXES',
    'FILING_SUMMARY_NAME',
    'REPORT_PAGE_PATTERN',
    'INSTANCE_SUFFIXES',
    'DATED_INSTANCE_PATTERN',
    'INSTANCE_CONTENT_MARKERS',
    'INLINE_CONTENT_MARKERS',
    'CONTENT_TYPE_HTML',
    'CONTENT_TYPE_XHTML',
    'CONTENT_TYPE_XML',
    'CONTENT_TYPE_OCTET_STREAM',
    'DEFAULT_PACKAGE_SNIFF_BYTES',
    'DEFAULT_MAX_ARCHIVE_SIZE',
    'SNIFF_ENCODING',
]
