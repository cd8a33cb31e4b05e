# Path: extraction/streaming/constants.py
"""
Streaming Module Constants

Reader events, defaults and unit conversions for streaming extraction.

NO HARDCODED values should exist in other streaming module files - all constants
should be imported from this file.
"""

# ==============================================================================
# READER
# ==============================================================================

# iterparse events: namespace declarations, element open, element close
EVENT_START = 'start'
EVENT_END = 'end'
EVENT_START_NS = 'start-ns'
ITERPARSE_EVENTS = (EVENT_START, EVENT_END, EVENT_START_NS)

# Mode for files opened by the extractor itself
BINARY_READ_MODE = 'rb'

# ==============================================================================
# DEFAULTS (overridable through configuration)
# ==============================================================================

# Facts between progress callbacks
DEFAULT_PROGRESS_INTERVAL = 1000

# Documents larger than this are better streamed (MB)
DEFAULT_STREAMING_THRESHOLD_MB = 50.0

# Resident memory that triggers garbage collection (MB)
DEFAULT_MEMORY_THRESHOLD_MB = 512.0

# Facts between memory samples
DEFAULT_MEMORY_CHECK_INTERVAL = 5000

# ==============================================================================
# UNITS
# ==============================================================================

BYTES_PER_MB = 1024 * 1024
MS_PER_SECOND = 1000.0


__all__ = [
    'EVENT_START',
    'EVENT_END',
    'EVENT_START_NS',
    'ITERPARSE_EVENTS',
    'BINARY_READ_MODE',
    'DEFAULT_PROGRESS_INTERVAL',
    'DEFAULT_STREAMING_THRESHOLD_MB',
    'DEFAULT_MEMORY_THRESHOLD_MB',
    'DEFAULT_MEMORY_CHECK_INTERVAL',
    'BYTES_PER_MB',
    'MS_PER_SECOND',
]
