# Path: extraction/transform/constants.py
"""
Value Transformation Constants

Nil sentinels, separators, number-word lexicon, date patterns and the
inline transformation format names recognized by the value transformer.

NO HARDCODED values should exist in value_transformer.py - all constants
are imported from this file.
"""

import re


# ==============================================================================
# NIL AND CLEANUP
# ==============================================================================

# Displayed values meaning "no value" (compared lowercased)
NIL_SENTINELS = frozenset({
    '-',
    '—',   # em dash
    '–',   # en dash
    'nil',
    'n/a',
})

# Removed before generic number parsing
STRIPPED_NUMBER_SYMBOLS = ('$', '€', '£', '¥', '%', ' ', '\u00a0')

# Whitespace that may appear inside formatted numbers
NUMBER_WHITESPACE = (' ', '\u00a0', '\u202f', '\t')

NEGATIVE_OPEN = '('
NEGATIVE_CLOSE = ')'
MINUS_SIGN = '-'

DOT = '.'
COMMA = ','

# Separator between a format namespace prefix and the format name
FORMAT_PREFIX_SEPARATOR = ':'


# ==============================================================================
# FORMAT NAMES (local part, lowercase)
# ==============================================================================

# 1,234,567.89
DOT_DECIMAL_FORMATS = (
    'num-dot-decimal',
    'numdotdecimal',
    'num-dot-decimal-apos',
    'numcommadot',
    'numspacedot',
)

# 1.234.567,89
COMMA_DECIMAL_FORMATS = (
    'num-comma-decimal',
    'numcommadecimal',
    'numdotcomma',
    'numspacecomma',
)

# 1 234 or "5 dollars 35 cents"
UNIT_DECIMAL_FORMATS = (
    'num-unit-decimal',
    'numunitdecimal',
)

# Blank or placeholder text meaning zero (nil sentinels still give None)
ZERO_FORMATS = (
    'zerodash',
    'zero-dash',
    'fixed-zero',
)

# Suffix registering a negated variant of a numeric format
NEGATIVE_FORMAT_SUFFIX = '-negative'

NUMBER_WORD_FORMATS = (
    'numwordsen',
    'num-word-en',
)

DURATION_WORD_FORMATS = (
    'durwordsen',
)

# Formats with no numeric reading
NON_NUMERIC_FORMATS = (
    'datequarterend',
)


# ==============================================================================
# NUMBER WORDS
# ==============================================================================

NUMBER_WORDS = {
    'no': 0,
    'none': 0,
    'zero': 0,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'thirteen': 13,
    'fourteen': 14,
    'fifteen': 15,
    'sixteen': 16,
    'seventeen': 17,
    'eighteen': 18,
    'nineteen': 19,
    'twenty': 20,
    'thirty': 30,
    'forty': 40,
    'fifty': 50,
    'sixty': 60,
    'seventy': 70,
    'eighty': 80,
    'ninety': 90,
    'hundred': 100,
    'thousand': 1_000,
    'million': 1_000_000,
    'billion': 1_000_000_000,
    'trillion': 1_000_000_000_000,
}

# Multipliers at or above this value close a group ("thousand", "million")
NUMBER_WORD_GROUP_THRESHOLD = 1_000
NUMBER_WORD_MULTIPLIER_THRESHOLD = 100

NUMBER_WORD_SPLIT_PATTERN = re.compile(r'[\s\-,]+')

# Words ending the quantity in a duration phrase ("two years")
DURATION_UNIT_WORDS = frozenset({
    'year', 'years', 'month', 'months', 'week', 'weeks', 'day', 'days',
})

# Letter runs between digit groups in unit-decimal values
UNIT_WORD_PATTERN = re.compile(r'[^\d\s,.]*[A-Za-z]+[^\d]*')
UNIT_DIGIT_CLEANUP_PATTERN = re.compile(r'[\s,.]')


# ==============================================================================
# DATES
# ==============================================================================

# Generic date patterns, tried in order
DATE_PATTERNS = (
    '%Y-%m-%d',
    '%m/%d/%Y',
    '%d/%m/%Y',
    '%B %d, %Y',
    '%b %d, %Y',
    '%d %B %Y',
    '%d %b %Y',
)

# YYYY sep MM sep DD anywhere in the text
LOOSE_DATE_PATTERN = re.compile(r'(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})')

# Numeric date separators normalized to '/' for format-specific patterns
DATE_SEPARATOR_PATTERN = re.compile(r'[./\-]')
DATE_SEPARATOR = '/'

# Format-specific date patterns (applied after separator normalization)
DATE_FORMAT_PATTERNS = {
    'datemonthdayyear': ('%m/%d/%Y', '%m/%d/%y'),
    'date-month-day-year': ('%m/%d/%Y', '%m/%d/%y'),
    'datedaymonthyear': ('%d/%m/%Y', '%d/%m/%y'),
    'date-day-month-year': ('%d/%m/%Y', '%d/%m/%y'),
    'dateyearmonthday': ('%Y/%m/%d',),
    'date-year-month-day': ('%Y/%m/%d',),
    'datemonthdayyearen': ('%B %d, %Y', '%b %d, %Y', '%B %d %Y', '%b %d %Y'),
    'date-monthname-day-year-en': ('%B %d, %Y', '%b %d, %Y', '%B %d %Y', '%b %d %Y'),
    'datedaymonthyearen': ('%d %B %Y', '%d %b %Y'),
    'date-day-monthname-year-en': ('%d %B %Y', '%d %b %Y'),
}

# Text date formats keep their separators
TEXT_DATE_FORMATS = frozenset({
    'datemonthdayyearen',
    'date-monthname-day-year-en',
    'datedaymonthyearen',
    'date-day-monthname-year-en',
})


# ==============================================================================
# BOOLEANS
# ==============================================================================

TRUE_VALUES = frozenset({'true', 'yes', '1', 'y', 't'})
FALSE_VALUES = frozenset({'false', 'no', '0', 'n', 'f'})


__all__ = [
    'NIL_SENTINELS',
    'STRIPPED_NUMBER_SYMBOLS',
    'NUMBER_WHITESPACE',
    'NEGATIVE_OPEN',
    'NEGATIVE_CLOSE',
    'MINUS_SIGN',
    'DOT',
    'COMMA',
    'FORMAT_PREFIX_SEPARATOR',
    'DOT_DECIMAL_FORMATS',
    'COMMA_DECIMAL_FORMATS',
    'UNIT_DECIMAL_FORMATS',
    'ZERO_FORMATS',
    'NEGATIVE_FORMAT_SUFFIX',
    'NUMBER_WORD_FORMATS',
    'DURATION_WORD_FORMATS',
    'NON_NUMERIC_FORMATS',
    'NUMBER_WORDS',
    'NUMBER_WORD_GROUP_THRESHOLD',
    'NUMBER_WORD_MULTIPLIER_THRESHOLD',
    'NUMBER_WORD_SPLIT_PATTERN',
    'DURATION_UNIT_WORDS',
    'UNIT_WORD_PATTERN',
    'UNIT_DIGIT_CLEANUP_PATTERN',
    'DATE_PATTERNS',
    'LOOSE_DATE_PATTERN',
    'DATE_SEPARATOR_PATTERN',
    'DATE_SEPARATOR',
    'DATE_FORMAT_PATTERNS',
    'TEXT_DATE_FORMATS',
    'TRUE_VALUES',
    'FALSE_VALUES',
]
