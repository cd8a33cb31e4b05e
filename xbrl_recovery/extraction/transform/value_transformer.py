# Path: extraction/transform/value_transformer.py
"""
Value Transformer

Converts displayed inline values to native numbers, dates and booleans.

This module handles:
- Inline transformation formats (num-dot-decimal, num-comma-decimal,
  num-unit-decimal, zero-dash, negative variants, number words)
- Generic number heuristics (currency symbols, parentheses, separators)
- Date parsing with format-specific and generic patterns
- Boolean parsing

Format handlers live in a read-only registry keyed by the lowercase local
part of the format tag, so 'ixt:num-dot-decimal', 'ixt4:num-dot-decimal'
and 'ixt-sec:num-dot-decimal' all select the same handler. The
transformer holds no mutable state and is shared freely.

Example:
    transformer = ValueTransformer()

    transformer.to_number('1.234.567,89', 'ixt:num-comma-decimal')  # Decimal('1234567.89')
    transformer.to_number('(1,234.00)')                             # Decimal('-1234.00')
    transformer.to_date('December 31, 2024')                        # date(2024, 12, 31)
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..transform.constants import (
    NIL_SENTINELS,
    STRIPPED_NUMBER_SYMBOLS,
    NUMBER_WHITESPACE,
    NEGATIVE_OPEN,
    NEGATIVE_CLOSE,
    MINUS_SIGN,
    DOT,
    COMMA,
    FORMAT_PREFIX_SEPARATOR,
    DOT_DECIMAL_FORMATS,
    COMMA_DECIMAL_FORMATS,
    UNIT_DECIMAL_FORMATS,
    ZERO_FORMATS,
    NEGATIVE_FORMAT_SUFFIX,
    NUMBER_WORD_FORMATS,
    DURATION_WORD_FORMATS,
    NON_NUMERIC_FORMATS,
    NUMBER_WORDS,
    NUMBER_WORD_GROUP_THRESHOLD,
    NUMBER_WORD_MULTIPLIER_THRESHOLD,
    NUMBER_WORD_SPLIT_PATTERN,
    DURATION_UNIT_WORDS,
    UNIT_WORD_PATTERN,
    UNIT_DIGIT_CLEANUP_PATTERN,
    DATE_PATTERNS,
    LOOSE_DATE_PATTERN,
    DATE_SEPARATOR_PATTERN,
    DATE_SEPARATOR,
    DATE_FORMAT_PATTERNS,
    TEXT_DATE_FORMATS,
    TRUE_VALUES,
    FALSE_VALUES,
)


logger = logging.getLogger(__name__)

FormatHandler = Callable[[str], Optional[Decimal]]


# ==============================================================================
# FORMAT HANDLERS
# ==============================================================================

def _strip_whitespace(text: str) -> str:
    for ws in NUMBER_WHITESPACE:
        text = text.replace(ws, '')
    return text


def dot_decimal(text: str) -> Decimal:
    """1,234,567.89 (comma or space thousands, dot decimal)."""
    return Decimal(_strip_whitespace(text).replace(COMMA, ''))


def comma_decimal(text: str) -> Decimal:
    """1.234.567,89 (dot or space thousands, comma decimal)."""
    return Decimal(_strip_whitespace(text).replace(DOT, '').replace(COMMA, DOT))


def unit_decimal(text: str) -> Decimal:
    """
    Integer and fraction separated by unit words.

    Examples:
        '1 234'               -> 1234
        '5 dollars 35 cents'  -> 5.35
    """
    groups = [UNIT_DIGIT_CLEANUP_PATTERN.sub('', part) for part in UNIT_WORD_PATTERN.split(text)]
    groups = [g for g in groups if g]
    if not groups:
        raise ValueError(f"No digits in unit-decimal value: {text!r}")
    if len(groups) == 1:
        return Decimal(groups[0])
    return Decimal(f"{groups[0]}.{groups[1]}")


def zero(text: str) -> Decimal:
    return Decimal(0)


def number_words(text: str) -> Decimal:
    """
    Spelled-out English number.

    Unknown words are ignored; a phrase with no known word raises.

    Example:
        number_words('one million two hundred thousand')  # Decimal('1200000')
    """
    total = 0
    current = 0
    matched = False

    for token in NUMBER_WORD_SPLIT_PATTERN.split(text.lower()):
        value = NUMBER_WORDS.get(token)
        if value is None:
            continue
        matched = True
        if value >= NUMBER_WORD_MULTIPLIER_THRESHOLD:
            current = (current or 1) * value
            if value >= NUMBER_WORD_GROUP_THRESHOLD:
                total += current
                current = 0
        else:
            current += value

    if not matched:
        raise ValueError(f"No number words in {text!r}")
    return Decimal(total + current)


def duration_words(text: str) -> Decimal:
    """Quantity before the first duration unit ('two years' -> 2)."""
    tokens = []
    for token in NUMBER_WORD_SPLIT_PATTERN.split(text.lower()):
        if token in DURATION_UNIT_WORDS:
            break
        tokens.append(token)
    return number_words(' '.join(tokens))


def no_number(text: str) -> Optional[Decimal]:
    return None


def negated(handler: FormatHandler) -> FormatHandler:
    """Wrap a handler so parentheses are ignored and the result negated."""
    def handle(text: str) -> Optional[Decimal]:
        value = handler(text.replace(NEGATIVE_OPEN, '').replace(NEGATIVE_CLOSE, ''))
        return -value if value is not None else None
    return handle


def _build_registry() -> dict[str, FormatHandler]:
    registry = {}
    for names, handler in (
        (DOT_DECIMAL_FORMATS, dot_decimal),
        (COMMA_DECIMAL_FORMATS, comma_decimal),
        (UNIT_DECIMAL_FORMATS, unit_decimal),
    ):
        for name in names:
            registry[name] = handler
            registry[name + NEGATIVE_FORMAT_SUFFIX] = negated(handler)

    for name in ZERO_FORMATS:
        registry[name] = zero
    for name in NUMBER_WORD_FORMATS:
        registry[name] = number_words
    for name in DURATION_WORD_FORMATS:
        registry[name] = duration_words
    for name in NON_NUMERIC_FORMATS:
        registry[name] = no_number
    return registry


FORMAT_REGISTRY: Mapping[str, FormatHandler] = MappingProxyType(_build_registry())


def format_key(format_tag: Optional[str]) -> Optional[str]:
    """
    Registry key for a format tag: local part after the last ':', lowercased.

    Example:
        format_key('ixt-sec:NumWordsEn')   # 'numwordsen'
    """
    if not format_tag:
        return None
    key = format_tag.strip().rsplit(FORMAT_PREFIX_SEPARATOR, 1)[-1].lower()
    return key or None


# ==============================================================================
# TRANSFORMER
# ==============================================================================

class ValueTransformer:
    """
    Stateless value conversion.

    All methods return None rather than raising on unparseable input.
    """

    def get_handler(self, format_tag: Optional[str]) -> Optional[FormatHandler]:
        key = format_key(format_tag)
        return FORMAT_REGISTRY.get(key) if key else None

    def is_known_format(self, format_tag: Optional[str]) -> bool:
        return self.get_handler(format_tag) is not None

    def is_nil_sentinel(self, raw: Optional[str]) -> bool:
        """True for placeholder text ('-', dashes, 'N/A', 'nil') that means no value."""
        return raw is not None and raw.strip().lower() in NIL_SENTINELS

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def to_number(self, raw: Optional[str], format_tag: Optional[str] = None) -> Optional[Decimal]:
        """
        Convert a displayed value to a Decimal.

        Nil sentinels give None whatever the format tag. Zero formats
        turn any other text (blank included) into 0. A failing format
        handler falls through to the generic heuristic.

        Args:
            raw: Displayed text
            format_tag: Inline format attribute value (optional)

        Returns:
            Decimal or None
        """
        if raw is None:
            return None
        text = raw.strip()

        if text.lower() in NIL_SENTINELS:
            return None

        handler = self.get_handler(format_tag)
        if handler is zero:
            return Decimal(0)

        if not text:
            return None

        if handler is not None:
            try:
                return handler(text)
            except (ArithmeticError, ValueError) as e:
                logger.debug(f"Format handler {format_tag} failed for {text!r}: {e}")

        return self.parse_generic_number(text)

    def parse_generic_number(self, raw: Optional[str]) -> Optional[Decimal]:
        """
        Parse a number without format information.

        Currency symbols, percent signs and spaces are stripped. A
        parenthesized value or a leading or trailing minus is negative.
        Whichever of '.' and ',' occurs last is the decimal point and every
        earlier separator is thousands grouping, so '1,234' reads as 1.234.
        Text with neither separator is parsed as is.

        Returns:
            Decimal or None if the text is not a number
        """
        if raw is None:
            return None

        cleaned = raw.strip()
        for symbol in STRIPPED_NUMBER_SYMBOLS:
            cleaned = cleaned.replace(symbol, '')
        if not cleaned:
            return None

        negative = False
        if cleaned.startswith(NEGATIVE_OPEN) and cleaned.endswith(NEGATIVE_CLOSE):
            cleaned = cleaned[1:-1]
            negative = True

        if cleaned.startswith(MINUS_SIGN):
            cleaned = cleaned[1:]
            negative = True
        elif cleaned.endswith(MINUS_SIGN):
            cleaned = cleaned[:-1]
            negative = True

        cleaned = self._normalize_separators(cleaned)

        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            logger.debug(f"Not a number: {raw!r}")
            return None

        if not value.is_finite():
            return None
        return -value if negative else value

    @staticmethod
    def _normalize_separators(text: str) -> str:
        decimal_at = max(text.rfind(DOT), text.rfind(COMMA))
        if decimal_at < 0:
            return text

        integer_part = text[:decimal_at].replace(DOT, '').replace(COMMA, '')
        return f"{integer_part}{DOT}{text[decimal_at + 1:]}"

    # ------------------------------------------------------------------
    # Dates and booleans
    # ------------------------------------------------------------------

    def to_date(self, raw: Optional[str], format_tag: Optional[str] = None) -> Optional[date]:
        """
        Parse a date.

        Order: format-specific patterns, generic patterns, then a loose
        YYYY-MM-DD search anywhere in the text.

        Returns:
            date or None
        """
        if raw is None:
            return None
        text = ' '.join(raw.split())
        if not text:
            return None

        key = format_key(format_tag)
        if key in DATE_FORMAT_PATTERNS:
            candidate = text if key in TEXT_DATE_FORMATS else DATE_SEPARATOR_PATTERN.sub(DATE_SEPARATOR, text)
            parsed = self._strptime(candidate, DATE_FORMAT_PATTERNS[key])
            if parsed is not None:
                return parsed

        parsed = self._strptime(text, DATE_PATTERNS)
        if parsed is not None:
            return parsed

        match = LOOSE_DATE_PATTERN.search(text)
        if match:
            try:
                return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            except ValueError:
                return None

        return None

    @staticmethod
    def _strptime(text: str, patterns) -> Optional[date]:
        for pattern in patterns:
            try:
                return datetime.strptime(text, pattern).date()
            except ValueError:
                continue
        return None

    def to_boolean(self, raw: Optional[str]) -> Optional[bool]:
        if raw is None:
            return None
        lowered = raw.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        return None


__all__ = [
    'ValueTransformer',
    'FormatHandler',
    'FORMAT_REGISTRY',
    'format_key',
    'dot_decimal',
    'comma_decimal',
    'unit_decimal',
    'number_words',
    'duration_words',
]
