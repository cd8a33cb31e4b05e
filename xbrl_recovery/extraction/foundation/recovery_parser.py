# Path: extraction/foundation/recovery_parser.py
"""
Recovery Parser

Cascading parse strategies that always produce a usable element tree.

This module handles:
- Strict XML parse (well-formed documents keep full namespace info)
- Lenient HTML and lenient XML parses
- Syntactic repair (bare ampersands, unquoted attributes, void elements)
- Body-only reparse of the content region
- Empty sentinel document as the last resort

Each strategy is a plain function from text to an lxml root element that
raises when it cannot produce one. A lenient strategy that returns an
empty html/head/body shell has failed too. The cascade tries them in
order and counts every fallback step on the diagnostics ledger.

Example:
    parser = RecoveryParser()
    parsed = parser.parse(text, DocumentKind.INLINE_XBRL, diagnostics)

    parsed.root        # lxml element, never None
    parsed.strategy    # 'strict_xml', 'lenient_html', ...
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from lxml import etree, html

from ...core.config_loader import ConfigLoader
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.encoding_detector import DocumentKind
from ..foundation.constants import (
    STRATEGY_STRICT_XML,
    STRATEGY_LENIENT_HTML,
    STRATEGY_LENIENT_XML,
    STRATEGY_REPAIRED_HTML,
    STRATEGY_BODY_ONLY,
    STRATEGY_SENTINEL,
    BARE_AMPERSAND_PATTERN,
    ESCAPED_AMPERSAND,
    UNQUOTED_ATTRIBUTE_PATTERN,
    UNQUOTED_ATTRIBUTE_REPLACEMENT,
    VOID_ELEMENT_PATTERN,
    VOID_ELEMENT_REPLACEMENT,
    BODY_OPEN_MARKER,
    BODY_CLOSE_MARKER,
    SENTINEL_DOCUMENT,
    HTML_SKELETON_ELEMENTS,
)


ParseStrategy = Callable[[str], etree._Element]


class RecoveryStrategyError(ValueError):
    """A parse strategy could not produce a tree."""


# ==============================================================================
# PARSER FACTORIES
# ==============================================================================

# Text is always handed to lxml as UTF-8 bytes with the parser encoding
# pinned, so in-document declarations cannot re-decode it.
INTERNAL_ENCODING = 'utf-8'


def _xml_parser(recover: bool) -> etree.XMLParser:
    return etree.XMLParser(
        recover=recover,
        encoding=INTERNAL_ENCODING,
        resolve_entities=False,  # XXE protection
        no_network=True,
        huge_tree=True,
        remove_blank_text=False,
        remove_comments=False,
    )


def _html_parser() -> html.HTMLParser:
    return html.HTMLParser(
        recover=True,
        encoding=INTERNAL_ENCODING,
        no_network=True,
        remove_blank_text=False,
    )


def _encode(text: str) -> bytes:
    return text.encode(INTERNAL_ENCODING, errors='replace')


# ==============================================================================
# STRATEGIES
# ==============================================================================

def parse_strict_xml(text: str) -> etree._Element:
    """Well-formedness-checked XML parse. Raises XMLSyntaxError on any defect."""
    return etree.fromstring(_encode(text), _xml_parser(recover=False))


def parse_lenient_html(text: str) -> etree._Element:
    """HTML-mode parse with libxml2 recovery. Raises on empty documents."""
    root = html.document_fromstring(_encode(text), parser=_html_parser())
    if root is None:
        raise RecoveryStrategyError("HTML parser returned no root")
    return root


def parse_lenient_xml(text: str) -> etree._Element:
    """XML-mode parse with libxml2 recovery."""
    root = etree.fromstring(_encode(text), _xml_parser(recover=True))
    if root is None:
        raise RecoveryStrategyError("XML parser recovered nothing")
    return root


def repair_markup(text: str) -> str:
    """
    Fix common syntactic defects.

    - Escape '&' that does not start an entity or character reference
    - Quote unquoted attribute values
    - Self-close br/hr/img/input/meta/link
    """
    text = BARE_AMPERSAND_PATTERN.sub(ESCAPED_AMPERSAND, text)
    text = UNQUOTED_ATTRIBUTE_PATTERN.sub(UNQUOTED_ATTRIBUTE_REPLACEMENT, text)
    text = VOID_ELEMENT_PATTERN.sub(VOID_ELEMENT_REPLACEMENT, text)
    return text


def parse_repaired_html(text: str) -> etree._Element:
    return parse_lenient_html(repair_markup(text))


def extract_body_region(text: str) -> Optional[str]:
    """
    Content from the first '<body' to the last '</body>', wrapped in <html>.

    Returns:
        Wrapped body markup or None when there is no body region
    """
    lowered = text.lower()
    start = lowered.find(BODY_OPEN_MARKER)
    end = lowered.rfind(BODY_CLOSE_MARKER)
    if start < 0 or end <= start or text.find('>', start) < 0:
        return None
    return f"<html>{text[start:end + len(BODY_CLOSE_MARKER)]}</html>"


def parse_body_only(text: str) -> etree._Element:
    body = extract_body_region(text)
    if body is None:
        raise RecoveryStrategyError("No <body> region found")
    return parse_lenient_html(body)


def parse_sentinel(text: str) -> etree._Element:
    """Empty well-formed document. Ignores its input."""
    return html.document_fromstring(SENTINEL_DOCUMENT)


def is_empty_tree(root: Optional[etree._Element]) -> bool:
    """
    True when a tree holds no text and no element beyond html/head/body.

    Lenient parsers return such a shell for input they could not read;
    the cascade treats it as a failed strategy.
    """
    if root is None:
        return True
    for elem in root.iter():
        if not isinstance(elem.tag, str):
            continue
        if (elem.text or '').strip():
            return False
        if elem is not root and (elem.tail or '').strip():
            return False
        if elem.tag.lower() not in HTML_SKELETON_ELEMENTS:
            return False
    return True


# Strategies that produce HTML-mode trees (lowercased names, literal prefixes)
HTML_MODE_STRATEGIES = frozenset({
    STRATEGY_LENIENT_HTML,
    STRATEGY_REPAIRED_HTML,
    STRATEGY_BODY_ONLY,
    STRATEGY_SENTINEL,
})

DEFAULT_CASCADE: tuple[tuple[str, ParseStrategy], ...] = (
    (STRATEGY_STRICT_XML, parse_strict_xml),
    (STRATEGY_LENIENT_HTML, parse_lenient_html),
    (STRATEGY_LENIENT_XML, parse_lenient_xml),
    (STRATEGY_REPAIRED_HTML, parse_repaired_html),
    (STRATEGY_BODY_ONLY, parse_body_only),
    (STRATEGY_SENTINEL, parse_sentinel),
)

# HTML mode lowercases element names, which would lose concept-name case
# in traditional instances, so XML-kind documents try lenient XML first.
XML_FIRST_CASCADE: tuple[tuple[str, ParseStrategy], ...] = (
    (STRATEGY_STRICT_XML, parse_strict_xml),
    (STRATEGY_LENIENT_XML, parse_lenient_xml),
    (STRATEGY_LENIENT_HTML, parse_lenient_html),
    (STRATEGY_REPAIRED_HTML, parse_repaired_html),
    (STRATEGY_BODY_ONLY, parse_body_only),
    (STRATEGY_SENTINEL, parse_sentinel),
)


# ==============================================================================
# RESULT
# ==============================================================================

@dataclass(frozen=True)
class ParsedDocument:
    """
    Outcome of the recovery cascade.

    Attributes:
        root: Root element (never None)
        strategy: Name of the strategy that produced the tree
        recoveries: Fallback steps taken before success
        html_mode: True if the tree came from the HTML parser
    """
    root: etree._Element
    strategy: str
    recoveries: int = 0
    html_mode: bool = False

    @property
    def recovered(self) -> bool:
        return self.recoveries > 0

    @property
    def is_sentinel(self) -> bool:
        return self.strategy == STRATEGY_SENTINEL


# ==============================================================================
# CASCADE
# ==============================================================================

class RecoveryParser:
    """
    Runs parse strategies in order until one produces a tree.

    Example:
        parser = RecoveryParser()
        parsed = parser.parse('<html><body>AT&T</body></html>')
        parsed.root.tag    # 'html'
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        cascade: Optional[tuple[tuple[str, ParseStrategy], ...]] = None
    ):
        """
        Initialize recovery parser.

        Args:
            config: Configuration loader
            cascade: Fixed strategy order (default: chosen per document kind)
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)
        self.cascade = cascade

    def strategies_for(self, kind: Optional[DocumentKind]) -> tuple[tuple[str, ParseStrategy], ...]:
        """Ordered strategies for a document kind."""
        if self.cascade is not None:
            return self.cascade
        if kind in (DocumentKind.XBRL_XML, DocumentKind.XML):
            return XML_FIRST_CASCADE
        return DEFAULT_CASCADE

    def parse(
        self,
        text: Optional[str],
        kind: Optional[DocumentKind] = None,
        diagnostics: Optional[Diagnostics] = None
    ) -> ParsedDocument:
        """
        Parse text into a tree, degrading through the cascade.

        Every strategy attempted after the first counts as one malformed
        input recovery. Never raises.

        Args:
            text: Decoded document text
            kind: Detector classification (selects strategy order)
            diagnostics: Ledger for recovery counts and entries

        Returns:
            ParsedDocument whose root is always usable
        """
        text = text or ''
        recoveries = 0
        last_error: Optional[Exception] = None
        previous = None
        cascade = self.strategies_for(kind)

        for name, strategy in cascade:
            if previous is not None:
                recoveries += 1
                if diagnostics is not None:
                    message = f"Parse strategy '{previous}' failed, trying '{name}'"
                    if recoveries == 1 and kind is not None and cascade is XML_FIRST_CASCADE:
                        message += f" (XML-first order for {kind.value} keeps element-name case)"
                    diagnostics.malformed_recoveries += 1
                    diagnostics.info(
                        ErrorCategory.RECOVERY_APPLIED,
                        message,
                        details=str(last_error) if last_error else None
                    )

            try:
                root = strategy(text)
                if name not in (STRATEGY_STRICT_XML, STRATEGY_SENTINEL) and is_empty_tree(root):
                    raise RecoveryStrategyError(f"Strategy '{name}' produced an empty tree")
            except Exception as e:
                self.logger.debug(f"Parse strategy '{name}' failed: {e}")
                last_error = e
                previous = name
                continue

            if name == STRATEGY_SENTINEL:
                self.logger.error("All parse strategies failed; returning empty document")
                if diagnostics is not None:
                    diagnostics.error(
                        ErrorCategory.XML_MALFORMED,
                        "All parse strategies failed; document replaced by an empty sentinel",
                        details=str(last_error) if last_error else None
                    )

            return ParsedDocument(
                root=root,
                strategy=name,
                recoveries=recoveries,
                html_mode=name in HTML_MODE_STRATEGIES
            )

        # The sentinel strategy cannot fail; this is only reached if the
        # cascade was configured without it.
        return ParsedDocument(
            root=parse_sentinel(text),
            strategy=STRATEGY_SENTINEL,
            recoveries=recoveries,
            html_mode=True
        )


__all__ = [
    'ParseStrategy',
    'RecoveryStrategyError',
    'ParsedDocument',
    'RecoveryParser',
    'DEFAULT_CASCADE',
    'XML_FIRST_CASCADE',
    'HTML_MODE_STRATEGIES',
    'parse_strict_xml',
    'parse_lenient_html',
    'parse_lenient_xml',
    'parse_repaired_html',
    'parse_body_only',
    'parse_sentinel',
    'repair_markup',
    'extract_body_region',
    'is_empty_tree',
]
