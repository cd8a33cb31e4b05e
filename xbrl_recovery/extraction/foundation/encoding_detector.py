# Path: extraction/foundation/encoding_detector.py
"""
Encoding & Format Detector

Turns raw bytes into text and classifies the document kind.

This module handles:
- Encoding resolution (content-type charset, BOM, XML declaration,
  HTML meta charset, HTML content-type meta, UTF-8 default)
- Encoding alias table with codec-registry fallback
- Decoding that never fails (replacement characters as last resort)
- Removal of control characters invalid in XML
- Document kind classification from the head of the text

Example:
    detector = EncodingDetector()
    decoded = detector.decode(content, 'text/html; charset=utf-8')

    print(decoded.encoding)   # 'utf-8'
    print(decoded.kind)       # DocumentKind.INLINE_XBRL
"""

import codecs
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.config_loader import ConfigLoader
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.constants import (
    CONTENT_TYPE_CHARSET_PATTERN,
    XML_ENCODING_PATTERN,
    HTML_META_CHARSET_PATTERN,
    HTML_CONTENT_TYPE_PATTERN,
    BYTE_ORDER_MARKS,
    ENCODING_ALIASES,
    DEFAULT_ENCODING,
    ENCODING_SNIFF_BYTES,
    INVALID_XML_CHARS_PATTERN,
    ENCODING_SOURCE_CONTENT_TYPE,
    ENCODING_SOURCE_BOM,
    ENCODING_SOURCE_XML_DECLARATION,
    ENCODING_SOURCE_META_CHARSET,
    ENCODING_SOURCE_META_CONTENT_TYPE,
    ENCODING_SOURCE_DEFAULT,
    KIND_SNIFF_CHARS,
    INLINE_MARKERS,
    XBRL_MARKERS,
    XBRL_ROOT_MARKER,
    XBRL_ORG_MARKER,
    HTML_MARKERS,
    XML_DECLARATION_MARKER,
    XML_TAG_OPEN_PATTERN,
)


# ==============================================================================
# DOCUMENT KIND
# ==============================================================================

class DocumentKind(Enum):
    """
    Document classification.

    Types:
        INLINE_XBRL: HTML with inline fact markup
        XBRL_XML: Traditional instance document
        HTML: Plain HTML
        XML: Some other XML
        UNKNOWN: Not recognizable markup
    """
    INLINE_XBRL = "INLINE_XBRL"
    XBRL_XML = "XBRL_XML"
    HTML = "HTML"
    XML = "XML"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# RESULTS
# ==============================================================================

@dataclass(frozen=True)
class EncodingResult:
    """
    Resolved encoding.

    Attributes:
        encoding: Python codec name
        source: Where it was found (content-type, bom, xml-declaration, ...)
        bom_length: Bytes of byte-order mark to skip
    """
    encoding: str
    source: str
    bom_length: int = 0


@dataclass(frozen=True)
class DecodedDocument:
    """
    Decoded, cleaned and classified document text.

    Attributes:
        text: Decoded text with invalid control characters removed
        encoding: Codec actually used
        encoding_source: Where the encoding came from
        kind: Document classification
        replaced_characters: True if undecodable bytes were replaced
    """
    text: str
    encoding: str
    encoding_source: str
    kind: DocumentKind
    replaced_characters: bool = False


# ==============================================================================
# DETECTOR
# ==============================================================================

class EncodingDetector:
    """
    Resolves byte content to text and classifies document kind.

    Never raises for any byte input.

    Example:
        detector = EncodingDetector()
        result = detector.detect(b'\\xef\\xbb\\xbf<?xml version="1.0"?><a/>')
        result.encoding   # 'utf-8'
        result.source     # 'bom'
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize detector.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

        self.sniff_bytes = self.config.get('encoding_sniff_bytes', ENCODING_SNIFF_BYTES)
        self.kind_sniff_chars = self.config.get('kind_sniff_chars', KIND_SNIFF_CHARS)
        self.default_encoding = self.resolve_encoding(
            self.config.get('default_encoding', DEFAULT_ENCODING)
        ) or DEFAULT_ENCODING

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def resolve_encoding(self, name: Optional[str]) -> Optional[str]:
        """
        Resolve an encoding name to a Python codec name.

        Checks the alias table first, then the codec registry.

        Args:
            name: Encoding name as declared (e.g., 'Latin1', 'UTF8')

        Returns:
            Codec name or None if unresolvable
        """
        if not name:
            return None

        normalized = name.strip().strip('"\'').lower()
        if normalized in ENCODING_ALIASES:
            return ENCODING_ALIASES[normalized]

        try:
            return codecs.lookup(normalized).name
        except LookupError:
            self.logger.debug(f"Unknown encoding name ignored: {name}")
            return None

    def detect(self, content: bytes, content_type: Optional[str] = None) -> EncodingResult:
        """
        Resolve the encoding of a byte buffer.

        Order (first match wins): content-type charset, BOM, XML
        declaration, HTML meta charset, HTML content-type meta, default.

        Args:
            content: Raw bytes
            content_type: Declared content-type header value (optional)

        Returns:
            EncodingResult
        """
        content = content or b''

        if content_type:
            match = CONTENT_TYPE_CHARSET_PATTERN.search(content_type)
            if match:
                encoding = self.resolve_encoding(match.group(1))
                if encoding:
                    return EncodingResult(encoding, ENCODING_SOURCE_CONTENT_TYPE,
                                          self._bom_length(content, encoding))

        for bom, encoding in BYTE_ORDER_MARKS:
            if content.startswith(bom):
                return EncodingResult(encoding, ENCODING_SOURCE_BOM, len(bom))

        head = content[:self.sniff_bytes].decode('ascii', errors='replace')

        for pattern, source in (
            (XML_ENCODING_PATTERN, ENCODING_SOURCE_XML_DECLARATION),
            (HTML_META_CHARSET_PATTERN, ENCODING_SOURCE_META_CHARSET),
            (HTML_CONTENT_TYPE_PATTERN, ENCODING_SOURCE_META_CONTENT_TYPE),
        ):
            match = pattern.search(head)
            if match:
                encoding = self.resolve_encoding(match.group(1))
                if encoding:
                    return EncodingResult(encoding, source)

        return EncodingResult(self.default_encoding, ENCODING_SOURCE_DEFAULT)

    def _bom_length(self, content: bytes, encoding: str) -> int:
        """BOM bytes to skip when a declared charset agrees with the BOM."""
        for bom, bom_encoding in BYTE_ORDER_MARKS:
            if content.startswith(bom) and codecs.lookup(bom_encoding).name == codecs.lookup(encoding).name:
                return len(bom)
        return 0

    def decode(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        diagnostics: Optional[Diagnostics] = None
    ) -> DecodedDocument:
        """
        Decode, clean and classify a byte buffer.

        A decode failure is retried with UTF-8 and replacement characters,
        which counts as an encoding recovery.

        Args:
            content: Raw bytes
            content_type: Declared content-type header value (optional)
            diagnostics: Ledger for encoding recoveries (optional)

        Returns:
            DecodedDocument
        """
        content = content or b''
        detected = self.detect(content, content_type)
        payload = content[detected.bom_length:]

        encoding = detected.encoding
        replaced = False
        try:
            text = payload.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            self.logger.warning(f"Decoding as {encoding} failed, retrying utf-8 with replacement: {e}")
            text = payload.decode(DEFAULT_ENCODING, errors='replace')
            encoding = DEFAULT_ENCODING
            replaced = True
            if diagnostics is not None:
                diagnostics.encoding_recoveries += 1
                diagnostics.info(
                    ErrorCategory.XML_ENCODING,
                    f"Content is not valid {detected.encoding} ({detected.source}); "
                    f"decoded as utf-8 with replacement characters",
                    details=str(e)
                )

        if text.startswith('\ufeff'):
            text = text[1:]

        text = self.clean_invalid_characters(text)
        kind = self.classify(text)

        self.logger.debug(f"Decoded {len(content)} bytes as {encoding} ({detected.source}), kind={kind}")

        return DecodedDocument(
            text=text,
            encoding=encoding,
            encoding_source=detected.source,
            kind=kind,
            replaced_characters=replaced
        )

    @staticmethod
    def clean_invalid_characters(text: str) -> str:
        """Remove control characters that are never valid in XML text."""
        return INVALID_XML_CHARS_PATTERN.sub('', text)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, text: Optional[str]) -> DocumentKind:
        """
        Classify a document from the head of its text.

        Priority: inline markers, traditional instance markers, HTML
        doctype/root, XML declaration or opening tag, UNKNOWN.

        Args:
            text: Decoded document text

        Returns:
            DocumentKind
        """
        if not text:
            return DocumentKind.UNKNOWN

        head = text[:self.kind_sniff_chars].lower()

        if any(marker in head for marker in INLINE_MARKERS):
            return DocumentKind.INLINE_XBRL

        if any(marker in head for marker in XBRL_MARKERS) or (
            XBRL_ROOT_MARKER in head and XBRL_ORG_MARKER in head
        ):
            return DocumentKind.XBRL_XML

        if any(marker in head for marker in HTML_MARKERS):
            return DocumentKind.HTML

        if head.startswith(XML_DECLARATION_MARKER) or XML_TAG_OPEN_PATTERN.match(head):
            return DocumentKind.XML

        return DocumentKind.UNKNOWN


__all__ = [
    'DocumentKind',
    'EncodingResult',
    'DecodedDocument',
    'EncodingDetector',
]
