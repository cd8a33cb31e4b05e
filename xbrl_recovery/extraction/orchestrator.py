# Path: extraction/orchestrator.py
"""
XBRL Extraction Orchestrator

Single entry point that turns raw document bytes into a ParsedInstance.

Pipeline per document:
1. Decode bytes and classify the document kind
2. Parse through the recovery cascade
3. Register namespace declarations
4. Collect schema and linkbase references
5. Extract contexts, units and facts (inline or traditional path)
6. Fill entity, fallback count and elapsed time; freeze diagnostics

parse() never raises. Whatever goes wrong is recorded in the result's
diagnostics and a (possibly empty) ParsedInstance is returned.

Example:
    from xbrl_recovery import XBRLExtractor

    extractor = XBRLExtractor()
    instance = extractor.parse(content, 'text/html', source='filing.htm')

    print(f"{instance.fact_count} facts, format {instance.format}")
    print(instance.diagnostics.summary())
"""

import logging
import threading
import time
from typing import Callable, Optional, Union

from ..core.config_loader import ConfigLoader
from ..core.logger.logger import configure_logging
from .models.diagnostics import Diagnostics
from .models.error import ErrorCategory
from .models.fact import Fact
from .models.parsed_instance import ParsedInstance, XbrlFormat
from .models.config import ExtractorSettings
from .foundation.encoding_detector import EncodingDetector, DocumentKind
from .foundation.recovery_parser import RecoveryParser
from .foundation.namespace_resolver import NamespaceResolver
from .foundation.element_utils import (
    get_attr,
    iter_descendants,
    namespace_declarations,
)
from .transform.value_transformer import ValueTransformer
from .instance.context_parser import ContextParser
from .instance.unit_parser import UnitParser
from .instance.fact_extractor import FactExtractor
from .ixbrl.inline_extractor import InlineFactExtractor, is_fact_element
from .package.package_handler import PackageHandler, PackageResult
from .streaming.stream_parser import (
    StreamingExtractor,
    StreamSource,
    FactSink,
    CallbackSink,
    StreamProgress,
    StreamResult,
    StreamMetadata,
)
from .constants import ELEM_SCHEMA_REF, ELEM_LINKBASE_REF, ATTR_HREF


MS_PER_SECOND = 1000.0
TEXT_INPUT_ENCODING = 'utf-8'


class XBRLExtractor:
    """
    Main extraction orchestrator.

    All per-document state (resolver, diagnostics) is created inside
    each call, so concurrent parse() calls on one instance are safe.

    Example:
        extractor = XBRLExtractor()

        instance = extractor.parse(content)
        package = extractor.parse_package(zip_bytes, 'filing.zip')
        result = extractor.stream('large.xml', lambda fact: store(fact))

        strict = XBRLExtractor(ExtractorSettings(max_nesting_depth=5))
    """

    _logging_configured = False  # Class-level flag to configure logging once

    def __init__(self, config: Optional[Union[ConfigLoader, ExtractorSettings]] = None):
        """
        Initialize orchestrator and its components.

        Args:
            config: Configuration loader, or validated ExtractorSettings
        """
        self.config = config or ConfigLoader()

        if not XBRLExtractor._logging_configured:
            if self.config.get('configure_logging', False):
                configure_logging(self.config)
            XBRLExtractor._logging_configured = True

        self.logger = logging.getLogger(__name__)

        self.detector = EncodingDetector(self.config)
        self.recovery_parser = RecoveryParser(self.config)
        self.transformer = ValueTransformer()
        self.context_parser = ContextParser(self.config)
        self.unit_parser = UnitParser(self.config)
        self.fact_extractor = FactExtractor(self.config)
        self.inline_extractor = InlineFactExtractor(self.config)
        self.package_handler = PackageHandler(self.parse, self.config)
        self.streaming = StreamingExtractor(self.config)

        self.logger.debug("XBRLExtractor initialized")

    # ------------------------------------------------------------------
    # Single documents
    # ------------------------------------------------------------------

    def parse(
        self,
        content: Union[bytes, bytearray, str, None],
        content_type: Optional[str] = None,
        source: Optional[str] = None
    ) -> ParsedInstance:
        """
        Parse one instance document (traditional or inline).

        Args:
            content: Document bytes (text is encoded as UTF-8)
            content_type: Declared content type, e.g. 'text/html; charset=utf-8'
            source: Label attached to the result and its diagnostics

        Returns:
            ParsedInstance (never raises)
        """
        started = time.perf_counter()
        diagnostics = Diagnostics(source=source)

        try:
            return self._parse(content, content_type, source, diagnostics, started)
        except Exception as e:
            self.logger.error(f"Parse of {source or '<bytes>'} failed: {e}", exc_info=True)
            if not diagnostics.frozen:
                diagnostics.error(
                    ErrorCategory.PARSE_FAILED,
                    f"Unexpected failure while parsing: {e}",
                    details=type(e).__name__
                )
                self._finish(diagnostics, started)
            return ParsedInstance(
                source=source,
                format=XbrlFormat.UNKNOWN,
                diagnostics=diagnostics
            )

    def _parse(
        self,
        content,
        content_type: Optional[str],
        source: Optional[str],
        diagnostics: Diagnostics,
        started: float
    ) -> ParsedInstance:
        if isinstance(content, str):
            content = content.encode(TEXT_INPUT_ENCODING)
        content = bytes(content or b'')

        resolver = NamespaceResolver()

        decoded = self.detector.decode(content, content_type, diagnostics)
        parsed = self.recovery_parser.parse(decoded.text, decoded.kind, diagnostics)
        root = parsed.root

        self._register_namespaces(root, resolver, parsed.html_mode)
        schema_refs = self._collect_hrefs(root, ELEM_SCHEMA_REF)
        linkbase_refs = self._collect_hrefs(root, ELEM_LINKBASE_REF)

        xbrl_format = XbrlFormat.UNKNOWN
        contexts, units, facts = {}, {}, []

        xbrl_root = None
        if decoded.kind != DocumentKind.INLINE_XBRL:
            xbrl_root = self.fact_extractor.find_xbrl_root(root)

        if xbrl_root is not None:
            xbrl_format = XbrlFormat.TRADITIONAL
            contexts = self.context_parser.parse_contexts(xbrl_root, resolver, diagnostics)
            units = self.unit_parser.parse_units(xbrl_root, resolver, diagnostics)
            facts = self.fact_extractor.extract_facts(xbrl_root, resolver, self.transformer, diagnostics)

        elif decoded.kind == DocumentKind.INLINE_XBRL or self._has_inline_facts(root):
            xbrl_format = XbrlFormat.INLINE
            contexts = self.context_parser.parse_contexts(root, resolver, diagnostics)
            units = self.unit_parser.parse_units(root, resolver, diagnostics)
            facts = self.inline_extractor.extract_facts(root, resolver, self.transformer, diagnostics)

        else:
            diagnostics.error(
                ErrorCategory.NO_XBRL_ROOT,
                f"No xbrl root element or inline facts found (document kind {decoded.kind})"
            )

        entity_identifier, entity_scheme = None, None
        if contexts:
            entity = next(iter(contexts.values())).entity
            entity_identifier, entity_scheme = entity.value, entity.scheme

        diagnostics.namespace_fallbacks = resolver.fallbacks_used
        self._finish(diagnostics, started)

        instance = ParsedInstance(
            source=source,
            format=xbrl_format,
            diagnostics=diagnostics,
            document_kind=decoded.kind.value,
            encoding=decoded.encoding,
            namespaces=resolver.get_namespaces(),
            schema_refs=schema_refs,
            linkbase_refs=linkbase_refs,
            entity_identifier=entity_identifier,
            entity_scheme=entity_scheme,
            contexts=contexts,
            units=units,
            facts=facts
        )

        self.logger.info(
            f"Parsed {source or '<bytes>'} ({xbrl_format}, {parsed.strategy}): {diagnostics.summary()}"
        )
        return instance

    @staticmethod
    def _finish(diagnostics: Diagnostics, started: float) -> None:
        diagnostics.elapsed_ms = max(0.0, (time.perf_counter() - started) * MS_PER_SECOND)
        diagnostics.freeze()

    @staticmethod
    def _register_namespaces(root, resolver: NamespaceResolver, html_mode: bool) -> None:
        """
        Register declarations from the root, then from descendants.

        Root declarations take precedence. HTML-mode trees keep
        declarations as literal xmlns attributes, which can sit on any
        element, so every element is scanned; namespace-aware trees
        expose inherited declarations through nsmap, so the root and its
        direct children are enough.
        """
        resolver.register_all(namespace_declarations(root))

        descendants = root.iter() if html_mode else root
        for elem in descendants:
            for prefix, uri in namespace_declarations(elem).items():
                if not resolver.is_declared(prefix):
                    resolver.register(prefix, uri)

    @staticmethod
    def _collect_hrefs(root, name: str) -> list[str]:
        hrefs = []
        for elem in iter_descendants(root, name):
            href = get_attr(elem, ATTR_HREF)
            if href and href.strip():
                hrefs.append(href.strip())
        return hrefs

    @staticmethod
    def _has_inline_facts(root) -> bool:
        return any(is_fact_element(elem) for elem in root.iter())

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    def parse_package(self, content: Optional[bytes], package_uri: Optional[str] = None) -> PackageResult:
        """
        Parse every instance document in a filing package (ZIP).

        Args:
            content: Archive bytes
            package_uri: Package identifier for the result

        Returns:
            PackageResult (a bad archive sets PackageResult.error)
        """
        return self.package_handler.parse_package(content, package_uri)

    def parse_file(self, content: bytes, filename: str) -> ParsedInstance:
        """Parse one document with a content type derived from its file name."""
        return self.package_handler.parse_file(content, filename)

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def stream(
        self,
        source: StreamSource,
        sink: Union[FactSink, Callable[[Fact], None]],
        cancel_event: Optional[threading.Event] = None
    ) -> StreamResult:
        """
        Stream facts of a large document into a sink or callback.

        Returns:
            StreamResult (errors recorded, never raised)
        """
        if not isinstance(sink, FactSink):
            sink = CallbackSink(sink)
        return self.streaming.extract(source, sink, cancel_event)

    def stream_with_progress(
        self,
        source: StreamSource,
        on_fact: Callable[[Fact], None],
        on_progress: Optional[Callable[[StreamProgress], None]] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> StreamResult:
        return self.streaming.extract_with_progress(source, on_fact, on_progress, cancel_event)

    def stream_metadata(self, source: StreamSource) -> StreamMetadata:
        """Contexts, units, namespaces and references without materializing facts."""
        return self.streaming.extract_metadata(source)

    def count_facts(self, source: StreamSource) -> int:
        return self.streaming.count_facts(source)


# ==============================================================================
# MODULE-LEVEL CONVENIENCE
# ==============================================================================

_default_extractor: Optional[XBRLExtractor] = None
_default_lock = threading.Lock()


def get_default_extractor() -> XBRLExtractor:
    """Shared extractor built from the singleton configuration."""
    global _default_extractor
    with _default_lock:
        if _default_extractor is None:
            _default_extractor = XBRLExtractor()
        return _default_extractor


def parse(
    content: Union[bytes, bytearray, str, None],
    content_type: Optional[str] = None,
    source: Optional[str] = None
) -> ParsedInstance:
    """
    Parse one document with the default extractor.

    Example:
        from xbrl_recovery import parse

        instance = parse(open('filing.htm', 'rb').read(), 'text/html')
    """
    return get_default_extractor().parse(content, content_type, source)


def parse_package(content: Optional[bytes], package_uri: Optional[str] = None) -> PackageResult:
    """Parse a filing package with the default extractor."""
    return get_default_extractor().parse_package(content, package_uri)


__all__ = [
    'XBRLExtractor',
    'get_default_extractor',
    'parse',
    'parse_package',
]
