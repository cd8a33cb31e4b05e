# Path: extraction/streaming/stream_parser.py
"""
Streaming XBRL Extractor

Forward-only extraction for traditional instance documents too large
to hold as a tree.

This module handles:
- Token reading with lxml iterparse in recover mode
- Namespace registration from start-ns tokens
- Contexts and units finalized at their closing tag
- Facts delivered to a sink as soon as they are complete
- Releasing completed top-level elements and read tuple-nested facts
- Progress callbacks, cancellation and memory sampling

Contexts, units and facts are built by the same code the tree-based
extractors use, so both paths apply identical rules.

Example:
    extractor = StreamingExtractor()
    result = extractor.extract_with_progress(
        'large_filing.xml',
        on_fact=lambda fact: store(fact),
        on_progress=lambda p: print(f"{p.facts_processed} facts")
    )

    if not result.success:
        print(f"Stream failed: {result.error}")
"""

import io
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, Union
from lxml import etree

from ...core.config_loader import ConfigLoader
from ..models.context import Context
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..models.fact import Fact
from ..models.unit import Unit
from ..foundation.namespace_resolver import NamespaceResolver
from ..foundation.element_utils import (
    local_name,
    get_attr,
    describe,
    source_line,
    release,
)
from ..transform.value_transformer import ValueTransformer
from ..instance.context_parser import ContextParser
from ..instance.unit_parser import UnitParser
from ..instance.fact_extractor import FactExtractor
from ..constants import (
    ELEM_CONTEXT,
    ELEM_UNIT,
    ELEM_SCHEMA_REF,
    ELEM_LINKBASE_REF,
    ATTR_ID,
    ATTR_CONTEXT_REF,
    ATTR_HREF,
)
from ..streaming.memory_manager import MemoryManager
from ..streaming.constants import (
    EVENT_START,
    EVENT_END,
    EVENT_START_NS,
    ITERPARSE_EVENTS,
    BINARY_READ_MODE,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_STREAMING_THRESHOLD_MB,
    BYTES_PER_MB,
    MS_PER_SECOND,
)


StreamSource = Union[bytes, bytearray, str, Path, BinaryIO]

# Elements whose content is finalized as a unit at the closing tag
_CONTAINER_ELEMENTS = frozenset({ELEM_CONTEXT, ELEM_UNIT})


# ==============================================================================
# SINKS
# ==============================================================================

class FactSink:
    """
    Receives each fact as soon as it is complete.

    Subclasses override accept(). Facts are never buffered by the
    extractor; whatever the sink keeps is its own choice.
    """

    def accept(self, fact: Fact) -> None:
        raise NotImplementedError


class CallbackSink(FactSink):
    """Forwards facts to a callable."""

    def __init__(self, callback: Callable[[Fact], None]):
        self.callback = callback

    def accept(self, fact: Fact) -> None:
        self.callback(fact)


class ListSink(FactSink):
    """Collects facts in a list (for small documents and tests)."""

    def __init__(self):
        self.facts: list[Fact] = []

    def accept(self, fact: Fact) -> None:
        self.facts.append(fact)


# ==============================================================================
# RESULTS
# ==============================================================================

@dataclass(frozen=True)
class StreamProgress:
    """
    Progress notification.

    Attributes:
        facts_processed: Facts delivered so far
        errors_encountered: Skipped facts and error entries so far
        elapsed_ms: Time since the stream started
    """
    facts_processed: int
    errors_encountered: int
    elapsed_ms: float


@dataclass
class StreamResult:
    """
    Outcome of one streaming extraction.

    Attributes:
        fact_count: Facts delivered to the sink
        error_count: Facts skipped plus error entries
        context_count: Contexts kept
        unit_count: Units kept
        elapsed_ms: Wall time in milliseconds
        error: Reader failure message (None on success)
        cancelled: True if the cancel event stopped the reader
        diagnostics: Frozen diagnostics ledger
    """
    fact_count: int = 0
    error_count: int = 0
    context_count: int = 0
    unit_count: int = 0
    elapsed_ms: float = 0.0
    error: Optional[str] = None
    cancelled: bool = False
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def facts_per_second(self) -> float:
        if self.elapsed_ms <= 0:
            return 0.0
        return self.fact_count / self.elapsed_ms * MS_PER_SECOND

    def to_dict(self) -> dict[str, Any]:
        return {
            'fact_count': self.fact_count,
            'error_count': self.error_count,
            'context_count': self.context_count,
            'unit_count': self.unit_count,
            'elapsed_ms': self.elapsed_ms,
            'error': self.error,
            'cancelled': self.cancelled,
            'success': self.success,
            'facts_per_second': self.facts_per_second,
            'diagnostics': self.diagnostics.to_dict(),
        }


@dataclass
class StreamMetadata:
    """
    Document metadata gathered without materializing facts.

    Attributes:
        contexts: Context id -> Context
        units: Unit id -> Unit
        namespaces: Declared prefix -> URI
        schema_refs: schemaRef hrefs in document order
        linkbase_refs: linkbaseRef hrefs in document order
        fact_count: Fact elements seen
        error: Reader failure message (None on success)
    """
    contexts: dict[str, Context] = field(default_factory=dict)
    units: dict[str, Unit] = field(default_factory=dict)
    namespaces: dict[str, str] = field(default_factory=dict)
    schema_refs: list[str] = field(default_factory=list)
    linkbase_refs: list[str] = field(default_factory=list)
    fact_count: int = 0
    error: Optional[str] = None

    @property
    def schema_ref(self) -> Optional[str]:
        """First schemaRef href, the usual entry point."""
        return self.schema_refs[0] if self.schema_refs else None


@dataclass
class _StreamState:
    """Mutable per-call reader state."""
    resolver: NamespaceResolver
    diagnostics: Diagnostics
    contexts: dict[str, Context] = field(default_factory=dict)
    units: dict[str, Unit] = field(default_factory=dict)
    schema_refs: list[str] = field(default_factory=list)
    linkbase_refs: list[str] = field(default_factory=list)
    level: int = 0
    container_depth: int = 0
    delivered: int = 0
    cancelled: bool = False
    error: Optional[str] = None
    started: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * MS_PER_SECOND

    @property
    def errors_encountered(self) -> int:
        return self.diagnostics.facts_skipped + len(self.diagnostics.errors)


# ==============================================================================
# EXTRACTOR
# ==============================================================================

class StreamingExtractor:
    """
    Streaming extractor for large traditional instance documents.

    Each call builds a fresh namespace resolver and diagnostics ledger,
    so one extractor can serve concurrent calls. Callbacks run
    synchronously on the caller's thread.

    Example:
        extractor = StreamingExtractor()
        sink = ListSink()
        result = extractor.extract(content, sink)

        print(f"{result.fact_count} facts in {result.elapsed_ms:.0f}ms")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize streaming extractor.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

        self.progress_interval = max(1, self.config.get('progress_interval', DEFAULT_PROGRESS_INTERVAL))

        self.transformer = ValueTransformer()
        self.context_parser = ContextParser(self.config)
        self.unit_parser = UnitParser(self.config)
        self.fact_extractor = FactExtractor(self.config)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def extract(
        self,
        source: StreamSource,
        sink: FactSink,
        cancel_event: Optional[threading.Event] = None
    ) -> StreamResult:
        """
        Stream every fact of a document into sink.

        Args:
            source: Bytes, binary file object or path
            sink: Receives each fact as soon as it is complete
            cancel_event: Stops the reader cleanly when set

        Returns:
            StreamResult (reader errors are recorded, never raised)
        """
        return self.extract_with_progress(source, sink.accept, None, cancel_event)

    def extract_with_progress(
        self,
        source: StreamSource,
        on_fact: Callable[[Fact], None],
        on_progress: Optional[Callable[[StreamProgress], None]] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> StreamResult:
        """
        Stream facts to a callback, reporting progress periodically.

        on_progress receives a StreamProgress every progress_interval
        facts.

        Returns:
            StreamResult
        """
        state = self._run(source, on_fact, on_progress, cancel_event, build_facts=True)

        state.diagnostics.contexts_found = len(state.contexts)
        state.diagnostics.units_found = len(state.units)
        state.diagnostics.namespace_fallbacks = state.resolver.fallbacks_used
        state.diagnostics.elapsed_ms = state.elapsed_ms
        state.diagnostics.freeze()

        result = StreamResult(
            fact_count=state.delivered,
            error_count=state.errors_encountered,
            context_count=len(state.contexts),
            unit_count=len(state.units),
            elapsed_ms=state.diagnostics.elapsed_ms,
            error=state.error,
            cancelled=state.cancelled,
            diagnostics=state.diagnostics
        )

        self.logger.info(
            f"Streaming extraction {'cancelled' if state.cancelled else 'complete'}: "
            f"{result.fact_count} facts, {result.context_count} contexts, "
            f"{result.unit_count} units in {result.elapsed_ms:.1f}ms"
        )
        return result

    def extract_metadata(
        self,
        source: StreamSource,
        cancel_event: Optional[threading.Event] = None
    ) -> StreamMetadata:
        """
        Read contexts, units, namespaces and references only.

        Fact elements are counted but never materialized.

        Returns:
            StreamMetadata
        """
        state = self._run(source, None, None, cancel_event, build_facts=False)

        return StreamMetadata(
            contexts=state.contexts,
            units=state.units,
            namespaces=state.resolver.get_namespaces(),
            schema_refs=state.schema_refs,
            linkbase_refs=state.linkbase_refs,
            fact_count=state.diagnostics.facts_found,
            error=state.error
        )

    def count_facts(self, source: StreamSource) -> int:
        """
        Count fact elements without building them.

        Returns:
            Number of elements carrying contextRef outside contexts and units
        """
        return self.extract_metadata(source).fact_count

    # ------------------------------------------------------------------
    # Reader
    # ------------------------------------------------------------------

    def _open(self, source: StreamSource) -> tuple[BinaryIO, bool]:
        """Binary stream for source and whether the extractor owns it."""
        if isinstance(source, (bytes, bytearray)):
            return io.BytesIO(bytes(source)), True
        if isinstance(source, (str, Path)):
            return open(source, BINARY_READ_MODE), True
        return source, False

    def _run(
        self,
        source: StreamSource,
        on_fact: Optional[Callable[[Fact], None]],
        on_progress: Optional[Callable[[StreamProgress], None]],
        cancel_event: Optional[threading.Event],
        build_facts: bool
    ) -> _StreamState:
        state = _StreamState(
            resolver=NamespaceResolver(),
            diagnostics=Diagnostics(source=self._describe_source(source))
        )
        memory = MemoryManager(self.config) if build_facts else None

        stream = None
        owned = False
        try:
            stream, owned = self._open(source)
            reader = etree.iterparse(
                stream,
                events=ITERPARSE_EVENTS,
                recover=True,
                huge_tree=True,
                resolve_entities=False,
                no_network=True
            )

            for event, payload in self._tokens(reader, cancel_event, state):
                if event == EVENT_START_NS:
                    prefix, uri = payload
                    state.resolver.register(prefix, uri)
                elif event == EVENT_START:
                    self._on_start(payload, state)
                else:
                    self._on_end(payload, state, on_fact, on_progress, memory, build_facts)

        except Exception as e:
            state.error = f"{type(e).__name__}: {e}"
            self.logger.error(f"Streaming extraction failed: {e}", exc_info=True)
            state.diagnostics.error(
                ErrorCategory.STREAM_FAILED,
                f"Streaming extraction failed: {e}",
                details=type(e).__name__
            )
        finally:
            if owned and stream is not None:
                stream.close()

        if memory is not None:
            self.logger.debug(f"Streaming memory statistics: {memory.get_statistics()}")

        return state

    def _tokens(self, reader, cancel_event: Optional[threading.Event], state: _StreamState):
        """Reader tokens until exhausted or cancelled."""
        iterator = iter(reader)
        while True:
            if cancel_event is not None and cancel_event.is_set():
                state.cancelled = True
                self.logger.info("Streaming extraction cancelled")
                return
            try:
                token = next(iterator)
            except StopIteration:
                return
            yield token

    def _on_start(self, elem: etree._Element, state: _StreamState) -> None:
        state.level += 1
        if local_name(elem) in _CONTAINER_ELEMENTS:
            state.container_depth += 1

    def _on_end(
        self,
        elem: etree._Element,
        state: _StreamState,
        on_fact: Optional[Callable[[Fact], None]],
        on_progress: Optional[Callable[[StreamProgress], None]],
        memory: Optional[MemoryManager],
        build_facts: bool
    ) -> None:
        state.level -= 1
        name = local_name(elem)

        if name in _CONTAINER_ELEMENTS:
            state.container_depth -= 1
            if state.container_depth == 0:
                if name == ELEM_CONTEXT:
                    self.context_parser.add_context(state.contexts, elem, state.resolver, state.diagnostics)
                else:
                    self.unit_parser.add_unit(state.units, elem, state.resolver, state.diagnostics)

        elif state.container_depth == 0:
            if name == ELEM_SCHEMA_REF:
                self._collect_href(elem, state.schema_refs)
            elif name == ELEM_LINKBASE_REF:
                self._collect_href(elem, state.linkbase_refs)
            elif get_attr(elem, ATTR_CONTEXT_REF) is not None:
                state.diagnostics.facts_found += 1
                if build_facts:
                    self._deliver(elem, state, on_fact, on_progress, memory)
                # Facts nested in tuples are released once read, unless the
                # enclosing element is itself a fact still to be read
                parent = elem.getparent()
                if state.level > 1 and parent is not None and get_attr(parent, ATTR_CONTEXT_REF) is None:
                    release(elem)

        # Top-level elements (children of the root) are complete here
        if state.level == 1 and state.container_depth == 0:
            release(elem)

    def _deliver(
        self,
        elem: etree._Element,
        state: _StreamState,
        on_fact: Optional[Callable[[Fact], None]],
        on_progress: Optional[Callable[[StreamProgress], None]],
        memory: Optional[MemoryManager]
    ) -> None:
        try:
            fact = self.fact_extractor.build_fact(elem, state.resolver, self.transformer, state.diagnostics)
        except Exception as e:
            self.logger.error(f"Failed to extract streamed fact from {elem.tag}: {e}", exc_info=True)
            state.diagnostics.skip_fact(
                ErrorCategory.INVALID_FACT,
                f"Failed to extract fact: {e}",
                element_id=get_attr(elem, ATTR_ID) or describe(elem),
                line_number=source_line(elem)
            )
            return

        state.diagnostics.facts_parsed += 1
        if on_fact is not None:
            on_fact(fact)
        state.delivered += 1

        if on_progress is not None and state.delivered % self.progress_interval == 0:
            on_progress(StreamProgress(
                facts_processed=state.delivered,
                errors_encountered=state.errors_encountered,
                elapsed_ms=state.elapsed_ms
            ))

        if memory is not None:
            memory.maybe_check(state.delivered)

    @staticmethod
    def _collect_href(elem: etree._Element, target: list[str]) -> None:
        href = get_attr(elem, ATTR_HREF)
        if href:
            target.append(href.strip())

    @staticmethod
    def _describe_source(source: StreamSource) -> Optional[str]:
        if isinstance(source, (str, Path)):
            return str(source)
        return getattr(source, 'name', None)


def should_use_streaming(
    size_bytes: int,
    threshold_mb: float = DEFAULT_STREAMING_THRESHOLD_MB
) -> bool:
    """
    Advisory: whether a document of this size is better streamed.

    Args:
        size_bytes: Document size in bytes
        threshold_mb: Size threshold in MB

    Returns:
        True if the document exceeds the threshold
    """
    if size_bytes is None or size_bytes <= 0:
        return False
    return size_bytes / BYTES_PER_MB > threshold_mb


__all__ = [
    'StreamSource',
    'FactSink',
    'CallbackSink',
    'ListSink',
    'StreamProgress',
    'StreamResult',
    'StreamMetadata',
    'StreamingExtractor',
    'should_use_streaming',
]
