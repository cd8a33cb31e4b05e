# Path: tests/unit/test_stream_parser.py
"""
Unit Tests for StreamingExtractor and MemoryManager

Tests:
- Fact delivery through sinks and callbacks
- Progress notifications and cancellation
- Metadata reads and fact counting
- Reader failures recorded in the result
- Memory sampling and cleanup
"""

import io
import sys
import threading
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from xbrl_recovery.extraction.streaming.stream_parser import (
    StreamingExtractor,
    ListSink,
    CallbackSink,
    StreamResult,
    should_use_streaming,
)
from xbrl_recovery.extraction.streaming import stream_parser
from xbrl_recovery.extraction.streaming.memory_manager import MemoryManager
from xbrl_recovery.extraction.foundation.element_utils import release, raw_local_name
from xbrl_recovery.extraction.models.error import ErrorCategory

from fixtures.sample_documents import streaming_instance, traditional_instance, US_GAAP_NS


@pytest.fixture
def streamer(mock_config):
    return StreamingExtractor(mock_config)


class TestFactDelivery:
    """Test facts reaching the sink."""

    def test_list_sink(self, streamer, sample_instance):
        """Every fact of the sample should reach the sink."""
        sink = ListSink()
        result = streamer.extract(sample_instance, sink)
        by_name = {f.local_name: f for f in sink.facts}

        assert result.success
        assert result.fact_count == 5
        assert len(sink.facts) == 5
        assert result.context_count == 2
        assert result.unit_count == 2
        assert by_name['Revenues'].numeric_value == Decimal('391035000000')
        assert by_name['Revenues'].namespace_uri == US_GAAP_NS
        assert by_name['Liabilities'].is_nil

    def test_document_order(self, streamer):
        """Facts should arrive in document order."""
        sink = ListSink()
        streamer.extract(streaming_instance(25), sink)

        assert [f.numeric_value for f in sink.facts] == [Decimal(i) for i in range(1, 26)]

    def test_callback_sink(self, streamer):
        """A callback sink should receive each fact."""
        received = []
        result = streamer.extract(streaming_instance(3), CallbackSink(received.append))

        assert len(received) == 3
        assert result.fact_count == 3

    def test_file_sources(self, streamer, temp_dir):
        """Paths and open binary files should both be read."""
        path = temp_dir / 'instance.xml'
        path.write_bytes(streaming_instance(4))

        from_path = streamer.extract(path, ListSink())
        from_str = streamer.extract(str(path), ListSink())
        with open(path, 'rb') as handle:
            from_handle = streamer.extract(handle, ListSink())

        assert from_path.fact_count == from_str.fact_count == from_handle.fact_count == 4
        assert from_path.diagnostics.source == str(path)

    def test_matches_tree_extraction(self, streamer, extractor, sample_instance):
        """Streaming should give the same facts as tree extraction."""
        sink = ListSink()
        streamer.extract(sample_instance, sink)
        parsed = extractor.parse(sample_instance)

        streamed = sorted((f.local_name, f.context_ref, f.raw_value) for f in sink.facts)
        tree = sorted((f.local_name, f.context_ref, f.raw_value) for f in parsed.facts)
        assert streamed == tree

    def test_diagnostics_frozen(self, streamer, sample_instance):
        """The result ledger should be frozen with counters filled."""
        result = streamer.extract(sample_instance, ListSink())

        assert result.diagnostics.frozen
        assert result.diagnostics.facts_found == 5
        assert result.diagnostics.facts_parsed == 5
        assert result.diagnostics.contexts_found == 2
        assert result.diagnostics.namespace_fallbacks == 0


class TestProgressAndCancellation:
    """Test progress callbacks and the cancel event."""

    def test_progress_interval(self, config_factory):
        """Progress should be reported every progress_interval facts."""
        streamer = StreamingExtractor(config_factory({'progress_interval': 4}))
        progress = []

        streamer.extract_with_progress(streaming_instance(10), lambda fact: None, progress.append)

        assert [p.facts_processed for p in progress] == [4, 8]
        assert all(p.elapsed_ms >= 0 for p in progress)

    def test_cancel_before_start(self, streamer):
        """A set event should stop the reader before any fact."""
        cancel = threading.Event()
        cancel.set()

        result = streamer.extract(streaming_instance(10), ListSink(), cancel)

        assert result.cancelled
        assert result.fact_count == 0
        assert result.success

    def test_cancel_mid_stream(self, streamer):
        """Setting the event from the sink should stop delivery."""
        cancel = threading.Event()
        received = []

        def on_fact(fact):
            received.append(fact)
            if len(received) == 3:
                cancel.set()

        result = streamer.extract(streaming_instance(50), CallbackSink(on_fact), cancel)

        assert result.cancelled
        assert result.fact_count == 3
        assert len(received) == 3


class TestMetadata:
    """Test metadata-only reads."""

    def test_extract_metadata(self, streamer, sample_instance):
        """Contexts, units, namespaces and references should be collected."""
        metadata = streamer.extract_metadata(sample_instance)

        assert set(metadata.contexts) == {'FY2024', 'I2024'}
        assert set(metadata.units) == {'usd', 'usdPerShare'}
        assert metadata.namespaces['us-gaap'] == US_GAAP_NS
        assert metadata.schema_ref == 'co-20241231.xsd'
        assert metadata.linkbase_refs == []
        assert metadata.fact_count == 5
        assert metadata.error is None

    def test_count_facts(self, streamer):
        """Counting should match the number of fact elements."""
        assert streamer.count_facts(streaming_instance(12)) == 12
        assert streamer.count_facts(io.BytesIO(streaming_instance(2))) == 2


class TestReaderFailures:
    """Test failures recorded instead of raised."""

    def test_missing_file(self, streamer, temp_dir):
        """A missing path should give an error result."""
        result = streamer.extract(temp_dir / 'missing.xml', ListSink())

        assert not result.success
        assert 'FileNotFoundError' in result.error
        assert result.diagnostics.get_by_category(ErrorCategory.STREAM_FAILED)

    def test_failing_sink_recorded(self, streamer):
        """An exception raised by the sink should end the stream with an error."""
        def on_fact(fact):
            raise ValueError('sink full')

        result = streamer.extract(streaming_instance(3), CallbackSink(on_fact))

        assert not result.success
        assert 'sink full' in result.error
        assert result.fact_count == 0

    def test_to_dict(self):
        """to_dict should expose the counters and the ledger."""
        data = StreamResult(fact_count=10, elapsed_ms=500.0).to_dict()

        assert data['success'] is True
        assert data['facts_per_second'] == 20.0
        assert 'diagnostics' in data


class TestStreamingThreshold:
    """Test the size advisory."""

    def test_should_use_streaming(self):
        """Only documents over the threshold should be streamed."""
        assert should_use_streaming(60 * 1024 * 1024)
        assert not should_use_streaming(10 * 1024 * 1024)
        assert should_use_streaming(2 * 1024 * 1024, threshold_mb=1.0)
        assert not should_use_streaming(0)
        assert not should_use_streaming(None)


class TestMemoryManager:
    """Test memory sampling."""

    def test_disabled_has_no_statistics(self, config_factory):
        """A disabled manager should never sample."""
        manager = MemoryManager(config_factory({'enable_memory_management': False}))

        assert manager.maybe_check(5000) is False
        assert manager.get_statistics() == {}

    def test_checks_on_interval(self, config_factory):
        """Memory should be sampled only on the check interval."""
        manager = MemoryManager(config_factory({
            'enable_memory_management': True,
            'memory_check_interval': 10,
            'memory_threshold_mb': 1024.0 * 1024.0,
        }))

        assert manager.maybe_check(5) is False
        assert manager.maybe_check(10) is False
        assert manager.checks == 1
        assert manager.get_statistics()['checks'] == 1

    def test_cleanup_above_threshold(self, config_factory):
        """Crossing the threshold should trigger garbage collection."""
        manager = MemoryManager(config_factory({
            'enable_memory_management': True,
            'memory_threshold_mb': 0.0,
        }))

        assert manager.check_memory() is True
        assert manager.cleanup_count == 1
        assert manager.peak_snapshot.rss_mb > 0


class TestElementRelease:
    """Test that read elements are released."""

    def test_tuple_nested_facts_released(self, streamer):
        """Facts inside a tuple should be released as soon as they are read."""
        items = ''.join(
            f'<us-gaap:Revenues contextRef="FY2024" unitRef="usd" decimals="0">{i}</us-gaap:Revenues>'
            for i in range(1, 4)
        )
        content = traditional_instance(facts=f'<co:Holdings>{items}</co:Holdings>')
        sink = ListSink()

        with patch.object(stream_parser, 'release', wraps=release) as spy:
            result = streamer.extract(content, sink)

        released = [call.args[0] for call in spy.call_args_list]
        assert result.fact_count == 3
        assert [f.numeric_value for f in sink.facts] == [Decimal(1), Decimal(2), Decimal(3)]
        assert sum(1 for elem in released if raw_local_name(elem) == 'Revenues') == 3
        assert any(raw_local_name(elem) == 'Holdings' for elem in released)
