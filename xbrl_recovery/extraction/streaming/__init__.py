# Path: extraction/streaming/__init__.py
"""
Streaming Module

Forward-only extraction for instance documents too large to hold as
a tree.

Components:
    - stream_parser: iterparse-driven extractor, sinks and results
    - memory_manager: Memory sampling and cleanup

Example:
    from ..streaming import StreamingExtractor, ListSink, should_use_streaming

    if should_use_streaming(len(content)):
        sink = ListSink()
        result = StreamingExtractor().extract(content, sink)
"""

from ..streaming.stream_parser import (
    StreamSource,
    FactSink,
    CallbackSink,
    ListSink,
    StreamProgress,
    StreamResult,
    StreamMetadata,
    StreamingExtractor,
    should_use_streaming,
)
from ..streaming.memory_manager import (
    MemorySnapshot,
    MemoryManager,
)

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
    'MemorySnapshot',
    'MemoryManager',
]
