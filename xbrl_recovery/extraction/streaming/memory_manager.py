# Path: extraction/streaming/memory_manager.py
"""
Memory Management for Streaming

Keeps resident memory of a streaming extraction in check.

This module handles:
- Sampling process RSS every memory_check_interval delivered facts
- Forcing garbage collection once RSS crosses memory_threshold_mb
- Tracking the peak sample and the memory reclaimed by collections

Samples are tied to a fact count, never to reader tokens, so the cost
stays proportional to output rather than markup size.
"""

import gc
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import psutil

from ...core.config_loader import ConfigLoader
from ..streaming.constants import (
    BYTES_PER_MB,
    DEFAULT_MEMORY_THRESHOLD_MB,
    DEFAULT_MEMORY_CHECK_INTERVAL,
)


@dataclass(frozen=True)
class MemorySnapshot:
    """
    One memory sample.

    Attributes:
        rss_mb: Resident set size of this process (MB)
        percent: System memory in use (%)
        available_mb: System memory still available (MB)
        facts_processed: Facts delivered when the sample was taken
        taken_at: Sample time
    """
    rss_mb: float
    percent: float
    available_mb: float
    facts_processed: int = 0
    taken_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"{self.rss_mb:.1f}MB RSS after {self.facts_processed} facts "
            f"(system {self.percent:.1f}% used, {self.available_mb:.1f}MB free)"
        )


class MemoryManager:
    """
    Samples memory during one streaming extraction.

    A disabled manager (enable_memory_management=False) never touches
    psutil and reports empty statistics.

    Example:
        manager = MemoryManager()

        for delivered, fact in enumerate(facts, 1):
            manager.maybe_check(delivered)

        print(manager.get_statistics())
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize memory manager.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

        self.enabled = self.config.get('enable_memory_management', True)
        self.threshold_mb = self.config.get('memory_threshold_mb', DEFAULT_MEMORY_THRESHOLD_MB)
        self.check_interval = max(1, self.config.get('memory_check_interval', DEFAULT_MEMORY_CHECK_INTERVAL))

        self.baseline: Optional[MemorySnapshot] = None
        self.peak_snapshot: Optional[MemorySnapshot] = None
        self.last_snapshot: Optional[MemorySnapshot] = None

        self.checks = 0
        self.cleanup_count = 0
        self.reclaimed_mb = 0.0

        self._process = psutil.Process() if self.enabled else None
        if self.enabled:
            self.baseline = self.sample()
            self.logger.debug(f"Memory baseline before streaming: {self.baseline}")

    def sample(self, facts_processed: int = 0) -> MemorySnapshot:
        """
        Record the current memory use.

        Args:
            facts_processed: Delivered fact count to attach to the sample

        Returns:
            New MemorySnapshot (also kept as last_snapshot)
        """
        process = self._process or psutil.Process()
        system = psutil.virtual_memory()

        snapshot = MemorySnapshot(
            rss_mb=process.memory_info().rss / BYTES_PER_MB,
            percent=system.percent,
            available_mb=system.available / BYTES_PER_MB,
            facts_processed=facts_processed
        )

        self.last_snapshot = snapshot
        if self.peak_snapshot is None or snapshot.rss_mb > self.peak_snapshot.rss_mb:
            self.peak_snapshot = snapshot
        return snapshot

    def maybe_check(self, facts_processed: int) -> bool:
        """
        Check memory when facts_processed lands on the check interval.

        Returns:
            True if a collection ran
        """
        if not self.enabled or facts_processed <= 0 or facts_processed % self.check_interval:
            return False
        return self.check_memory(facts_processed)

    def check_memory(self, facts_processed: int = 0) -> bool:
        """
        Sample memory and collect garbage above the threshold.

        Returns:
            True if a collection ran
        """
        snapshot = self.sample(facts_processed)
        self.checks += 1

        if snapshot.rss_mb <= self.threshold_mb:
            return False

        self.logger.warning(f"Streaming memory above {self.threshold_mb:.0f}MB: {snapshot}")
        self._collect(snapshot)
        return True

    def _collect(self, before: MemorySnapshot) -> None:
        unreachable = gc.collect()
        after = self.sample(before.facts_processed)

        self.cleanup_count += 1
        self.reclaimed_mb += max(0.0, before.rss_mb - after.rss_mb)
        self.logger.info(
            f"Garbage collection #{self.cleanup_count} freed {unreachable} objects, "
            f"RSS {before.rss_mb:.1f}MB -> {after.rss_mb:.1f}MB"
        )

    def get_statistics(self) -> dict[str, Any]:
        """
        Memory figures for the finished stream.

        Returns:
            Dictionary of figures (empty when disabled)
        """
        if self.baseline is None or self.last_snapshot is None:
            return {}

        return {
            'baseline_mb': self.baseline.rss_mb,
            'last_mb': self.last_snapshot.rss_mb,
            'peak_mb': self.peak_snapshot.rss_mb,
            'peak_at_fact': self.peak_snapshot.facts_processed,
            'growth_mb': self.last_snapshot.rss_mb - self.baseline.rss_mb,
            'checks': self.checks,
            'cleanup_count': self.cleanup_count,
            'reclaimed_mb': self.reclaimed_mb,
        }


__all__ = ['MemorySnapshot', 'MemoryManager']
