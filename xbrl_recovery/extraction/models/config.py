# Path: extraction/models/config.py
"""
Extractor Settings Schema

Validated, immutable settings for the extraction engine using Pydantic.

ExtractorSettings answers get(key, default) like ConfigLoader, so it can
be handed to XBRLExtractor or to any single component in its place.

Design:
- Pydantic v2 for validation
- Immutable (frozen), unknown keys rejected
- Defaults identical to the environment defaults of ConfigLoader
- from_config() snapshots and validates a ConfigLoader

Example:
    settings = ExtractorSettings(max_nesting_depth=5, max_continuation_hops=4)
    extractor = XBRLExtractor(settings)

    # Validate whatever the environment supplied
    settings = ExtractorSettings.from_config(ConfigLoader())
"""

import codecs
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtractorSettings(BaseModel):
    """
    Type-safe extraction settings.

    Example:
        settings = ExtractorSettings(progress_interval=500)
        settings.get('progress_interval')   # 500
        settings.get('no_such_key', 7)      # 7
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    # ========================================================================
    # LOGGING
    # ========================================================================

    configure_logging: bool = Field(
        default=False,
        description="Install library log handlers on first extractor construction"
    )

    log_level: str = Field(
        default='INFO',
        description="Level name for configured logging"
    )

    log_file: str = Field(
        default='xbrl_recovery.log',
        description="Log file name inside log_dir"
    )

    # ========================================================================
    # ENCODING & DETECTION
    # ========================================================================

    default_encoding: str = Field(
        default='utf-8',
        description="Encoding used when no signal is found"
    )

    encoding_sniff_bytes: int = Field(
        default=1024,
        ge=64,
        description="Bytes inspected for declarations and meta tags"
    )

    kind_sniff_chars: int = Field(
        default=2000,
        ge=64,
        description="Characters inspected to classify the document kind"
    )

    # ========================================================================
    # INLINE LIMITS
    # ========================================================================

    max_nesting_depth: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Nested fact levels extracted below the outermost fact (1-100)"
    )

    max_continuation_hops: int = Field(
        default=2,
        ge=0,
        le=50,
        description="continuedAt links followed per fact (0-50)"
    )

    # ========================================================================
    # STREAMING
    # ========================================================================

    progress_interval: int = Field(
        default=1000,
        ge=1,
        description="Facts between progress callbacks"
    )

    streaming_threshold_mb: float = Field(
        default=50.0,
        gt=0,
        description="Document size above which streaming is advised (MB)"
    )

    enable_memory_management: bool = Field(
        default=True,
        description="Sample memory and collect garbage while streaming"
    )

    memory_threshold_mb: float = Field(
        default=512.0,
        gt=0,
        description="Resident memory that triggers garbage collection (MB)"
    )

    memory_check_interval: int = Field(
        default=5000,
        ge=1,
        description="Facts between memory samples"
    )

    # ========================================================================
    # PACKAGES
    # ========================================================================

    max_archive_size: int = Field(
        default=1024 * 1024 * 1024,
        ge=1,
        description="Uncompressed bytes read from one archive"
    )

    package_sniff_bytes: int = Field(
        default=4096,
        ge=16,
        description="Member head inspected for instance markers"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('default_encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Default encoding must be known to the codec registry."""
        try:
            return codecs.lookup(v.strip()).name
        except LookupError:
            raise ValueError(f"Unknown encoding: {v!r}")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Log level must be a standard level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    # ========================================================================
    # ACCESS
    # ========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting by name (same contract as ConfigLoader.get).

        Args:
            key: Setting name
            default: Returned for names that are not settings

        Returns:
            Setting value or default
        """
        if key in type(self).model_fields:
            return getattr(self, key)
        return default

    @classmethod
    def from_config(cls, config: Any) -> 'ExtractorSettings':
        """
        Validate the values a ConfigLoader (or any get()-style source) holds.

        Unset values keep their defaults.

        Raises:
            pydantic.ValidationError: If a value is out of range
        """
        values = {}
        for name in cls.model_fields:
            value = config.get(name)
            if value is not None:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


__all__ = ['ExtractorSettings']
