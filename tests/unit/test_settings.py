# Path: tests/unit/test_settings.py
"""
Unit Tests for ExtractorSettings

Tests:
- Defaults matching ConfigLoader
- Range and name validation
- get() compatibility with ConfigLoader
- Settings driving a real extractor
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from xbrl_recovery import ExtractorSettings, XBRLExtractor, ConfigLoader, ErrorCategory

from fixtures.sample_documents import inline_wrapper, nested_chain


class TestDefaults:
    """Test default values."""

    def test_defaults_match_config_loader(self, reset_singletons):
        """Every setting should default to the ConfigLoader default."""
        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader()
            settings = ExtractorSettings()

            for name in ExtractorSettings.model_fields:
                assert settings.get(name) == config.get(name), name

    def test_get_unknown_key(self):
        """Unknown names should give the default."""
        settings = ExtractorSettings()

        assert settings.get('environment') is None
        assert settings.get('environment', 'test') == 'test'

    def test_frozen(self):
        """Settings should be immutable."""
        settings = ExtractorSettings()

        with pytest.raises(ValidationError):
            settings.max_nesting_depth = 3


class TestValidation:
    """Test value validation."""

    @pytest.mark.parametrize('values', [
        {'max_nesting_depth': 0},
        {'max_nesting_depth': 101},
        {'max_continuation_hops': -1},
        {'progress_interval': 0},
        {'memory_threshold_mb': 0},
        {'max_archive_size': 0},
        {'no_such_setting': 1},
    ])
    def test_rejected_values(self, values):
        """Out-of-range or unknown values should be rejected."""
        with pytest.raises(ValidationError):
            ExtractorSettings(**values)

    def test_encoding_normalized(self):
        """Encoding aliases should be normalized through the codec registry."""
        assert ExtractorSettings(default_encoding='Latin-1').default_encoding == 'iso8859-1'
        assert ExtractorSettings(default_encoding='UTF8').default_encoding == 'utf-8'

        with pytest.raises(ValidationError):
            ExtractorSettings(default_encoding='no-such-charset')

    def test_log_level(self):
        """Log levels should be standard level names."""
        assert ExtractorSettings(log_level='debug').log_level == 'DEBUG'

        with pytest.raises(ValidationError):
            ExtractorSettings(log_level='LOUD')


class TestFromConfig:
    """Test building settings from a configuration source."""

    def test_from_mock_config(self, config_factory):
        """Configured values should be copied and validated."""
        settings = ExtractorSettings.from_config(config_factory({'max_nesting_depth': 4}))

        assert settings.max_nesting_depth == 4
        assert settings.enable_memory_management is False
        assert settings.kind_sniff_chars == 2000

    def test_from_environment(self, mock_env_vars, reset_singletons):
        """Environment values should pass through ConfigLoader."""
        settings = ExtractorSettings.from_config(ConfigLoader())

        assert settings.progress_interval == 2
        assert settings.streaming_threshold_mb == 25.5
        assert settings.log_level == 'DEBUG'

    def test_invalid_environment(self, reset_singletons):
        """Out-of-range environment values should be reported."""
        with patch.dict(os.environ, {'XBRL_RECOVERY_MAX_NESTING_DEPTH': '0'}):
            with pytest.raises(ValidationError):
                ExtractorSettings.from_config(ConfigLoader())

    def test_to_dict(self):
        """to_dict should include every setting."""
        assert set(ExtractorSettings().to_dict()) == set(ExtractorSettings.model_fields)


class TestExtractorWithSettings:
    """Test settings in place of ConfigLoader."""

    def test_depth_from_settings(self, reset_singletons):
        """The nesting cap should come from the settings."""
        extractor = XBRLExtractor(ExtractorSettings(
            max_nesting_depth=3,
            enable_memory_management=False
        ))

        instance = extractor.parse(inline_wrapper(nested_chain(5)))

        assert instance.fact_count == 3
        assert instance.diagnostics.get_by_category(ErrorCategory.NESTING_DEPTH_EXCEEDED)

    def test_hops_from_settings(self, reset_singletons):
        """The continuation limit should come from the settings."""
        extractor = XBRLExtractor(ExtractorSettings(max_continuation_hops=0))

        instance = extractor.parse(inline_wrapper(
            '<ix:nonNumeric name="us-gaap:Note" contextRef="c1" continuedAt="n1">A</ix:nonNumeric>'
            '<ix:continuation id="n1">B</ix:continuation>'
        ))

        assert instance.facts[0].string_value == 'A'
        assert instance.diagnostics.get_by_category(ErrorCategory.CONTINUATION_TRUNCATED)
