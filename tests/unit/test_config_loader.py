# Path: tests/unit/test_config_loader.py
"""
Unit Tests for ConfigLoader and logging setup

Tests the configuration loading functionality including:
- Environment variable parsing
- Type conversion methods
- Singleton pattern
- Default value handling
- Logger configuration from config
"""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


class TestConfigLoaderBasics:
    """Test basic ConfigLoader functionality."""

    def test_singleton_pattern(self, mock_env_vars, reset_singletons):
        """ConfigLoader should return same instance."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config1 = ConfigLoader()
        config2 = ConfigLoader()

        assert config1 is config2

    def test_get_returns_value(self, mock_env_vars, reset_singletons):
        """get() should return configured value."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('environment') == 'test'

    def test_get_returns_default_for_missing(self, mock_env_vars, reset_singletons):
        """get() should return default for missing keys."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('nonexistent_key', 'default_value') == 'default_value'

    def test_get_returns_none_for_missing_no_default(self, mock_env_vars, reset_singletons):
        """get() should return None for missing keys without default."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('nonexistent_key') is None

    def test_reset_rereads_environment(self, reset_singletons):
        """reset() should make the next instance read the environment again."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {'XBRL_RECOVERY_MAX_NESTING_DEPTH': '4'}):
            first = ConfigLoader()
            assert first.get('max_nesting_depth') == 4

        ConfigLoader.reset()
        with patch.dict(os.environ, {'XBRL_RECOVERY_MAX_NESTING_DEPTH': '7'}):
            second = ConfigLoader()
            assert second.get('max_nesting_depth') == 7

        assert first is not second

    def test_mapping_access(self, mock_env_vars, reset_singletons):
        """Config should support [] and 'in'."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()

        assert config['environment'] == 'test'
        assert 'max_nesting_depth' in config
        assert 'nonexistent_key' not in config
        assert 'progress_interval' in config.keys()


class TestConfigLoaderTypeConversion:
    """Test type conversion methods."""

    def test_get_bool_parses_true(self, mock_env_vars, reset_singletons):
        """Boolean 'true' should be True."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('debug') is True

    def test_get_bool_parses_false(self, mock_env_vars, reset_singletons):
        """Boolean 'false' should be False."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('enable_memory_management') is False

    def test_get_int_converts_string(self, mock_env_vars, reset_singletons):
        """Integer values should be converted from string."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()

        assert config.get('progress_interval') == 2
        assert config.get('max_archive_size') == 1048576

    def test_get_float_converts_string(self, mock_env_vars, reset_singletons):
        """Float values should be converted from string."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        config = ConfigLoader()
        assert config.get('streaming_threshold_mb') == pytest.approx(25.5)

    def test_invalid_int_falls_back_to_default(self, reset_singletons):
        """Unparseable integers should give the default."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {'XBRL_RECOVERY_PROGRESS_INTERVAL': 'lots'}):
            config = ConfigLoader()
            assert config.get('progress_interval') == 1000

    def test_invalid_float_falls_back_to_default(self, reset_singletons):
        """Unparseable floats should give the default."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {'XBRL_RECOVERY_MEMORY_THRESHOLD_MB': 'big'}):
            config = ConfigLoader()
            assert config.get('memory_threshold_mb') == 512.0

    def test_log_dir_is_path(self, reset_singletons, temp_dir):
        """Log directory should be a Path object."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {'XBRL_RECOVERY_LOG_DIR': str(temp_dir)}):
            config = ConfigLoader()
            assert isinstance(config.get('log_dir'), Path)


class TestConfigLoaderDefaults:
    """Test default values when nothing is set."""

    def test_extraction_defaults(self, reset_singletons):
        """Extraction limits should default to 10 levels and 2 hops."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader()

            assert config.get('max_nesting_depth') == 10
            assert config.get('max_continuation_hops') == 2

    def test_streaming_defaults(self, reset_singletons):
        """Streaming threshold should default to 50 MB."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader()

            assert config.get('streaming_threshold_mb') == 50.0
            assert config.get('progress_interval') == 1000
            assert config.get('enable_memory_management') is True

    def test_logging_defaults(self, reset_singletons):
        """Logging should not be configured by default and have no log directory."""
        from xbrl_recovery.core.config_loader import ConfigLoader

        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader()

            assert config.get('configure_logging') is False
            assert config.get('log_dir') is None
            assert config.get('log_level') == 'INFO'
            assert config.get('default_encoding') == 'utf-8'


class TestLoggerSetup:
    """Test logging configuration helpers."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """Keep root logger handlers intact across tests."""
        root_logger = logging.getLogger()
        saved_handlers = list(root_logger.handlers)
        saved_level = root_logger.level
        yield
        for handler in root_logger.handlers:
            if handler not in saved_handlers:
                handler.close()
        root_logger.handlers = saved_handlers
        root_logger.setLevel(saved_level)

    def test_setup_logging_sets_level(self):
        """setup_logging should set the root level."""
        from xbrl_recovery.core.logger import setup_logging

        setup_logging(log_level='WARNING')

        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_writes_file(self, temp_dir):
        """A log file should be created when requested."""
        from xbrl_recovery.core.logger import setup_logging

        log_file = temp_dir / 'logs' / 'run.log'
        setup_logging(log_level='INFO', log_file=log_file)
        logging.getLogger('xbrl_recovery.test').info('hello file')

        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert 'hello file' in log_file.read_text()

    def test_configure_logging_uses_log_dir(self, mock_config, temp_dir):
        """configure_logging should log into log_dir/log_file."""
        from xbrl_recovery.core.logger import configure_logging

        values = {'log_level': 'DEBUG', 'log_dir': temp_dir, 'log_file': 'engine.log'}
        mock_config.get.side_effect = lambda key, default=None: values.get(key, default)

        configure_logging(mock_config)

        assert logging.getLogger().level == logging.DEBUG
        assert (temp_dir / 'engine.log').exists()

    def test_no_file_without_log_dir(self, mock_config):
        """No file handler should be added without a log directory."""
        from xbrl_recovery.core.logger import configure_logging

        configure_logging(mock_config)

        assert not any(
            isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers
        )

    def test_get_logger_returns_named_logger(self):
        """get_logger should wrap logging.getLogger."""
        from xbrl_recovery.core.logger import get_logger

        assert get_logger('xbrl_recovery.extraction').name == 'xbrl_recovery.extraction'
