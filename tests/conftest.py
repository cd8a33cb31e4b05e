# Path: tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for xbrl_recovery

Provides common test fixtures used across all test modules.
"""

import io
import os
import sys
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root and tests directory to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
TESTS_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(TESTS_ROOT))

from xbrl_recovery.core.config_loader import ConfigLoader
from xbrl_recovery.extraction.orchestrator import XBRLExtractor
from xbrl_recovery.extraction.models.diagnostics import Diagnostics
from xbrl_recovery.extraction.foundation.namespace_resolver import NamespaceResolver
from xbrl_recovery.extraction.transform.value_transformer import ValueTransformer

from fixtures.sample_documents import (
    traditional_instance,
    inline_document,
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'XBRL_RECOVERY_ENVIRONMENT': 'test',
        'XBRL_RECOVERY_DEBUG': 'true',

        # Logging
        'XBRL_RECOVERY_LOG_LEVEL': 'DEBUG',

        # Extraction limits
        'XBRL_RECOVERY_MAX_NESTING_DEPTH': '10',
        'XBRL_RECOVERY_MAX_CONTINUATION_HOPS': '2',

        # Streaming
        'XBRL_RECOVERY_PROGRESS_INTERVAL': '2',
        'XBRL_RECOVERY_STREAMING_THRESHOLD_MB': '25.5',
        'XBRL_RECOVERY_ENABLE_MEMORY_MANAGEMENT': 'false',

        # Packages
        'XBRL_RECOVERY_MAX_ARCHIVE_SIZE': '1048576',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def reset_singletons():
    """Reset singleton state between tests."""
    ConfigLoader.reset()
    XBRLExtractor._logging_configured = False

    yield

    ConfigLoader.reset()
    XBRLExtractor._logging_configured = False


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

def make_mock_config(overrides: dict = None) -> MagicMock:
    """MagicMock ConfigLoader answering get() from a dictionary."""
    values = {
        'environment': 'test',
        'debug': True,
        'configure_logging': False,
        'max_nesting_depth': 10,
        'max_continuation_hops': 2,
        'progress_interval': 1000,
        'enable_memory_management': False,
        'memory_threshold_mb': 512.0,
        'memory_check_interval': 5000,
        'max_archive_size': 1024 * 1024 * 1024,
        'package_sniff_bytes': 4096,
    }
    values.update(overrides or {})

    config = MagicMock()
    config.get.side_effect = lambda key, default=None: values.get(key, default)
    return config


@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader for testing."""
    return make_mock_config()


@pytest.fixture
def config_factory():
    """Build mock ConfigLoaders with selected values overridden."""
    return make_mock_config


# ==============================================================================
# COMPONENT FIXTURES
# ==============================================================================

@pytest.fixture
def diagnostics():
    """Fresh diagnostics ledger."""
    return Diagnostics(source='test-document')


@pytest.fixture
def resolver():
    """Fresh namespace resolver."""
    return NamespaceResolver()


@pytest.fixture
def transformer():
    return ValueTransformer()


@pytest.fixture
def extractor(mock_config):
    """Extractor wired to the mock configuration."""
    return XBRLExtractor(mock_config)


# ==============================================================================
# SAMPLE DOCUMENT FIXTURES
# ==============================================================================

@pytest.fixture
def sample_instance() -> bytes:
    return traditional_instance()


@pytest.fixture
def sample_inline() -> bytes:
    return inline_document()


@pytest.fixture
def make_zip():
    """Build ZIP archive bytes from a name -> bytes mapping."""
    def build(members: dict) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for name, data in members.items():
                archive.writestr(name, data)
        return buffer.getvalue()
    return build


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def capture_logs():
    """Capture log output for testing."""
    import logging
    from io import StringIO

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)

    yield log_capture

    root_logger.removeHandler(handler)
