# Path: core/config_loader.py
"""
Configuration Loader

Centralized configuration management for the extraction engine.
Loads environment variables with type safety and defaults.

This module provides a singleton ConfigLoader that reads from an optional
.env file and provides type-safe access to all configuration values.
Nothing is required: every key has a default so the engine works as a
plain library without any environment set up.
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv


ENV_PREFIX = 'XBRL_RECOVERY_'


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with type conversion
    and sensible defaults. All configuration access should go through
    this class to ensure consistency.

    Example:
        config = ConfigLoader()
        depth = config.get('max_nesting_depth')   # Returns int
        debug_mode = config.get('debug')          # Returns bool
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # config_loader.py is at: <root>/xbrl_recovery/core/config_loader.py
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next access re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('ENVIRONMENT', 'development'),
            'debug': self._get_bool('DEBUG', False),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env('LOG_LEVEL', 'INFO'),
            'log_dir': self._get_path('LOG_DIR', required=False),
            'log_file': self._get_env('LOG_FILE', 'xbrl_recovery.log'),
            'log_format': self._get_env('LOG_FORMAT'),
            'configure_logging': self._get_bool('CONFIGURE_LOGGING', False),

            # ================================================================
            # ENCODING & DETECTION
            # ================================================================
            'default_encoding': self._get_env('DEFAULT_ENCODING', 'utf-8'),
            'encoding_sniff_bytes': self._get_int('ENCODING_SNIFF_BYTES', 1024),
            'kind_sniff_chars': self._get_int('KIND_SNIFF_CHARS', 2000),

            # ================================================================
            # EXTRACTION LIMITS
            # ================================================================
            'max_nesting_depth': self._get_int('MAX_NESTING_DEPTH', 10),
            'max_continuation_hops': self._get_int('MAX_CONTINUATION_HOPS', 2),

            # ================================================================
            # STREAMING CONFIGURATION
            # ================================================================
            'progress_interval': self._get_int('PROGRESS_INTERVAL', 1000),
            'streaming_threshold_mb': self._get_float('STREAMING_THRESHOLD_MB', 50.0),
            'enable_memory_management': self._get_bool('ENABLE_MEMORY_MANAGEMENT', True),
            'memory_threshold_mb': self._get_float('MEMORY_THRESHOLD_MB', 512.0),
            'memory_check_interval': self._get_int('MEMORY_CHECK_INTERVAL', 5000),

            # ================================================================
            # PACKAGE HANDLING
            # ================================================================
            'max_archive_size': self._get_int('MAX_ARCHIVE_SIZE', 1024 * 1024 * 1024),
            'package_sniff_bytes': self._get_int('PACKAGE_SNIFF_BYTES', 4096),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name without prefix
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(f"{ENV_PREFIX}{key}")

        if value is None:
            if required:
                raise ValueError(f"Required environment variable '{ENV_PREFIX}{key}' is not set")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """
        Get boolean environment variable.

        Accepts: true, 1, yes, on (case-insensitive)
        """
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable, falling back to default when invalid."""
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable, falling back to default when invalid."""
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path environment variable.

        Args:
            key: Environment variable name without prefix
            required: If True, raises ValueError when missing

        Returns:
            Path object or None
        """
        value = os.getenv(f"{ENV_PREFIX}{key}")

        if value is None:
            if required:
                raise ValueError(f"Required environment variable '{ENV_PREFIX}{key}' is not set")
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default

        Example:
            config = ConfigLoader()
            interval = config.get('progress_interval', 1000)
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def __repr__(self) -> str:
        return f"ConfigLoader(environment={self._config.get('environment')!r}, keys={len(self._config)})"


__all__ = ['ConfigLoader', 'ENV_PREFIX']
