# Path: core/logger/logger.py
"""
Logging Configuration

Simple centralized logging setup for the extraction engine.
Uses standard Python logging throughout.

Example:
    from xbrl_recovery.core.logger import setup_logging, get_logger
    from pathlib import Path

    # Configure once at startup
    setup_logging(log_level="INFO", log_file=Path("logs/xbrl_recovery.log"))

    # Use in any module
    logger = get_logger(__name__)
    logger.info("Extraction started")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..config_loader import ConfigLoader


DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
    config: Optional[ConfigLoader] = None
) -> None:
    """
    Configure logging for the extraction engine.

    This should be called once at application startup.
    All modules will then use logging.getLogger(__name__).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        log_format: Optional custom log format
        config: Optional configuration loader (for reading settings)
    """
    if config:
        log_level = config.get('log_level', log_level)
        log_format = log_format or config.get('log_format')
        if not log_file:
            log_file = _resolve_log_file(config)

    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT

    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)

    # Clear any existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers = []

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

        logging.info(f"Logging to file: {log_file}")

    logging.info(f"Logging configured: level={log_level}")


def _resolve_log_file(config: ConfigLoader) -> Optional[Path]:
    """File logging only happens when a log directory is configured."""
    log_dir = config.get('log_dir')
    log_name = config.get('log_file')
    if not log_dir or not log_name:
        return None
    return Path(log_dir) / log_name


def get_logger(name: str) -> logging.Logger:
    """
    Get logger for module.

    This is a convenience wrapper around logging.getLogger().

    Args:
        name: Module name (use __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_logging(config: ConfigLoader) -> None:
    """
    Configure logging from config.

    Convenience function that reads settings from config
    and calls setup_logging().

    Args:
        config: Configuration loader

    Example:
        config = ConfigLoader()
        configure_logging(config)
    """
    setup_logging(
        log_level=config.get('log_level', 'INFO'),
        log_file=_resolve_log_file(config),
        config=config
    )


__all__ = ['setup_logging', 'get_logger', 'configure_logging', 'DEFAULT_LOG_FORMAT']
