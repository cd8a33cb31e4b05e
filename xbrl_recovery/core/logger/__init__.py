# Path: core/logger/__init__.py
"""Logging helpers."""

from .logger import (
    setup_logging,
    get_logger,
    configure_logging,
    DEFAULT_LOG_FORMAT,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'configure_logging',
    'DEFAULT_LOG_FORMAT',
]
