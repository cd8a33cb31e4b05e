# Path: core/__init__.py
"""
Core Module

Shared infrastructure for the extraction engine.

Components:
    - config_loader: dotenv-backed singleton configuration
    - logger: logging setup helpers
"""

from .config_loader import ConfigLoader

__all__ = ['ConfigLoader']
