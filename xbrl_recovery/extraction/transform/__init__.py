# Path: extraction/transform/__init__.py
"""
Value transformation.

Displayed inline values to native numbers, dates and booleans.
"""

from ..transform.value_transformer import (
    ValueTransformer,
    FormatHandler,
    FORMAT_REGISTRY,
    format_key,
)

__all__ = [
    'ValueTransformer',
    'FormatHandler',
    'FORMAT_REGISTRY',
    'format_key',
]
