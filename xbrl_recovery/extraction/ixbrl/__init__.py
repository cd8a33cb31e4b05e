# Path: extraction/ixbrl/__init__.py
"""
Inline XBRL (iXBRL) components.

Facts embedded in HTML/XHTML: nested facts, continuations and
displayed-value transformation.
"""

from ..ixbrl.inline_extractor import (
    InlineFactExtractor,
    InlineIndex,
    is_fact_element,
    direct_text,
)

__all__ = [
    'InlineFactExtractor',
    'InlineIndex',
    'is_fact_element',
    'direct_text',
]
