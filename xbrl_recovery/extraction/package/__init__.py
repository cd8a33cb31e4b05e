# Path: extraction/package/__init__.py
"""
Filing package (ZIP archive) handling.
"""

from ..package.package_handler import (
    MemberKind,
    PackageResult,
    PackageHandler,
    DocumentParser,
    content_type_for,
    is_hidden,
)

__all__ = [
    'MemberKind',
    'PackageResult',
    'PackageHandler',
    'DocumentParser',
    'content_type_for',
    'is_hidden',
]
