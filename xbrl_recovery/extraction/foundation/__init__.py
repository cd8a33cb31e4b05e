# Path: extraction/foundation/__init__.py
"""
Foundation layer components.

Byte decoding, document classification, tolerant tree parsing and
namespace resolution.
"""

from ..foundation.qname import QNameParts
from ..foundation.encoding_detector import (
    DocumentKind,
    EncodingResult,
    DecodedDocument,
    EncodingDetector,
)
from ..foundation.recovery_parser import (
    ParsedDocument,
    RecoveryParser,
    RecoveryStrategyError,
    repair_markup,
)
from ..foundation.namespace_catalog import NAMESPACE_CATALOG, CATALOG_URI_TO_PREFIX
from ..foundation.namespace_resolver import NamespaceResolver, uri_matches

__all__ = [
    # Names
    'QNameParts',
    # Decoding
    'DocumentKind',
    'EncodingResult',
    'DecodedDocument',
    'EncodingDetector',
    # Tree parsing
    'ParsedDocument',
    'RecoveryParser',
    'RecoveryStrategyError',
    'repair_markup',
    # Namespaces
    'NAMESPACE_CATALOG',
    'CATALOG_URI_TO_PREFIX',
    'NamespaceResolver',
    'uri_matches',
]
