# Path: extraction/foundation/namespace_resolver.py
"""
Namespace Resolver

Per-document prefix and URI resolution with catalog fallback.

This module handles:
- Registration of namespaces declared by the document
- Prefix resolution: document table first, then the well-known catalog
- Prefix normalization retry (us_gaap, USGAAP -> us-gaap)
- Version-agnostic URI matching (/2023 vs /2024)
- QName parsing into QNameParts
- Company extension namespace detection

One resolver is created for every parse call and passed explicitly to
the components that need it. Catalog fallbacks are counted so the
caller can copy the count onto the diagnostics ledger.

Example:
    resolver = NamespaceResolver()
    resolver.register('us-gaap', 'http://fasb.org/us-gaap/2024')

    qname = resolver.parse_qname('us-gaap:Assets')
    qname.namespace_uri   # 'http://fasb.org/us-gaap/2024'

    resolver.resolve_prefix('dei')   # catalog fallback, fallbacks_used == 1
"""

import logging
from typing import Mapping, Optional

from ..foundation.qname import QNameParts
from ..foundation.namespace_catalog import NAMESPACE_CATALOG, CATALOG_URI_TO_PREFIX
from ..foundation.constants import (
    NAMESPACE_VERSION_SUFFIX_PATTERN,
    CIK_NAMESPACE_PATTERN,
    NAMESPACE_HOST_PATTERN,
    STANDARD_NAMESPACE_HOSTS,
    PREFIX_SEPARATOR_FROM,
    PREFIX_SEPARATOR_TO,
    PREFIX_REWRITES,
)


DEFAULT_PREFIX = ''


def normalize_prefix(prefix: str) -> str:
    """Lowercase, '_' to '-', and known misspellings rewritten."""
    normalized = prefix.lower().replace(PREFIX_SEPARATOR_FROM, PREFIX_SEPARATOR_TO)
    for wrong, right in PREFIX_REWRITES:
        if wrong in normalized and right not in normalized:
            normalized = normalized.replace(wrong, right)
    return normalized


def version_agnostic(uri: str) -> str:
    """URI with trailing slash and trailing year/date segment removed."""
    stripped = uri.rstrip('/')
    return NAMESPACE_VERSION_SUFFIX_PATTERN.sub('', stripped)


def uri_matches(uri: Optional[str], other: Optional[str]) -> bool:
    """
    Version-agnostic URI equality.

    Example:
        uri_matches('http://fasb.org/us-gaap/2023', 'http://fasb.org/us-gaap/2024/')  # True
    """
    if uri is None or other is None:
        return False
    if uri == other:
        return True
    return version_agnostic(uri) == version_agnostic(other)


class NamespaceResolver:
    """
    Resolves prefixes and URIs for one document.

    Attributes:
        fallbacks_used: Number of prefixes answered from the catalog
    """

    def __init__(self, namespaces: Optional[Mapping[str, str]] = None):
        """
        Initialize resolver.

        Args:
            namespaces: Optional initial prefix -> URI declarations
        """
        self.logger = logging.getLogger(__name__)
        self._document: dict[str, str] = {}
        self.fallbacks_used = 0

        if namespaces:
            self.register_all(namespaces)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, prefix: Optional[str], uri: Optional[str]) -> None:
        """
        Register a declared namespace. Last write wins.

        An empty or None prefix sets the default namespace. A None URI
        is ignored.
        """
        if uri is None:
            return
        key = prefix or DEFAULT_PREFIX
        previous = self._document.get(key)
        if previous is not None and previous != uri:
            self.logger.debug(f"Prefix '{key}' redeclared: {previous} -> {uri}")
        self._document[key] = uri

    def register_all(self, namespaces: Mapping[Optional[str], str]) -> None:
        for prefix, uri in namespaces.items():
            self.register(prefix, uri)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_prefix(self, prefix: Optional[str]) -> Optional[str]:
        """
        Resolve a prefix to a namespace URI.

        Order: default namespace for '', document declarations, catalog
        (counts one fallback), normalized-prefix retry.

        Args:
            prefix: Prefix as written in the document

        Returns:
            Namespace URI or None
        """
        if prefix is None:
            return None
        if prefix == DEFAULT_PREFIX:
            return self._document.get(DEFAULT_PREFIX)

        uri = self._document.get(prefix)
        if uri is not None:
            return uri

        variants = NAMESPACE_CATALOG.get(prefix.lower())
        if variants:
            self.fallbacks_used += 1
            self.logger.debug(f"Undeclared prefix '{prefix}' resolved from catalog: {variants[0]}")
            return variants[0]

        normalized = normalize_prefix(prefix)
        if normalized != prefix:
            return self.resolve_prefix(normalized)

        return None

    def resolve_uri(self, uri: Optional[str]) -> Optional[str]:
        """
        Preferred prefix for a namespace URI.

        Order: exact catalog match, version-agnostic catalog match,
        document declarations.
        """
        if uri is None:
            return None

        prefix = CATALOG_URI_TO_PREFIX.get(uri)
        if prefix is not None:
            return prefix

        for catalog_prefix, variants in NAMESPACE_CATALOG.items():
            for known in variants:
                if uri_matches(uri, known):
                    return catalog_prefix

        for doc_prefix, doc_uri in self._document.items():
            if doc_uri == uri:
                return doc_prefix

        return None

    def uri_matches(self, uri: Optional[str], other: Optional[str]) -> bool:
        return uri_matches(uri, other)

    def parse_qname(self, text: Optional[str]) -> Optional[QNameParts]:
        """
        Split 'prefix:local' and resolve the prefix.

        An unprefixed name takes the default namespace. Unresolvable
        prefixes give a QNameParts with namespace_uri None.

        Returns:
            QNameParts or None for empty text
        """
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None

        if ':' not in text:
            return QNameParts(None, self.resolve_prefix(DEFAULT_PREFIX), text)

        prefix, local = text.split(':', 1)
        return QNameParts(prefix, self.resolve_prefix(prefix), local)

    def is_extension_namespace(self, uri: Optional[str]) -> bool:
        """
        True for company extension namespaces.

        A URI stamped with a 10-digit CIK, or served from a host that
        does not publish standard taxonomies. Catalog URIs never count.
        """
        if not uri or uri in CATALOG_URI_TO_PREFIX:
            return False

        if CIK_NAMESPACE_PATTERN.match(uri):
            return True

        match = NAMESPACE_HOST_PATTERN.match(uri)
        if not match:
            return False

        host = match.group(1).lower()
        for standard in STANDARD_NAMESPACE_HOSTS:
            if host == standard or host.endswith('.' + standard):
                return False
        return True

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_declared(self, prefix: Optional[str]) -> bool:
        """True if the document itself declared prefix (catalog not consulted)."""
        return (prefix or DEFAULT_PREFIX) in self._document

    def get_namespaces(self) -> dict[str, str]:
        """Copy of the document declarations (default under '')."""
        return dict(self._document)

    def reset(self) -> None:
        self._document.clear()
        self.fallbacks_used = 0

    def __repr__(self) -> str:
        return f"NamespaceResolver(declared={len(self._document)}, fallbacks_used={self.fallbacks_used})"


__all__ = [
    'NamespaceResolver',
    'normalize_prefix',
    'version_agnostic',
    'uri_matches',
    'DEFAULT_PREFIX',
]
