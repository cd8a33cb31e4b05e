# Path: extraction/foundation/qname.py
"""
QName Parts

Qualified name value produced by namespace resolution.

Features:
- Prefix is display metadata only, identity is (namespace, local name)
- Clark notation and '#'-joined full URI forms
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class QNameParts:
    """
    Qualified name with namespace information.

    Attributes:
        prefix: Prefix as written in the document (None when unprefixed)
        namespace_uri: Resolved namespace URI (None when unresolvable)
        local_name: Local part of the name

    Example:
        qname = QNameParts("us-gaap", "http://fasb.org/us-gaap/2024", "Assets")
        str(qname)        # "us-gaap:Assets"
        qname.full_uri    # "http://fasb.org/us-gaap/2024#Assets"
    """
    prefix: Optional[str]
    namespace_uri: Optional[str]
    local_name: str

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name

    def __eq__(self, other) -> bool:
        """Equality based on namespace and local name."""
        if not isinstance(other, QNameParts):
            return False
        return (self.namespace_uri == other.namespace_uri and
                self.local_name == other.local_name)

    def __hash__(self) -> int:
        return hash((self.namespace_uri, self.local_name))

    @property
    def full_uri(self) -> str:
        """Namespace and local name joined with '#', or the bare local name."""
        if self.namespace_uri is None:
            return self.local_name
        return f"{self.namespace_uri}#{self.local_name}"

    @property
    def clark(self) -> str:
        """Clark notation: {namespace}local."""
        if self.namespace_uri:
            return f"{{{self.namespace_uri}}}{self.local_name}"
        return self.local_name

    @classmethod
    def from_clark(cls, clark: str, prefix: Optional[str] = None) -> 'QNameParts':
        """
        Parse Clark notation.

        Example:
            QNameParts.from_clark("{http://example.com}Element")
        """
        if clark.startswith('{'):
            end = clark.find('}')
            if end != -1:
                return cls(prefix=prefix, namespace_uri=clark[1:end], local_name=clark[end + 1:])
        return cls(prefix=prefix, namespace_uri=None, local_name=clark)

    def to_dict(self) -> dict:
        return {
            'prefix': self.prefix,
            'namespace_uri': self.namespace_uri,
            'local_name': self.local_name,
            'clark': self.clark
        }


__all__ = ['QNameParts']
