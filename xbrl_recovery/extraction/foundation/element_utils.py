# Path: extraction/foundation/element_utils.py
"""
Element Utilities

Tag and attribute helpers that work the same on namespace-aware XML
trees and on trees produced by the lenient HTML strategies.

This module handles:
- Local names from Clark notation ({ns}local), literal 'prefix:local'
  tags and plain names, matched case-insensitively
- Attribute lookup ignoring namespace, prefix and case
- Namespace declarations from nsmap or from literal xmlns attributes
- Direct-child and descendant lookup by local name

The HTML parser lowercases tag and attribute names and keeps prefixes
as part of the name, so every lookup here compares lowercase local
names only.

Example:
    from ..foundation.element_utils import local_name, get_attr

    for elem in root.iter():
        if local_name(elem) == 'nonfraction':
            context_ref = get_attr(elem, 'contextRef')
"""

from typing import Iterator, Optional
from lxml import etree


def is_element(node) -> bool:
    """True for element nodes (False for comments, PIs and entities)."""
    return isinstance(getattr(node, 'tag', None), str)


def split_tag(tag: str) -> tuple[Optional[str], Optional[str], str]:
    """
    Split a tag into (namespace_uri, literal_prefix, local_name).

    Examples:
        split_tag('{http://x}Assets')    # ('http://x', None, 'Assets')
        split_tag('us-gaap:assets')      # (None, 'us-gaap', 'assets')
        split_tag('context')             # (None, None, 'context')
    """
    if tag.startswith('{'):
        end = tag.find('}')
        if end != -1:
            return tag[1:end], None, tag[end + 1:]
    if ':' in tag:
        prefix, local = tag.split(':', 1)
        return None, prefix, local
    return None, None, tag


def raw_local_name(elem) -> str:
    """Local name with its original case, '' for non-elements."""
    if not is_element(elem):
        return ''
    return split_tag(elem.tag)[2]


def local_name(elem) -> str:
    """Lowercase local name, '' for non-elements."""
    return raw_local_name(elem).lower()


def tag_prefix(elem) -> Optional[str]:
    """Prefix of an element, from lxml's prefix or from a literal 'prefix:' tag."""
    if not is_element(elem):
        return None
    namespace_uri, literal_prefix, _ = split_tag(elem.tag)
    if literal_prefix:
        return literal_prefix
    if namespace_uri:
        return elem.prefix
    return None


def tag_namespace(elem) -> Optional[str]:
    """Namespace URI for Clark-notation tags, None otherwise."""
    if not is_element(elem):
        return None
    return split_tag(elem.tag)[0]


def _attr_local(key: str) -> str:
    return split_tag(key)[2].lower()


def get_attr(elem, name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Attribute value by local name, ignoring namespace, prefix and case.

    Args:
        elem: Element to inspect
        name: Attribute local name (e.g., 'contextRef', 'nil')
        default: Value when the attribute is absent

    Returns:
        Attribute value or default
    """
    if not is_element(elem):
        return default

    # Fast path for the common exact spelling
    value = elem.get(name)
    if value is not None:
        return value

    wanted = name.lower()
    for key, value in elem.attrib.items():
        if key.lower().startswith('xmlns'):
            continue
        if _attr_local(key) == wanted:
            return value
    return default


def has_attr(elem, name: str) -> bool:
    return get_attr(elem, name) is not None


def iter_children(elem) -> Iterator:
    """Direct element children (comments and PIs skipped)."""
    for child in elem:
        if is_element(child):
            yield child


def find_child(elem, name: str):
    """First direct child with the given local name, or None."""
    wanted = name.lower()
    for child in iter_children(elem):
        if local_name(child) == wanted:
            return child
    return None


def find_children(elem, name: str) -> list:
    """All direct children with the given local name."""
    wanted = name.lower()
    return [child for child in iter_children(elem) if local_name(child) == wanted]


def iter_descendants(elem, *names: str) -> Iterator:
    """
    Descendants (including elem itself) whose local name is one of names.

    Document order is preserved.
    """
    wanted = {n.lower() for n in names}
    for node in elem.iter():
        if is_element(node) and local_name(node) in wanted:
            yield node


def find_descendant(elem, name: str):
    """First descendant (excluding elem) with the given local name, or None."""
    wanted = name.lower()
    for node in elem.iterdescendants():
        if is_element(node) and local_name(node) == wanted:
            return node
    return None


def element_text(elem) -> str:
    """All text content of an element and its descendants, trimmed."""
    if not is_element(elem):
        return ''
    return ''.join(elem.itertext()).strip()


def namespace_declarations(elem) -> dict[str, str]:
    """
    Namespace declarations visible on an element.

    Reads lxml's nsmap for namespace-aware trees and literal 'xmlns'
    attributes for trees from the HTML parser. The default namespace is
    returned under the '' key.

    Returns:
        Dictionary mapping prefix to URI
    """
    declarations = {}
    if not is_element(elem):
        return declarations

    for prefix, uri in (elem.nsmap or {}).items():
        if uri:
            declarations[prefix or ''] = uri

    for key, value in elem.attrib.items():
        lowered = key.lower()
        if lowered == 'xmlns':
            declarations[''] = value
        elif lowered.startswith('xmlns:'):
            declarations[key.split(':', 1)[1]] = value

    return declarations


def describe(elem) -> str:
    """Short element description for diagnostics (tag plus id if any)."""
    if not is_element(elem):
        return '<non-element>'
    elem_id = get_attr(elem, 'id')
    return f"<{elem.tag} id={elem_id!r}>" if elem_id else f"<{elem.tag}>"


def source_line(elem) -> Optional[int]:
    return getattr(elem, 'sourceline', None)


def release(elem: etree._Element) -> None:
    """
    Clear a completed element and drop already-processed siblings.

    Keeps memory bounded during iterparse.
    """
    elem.clear()
    parent = elem.getparent()
    if parent is None:
        return
    while elem.getprevious() is not None:
        del parent[0]


__all__ = [
    'is_element',
    'split_tag',
    'raw_local_name',
    'local_name',
    'tag_prefix',
    'tag_namespace',
    'get_attr',
    'has_attr',
    'iter_children',
    'find_child',
    'find_children',
    'iter_descendants',
    'find_descendant',
    'element_text',
    'namespace_declarations',
    'describe',
    'source_line',
    'release',
]
