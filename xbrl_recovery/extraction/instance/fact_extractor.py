# Path: extraction/instance/fact_extractor.py
"""
Fact Extractor

Extracts facts from traditional (standalone XML) instance documents.

This module handles:
- Locating the xbrl root element
- Fact element identification among the root's direct children
- Concept identity from Clark-notation or literal 'prefix:local' tags
- Numeric (unitRef present) and string facts
- Nil facts and decimals/precision attributes
- Per-element failure isolation

Example:
    from ..instance import FactExtractor

    extractor = FactExtractor()
    xbrl_root = extractor.find_xbrl_root(root)
    facts = extractor.extract_facts(xbrl_root, resolver, transformer, diagnostics)

    for fact in facts:
        print(f"{fact.concept}: {fact.value} ({fact.fact_type})")
"""

import logging
from typing import Optional
from lxml import etree

from ...core.config_loader import ConfigLoader
from ..models.fact import Fact, FactKind
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.namespace_resolver import NamespaceResolver, DEFAULT_PREFIX
from ..foundation.element_utils import (
    split_tag,
    local_name,
    get_attr,
    iter_children,
    iter_descendants,
    element_text,
    describe,
    source_line,
)
from ..transform.value_transformer import ValueTransformer
from ..constants import (
    ELEM_XBRL,
    NON_FACT_ELEMENTS,
    ATTR_ID,
    ATTR_CONTEXT_REF,
    ATTR_UNIT_REF,
    ATTR_DECIMALS,
    ATTR_PRECISION,
    ATTR_NIL,
    INFINITE_PRECISION,
    NIL_TRUE_VALUES,
)


# ==============================================================================
# SHARED ATTRIBUTE HELPERS
# ==============================================================================

def parse_integer(value: Optional[str]) -> Optional[int]:
    """
    Integer attribute value; None when absent, 'INF' or not an integer.

    Example:
        parse_integer('-6')    # -6
        parse_integer('INF')   # None
    """
    if value is None:
        return None
    text = value.strip()
    if not text or text.upper() == INFINITE_PRECISION:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def is_nil(elem: etree._Element) -> bool:
    """True if xsi:nil (or a bare nil attribute) is 'true' or '1'."""
    value = get_attr(elem, ATTR_NIL)
    return value is not None and value.strip().lower() in NIL_TRUE_VALUES


def concept_from_tag(elem: etree._Element, resolver: NamespaceResolver) -> tuple[Optional[str], Optional[str], str]:
    """
    Concept (prefix, namespace_uri, local_name) of a fact element.

    Clark-notation tags carry their namespace; literal 'prefix:local'
    tags (HTML-mode trees) resolve the prefix through the resolver.
    """
    namespace_uri, literal_prefix, local = split_tag(elem.tag)
    if namespace_uri:
        return elem.prefix, namespace_uri, local
    if literal_prefix:
        return literal_prefix, resolver.resolve_prefix(literal_prefix), local
    return None, resolver.resolve_prefix(DEFAULT_PREFIX), local


class FactExtractor:
    """
    Extracts facts from the direct children of an xbrl root.

    Example:
        extractor = FactExtractor()
        facts = extractor.extract_facts(xbrl_root, resolver, transformer, diagnostics)

        numeric = [f for f in facts if f.is_numeric()]
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize fact extractor.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def find_xbrl_root(root: Optional[etree._Element]) -> Optional[etree._Element]:
        """
        The xbrl element: the root itself or its first xbrl descendant.

        Returns:
            Element or None when the document has no xbrl root
        """
        if root is None:
            return None
        for elem in iter_descendants(root, ELEM_XBRL):
            return elem
        return None

    def extract_facts(
        self,
        xbrl_root: etree._Element,
        resolver: NamespaceResolver,
        transformer: ValueTransformer,
        diagnostics: Diagnostics
    ) -> list[Fact]:
        """
        Extract every fact among the direct children of xbrl_root.

        Contexts, units, schema and linkbase references, role references
        and footnote links are skipped silently. A child without
        contextRef (a tuple or other non-fact) is skipped and counted.

        Args:
            xbrl_root: The xbrl element
            resolver: Per-document namespace resolver
            transformer: Value transformer for numeric text
            diagnostics: Ledger for counts and skipped elements

        Returns:
            Facts in document order
        """
        facts = []

        for elem in iter_children(xbrl_root):
            if local_name(elem) in NON_FACT_ELEMENTS:
                continue

            diagnostics.facts_found += 1

            if get_attr(elem, ATTR_CONTEXT_REF) is None:
                diagnostics.facts_skipped += 1
                diagnostics.info(
                    ErrorCategory.SKIPPED_ELEMENT,
                    f"Element {describe(elem)} has no contextRef; skipped as non-fact",
                    line_number=source_line(elem)
                )
                continue

            try:
                facts.append(self.build_fact(elem, resolver, transformer, diagnostics))
                diagnostics.facts_parsed += 1
            except Exception as e:
                self.logger.error(f"Failed to extract fact from element {elem.tag}: {e}", exc_info=True)
                diagnostics.skip_fact(
                    ErrorCategory.INVALID_FACT,
                    f"Failed to extract fact: {e}",
                    element_id=get_attr(elem, ATTR_ID) or describe(elem),
                    line_number=source_line(elem)
                )

        self.logger.debug(f"Extracted {len(facts)} facts from instance")
        return facts

    def build_fact(
        self,
        elem: etree._Element,
        resolver: NamespaceResolver,
        transformer: ValueTransformer,
        diagnostics: Optional[Diagnostics] = None,
        text: Optional[str] = None
    ) -> Fact:
        """
        Build a Fact from a complete fact element.

        A numeric element whose text does not parse keeps the text as its
        string value, with an INVALID_VALUE warning unless the text is a
        nil placeholder.

        Args:
            elem: Fact element
            resolver: Namespace resolver for the concept prefix
            transformer: Value transformer for numeric text
            diagnostics: Ledger for value warnings (optional)
            text: Pre-collected text (defaults to the element's text content)

        Returns:
            Fact
        """
        prefix, namespace_uri, local = concept_from_tag(elem, resolver)
        raw_value = element_text(elem) if text is None else text.strip()
        unit_ref = get_attr(elem, ATTR_UNIT_REF)
        nil = is_nil(elem)

        if unit_ref is not None:
            fact_type = FactKind.DECIMAL
            numeric_value = None if nil else transformer.parse_generic_number(raw_value)
            string_value = None
            if not nil and numeric_value is None:
                string_value = raw_value
                if diagnostics is not None and not transformer.is_nil_sentinel(raw_value):
                    diagnostics.warning(
                        ErrorCategory.INVALID_VALUE,
                        f"Numeric fact '{local}' has unparseable value {raw_value!r}; kept as text",
                        element_id=get_attr(elem, ATTR_ID) or describe(elem),
                        line_number=source_line(elem)
                    )
        else:
            fact_type = FactKind.STRING
            numeric_value = None
            string_value = None if nil else raw_value

        return Fact(
            local_name=local,
            namespace_uri=namespace_uri,
            prefix=prefix,
            context_ref=get_attr(elem, ATTR_CONTEXT_REF),
            unit_ref=unit_ref,
            raw_value=raw_value,
            numeric_value=numeric_value,
            string_value=string_value,
            fact_type=fact_type,
            decimals=parse_integer(get_attr(elem, ATTR_DECIMALS)),
            precision=parse_integer(get_attr(elem, ATTR_PRECISION)),
            is_nil=nil,
            fact_id=get_attr(elem, ATTR_ID),
            source_element=elem.tag,
            source_line=source_line(elem)
        )


__all__ = [
    'FactExtractor',
    'parse_integer',
    'is_nil',
    'concept_from_tag',
]
