# Path: extraction/ixbrl/inline_extractor.py
"""
Inline XBRL (iXBRL) Fact Extractor

Extracts facts embedded in HTML/XHTML documents.

This module handles:
- Fact element discovery (nonFraction, nonNumeric, fraction)
- Nested facts (inner facts extracted before the enclosing fact)
- Nesting depth cap
- Continuation chains (continuedAt)
- Displayed-value transformation (format, scale, sign)
- Fractions (numerator / denominator)
- Per-element failure isolation

Works on namespace-aware XML trees and on HTML-mode trees, where tags
are lowercased and keep their 'ix:' prefix literally.

Example:
    from ..ixbrl import InlineFactExtractor

    extractor = InlineFactExtractor()
    facts = extractor.extract_facts(root, resolver, transformer, diagnostics)

    nested = [f for f in facts if f.is_nested]
    print(f"Extracted {len(facts)} facts ({len(nested)} nested)")
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from lxml import etree

from ...core.config_loader import ConfigLoader
from ..models.fact import Fact, FactKind
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.namespace_resolver import NamespaceResolver
from ..foundation.element_utils import (
    is_element,
    split_tag,
    local_name,
    get_attr,
    find_descendant,
    element_text,
    describe,
    source_line,
)
from ..transform.value_transformer import ValueTransformer
from ..instance.fact_extractor import parse_integer, is_nil
from ..constants import (
    ATTR_ID,
    ATTR_NAME,
    ATTR_CONTEXT_REF,
    ATTR_UNIT_REF,
    ATTR_DECIMALS,
    ATTR_PRECISION,
    ATTR_SCALE,
    ATTR_SIGN,
    ATTR_FORMAT,
    ATTR_CONTINUED_AT,
    ATTR_FOOTNOTE_REFS,
)
from ..ixbrl.constants import (
    IX_NAMESPACES,
    IX_FACT_ELEMENTS,
    IX_NUMERIC_ELEMENTS,
    IX_FRACTION,
    IX_NUMERATOR,
    IX_DENOMINATOR,
    IX_CONTINUATION,
    IX_EXCLUDE,
    CONTINUATION_ID_PATTERN,
    CONTINUATION_JOIN,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_MAX_CONTINUATION_HOPS,
    NEGATIVE_SIGN,
    FRACTION_SEPARATOR,
)


# Children whose text never belongs to the enclosing fact's value
_OPAQUE_ELEMENTS = IX_FACT_ELEMENTS | {IX_EXCLUDE}


# ==============================================================================
# ELEMENT HELPERS
# ==============================================================================

def is_fact_element(elem) -> bool:
    """
    True for inline fact elements.

    Clark-notation tags must be in an inline namespace; literal-prefix
    and unprefixed tags (HTML-mode trees) are matched by local name.
    """
    if not is_element(elem) or local_name(elem) not in IX_FACT_ELEMENTS:
        return False
    namespace_uri = split_tag(elem.tag)[0]
    return namespace_uri is None or namespace_uri in IX_NAMESPACES


def _pending_nodes(elem) -> list:
    # Reverse order so the stack pops children in document order
    pending = []
    for child in reversed(elem):
        if child.tail:
            pending.append(child.tail)
        if is_element(child) and local_name(child) not in _OPAQUE_ELEMENTS:
            pending.append(child)
    return pending


def direct_text(elem) -> str:
    """
    Text of an element, excluding nested fact and ix:exclude content.

    Text following a nested fact (its tail) is kept. The walk is
    iterative so deeply nested markup cannot exhaust the call stack.
    """
    parts = [elem.text or '']
    stack = _pending_nodes(elem)

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        parts.append(item.text or '')
        stack.extend(_pending_nodes(item))

    return ''.join(parts)


# ==============================================================================
# DOCUMENT INDEX
# ==============================================================================

class InlineIndex:
    """
    Element arena for one inline document.

    Attributes:
        facts: Fact elements in document order (position = fact index)
        children: Per fact index, indices of its direct child facts
        parents: Per fact index, index of the enclosing fact (or None)
        ids: Element id -> element (first occurrence)
        continuations: Continuation id -> element
    """

    def __init__(self, root: etree._Element):
        self.facts: list[etree._Element] = []
        self.ids: dict[str, etree._Element] = {}
        self.continuations: dict[str, etree._Element] = {}

        for elem in root.iter():
            if not is_element(elem):
                continue
            if is_fact_element(elem):
                self.facts.append(elem)

            elem_id = get_attr(elem, ATTR_ID)
            if not elem_id:
                continue
            self.ids.setdefault(elem_id, elem)
            if local_name(elem) == IX_CONTINUATION or CONTINUATION_ID_PATTERN.search(elem_id):
                self.continuations.setdefault(elem_id, elem)

        positions = {elem: i for i, elem in enumerate(self.facts)}
        self.parents: list[Optional[int]] = []
        self.children: list[list[int]] = [[] for _ in self.facts]

        for i, elem in enumerate(self.facts):
            parent = None
            for ancestor in elem.iterancestors():
                if ancestor in positions:
                    parent = positions[ancestor]
                    break
            self.parents.append(parent)
            if parent is not None:
                self.children[parent].append(i)

    def subtree(self, index: int) -> list[int]:
        """Fact index and every fact index nested below it."""
        result = []
        stack = [index]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(self.children[current])
        return result

    def continuation_target(self, target_id: str) -> Optional[etree._Element]:
        """Continuation element by id, falling back to any element with that id."""
        return self.continuations.get(target_id) or self.ids.get(target_id)

    def __len__(self) -> int:
        return len(self.facts)


# ==============================================================================
# EXTRACTOR
# ==============================================================================

class InlineFactExtractor:
    """
    Extracts facts from an inline XBRL document tree.

    Example:
        extractor = InlineFactExtractor()
        facts = extractor.extract_facts(root, resolver, transformer, diagnostics)

        for fact in facts:
            print(f"{fact.concept} = {fact.normalized_value}")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize inline extractor.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

        self.max_depth = self.config.get('max_nesting_depth', DEFAULT_MAX_NESTING_DEPTH)
        self.max_hops = self.config.get('max_continuation_hops', DEFAULT_MAX_CONTINUATION_HOPS)

    def extract_facts(
        self,
        root: etree._Element,
        resolver: NamespaceResolver,
        transformer: ValueTransformer,
        diagnostics: Diagnostics
    ) -> list[Fact]:
        """
        Extract every inline fact under root.

        Each fact element is visited exactly once. Facts nested inside
        another fact are extracted before their enclosing fact and
        flagged is_nested.

        Args:
            root: Document root element
            resolver: Per-document namespace resolver
            transformer: Value transformer for displayed values
            diagnostics: Ledger for counts and skipped facts

        Returns:
            Facts in extraction order
        """
        index = InlineIndex(root)
        diagnostics.facts_found += len(index)

        facts: list[Fact] = []
        processed: set[int] = set()

        for i in range(len(index)):
            if i in processed:
                continue
            facts.extend(self._extract_recursive(
                i, 0, index, processed, resolver, transformer, diagnostics
            ))

        self.logger.debug(
            f"Extracted {len(facts)} inline facts from {len(index)} fact elements "
            f"({len(index.continuations)} continuation targets)"
        )
        return facts

    def _extract_recursive(
        self,
        i: int,
        depth: int,
        index: InlineIndex,
        processed: set[int],
        resolver: NamespaceResolver,
        transformer: ValueTransformer,
        diagnostics: Diagnostics
    ) -> list[Fact]:
        elem = index.facts[i]

        if depth >= self.max_depth:
            skipped = [j for j in index.subtree(i) if j not in processed]
            processed.update(skipped)
            diagnostics.facts_skipped += len(skipped)
            diagnostics.warning(
                ErrorCategory.NESTING_DEPTH_EXCEEDED,
                f"Fact nesting depth {depth} reaches limit {self.max_depth}; "
                f"{len(skipped)} fact element(s) skipped",
                element_id=get_attr(elem, ATTR_ID) or describe(elem),
                line_number=source_line(elem)
            )
            return []

        processed.add(i)
        facts: list[Fact] = []

        for child in index.children[i]:
            if child not in processed:
                facts.extend(self._extract_recursive(
                    child, depth + 1, index, processed, resolver, transformer, diagnostics
                ))

        try:
            fact = self.build_fact(elem, index, resolver, transformer, diagnostics, nested=depth > 0)
        except Exception as e:
            self.logger.error(f"Failed to extract inline fact from {describe(elem)}: {e}", exc_info=True)
            diagnostics.skip_fact(
                ErrorCategory.INVALID_FACT,
                f"Failed to extract fact: {e}",
                element_id=get_attr(elem, ATTR_ID) or describe(elem),
                line_number=source_line(elem)
            )
            return facts

        if fact is not None:
            facts.append(fact)
            diagnostics.facts_parsed += 1
            if fact.is_nested:
                diagnostics.nested_extracted += 1

        return facts

    def build_fact(
        self,
        elem: etree._Element,
        index: InlineIndex,
        resolver: NamespaceResolver,
        transformer: ValueTransformer,
        diagnostics: Diagnostics,
        nested: bool = False
    ) -> Optional[Fact]:
        """
        Build a Fact from one inline fact element.

        Returns:
            Fact, or None when the element was skipped (recorded in diagnostics)
        """
        label = get_attr(elem, ATTR_ID) or describe(elem)
        line = source_line(elem)

        qname = resolver.parse_qname(get_attr(elem, ATTR_NAME))
        if qname is None:
            diagnostics.skip_fact(
                ErrorCategory.INVALID_FACT,
                f"Inline fact {describe(elem)} has no concept name",
                element_id=label,
                line_number=line
            )
            return None

        # Fact-bearing elements are kept even with reference gaps
        context_ref = get_attr(elem, ATTR_CONTEXT_REF)
        context_ref = context_ref.strip() if context_ref and context_ref.strip() else None
        if context_ref is None:
            diagnostics.warning(
                ErrorCategory.MISSING_CONTEXT,
                f"Inline fact '{qname}' has no contextRef",
                element_id=label,
                line_number=line
            )

        kind = local_name(elem)
        numeric = kind in IX_NUMERIC_ELEMENTS
        unit_ref = get_attr(elem, ATTR_UNIT_REF) if numeric else None
        unit_ref = unit_ref.strip() if unit_ref and unit_ref.strip() else None
        if numeric and unit_ref is None:
            diagnostics.warning(
                ErrorCategory.MISSING_UNIT,
                f"Numeric inline fact '{qname}' has no unitRef; kind left UNKNOWN",
                element_id=label,
                line_number=line
            )

        if not numeric:
            fact_type = FactKind.STRING
        elif unit_ref is not None:
            fact_type = FactKind.DECIMAL
        else:
            fact_type = FactKind.UNKNOWN

        nil = is_nil(elem)
        format_tag = get_attr(elem, ATTR_FORMAT)
        footnotes = get_attr(elem, ATTR_FOOTNOTE_REFS)

        if kind == IX_FRACTION:
            raw_value, numeric_value = self._fraction_value(elem, transformer)
        else:
            raw_value = self.collect_value(elem, index, diagnostics)
            numeric_value = transformer.to_number(raw_value, format_tag) if numeric else None

        if nil:
            numeric_value = None
        elif numeric and numeric_value is None and not transformer.is_nil_sentinel(raw_value):
            diagnostics.warning(
                ErrorCategory.INVALID_VALUE,
                f"Numeric inline fact '{qname}' has unparseable value {raw_value!r}; kept as text",
                element_id=label,
                line_number=line
            )

        sign = get_attr(elem, ATTR_SIGN)

        return Fact(
            local_name=qname.local_name,
            namespace_uri=qname.namespace_uri,
            prefix=qname.prefix,
            context_ref=context_ref,
            unit_ref=unit_ref,
            raw_value=raw_value,
            numeric_value=numeric_value,
            string_value=None if (nil or numeric_value is not None) else raw_value,
            fact_type=fact_type,
            decimals=parse_integer(get_attr(elem, ATTR_DECIMALS)),
            precision=parse_integer(get_attr(elem, ATTR_PRECISION)),
            scale=parse_integer(get_attr(elem, ATTR_SCALE)),
            sign=NEGATIVE_SIGN if sign and sign.strip() == NEGATIVE_SIGN else None,
            format=format_tag,
            is_nil=nil,
            is_nested=nested,
            footnote_refs=tuple(footnotes.split()) if footnotes else (),
            fact_id=get_attr(elem, ATTR_ID),
            source_element=elem.tag,
            source_line=line
        )

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def collect_value(
        self,
        elem: etree._Element,
        index: InlineIndex,
        diagnostics: Diagnostics
    ) -> str:
        """
        Direct text of a fact plus its continuation chain.

        Follows at most max_continuation_hops continuedAt links. A link
        beyond that is discarded; an unknown target ends the chain.
        """
        pieces = [direct_text(elem)]
        target_id = get_attr(elem, ATTR_CONTINUED_AT)
        hops = 0

        while target_id and target_id.strip():
            target_id = target_id.strip()

            if hops >= self.max_hops:
                diagnostics.warning(
                    ErrorCategory.CONTINUATION_TRUNCATED,
                    f"Continuation chain longer than {self.max_hops} hops; "
                    f"'{target_id}' and later parts discarded",
                    element_id=get_attr(elem, ATTR_ID) or describe(elem),
                    line_number=source_line(elem)
                )
                break

            target = index.continuation_target(target_id)
            if target is None:
                diagnostics.warning(
                    ErrorCategory.CONTINUATION_UNRESOLVED,
                    f"Continuation target '{target_id}' not found",
                    element_id=get_attr(elem, ATTR_ID) or describe(elem),
                    line_number=source_line(elem)
                )
                break

            pieces.append(direct_text(target))
            diagnostics.continuations_resolved += 1
            hops += 1
            target_id = get_attr(target, ATTR_CONTINUED_AT)

        return CONTINUATION_JOIN.join(pieces).strip()

    def _fraction_value(
        self,
        elem: etree._Element,
        transformer: ValueTransformer
    ) -> tuple[str, Optional[Decimal]]:
        """Raw 'n/d' text and the quotient (None when either part is unusable)."""
        numerator_elem = find_descendant(elem, IX_NUMERATOR)
        denominator_elem = find_descendant(elem, IX_DENOMINATOR)

        numerator_text = element_text(numerator_elem) if numerator_elem is not None else ''
        denominator_text = element_text(denominator_elem) if denominator_elem is not None else ''
        raw_value = f"{numerator_text}{FRACTION_SEPARATOR}{denominator_text}"

        numerator = transformer.to_number(
            numerator_text,
            get_attr(numerator_elem, ATTR_FORMAT) if numerator_elem is not None else None
        )
        denominator = transformer.to_number(
            denominator_text,
            get_attr(denominator_elem, ATTR_FORMAT) if denominator_elem is not None else None
        )

        if numerator is None or denominator is None:
            return raw_value, None
        try:
            return raw_value, numerator / denominator
        except (ZeroDivisionError, InvalidOperation):
            self.logger.debug(f"Fraction {raw_value!r} has a zero denominator")
            return raw_value, None


__all__ = [
    'InlineFactExtractor',
    'InlineIndex',
    'is_fact_element',
    'direct_text',
]
