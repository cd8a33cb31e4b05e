# Path: extraction/instance/context_parser.py
"""
Context Parser

Extracts and parses context elements.

This module handles:
- Context element discovery (anywhere in the tree)
- Entity identifier parsing
- Period parsing (instant, duration, forever)
- Explicit and typed dimension members (segment, then scenario)
- Duplicate ids (last definition wins, with a diagnostic)

The same per-element code serves the tree extractors and the streaming
extractor, which hands over each context element once it is complete.

Example:
    from ..instance import ContextParser

    parser = ContextParser()
    contexts = parser.parse_contexts(root, resolver, diagnostics)

    for context_id, context in contexts.items():
        print(f"{context_id}: {context.entity.value} @ {context.period}")
"""

import logging
from datetime import date, datetime
from typing import Optional
from lxml import etree

from ...core.config_loader import ConfigLoader
from ..models.context import (
    Context,
    DimensionMember,
    EntityIdentifier,
    Period,
    PeriodType,
)
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.namespace_resolver import NamespaceResolver
from ..foundation.element_utils import (
    local_name,
    get_attr,
    iter_children,
    find_child,
    find_descendant,
    iter_descendants,
    element_text,
    source_line,
)
from ..constants import ELEM_CONTEXT, ATTR_ID, ATTR_SCHEME, ATTR_DIMENSION
from ..instance.constants import (
    ELEM_ENTITY,
    ELEM_IDENTIFIER,
    ELEM_SEGMENT,
    ELEM_SCENARIO,
    ELEM_PERIOD,
    ELEM_INSTANT,
    ELEM_START_DATE,
    ELEM_END_DATE,
    ELEM_FOREVER,
    PERIOD_SHAPE_ELEMENTS,
    ELEM_EXPLICIT_MEMBER,
    ELEM_TYPED_MEMBER,
    XBRL_DATE_FORMAT,
    DATETIME_SEPARATOR,
)


def parse_xbrl_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an XBRL date or dateTime, keeping the date part.

    Returns:
        date or None if the text is not a valid date
    """
    if not value:
        return None
    text = value.strip().split(DATETIME_SEPARATOR, 1)[0]
    try:
        return datetime.strptime(text, XBRL_DATE_FORMAT).date()
    except ValueError:
        return None


class ContextParser:
    """
    Parses context elements.

    Example:
        parser = ContextParser()
        contexts = parser.parse_contexts(root, resolver, diagnostics)

        ctx = contexts['c20231231']
        print(f"Entity: {ctx.entity.value}")
        print(f"Period: {ctx.period.instant}")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize context parser.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

    def parse_contexts(
        self,
        root: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> dict[str, Context]:
        """
        Parse every context element under root.

        Args:
            root: Document or xbrl root element
            resolver: Per-document namespace resolver
            diagnostics: Ledger for skipped and duplicate contexts

        Returns:
            Dictionary mapping context IDs to Context objects
        """
        contexts: dict[str, Context] = {}

        for ctx_elem in iter_descendants(root, ELEM_CONTEXT):
            self.add_context(contexts, ctx_elem, resolver, diagnostics)

        diagnostics.contexts_found = len(contexts)
        self.logger.debug(f"Parsed {len(contexts)} contexts")
        return contexts

    def add_context(
        self,
        contexts: dict[str, Context],
        ctx_elem: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> Optional[Context]:
        """
        Build one context and store it, applying id rules.

        A context without an id is skipped. A repeated id replaces the
        earlier definition.

        Returns:
            The stored Context, or None if it was skipped
        """
        try:
            context = self.build_context(ctx_elem, resolver, diagnostics)
        except Exception as e:
            self.logger.error(f"Failed to parse context: {e}", exc_info=True)
            diagnostics.warning(
                ErrorCategory.MISSING_CONTEXT,
                f"Failed to parse context: {e}",
                element_id=get_attr(ctx_elem, ATTR_ID),
                line_number=source_line(ctx_elem)
            )
            return None

        if context is None:
            return None

        if context.id in contexts:
            diagnostics.warning(
                ErrorCategory.DUPLICATE_ID,
                f"Duplicate context id '{context.id}'; later definition replaces earlier",
                element_id=context.id,
                line_number=source_line(ctx_elem)
            )
        contexts[context.id] = context
        return context

    def build_context(
        self,
        ctx_elem: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> Optional[Context]:
        """
        Parse a single complete context element.

        Args:
            ctx_elem: Context element
            resolver: Namespace resolver for dimension QNames
            diagnostics: Ledger

        Returns:
            Context, or None when the element has no id
        """
        context_id = get_attr(ctx_elem, ATTR_ID)
        if not context_id:
            diagnostics.warning(
                ErrorCategory.MISSING_CONTEXT,
                "Context element missing 'id' attribute; skipped",
                line_number=source_line(ctx_elem)
            )
            return None
        context_id = context_id.strip()

        entity_elem = find_descendant(ctx_elem, ELEM_ENTITY)
        entity = self._parse_entity(entity_elem)

        period = self._parse_period(ctx_elem, context_id, diagnostics)

        dimensions = []
        if entity_elem is not None:
            segment = find_descendant(entity_elem, ELEM_SEGMENT)
            if segment is not None:
                dimensions.extend(self._parse_members(segment, resolver, from_scenario=False))

        scenario = find_child(ctx_elem, ELEM_SCENARIO)
        if scenario is None:
            scenario = find_descendant(ctx_elem, ELEM_SCENARIO)
        if scenario is not None:
            dimensions.extend(self._parse_members(scenario, resolver, from_scenario=True))

        return Context(
            id=context_id,
            entity=entity,
            period=period,
            dimensions=tuple(dimensions)
        )

    def _parse_entity(self, entity_elem: Optional[etree._Element]) -> EntityIdentifier:
        if entity_elem is None:
            return EntityIdentifier(scheme=None, value=None)

        identifier = find_descendant(entity_elem, ELEM_IDENTIFIER)
        if identifier is None:
            return EntityIdentifier(scheme=None, value=None)

        value = element_text(identifier) or None
        return EntityIdentifier(scheme=get_attr(identifier, ATTR_SCHEME), value=value)

    def _parse_period(
        self,
        ctx_elem: etree._Element,
        context_id: str,
        diagnostics: Diagnostics
    ) -> Optional[Period]:
        """
        Period from the first shape element in document order.

        A context without a usable period keeps period None.
        """
        period_elem = find_descendant(ctx_elem, ELEM_PERIOD)
        if period_elem is None:
            diagnostics.warning(
                ErrorCategory.INVALID_PERIOD,
                f"Context '{context_id}' has no period",
                element_id=context_id,
                line_number=source_line(ctx_elem)
            )
            return None

        shape = None
        for child in iter_children(period_elem):
            if local_name(child) in PERIOD_SHAPE_ELEMENTS:
                shape = local_name(child)
                break

        if shape == ELEM_INSTANT:
            instant = self._read_date(period_elem, ELEM_INSTANT, context_id, diagnostics)
            return Period(period_type=PeriodType.INSTANT, instant=instant)

        if shape in (ELEM_START_DATE, ELEM_END_DATE):
            return Period(
                period_type=PeriodType.DURATION,
                start_date=self._read_date(period_elem, ELEM_START_DATE, context_id, diagnostics),
                end_date=self._read_date(period_elem, ELEM_END_DATE, context_id, diagnostics)
            )

        if shape == ELEM_FOREVER:
            return Period(period_type=PeriodType.FOREVER)

        diagnostics.warning(
            ErrorCategory.INVALID_PERIOD,
            f"Context '{context_id}' period has no instant, start/end or forever",
            element_id=context_id,
            line_number=source_line(period_elem)
        )
        return None

    def _read_date(
        self,
        period_elem: etree._Element,
        name: str,
        context_id: str,
        diagnostics: Diagnostics
    ) -> Optional[date]:
        elem = find_child(period_elem, name)
        if elem is None:
            return None

        text = element_text(elem)
        parsed = parse_xbrl_date(text)
        if parsed is None:
            diagnostics.warning(
                ErrorCategory.INVALID_PERIOD,
                f"Context '{context_id}' has malformed {name} '{text}'",
                element_id=context_id,
                line_number=source_line(elem)
            )
        return parsed

    def _parse_members(
        self,
        container: etree._Element,
        resolver: NamespaceResolver,
        from_scenario: bool
    ) -> list[DimensionMember]:
        """Explicit and typed members of a segment or scenario, in document order."""
        members = []

        for member in iter_descendants(container, ELEM_EXPLICIT_MEMBER, ELEM_TYPED_MEMBER):
            dimension = resolver.parse_qname(get_attr(member, ATTR_DIMENSION))
            if dimension is None:
                self.logger.debug(f"Dimension member without dimension attribute at line {source_line(member)}")
                continue

            if local_name(member) == ELEM_EXPLICIT_MEMBER:
                value = resolver.parse_qname(element_text(member))
                if value is None:
                    self.logger.debug(f"Empty explicit member for {dimension} ignored")
                    continue
                members.append(DimensionMember(
                    dimension=dimension,
                    member=value,
                    from_scenario=from_scenario
                ))
            else:
                members.append(DimensionMember(
                    dimension=dimension,
                    typed_value=element_text(member),
                    from_scenario=from_scenario
                ))

        return members


__all__ = ['ContextParser', 'parse_xbrl_date']
