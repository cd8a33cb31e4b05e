# Path: extraction/instance/unit_parser.py
"""
Unit Parser

Extracts and parses unit elements.

This module handles:
- Unit element discovery (anywhere in the tree)
- Measure parsing with namespace resolution
- Divide units (numerator/denominator)
- Multiply units (several measures)
- Duplicate ids (last definition wins, with a diagnostic)

Example:
    from ..instance import UnitParser

    parser = UnitParser()
    units = parser.parse_units(root, resolver, diagnostics)

    for unit_id, unit in units.items():
        print(f"{unit_id}: {unit.get_display_name()}")
"""

import logging
from typing import Optional
from lxml import etree

from ...core.config_loader import ConfigLoader
from ..models.unit import Measure, Unit, UnitType
from ..models.diagnostics import Diagnostics
from ..models.error import ErrorCategory
from ..foundation.namespace_resolver import NamespaceResolver
from ..foundation.element_utils import (
    get_attr,
    find_descendant,
    iter_descendants,
    element_text,
    source_line,
)
from ..constants import ELEM_UNIT, ATTR_ID
from ..instance.constants import (
    ELEM_MEASURE,
    ELEM_DIVIDE,
    ELEM_UNIT_NUMERATOR,
    ELEM_UNIT_DENOMINATOR,
)


class UnitParser:
    """
    Parses unit elements.

    Example:
        parser = UnitParser()
        units = parser.parse_units(root, resolver, diagnostics)

        usd = units['usd']
        print(usd.get_currency_code())   # 'USD'
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize unit parser.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

    def parse_units(
        self,
        root: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> dict[str, Unit]:
        """
        Parse every unit element under root.

        Args:
            root: Document or xbrl root element
            resolver: Per-document namespace resolver
            diagnostics: Ledger for skipped and duplicate units

        Returns:
            Dictionary mapping unit IDs to Unit objects
        """
        units: dict[str, Unit] = {}

        for unit_elem in iter_descendants(root, ELEM_UNIT):
            self.add_unit(units, unit_elem, resolver, diagnostics)

        diagnostics.units_found = len(units)
        self.logger.debug(f"Parsed {len(units)} units")
        return units

    def add_unit(
        self,
        units: dict[str, Unit],
        unit_elem: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> Optional[Unit]:
        """
        Build one unit and store it, applying id rules.

        Returns:
            The stored Unit, or None if it was skipped
        """
        try:
            unit = self.build_unit(unit_elem, resolver, diagnostics)
        except Exception as e:
            self.logger.error(f"Failed to parse unit: {e}", exc_info=True)
            diagnostics.warning(
                ErrorCategory.MISSING_UNIT,
                f"Failed to parse unit: {e}",
                element_id=get_attr(unit_elem, ATTR_ID),
                line_number=source_line(unit_elem)
            )
            return None

        if unit is None:
            return None

        if unit.id in units:
            diagnostics.warning(
                ErrorCategory.DUPLICATE_ID,
                f"Duplicate unit id '{unit.id}'; later definition replaces earlier",
                element_id=unit.id,
                line_number=source_line(unit_elem)
            )
        units[unit.id] = unit
        return unit

    def build_unit(
        self,
        unit_elem: etree._Element,
        resolver: NamespaceResolver,
        diagnostics: Diagnostics
    ) -> Optional[Unit]:
        """
        Parse a single complete unit element.

        Args:
            unit_elem: Unit element
            resolver: Namespace resolver for measure QNames
            diagnostics: Ledger

        Returns:
            Unit, or None when the id is missing or there are no measures
        """
        unit_id = get_attr(unit_elem, ATTR_ID)
        if not unit_id:
            diagnostics.warning(
                ErrorCategory.MISSING_UNIT,
                "Unit element missing 'id' attribute; skipped",
                line_number=source_line(unit_elem)
            )
            return None
        unit_id = unit_id.strip()

        divide = find_descendant(unit_elem, ELEM_DIVIDE)
        if divide is not None:
            numerator = self._measures(find_descendant(divide, ELEM_UNIT_NUMERATOR), resolver)
            denominator = self._measures(find_descendant(divide, ELEM_UNIT_DENOMINATOR), resolver)
            if not numerator and not denominator:
                return self._skip_empty(unit_id, unit_elem, diagnostics)
            return Unit(
                id=unit_id,
                unit_type=UnitType.DIVIDE,
                numerator=tuple(numerator),
                denominator=tuple(denominator)
            )

        measures = self._measures(unit_elem, resolver)
        if not measures:
            return self._skip_empty(unit_id, unit_elem, diagnostics)

        unit_type = UnitType.SIMPLE if len(measures) == 1 else UnitType.MULTIPLY
        return Unit(id=unit_id, unit_type=unit_type, measures=tuple(measures))

    def _skip_empty(self, unit_id: str, unit_elem: etree._Element, diagnostics: Diagnostics) -> None:
        diagnostics.warning(
            ErrorCategory.MISSING_UNIT,
            f"Unit '{unit_id}' has no measures; skipped",
            element_id=unit_id,
            line_number=source_line(unit_elem)
        )
        return None

    def _measures(
        self,
        container: Optional[etree._Element],
        resolver: NamespaceResolver
    ) -> list[Measure]:
        if container is None:
            return []

        measures = []
        for measure_elem in iter_descendants(container, ELEM_MEASURE):
            raw = element_text(measure_elem)
            if not raw:
                continue
            parts = resolver.parse_qname(raw)
            measures.append(Measure(
                raw=raw,
                namespace_uri=parts.namespace_uri if parts else None,
                local_name=parts.local_name if parts else None
            ))
        return measures


__all__ = ['UnitParser']
