# Path: tests/unit/test_diagnostics.py
"""
Unit Tests for the result models

Tests:
- Diagnostic entries and severity ordering
- Diagnostics counters, views and freezing
- Context, unit and fact value objects
- ParsedInstance queries
"""

import sys
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, get_type_hints

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from xbrl_recovery.extraction.constants import ISO4217_NS, XBRLI_NS
from xbrl_recovery.extraction.foundation.qname import QNameParts
from xbrl_recovery.extraction.models.error import (
    ErrorSeverity,
    ErrorCategory,
    ParsingError,
    create_warning,
    create_info,
    create_standard_error,
)
from xbrl_recovery.extraction.models.diagnostics import Diagnostics
from xbrl_recovery.extraction.models.context import (
    Context,
    EntityIdentifier,
    Period,
    PeriodType,
    DimensionMember,
)
from xbrl_recovery.extraction.models.unit import Unit, UnitType, Measure
from xbrl_recovery.extraction.models.fact import Fact, FactKind
from xbrl_recovery.extraction.models.parsed_instance import ParsedInstance, XbrlFormat


US_GAAP = 'http://fasb.org/us-gaap/2024'
CIK = EntityIdentifier('http://www.sec.gov/CIK', '0000320193')
USD = Measure('iso4217:USD', ISO4217_NS, 'USD')
SHARES = Measure('xbrli:shares', XBRLI_NS, 'shares')


class TestParsingError:
    """Test diagnostic entries."""

    def test_severity_ordering(self):
        """Severities should order INFO < WARNING < ERROR < CRITICAL."""
        assert ErrorSeverity.INFO < ErrorSeverity.WARNING
        assert ErrorSeverity.WARNING < ErrorSeverity.ERROR
        assert ErrorSeverity.ERROR < ErrorSeverity.CRITICAL

    def test_kind_is_category_value(self):
        """kind should be the category as a string."""
        entry = create_warning(ErrorCategory.DUPLICATE_ID, "Duplicate context id 'c1'")
        assert entry.kind == 'DUPLICATE_ID'

    def test_location_formats(self):
        """location should combine file, line and element id."""
        entry = create_info(
            ErrorCategory.RECOVERY_APPLIED, "Recovered",
            source_file='filing.htm', line_number=12, element_id='f1',
        )
        assert entry.location == 'filing.htm:12 (f1)'

        assert create_info(ErrorCategory.UNKNOWN, "x", line_number=3).location == 'line 3'
        assert create_info(ErrorCategory.UNKNOWN, "x").location is None

    def test_str_includes_severity_and_category(self):
        """String form should be usable as a log line."""
        entry = create_standard_error(ErrorCategory.NO_XBRL_ROOT, "No xbrl root", details='html only')
        text = str(entry)

        assert text.startswith('[ERROR] NO_XBRL_ROOT: No xbrl root')
        assert 'Details: html only' in text

    def test_dict_round_trip(self):
        """from_dict should rebuild an equivalent entry."""
        entry = create_warning(ErrorCategory.MISSING_UNIT, "No unit", element_id='f9', context={'a': 1})
        rebuilt = ParsingError.from_dict(entry.to_dict())

        assert rebuilt.severity == ErrorSeverity.WARNING
        assert rebuilt.category == ErrorCategory.MISSING_UNIT
        assert rebuilt.element_id == 'f9'
        assert rebuilt.context == {'a': 1}
        assert rebuilt.timestamp == entry.timestamp


class TestDiagnostics:
    """Test the per-parse ledger."""

    def test_counters_start_at_zero(self, diagnostics):
        """A new ledger should have zero counters and no entries."""
        assert diagnostics.facts_found == 0
        assert diagnostics.namespace_fallbacks == 0
        assert diagnostics.entries == []
        assert diagnostics.success_rate == 100.0

    def test_entries_get_source(self, diagnostics):
        """Entries without a source file should get the ledger source."""
        entry = diagnostics.warning(ErrorCategory.MISSING_CONTEXT, "No context")
        assert entry.source_file == 'test-document'

    def test_error_is_not_recovered(self, diagnostics):
        """error() should mark the entry unrecovered."""
        entry = diagnostics.error(ErrorCategory.PARSE_FAILED, "Broken")

        assert entry.recovered is False
        assert diagnostics.has_errors()
        assert diagnostics.errors == [entry]

    def test_skip_fact_counts(self, diagnostics):
        """skip_fact should count and record a warning."""
        diagnostics.skip_fact(ErrorCategory.INVALID_FACT, "No name")

        assert diagnostics.facts_skipped == 1
        assert len(diagnostics.warnings) == 1

    def test_category_views(self, diagnostics):
        """Entries should be grouped by category."""
        diagnostics.info(ErrorCategory.NAMESPACE_FALLBACK, "one")
        diagnostics.info(ErrorCategory.NAMESPACE_FALLBACK, "two")
        diagnostics.warning(ErrorCategory.DUPLICATE_ID, "three")

        assert len(diagnostics.get_by_category(ErrorCategory.NAMESPACE_FALLBACK)) == 2
        assert diagnostics.count_by_category() == {'NAMESPACE_FALLBACK': 2, 'DUPLICATE_ID': 1}
        assert not diagnostics.has_errors()

    def test_success_rate(self, diagnostics):
        """success_rate should be parsed over found."""
        diagnostics.facts_found = 4
        diagnostics.facts_parsed = 3

        assert diagnostics.success_rate == 75.0

    def test_freeze_blocks_changes(self, diagnostics):
        """A frozen ledger should reject counter changes and new entries."""
        diagnostics.warning(ErrorCategory.UNKNOWN, "before")
        diagnostics.freeze()

        assert diagnostics.frozen
        assert isinstance(diagnostics.entries, tuple)
        with pytest.raises(RuntimeError):
            diagnostics.facts_found += 1
        with pytest.raises(RuntimeError):
            diagnostics.warning(ErrorCategory.UNKNOWN, "after")

    def test_freeze_is_idempotent(self, diagnostics):
        """Freezing twice should return the same ledger."""
        assert diagnostics.freeze() is diagnostics.freeze()

    def test_summary_and_dict(self, diagnostics):
        """summary() and to_dict() should reflect the counters."""
        diagnostics.facts_found = 2
        diagnostics.facts_parsed = 2
        diagnostics.nested_extracted = 1

        assert diagnostics.summary().startswith('facts 2/2 (100.0%)')
        data = diagnostics.to_dict()
        assert data['nested_extracted'] == 1
        assert data['warning_count'] == 0


class TestContextModel:
    """Test context value objects."""

    def test_identifier_schemes(self):
        """CIK and LEI schemes should be recognized."""
        assert CIK.is_cik()
        assert not CIK.is_lei()
        assert EntityIdentifier('http://standards.iso.org/iso/17442', 'X').is_lei()

    def test_period_labels(self):
        """Period labels should describe each shape."""
        instant = Period(PeriodType.INSTANT, instant=date(2024, 12, 31))
        duration = Period(PeriodType.DURATION, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31))

        assert instant.get_label() == 'As of 2024-12-31'
        assert duration.get_label() == '2024-01-01 to 2024-12-31'
        assert Period(PeriodType.FOREVER).get_label() == 'Forever'
        assert instant.end == duration.end == date(2024, 12, 31)

    def test_dimension_lookup(self):
        """get_dimension_value should match the axis local name."""
        member = DimensionMember(
            dimension=QNameParts('us-gaap', US_GAAP, 'StatementGeographicalAxis'),
            member=QNameParts('co', 'http://www.example.com/20241231', 'AmericasMember'),
        )
        context = Context('c1', CIK, Period(PeriodType.INSTANT, instant=date(2024, 12, 31)), (member,))

        assert context.has_dimensions()
        assert context.get_dimension_value('StatementGeographicalAxis') == 'co:AmericasMember'
        assert context.get_dimension_value('SegmentsAxis') is None
        assert '[StatementGeographicalAxis=co:AmericasMember]' in context.get_description()

    def test_typed_member(self):
        """Typed members should expose their text as the value."""
        member = DimensionMember(
            dimension=QNameParts('co', None, 'LoanAxis'),
            typed_value='L-42',
            from_scenario=True,
        )

        assert member.is_typed
        assert member.value == 'L-42'
        assert member.to_dict()['container'] == 'scenario'

    def test_context_is_immutable(self):
        """Contexts should be frozen."""
        context = Context('c1', CIK)
        with pytest.raises(FrozenInstanceError):
            context.id = 'c2'


class TestUnitModel:
    """Test unit value objects."""

    def test_simple_currency(self):
        """A simple ISO 4217 unit should be monetary."""
        unit = Unit('usd', UnitType.SIMPLE, measures=(USD,))

        assert unit.is_monetary()
        assert unit.get_currency_code() == 'USD'
        assert unit.get_display_name() == 'USD'

    def test_divide_unit(self):
        """Divide units should display as 'num per den'."""
        unit = Unit('usdPerShare', UnitType.DIVIDE, numerator=(USD,), denominator=(SHARES,))

        assert unit.is_divide()
        assert unit.is_shares()
        assert unit.get_display_name() == 'USD per shares'
        assert 'numerator' in unit.to_dict()

    def test_pure_and_shares(self):
        """pure and shares measures should be recognized."""
        pure = Unit('pure', UnitType.SIMPLE, measures=(Measure('xbrli:pure', XBRLI_NS, 'pure'),))
        shares = Unit('shares', UnitType.SIMPLE, measures=(SHARES,))

        assert pure.is_pure()
        assert not pure.is_monetary()
        assert shares.get_display_name() == 'Shares'

    def test_unresolved_measure_name(self):
        """A measure without a local name should fall back to the raw text."""
        measure = Measure('iso4217:EUR')

        assert measure.name == 'EUR'
        assert measure.is_currency()


class TestFactModel:
    """Test fact value objects."""

    def test_concept_and_qname(self):
        """concept should use the prefix; qname identity should not."""
        fact = Fact('Assets', namespace_uri=US_GAAP, prefix='us-gaap')
        other = Fact('Assets', namespace_uri=US_GAAP, prefix='gaap')

        assert fact.concept == 'us-gaap:Assets'
        assert fact.qname == other.qname

    def test_normalized_value_scale_and_sign(self):
        """Scale and sign should be applied to the number."""
        fact = Fact(
            'NetIncomeLoss', numeric_value=Decimal('1234'),
            fact_type=FactKind.DECIMAL, unit_ref='usd', scale=6, sign='-',
        )

        assert fact.normalized_value == Decimal('-1234000000')

    def test_rounded_value(self):
        """rounded_value should round half up to the decimals."""
        fact = Fact(
            'Revenues', numeric_value=Decimal('391035500000'),
            fact_type=FactKind.DECIMAL, unit_ref='usd', decimals=-6,
        )

        assert fact.rounded_value == Decimal('391036000000')

    def test_value_by_kind(self):
        """value should be numeric for DECIMAL and text otherwise."""
        number = Fact('Assets', numeric_value=Decimal(5), fact_type=FactKind.DECIMAL, unit_ref='usd')
        text = Fact('EntityRegistrantName', string_value='Example Corp')

        assert number.value == Decimal(5)
        assert number.is_numeric() and number.has_unit()
        assert text.value == 'Example Corp'
        assert not text.is_numeric()

    def test_value_of_unknown_kind(self):
        """An UNKNOWN numeric fact should resolve to its number; its annotation should be Any."""
        fact = Fact('Shares', raw_value='500', numeric_value=Decimal(500), fact_type=FactKind.UNKNOWN)

        assert fact.value == Decimal(500)
        assert get_type_hints(Fact.value.fget)['return'] is Any
        assert get_type_hints(Fact.to_dict)['return'] == dict[str, Any]

    def test_nil_has_no_normalized_value(self):
        """Nil facts should normalize to None."""
        fact = Fact('Liabilities', fact_type=FactKind.DECIMAL, unit_ref='usd', is_nil=True)
        assert fact.normalized_value is None
        assert fact.rounded_value is None


class TestParsedInstance:
    """Test the parse result queries."""

    @pytest.fixture
    def instance(self, diagnostics):
        duration = Context('FY', CIK, Period(PeriodType.DURATION, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31)))
        prior = Context('I2023', CIK, Period(PeriodType.INSTANT, instant=date(2023, 12, 31)))
        facts = [
            Fact('Assets', US_GAAP, 'us-gaap', 'I2023', 'usd', '10', Decimal(10), None, FactKind.DECIMAL),
            Fact('Revenues', US_GAAP, 'us-gaap', 'FY', 'usd', '20', Decimal(20), None, FactKind.DECIMAL),
            Fact('EntityRegistrantName', 'http://xbrl.sec.gov/dei/2024', 'dei', 'FY', raw_value='X', string_value='X'),
        ]
        return ParsedInstance(
            source='doc',
            format=XbrlFormat.TRADITIONAL,
            diagnostics=diagnostics.freeze(),
            contexts={'I2023': prior, 'FY': duration},
            units={'usd': Unit('usd', UnitType.SIMPLE, measures=(USD,))},
            facts=facts,
        )

    def test_queries(self, instance):
        """Lookups should filter facts by concept, qname and context."""
        assert instance.fact_count == 3
        assert len(instance.get_facts_by_concept('Assets')) == 1
        assert len(instance.get_facts_by_qname(US_GAAP, 'Revenues')) == 1
        assert instance.get_facts_by_qname('http://other', 'Revenues') == []
        assert len(instance.get_facts_by_context('FY')) == 2
        assert len(instance.get_monetary_facts()) == 2

    def test_primary_context_is_latest_end(self, instance):
        """The primary context should be the latest-ending one."""
        assert instance.get_primary_context().id == 'FY'

    def test_containers_are_read_only(self, instance):
        """Contexts and facts should not be mutable."""
        with pytest.raises(TypeError):
            instance.contexts['new'] = None
        assert isinstance(instance.facts, tuple)
        assert instance.has_usable_data()

    def test_to_dict_without_facts(self, instance):
        """to_dict(include_facts=False) should omit the fact list."""
        data = instance.to_dict(include_facts=False)

        assert data['fact_count'] == 3
        assert 'facts' not in data
