# Path: tests/unit/test_inline_extractor.py
"""
Unit Tests for InlineFactExtractor

Tests:
- Fact discovery and values (scale, sign, format)
- Nested facts and the nesting depth cap
- Continuation chains and the hop limit
- Fractions, ix:exclude and reference gaps
- HTML-mode trees
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest
from lxml import etree

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from xbrl_recovery.extraction.ixbrl.inline_extractor import (
    InlineFactExtractor,
    InlineIndex,
    is_fact_element,
    direct_text,
)
from xbrl_recovery.extraction.foundation.recovery_parser import RecoveryParser
from xbrl_recovery.extraction.foundation.encoding_detector import DocumentKind
from xbrl_recovery.extraction.models.fact import FactKind
from xbrl_recovery.extraction.models.error import ErrorCategory

from fixtures.sample_documents import inline_wrapper, nested_chain, US_GAAP_NS


@pytest.fixture
def inline_extractor(mock_config):
    return InlineFactExtractor(mock_config)


@pytest.fixture
def extract(inline_extractor, resolver, transformer, diagnostics):
    """Extract facts from body markup wrapped in an inline document."""
    def run(body: str):
        root = etree.fromstring(inline_wrapper(body))
        resolver.register_all(root.nsmap)
        return inline_extractor.extract_facts(root, resolver, transformer, diagnostics)
    return run


class TestInlineValues:
    """Test fact values."""

    def test_sample_document(self, inline_extractor, resolver, transformer, diagnostics, sample_inline):
        """The sample should give four facts with normalized values."""
        root = etree.fromstring(sample_inline)
        resolver.register_all(root.nsmap)
        facts = inline_extractor.extract_facts(root, resolver, transformer, diagnostics)
        by_name = {f.local_name: f for f in facts}

        assert len(facts) == 4
        assert by_name['Revenues'].numeric_value == Decimal('391035')
        assert by_name['Revenues'].normalized_value == Decimal('391035000000')
        assert by_name['Revenues'].namespace_uri == US_GAAP_NS
        assert by_name['NetIncomeLoss'].normalized_value == Decimal('-1234000000')
        assert by_name['EntityRegistrantName'].string_value == 'Example Corp'
        assert by_name['AccountingPoliciesTextBlock'].string_value == 'Basis of presentation. Use of estimates.'
        assert diagnostics.continuations_resolved == 1
        assert resolver.fallbacks_used == 0

    def test_fraction(self, extract):
        """Fractions should divide numerator by denominator."""
        facts = extract(
            '<ix:fraction name="us-gaap:Ratio" contextRef="c1" unitRef="usd">'
            '<ix:numerator>1</ix:numerator><ix:denominator>4</ix:denominator></ix:fraction>'
        )

        assert facts[0].raw_value == '1/4'
        assert facts[0].numeric_value == Decimal('0.25')

    def test_zero_denominator(self, extract):
        """A zero denominator should leave the value None."""
        facts = extract(
            '<ix:fraction name="us-gaap:Ratio" contextRef="c1" unitRef="usd">'
            '<ix:numerator>1</ix:numerator><ix:denominator>0</ix:denominator></ix:fraction>'
        )

        assert facts[0].numeric_value is None
        assert facts[0].string_value == '1/0'

    def test_unparseable_value_kept_as_text(self, extract, diagnostics):
        """Text that is not a number should be kept as the string value."""
        facts = extract(
            '<ix:nonFraction name="us-gaap:Assets" contextRef="c1" unitRef="usd">see note</ix:nonFraction>'
        )

        assert facts[0].fact_type == FactKind.DECIMAL
        assert facts[0].numeric_value is None
        assert facts[0].string_value == 'see note'
        assert diagnostics.get_by_category(ErrorCategory.INVALID_VALUE)

    def test_placeholder_value_not_warned(self, extract, diagnostics):
        """A dash placeholder should keep its text without a value warning."""
        facts = extract(
            '<ix:nonFraction name="us-gaap:Assets" contextRef="c1" unitRef="usd" '
            'format="ixt:num-dot-decimal">-</ix:nonFraction>'
        )

        assert facts[0].numeric_value is None
        assert facts[0].string_value == '-'
        assert not diagnostics.get_by_category(ErrorCategory.INVALID_VALUE)

    @pytest.mark.parametrize('body', [
        '<ix:nonFraction name="us-gaap:Assets" contextRef="c1">500</ix:nonFraction>',
        '<ix:nonFraction name="us-gaap:Assets" contextRef="c1" unitRef="usd">500</ix:nonFraction>',
        '<ix:nonFraction name="us-gaap:Assets" contextRef="c1" unitRef="usd">n/a value</ix:nonFraction>',
        '<ix:nonNumeric name="dei:DocumentType" contextRef="c1">10-K</ix:nonNumeric>',
    ])
    def test_exactly_one_value(self, extract, body):
        """A non-nil fact should carry exactly one of numeric and string value."""
        fact = extract(body)[0]

        assert (fact.numeric_value is None) != (fact.string_value is None)

    def test_exclude_content(self, extract):
        """ix:exclude content should not be part of the value."""
        facts = extract(
            '<ix:nonNumeric name="dei:DocumentType" contextRef="c1">10-K'
            '<ix:exclude> (draft)</ix:exclude></ix:nonNumeric>'
        )

        assert facts[0].string_value == '10-K'

    def test_nil_fact(self, extract):
        """xsi:nil should clear the value."""
        facts = extract(
            '<ix:nonFraction name="us-gaap:Assets" contextRef="c1" unitRef="usd" xsi:nil="true"/>'
        )

        assert facts[0].is_nil
        assert facts[0].numeric_value is None
        assert facts[0].fact_type == FactKind.DECIMAL

    def test_attributes(self, extract):
        """Numeric attributes and footnotes should be carried over."""
        facts = extract(
            '<ix:nonFraction id="f1" name="us-gaap:Assets" contextRef=" c1 " unitRef="usd" '
            'decimals="INF" scale="3" footnoteRefs="fn1 fn2" format="ixt:num-dot-decimal">1,000</ix:nonFraction>'
        )
        fact = facts[0]

        assert fact.context_ref == 'c1'
        assert fact.decimals is None
        assert fact.scale == 3
        assert fact.footnote_refs == ('fn1', 'fn2')
        assert fact.fact_id == 'f1'
        assert fact.format == 'ixt:num-dot-decimal'
        assert fact.normalized_value == Decimal('1000000')


class TestReferenceGaps:
    """Test facts with missing attributes."""

    def test_missing_context_kept(self, extract, diagnostics):
        """A fact without contextRef should be kept with a warning."""
        facts = extract('<ix:nonNumeric name="dei:EntityRegistrantName">Example Corp</ix:nonNumeric>')

        assert len(facts) == 1
        assert facts[0].context_ref is None
        assert diagnostics.get_by_category(ErrorCategory.MISSING_CONTEXT)

    def test_missing_unit_is_unknown_kind(self, extract, diagnostics):
        """A numeric fact without unitRef should be UNKNOWN with a warning."""
        facts = extract('<ix:nonFraction name="us-gaap:Shares" contextRef="c1">500</ix:nonFraction>')

        assert facts[0].fact_type == FactKind.UNKNOWN
        assert facts[0].numeric_value == Decimal('500')
        assert facts[0].string_value is None
        assert facts[0].raw_value == '500'
        assert facts[0].value == Decimal('500')
        assert facts[0].unit_ref is None
        assert diagnostics.get_by_category(ErrorCategory.MISSING_UNIT)

    def test_missing_name_skipped(self, extract, diagnostics):
        """A fact without a name should be skipped."""
        facts = extract('<ix:nonFraction contextRef="c1" unitRef="usd">5</ix:nonFraction>')

        assert facts == []
        assert diagnostics.facts_found == 1
        assert diagnostics.facts_skipped == 1
        assert diagnostics.get_by_category(ErrorCategory.INVALID_FACT)


class TestNesting:
    """Test nested facts."""

    def test_nested_pair(self, extract, diagnostics):
        """The inner fact should come first and be flagged nested."""
        facts = extract(
            '<ix:nonFraction name="us-gaap:A" contextRef="c1" unitRef="usd">1'
            '<ix:nonFraction name="us-gaap:B" contextRef="c1" unitRef="usd">2</ix:nonFraction>'
            '</ix:nonFraction>'
        )

        assert [f.local_name for f in facts] == ['B', 'A']
        assert facts[0].is_nested
        assert not facts[1].is_nested
        assert facts[1].raw_value == '1'
        assert diagnostics.nested_extracted == 1

    def test_each_element_once(self, extract, diagnostics):
        """Every fact element should be extracted exactly once."""
        facts = extract(nested_chain(4))

        assert len(facts) == 4
        assert len({f.local_name for f in facts}) == 4
        assert diagnostics.facts_found == 4
        assert diagnostics.facts_parsed == 4
        assert diagnostics.nested_extracted == 3

    def test_depth_cap(self, extract, diagnostics):
        """Facts at depth 10 and below should be skipped with one warning."""
        facts = extract(nested_chain(12))

        assert len(facts) == 10
        assert diagnostics.facts_skipped == 2
        assert len(diagnostics.get_by_category(ErrorCategory.NESTING_DEPTH_EXCEEDED)) == 1

    def test_configured_depth(self, config_factory, resolver, transformer, diagnostics):
        """The depth cap should come from configuration."""
        extractor = InlineFactExtractor(config_factory({'max_nesting_depth': 2}))
        root = etree.fromstring(inline_wrapper(nested_chain(4)))

        facts = extractor.extract_facts(root, resolver, transformer, diagnostics)

        assert len(facts) == 2
        assert diagnostics.facts_skipped == 2

    def test_index_structure(self):
        """The index should record parents and children."""
        root = etree.fromstring(inline_wrapper(nested_chain(3)))
        index = InlineIndex(root)

        assert len(index) == 3
        assert index.parents == [None, 0, 1]
        assert index.children[0] == [1]
        assert sorted(index.subtree(0)) == [0, 1, 2]

    def test_direct_text_skips_nested(self):
        """Direct text should keep tails but drop nested fact text."""
        root = etree.fromstring(inline_wrapper(
            '<ix:nonNumeric name="dei:A" contextRef="c1">Before '
            '<ix:nonNumeric name="dei:B" contextRef="c1">inner</ix:nonNumeric> after</ix:nonNumeric>'
        ))
        outer = [e for e in root.iter() if is_fact_element(e)][0]

        assert direct_text(outer) == 'Before  after'


class TestContinuations:
    """Test continuedAt chains."""

    def test_two_hops(self, extract, diagnostics):
        """Two hops should be followed and joined in order."""
        facts = extract(
            '<ix:nonNumeric name="us-gaap:Note" contextRef="c1" continuedAt="n1">A</ix:nonNumeric>'
            '<ix:continuation id="n1" continuedAt="n2">B</ix:continuation>'
            '<ix:continuation id="n2">C</ix:continuation>'
        )

        assert facts[0].string_value == 'ABC'
        assert diagnostics.continuations_resolved == 2

    def test_third_hop_truncated(self, extract, diagnostics):
        """Hops beyond the limit should be discarded with a warning."""
        facts = extract(
            '<ix:nonNumeric name="us-gaap:Note" contextRef="c1" continuedAt="n1">A</ix:nonNumeric>'
            '<ix:continuation id="n1" continuedAt="n2">B</ix:continuation>'
            '<ix:continuation id="n2" continuedAt="n3">C</ix:continuation>'
            '<ix:continuation id="n3">D</ix:continuation>'
        )

        assert facts[0].string_value == 'ABC'
        assert diagnostics.continuations_resolved == 2
        assert diagnostics.get_by_category(ErrorCategory.CONTINUATION_TRUNCATED)

    def test_unresolved_target(self, extract, diagnostics):
        """An unknown target should end the chain with a warning."""
        facts = extract(
            '<ix:nonNumeric name="us-gaap:Note" contextRef="c1" continuedAt="missing">A</ix:nonNumeric>'
        )

        assert facts[0].string_value == 'A'
        assert diagnostics.get_by_category(ErrorCategory.CONTINUATION_UNRESOLVED)

    def test_id_fallback(self, extract):
        """Any element with the target id should serve as a continuation."""
        facts = extract(
            '<ix:nonNumeric name="us-gaap:Note" contextRef="c1" continuedAt="p7">A</ix:nonNumeric>'
            '<p id="p7">B</p>'
        )

        assert facts[0].string_value == 'AB'


class TestHtmlMode:
    """Test trees from the lenient HTML parser."""

    def test_malformed_inline_document(self, mock_config, inline_extractor, resolver, transformer, diagnostics, sample_inline):
        """A malformed inline document should still give every fact."""
        text = sample_inline.decode('utf-8').replace('<p>Registrant:', '<p>AT&T Registrant:')
        parsed = RecoveryParser(mock_config).parse(text, DocumentKind.INLINE_XBRL, diagnostics)
        facts = inline_extractor.extract_facts(parsed.root, resolver, transformer, diagnostics)
        by_name = {f.local_name: f for f in facts}

        assert parsed.html_mode
        assert len(facts) == 4
        assert by_name['Revenues'].normalized_value == Decimal('391035000000')
        assert by_name['Revenues'].context_ref == 'c1'
        assert by_name['AccountingPoliciesTextBlock'].string_value == 'Basis of presentation. Use of estimates.'

    def test_non_inline_namespace_ignored(self):
        """Elements named like facts in another namespace should not count."""
        elem = etree.fromstring('<x:nonFraction xmlns:x="http://example.com/other"/>')
        assert not is_fact_element(elem)
