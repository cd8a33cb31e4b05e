# Path: tests/fixtures/sample_documents.py
"""
Sample Document Generators for Testing

Provides functions that build traditional instances, inline documents
and nested/continued fact markup as bytes.
"""

from typing import Optional


US_GAAP_NS = 'http://fasb.org/us-gaap/2024'
DEI_NS = 'http://xbrl.sec.gov/dei/2024'
COMPANY_NS = 'http://www.example.com/20241231'
CIK_SCHEME = 'http://www.sec.gov/CIK'
CIK = '0000320193'

INSTANCE_NAMESPACES = (
    'xmlns:xbrli="http://www.xbrl.org/2003/instance" '
    'xmlns:link="http://www.xbrl.org/2003/linkbase" '
    'xmlns:xlink="http://www.w3.org/1999/xlink" '
    'xmlns:iso4217="http://www.xbrl.org/2003/iso4217" '
    'xmlns:xbrldi="http://xbrl.org/2006/xbrldi" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    f'xmlns:us-gaap="{US_GAAP_NS}" '
    f'xmlns:dei="{DEI_NS}" '
    f'xmlns:co="{COMPANY_NS}"'
)

INLINE_NAMESPACES = (
    'xmlns="http://www.w3.org/1999/xhtml" '
    'xmlns:ix="http://www.xbrl.org/2013/inlineXBRL" '
    'xmlns:ixt="http://www.xbrl.org/inlineXBRL/transformation/2020-02-12" '
    + INSTANCE_NAMESPACES
)

DURATION_CONTEXT = (
    '<xbrli:context id="{id}">'
    '<xbrli:entity><xbrli:identifier scheme="' + CIK_SCHEME + '">' + CIK + '</xbrli:identifier></xbrli:entity>'
    '<xbrli:period><xbrli:startDate>2024-01-01</xbrli:startDate><xbrli:endDate>2024-12-31</xbrli:endDate></xbrli:period>'
    '</xbrli:context>'
)

INSTANT_CONTEXT = (
    '<xbrli:context id="{id}">'
    '<xbrli:entity><xbrli:identifier scheme="' + CIK_SCHEME + '">' + CIK + '</xbrli:identifier></xbrli:entity>'
    '<xbrli:period><xbrli:instant>2024-12-31</xbrli:instant></xbrli:period>'
    '</xbrli:context>'
)

DIMENSIONAL_CONTEXT = (
    '<xbrli:context id="{id}">'
    '<xbrli:entity><xbrli:identifier scheme="' + CIK_SCHEME + '">' + CIK + '</xbrli:identifier>'
    '<xbrli:segment>'
    '<xbrldi:explicitMember dimension="us-gaap:StatementGeographicalAxis">co:AmericasMember</xbrldi:explicitMember>'
    '</xbrli:segment></xbrli:entity>'
    '<xbrli:period><xbrli:instant>2024-12-31</xbrli:instant></xbrli:period>'
    '</xbrli:context>'
)

USD_UNIT = '<xbrli:unit id="usd"><xbrli:measure>iso4217:USD</xbrli:measure></xbrli:unit>'

USD_PER_SHARE_UNIT = (
    '<xbrli:unit id="usdPerShare"><xbrli:divide>'
    '<xbrli:unitNumerator><xbrli:measure>iso4217:USD</xbrli:measure></xbrli:unitNumerator>'
    '<xbrli:unitDenominator><xbrli:measure>xbrli:shares</xbrli:measure></xbrli:unitDenominator>'
    '</xbrli:divide></xbrli:unit>'
)

SCHEMA_REF = '<link:schemaRef xlink:type="simple" xlink:href="co-20241231.xsd"/>'


def traditional_instance(facts: Optional[str] = None, extra: str = '') -> bytes:
    """
    Create a traditional instance document.

    Args:
        facts: Fact markup (defaults to five sample facts)
        extra: Markup inserted after the units (extra contexts or units)

    Returns:
        UTF-8 encoded instance
    """
    if facts is None:
        facts = (
            '<dei:EntityRegistrantName contextRef="FY2024">Example Corp</dei:EntityRegistrantName>'
            '<us-gaap:Revenues contextRef="FY2024" unitRef="usd" decimals="-6">391035000000</us-gaap:Revenues>'
            '<us-gaap:Assets contextRef="I2024" unitRef="usd" decimals="-6">364980000000</us-gaap:Assets>'
            '<us-gaap:EarningsPerShareBasic contextRef="FY2024" unitRef="usdPerShare" decimals="2">6.11</us-gaap:EarningsPerShareBasic>'
            '<us-gaap:Liabilities contextRef="I2024" unitRef="usd" xsi:nil="true"/>'
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<xbrli:xbrl {INSTANCE_NAMESPACES}>\n'
        f'{SCHEMA_REF}\n'
        f'{DURATION_CONTEXT.format(id="FY2024")}\n'
        f'{DIMENSIONAL_CONTEXT.format(id="I2024")}\n'
        f'{USD_UNIT}\n'
        f'{USD_PER_SHARE_UNIT}\n'
        f'{extra}'
        f'{facts}\n'
        '</xbrli:xbrl>\n'
    ).encode('utf-8')


def inline_wrapper(body: str, resources: Optional[str] = None) -> bytes:
    """
    Wrap body markup in a well-formed XHTML inline document.

    The header declares context 'c1' (duration), context 'c2' (instant)
    and unit 'usd' unless resources overrides them.
    """
    if resources is None:
        resources = (
            DURATION_CONTEXT.format(id='c1')
            + INSTANT_CONTEXT.format(id='c2')
            + USD_UNIT
        )

    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<html {INLINE_NAMESPACES}>\n'
        '<head><title>10-K</title></head>\n'
        '<body>\n'
        '<div style="display:none"><ix:header>'
        f'<ix:references>{SCHEMA_REF}</ix:references>'
        f'<ix:resources>{resources}</ix:resources>'
        '</ix:header></div>\n'
        f'{body}\n'
        '</body>\n'
        '</html>\n'
    ).encode('utf-8')


def inline_document() -> bytes:
    """Inline document with string, scaled, signed and continued facts."""
    body = (
        '<p>Registrant: <ix:nonNumeric name="dei:EntityRegistrantName" contextRef="c1">Example Corp</ix:nonNumeric></p>\n'
        '<p>Revenue: $<ix:nonFraction name="us-gaap:Revenues" contextRef="c1" unitRef="usd" '
        'decimals="-6" scale="6" format="ixt:num-dot-decimal">391,035</ix:nonFraction> million</p>\n'
        '<p>Net loss: (<ix:nonFraction name="us-gaap:NetIncomeLoss" contextRef="c1" unitRef="usd" '
        'decimals="-6" scale="6" sign="-" format="ixt:num-dot-decimal">1,234</ix:nonFraction>)</p>\n'
        '<ix:nonNumeric name="us-gaap:AccountingPoliciesTextBlock" contextRef="c1" '
        'continuedAt="policies_cont1">Basis of presentation. </ix:nonNumeric>\n'
        '<div><ix:continuation id="policies_cont1">Use of estimates.</ix:continuation></div>'
    )
    return inline_wrapper(body)


def nested_chain(levels: int, concept_prefix: str = 'L') -> str:
    """
    Markup of fact elements nested 'levels' deep.

    Level 1 is outermost; each level's concept is f'{concept_prefix}{level}'.
    """
    markup = ''
    for level in range(levels, 0, -1):
        markup = (
            f'<ix:nonFraction name="us-gaap:{concept_prefix}{level}" contextRef="c1" unitRef="usd">'
            f'{level}{markup}</ix:nonFraction>'
        )
    return markup


def streaming_instance(fact_count: int) -> bytes:
    """Traditional instance with fact_count numeric facts."""
    facts = ''.join(
        f'<us-gaap:Revenues contextRef="FY2024" unitRef="usd" decimals="0">{i + 1}</us-gaap:Revenues>'
        for i in range(fact_count)
    )
    return traditional_instance(facts=facts)
