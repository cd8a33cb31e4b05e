# Path: extraction/foundation/namespace_catalog.py
"""
Namespace Catalog

Well-known XBRL namespace URIs by conventional prefix, built once at
import time and read-only afterwards.

Each prefix maps to a tuple of URI variants, newest first. The first
variant is what a fallback lookup returns when a document uses a prefix
it never declared.

Families covered:
- XBRL structure and linking (xbrli, link, xlink, xbrldt, xbrldi, xl)
- Inline XBRL and its transformation registries (ix, ixt, ixt-sec)
- US taxonomies (us-gaap, dei, srt) for every year from 2025 back to 2011
- SEC code lists (country, currency, stpr, exch, naics, sic, ecd)
- IFRS and ESEF (ifrs-full, esef_cor)
- ISO 4217, XML Schema and XHTML
"""

from types import MappingProxyType
from typing import Mapping

from ..constants import (
    XBRLI_NS,
    XBRLDI_NS,
    XBRLDT_NS,
    LINK_NS,
    XLINK_NS,
    XL_NS,
    IX_NS,
    IX_NS_2008,
    XSI_NS,
    XSD_NS,
    XHTML_NS,
    ISO4217_NS,
)


# ==============================================================================
# VERSION RANGES
# ==============================================================================

# Year range generated for the yearly US taxonomies (us-gaap, dei, srt).
# NEWEST_TAXONOMY_YEAR is the latest published release; raise it when a
# new year ships.
NEWEST_TAXONOMY_YEAR = 2025
OLDEST_TAXONOMY_YEAR = 2011

IX_DRAFT_NS = "http://www.xbrl.org/inlineXBRL/2010-04-20"

IXT_VERSIONS = ('2020-02-12', '2015-02-26', '2011-07-31', '2010-04-20')
IXT_TEMPLATE = "http://www.xbrl.org/inlineXBRL/transformation/{version}"

IXT_SEC_VERSIONS = ('2015-08-31',)
IXT_SEC_TEMPLATE = "http://www.sec.gov/inlineXBRL/transformation/{version}"

SEC_CODE_LIST_TEMPLATE = "http://xbrl.sec.gov/{name}/{year}"
SEC_CODE_LISTS = {
    'country': (2024, 2023, 2022, 2021),
    'currency': (2024, 2023, 2022),
    'stpr': (2024, 2023, 2022, 2021),
    'exch': (2024, 2023, 2022),
    'naics': (2024, 2023, 2022),
    'sic': (2024, 2023, 2022, 2021),
    'ecd': (2024, 2023),
}

IFRS_VERSIONS = ('2024-03-27', '2023-03-23', '2022-03-24', '2021-03-24', '2020-03-16')
IFRS_TEMPLATE = "https://xbrl.ifrs.org/taxonomy/{version}/ifrs-full"

ESEF_VERSIONS = ('2022-03-24', '2021-03-24', '2020-03-16')
ESEF_TEMPLATE = "https://www.esma.europa.eu/taxonomy/{version}/esef_cor"


def yearly_variants(*templates: str, newest: int = NEWEST_TAXONOMY_YEAR, oldest: int = OLDEST_TAXONOMY_YEAR) -> tuple[str, ...]:
    """
    Expand '%d' year templates from newest down to oldest.

    All years of the first template come before any year of the next.

    Example:
        yearly_variants("http://fasb.org/us-gaap/%d", newest=2024, oldest=2023)
        # ('http://fasb.org/us-gaap/2024', 'http://fasb.org/us-gaap/2023')
    """
    variants = []
    for template in templates:
        if '%d' not in template:
            variants.append(template)
            continue
        for year in range(newest, oldest - 1, -1):
            variants.append(template % year)
    return tuple(variants)


def _build_catalog() -> dict[str, tuple[str, ...]]:
    catalog = {
        # Structure and linking
        'xbrli': (XBRLI_NS,),
        'link': (LINK_NS,),
        'xlink': (XLINK_NS,),
        'xbrldt': (XBRLDT_NS,),
        'xbrldi': (XBRLDI_NS,),
        'xl': (XL_NS,),

        # Inline
        'ix': (IX_NS, IX_NS_2008, IX_DRAFT_NS),
        'ixt': tuple(IXT_TEMPLATE.format(version=v) for v in IXT_VERSIONS),
        'ixt-sec': tuple(IXT_SEC_TEMPLATE.format(version=v) for v in IXT_SEC_VERSIONS),

        # US taxonomies
        'us-gaap': yearly_variants("http://fasb.org/us-gaap/%d", "http://xbrl.us/us-gaap/%d-01-31"),
        'dei': yearly_variants("http://xbrl.sec.gov/dei/%d", "http://xbrl.us/dei/%d-01-31"),
        'srt': yearly_variants("http://fasb.org/srt/%d"),
    }

    for name, years in SEC_CODE_LISTS.items():
        catalog[name] = tuple(SEC_CODE_LIST_TEMPLATE.format(name=name, year=y) for y in years)

    catalog.update({
        'ifrs-full': tuple(IFRS_TEMPLATE.format(version=v) for v in IFRS_VERSIONS),
        'esef_cor': tuple(ESEF_TEMPLATE.format(version=v) for v in ESEF_VERSIONS),
        'iso4217': (ISO4217_NS,),
        'xsi': (XSI_NS,),
        'xs': (XSD_NS,),
        'xsd': (XSD_NS,),
        'html': (XHTML_NS,),
        'xhtml': (XHTML_NS,),
    })
    return catalog


def _build_reverse(catalog: Mapping[str, tuple[str, ...]]) -> dict[str, str]:
    # First registration of a URI wins (xs before xsd, html before xhtml)
    reverse = {}
    for prefix, uris in catalog.items():
        for uri in uris:
            reverse.setdefault(uri, prefix)
    return reverse


NAMESPACE_CATALOG: Mapping[str, tuple[str, ...]] = MappingProxyType(_build_catalog())
CATALOG_URI_TO_PREFIX: Mapping[str, str] = MappingProxyType(_build_reverse(NAMESPACE_CATALOG))


__all__ = [
    'NAMESPACE_CATALOG',
    'CATALOG_URI_TO_PREFIX',
    'NEWEST_TAXONOMY_YEAR',
    'OLDEST_TAXONOMY_YEAR',
    'yearly_variants',
]
