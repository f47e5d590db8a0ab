"""
Registry agreement extractor for gTLDs.

The ICANN registry agreement is the best public source of truth for how a
gTLD registry handles registrations. All agreements are listed at
https://www.icann.org/resources/pages/registries/registries-agreements-en

Only new-gTLD agreement pages share enough structure for this check. Original
gTLDs, ccTLDs and sTLDs are covered by the manual override table instead.

The markers looked for are the usual places, not the only ones. Some
registries publish restrictions in amendments or acceptable use policies
(.law adds them to Exhibit A in a separate PDF), so this is a quick check that
most gTLDs follow:

- Specification 13: brand TLD, exclusive to the registering company.
- Specification 9 exemption (not withdrawn): TLD only meant for the registry
  and its affiliates, which in practice is also a brand TLD.
- Specification 12: registration restrictions.
"""

import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .enums import LogLevel
from .exceptions import ensure
from .fetcher import Fetcher
from .models import AgreementInfo
from .run_logger import RunLogger

COMPONENT = "RegistryAgreement"

AGREEMENT_HTML_SELECTOR = "#agmthtml a"
SPEC13_SELECTOR = "#spec13"
SPEC9_SELECTOR = "#spec9"
SPEC12_MARKER = "SPECIFICATION 12"
WITHDRAWAL_PATTERN = re.compile("withdrawal", re.IGNORECASE)


def agreement_page_url(base_url: str, gtld: str) -> str:
    """URL of the agreement landing page for an ASCII gTLD label."""
    return f"{base_url.rstrip('/')}/en/about/agreements/registries/{gtld}"


def parse_agreement_page(html: str, gtld: str) -> tuple[bool, bool, str]:
    """
    Parse a registry agreement landing page.

    Args:
        html: Landing page HTML
        gtld: ASCII gTLD label, used in error messages

    Returns:
        Tuple of (has_spec13, has_spec9_exemption, agreement_html_href)

    Raises:
        ParseError: If the agreement HTML link is missing
    """
    soup = BeautifulSoup(html, "html.parser")

    anchor = soup.select_one(AGREEMENT_HTML_SELECTOR)
    ensure(
        anchor is not None and anchor.get("href"),
        f"'{AGREEMENT_HTML_SELECTOR}' on {gtld} should be present",
        gtld=gtld,
    )

    has_spec13 = soup.select_one(SPEC13_SELECTOR) is not None

    spec9 = soup.select_one(SPEC9_SELECTOR)
    has_spec9_exemption = (
        spec9 is not None and not WITHDRAWAL_PATTERN.search(spec9.get_text())
    )

    return has_spec13, has_spec9_exemption, anchor["href"]


def agreement_has_spec12(text: str) -> bool:
    return SPEC12_MARKER in text


async def gtld_info_from_registry_agreement(
    fetcher: Fetcher,
    gtld: str,
    base_url: str = "https://www.icann.org",
    logger: Optional[RunLogger] = None,
) -> AgreementInfo:
    """
    Scrape the registry agreement of a gTLD.

    The landing page is fetched first; the full agreement is then fetched
    from the link it contains, so the two requests are sequential.

    Args:
        fetcher: Fetcher used for both requests
        gtld: gTLD label in ASCII (punycode encoded if needed)
        base_url: ICANN site root the agreement links are relative to
        logger: Optional run logger

    Returns:
        AgreementInfo with the three specification markers

    Raises:
        FetchError: If either page cannot be fetched
        ParseError: If the landing page does not follow the gTLD template
    """
    if logger:
        logger.log(LogLevel.DEBUG, COMPONENT, f"Fetching registry agreement page for {gtld}")
    landing = await fetcher.fetch(agreement_page_url(base_url, gtld))

    has_spec13, has_spec9_exemption, href = parse_agreement_page(landing.text, gtld)

    # The href is relative to the site root
    agreement_url = urljoin(base_url.rstrip("/") + "/", href)
    if logger:
        logger.log(LogLevel.DEBUG, COMPONENT, f"Fetching registry agreement HTML for {gtld}")
    agreement = await fetcher.fetch(agreement_url)

    info = AgreementInfo(
        has_spec13=has_spec13,
        has_spec9_exemption=has_spec9_exemption,
        has_spec12=agreement_has_spec12(agreement.text),
    )
    if logger:
        logger.log(
            LogLevel.INFO,
            COMPONENT,
            f"Got data for {gtld}",
            {
                "hasSpec13": info.has_spec13,
                "hasSpec9Exemption": info.has_spec9_exemption,
                "hasSpec12": info.has_spec12,
            },
        )
    return info
