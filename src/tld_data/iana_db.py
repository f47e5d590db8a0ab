"""
IANA root zone database extractor.

Scrapes https://www.iana.org/domains/root/db, a table of every TLD IANA knows
about with its category and sponsoring organisation. The table may list TLDs
that are not in the root zone (delegated but not yet in DNS, or terminated),
so the root zone stays the source of truth for what exists.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from .enums import LogLevel, TLDType
from .exceptions import IntegrityError, ParseError, ensure
from .fetcher import Fetcher
from .html_tables import body_rows
from .labels import duplicates, unique_in_order
from .models import IANARecord
from .run_logger import RunLogger

COMPONENT = "IANADB"

TABLE_SELECTOR = "#tld-table"

# Dots plus LEFT-TO-RIGHT MARK / RIGHT-TO-LEFT MARK around RTL labels
LABEL_NOISE_PATTERN = re.compile("[.\u200e\u200f]")

TLD_TYPES = {tld_type.value: tld_type for tld_type in TLDType}


def clean_label(raw: str) -> str:
    """Strip the leading dot and any bidirectional marks from a displayed label."""
    return LABEL_NOISE_PATTERN.sub("", raw.strip()).strip()


def parse_iana_db(html: str) -> list[IANARecord]:
    """
    Parse the IANA root zone database page.

    Args:
        html: The page HTML

    Returns:
        One IANARecord per table row, in page order

    Raises:
        ParseError: If the table is missing, a row does not have exactly three
            cells, or a type is not a known TLD category
        IntegrityError: If a label is listed twice
    """
    soup = BeautifulSoup(html, "html.parser")
    rows = body_rows(soup, TABLE_SELECTOR)
    ensure(rows, f"IANA root DB has no rows in '{TABLE_SELECTOR}'")

    records = []
    for index, row in enumerate(rows):
        cells = [cell.get_text().strip() for cell in row.find_all(True, recursive=False)]
        ensure(
            len(cells) == 3,
            f"IANA root DB row {index} should have 3 cells, found {len(cells)}",
            row=index,
            cells=cells,
        )
        label, type_text, sponsor = cells
        tld = clean_label(label)
        ensure(tld, f"IANA root DB row {index} has an empty TLD label", row=index)

        tld_type = TLD_TYPES.get(type_text)
        if tld_type is None:
            raise ParseError(
                f"'{tld}' has unknown type '{type_text}' in the IANA root DB",
                {"tld": tld, "type": type_text},
            )

        records.append(IANARecord(tld=tld, type=tld_type, sponsor=sponsor))

    repeated = duplicates(record.tld for record in records)
    ensure(
        not repeated,
        f"All TLDs should appear once in the IANA root DB, repeated: {', '.join(repeated)}",
        IntegrityError,
        repeated=repeated,
    )
    return records


async def fetch_iana_db(
    fetcher: Fetcher,
    url: str,
    logger: Optional[RunLogger] = None,
) -> list[IANARecord]:
    """Fetch and parse the IANA root zone database."""
    response = await fetcher.fetch(url)
    records = parse_iana_db(response.text)
    if logger:
        types = unique_in_order(record.type.value for record in records)
        logger.log(
            LogLevel.INFO,
            COMPONENT,
            f"Found TLDs: {len(records)}",
            {"types": types},
        )
    return records
