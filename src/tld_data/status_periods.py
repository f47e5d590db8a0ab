"""
Sunrise/claims status period extractor.

Parses the export behind
https://newgtlds.icann.org/en/program-status/sunrise-claims-periods
Despite its .xls extension the export is an HTML table, which makes it
straightforward to parse. Only gTLDs appear in it.

General availability is not published anywhere; the guess used here is the
latest close date among periods other than Trademark Claims (delegation,
sunrise and landrush all precede general availability). The guess can be off
by years for some TLDs (e.g. .homes), so a TLD with no usable close date is
conservatively treated as not yet available.
"""

from datetime import date, datetime
from typing import Optional

from bs4 import BeautifulSoup

from .enums import LogLevel, SunriseType
from .exceptions import IntegrityError, ParseError, ensure
from .fetcher import Fetcher
from .html_tables import body_rows
from .labels import decode_label, duplicates
from .models import Period, StatusPeriodsRecord
from .run_logger import RunLogger

COMPONENT = "StatusPeriods"

TABLE_SELECTOR = "table"
MIN_COLUMNS = 10
DATE_INPUT_FORMAT = "%d %b %Y"

SUNRISE = "Sunrise"
TRADEMARK_CLAIMS = "Trademark Claims"

SUNRISE_TYPES = {sunrise_type.value: sunrise_type for sunrise_type in SunriseType}


def parse_date(value: str, tld: str) -> date:
    """Parse a 'D Mon YYYY' date, failing loudly on anything else."""
    try:
        return datetime.strptime(value, DATE_INPUT_FORMAT).date()
    except ValueError as e:
        raise ParseError(
            f"'{tld}' has a date '{value}' not in 'D Mon YYYY' form",
            {"tld": tld, "value": value},
        ) from e


def make_period(
    tld: str,
    name: str,
    open_text: str,
    close_text: str,
    type_text: str = "",
) -> Optional[Period]:
    """
    Build a period from raw cell text.

    A period with neither date is dropped before its name is checked, so a
    blank slot in the "other" period lists disappears silently.

    Returns:
        The Period, or None if it has neither an open nor a close date
    """
    if not open_text and not close_text:
        return None
    ensure(name, f"'{tld}' has a period with dates but no name", tld=tld)
    return Period(
        name=name,
        open=parse_date(open_text, tld) if open_text else None,
        close=parse_date(close_text, tld) if close_text else None,
        type=type_text or None,
    )


def split_field(value: str) -> list[str]:
    return [part.strip() for part in value.split(",")]


def other_periods(
    tld: str,
    from_field: str,
    name_field: str,
    to_field: str,
    type_field: str,
    logger: Optional[RunLogger] = None,
) -> list[Period]:
    """
    Build the registry-defined "other" periods of a row.

    The four fields hold comma-separated lists where the same index denotes
    one period. Commas inside names or types break this alignment; the
    ``from`` list drives the count, shorter lists are padded with blanks and
    longer ones are cut.
    """
    if name_field == "":
        return []

    froms = split_field(from_field)
    names = split_field(name_field)
    tos = split_field(to_field)
    types = split_field(type_field)

    count = len(froms)
    if not (len(names) == len(tos) == len(types) == count):
        if logger:
            logger.log(
                LogLevel.WARN,
                COMPONENT,
                f"'{tld}' other period fields are misaligned",
                {
                    "tld": tld,
                    "from": len(froms),
                    "name": len(names),
                    "to": len(tos),
                    "type": len(types),
                },
            )

    def at(parts: list[str], index: int) -> str:
        return parts[index] if index < len(parts) else ""

    periods = []
    for index, from_text in enumerate(froms):
        period = make_period(
            tld, at(names, index), from_text, at(tos, index), at(types, index)
        )
        if period is not None:
            periods.append(period)
    return periods


def general_availability_guess(periods: list[Period]) -> Optional[date]:
    """Latest close date among periods other than Trademark Claims."""
    closes = [
        period.close
        for period in periods
        if period.name != TRADEMARK_CLAIMS and period.close is not None
    ]
    return max(closes) if closes else None


def is_not_generally_available(periods: list[Period], today: date) -> bool:
    guess = general_availability_guess(periods)
    if guess is None:
        return True
    return guess > today


def parse_row(
    cells: list[str],
    today: date,
    logger: Optional[RunLogger] = None,
) -> StatusPeriodsRecord:
    """Parse a single table row into a StatusPeriodsRecord."""
    (raw_tld, sunrise_type, sunrise_open, sunrise_close, claims_open, claims_close,
     other_from, other_name, other_to, other_type) = cells[:MIN_COLUMNS]

    ensure(raw_tld, "Sunrise/claims row has an empty TLD", cells=cells)
    tld = decode_label(raw_tld.lstrip("."))

    # Defines the type of sunrise the registry runs
    ensure(
        sunrise_type == "" or sunrise_type in SUNRISE_TYPES,
        f"'{tld}' sunrise event type must be in well-known types or blank",
        tld=tld,
        sunrise_type=sunrise_type,
    )

    periods = [
        period
        for period in (
            make_period(tld, SUNRISE, sunrise_open, sunrise_close),
            make_period(tld, TRADEMARK_CLAIMS, claims_open, claims_close),
        )
        if period is not None
    ]
    periods.extend(
        other_periods(tld, other_from, other_name, other_to, other_type, logger)
    )

    return StatusPeriodsRecord(
        tld=tld,
        spec13=sunrise_type == SunriseType.SPEC_13_BRAND.value,
        periods=periods,
        is_not_generally_available=is_not_generally_available(periods, today),
    )


def parse_status_periods(
    html: str,
    today: Optional[date] = None,
    logger: Optional[RunLogger] = None,
) -> list[StatusPeriodsRecord]:
    """
    Parse the sunrise/claims export table.

    Args:
        html: Export contents (an HTML table)
        today: Evaluation date for general availability; defaults to today
        logger: Optional run logger

    Returns:
        One record per gTLD, in table order

    Raises:
        ParseError: On missing rows, short rows, unknown sunrise types or bad dates
        IntegrityError: If a TLD appears more than once
    """
    today = today or date.today()
    soup = BeautifulSoup(html, "html.parser")
    rows = body_rows(soup, TABLE_SELECTOR)
    ensure(rows, f"Sunrise/claims export has no table rows")

    records = []
    for index, row in enumerate(rows):
        cells = [cell.get_text().strip() for cell in row.find_all(True, recursive=False)]
        ensure(
            len(cells) >= MIN_COLUMNS,
            f"Sunrise/claims row {index} should have at least {MIN_COLUMNS} cells, "
            f"found {len(cells)}",
            row=index,
            cells=cells,
        )
        records.append(parse_row(cells, today, logger))

    repeated = duplicates(record.tld for record in records)
    ensure(
        not repeated,
        "All TLDs should appear once in sunrise/sunset data, "
        f"repeated: {', '.join(repeated)}",
        IntegrityError,
        repeated=repeated,
    )
    return records


async def fetch_status_periods(
    fetcher: Fetcher,
    url: str,
    today: Optional[date] = None,
    logger: Optional[RunLogger] = None,
) -> list[StatusPeriodsRecord]:
    """Fetch and parse the sunrise/claims export."""
    response = await fetcher.fetch(url)
    records = parse_status_periods(response.text, today=today, logger=logger)
    if logger:
        logger.log(LogLevel.INFO, COMPONENT, f"Found gTLDs: {len(records)}", {"url": url})
    return records
