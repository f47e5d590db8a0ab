"""
Row selection for the HTML tables scraped by the extractors.

Browsers insert an implied <tbody> into tables written without one;
BeautifulSoup's "html.parser" builder does not, so body rows are looked up
with and without it.
"""

from bs4 import BeautifulSoup, Tag


def body_rows(soup: BeautifulSoup, table_selector: str = "table") -> list[Tag]:
    """
    Return the data rows of the matching table(s).

    Rows inside an explicit <tbody> are used when present. Otherwise every
    <tr> of the table that has at least one <td> cell is a data row, which
    skips header rows made only of <th> cells.
    """
    rows = soup.select(f"{table_selector} tbody tr")
    if rows:
        return rows
    return [
        row for row in soup.select(f"{table_selector} tr")
        if row.find("td", recursive=False) is not None
    ]
