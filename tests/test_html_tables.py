"""
Tests for table row selection.
"""

from bs4 import BeautifulSoup

from tld_data.html_tables import body_rows


def first_cells(html: str, table_selector: str = "table") -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [row.find(True).get_text() for row in body_rows(soup, table_selector)]


class TestBodyRows:

    def test_explicit_tbody(self) -> None:
        html = (
            "<table><thead><tr><td>not data</td></tr></thead>"
            "<tbody><tr><td>a</td></tr><tr><td>b</td></tr></tbody></table>"
        )

        assert first_cells(html) == ["a", "b"]

    def test_implied_tbody_skips_header_rows(self) -> None:
        html = "<table><tr><th>TLD</th></tr><tr><td>a</td></tr><tr><td>b</td></tr></table>"

        assert first_cells(html) == ["a", "b"]

    def test_only_selected_table(self) -> None:
        html = (
            "<table><tr><td>layout</td></tr></table>"
            '<table id="tld-table"><tr><td>aaa</td></tr></table>'
        )

        assert first_cells(html, "#tld-table") == ["aaa"]

    def test_no_rows(self) -> None:
        assert first_cells("<table><tr><th>TLD</th></tr></table>") == []
        assert first_cells("<p>Maintenance</p>") == []
