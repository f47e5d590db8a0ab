"""
Manual brand/restriction data for TLDs that cannot be scraped.

Original gTLDs, sponsored TLDs, the restricted generics and the
infrastructure TLD do not share the new-gTLD registry agreement layout, so
their values are fixed here. Lookups are layered, highest precedence first:

1. carry-forward data from a previous run
2. the static table below
3. (caller) scraped registry agreement data
"""

from typing import Iterable, Mapping, Optional

from .models import BrandOverride

# Original generics: skipped by the scraper, no brand/restriction values
ORIGINAL_GENERIC_TLDS = ["com", "info", "net", "org", "mobi"]

SPONSORED_TLDS = [
    "aero", "asia", "cat", "coop", "edu", "gov", "int", "jobs", "mil",
    "museum", "post", "tel", "travel", "xxx",
]

RESTRICTED_GENERIC_TLDS = ["biz", "name", "pro"]

INFRASTRUCTURE_TLDS = ["arpa"]


def _restricted() -> BrandOverride:
    return BrandOverride(is_brand=False, has_restrictions=True)


def build_static_overrides() -> dict[str, BrandOverride]:
    """Build the static override table from the fixed category lists."""
    table: dict[str, BrandOverride] = {}
    table.update({tld: BrandOverride() for tld in ORIGINAL_GENERIC_TLDS})
    table.update({tld: _restricted() for tld in SPONSORED_TLDS})
    table.update({tld: _restricted() for tld in RESTRICTED_GENERIC_TLDS})
    table.update({tld: _restricted() for tld in INFRASTRUCTURE_TLDS})
    return table


STATIC_OVERRIDES = build_static_overrides()


class OverrideTable:
    """Layered lookup over carry-forward data and the static table."""

    def __init__(
        self,
        carried: Optional[Mapping[str, BrandOverride]] = None,
        static: Optional[Mapping[str, BrandOverride]] = None,
    ) -> None:
        self._carried = dict(carried or {})
        self._static = dict(STATIC_OVERRIDES if static is None else static)

    def lookup(self, tld: str) -> Optional[BrandOverride]:
        """
        Find the override for a TLD.

        A carry-forward entry replaces the static entry wholesale.

        Returns:
            The BrandOverride, or None if the TLD has to be scraped
        """
        if tld in self._carried:
            return self._carried[tld]
        return self._static.get(tld)

    def __contains__(self, tld: str) -> bool:
        return tld in self._carried or tld in self._static

    @property
    def carried_count(self) -> int:
        return len(self._carried)


def previous_from_records(records: Iterable[Mapping]) -> dict[str, BrandOverride]:
    """
    Re-key a previous run's output by TLD.

    Args:
        records: Output records as decoded from JSON

    Returns:
        Mapping of TLD to the carried isBrand/hasRestrictions values
    """
    return {
        record["tld"]: BrandOverride(
            is_brand=record.get("isBrand"),
            has_restrictions=record.get("hasRestrictions"),
        )
        for record in records
    }
