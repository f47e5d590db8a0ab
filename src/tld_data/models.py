"""
Data models for the TLD data pipeline.

This module defines the records produced by each source extractor and the
final per-TLD record emitted by the aggregator.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .enums import TLDType

DATE_OUTPUT_FORMAT = "%Y-%m-%d"


@dataclass
class IANARecord:
    """A row of the IANA root zone database."""

    tld: str
    type: TLDType
    sponsor: str


@dataclass
class AgreementInfo:
    """Contractual markers found in a gTLD registry agreement."""

    has_spec13: bool
    has_spec9_exemption: bool
    has_spec12: bool

    @property
    def is_brand(self) -> bool:
        return self.has_spec13 or self.has_spec9_exemption

    @property
    def has_restrictions(self) -> bool:
        return self.has_spec12


@dataclass
class Period:
    """A named registration lifecycle window (Sunrise, Trademark Claims, ...)."""

    name: str
    open: Optional[date] = None
    close: Optional[date] = None
    type: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"name": self.name}
        if self.open is not None:
            out["open"] = self.open.strftime(DATE_OUTPUT_FORMAT)
        if self.close is not None:
            out["close"] = self.close.strftime(DATE_OUTPUT_FORMAT)
        if self.type:
            out["type"] = self.type
        return out


@dataclass
class StatusPeriodsRecord:
    """Sunrise/claims status of a single gTLD."""

    tld: str
    spec13: bool
    periods: list[Period]
    is_not_generally_available: bool


@dataclass
class BrandOverride:
    """Brand/restriction values that bypass registry agreement scraping."""

    is_brand: Optional[bool] = None
    has_restrictions: Optional[bool] = None


@dataclass
class TLDRecord:
    """Final merged record for one delegated TLD."""

    tld: str
    type: Optional[TLDType] = None
    periods: Optional[list[Period]] = None
    is_not_in_general_availability: Optional[bool] = None
    is_brand: Optional[bool] = None
    has_restrictions: Optional[bool] = None

    def apply_brand(self, is_brand: Optional[bool], has_restrictions: Optional[bool]) -> None:
        self.is_brand = is_brand
        self.has_restrictions = has_restrictions

    def to_dict(self) -> dict:
        """Serialize to the published output shape, omitting absent fields."""
        out: dict = {"tld": self.tld}
        if self.type is not None:
            out["type"] = self.type.value
        if self.periods is not None:
            out["periods"] = [period.to_dict() for period in self.periods]
        if self.is_not_in_general_availability is not None:
            out["isNotInGeneralAvailability"] = self.is_not_in_general_availability
        if self.is_brand is not None:
            out["isBrand"] = self.is_brand
        if self.has_restrictions is not None:
            out["hasRestrictions"] = self.has_restrictions
        return out


@dataclass
class RunSummary:
    """Counters describing a completed pipeline run."""

    root_zone_count: int = 0
    iana_count: int = 0
    status_count: int = 0
    overridden: list[str] = field(default_factory=list)
    scraped: list[str] = field(default_factory=list)
