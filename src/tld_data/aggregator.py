"""
TLD Aggregator for the TLD data pipeline.

This module drives the source extractors and merges their output into one
record per delegated TLD:

1. Root zone: the source of truth for what is delegated
2. IANA root DB: TLD category, must cover every root zone label
3. Sunrise/claims export: periods and general availability for new gTLDs
4. Registry agreements: brand/restriction markers for the remaining gTLDs,
   unless the manual override table (or a previous run) already has them
"""

import asyncio
from datetime import date
from typing import Awaitable, Callable, Iterable, Mapping, Optional, TypeVar, Union

import httpx

from .config import PipelineConfig
from .enums import LogLevel, TLDType
from .exceptions import IntegrityError
from .fetcher import Fetcher
from .iana_db import fetch_iana_db
from .labels import diff_unordered, encode_label
from .models import BrandOverride, RunSummary, TLDRecord
from .overrides import OverrideTable
from .registry_agreement import gtld_info_from_registry_agreement
from .root_zone import fetch_root_zone
from .run_logger import RunLogger
from .status_periods import fetch_status_periods

T = TypeVar("T")
R = TypeVar("R")


async def map_limit(
    items: Iterable[T],
    limit: int,
    func: Callable[[T], Awaitable[R]],
) -> list[Union[R, BaseException]]:
    """
    Run func over items with at most ``limit`` calls in flight.

    Every call runs to completion; failures are returned in place of results.
    """
    if limit < 1:
        raise ValueError(f"Concurrency limit must be at least 1, got {limit}")

    semaphore = asyncio.Semaphore(limit)

    async def worker(item: T) -> R:
        async with semaphore:
            return await func(item)

    return await asyncio.gather(*(worker(item) for item in items), return_exceptions=True)


class TLDAggregator:
    """
    Builds the final TLD dataset from all upstream sources.

    Usage:
        aggregator = TLDAggregator(PipelineConfig(), logger=logger)
        records = await aggregator.run(previous)
    """

    COMPONENT = "Aggregator"

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        fetcher: Optional[Fetcher] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[RunLogger] = None,
        today: Optional[date] = None,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            config: Pipeline configuration
            fetcher: Optional fetcher to use; one is created per run otherwise
            transport: Optional httpx transport for the created fetcher
            logger: Optional run logger
            today: Evaluation date for general availability; defaults to today
        """
        self._config = config or PipelineConfig()
        self._fetcher = fetcher
        self._transport = transport
        self._logger = logger
        self._today = today
        self.summary = RunSummary()

    async def run(
        self,
        previous: Optional[Mapping[str, BrandOverride]] = None,
    ) -> list[TLDRecord]:
        """
        Retrieve and merge all TLD data.

        Args:
            previous: Optional carry-forward data keyed by TLD, used instead of
                scraping registry agreements for those TLDs

        Returns:
            One TLDRecord per root zone label, in root zone order

        Raises:
            FetchError: If a source cannot be fetched
            ParseError: If a source document is malformed
            IntegrityError: If sources disagree
        """
        if self._fetcher is not None:
            return await self._run(self._fetcher, previous)

        async with Fetcher(
            self._config.retry,
            timeout=self._config.timeout_seconds,
            transport=self._transport,
            logger=self._logger,
        ) as fetcher:
            return await self._run(fetcher, previous)

    async def _run(
        self,
        fetcher: Fetcher,
        previous: Optional[Mapping[str, BrandOverride]],
    ) -> list[TLDRecord]:
        self.summary = RunSummary()

        self._log_info("== TLDs from root zone ==")
        root_zone = await fetch_root_zone(
            fetcher, self._config.sources.root_zone_url, self._logger
        )
        records = [TLDRecord(tld=tld) for tld in root_zone]
        self.summary.root_zone_count = len(records)

        self._log_info("== TLDs and categories from IANA Root DB ==")
        await self._merge_iana(fetcher, records)

        self._log_info("== gTLDs with status periods ==")
        await self._merge_status_periods(fetcher, records)

        self._log_info("== TLD information from registry agreements ==")
        await self._merge_brand_info(fetcher, records, OverrideTable(previous))

        return records

    async def _merge_iana(self, fetcher: Fetcher, records: list[TLDRecord]) -> None:
        iana_records = await fetch_iana_db(
            fetcher, self._config.sources.iana_db_url, self._logger
        )
        self.summary.iana_count = len(iana_records)
        by_tld = {record.tld: record for record in iana_records}

        added, missing = diff_unordered(by_tld, [record.tld for record in records])
        self._log_info(
            "Diff with root zone (TLDs may be listed by IANA but absent from the "
            "root zone if not yet in DNS or terminated)",
            {"onlyInIANA": added, "onlyInRootZone": missing},
        )

        for record in records:
            iana_record = by_tld.get(record.tld)
            # IANA data should be exhaustive for everything delegated
            if iana_record is None:
                raise IntegrityError(
                    f"'{record.tld}' must exist in the IANA DB but it didn't",
                    {"tld": record.tld},
                )
            record.type = iana_record.type

    def _tracks_status(self, record: TLDRecord) -> bool:
        return (
            record.type == TLDType.GENERIC
            and record.tld not in self._config.legacy_generic_tlds
        )

    async def _merge_status_periods(self, fetcher: Fetcher, records: list[TLDRecord]) -> None:
        status_records = await fetch_status_periods(
            fetcher,
            self._config.sources.status_periods_url,
            today=self._today,
            logger=self._logger,
        )
        self.summary.status_count = len(status_records)
        by_tld = {record.tld: record for record in status_records}

        without_status = []
        for record in records:
            if not self._tracks_status(record):
                continue
            status = by_tld.get(record.tld)
            if status is None:
                # No sunrise data published: treated as available
                record.is_not_in_general_availability = False
                without_status.append(record.tld)
                continue
            record.periods = status.periods
            record.is_not_in_general_availability = status.is_not_generally_available

        self._log_info("gTLDs with no status", {"tlds": without_status})
        self._log_info(
            "gTLDs which haven't hit General Availability yet",
            {
                "tlds": [s.tld for s in status_records if s.is_not_generally_available],
                "spec13": [
                    s.tld for s in status_records
                    if s.is_not_generally_available and s.spec13
                ],
            },
        )

    async def _merge_brand_info(
        self,
        fetcher: Fetcher,
        records: list[TLDRecord],
        overrides: OverrideTable,
    ) -> None:
        to_scrape = []
        for record in records:
            override = overrides.lookup(record.tld)
            if override is not None:
                record.apply_brand(override.is_brand, override.has_restrictions)
                self.summary.overridden.append(record.tld)
            elif record.type == TLDType.GENERIC:
                to_scrape.append(record)

        self._log_info(
            f"Scraping {len(to_scrape)} registry agreements",
            {
                "overridden": len(self.summary.overridden),
                "carried": overrides.carried_count,
                "concurrency": self._config.concurrency,
            },
        )

        async def scrape(record: TLDRecord) -> None:
            info = await gtld_info_from_registry_agreement(
                fetcher,
                encode_label(record.tld),
                base_url=self._config.sources.icann_base_url,
                logger=self._logger,
            )
            record.apply_brand(info.is_brand, info.has_restrictions)

        results = await map_limit(to_scrape, self._config.concurrency, scrape)

        failures = []
        for record, result in zip(to_scrape, results):
            if isinstance(result, BaseException):
                failures.append(result)
                if self._logger:
                    self._logger.log_error(
                        self.COMPONENT,
                        f"Registry agreement lookup failed for {record.tld}",
                        result,
                        {"tld": record.tld},
                    )
            else:
                self.summary.scraped.append(record.tld)

        if failures:
            raise failures[0]

    def _log_info(self, message: str, data: Optional[dict] = None) -> None:
        """Log an info message if logger is available."""
        if self._logger:
            self._logger.log(LogLevel.INFO, self.COMPONENT, message, data)


async def get_tld_data(
    config: Optional[PipelineConfig] = None,
    previous: Optional[Mapping[str, BrandOverride]] = None,
    logger: Optional[RunLogger] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[TLDRecord]:
    """Convenience wrapper running a full aggregation."""
    aggregator = TLDAggregator(config, transport=transport, logger=logger)
    return await aggregator.run(previous)
