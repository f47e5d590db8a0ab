"""
Configuration dataclasses for the TLD data pipeline.

This module defines the configuration structures used throughout the system:
upstream source URLs, retry behavior, logging, and pipeline limits, plus
loaders for JSON config files and environment overrides.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class SourceConfig:
    """Upstream document locations."""

    root_zone_url: str = "http://www.internic.net/domain/root.zone"
    iana_db_url: str = "https://www.iana.org/domains/root/db"
    icann_base_url: str = "https://www.icann.org"
    status_periods_url: str = (
        "https://newgtlds.icann.org/program-status/sunrise-claims-periods.xls"
    )


@dataclass
class RetryConfig:
    """Retry behavior configuration."""

    max_retries: int = 4
    base_delay_seconds: float = 10.0
    backoff_factor: float = 3.0
    max_delay_seconds: float = 600.0
    retry_statuses: list[int] = field(
        default_factory=lambda: list(range(500, 512))
    )


@dataclass
class LoggingConfig:
    """Progress logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class PipelineConfig:
    """Main configuration combining all sub-configurations."""

    sources: SourceConfig = field(default_factory=SourceConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    concurrency: int = 5
    timeout_seconds: float = 60.0
    # Generic TLDs that predate the new gTLD program and have no status periods
    legacy_generic_tlds: list[str] = field(
        default_factory=lambda: ["com", "info", "net", "org", "mobi"]
    )


def load_config_from_file(config_path: Path) -> Optional[PipelineConfig]:
    """
    Load configuration from a JSON file.

    Keys missing from the file keep their defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        PipelineConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None

    defaults = PipelineConfig()

    sources_data = data.get("sources", {})
    sources = SourceConfig(
        root_zone_url=sources_data.get("root_zone_url", defaults.sources.root_zone_url),
        iana_db_url=sources_data.get("iana_db_url", defaults.sources.iana_db_url),
        icann_base_url=sources_data.get("icann_base_url", defaults.sources.icann_base_url),
        status_periods_url=sources_data.get(
            "status_periods_url", defaults.sources.status_periods_url
        ),
    )

    retry_data = data.get("retry", {})
    retry = RetryConfig(
        max_retries=retry_data.get("max_retries", defaults.retry.max_retries),
        base_delay_seconds=retry_data.get(
            "base_delay_seconds", defaults.retry.base_delay_seconds
        ),
        backoff_factor=retry_data.get("backoff_factor", defaults.retry.backoff_factor),
        max_delay_seconds=retry_data.get(
            "max_delay_seconds", defaults.retry.max_delay_seconds
        ),
        retry_statuses=retry_data.get("retry_statuses", defaults.retry.retry_statuses),
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", defaults.logging.level),
        output_format=logging_data.get("output_format", defaults.logging.output_format),
    )

    return PipelineConfig(
        sources=sources,
        retry=retry,
        logging=logging_config,
        concurrency=data.get("concurrency", defaults.concurrency),
        timeout_seconds=data.get("timeout_seconds", defaults.timeout_seconds),
        legacy_generic_tlds=data.get("legacy_generic_tlds", defaults.legacy_generic_tlds),
    )


def apply_env_overrides(config: PipelineConfig) -> PipelineConfig:
    """
    Override configuration values from TLD_DATA_* environment variables.

    Args:
        config: Configuration to update in place

    Returns:
        The same configuration object
    """
    env = os.environ

    if env.get("TLD_DATA_ROOT_ZONE_URL"):
        config.sources.root_zone_url = env["TLD_DATA_ROOT_ZONE_URL"]
    if env.get("TLD_DATA_IANA_DB_URL"):
        config.sources.iana_db_url = env["TLD_DATA_IANA_DB_URL"]
    if env.get("TLD_DATA_ICANN_BASE_URL"):
        config.sources.icann_base_url = env["TLD_DATA_ICANN_BASE_URL"]
    if env.get("TLD_DATA_STATUS_PERIODS_URL"):
        config.sources.status_periods_url = env["TLD_DATA_STATUS_PERIODS_URL"]

    if env.get("TLD_DATA_CONCURRENCY"):
        config.concurrency = int(env["TLD_DATA_CONCURRENCY"])
    if env.get("TLD_DATA_MAX_RETRIES"):
        config.retry.max_retries = int(env["TLD_DATA_MAX_RETRIES"])
    if env.get("TLD_DATA_BASE_DELAY_SECONDS"):
        config.retry.base_delay_seconds = float(env["TLD_DATA_BASE_DELAY_SECONDS"])
    if env.get("TLD_DATA_LOG_LEVEL"):
        config.logging.level = env["TLD_DATA_LOG_LEVEL"].lower()

    return config
