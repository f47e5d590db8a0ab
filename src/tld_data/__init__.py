"""
TLD Data - Registration eligibility dataset for every delegated TLD.

This package aggregates the DNS root zone, the IANA root zone database,
ICANN registry agreements and the sunrise/claims status export into one
record per TLD describing whether the public can register under it.
"""

__version__ = "1.1.0"
__author__ = "TLD Data Team"

from tld_data.exceptions import (
    TLDDataError,
    FetchError,
    ParseError,
    IntegrityError,
    ensure,
)
from tld_data.enums import (
    TLDType,
    SunriseType,
    ErrorCode,
    LogLevel,
)
from tld_data.config import (
    SourceConfig,
    RetryConfig,
    LoggingConfig,
    PipelineConfig,
    load_config_from_file,
    apply_env_overrides,
)
from tld_data.models import (
    IANARecord,
    AgreementInfo,
    Period,
    StatusPeriodsRecord,
    BrandOverride,
    TLDRecord,
    RunSummary,
)
from tld_data.labels import (
    unique_in_order,
    decode_label,
    encode_label,
    diff_unordered,
)
from tld_data.run_logger import (
    RunLogger,
    LogEntry,
    create_logger,
)
from tld_data.retry_manager import (
    RetryManager,
    RetryResult,
)
from tld_data.fetcher import (
    Fetcher,
    FetchResponse,
)
from tld_data.root_zone import (
    parse_root_zone,
    fetch_root_zone,
)
from tld_data.iana_db import (
    parse_iana_db,
    fetch_iana_db,
)
from tld_data.registry_agreement import (
    parse_agreement_page,
    gtld_info_from_registry_agreement,
)
from tld_data.status_periods import (
    parse_status_periods,
    fetch_status_periods,
)
from tld_data.overrides import (
    OverrideTable,
    STATIC_OVERRIDES,
    previous_from_records,
)
from tld_data.aggregator import (
    TLDAggregator,
    get_tld_data,
    map_limit,
)

__all__ = [
    # Exceptions
    "TLDDataError",
    "FetchError",
    "ParseError",
    "IntegrityError",
    "ensure",
    # Enums
    "TLDType",
    "SunriseType",
    "ErrorCode",
    "LogLevel",
    # Configuration
    "SourceConfig",
    "RetryConfig",
    "LoggingConfig",
    "PipelineConfig",
    "load_config_from_file",
    "apply_env_overrides",
    # Models
    "IANARecord",
    "AgreementInfo",
    "Period",
    "StatusPeriodsRecord",
    "BrandOverride",
    "TLDRecord",
    "RunSummary",
    # Labels
    "unique_in_order",
    "decode_label",
    "encode_label",
    "diff_unordered",
    # Run Logger
    "RunLogger",
    "LogEntry",
    "create_logger",
    # Retry Manager
    "RetryManager",
    "RetryResult",
    # Fetcher
    "Fetcher",
    "FetchResponse",
    # Extractors
    "parse_root_zone",
    "fetch_root_zone",
    "parse_iana_db",
    "fetch_iana_db",
    "parse_agreement_page",
    "gtld_info_from_registry_agreement",
    "parse_status_periods",
    "fetch_status_periods",
    # Overrides
    "OverrideTable",
    "STATIC_OVERRIDES",
    "previous_from_records",
    # Aggregator
    "TLDAggregator",
    "get_tld_data",
    "map_limit",
]
