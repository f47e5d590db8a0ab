"""
Enumeration types for the TLD data pipeline.

These enums provide type-safe constants for TLD categories, sunrise markers,
error codes, and logging levels throughout the system.
"""

from enum import Enum


class TLDType(Enum):
    """TLD category as published in the IANA root zone database."""

    GENERIC = "generic"
    COUNTRY_CODE = "country-code"
    SPONSORED = "sponsored"
    INFRASTRUCTURE = "infrastructure"
    GENERIC_RESTRICTED = "generic-restricted"
    TEST = "test"


class SunriseType(Enum):
    """Sunrise marker column of the sunrise/claims export."""

    START_DATE = "Start Date Sunrise"
    END_DATE = "End Date Sunrise"
    SPEC_13_BRAND = "Spec 13 - .BRAND TLD"


class ErrorCode(Enum):
    """Error codes attached to pipeline exceptions."""

    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"
    INTEGRITY_VIOLATION = "integrity_violation"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
