"""
Exception classes for the TLD data pipeline.

All exceptions inherit from TLDDataError and provide structured
error information with codes, messages, and optional details.

The taxonomy separates transport failures (FetchError), which the fetcher
retries, from structural (ParseError) and cross-source (IntegrityError)
failures, which are never retried.
"""

from typing import Optional, Type

from .enums import ErrorCode


class TLDDataError(Exception):
    """Base exception for all TLD data pipeline errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class FetchError(TLDDataError):
    """Raised when a document cannot be fetched after all retries."""

    def __init__(
        self,
        url: str,
        status_code: int,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        merged = {"url": url, "status_code": status_code}
        merged.update(details or {})
        super().__init__(ErrorCode.FETCH_FAILED.value, message, merged)


class ParseError(TLDDataError):
    """Raised when an upstream document does not have the expected structure."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(ErrorCode.PARSE_FAILED.value, message, details)


class IntegrityError(TLDDataError):
    """Raised when sources disagree where one is assumed exhaustive, or a label repeats."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(ErrorCode.INTEGRITY_VIOLATION.value, message, details)


def ensure(
    condition: object,
    message: str,
    error: Type[TLDDataError] = ParseError,
    **details,
) -> None:
    """
    Precondition check raising a tagged pipeline error.

    Args:
        condition: Value that must be truthy
        message: Message identifying the offending source/TLD
        error: ParseError or IntegrityError
        **details: Extra context stored on the exception
    """
    if not condition:
        raise error(message, details)
