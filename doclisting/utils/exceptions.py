"""
Exception hierarchy for doclisting.

Categorized exceptions carrying structured context and troubleshooting hints,
integrated with structured logging.
"""

import time
from enum import Enum
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories for error classification."""

    USER_ERROR = "user_error"
    CONFIGURATION_ERROR = "configuration_error"
    NETWORK_ERROR = "network_error"
    API_ERROR = "api_error"
    DATA_ERROR = "data_error"
    SYSTEM_ERROR = "system_error"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DocListingError(Exception):
    """
    Base exception for all doclisting errors.

    Provides error context, categorization, and troubleshooting guidance.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        category: ErrorCategory = ErrorCategory.SYSTEM_ERROR,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        correlation_id: str | None = None,
        user_message: str | None = None,
        troubleshooting_hints: list[str] | None = None,
        retryable: bool = False,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.category = category
        self.severity = severity
        self.correlation_id = correlation_id
        self.user_message = user_message or message
        self.troubleshooting_hints = troubleshooting_hints or []
        self.retryable = retryable
        self.context = context
        self.timestamp = time.time()

        self._log_error()

    def _log_error(self) -> None:
        """Log error creation with full context."""
        logger.debug(
            f"Exception created: {self.__class__.__name__}",
            error=self.message,
            category=self.category.value,
            severity=self.severity.value,
            retryable=self.retryable,
            details=self.details,
        )


class ConfigurationError(DocListingError):
    """Raised when there are configuration issues."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        actual_value: str | None = None,
        **kwargs,
    ):
        hints = [
            "Check your configuration file (.env) for missing or incorrect values",
            "Verify DOCLISTING_* environment variables are properly set",
            "Run 'doclisting config-info' to inspect the effective settings",
        ]

        if config_key:
            hints.append(f"Ensure '{config_key}' is properly configured")
            kwargs.setdefault("details", {})["config_key"] = config_key

        if actual_value:
            kwargs.setdefault("details", {})["actual_value"] = actual_value

        kwargs.setdefault("troubleshooting_hints", hints)

        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION_ERROR,
            retryable=False,
            **kwargs,
        )


class ValidationError(DocListingError):
    """Raised when user-supplied input is invalid."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        field_value: Any | None = None,
        allowed_values: list[str] | None = None,
        **kwargs,
    ):
        details = kwargs.setdefault("details", {})
        details.update(
            {
                "field_name": field_name,
                "field_value": field_value,
                "allowed_values": allowed_values,
            }
        )

        hints = ["Check the value provided and try again"]
        if field_name and allowed_values:
            hints.append(
                f"'{field_name}' must be one of: {', '.join(allowed_values)}"
            )

        super().__init__(
            message,
            category=ErrorCategory.USER_ERROR,
            severity=ErrorSeverity.LOW,
            troubleshooting_hints=hints,
            retryable=False,
            **kwargs,
        )


class SourceFetchError(DocListingError):
    """
    Raised when the record source cannot deliver a record collection.

    Terminal for the current load attempt; recovery is an explicit retry.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.NETWORK_ERROR,
        **kwargs,
    ):
        details = kwargs.setdefault("details", {})
        details.update({"url": url, "status_code": status_code})

        kwargs.setdefault(
            "troubleshooting_hints",
            [
                "Check your internet connection",
                "Verify DOCLISTING_SOURCE_URL points at a JSON array of doctors",
                "Retry the load once the source is reachable",
            ],
        )

        super().__init__(
            message,
            category=category,
            severity=ErrorSeverity.HIGH,
            retryable=True,
            **kwargs,
        )
        self.url = url
        self.status_code = status_code


class NetworkError(SourceFetchError):
    """Raised when the source cannot be reached at all."""

    def __init__(self, message: str, url: str | None = None, **kwargs):
        super().__init__(
            message, url=url, category=ErrorCategory.NETWORK_ERROR, **kwargs
        )


class APIError(SourceFetchError):
    """Raised when the source answers with an error status."""

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None, **kwargs
    ):
        kwargs.setdefault(
            "troubleshooting_hints", self._generate_troubleshooting_hints(status_code)
        )
        super().__init__(
            message,
            url=url,
            status_code=status_code,
            category=ErrorCategory.API_ERROR,
            **kwargs,
        )

    @staticmethod
    def _generate_troubleshooting_hints(status_code: int | None) -> list[str]:
        """Generate troubleshooting hints based on status code."""
        if status_code == 404:
            return [
                "The directory endpoint was not found",
                "Check that DOCLISTING_SOURCE_URL is correct",
            ]
        if status_code and status_code >= 500:
            return [
                "The directory service is experiencing server issues",
                "This is likely temporary; retry the load later",
            ]
        return [
            "Check network connectivity to the directory service",
            "Verify the service URL is correct and accessible",
        ]


class DataFormatError(SourceFetchError):
    """Raised when the source payload is not a JSON array of records."""

    def __init__(self, message: str, url: str | None = None, **kwargs):
        kwargs.setdefault(
            "troubleshooting_hints",
            [
                "The source must return a JSON array of doctor objects",
                "Check whether the endpoint's response format has changed",
            ],
        )
        super().__init__(
            message, url=url, category=ErrorCategory.DATA_ERROR, **kwargs
        )
