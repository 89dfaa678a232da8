"""
Logging configuration for doclisting.

Structured logging with correlation IDs, operation context and timing,
rendered as JSON or as a developer-friendly console stream.
"""

import contextvars
import logging
import sys
import time
import uuid
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

# Context variables for correlation and operation tracking
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
operation_context: contextvars.ContextVar[dict[str, Any] | None] = (
    contextvars.ContextVar("operation_context", default=None)
)
operation_start_time: contextvars.ContextVar[float] = contextvars.ContextVar(
    "operation_start_time", default=0.0
)


class CorrelationIDProcessor:
    """Processor to add correlation ID to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id_value = correlation_id.get()
        if correlation_id_value:
            event_dict["correlation_id"] = correlation_id_value
        return event_dict


class OperationContextProcessor:
    """Processor to add operation context to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        context = operation_context.get()
        if context:
            for key, value in context.items():
                event_dict.setdefault(key, value)
        return event_dict


class StructuredLogger:
    """Wrapper for structured logging with convenience methods."""

    def __init__(self, logger_name: str):
        self.logger = structlog.get_logger(logger_name)
        self._logger_name = logger_name

    def with_correlation_id(
        self, correlation_id_value: str | None = None
    ) -> "StructuredLogger":
        """Bind a correlation ID to the current context."""
        if correlation_id_value is None:
            correlation_id_value = generate_correlation_id()

        correlation_id.set(correlation_id_value)
        return self

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, **kwargs)

    def error(
        self, message: str, error: Exception | None = None, **kwargs: Any
    ) -> None:
        """Log an error message, flattening exception details into fields."""
        if error:
            kwargs.update(
                {
                    "error": str(error),
                    "error_type": type(error).__name__,
                }
            )
        self.logger.error(message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **kwargs)

    def performance(self, message: str, duration_ms: float, **kwargs: Any) -> None:
        """Log a timing measurement."""
        kwargs["duration_ms"] = round(duration_ms, 2)
        kwargs["performance_metric"] = True
        self.logger.info(message, **kwargs)


def _stderr_logger_factory(*args: Any) -> structlog.WriteLogger:
    # Resolved per call so a swapped sys.stderr is honoured
    return structlog.WriteLogger(sys.stderr)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_logs: bool = False,
    log_level: str = "INFO",
) -> None:
    """Configure structured logging for the application."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO

    base_processors = [
        CorrelationIDProcessor(),
        OperationContextProcessor(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if json_logs:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
        logging.basicConfig(
            format="%(message)s", stream=sys.stderr, level=level, force=True
        )
    else:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

        # Stdlib loggers (httpx etc.) go through rich
        rich_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
        )
        logging.basicConfig(
            level=level, format="%(message)s", handlers=[rich_handler], force=True
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    configure_third_party_loggers(verbose)


def configure_third_party_loggers(verbose: bool) -> None:
    """Reduce noise from HTTP libraries."""
    logging.getLogger("httpx").setLevel(
        logging.WARNING if not verbose else logging.INFO
    )
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class LoggingContextManager:
    """Context manager that logs start, completion and failure of an operation."""

    def __init__(
        self,
        logger: StructuredLogger,
        operation: str,
        correlation_id_value: str | None = None,
        **context: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.correlation_id_value = correlation_id_value or generate_correlation_id()
        self.context = context
        self._tokens: list[tuple[contextvars.ContextVar, contextvars.Token]] = []

    def __enter__(self) -> StructuredLogger:
        self._tokens = [
            (correlation_id, correlation_id.set(self.correlation_id_value)),
            (
                operation_context,
                operation_context.set({"operation": self.operation, **self.context}),
            ),
            (operation_start_time, operation_start_time.set(time.time())),
        ]

        self.logger.debug(f"Starting operation: {self.operation}")
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.time() - operation_start_time.get()) * 1000

        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation}",
                error=exc_val,
                duration_ms=round(duration_ms, 2),
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation}",
                duration_ms=round(duration_ms, 2),
            )

        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens = []


def operation_logger(
    operation_name: str, correlation_id_value: str | None = None, **context: Any
) -> LoggingContextManager:
    """Create a logging context manager for operations."""
    logger = get_logger(__name__)
    return LoggingContextManager(
        logger, operation_name, correlation_id_value, **context
    )
