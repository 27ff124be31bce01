"""Structured logging configuration for objscope using structlog.

Plain module loggers (``logging.getLogger(__name__)``) are used throughout the
package; this module configures structlog on top of the standard library and
provides structured loggers for extraction events.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = False,
) -> None:
    """Configure structured logging for objscope.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by OBJSCOPE_DISABLE_CONSOLE_LOGGING env var)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv("OBJSCOPE_DISABLE_CONSOLE_LOGGING") == "1":
        console = False
        log_file = None

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )


# Global state for lazy initialization
_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    if os.getenv("OBJSCOPE_DISABLE_CONSOLE_LOGGING") == "1":
        # Route structlog through stdlib so disabling stdlib silences both
        logging.disable(logging.CRITICAL)
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _logging_initialized = True
        return

    try:
        settings = get_settings()
        setup_logging(
            level=settings.effective_log_level,
            log_file=settings.log_file,
            structured=not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (OSError, ValueError):
        # If settings fail or log path is invalid, just use basic logging
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class LogContext:
    """Context manager for temporary log context."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **kwargs) -> None:
        """Initialize with logger and context.

        Args:
            logger: Logger instance
            **kwargs: Context key-value pairs
        """
        self.logger = logger
        self.context = kwargs

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        """Enter context and bind values."""
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context."""
        pass


class ExtractionLogger:
    """Specialized logger for extraction calls."""

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize extraction logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)

    def log_extraction_start(self, operation: str, strategy: str, target: Any) -> dict[str, Any]:
        """Log extraction start.

        Args:
            operation: Operation name ("properties" or "collections")
            strategy: Name of the strategy that will run
            target: Inspected object

        Returns:
            Extraction context dict
        """
        context = {
            "operation": operation,
            "strategy": strategy,
            "object_type": type(target).__name__,
            "start_time": time.perf_counter(),
        }

        with self._bound(context) as log:
            log.debug("extraction_started")

        return context

    def log_extraction_end(self, context: dict[str, Any], entries: int, errors: int = 0) -> None:
        """Log extraction end.

        Args:
            context: Context from log_extraction_start
            entries: Number of entries produced
            errors: Number of error-flagged entries
        """
        duration = time.perf_counter() - context["start_time"]
        with self._bound(context) as log:
            if errors:
                log.info(
                    "extraction_completed_with_errors",
                    entries=entries,
                    errors=errors,
                    duration=duration,
                )
            else:
                log.debug("extraction_completed", entries=entries, duration=duration)

    def _bound(self, context: dict[str, Any]) -> LogContext:
        return LogContext(
            self.logger,
            operation=context["operation"],
            strategy=context["strategy"],
            object_type=context["object_type"],
        )


# Global logger instances
_extraction_logger: ExtractionLogger | None = None


def extraction_logger() -> ExtractionLogger:
    """Get the shared extraction logger, creating it on first use."""
    global _extraction_logger
    if _extraction_logger is None:
        _extraction_logger = ExtractionLogger()
    return _extraction_logger
