"""Logging module for objscope."""

from .logger import (
    ExtractionLogger,
    LogContext,
    extraction_logger,
    get_logger,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "ExtractionLogger",
    "extraction_logger",
]
