"""Cross-cutting helpers shared by every hacklearn component."""

from .logging_config import (
    JSONFormatter,
    LogLevel,
    PerformanceLogger,
    configure_from_dict,
    get_logger,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "LogLevel",
    "PerformanceLogger",
    "configure_from_dict",
    "get_logger",
    "setup_logging",
]
