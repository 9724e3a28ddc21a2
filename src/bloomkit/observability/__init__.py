"""Logging setup for bloomkit."""

from bloomkit.observability.logging import (
    StructuredFormatter,
    configure_from_settings,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredFormatter",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
