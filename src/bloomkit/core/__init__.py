"""Core configuration, protocols, and validation for bloomkit."""

from bloomkit.core.config import Settings, get_settings, reset_settings
from bloomkit.core.protocols import HashEngine
from bloomkit.core.validation import (
    IncompatibleFilterError,
    ValidationError,
    validate_choice,
    validate_non_negative_int,
    validate_positive_int,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "reset_settings",
    # Protocols
    "HashEngine",
    # Errors and validation
    "IncompatibleFilterError",
    "ValidationError",
    "validate_choice",
    "validate_non_negative_int",
    "validate_positive_int",
]
