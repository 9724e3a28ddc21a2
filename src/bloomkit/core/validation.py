"""
Input validation utilities for bloomkit.

Provides consistent validation and error handling across filters and config.
"""

from collections.abc import Iterable
from typing import Any


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        """Convert to error response format."""
        return {
            "error": "validation_error",
            "field": self.field,
            "message": self.message,
        }


class IncompatibleFilterError(ValueError):
    """Raised when two filters cannot be merged.

    Attributes:
        attribute: Name of the parameter that differs (capacity_bits,
            hash_count, hash_engine or codec)
        left: Value on the receiving filter
        right: Value on the other operand
    """

    def __init__(self, attribute: str, left: Any, right: Any) -> None:
        self.attribute = attribute
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot merge filters with different {attribute}: {left!r} != {right!r}"
        )

    def to_dict(self) -> dict:
        """Convert to error response format."""
        return {
            "error": "incompatible_filter",
            "attribute": self.attribute,
            "left": repr(self.left),
            "right": repr(self.right),
        }


# =============================================================================
# Numeric Validation
# =============================================================================


def validate_positive_int(
    value: int,
    field: str,
    max_val: int | None = None,
) -> int:
    """
    Validate positive integer (>= 1).

    Args:
        value: Value to validate
        field: Field name for error messages
        max_val: Optional maximum value

    Returns:
        Validated value

    Raises:
        ValidationError: If value is not a positive integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, f"Expected integer, got {type(value).__name__}", value)

    if value < 1:
        raise ValidationError(field, f"Must be positive, got {value}", value)

    if max_val is not None and value > max_val:
        raise ValidationError(field, f"Must be <= {max_val}, got {value}", value)

    return value


def validate_non_negative_int(
    value: int,
    field: str,
    max_val: int | None = None,
) -> int:
    """
    Validate non-negative integer (>= 0).

    Args:
        value: Value to validate
        field: Field name for error messages
        max_val: Optional maximum value

    Returns:
        Validated value

    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, f"Expected integer, got {type(value).__name__}", value)

    if value < 0:
        raise ValidationError(field, f"Must be non-negative, got {value}", value)

    if max_val is not None and value > max_val:
        raise ValidationError(field, f"Must be <= {max_val}, got {value}", value)

    return value


# =============================================================================
# Choice Validation
# =============================================================================


def validate_choice(value: str, choices: Iterable[str], field: str) -> str:
    """
    Validate a string against a fixed set of options (case-insensitive).

    Returns:
        The lowercased value

    Raises:
        ValidationError: If value is not one of choices
    """
    options = sorted(choices)
    if not isinstance(value, str):
        raise ValidationError(field, f"Expected string, got {type(value).__name__}", value)

    normalized = value.strip().lower()
    if normalized not in options:
        raise ValidationError(
            field,
            f"Must be one of {options}, got {value!r}",
            value,
        )
    return normalized
