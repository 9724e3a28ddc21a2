"""Tests for validation helpers and error types."""

import pytest

from bloomkit.core.validation import (
    IncompatibleFilterError,
    ValidationError,
    validate_choice,
    validate_non_negative_int,
    validate_positive_int,
)


class TestValidationError:
    def test_message_and_fields(self):
        err = ValidationError("capacity_bits", "Must be positive, got 0", 0)
        assert str(err) == "capacity_bits: Must be positive, got 0"
        assert err.field == "capacity_bits"
        assert err.value == 0
        assert isinstance(err, ValueError)

    def test_to_dict(self):
        err = ValidationError("hash_count", "bad")
        assert err.to_dict() == {
            "error": "validation_error",
            "field": "hash_count",
            "message": "bad",
        }


class TestIncompatibleFilterError:
    def test_attributes(self):
        err = IncompatibleFilterError("hash_count", 3, 7)
        assert err.attribute == "hash_count"
        assert err.left == 3
        assert err.right == 7
        assert "hash_count" in str(err)
        assert isinstance(err, ValueError)


class TestPositiveInt:
    def test_valid(self):
        assert validate_positive_int(1, "n") == 1

    @pytest.mark.parametrize("value", [0, -3, 1.0, "1", None, True])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_positive_int(value, "n")

    def test_max(self):
        with pytest.raises(ValidationError):
            validate_positive_int(11, "n", max_val=10)


class TestNonNegativeInt:
    def test_zero_allowed(self):
        assert validate_non_negative_int(0, "n") == 0

    @pytest.mark.parametrize("value", [-1, 0.5, False])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_non_negative_int(value, "n")


class TestChoice:
    def test_normalizes(self):
        assert validate_choice(" Little ", {"little", "big"}, "byte_order") == "little"

    def test_rejects_unknown(self):
        with pytest.raises(ValidationError) as exc:
            validate_choice("middle", {"little", "big"}, "byte_order")
        assert exc.value.field == "byte_order"

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            validate_choice(1, {"a"}, "f")
