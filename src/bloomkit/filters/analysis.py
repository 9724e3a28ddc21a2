"""Theoretical sizing and error-rate estimates for Bloom filters.

Formulas, with m bits, k hashes and n inserted elements:

- optimal hash count: ``k* = (m / n) * ln 2``
- false-positive rate: ``(1 - (1 - 1/m) ** (k * n)) ** k``
- cardinality from X set bits: ``-(m / k) * ln(1 - X / m)``
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from bloomkit.core.validation import validate_non_negative_int, validate_positive_int


def optimal_hash_count(capacity_bits: int, expected_element_count: int) -> int:
    """Hash count minimising the false-positive rate for the expected load.

    Floors ``(capacity_bits / expected_element_count) * ln 2`` and clamps the
    result to at least 1. Zero expected elements gives 1.

    >>> optimal_hash_count(2500, 500)
    3
    >>> optimal_hash_count(1000, 100)
    6
    """
    validate_positive_int(capacity_bits, "capacity_bits")
    validate_non_negative_int(expected_element_count, "expected_element_count")
    if expected_element_count == 0:
        return 1
    bits_per_element = capacity_bits / expected_element_count
    return max(1, math.floor(bits_per_element * math.log(2)))


def false_positive_rate(capacity_bits: int, hash_count: int, inserted: int) -> float:
    """Expected false-positive probability after ``inserted`` insertions."""
    validate_positive_int(capacity_bits, "capacity_bits")
    validate_positive_int(hash_count, "hash_count")
    validate_non_negative_int(inserted, "inserted")
    if inserted == 0:
        return 0.0
    # log1p keeps (1 - 1/m) ** (k*n) accurate for large m
    unset = math.exp(hash_count * inserted * math.log1p(-1.0 / capacity_bits))
    return (1.0 - unset) ** hash_count


def error_rate_curve(
    capacity_bits: int,
    bits_per_element: Sequence[float],
    inserted: Sequence[int] | np.ndarray,
) -> np.ndarray:
    """Theoretical error rate for several design loads over insertion counts.

    Each column uses ``n_expected = capacity_bits / bits_per_element`` and the
    unrounded optimum ``k = bits_per_element * ln 2``, so the curves show the
    analytical trade-off rather than a particular rounding rule.

    Args:
        capacity_bits: Filter size m
        bits_per_element: Design ratios m / n_expected, one per column
        inserted: Actual insertion counts, one per row

    Returns:
        Array of shape ``(len(inserted), len(bits_per_element))``
    """
    validate_positive_int(capacity_bits, "capacity_bits")
    ratios = np.asarray(bits_per_element, dtype=np.float64)
    if ratios.ndim != 1 or np.any(ratios <= 0):
        raise ValueError("bits_per_element must be a 1-D sequence of positive numbers")
    counts = np.asarray(inserted, dtype=np.float64)
    if counts.ndim != 1 or np.any(counts < 0):
        raise ValueError("inserted must be a 1-D sequence of non-negative counts")

    k = ratios * math.log(2)
    exponent = np.outer(counts, k) * math.log1p(-1.0 / capacity_bits)
    return (1.0 - np.exp(exponent)) ** k


def estimate_cardinality(capacity_bits: int, hash_count: int, set_bits: int) -> float:
    """Approximate number of distinct elements given the set-bit count.

    Returns ``inf`` when every bit is set, since the estimate diverges.
    """
    validate_positive_int(capacity_bits, "capacity_bits")
    validate_positive_int(hash_count, "hash_count")
    validate_non_negative_int(set_bits, "set_bits", max_val=capacity_bits)
    if set_bits == capacity_bits:
        return math.inf
    return -(capacity_bits / hash_count) * math.log1p(-set_bits / capacity_bits)
