"""Bloom filter with double hashing and checked set algebra.

One 128-bit hash per element yields two 64-bit halves ``h1`` and ``h2``;
the k bit positions are ``(h1 + i * h2) mod capacity_bits`` for
``i = 0 .. k-1``. This simulates k independent hash functions at the cost of
a single hash computation.

Thread safety: concurrent ``contains`` calls are safe. ``add``,
``union_with`` and ``intersect_with`` mutate the bit vector in place and need
external locking when mixed with any other call on the same instance.
"""

from __future__ import annotations

import logging

from bloomkit.core.config import Settings, get_settings
from bloomkit.core.protocols import HashEngine
from bloomkit.core.validation import (
    IncompatibleFilterError,
    ValidationError,
    validate_non_negative_int,
    validate_positive_int,
)
from bloomkit.filters import analysis
from bloomkit.filters.bitvector import BitVector
from bloomkit.filters.hashing import get_hash_engine, probe_positions

logger = logging.getLogger(__name__)


def engine_from_settings(settings: Settings | None = None) -> HashEngine:
    """Hash engine configured by ``hash_engine`` / ``hash_seed``."""
    settings = settings or get_settings()
    if settings.hash_engine == "murmur3":
        return get_hash_engine("murmur3", seed=settings.hash_seed)
    return get_hash_engine(settings.hash_engine)


class BloomFilter:
    """Fixed-capacity probabilistic set over byte strings.

    ``contains`` never returns False for an element that was added; it may
    return True for one that was not. Capacity, hash count and hash engine
    are fixed at construction.
    """

    __slots__ = ("_capacity_bits", "_hash_count", "_engine", "_bits")

    def __init__(
        self,
        capacity_bits: int,
        expected_element_count: int = 0,
        hash_count: int | None = None,
        hash_engine: HashEngine | None = None,
    ) -> None:
        """
        Args:
            capacity_bits: Length of the bit vector (N)
            expected_element_count: Design load used to derive the hash count
            hash_count: Explicit hash count; overrides the derived value
            hash_engine: 128-bit hash provider (configured default when None)

        Raises:
            ValidationError: If any parameter is out of range
        """
        validate_positive_int(capacity_bits, "capacity_bits")
        validate_non_negative_int(expected_element_count, "expected_element_count")
        if hash_count is None:
            hash_count = analysis.optimal_hash_count(capacity_bits, expected_element_count)
        else:
            validate_positive_int(hash_count, "hash_count")
        if hash_engine is not None and not isinstance(hash_engine, HashEngine):
            raise ValidationError(
                "hash_engine",
                f"Expected a HashEngine, got {type(hash_engine).__name__}",
                hash_engine,
            )

        self._capacity_bits = capacity_bits
        self._hash_count = hash_count
        self._engine = hash_engine if hash_engine is not None else engine_from_settings()
        self._bits = BitVector(capacity_bits)

        logger.debug(
            "BloomFilter created: capacity_bits=%d hash_count=%d engine=%s",
            capacity_bits, hash_count, self._engine.name,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> BloomFilter:
        """Build a filter from configured defaults; keyword overrides win."""
        settings = settings or get_settings()
        params = {
            "capacity_bits": settings.default_capacity_bits,
            "expected_element_count": settings.default_expected_elements,
            "hash_engine": engine_from_settings(settings),
        }
        params.update(overrides)
        return cls(**params)

    @staticmethod
    def get_optimal_hash_count(capacity_bits: int, expected_element_count: int) -> int:
        """See :func:`bloomkit.filters.analysis.optimal_hash_count`."""
        return analysis.optimal_hash_count(capacity_bits, expected_element_count)

    # --- accessors ---

    @property
    def capacity_bits(self) -> int:
        return self._capacity_bits

    @property
    def hash_count(self) -> int:
        return self._hash_count

    def get_hash_count(self) -> int:
        return self._hash_count

    @property
    def hash_engine(self) -> HashEngine:
        return self._engine

    @property
    def bits(self) -> BitVector:
        """Copy of the bit vector; mutating it does not affect the filter."""
        return self._bits.copy()

    # --- membership ---

    def _positions(self, data: bytes) -> list[int]:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes-like element, got {type(data).__name__}")
        return probe_positions(self._engine, bytes(data), self._hash_count, self._capacity_bits)

    def add(self, data: bytes) -> None:
        """Add a byte string. Any length, including empty, is accepted."""
        self._bits.set_many(self._positions(data))

    def contains(self, data: bytes) -> bool:
        """True if ``data`` is possibly present, False if definitely absent."""
        return self._bits.test_all(self._positions(data))

    def __contains__(self, data: bytes) -> bool:
        return self.contains(data)

    # --- set algebra ---

    def _check_compatible(self, other: BloomFilter) -> None:
        if not isinstance(other, BloomFilter):
            raise TypeError(f"Expected BloomFilter, got {type(other).__name__}")
        for attribute, left, right in (
            ("capacity_bits", self._capacity_bits, other._capacity_bits),
            ("hash_count", self._hash_count, other._hash_count),
            ("hash_engine", self._engine, other._engine),
        ):
            if left != right:
                logger.warning(
                    "Rejected merge: %s differs (%r != %r)", attribute, left, right,
                )
                raise IncompatibleFilterError(attribute, left, right)

    def union_with(self, other: BloomFilter) -> None:
        """OR ``other`` into this filter; ``other`` is not modified.

        Raises:
            IncompatibleFilterError: If capacity, hash count or engine differ
        """
        self._check_compatible(other)
        self._bits.union_in_place(other._bits)

    def intersect_with(self, other: BloomFilter) -> None:
        """AND ``other`` into this filter; ``other`` is not modified.

        The result approximates the true intersection and can report
        elements present in neither input.

        Raises:
            IncompatibleFilterError: If capacity, hash count or engine differ
        """
        self._check_compatible(other)
        self._bits.intersect_in_place(other._bits)

    def __or__(self, other: BloomFilter) -> BloomFilter:
        result = self.copy()
        result.union_with(other)
        return result

    def __and__(self, other: BloomFilter) -> BloomFilter:
        result = self.copy()
        result.intersect_with(other)
        return result

    def __ior__(self, other: BloomFilter) -> BloomFilter:
        self.union_with(other)
        return self

    def __iand__(self, other: BloomFilter) -> BloomFilter:
        self.intersect_with(other)
        return self

    # --- statistics ---

    def set_bit_count(self) -> int:
        return self._bits.count()

    def fill_ratio(self) -> float:
        """Fraction of bits set."""
        return self._bits.count() / self._capacity_bits

    def estimated_false_positive_rate(self) -> float:
        """Current false-positive probability estimated from the fill ratio."""
        return self.fill_ratio() ** self._hash_count

    def approximate_element_count(self) -> float:
        """Distinct elements implied by the set bits (``inf`` when saturated)."""
        return analysis.estimate_cardinality(
            self._capacity_bits, self._hash_count, self._bits.count(),
        )

    # --- copying / comparison ---

    def copy(self) -> BloomFilter:
        """Independent deep copy."""
        clone = BloomFilter.__new__(BloomFilter)
        clone._capacity_bits = self._capacity_bits
        clone._hash_count = self._hash_count
        clone._engine = self._engine
        clone._bits = self._bits.copy()
        return clone

    def __copy__(self) -> BloomFilter:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> BloomFilter:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (
            self._capacity_bits == other._capacity_bits
            and self._hash_count == other._hash_count
            and self._engine == other._engine
            and self._bits == other._bits
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"BloomFilter(capacity_bits={self._capacity_bits}, "
            f"hash_count={self._hash_count}, engine={self._engine.name!r})"
        )
