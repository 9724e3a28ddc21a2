"""Fixed-length bit vector backed by a packed numpy byte buffer."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np


class BitVector:
    """Fixed-length array of bits with in-place set algebra.

    Bit ``i`` lives in byte ``i >> 3`` at position ``i & 7`` (little bit
    order). Padding bits past ``length`` are never set, so population counts
    and equality can work on whole bytes.
    """

    __slots__ = ("_length", "_bytes")

    def __init__(self, length: int) -> None:
        if length < 1:
            raise ValueError(f"length must be positive, got {length}")
        self._length = length
        self._bytes: np.ndarray = np.zeros((length + 7) // 8, dtype=np.uint8)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._length:
            raise IndexError(f"bit index {index} out of range [0, {self._length})")

    def _check_same_length(self, other: BitVector) -> None:
        if not isinstance(other, BitVector):
            raise TypeError(f"Expected BitVector, got {type(other).__name__}")
        if other._length != self._length:
            raise ValueError(
                f"BitVector length mismatch: {self._length} != {other._length}"
            )

    def set(self, index: int) -> None:
        """Mark bit ``index``. Idempotent."""
        self._check_index(index)
        self._bytes[index >> 3] |= np.uint8(1 << (index & 7))

    def test(self, index: int) -> bool:
        """Return whether bit ``index`` is set."""
        self._check_index(index)
        return bool(self._bytes[index >> 3] & (1 << (index & 7)))

    def set_many(self, indices: Iterable[int]) -> None:
        """Mark every bit in ``indices``."""
        for index in indices:
            self.set(index)

    def test_all(self, indices: Iterable[int]) -> bool:
        """Return True if every bit in ``indices`` is set (stops at the first unset)."""
        for index in indices:
            if not self.test(index):
                return False
        return True

    def union_in_place(self, other: BitVector) -> None:
        """Bitwise OR ``other`` into this vector."""
        self._check_same_length(other)
        np.bitwise_or(self._bytes, other._bytes, out=self._bytes)

    def intersect_in_place(self, other: BitVector) -> None:
        """Bitwise AND ``other`` into this vector."""
        self._check_same_length(other)
        np.bitwise_and(self._bytes, other._bytes, out=self._bytes)

    def count(self) -> int:
        """Number of set bits."""
        return int(np.unpackbits(self._bytes).sum())

    def copy(self) -> BitVector:
        """Return an independent duplicate."""
        clone = BitVector.__new__(BitVector)
        clone._length = self._length
        clone._bytes = self._bytes.copy()
        return clone

    def to_bytes(self) -> bytes:
        """Snapshot of the packed buffer (little bit order)."""
        return self._bytes.tobytes()

    def __copy__(self) -> BitVector:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> BitVector:
        return self.copy()

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> bool:
        return self.test(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._length == other._length and np.array_equal(self._bytes, other._bytes)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"BitVector(length={self._length}, set_bits={self.count()})"
