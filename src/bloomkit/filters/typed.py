"""Typed convenience wrapper around :class:`BloomFilter`.

Fixed-size values (integers, floats, booleans) are serialized with an
explicit ``struct`` format and byte order before hashing, so equal values map
to equal bytes and results do not depend on the host's memory layout unless
``native`` order is requested.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from bloomkit.core.config import Settings, get_settings
from bloomkit.core.protocols import HashEngine
from bloomkit.core.validation import IncompatibleFilterError, ValidationError, validate_choice
from bloomkit.filters.bloom import BloomFilter

logger = logging.getLogger(__name__)

T = TypeVar("T", int, float, bool)

BYTE_ORDER_PREFIXES = {"little": "<", "big": ">", "native": "="}

# name -> (struct code, python type)
CODEC_FORMATS: dict[str, tuple[str, type]] = {
    "int8": ("b", int),
    "uint8": ("B", int),
    "int16": ("h", int),
    "uint16": ("H", int),
    "int32": ("i", int),
    "uint32": ("I", int),
    "int64": ("q", int),
    "uint64": ("Q", int),
    "float32": ("f", float),
    "float64": ("d", float),
    "bool": ("?", bool),
}


@dataclass(frozen=True)
class ValueCodec:
    """Serializes one fixed-size value type to bytes.

    Floats encode their IEEE-754 bit pattern, so ``0.0`` and ``-0.0`` are
    distinct elements and NaN payloads are preserved. Integers passed to a
    float codec are converted first (``28`` and ``28.0`` encode alike).
    """

    type_name: str
    byte_order: str = "little"
    _struct: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        type_name = validate_choice(self.type_name, CODEC_FORMATS, "type_name")
        byte_order = validate_choice(self.byte_order, BYTE_ORDER_PREFIXES, "byte_order")
        code, _ = CODEC_FORMATS[type_name]
        object.__setattr__(self, "type_name", type_name)
        object.__setattr__(self, "byte_order", byte_order)
        object.__setattr__(self, "_struct", struct.Struct(BYTE_ORDER_PREFIXES[byte_order] + code))

    @property
    def size(self) -> int:
        """Encoded width in bytes."""
        return self._struct.size

    @property
    def python_type(self) -> type:
        return CODEC_FORMATS[self.type_name][1]

    def encode(self, value: int | float | bool) -> bytes:
        """Encode ``value``.

        Raises:
            ValidationError: If the value has the wrong type or does not fit
        """
        expected = self.python_type
        if expected is bool:
            if not isinstance(value, bool):
                raise ValidationError(
                    self.type_name, f"Expected bool, got {type(value).__name__}", value,
                )
        elif expected is int:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(
                    self.type_name, f"Expected int, got {type(value).__name__}", value,
                )
        elif not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValidationError(
                self.type_name, f"Expected float, got {type(value).__name__}", value,
            )

        try:
            return self._struct.pack(value)
        except (struct.error, OverflowError) as e:
            raise ValidationError(self.type_name, f"Value does not fit: {e}", value) from e

    def decode(self, data: bytes) -> int | float | bool:
        """Inverse of :meth:`encode`."""
        (value,) = self._struct.unpack(data)
        return value

    @classmethod
    def for_value(cls, value: int | float | bool, byte_order: str = "little") -> ValueCodec:
        """Pick the widest codec for a sample value's Python type."""
        if isinstance(value, bool):
            return cls("bool", byte_order)
        if isinstance(value, int):
            return cls("int64", byte_order)
        if isinstance(value, float):
            return cls("float64", byte_order)
        raise ValidationError("value", f"No codec for {type(value).__name__}", value)


class TypedBloomFilter(Generic[T]):
    """Bloom filter over fixed-size values of a single type.

    Holds a byte-oriented :class:`BloomFilter` and encodes values with a
    :class:`ValueCodec` before delegating.

    Example:
        >>> prices = TypedBloomFilter("float64", capacity_bits=1000, expected_element_count=100)
        >>> prices.add(28)
        >>> 28.0 in prices
        True
    """

    def __init__(
        self,
        codec: ValueCodec | str,
        capacity_bits: int,
        expected_element_count: int = 0,
        hash_count: int | None = None,
        hash_engine: HashEngine | None = None,
        byte_order: str | None = None,
    ) -> None:
        """
        Args:
            codec: Codec instance or codec type name (``int64``, ``float64``, ...)
            capacity_bits: Length of the bit vector
            expected_element_count: Design load used to derive the hash count
            hash_count: Explicit hash count override
            hash_engine: 128-bit hash provider (configured default when None)
            byte_order: Byte order when ``codec`` is a name (configured default when None)
        """
        if isinstance(codec, str):
            codec = ValueCodec(codec, byte_order or get_settings().byte_order)
        elif byte_order is not None and byte_order.lower() != codec.byte_order:
            raise ValidationError(
                "byte_order",
                f"Conflicts with codec byte order {codec.byte_order!r}",
                byte_order,
            )
        self._codec = codec
        self._filter = BloomFilter(
            capacity_bits,
            expected_element_count=expected_element_count,
            hash_count=hash_count,
            hash_engine=hash_engine,
        )

    @classmethod
    def from_settings(
        cls, codec: ValueCodec | str, settings: Settings | None = None, **overrides,
    ) -> TypedBloomFilter:
        """Typed counterpart of :meth:`BloomFilter.from_settings`."""
        settings = settings or get_settings()
        if isinstance(codec, str):
            codec = ValueCodec(codec, settings.byte_order)
        typed = cls.__new__(cls)
        typed._codec = codec
        typed._filter = BloomFilter.from_settings(settings, **overrides)
        return typed

    @property
    def codec(self) -> ValueCodec:
        return self._codec

    @property
    def filter(self) -> BloomFilter:
        """The wrapped byte-level filter."""
        return self._filter

    @property
    def capacity_bits(self) -> int:
        return self._filter.capacity_bits

    @property
    def hash_count(self) -> int:
        return self._filter.hash_count

    def get_hash_count(self) -> int:
        return self._filter.hash_count

    def add(self, value: T) -> None:
        self._filter.add(self._codec.encode(value))

    def contains(self, value: T) -> bool:
        return self._filter.contains(self._codec.encode(value))

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def _check_codec(self, other: TypedBloomFilter) -> None:
        if not isinstance(other, TypedBloomFilter):
            raise TypeError(f"Expected TypedBloomFilter, got {type(other).__name__}")
        if self._codec != other._codec:
            logger.warning(
                "Rejected merge: codec differs (%r != %r)", self._codec, other._codec,
            )
            raise IncompatibleFilterError("codec", self._codec, other._codec)

    def union_with(self, other: TypedBloomFilter) -> None:
        """Raises IncompatibleFilterError on codec or filter parameter mismatch."""
        self._check_codec(other)
        self._filter.union_with(other._filter)

    def intersect_with(self, other: TypedBloomFilter) -> None:
        """Raises IncompatibleFilterError on codec or filter parameter mismatch."""
        self._check_codec(other)
        self._filter.intersect_with(other._filter)

    def copy(self) -> TypedBloomFilter:
        clone = self.__class__.__new__(self.__class__)
        clone._codec = self._codec
        clone._filter = self._filter.copy()
        return clone

    def __copy__(self) -> TypedBloomFilter:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> TypedBloomFilter:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedBloomFilter):
            return NotImplemented
        return self._codec == other._codec and self._filter == other._filter

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"TypedBloomFilter(codec={self._codec.type_name!r}, "
            f"capacity_bits={self.capacity_bits}, hash_count={self.hash_count})"
        )
