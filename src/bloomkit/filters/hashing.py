"""128-bit hash engines for Bloom filter double hashing.

Each engine maps a byte buffer to two unsigned 64-bit integers ``(h1, h2)``.
Filters derive their k bit positions from these two values, so only one hash
is computed per element.
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass
from typing import Any, Callable

import mmh3

from bloomkit.core.protocols import HashEngine
from bloomkit.core.validation import ValidationError, validate_non_negative_int

UINT64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class Murmur3HashEngine:
    """MurmurHash3 x64 128-bit, split into its two 64-bit halves."""

    seed: int = 0

    def __post_init__(self) -> None:
        validate_non_negative_int(self.seed, "seed", max_val=0xFFFFFFFF)

    @property
    def name(self) -> str:
        return "murmur3"

    def hash128(self, data: bytes) -> tuple[int, int]:
        h1, h2 = mmh3.hash64(data, seed=self.seed, x64arch=True, signed=False)
        return h1, h2


@dataclass(frozen=True)
class Blake2bHashEngine:
    """BLAKE2b with a 16-byte digest, read as two little-endian uint64."""

    key: bytes = b""

    def __post_init__(self) -> None:
        if len(self.key) > hashlib.blake2b.MAX_KEY_SIZE:
            raise ValidationError(
                "key",
                f"Must be at most {hashlib.blake2b.MAX_KEY_SIZE} bytes, got {len(self.key)}",
            )

    @property
    def name(self) -> str:
        return "blake2b"

    def hash128(self, data: bytes) -> tuple[int, int]:
        digest = hashlib.blake2b(data, digest_size=16, key=self.key).digest()
        h1, h2 = struct.unpack("<QQ", digest)
        return h1, h2


_ENGINES: dict[str, Callable[..., HashEngine]] = {
    "murmur3": Murmur3HashEngine,
    "blake2b": Blake2bHashEngine,
}


def available_hash_engines() -> list[str]:
    """Names accepted by :func:`get_hash_engine`."""
    return sorted(_ENGINES)


def get_hash_engine(name: str, **options: Any) -> HashEngine:
    """Build a hash engine from its registry name.

    Args:
        name: Engine name (``murmur3`` or ``blake2b``)
        **options: Constructor arguments (``seed`` for murmur3, ``key`` for blake2b)

    Raises:
        ValidationError: If the name is unknown
    """
    factory = _ENGINES.get(name.lower())
    if factory is None:
        raise ValidationError(
            "hash_engine",
            f"Unknown hash engine {name!r}, expected one of {available_hash_engines()}",
            name,
        )
    return factory(**options)


def probe_positions(
    engine: HashEngine, data: bytes, hash_count: int, capacity_bits: int,
) -> list[int]:
    """Bit positions for ``data`` by double hashing.

    ``position_i = (h1 + i * h2) mod capacity_bits`` for ``i`` in
    ``range(hash_count)``, with the sum wrapped to 64 bits first so positions
    match a fixed-width unsigned implementation.
    """
    h1, h2 = engine.hash128(data)
    return [((h1 + i * h2) & UINT64_MASK) % capacity_bits for i in range(hash_count)]
