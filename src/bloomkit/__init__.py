"""
bloomkit - Fixed-capacity Bloom filters with double hashing.

A Bloom filter answers "possibly present" or "definitely absent" using a
constant-size bit array, trading a tunable false-positive rate for space.
It never reports a false negative.

Quick Start:
    from bloomkit import BloomFilter

    seen = BloomFilter(capacity_bits=10_000, expected_element_count=1_000)
    seen.add(b"user:42")
    b"user:42" in seen   # True
    b"user:43" in seen   # almost certainly False

    # Typed values
    from bloomkit import TypedBloomFilter

    ids = TypedBloomFilter("int64", capacity_bits=10_000, expected_element_count=1_000)
    ids.add(123)
"""

__version__ = "1.0.0"

from bloomkit.core.config import Settings, get_settings
from bloomkit.core.protocols import HashEngine
from bloomkit.core.validation import IncompatibleFilterError, ValidationError
from bloomkit.filters import (
    BitVector,
    Blake2bHashEngine,
    BloomFilter,
    Murmur3HashEngine,
    TypedBloomFilter,
    ValueCodec,
    get_hash_engine,
    optimal_hash_count,
)

__all__ = [
    "__version__",
    # Filters
    "BitVector",
    "BloomFilter",
    "TypedBloomFilter",
    "ValueCodec",
    "optimal_hash_count",
    # Hashing
    "HashEngine",
    "Blake2bHashEngine",
    "Murmur3HashEngine",
    "get_hash_engine",
    # Configuration and errors
    "Settings",
    "get_settings",
    "IncompatibleFilterError",
    "ValidationError",
]
