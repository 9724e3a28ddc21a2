"""Bloom filter, bit vector, hash engines and sizing helpers."""

from bloomkit.filters.analysis import (
    error_rate_curve,
    estimate_cardinality,
    false_positive_rate,
    optimal_hash_count,
)
from bloomkit.filters.bitvector import BitVector
from bloomkit.filters.bloom import BloomFilter, engine_from_settings
from bloomkit.filters.hashing import (
    Blake2bHashEngine,
    Murmur3HashEngine,
    available_hash_engines,
    get_hash_engine,
    probe_positions,
)
from bloomkit.filters.typed import TypedBloomFilter, ValueCodec

__all__ = [
    "BitVector",
    "BloomFilter",
    "TypedBloomFilter",
    "ValueCodec",
    # Hashing
    "Blake2bHashEngine",
    "Murmur3HashEngine",
    "available_hash_engines",
    "engine_from_settings",
    "get_hash_engine",
    "probe_positions",
    # Analysis
    "error_rate_curve",
    "estimate_cardinality",
    "false_positive_rate",
    "optimal_hash_count",
]
