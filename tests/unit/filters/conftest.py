"""Shared fixtures for filter tests."""

from __future__ import annotations

import pytest

from bloomkit.filters.bloom import BloomFilter
from bloomkit.filters.hashing import Blake2bHashEngine, Murmur3HashEngine, probe_positions


@pytest.fixture(params=["murmur3", "blake2b"])
def engine(request):
    if request.param == "murmur3":
        return Murmur3HashEngine()
    return Blake2bHashEngine()


def make_filter(
    capacity_bits: int = 1000,
    expected: int = 100,
    hash_count: int | None = None,
    engine=None,
) -> BloomFilter:
    return BloomFilter(
        capacity_bits,
        expected_element_count=expected,
        hash_count=hash_count,
        hash_engine=engine or Murmur3HashEngine(),
    )


def disjoint_pair(bloom: BloomFilter, limit: int = 1000) -> tuple[bytes, bytes]:
    """Two distinct keys whose bit positions do not overlap in ``bloom``."""
    first = b"key-0"
    first_positions = set(
        probe_positions(bloom.hash_engine, first, bloom.hash_count, bloom.capacity_bits)
    )
    for i in range(1, limit):
        candidate = f"key-{i}".encode()
        positions = probe_positions(
            bloom.hash_engine, candidate, bloom.hash_count, bloom.capacity_bits,
        )
        if first_positions.isdisjoint(positions):
            return first, candidate
    raise AssertionError("no disjoint key pair found")
