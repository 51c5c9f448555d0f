"""Seeded-probe Bloom filter for SeedBloom."""

from .BloomFilter import BloomFilter
from .models import FilterConfig, ProbeStrategy
from .ProbeSequence import probe_positions, stable_hash
from .sizing import (
    HashCountMode,
    expected_false_positive_rate,
    optimal_bit_count,
    optimal_hash_count,
)

__all__ = [
    "BloomFilter",
    "FilterConfig",
    "HashCountMode",
    "ProbeStrategy",
    "probe_positions",
    "stable_hash",
    "expected_false_positive_rate",
    "optimal_bit_count",
    "optimal_hash_count",
]
