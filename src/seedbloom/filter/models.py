from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .sizing import HashCountMode, optimal_hash_count


class ProbeStrategy(Enum):
    """How a single element hash is fanned out into k bit positions."""

    XXH3 = "xxh3"
    MERSENNE_TWISTER = "mersenne-twister"
    DOUBLE_HASHING = "double-hashing"


@dataclass(slots=True, frozen=True)
class FilterConfig:
    """
    Sizing parameters for a BloomFilter.

    Validated on construction: both sizes must be positive ints. A
    bit_count smaller than expected_set_size is accepted, although under
    LEGACY_INTEGER_DIVISION it produces a filter with zero probes.

    Plain strings are accepted for the two enum fields and coerced, so
    FilterConfig(64, 8, probe_strategy="double-hashing") works.
    """

    DEFAULT_HASH_COUNT_MODE: ClassVar[HashCountMode] = (
        HashCountMode.LEGACY_INTEGER_DIVISION
    )
    DEFAULT_PROBE_STRATEGY: ClassVar[ProbeStrategy] = ProbeStrategy.XXH3

    bit_count: int
    expected_set_size: int
    hash_count_mode: HashCountMode = DEFAULT_HASH_COUNT_MODE
    probe_strategy: ProbeStrategy = DEFAULT_PROBE_STRATEGY

    def __post_init__(self) -> None:
        self._check_size("bit_count", self.bit_count)
        self._check_size("expected_set_size", self.expected_set_size)

        # frozen dataclass: go through object.__setattr__ to coerce
        object.__setattr__(
            self, "hash_count_mode", HashCountMode(self.hash_count_mode)
        )
        object.__setattr__(self, "probe_strategy", ProbeStrategy(self.probe_strategy))

    @property
    def hash_count(self) -> int:
        return optimal_hash_count(
            self.bit_count, self.expected_set_size, self.hash_count_mode
        )

    @property
    def is_degenerate(self) -> bool:
        """True when the filter is sized for more elements than it has bits."""
        return self.bit_count < self.expected_set_size

    @staticmethod
    def _check_size(name: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{name} must be an int, got {type(value).__name__}"
            )
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
