from typing import Any, Callable, Generic, Iterable, TypeVar
import logging

from bitarray import bitarray

from .models import FilterConfig, ProbeStrategy
from .ProbeSequence import probe_positions, stable_hash
from .sizing import HashCountMode, optimal_bit_count

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BloomFilter(Generic[T]):
    """
    Probabilistic data structure for membership testing.

    False positives are possible, false negatives are not. Each element is
    hashed once to a seed integer, and a seeded generator expands that seed
    into hash_count bit positions. Insert sets those bits; lookup checks them.

    The bit count and expected set size are fixed at construction and bits
    are never cleared. Not thread-safe: callers must serialize access.

    Example:
        bloom = BloomFilter(bit_count=1000, expected_set_size=100)
        bloom.add("user:1")
        if "user:1" in bloom:
            # Might have been added
        else:
            # Definitely never added

    Degenerate sizing:
        With the default LEGACY_INTEGER_DIVISION mode, bit_count <
        expected_set_size gives hash_count == 0. add() is then a no-op and
        lookup() always returns True. Use STRICT_REAL_DIVISION to avoid it.
    """

    def __init__(
        self,
        bit_count: int,
        expected_set_size: int,
        *,
        hash_count_mode: HashCountMode = FilterConfig.DEFAULT_HASH_COUNT_MODE,
        probe_strategy: ProbeStrategy = FilterConfig.DEFAULT_PROBE_STRATEGY,
        hash_func: Callable[[T], int] | None = None,
    ) -> None:
        self._config = FilterConfig(
            bit_count=bit_count,
            expected_set_size=expected_set_size,
            hash_count_mode=hash_count_mode,
            probe_strategy=probe_strategy,
        )
        self._hash_func: Callable[[T], int] = hash_func or stable_hash
        self._hash_count = self._config.hash_count
        self._bits = bitarray(bit_count)
        self._bits.setall(0)

        logger.debug(
            "Created bloom filter: m=%d n=%d k=%d mode=%s strategy=%s",
            bit_count,
            expected_set_size,
            self._hash_count,
            self._config.hash_count_mode.value,
            self._config.probe_strategy.value,
        )
        if self._config.is_degenerate:
            logger.warning(
                "expected_set_size (%d) exceeds bit_count (%d)",
                expected_set_size,
                bit_count,
            )
        if self._hash_count == 0:
            logger.warning(
                "hash_count is 0: add() is a no-op and lookup() always returns True"
            )

    @classmethod
    def from_config(
        cls, config: FilterConfig, hash_func: Callable[[T], int] | None = None
    ) -> "BloomFilter[T]":
        return cls(
            config.bit_count,
            config.expected_set_size,
            hash_count_mode=config.hash_count_mode,
            probe_strategy=config.probe_strategy,
            hash_func=hash_func,
        )

    @classmethod
    def for_false_positive_rate(
        cls, expected_set_size: int, false_positive_rate: float, **kwargs: Any
    ) -> "BloomFilter[T]":
        """
        Create a filter sized to hit a target false positive rate.

        Args:
            expected_set_size: Number of distinct elements to be inserted
            false_positive_rate: Desired false positive rate, in (0, 1)
            **kwargs: Forwarded to the constructor (mode, strategy, hash_func)
        """
        bit_count = optimal_bit_count(expected_set_size, false_positive_rate)
        return cls(bit_count, expected_set_size, **kwargs)

    @classmethod
    def from_items(
        cls,
        items: Iterable[T],
        bit_count: int,
        expected_set_size: int,
        **kwargs: Any,
    ) -> "BloomFilter[T]":
        """Create a filter and insert every item from an iterable."""
        bloom: BloomFilter[T] = cls(bit_count, expected_set_size, **kwargs)
        bloom.update(items)
        return bloom

    @property
    def config(self) -> FilterConfig:
        return self._config

    @property
    def bit_count(self) -> int:
        return self._config.bit_count

    @property
    def expected_set_size(self) -> int:
        return self._config.expected_set_size

    @property
    def hash_count(self) -> int:
        return self._hash_count

    @property
    def bits(self) -> bitarray:
        """Copy of the bit storage; mutating it does not affect the filter."""
        return self._bits.copy()

    @property
    def bits_set(self) -> int:
        return self._bits.count(1)

    @property
    def fill_ratio(self) -> float:
        return self.bits_set / self.bit_count

    def estimated_false_positive_rate(self) -> float:
        """
        Probability that a never-inserted element currently reports True.

        Based on the observed fill ratio rather than the insertion count.
        """
        return self.fill_ratio**self._hash_count

    def add(self, item: T) -> None:
        for position in self._positions(item):
            self._bits[position] = 1

    def update(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def lookup(self, item: T) -> bool:
        """
        Check whether an item is probably in the set.

        Returns False as soon as a probed bit is clear, so a False answer
        is always correct. A True answer may be a false positive.
        """
        for position in self._positions(item):
            if not self._bits[position]:
                return False
        return True

    def __contains__(self, item: T) -> bool:
        return self.lookup(item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        # same bits under different hash functions answer lookups differently
        return (
            self._config == other._config
            and self._hash_func == other._hash_func
            and self._bits == other._bits
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bit_count={self.bit_count}, "
            f"expected_set_size={self.expected_set_size}, "
            f"hash_count={self._hash_count}, bits_set={self.bits_set})"
        )

    def _positions(self, item: T):
        seed = self._hash_func(item)
        return probe_positions(
            seed, self._hash_count, self.bit_count, self._config.probe_strategy
        )
