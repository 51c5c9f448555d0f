from itertools import islice
from typing import Any, Iterator
import numbers
import random
import struct

from xxhash import xxh3_64_intdigest

from .models import ProbeStrategy

UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF


def stable_hash(item: Any) -> int:
    """
    Deterministic 64-bit hash used when no hash_func is supplied.

    Built-in hash() of str and bytes is salted per process (PYTHONHASHSEED),
    so those go through xxh3 instead. Numbers are mixed from their built-in
    hash, which is unsalted and agrees for equal values (1 == 1.0 == True).
    Everything else falls back to the object's own __hash__.
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return xxh3_64_intdigest(bytes(item))
    if isinstance(item, str):
        return xxh3_64_intdigest(item.encode("utf-8"))
    if isinstance(item, numbers.Number):
        return xxh3_64_intdigest(hash(item).to_bytes(8, "little", signed=True))
    return hash(item)


class _SeededSequence:
    """Endless stream of positions in [0, modulus) derived from one seed."""

    def __init__(self, seed: int, modulus: int) -> None:
        if modulus <= 0:
            raise ValueError(f"modulus must be positive, got {modulus}")
        self._seed = seed & UINT64_MASK
        self._modulus = modulus

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        raise NotImplementedError


class Xxh3Sequence(_SeededSequence):
    """
    Counter-mode generator: draw i is xxh3_64(seed || i).

    Output depends only on the seed and the xxh3 algorithm, so it is
    identical across processes, interpreter versions and platforms.
    """

    def __init__(self, seed: int, modulus: int) -> None:
        super().__init__(seed, modulus)
        self._counter = 0

    def __next__(self) -> int:
        block = struct.pack("<QQ", self._seed, self._counter)
        self._counter += 1
        return xxh3_64_intdigest(block) % self._modulus


class MersenneTwisterSequence(_SeededSequence):
    """Draws from random.Random seeded with the element hash."""

    def __init__(self, seed: int, modulus: int) -> None:
        super().__init__(seed, modulus)
        self._rng = random.Random(self._seed)

    def __next__(self) -> int:
        return self._rng.randrange(self._modulus)


class DoubleHashingSequence(_SeededSequence):
    """
    Kirsch-Mitzenmacher double hashing over the two 32-bit halves of the seed.

    Position i is (h1 + i * h2) mod m, with h1 the low half and h2 the high
    half forced odd so consecutive probes never repeat for even m.
    """

    def __init__(self, seed: int, modulus: int) -> None:
        super().__init__(seed, modulus)
        self._h1 = self._seed & 0xFFFF_FFFF
        self._h2 = (self._seed >> 32) | 1
        self._index = 0

    def __next__(self) -> int:
        position = (self._h1 + self._index * self._h2) % self._modulus
        self._index += 1
        return position


_SEQUENCES: dict[ProbeStrategy, type[_SeededSequence]] = {
    ProbeStrategy.XXH3: Xxh3Sequence,
    ProbeStrategy.MERSENNE_TWISTER: MersenneTwisterSequence,
    ProbeStrategy.DOUBLE_HASHING: DoubleHashingSequence,
}


def probe_positions(
    seed: int,
    hash_count: int,
    bit_count: int,
    strategy: ProbeStrategy = ProbeStrategy.XXH3,
) -> Iterator[int]:
    """
    Lazily yield the hash_count bit positions for an element hash.

    Insert and lookup must both go through here: the same seed, count and
    strategy always produce the same positions in the same order. Lazy so
    lookup can stop at the first clear bit.
    """
    if hash_count < 0:
        raise ValueError(f"hash_count must be non-negative, got {hash_count}")

    sequence = _SEQUENCES[ProbeStrategy(strategy)](seed, bit_count)
    return islice(sequence, hash_count)
