"""Closed-form Bloom filter sizing formulas."""

import math
from enum import Enum

LN2 = math.log(2.0)


class HashCountMode(Enum):
    """How the probe count k is derived from m and n."""

    # ceil(floor(m / n) * ln 2)
    LEGACY_INTEGER_DIVISION = "legacy-integer-division"
    # ceil((m / n) * ln 2)
    STRICT_REAL_DIVISION = "strict-real-division"


def optimal_hash_count(
    bit_count: int,
    expected_set_size: int,
    mode: HashCountMode = HashCountMode.LEGACY_INTEGER_DIVISION,
) -> int:
    """
    Number of probes k for a filter of m bits holding n elements.

    LEGACY_INTEGER_DIVISION truncates m / n before multiplying by ln 2, so
    any m < n yields k = 0. STRICT_REAL_DIVISION uses the textbook
    ceil((m / n) * ln 2), which is at least 1 for any positive m and n.

    Examples:
        optimal_hash_count(100, 10)  # 7
        optimal_hash_count(15, 10)  # 1
        optimal_hash_count(15, 10, HashCountMode.STRICT_REAL_DIVISION)  # 2
    """
    if bit_count <= 0:
        raise ValueError(f"bit_count must be positive, got {bit_count}")
    if expected_set_size <= 0:
        raise ValueError(
            f"expected_set_size must be positive, got {expected_set_size}"
        )

    if HashCountMode(mode) is HashCountMode.LEGACY_INTEGER_DIVISION:
        ratio: float = bit_count // expected_set_size
    else:
        ratio = bit_count / expected_set_size

    return math.ceil(ratio * LN2)


def optimal_bit_count(expected_set_size: int, false_positive_rate: float) -> int:
    """Bits needed to hold n elements at false positive rate p: -n ln p / (ln 2)^2."""
    if expected_set_size <= 0:
        raise ValueError(
            f"expected_set_size must be positive, got {expected_set_size}"
        )
    if not 0.0 < false_positive_rate < 1.0:
        raise ValueError(
            f"false_positive_rate must be in (0, 1), got {false_positive_rate}"
        )

    return math.ceil(-expected_set_size * math.log(false_positive_rate) / LN2**2)


def expected_false_positive_rate(
    bit_count: int, expected_set_size: int, hash_count: int
) -> float:
    """
    Theoretical false positive rate (1 - e^(-kn/m))^k.

    A filter with zero probes answers True for everything, so k = 0 gives 1.0.
    """
    if bit_count <= 0:
        raise ValueError(f"bit_count must be positive, got {bit_count}")
    if hash_count == 0:
        return 1.0

    return (1.0 - math.exp(-hash_count * expected_set_size / bit_count)) ** hash_count
