"""Tests for the hash count and sizing formulas."""

import math

import pytest
from seedbloom.filter import (
    HashCountMode,
    expected_false_positive_rate,
    optimal_bit_count,
    optimal_hash_count,
)

LEGACY = HashCountMode.LEGACY_INTEGER_DIVISION
STRICT = HashCountMode.STRICT_REAL_DIVISION


class TestOptimalHashCount:
    """Tests for deriving k from m and n."""

    @pytest.mark.parametrize(
        "bit_count,expected_set_size,mode,expected",
        [
            (20, 10, LEGACY, 2),
            (100, 10, LEGACY, 7),
            (15, 10, LEGACY, 1),
            (15, 10, STRICT, 2),
            (5, 10, LEGACY, 0),
            (5, 10, STRICT, 1),
            (10, 10, LEGACY, 1),
            (10, 10, STRICT, 1),
            (1000, 100, STRICT, 7),
        ],
    )
    def test_known_values(self, bit_count, expected_set_size, mode, expected):
        """Exact k for concrete (m, n) pairs in both modes."""
        assert optimal_hash_count(bit_count, expected_set_size, mode) == expected

    def test_default_mode_is_legacy(self):
        """Without a mode the integer-division formula applies."""
        assert optimal_hash_count(15, 10) == 1

    def test_mode_accepts_string_value(self):
        """Modes may be given by their string value."""
        assert optimal_hash_count(15, 10, "strict-real-division") == 2

    def test_zero_expected_set_size(self):
        """Division by zero is rejected up front."""
        with pytest.raises(ValueError, match="expected_set_size must be positive"):
            optimal_hash_count(10, 0)

    @pytest.mark.parametrize("bit_count", [0, -10])
    def test_non_positive_bit_count(self, bit_count):
        """A non-positive bit count is rejected instead of yielding k <= 0."""
        with pytest.raises(ValueError, match="bit_count must be positive"):
            optimal_hash_count(bit_count, 3)


class TestOptimalBitCount:
    """Tests for sizing m from n and a target false positive rate."""

    def test_one_percent(self):
        """1% at 1000 elements needs about 9.6 bits per element."""
        assert optimal_bit_count(1000, 0.01) == 9586

    def test_rounds_up(self):
        """The result is never below the real-valued optimum."""
        n, p = 37, 0.003
        exact = -n * math.log(p) / math.log(2) ** 2

        assert exact <= optimal_bit_count(n, p) < exact + 1

    def test_invalid_arguments(self):
        """Non-positive n and out of range p are rejected."""
        with pytest.raises(ValueError, match="expected_set_size must be positive"):
            optimal_bit_count(0, 0.01)
        with pytest.raises(ValueError, match="false_positive_rate must be in"):
            optimal_bit_count(10, 0.0)


class TestExpectedFalsePositiveRate:
    """Tests for the theoretical false positive rate."""

    def test_matches_formula(self):
        """(1 - e^(-kn/m))^k for a concrete filter."""
        expected = (1 - math.exp(-7 * 100 / 1000)) ** 7

        assert expected_false_positive_rate(1000, 100, 7) == pytest.approx(expected)

    def test_zero_probes_is_certain(self):
        """A filter with no probes reports everything present."""
        assert expected_false_positive_rate(5, 10, 0) == 1.0

    def test_invalid_bit_count(self):
        """bit_count must be positive."""
        with pytest.raises(ValueError, match="bit_count must be positive"):
            expected_false_positive_rate(0, 10, 3)
