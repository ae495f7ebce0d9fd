"""
Tests for the block-update sieve.

The block scheme must produce exactly the multipliers the per-cell division
sieve computes: every multiple of p touched once, with find_exponent + 1.
"""

import numpy as np
import pytest

from divisor_pairs.arith import divisor_count, find_exponent
from divisor_pairs.block_sieve import (
    apply_block_multiplier,
    block_divisor_counts,
    exponent_blocks,
    exponent_sequence,
)
from divisor_pairs.sieve_division import division_divisor_counts
from divisor_pairs.validation import verify_divisor_counts

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 31, 97]


class TestExponentSequence:
    """The concatenation recurrence."""

    def test_prime_two(self):
        """eps(2): 1, 12, 1213, 12131214."""
        assert exponent_sequence(2, 1) == [1]
        assert exponent_sequence(2, 2) == [1, 2]
        assert exponent_sequence(2, 3) == [1, 2, 1, 3]
        assert exponent_sequence(2, 4) == [1, 2, 1, 3, 1, 2, 1, 4]

    def test_prime_three(self):
        """eps(3, 3) = 112112113."""
        assert exponent_sequence(3, 3) == [1, 1, 2, 1, 1, 2, 1, 1, 3]

    @pytest.mark.parametrize("p,levels", [(2, 10), (3, 6), (5, 4), (7, 3)])
    def test_matches_find_exponent(self, p, levels):
        """Entry m-1 is the exponent of p in m*p."""
        sequence = exponent_sequence(p, levels)
        assert len(sequence) == p ** (levels - 1)
        for m, exponent in enumerate(sequence, start=1):
            assert exponent == find_exponent(m * p, p), \
                f"exponent of {p} in {m * p} should be {find_exponent(m * p, p)}"

    @pytest.mark.parametrize("p", [2, 3, 5])
    def test_only_last_entry_gains_a_level(self, p):
        """The last copy repeats the previous level except its final entry."""
        previous = exponent_sequence(p, 3)
        current = exponent_sequence(p, 4)
        last_copy = current[-len(previous):]
        assert last_copy[:-1] == previous[:-1]
        assert last_copy[-1] == previous[-1] + 1 == 4
        assert current[:len(previous)] == previous

    def test_rejects_zero_levels(self):
        """At least one level is required."""
        with pytest.raises(ValueError):
            exponent_sequence(2, 0)


class TestExponentBlocks:
    """Block decomposition for a single prime."""

    def test_prime_two_limit_eight(self):
        """Blocks for p = 2 over [0, 8], level by level."""
        blocks = list(exponent_blocks(2, 8))
        assert blocks == [
            (2, 4, 2, 2), (6, 8, 2, 2),   # 2, 6: exponent 1
            (4, 8, 4, 3),                 # 4: exponent 2
            (8, 9, 8, 4),                 # 8: exponent 3, clamped to limit + 1
        ]

    def test_large_prime_single_block(self):
        """A prime above sqrt(limit) has one level and one block."""
        assert list(exponent_blocks(11, 50)) == [(11, 51, 11, 2)]

    @pytest.mark.parametrize("p", SMALL_PRIMES)
    @pytest.mark.parametrize("limit", [97, 128, 243, 1000, 3125])
    def test_each_multiple_touched_once_with_right_multiplier(self, p, limit):
        """Blocks cover every multiple of p exactly once with exponent + 1."""
        touched = np.zeros(limit + 1, dtype=int)
        multipliers = np.ones(limit + 1, dtype=int)

        for start, end, stride, multiplier in exponent_blocks(p, limit):
            assert end <= limit + 1
            touched[start:end:stride] += 1
            multipliers[start:end:stride] = multiplier

        for i in range(limit + 1):
            if i > 0 and i % p == 0:
                assert touched[i] == 1, f"p={p}: index {i} touched {touched[i]} times"
                assert multipliers[i] == find_exponent(i, p) + 1, \
                    f"p={p}: wrong multiplier at {i}"
            else:
                assert touched[i] == 0, f"p={p}: index {i} is not a multiple"

    def test_top_level_at_exact_power(self):
        """limit = p^L still gets level L (no float log truncation)."""
        blocks = list(exponent_blocks(3, 243))
        assert (243, 244, 243, 6) in blocks


class TestApplyBlockMultiplier:
    """Strided in-place multiplication."""

    def test_strided_update(self):
        """Only cells on the stride inside [start, end) change."""
        factors = np.ones(10, dtype=np.int64)
        apply_block_multiplier(factors, 2, 8, 3, 5)
        assert list(factors) == [1, 1, 5, 1, 1, 5, 1, 1, 1, 1]

    def test_end_is_clamped(self):
        """An end past the array is clamped, not an error."""
        factors = np.ones(6, dtype=np.int64)
        apply_block_multiplier(factors, 4, 100, 1, 2)
        assert list(factors) == [1, 1, 1, 1, 2, 2]

    def test_updates_accumulate(self):
        """Multipliers from different primes compose by product."""
        factors = np.ones(13, dtype=np.int64)
        apply_block_multiplier(factors, 12, 13, 1, 3)  # 2^2
        apply_block_multiplier(factors, 12, 13, 1, 2)  # 3^1
        assert factors[12] == 6


class TestDivisorArrays:
    """Full divisor-count arrays."""

    def test_against_trial_division(self):
        """Both sieves equal trial division for n in [1, 10000]."""
        mismatches = verify_divisor_counts(10000)
        assert mismatches.empty, f"Mismatches:\n{mismatches.head()}"

    def test_block_equals_division(self):
        """The two sieves give identical arrays."""
        assert np.array_equal(block_divisor_counts(50000), division_divisor_counts(50000))

    def test_layout(self):
        """Length N+1, int64, sentinel 1 at index 0, d(1) = 1."""
        factors = block_divisor_counts(30)
        assert len(factors) == 31
        assert factors.dtype == np.int64
        assert factors[0] == 1
        assert factors[1] == 1
        assert list(factors[1:13]) == [divisor_count(n) for n in range(1, 13)]

    def test_prime_power_boundaries(self):
        """Exact prime powers at the very end of the array."""
        for N in [64, 81, 125, 243, 343, 1024, 2187]:
            factors = block_divisor_counts(N)
            assert factors[N] == divisor_count(N), f"d({N}) wrong at the array end"

    def test_empty_bound(self):
        """N = 0 gives just the sentinel."""
        assert list(block_divisor_counts(0)) == [1]
        assert list(division_divisor_counts(0)) == [1]
