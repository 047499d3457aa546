"""
Tests for the difference asymmetry function.
"""

from __future__ import annotations

import numpy as np
import pytest

from robust_stats.asymmetry import ASYMMETRY_LEVELS, asymmetry_function
from robust_stats.harrell_davis import hd
from robust_stats.pairwise import pairwise_differences


def test_sums_are_symmetric_quantile_pairs() -> None:
    """Each sum is HD(q) + HD(1 - q) of the pairwise differences."""

    rng = np.random.default_rng(40)
    x = rng.normal(size=20)
    y = rng.exponential(size=25)

    result = asymmetry_function(x, y, nboot=20, seed=0)
    diffs = pairwise_differences(x, y)

    assert len(result.rows) == len(ASYMMETRY_LEVELS)
    for row in result.rows:
        assert row.quantile_low == pytest.approx(hd(diffs, row.q))
        assert row.quantile_high == pytest.approx(hd(diffs, 1.0 - row.q))
        assert row.sum == pytest.approx(row.quantile_low + row.quantile_high)
        assert row.ci_lower <= row.sum <= row.ci_upper
        assert row.adjusted_p_value >= row.p_value


def test_intervals_bracket_sums_across_seeds() -> None:
    """Every interval contains the plotted quantile sum, even with few resamples."""

    rng = np.random.default_rng(44)
    x = rng.standard_t(3, size=12)
    y = rng.chisquare(2, size=10)

    for seed in range(10):
        result = asymmetry_function(x, y, nboot=5, seed=seed)
        for row in result.rows:
            assert row.ci_lower <= row.sum <= row.ci_upper


def test_identical_samples_give_zero_sums() -> None:
    """The same sample in both groups has exactly symmetric differences."""

    rng = np.random.default_rng(41)
    values = rng.chisquare(4, size=30)

    result = asymmetry_function(values, values, nboot=50, seed=3)

    assert np.allclose(result.sums, 0.0, atol=1e-9)
    assert not result.any_significant


def test_identical_distributions_mostly_cover_zero() -> None:
    """Across seeds, most unadjusted intervals contain zero under the null."""

    covered = 0
    total = 0
    for seed in range(5):
        rng = np.random.default_rng(100 + seed)
        x = rng.normal(size=30)
        y = rng.normal(size=30)
        result = asymmetry_function(x, y, nboot=100, seed=seed)
        for row in result.rows:
            total += 1
            covered += int(row.ci_lower <= 0.0 <= row.ci_upper)

    assert covered / total >= 0.7


def test_significance_follows_adjusted_p_values() -> None:
    """Flags mark exactly the levels with adjusted p at or below alpha."""

    rng = np.random.default_rng(42)
    x = rng.normal(size=40)
    y = rng.lognormal(size=40)

    result = asymmetry_function(x, y, nboot=100, seed=5, alpha=0.05)

    for row in result.rows:
        assert row.significant == (row.adjusted_p_value <= 0.05)
    frame = result.to_frame()
    assert list(frame["q"]) == list(result.quantiles)


def test_reproducible_and_parallel_safe() -> None:
    """Sequential and threaded runs with one seed agree exactly."""

    rng = np.random.default_rng(43)
    x = rng.normal(size=15)
    y = rng.normal(size=18)

    sequential = asymmetry_function(x, y, nboot=40, seed=8)
    parallel = asymmetry_function(x, y, nboot=40, seed=8, n_jobs=3)

    assert sequential.to_frame().equals(parallel.to_frame())


@pytest.mark.parametrize("levels", [[0.5], [0.1, 0.6], [0.0, 0.2]])
def test_levels_must_be_below_half(levels) -> None:
    """Levels at or above 0.5, or not positive, are rejected."""

    with pytest.raises(ValueError):
        asymmetry_function([1.0, 2.0, 3.0], [1.0, 2.5], q=levels, nboot=5)
