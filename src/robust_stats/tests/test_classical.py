"""
Tests for the classical two-sample test wrappers.
"""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from robust_stats.classical import (
    cliffs_delta,
    cliffs_delta_test,
    ks_test,
    run_all_tests,
    weighted_ks_statistic,
    welch_t_test,
    wilcoxon_rank_sum,
)


@pytest.fixture(name="samples")
def fixture_samples() -> tuple[np.ndarray, np.ndarray]:
    """Return two moderately different normal samples."""

    rng = np.random.default_rng(10)
    return rng.normal(0.0, 1.0, size=40), rng.normal(0.3, 2.0, size=35)


def test_welch_matches_scipy(samples) -> None:
    """Welch's test reports scipy's statistic, p-value and interval."""

    x, y = samples
    reference = stats.ttest_ind(x, y, equal_var=False)

    result = welch_t_test(x, y)

    assert result.statistic == pytest.approx(reference.statistic)
    assert result.p_value == pytest.approx(reference.pvalue)
    assert result.estimate == pytest.approx(np.mean(x) - np.mean(y))
    assert result.ci_low < result.estimate < result.ci_high
    assert result.extra["df"] < x.size + y.size - 2


def test_wilcoxon_reports_hodges_lehmann_shift(samples) -> None:
    """The rank-sum estimate is the median pairwise difference."""

    x, y = samples
    result = wilcoxon_rank_sum(x, y)

    assert result.estimate == pytest.approx(np.median(np.subtract.outer(x, y)))
    assert result.p_value == pytest.approx(
        stats.mannwhitneyu(x, y, alternative="two-sided").pvalue
    )


def test_cliffs_delta_extremes() -> None:
    """Complete dominance gives +1 or -1; identical samples give zero."""

    assert cliffs_delta([5.0, 6.0], [1.0, 2.0]) == 1.0
    assert cliffs_delta([1.0, 2.0], [5.0, 6.0]) == -1.0
    assert cliffs_delta([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == 0.0


def test_cliffs_delta_interval(samples) -> None:
    """The bootstrap interval lies within [-1, 1] and is reproducible."""

    x, y = samples
    first = cliffs_delta_test(x, y, nboot=200, seed=3)
    second = cliffs_delta_test(x, y, nboot=200, seed=3)

    assert -1.0 <= first.ci_low <= first.ci_high <= 1.0
    assert first.ci_low == second.ci_low
    assert first.extra["p_greater"] == pytest.approx((first.estimate + 1.0) / 2.0)


def test_ks_identical_samples_not_significant() -> None:
    """Identical samples have zero KS distance and p = 1."""

    values = np.linspace(0.0, 1.0, 30)

    result = ks_test(values, values)

    assert result.statistic == 0.0
    assert result.p_value == pytest.approx(1.0)
    assert not result.is_significant()


def test_ks_detects_spread_difference() -> None:
    """Very different spreads around the same centre are detected."""

    rng = np.random.default_rng(11)
    narrow = rng.normal(0.0, 0.1, size=60)
    wide = rng.normal(0.0, 5.0, size=60)

    assert ks_test(narrow, wide).p_value < 0.01
    assert ks_test(narrow, wide, weighted=True, nperm=200).p_value <= 0.01


def test_weighted_ks_statistic_by_hand() -> None:
    """The weighted distance matches a hand computation on five points."""

    # Pooled ECDF H = 0.2, 0.4, 0.6, 0.8 at the inner points; the largest
    # scaled gap is |1 - 0| / sqrt(0.6 * 0.4) at the value 3.
    assert weighted_ks_statistic([1.0, 2.0, 3.0], [4.0, 5.0]) == pytest.approx(
        1.0 / np.sqrt(0.24)
    )
    assert weighted_ks_statistic([1.0, 4.0], [2.0, 3.0]) == pytest.approx(
        0.5 / np.sqrt(0.25 * 0.75)
    )


def test_weighted_ks_identical_samples() -> None:
    """Identical samples have zero weighted distance and p = 1."""

    values = np.linspace(0.0, 1.0, 20)

    result = ks_test(values, values, weighted=True, nperm=50)

    assert result.name == "Weighted Kolmogorov-Smirnov test"
    assert result.statistic == 0.0
    assert result.p_value == pytest.approx(1.0)
    assert result.extra["nperm"] == 50


def test_weighted_ks_is_reproducible() -> None:
    """The permutation p-value is fixed by the seed and lies in (0, 1]."""

    rng = np.random.default_rng(12)
    x = rng.normal(size=25)
    y = rng.normal(0.5, 1.5, size=30)

    first = ks_test(x, y, weighted=True, nperm=99, seed=4)
    second = ks_test(x, y, weighted=True, nperm=99, seed=4)

    assert first.p_value == second.p_value
    assert 1.0 / 100.0 <= first.p_value <= 1.0


def test_run_all_tests_order(samples) -> None:
    """All tests run in report order."""

    x, y = samples
    names = [result.name for result in run_all_tests(x, y, nboot=50)]

    assert names == [
        "Welch t-test",
        "Wilcoxon rank-sum test",
        "Cliff's delta",
        "Kolmogorov-Smirnov test",
        "Weighted Kolmogorov-Smirnov test",
    ]
