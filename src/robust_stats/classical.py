"""Classical two-sample tests reported next to the robust graphics.

Most functions are thin wrappers around scipy that normalise the output into
``TestResult`` records so the report can tabulate them uniformly.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np
from scipy import stats

from robust_stats.bootstrap import (
    SeedLike,
    as_seed_sequence,
    bootstrap_two_sample,
    percentile_interval,
    permutation_two_sample,
)
from robust_stats.harrell_davis import validate_sample


@dataclass(frozen=True)
class TestResult:
    """Normalised output of a two-sample test.

    Parameters
    ----------
    name:
        Human-readable test name.
    estimate:
        Point estimate associated with the test (mean difference, shift,
        effect size or distance), or ``None``.
    statistic:
        Test statistic.
    p_value:
        Two-sided p-value.
    ci_low, ci_high:
        Confidence bounds for ``estimate`` when the test provides them.
    extra:
        Additional test-specific values (degrees of freedom, flags).
    """

    __test__ = False

    name: str
    estimate: Optional[float]
    statistic: float
    p_value: float
    ci_low: Optional[float] = None
    ci_high: Optional[float] = None
    extra: Dict[str, object] = field(default_factory=dict)

    def is_significant(self, alpha: float = 0.05) -> bool:
        """Return whether ``p_value`` is below ``alpha``."""

        return math.isfinite(self.p_value) and self.p_value < alpha


def welch_t_test(
    x: Sequence[float], y: Sequence[float], *, alpha: float = 0.05
) -> TestResult:
    """Return Welch's unequal-variance t-test for the difference in means."""

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    result = stats.ttest_ind(x_values, y_values, equal_var=False)
    interval = result.confidence_interval(confidence_level=1.0 - alpha)
    return TestResult(
        name="Welch t-test",
        estimate=float(np.mean(x_values) - np.mean(y_values)),
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        ci_low=float(interval.low),
        ci_high=float(interval.high),
        extra={"df": float(result.df)},
    )


def wilcoxon_rank_sum(x: Sequence[float], y: Sequence[float]) -> TestResult:
    """Return the Wilcoxon-Mann-Whitney rank-sum test.

    The estimate is the Hodges-Lehmann shift, the median of all pairwise
    differences ``x[i] - y[j]``.
    """

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    result = stats.mannwhitneyu(x_values, y_values, alternative="two-sided")
    shift = float(np.median(np.subtract.outer(x_values, y_values)))
    return TestResult(
        name="Wilcoxon rank-sum test",
        estimate=shift,
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
    )


def cliffs_delta(x: Sequence[float], y: Sequence[float]) -> float:
    """Return Cliff's delta, ``P(X > Y) - P(X < Y)``."""

    signs = np.sign(np.subtract.outer(np.asarray(x, float), np.asarray(y, float)))
    return float(np.mean(signs))


def cliffs_delta_test(
    x: Sequence[float],
    y: Sequence[float],
    *,
    alpha: float = 0.05,
    nboot: int = 1000,
    seed: SeedLike = 0,
) -> TestResult:
    """Return Cliff's delta with a Brunner-Munzel p-value.

    Cliff's delta measures stochastic dominance of ``x`` over ``y``. The
    Brunner-Munzel test checks the equivalent null ``P(X > Y) = 0.5`` without
    assuming equal variances; the interval is a percentile bootstrap.
    """

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    delta = cliffs_delta(x_values, y_values)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        result = stats.brunnermunzel(x_values, y_values)
    boot = bootstrap_two_sample(
        x_values, y_values, cliffs_delta, nboot=nboot, seed=seed, description="cliff"
    )
    low, high = percentile_interval(boot, alpha)
    return TestResult(
        name="Cliff's delta",
        estimate=delta,
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        ci_low=float(low[0]),
        ci_high=float(high[0]),
        extra={"p_greater": (delta + 1.0) / 2.0},
    )


def weighted_ks_statistic(x: Sequence[float], y: Sequence[float]) -> float:
    """Return the variance-weighted Kolmogorov-Smirnov distance.

    ``max |F1 - F2| / sqrt(H (1 - H))`` over the distinct pooled values, where
    ``H`` is the pooled ECDF; points with ``H`` equal to 0 or 1 are excluded.
    """

    x_sorted = np.sort(np.asarray(x, dtype=float))
    y_sorted = np.sort(np.asarray(y, dtype=float))
    pooled = np.sort(np.concatenate([x_sorted, y_sorted]))
    points = np.unique(pooled)
    f1 = np.searchsorted(x_sorted, points, side="right") / x_sorted.size
    f2 = np.searchsorted(y_sorted, points, side="right") / y_sorted.size
    h = np.searchsorted(pooled, points, side="right") / pooled.size
    inner = (h > 0.0) & (h < 1.0)
    if not np.any(inner):
        return 0.0
    spread = np.sqrt(h[inner] * (1.0 - h[inner]))
    return float(np.max(np.abs(f1[inner] - f2[inner]) / spread))


def ks_test(
    x: Sequence[float],
    y: Sequence[float],
    *,
    weighted: bool = False,
    nperm: int = 1000,
    seed: SeedLike = 0,
) -> TestResult:
    """Return a two-sample test of equal distributions.

    Parameters
    ----------
    x, y:
        The two samples.
    weighted:
        Use the weighted Kolmogorov-Smirnov distance, which divides the ECDF
        gap by its standard error under the null and so emphasises the
        tails. Its p-value comes from a seeded permutation test.
    nperm:
        Permutations for the weighted variant.
    seed:
        Permutation seed for the weighted variant.
    """

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    if not weighted:
        result = stats.ks_2samp(x_values, y_values)
        return TestResult(
            name="Kolmogorov-Smirnov test",
            estimate=float(result.statistic),
            statistic=float(result.statistic),
            p_value=float(result.pvalue),
        )

    observed = weighted_ks_statistic(x_values, y_values)
    null = permutation_two_sample(
        x_values,
        y_values,
        weighted_ks_statistic,
        nperm=nperm,
        seed=seed,
        description="weighted ks",
    )[:, 0]
    # Tolerance so permutations tying the observed distance count as exceeding.
    exceed = int(np.sum(null >= observed - 1e-12))
    return TestResult(
        name="Weighted Kolmogorov-Smirnov test",
        estimate=observed,
        statistic=observed,
        p_value=(exceed + 1.0) / (null.size + 1.0),
        extra={"nperm": int(null.size)},
    )


def run_all_tests(
    x: Sequence[float],
    y: Sequence[float],
    *,
    alpha: float = 0.05,
    nboot: int = 1000,
    seed: SeedLike = 0,
) -> List[TestResult]:
    """Return every classical test in report order.

    ``nboot`` sets both the Cliff's delta resamples and the weighted KS
    permutations; each draws from its own child of ``seed``.
    """

    cliff_seed, ks_seed = as_seed_sequence(seed).spawn(2)
    return [
        welch_t_test(x, y, alpha=alpha),
        wilcoxon_rank_sum(x, y),
        cliffs_delta_test(x, y, alpha=alpha, nboot=nboot, seed=cliff_seed),
        ks_test(x, y),
        ks_test(x, y, weighted=True, nperm=nboot, seed=ks_seed),
    ]


__all__ = [
    "TestResult",
    "cliffs_delta",
    "cliffs_delta_test",
    "ks_test",
    "run_all_tests",
    "weighted_ks_statistic",
    "welch_t_test",
    "wilcoxon_rank_sum",
]
