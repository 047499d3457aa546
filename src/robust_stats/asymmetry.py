"""Difference asymmetry function.

If two groups differ only in location, the distribution of all pairwise
differences is symmetric about its median, so ``Q(q) + Q(1 - q)`` equals
twice the median for every ``q``. When the groups have the same location the
sums are zero; departures from zero reveal asymmetry of the differences, for
instance when one group is more skewed than the other.

Each sum gets a percentile-bootstrap interval and a bootstrap p-value for the
null hypothesis ``sum = 0``. The intervals are not adjusted; the p-values are
Hochberg-adjusted to control the family-wise error rate across levels.
Bounds are widened where needed so each interval contains its sum.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from robust_stats.adjust import hochberg_adjust, hochberg_critical_levels
from robust_stats.bootstrap import (
    SeedLike,
    bootstrap_p_value,
    bootstrap_two_sample,
    percentile_interval,
)
from robust_stats.harrell_davis import hd_sorted, validate_levels, validate_sample

LOGGER = logging.getLogger(__name__)

ASYMMETRY_LEVELS: Tuple[float, ...] = (0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4)
DEFAULT_ASYMMETRY_NBOOT = 100


@dataclass(frozen=True)
class AsymmetryRow:
    """Difference asymmetry output at one quantile level."""

    q: float
    quantile_low: float
    quantile_high: float
    sum: float
    ci_lower: float
    ci_upper: float
    p_value: float
    critical_level: float
    adjusted_p_value: float
    significant: bool


@dataclass(frozen=True)
class AsymmetryResult:
    """Difference asymmetry function across quantile levels."""

    rows: List[AsymmetryRow]
    alpha: float
    nboot: int

    @property
    def quantiles(self) -> np.ndarray:
        """Return the quantile levels."""

        return np.array([row.q for row in self.rows])

    @property
    def sums(self) -> np.ndarray:
        """Return the quantile sums."""

        return np.array([row.sum for row in self.rows])

    @property
    def any_significant(self) -> bool:
        """Return whether any level is significant after adjustment."""

        return any(row.significant for row in self.rows)

    def to_frame(self) -> pd.DataFrame:
        """Return one table row per quantile level."""

        return pd.DataFrame([asdict(row) for row in self.rows])


def validate_asymmetry_levels(q: Sequence[float]) -> np.ndarray:
    """Return ``q`` as an array, requiring every level below 0.5."""

    levels = validate_levels(q)
    if np.any(levels >= 0.5):
        raise ValueError(f"Asymmetry levels must be below 0.5: {levels}")
    return levels


def _quantile_sums(sorted_diffs: np.ndarray, levels: np.ndarray) -> np.ndarray:
    low = hd_sorted(sorted_diffs, levels)
    high = hd_sorted(sorted_diffs, 1.0 - levels)
    return low + high


def asymmetry_function(
    x: Sequence[float],
    y: Sequence[float],
    *,
    q: Sequence[float] = ASYMMETRY_LEVELS,
    alpha: float = 0.05,
    nboot: int = DEFAULT_ASYMMETRY_NBOOT,
    seed: SeedLike = 0,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> AsymmetryResult:
    """Compute the difference asymmetry function of ``x`` and ``y``.

    Parameters
    ----------
    x, y:
        The two groups.
    q:
        Quantile levels strictly between 0 and 0.5.
    alpha:
        Family-wise error level for the significance flags; also the level
        of the (unadjusted) intervals.
    nboot:
        Number of bootstrap resamples.
    seed:
        Bootstrap seed.
    n_jobs:
        Worker threads for the bootstrap.
    show_progress:
        Display a progress bar.

    Returns
    -------
    AsymmetryResult
        One row per level; ``significant`` marks levels whose
        Hochberg-adjusted p-value is at most ``alpha``.
    """

    levels = validate_asymmetry_levels(q)
    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    diffs = np.sort(np.subtract.outer(x_values, y_values).ravel())
    low = hd_sorted(diffs, levels)
    high = hd_sorted(diffs, 1.0 - levels)
    sums = low + high

    def statistic(x_boot: np.ndarray, y_boot: np.ndarray) -> np.ndarray:
        boot_diffs = np.sort(np.subtract.outer(x_boot, y_boot).ravel())
        return _quantile_sums(boot_diffs, levels)

    LOGGER.info(
        "Difference asymmetry: %d levels, %d bootstrap samples", levels.size, nboot
    )
    boot = bootstrap_two_sample(
        x_values,
        y_values,
        statistic,
        nboot=nboot,
        seed=seed,
        n_jobs=n_jobs,
        show_progress=show_progress,
        description="asymmetry",
    )
    lower, upper = percentile_interval(boot, alpha)
    lower = np.minimum(lower, sums)
    upper = np.maximum(upper, sums)
    p_values = bootstrap_p_value(boot)
    critical = hochberg_critical_levels(p_values, alpha)
    adjusted = hochberg_adjust(p_values)

    rows = [
        AsymmetryRow(
            q=float(levels[i]),
            quantile_low=float(low[i]),
            quantile_high=float(high[i]),
            sum=float(sums[i]),
            ci_lower=float(lower[i]),
            ci_upper=float(upper[i]),
            p_value=float(p_values[i]),
            critical_level=float(critical[i]),
            adjusted_p_value=float(adjusted[i]),
            significant=bool(adjusted[i] <= alpha),
        )
        for i in range(levels.size)
    ]
    return AsymmetryResult(rows=rows, alpha=alpha, nboot=int(nboot))


__all__ = [
    "ASYMMETRY_LEVELS",
    "DEFAULT_ASYMMETRY_NBOOT",
    "AsymmetryResult",
    "AsymmetryRow",
    "asymmetry_function",
    "validate_asymmetry_levels",
]
