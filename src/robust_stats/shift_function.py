"""Shift function for two independent groups.

For each quantile level the Harrell-Davis quantile of group 2 is subtracted
from the one of group 1. Percentile-bootstrap intervals are computed for all
levels from the same resamples. With ``adjust_ci`` each interval uses its
Hochberg critical level so that the set of intervals has simultaneous
coverage of ``1 - alpha``. Bounds are widened where needed so that every
interval contains its own difference.
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
from robust_stats.datasets import LabeledDataset
from robust_stats.harrell_davis import DECILES, hd_sorted, validate_levels

LOGGER = logging.getLogger(__name__)

DEFAULT_SHIFT_NBOOT = 1000


@dataclass(frozen=True)
class ShiftRow:
    """Shift-function output at one quantile level."""

    q: float
    group1_quantile: float
    group2_quantile: float
    difference: float
    ci_lower: float
    ci_upper: float
    p_value: float
    critical_level: float
    adjusted_p_value: float


@dataclass(frozen=True)
class ShiftFunctionResult:
    """Shift function across all requested quantile levels."""

    rows: List[ShiftRow]
    labels: Tuple[str, str]
    alpha: float
    nboot: int
    adjusted_ci: bool

    @property
    def quantiles(self) -> np.ndarray:
        """Return the quantile levels."""

        return np.array([row.q for row in self.rows])

    @property
    def differences(self) -> np.ndarray:
        """Return the group-1 minus group-2 quantile differences."""

        return np.array([row.difference for row in self.rows])

    def to_frame(self) -> pd.DataFrame:
        """Return one table row per quantile level."""

        return pd.DataFrame([asdict(row) for row in self.rows])


def shift_function(
    data: LabeledDataset,
    *,
    q: Sequence[float] = DECILES,
    nboot: int = DEFAULT_SHIFT_NBOOT,
    alpha: float = 0.05,
    adjust_ci: bool = True,
    seed: SeedLike = 0,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> ShiftFunctionResult:
    """Compute the shift function of ``data`` with bootstrap intervals.

    Parameters
    ----------
    data:
        The two groups to compare.
    q:
        Quantile levels in (0, 1); deciles by default.
    nboot:
        Number of bootstrap resamples.
    alpha:
        Family-wise error level for the intervals.
    adjust_ci:
        Widen each interval to its Hochberg critical level. When false all
        intervals use ``alpha``.
    seed:
        Bootstrap seed.
    n_jobs:
        Worker threads for the bootstrap.
    show_progress:
        Display a progress bar.

    Returns
    -------
    ShiftFunctionResult
        One row per quantile level.
    """

    levels = validate_levels(q)
    x = data.group1
    y = data.group2
    quantiles_x = hd_sorted(np.sort(x), levels)
    quantiles_y = hd_sorted(np.sort(y), levels)
    differences = quantiles_x - quantiles_y

    def statistic(x_boot: np.ndarray, y_boot: np.ndarray) -> np.ndarray:
        return hd_sorted(np.sort(x_boot), levels) - hd_sorted(np.sort(y_boot), levels)

    LOGGER.info(
        "Shift function: %d levels, %d bootstrap samples", levels.size, nboot
    )
    boot = bootstrap_two_sample(
        x,
        y,
        statistic,
        nboot=nboot,
        seed=seed,
        n_jobs=n_jobs,
        show_progress=show_progress,
        description="shift function",
    )
    p_values = bootstrap_p_value(boot)
    critical = hochberg_critical_levels(p_values, alpha)
    adjusted = hochberg_adjust(p_values)
    interval_alpha = critical if adjust_ci else np.full(levels.size, alpha)
    lower, upper = percentile_interval(boot, interval_alpha)
    lower = np.minimum(lower, differences)
    upper = np.maximum(upper, differences)

    rows = [
        ShiftRow(
            q=float(levels[i]),
            group1_quantile=float(quantiles_x[i]),
            group2_quantile=float(quantiles_y[i]),
            difference=float(differences[i]),
            ci_lower=float(lower[i]),
            ci_upper=float(upper[i]),
            p_value=float(p_values[i]),
            critical_level=float(critical[i]),
            adjusted_p_value=float(adjusted[i]),
        )
        for i in range(levels.size)
    ]
    return ShiftFunctionResult(
        rows=rows,
        labels=data.labels,
        alpha=alpha,
        nboot=int(nboot),
        adjusted_ci=adjust_ci,
    )


__all__ = [
    "DEFAULT_SHIFT_NBOOT",
    "ShiftFunctionResult",
    "ShiftRow",
    "shift_function",
]
