"""All pairwise differences between two independent groups.

The full set of ``x[i] - y[j]`` differences has ``n1 * n2`` members. Its
density, its HD deciles and a bootstrap interval for its HD median summarise
how a random member of group 1 compares with a random member of group 2.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from robust_stats.bootstrap import SeedLike, bootstrap_two_sample, percentile_interval
from robust_stats.harrell_davis import DECILES, hd_sorted, validate_sample

LOGGER = logging.getLogger(__name__)

DEFAULT_MEDIAN_NBOOT = 1000


def pairwise_differences(x: Sequence[float], y: Sequence[float]) -> np.ndarray:
    """Return the flat array of every ``x[i] - y[j]`` (length ``n1 * n2``)."""

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    return np.subtract.outer(x_values, y_values).ravel()


def difference_density(
    diffs: Sequence[float],
    *,
    grid_size: int = 512,
    bw_method: Optional[object] = None,
    padding: float = 0.1,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return a Gaussian kernel density estimate of ``diffs`` on a grid.

    Parameters
    ----------
    diffs:
        Pairwise differences.
    grid_size:
        Number of evaluation points.
    bw_method:
        Bandwidth rule passed to ``scipy.stats.gaussian_kde``.
    padding:
        Fraction of the data range added on each side of the grid.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(grid, density)``.
    """

    values = validate_sample(diffs, name="differences")
    if np.ptp(values) == 0.0:
        raise ValueError("Cannot estimate a density for constant differences")
    kde = stats.gaussian_kde(values, bw_method=bw_method)
    span = float(np.ptp(values))
    grid = np.linspace(
        float(values.min()) - padding * span,
        float(values.max()) + padding * span,
        grid_size,
    )
    return grid, kde(grid)


def difference_deciles(diffs: Sequence[float]) -> np.ndarray:
    """Return the nine HD deciles of ``diffs``."""

    values = validate_sample(diffs, name="differences")
    return hd_sorted(np.sort(values), DECILES)


def _median_of_differences(x: np.ndarray, y: np.ndarray) -> float:
    diffs = np.sort(np.subtract.outer(x, y).ravel())
    return float(hd_sorted(diffs, 0.5)[0])


def median_difference_ci(
    x: Sequence[float],
    y: Sequence[float],
    *,
    nboot: int = DEFAULT_MEDIAN_NBOOT,
    alpha: float = 0.05,
    seed: SeedLike = 0,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> Tuple[float, float, float]:
    """Return ``(estimate, lower, upper)`` for the HD median difference.

    Both groups are resampled independently and the differences rebuilt for
    every resample. The bounds are widened to include the estimate when a
    lopsided bootstrap distribution would exclude it.
    """

    x_values = validate_sample(x, name="x")
    y_values = validate_sample(y, name="y")
    estimate = _median_of_differences(x_values, y_values)
    boot = bootstrap_two_sample(
        x_values,
        y_values,
        _median_of_differences,
        nboot=nboot,
        seed=seed,
        n_jobs=n_jobs,
        show_progress=show_progress,
        description="median difference",
    )
    low, high = percentile_interval(boot, alpha)
    lower = min(float(low[0]), estimate)
    upper = max(float(high[0]), estimate)
    return estimate, lower, upper


@dataclass(frozen=True, eq=False)
class PairwiseResult:
    """Summary of the pairwise-difference distribution."""

    differences: np.ndarray = field(repr=False)
    grid: np.ndarray = field(repr=False)
    density: np.ndarray = field(repr=False)
    deciles: np.ndarray
    median: float
    median_lower: float
    median_upper: float
    alpha: float

    @property
    def size(self) -> int:
        """Return the number of pairwise differences."""

        return int(self.differences.size)


def analyse_pairwise(
    x: Sequence[float],
    y: Sequence[float],
    *,
    nboot: int = DEFAULT_MEDIAN_NBOOT,
    alpha: float = 0.05,
    seed: SeedLike = 0,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> PairwiseResult:
    """Return the density, deciles and median interval of ``x - y``."""

    diffs = pairwise_differences(x, y)
    LOGGER.info("Pairwise differences: %d values", diffs.size)
    grid, density = difference_density(diffs)
    median, lower, upper = median_difference_ci(
        x,
        y,
        nboot=nboot,
        alpha=alpha,
        seed=seed,
        n_jobs=n_jobs,
        show_progress=show_progress,
    )
    return PairwiseResult(
        differences=diffs,
        grid=grid,
        density=density,
        deciles=difference_deciles(diffs),
        median=median,
        median_lower=lower,
        median_upper=upper,
        alpha=alpha,
    )


__all__ = [
    "DEFAULT_MEDIAN_NBOOT",
    "PairwiseResult",
    "analyse_pairwise",
    "difference_deciles",
    "difference_density",
    "median_difference_ci",
    "pairwise_differences",
]
