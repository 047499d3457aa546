"""Harrell-Davis quantile estimation.

The Harrell-Davis estimator is a weighted sum of the order statistics with
weights taken from a Beta((n + 1) q, (n + 1)(1 - q)) distribution. It uses
every observation and is therefore more efficient than a single sample
quantile for the small samples these analyses work with.

Weights depend only on the sample size and the probability levels, so they
are cached. Bootstrap resamples keep the sample size fixed, which makes the
cache hit on every iteration after the first.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence, Tuple, Union

import numpy as np
from scipy import stats

DECILES: Tuple[float, ...] = (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)

QuantileLevels = Union[float, Sequence[float], np.ndarray]


def validate_levels(q: QuantileLevels) -> np.ndarray:
    """Return ``q`` as a 1-D float array after checking it lies in (0, 1)."""

    levels = np.atleast_1d(np.asarray(q, dtype=float))
    if levels.ndim != 1 or levels.size == 0:
        raise ValueError("Quantile levels must be a non-empty 1-D sequence")
    if not np.all(np.isfinite(levels)) or np.any(levels <= 0.0) or np.any(
        levels >= 1.0
    ):
        raise ValueError(f"Quantile levels must lie strictly in (0, 1): {levels}")
    return levels


def validate_sample(x: Sequence[float], *, name: str = "sample") -> np.ndarray:
    """Return ``x`` as a 1-D float array, rejecting empty or non-finite input."""

    values = np.asarray(x, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {values.shape}")
    if values.size == 0:
        raise ValueError(f"{name} must contain at least one observation")
    if not np.all(np.isfinite(values)):
        raise ValueError(f"{name} contains non-finite values")
    return values


@lru_cache(maxsize=256)
def _cached_weights(n: int, levels: Tuple[float, ...]) -> np.ndarray:
    edges = np.arange(n + 1, dtype=float) / n
    a = (n + 1) * np.asarray(levels)[:, None]
    b = (n + 1) * (1.0 - np.asarray(levels))[:, None]
    cdf = stats.beta.cdf(edges[None, :], a, b)
    weights = np.diff(cdf, axis=1)
    weights.setflags(write=False)
    return weights


def hd_weights(n: int, q: QuantileLevels) -> np.ndarray:
    """Return the Harrell-Davis weight matrix for ``n`` observations.

    Parameters
    ----------
    n:
        Sample size.
    q:
        Probability level or sequence of levels in (0, 1).

    Returns
    -------
    np.ndarray
        Read-only array of shape ``(len(q), n)``. Row ``k`` holds the weights
        applied to the sorted sample to estimate quantile ``q[k]``; each row
        sums to one.
    """

    if n < 1:
        raise ValueError("Sample size must be positive")
    levels = validate_levels(q)
    return _cached_weights(int(n), tuple(float(level) for level in levels))


def hd_sorted(sorted_values: np.ndarray, q: QuantileLevels) -> np.ndarray:
    """Return HD estimates for an already sorted sample or stack of samples.

    ``sorted_values`` may be 1-D (one sample) or 2-D with one sorted sample
    per row; the result has a trailing axis of length ``len(q)``.
    """

    n = sorted_values.shape[-1]
    weights = hd_weights(n, q)
    return sorted_values @ weights.T


def hd(x: Sequence[float], q: QuantileLevels = 0.5) -> Union[float, np.ndarray]:
    """Return the Harrell-Davis estimate of quantile(s) ``q`` of ``x``.

    Parameters
    ----------
    x:
        Sample of finite observations.
    q:
        Probability level, or a sequence of levels, in (0, 1).

    Returns
    -------
    float or np.ndarray
        A float when ``q`` is a scalar; otherwise an array aligned with ``q``.
    """

    values = validate_sample(x)
    estimates = hd_sorted(np.sort(values), q)
    if np.ndim(q) == 0:
        return float(estimates[0])
    return estimates


def hd_deciles(x: Sequence[float]) -> np.ndarray:
    """Return the nine HD deciles of ``x``."""

    return hd(x, DECILES)


__all__ = [
    "DECILES",
    "hd",
    "hd_deciles",
    "hd_sorted",
    "hd_weights",
    "validate_levels",
    "validate_sample",
]
