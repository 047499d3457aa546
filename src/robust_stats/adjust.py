"""Hochberg family-wise error rate control.

Adjusted p-values come from statsmodels; the per-test critical levels
``alpha / k`` are the ones used to widen simultaneous bootstrap intervals.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from statsmodels.stats.multitest import multipletests


def _as_pvalues(pvalues: Sequence[float]) -> np.ndarray:
    values = np.asarray(pvalues, dtype=float)
    if values.ndim != 1:
        raise ValueError("p-values must be a 1-D sequence")
    if np.any(~np.isfinite(values)) or np.any(values < 0.0) or np.any(values > 1.0):
        raise ValueError(f"p-values must lie in [0, 1]: {values}")
    return values


def hochberg_adjust(pvalues: Sequence[float]) -> np.ndarray:
    """Return Hochberg step-up adjusted p-values in the input order.

    Each adjusted value is at least its raw p-value and at most one.
    """

    values = _as_pvalues(pvalues)
    if values.size == 0:
        return values.copy()
    _, adjusted, _, _ = multipletests(values, alpha=0.05, method="simes-hochberg")
    return np.minimum(1.0, np.maximum(adjusted, values))


def hochberg_critical_levels(pvalues: Sequence[float], alpha: float = 0.05) -> np.ndarray:
    """Return the Hochberg critical level for each p-value.

    P-values are ranked in decreasing order; the ``k``-th largest is compared
    against ``alpha / k``. Ties keep their input order.
    """

    values = _as_pvalues(pvalues)
    order = np.argsort(-values, kind="stable")
    levels = np.empty_like(values)
    levels[order] = alpha / np.arange(1, values.size + 1)
    return levels


def hochberg_reject(pvalues: Sequence[float], alpha: float = 0.05) -> np.ndarray:
    """Return boolean rejection flags controlling the FWER at ``alpha``."""

    values = _as_pvalues(pvalues)
    if values.size == 0:
        return np.zeros(0, dtype=bool)
    reject, _, _, _ = multipletests(values, alpha=alpha, method="simes-hochberg")
    return np.asarray(reject, dtype=bool)


def monotone_envelope(
    values: Sequence[float],
    order_by: Optional[Sequence[float]] = None,
) -> np.ndarray:
    """Return the step-up envelope of ``values`` along the order of ``order_by``.

    Walking from the largest ``order_by`` entry down, each value is replaced
    by the running minimum, so the result is non-decreasing in ``order_by``.
    Hochberg-adjusted p-values are a fixed point of this envelope when ordered
    by their raw p-values.
    """

    data = np.asarray(values, dtype=float)
    keys = data if order_by is None else np.asarray(order_by, dtype=float)
    if keys.shape != data.shape:
        raise ValueError("values and order_by must have the same shape")
    order = np.argsort(keys, kind="stable")[::-1]
    envelope = np.empty_like(data)
    envelope[order] = np.minimum.accumulate(data[order])
    return envelope


__all__ = [
    "hochberg_adjust",
    "hochberg_critical_levels",
    "hochberg_reject",
    "monotone_envelope",
]
