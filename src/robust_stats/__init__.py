"""Robust estimators for comparing two independent groups.

Submodules
----------
harrell_davis
    Harrell-Davis quantile estimator.
bootstrap
    Seeded percentile bootstrap helpers.
adjust
    Hochberg family-wise error rate control.
datasets
    Two-group dataset container.
samples
    Synthetic sample generation.
classical
    Classical two-sample tests.
shift_function
    Shift function with simultaneous bootstrap intervals.
pairwise
    Pairwise-difference density, deciles and median interval.
asymmetry
    Difference asymmetry function.
formatting
    Rounding and p-value formatting for reports.
"""

from __future__ import annotations

__all__ = [
    "adjust",
    "asymmetry",
    "bootstrap",
    "classical",
    "datasets",
    "formatting",
    "harrell_davis",
    "pairwise",
    "samples",
    "shift_function",
]
