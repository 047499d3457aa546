"""Shared numeric formatting helpers for report outputs.

Tables and narrative text use the same conventions: three decimals for
estimates and bounds, and p-values below 0.001 written as ``< 0.001``.
"""

from __future__ import annotations

import math
from typing import Optional


def round3(value: float) -> float:
    """Return ``value`` rounded to three decimal places."""

    return round(value, 3)


def format_value3(value: Optional[float]) -> str:
    """Return a three-decimal string for ``value`` or an empty string.

    Parameters
    ----------
    value:
        Number to format, or ``None``.

    Returns
    -------
    str
        Empty when ``value`` is ``None`` or not finite.
    """

    if value is None or not math.isfinite(float(value)):
        return ""
    return f"{round3(float(value)):.3f}"


def format_p_value(value: Optional[float]) -> str:
    """Return a p-value formatted for reports."""

    if value is None or not math.isfinite(float(value)):
        return ""
    if value < 0.001:
        return "< 0.001"
    return f"{float(value):.3f}"


def format_interval(low: Optional[float], high: Optional[float]) -> str:
    """Return ``[low, high]`` with three decimals, or empty when unavailable."""

    if low is None or high is None:
        return ""
    return f"[{format_value3(low)}, {format_value3(high)}]"


__all__ = ["format_interval", "format_p_value", "format_value3", "round3"]
