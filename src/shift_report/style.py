"""Shared visual styling constants and per-panel style settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Primary series colors.
COLOR_GROUP1 = "#2563eb"
COLOR_GROUP2 = "#16a34a"
COLOR_DIFFERENCE = "#7c3aed"

# Neutral guideline colors.
COLOR_BOUNDARY = "#9ca3af"
COLOR_DECILE = "#111827"

# Emphasis colors for significant points.
COLOR_ERROR = "#ef4444"

PANEL_LABELS: Tuple[str, ...] = ("A", "B", "C", "D")


@dataclass(frozen=True)
class StripchartStyle:
    """Settings for the one-dimensional scatter of both groups."""

    x_label: str = "Observations"
    y_label: str = ""
    colors: Tuple[str, str] = (COLOR_GROUP1, COLOR_GROUP2)
    marker_size: float = 18.0
    alpha: float = 0.6
    jitter: float = 0.15
    decile_color: str = COLOR_DECILE
    decile_width: float = 1.0
    median_width: float = 3.0
    decile_half_height: float = 0.3


@dataclass(frozen=True)
class ShiftPlotStyle:
    """Settings for the shift-function panel."""

    x_label: str = "Group 1 deciles"
    y_label: str = "Group 1 - Group 2\ndecile differences"
    color: str = COLOR_GROUP1
    marker_size: float = 6.0
    median_marker_size: float = 9.0
    line_width: float = 1.2
    reference_color: str = COLOR_BOUNDARY


@dataclass(frozen=True)
class DensityStyle:
    """Settings for the pairwise-difference density panel."""

    x_label: str = "Pairwise differences"
    y_label: str = "Density"
    color: str = COLOR_DIFFERENCE
    fill_alpha: float = 0.25
    line_width: float = 1.5
    decile_color: str = COLOR_DECILE
    decile_width: float = 1.0
    median_width: float = 2.5
    reference_color: str = COLOR_BOUNDARY


@dataclass(frozen=True)
class AsymmetryPlotStyle:
    """Settings for the difference asymmetry panel."""

    x_label: str = "Quantiles"
    y_label: str = "Quantile sum =\nq + 1-q"
    color: str = COLOR_DIFFERENCE
    significant_color: str = COLOR_ERROR
    marker_size: float = 7.0
    line_width: float = 1.2
    reference_color: str = COLOR_BOUNDARY


__all__ = [
    "COLOR_BOUNDARY",
    "COLOR_DECILE",
    "COLOR_DIFFERENCE",
    "COLOR_ERROR",
    "COLOR_GROUP1",
    "COLOR_GROUP2",
    "PANEL_LABELS",
    "AsymmetryPlotStyle",
    "DensityStyle",
    "ShiftPlotStyle",
    "StripchartStyle",
]
