"""Matplotlib panels for the two-group comparison report.

Each ``draw_*`` function renders onto an ``Axes`` supplied by the caller and
returns it, so the panels can be placed in a composite figure or saved on
their own. Deciles are drawn the same way everywhere: thin lines, with a
thicker line for the median.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from matplotlib.axes import Axes

from robust_stats.asymmetry import AsymmetryResult
from robust_stats.datasets import LabeledDataset
from robust_stats.harrell_davis import DECILES, hd_deciles
from robust_stats.pairwise import PairwiseResult
from robust_stats.shift_function import ShiftFunctionResult
from shift_report.style import (
    AsymmetryPlotStyle,
    DensityStyle,
    ShiftPlotStyle,
    StripchartStyle,
)

MEDIAN_INDEX = DECILES.index(0.5)


def draw_stripchart(
    ax: Axes,
    data: LabeledDataset,
    *,
    rng: np.random.Generator,
    style: Optional[StripchartStyle] = None,
) -> Axes:
    """Render both groups as jittered strips with HD decile markers.

    Axes are flipped relative to a conventional stripchart: observations run
    along the x-axis and each group occupies one row on the y-axis.

    Parameters
    ----------
    ax:
        Target axes.
    data:
        Groups to display.
    rng:
        Generator used for the vertical jitter.
    style:
        Panel style; defaults to ``StripchartStyle()``.
    """

    style = style or StripchartStyle()
    groups = [data.group1, data.group2]
    for position, (values, color) in enumerate(zip(groups, style.colors)):
        jitter = rng.uniform(-style.jitter, style.jitter, size=values.size)
        ax.scatter(
            values,
            position + jitter,
            s=style.marker_size,
            color=color,
            alpha=style.alpha,
            edgecolors="none",
        )
        deciles = hd_deciles(values)
        for index, decile in enumerate(deciles):
            width = style.median_width if index == MEDIAN_INDEX else style.decile_width
            ax.vlines(
                decile,
                position - style.decile_half_height,
                position + style.decile_half_height,
                color=style.decile_color,
                linewidth=width,
            )

    ax.set_yticks([0, 1])
    ax.set_yticklabels(list(data.labels))
    ax.set_ylim(-0.6, 1.6)
    ax.set_xlabel(style.x_label)
    if style.y_label:
        ax.set_ylabel(style.y_label)
    return ax


def draw_shift_function(
    ax: Axes,
    result: ShiftFunctionResult,
    *,
    style: Optional[ShiftPlotStyle] = None,
) -> Axes:
    """Render decile differences against group-1 deciles with intervals."""

    style = style or ShiftPlotStyle()
    x_values = np.array([row.group1_quantile for row in result.rows])
    y_values = np.array([row.difference for row in result.rows])
    lower = np.array([row.ci_lower for row in result.rows])
    upper = np.array([row.ci_upper for row in result.rows])

    ax.axhline(0.0, color=style.reference_color, linestyle="--", linewidth=1.0)
    ax.vlines(x_values, lower, upper, color=style.color, linewidth=style.line_width)
    ax.plot(x_values, y_values, color=style.color, linewidth=style.line_width)
    ax.plot(
        x_values,
        y_values,
        "o",
        color=style.color,
        markersize=style.marker_size,
        markeredgecolor="black",
        markeredgewidth=0.5,
    )

    medians = [row for row in result.rows if np.isclose(row.q, 0.5)]
    if medians:
        median = medians[0]
        ax.axvline(
            median.group1_quantile,
            color=style.reference_color,
            linestyle=":",
            linewidth=1.0,
        )
        ax.plot(
            [median.group1_quantile],
            [median.difference],
            "o",
            color=style.color,
            markersize=style.median_marker_size,
            markeredgecolor="black",
        )

    ax.set_xlabel(style.x_label)
    ax.set_ylabel(style.y_label)
    return ax


def draw_difference_density(
    ax: Axes,
    pairwise: PairwiseResult,
    *,
    style: Optional[DensityStyle] = None,
) -> Axes:
    """Render the density of pairwise differences with its HD deciles."""

    style = style or DensityStyle()
    ax.fill_between(
        pairwise.grid, pairwise.density, color=style.color, alpha=style.fill_alpha
    )
    ax.plot(
        pairwise.grid, pairwise.density, color=style.color, linewidth=style.line_width
    )
    ax.axvline(0.0, color=style.reference_color, linestyle="--", linewidth=1.0)
    for index, decile in enumerate(pairwise.deciles):
        width = style.median_width if index == MEDIAN_INDEX else style.decile_width
        ax.axvline(decile, color=style.decile_color, linewidth=width)

    ax.set_xlabel(style.x_label)
    ax.set_ylabel(style.y_label)
    ax.set_ylim(bottom=0.0)
    return ax


def draw_asymmetry_function(
    ax: Axes,
    result: AsymmetryResult,
    *,
    style: Optional[AsymmetryPlotStyle] = None,
) -> Axes:
    """Render quantile sums with intervals; significant levels are filled."""

    style = style or AsymmetryPlotStyle()
    quantiles = result.quantiles
    sums = result.sums
    lower = np.array([row.ci_lower for row in result.rows])
    upper = np.array([row.ci_upper for row in result.rows])

    ax.axhline(0.0, color=style.reference_color, linestyle="--", linewidth=1.0)
    ax.vlines(quantiles, lower, upper, color=style.color, linewidth=style.line_width)
    ax.plot(quantiles, sums, color=style.color, linewidth=style.line_width)
    for row in result.rows:
        face = style.significant_color if row.significant else "white"
        ax.plot(
            [row.q],
            [row.sum],
            "o",
            markersize=style.marker_size,
            markerfacecolor=face,
            markeredgecolor="black",
        )

    ax.set_xticks(quantiles)
    ax.set_xticklabels([f"{level:.2f}" for level in quantiles])
    ax.set_xlabel(style.x_label)
    ax.set_ylabel(style.y_label)
    return ax


__all__ = [
    "draw_asymmetry_function",
    "draw_difference_density",
    "draw_shift_function",
    "draw_stripchart",
]
