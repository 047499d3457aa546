"""Composite figure layout for the report panels."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from shift_report.style import PANEL_LABELS

PanelDrawer = Callable[[Axes], Axes]


def label_panel(ax: Axes, label: str) -> None:
    """Write a bold panel label above the top-left corner of ``ax``."""

    ax.text(
        -0.12,
        1.06,
        label,
        transform=ax.transAxes,
        fontsize=14,
        fontweight="bold",
        va="bottom",
        ha="left",
    )


def compose_report_figure(
    panels: Sequence[PanelDrawer],
    *,
    labels: Sequence[str] = PANEL_LABELS,
    figsize: Tuple[float, float] = (11.0, 8.5),
    title: Optional[str] = None,
) -> Figure:
    """Arrange four panels in a labelled 2x2 grid.

    Parameters
    ----------
    panels:
        Four callables, each drawing one panel onto the axes it receives.
        They are placed row by row.
    labels:
        Panel labels, ``A`` to ``D`` by default.
    figsize:
        Figure size in inches; every panel receives the same share.
    title:
        Optional figure title.

    Returns
    -------
    Figure
        The composed figure. Callers are responsible for saving or closing it.
    """

    if len(panels) != 4:
        raise ValueError(f"Expected four panels, got {len(panels)}")
    if len(labels) < len(panels):
        raise ValueError("Not enough panel labels")

    plt.switch_backend("Agg")
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    for ax, draw, label in zip(axes.flat, panels, labels):
        draw(ax)
        label_panel(ax, label)
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig


def save_figure(output_path: Path, fig: Figure, *, dpi: int = 150) -> Path:
    """Expand, create parent directories, save and close a Matplotlib figure."""

    resolved = output_path.expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(resolved, dpi=dpi)
    plt.close(fig)
    print(f"Wrote figure to {resolved}")
    return resolved


__all__ = ["PanelDrawer", "compose_report_figure", "label_panel", "save_figure"]
