"""Plot the shift function and difference asymmetry function for a CSV.

The input table has one row per observation, a numeric value column and a
group column with exactly two groups (or two groups selected with
``--groups``). The script writes a two-panel figure and the two result
tables next to it.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from robust_stats.asymmetry import DEFAULT_ASYMMETRY_NBOOT, asymmetry_function
from robust_stats.datasets import LabeledDataset
from robust_stats.shift_function import DEFAULT_SHIFT_NBOOT, shift_function
from shift_report.composite import label_panel, save_figure
from shift_report.plots import draw_asymmetry_function, draw_shift_function
from shift_report.style import ShiftPlotStyle
from shift_report.tables import write_asymmetry_table, write_shift_table
from utils.cli import add_bootstrap_arguments


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the shift-function plotting script."""

    parser = argparse.ArgumentParser(
        description=(
            "Plot the shift function and difference asymmetry function of two "
            "groups stored in a long CSV table."
        )
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="CSV with one row per observation.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("analysis/figures/shift_function.pdf"),
        help=(
            "Output path for the figure; tables are written alongside "
            "(default: analysis/figures/shift_function.pdf)."
        ),
    )
    parser.add_argument(
        "--value-column",
        default="value",
        help="Column holding the observations (default: value).",
    )
    parser.add_argument(
        "--group-column",
        default="group",
        help="Column holding the group labels (default: group).",
    )
    parser.add_argument(
        "--groups",
        nargs=2,
        metavar=("GROUP1", "GROUP2"),
        default=None,
        help="Two group labels to compare, in order (default: the only two).",
    )
    parser.add_argument(
        "--nboot",
        type=int,
        default=DEFAULT_SHIFT_NBOOT,
        help=f"Shift-function resamples (default: {DEFAULT_SHIFT_NBOOT}).",
    )
    parser.add_argument(
        "--asymmetry-nboot",
        type=int,
        default=DEFAULT_ASYMMETRY_NBOOT,
        help=f"Asymmetry-function resamples (default: {DEFAULT_ASYMMETRY_NBOOT}).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Bootstrap seed (default: 0).",
    )
    add_bootstrap_arguments(parser)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the shift-function plotting script."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.nboot <= 0:
        parser.error("--nboot must be a positive integer")
    if args.asymmetry_nboot <= 0:
        parser.error("--asymmetry-nboot must be a positive integer")
    if args.alpha is None:
        args.alpha = 0.05
    if args.n_jobs is None:
        args.n_jobs = 1

    return args


def load_dataset(
    input_path: Path,
    *,
    value_column: str,
    group_column: str,
    groups: Optional[Sequence[str]],
) -> LabeledDataset:
    """Return the two groups stored in ``input_path``."""

    resolved = input_path.expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Input CSV not found at {resolved}")
    frame = pd.read_csv(resolved)
    labels = (groups[0], groups[1]) if groups else None
    return LabeledDataset.from_frame(
        frame,
        value_column=value_column,
        group_column=group_column,
        labels=labels,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Script entry point for plotting a shift function from a CSV."""

    args = parse_args(argv)
    try:
        data = load_dataset(
            Path(args.input),
            value_column=args.value_column,
            group_column=args.group_column,
            groups=args.groups,
        )
    except (FileNotFoundError, ValueError) as err:
        print(str(err))
        return 1

    show_progress = not args.no_progress
    shift = shift_function(
        data,
        nboot=args.nboot,
        alpha=args.alpha,
        seed=args.seed,
        n_jobs=args.n_jobs,
        show_progress=show_progress,
    )
    asymmetry = asymmetry_function(
        data.group1,
        data.group2,
        alpha=args.alpha,
        nboot=args.asymmetry_nboot,
        seed=args.seed + 1,
        n_jobs=args.n_jobs,
        show_progress=show_progress,
    )

    plt.switch_backend("Agg")
    fig, (ax_shift, ax_asym) = plt.subplots(1, 2, figsize=(11.0, 4.5))
    style = ShiftPlotStyle(
        x_label=f"{data.label1} deciles",
        y_label=f"{data.label1} - {data.label2}\ndecile differences",
    )
    draw_shift_function(ax_shift, shift, style=style)
    draw_asymmetry_function(ax_asym, asymmetry)
    label_panel(ax_shift, "A")
    label_panel(ax_asym, "B")
    fig.tight_layout()

    output_path = Path(args.output)
    save_figure(output_path, fig)
    write_shift_table(output_path.with_suffix(".shift.csv"), shift)
    write_asymmetry_table(output_path.with_suffix(".asymmetry.csv"), asymmetry)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
