"""CLI entry point for the two-group robust comparison report.

The command draws the two demonstration samples, runs the classical tests,
the shift function, the pairwise-difference analysis and the difference
asymmetry function, then writes a composite figure, CSV tables and a
Markdown narrative. Every setting has a default; flags and an optional JSON
config file override them.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np

from shift_report.pipeline import (
    ReportConfig,
    load_config_overrides,
    run_report,
    write_report,
)
from utils.cli import (
    add_bootstrap_arguments,
    add_figure_format_argument,
    add_logging_arguments,
    add_output_dir_argument,
    configure_logging,
)

LOGGER = logging.getLogger(__name__)

_SEED_OPTIONS = (
    "sample_seed",
    "stripchart_seed",
    "tests_seed",
    "shift_seed",
    "median_seed",
    "asymmetry_seed",
)


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the report command."""

    defaults = ReportConfig()
    parser = argparse.ArgumentParser(
        prog="shift_report",
        description=(
            "Compare two groups with classical tests, a shift function, "
            "pairwise differences and a difference asymmetry function."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file of report settings; command-line flags take precedence.",
    )
    add_output_dir_argument(parser, default_output_dir=None)
    add_figure_format_argument(parser)
    add_bootstrap_arguments(parser)
    add_logging_arguments(parser)

    samples = parser.add_argument_group("samples")
    samples.add_argument(
        "--n1", type=int, default=None, help=f"Group 1 size (default: {defaults.n1})."
    )
    samples.add_argument(
        "--n2", type=int, default=None, help=f"Group 2 size (default: {defaults.n2})."
    )
    samples.add_argument(
        "--df",
        type=float,
        default=None,
        help=f"Shared degrees of freedom (default: {defaults.df:g}).",
    )
    for option in _SEED_OPTIONS:
        samples.add_argument(
            "--" + option.replace("_", "-"),
            dest=option,
            type=int,
            default=None,
            help=f"Seed for the {option[:-5]} stage (default: {getattr(defaults, option)}).",
        )

    bootstrap = parser.add_argument_group("bootstrap")
    bootstrap.add_argument(
        "--shift-nboot",
        type=int,
        default=None,
        help=f"Shift-function resamples (default: {defaults.shift_nboot}).",
    )
    bootstrap.add_argument(
        "--median-nboot",
        type=int,
        default=None,
        help=f"Median-difference resamples (default: {defaults.median_nboot}).",
    )
    bootstrap.add_argument(
        "--asymmetry-nboot",
        type=int,
        default=None,
        help=f"Asymmetry-function resamples (default: {defaults.asymmetry_nboot}).",
    )
    bootstrap.add_argument(
        "--tests-nboot",
        type=int,
        default=None,
        help=f"Cliff's delta interval resamples (default: {defaults.tests_nboot}).",
    )
    bootstrap.add_argument(
        "--unadjusted-shift-ci",
        action="store_true",
        help="Use unadjusted instead of simultaneous shift-function intervals.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and validate command-line arguments."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    for name in ("n1", "n2"):
        value = getattr(args, name)
        if value is not None and value < 2:
            parser.error(f"--{name} must be at least 2")
    for name in ("shift_nboot", "median_nboot", "asymmetry_nboot", "tests_nboot"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            parser.error(f"--{name.replace('_', '-')} must be a positive integer")
    if args.n_jobs is not None and args.n_jobs <= 0:
        parser.error("--jobs must be a positive integer")
    return args


def build_config(args: argparse.Namespace) -> ReportConfig:
    """Return the report configuration from defaults, file and flags.

    The command shows progress bars unless the config file or
    ``--no-progress`` turns them off; flags left unset keep the file value.
    """

    config = ReportConfig(show_progress=True)
    if args.config is not None:
        config = config.with_overrides(load_config_overrides(args.config))

    overrides: Dict[str, Any] = {
        "output_dir": args.output_dir,
        "figure_format": args.figure_format,
        "alpha": args.alpha,
        "n_jobs": args.n_jobs,
        "n1": args.n1,
        "n2": args.n2,
        "df": args.df,
        "shift_nboot": args.shift_nboot,
        "median_nboot": args.median_nboot,
        "asymmetry_nboot": args.asymmetry_nboot,
        "tests_nboot": args.tests_nboot,
        "show_progress": False if args.no_progress else None,
    }
    for option in _SEED_OPTIONS:
        overrides[option] = getattr(args, option)
    if args.unadjusted_shift_ci:
        overrides["adjust_shift_ci"] = False
    return config.with_overrides(overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Script entry point for the report command."""

    args = parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config = build_config(args)
        result = run_report(config)
        written = write_report(result)
    except (ValueError, OSError, np.linalg.LinAlgError) as err:
        LOGGER.error("Report generation failed: %s", err)
        return 1

    for name, path in written.items():
        LOGGER.info("[OK] %s -> %s", name, path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
