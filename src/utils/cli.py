"""CLI helper utilities for shared argparse patterns.

This module centralizes common command-line argument definitions used by
the report command and the standalone analysis scripts so that repeated
argument groups (output location, bootstrap settings, logging) remain
consistent across tools.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional


def add_output_dir_argument(
    parser: argparse.ArgumentParser,
    *,
    default_output_dir: Optional[Path | str] = None,
) -> None:
    """Add a shared ``--output-dir/-o`` argument.

    Parameters
    ----------
    parser:
        Target argument parser.
    default_output_dir:
        Default directory advertised in the help text. ``None`` leaves the
        choice to the caller's configuration.
    """

    help_text = "Directory where the figure, tables and report are written"
    if default_output_dir is not None:
        help_text += f" (default: {default_output_dir})"
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=default_output_dir,
        help=help_text + ".",
    )


def add_bootstrap_arguments(parser: argparse.ArgumentParser) -> None:
    """Add shared ``--alpha``, ``--jobs`` and ``--no-progress`` arguments.

    Parameters
    ----------
    parser:
        Target argument parser.
    """

    parser.add_argument(
        "--alpha",
        type=float,
        default=None,
        help="Family-wise significance level (default: 0.05).",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        dest="n_jobs",
        type=int,
        default=None,
        help=(
            "Worker threads for bootstrap resampling. Results do not depend "
            "on this value (default: 1)."
        ),
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable bootstrap progress bars.",
    )


def add_figure_format_argument(parser: argparse.ArgumentParser) -> None:
    """Add a shared ``--figure-format`` argument."""

    parser.add_argument(
        "--figure-format",
        choices=["pdf", "png", "svg"],
        default=None,
        help="File format of the composite figure (default: pdf).",
    )


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    """Add shared ``--verbose`` and ``--log-file`` arguments."""

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a timestamped log to this file.",
    )


def configure_logging(
    *,
    verbose: bool,
    log_file: Optional[Path] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Attach console and optional file handlers to a logger.

    Parameters
    ----------
    verbose:
        Log INFO messages to the console; otherwise only warnings.
    log_file:
        Optional path of a detailed log file.
    logger_name:
        Logger to configure; the root logger when omitted.

    Returns
    -------
    logging.Logger
        The configured logger.
    """

    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    if log_file is not None:
        resolved = log_file.expanduser().resolve()
        resolved.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(resolved), encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        logger.addHandler(file_handler)
    return logger
