"""
Tests for the standalone shift-function plotting script.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from robust_stats.asymmetry import DEFAULT_ASYMMETRY_NBOOT  # noqa: E402
from robust_stats.shift_function import DEFAULT_SHIFT_NBOOT  # noqa: E402

SCRIPT_PATH = Path(__file__).resolve().parents[3] / "analysis" / "plot_shift_function.py"


@pytest.fixture(name="script", scope="module")
def fixture_script():
    """Load the analysis script as a module."""

    spec = importlib.util.spec_from_file_location("plot_shift_function", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_bootstrap_defaults_follow_library(script) -> None:
    """Resample defaults come from the estimator modules."""

    args = script.parse_args(["--input", "data.csv"])

    assert args.nboot == DEFAULT_SHIFT_NBOOT
    assert args.asymmetry_nboot == DEFAULT_ASYMMETRY_NBOOT
    assert args.alpha == 0.05
    assert args.n_jobs == 1


def test_script_writes_figure_and_tables(script, tmp_path: Path) -> None:
    """A two-group CSV yields the figure and both tables."""

    rng = np.random.default_rng(70)
    frame = pd.DataFrame(
        {
            "value": np.concatenate([rng.normal(size=15), rng.exponential(size=12)]),
            "group": ["a"] * 15 + ["b"] * 12,
        }
    )
    input_path = tmp_path / "data.csv"
    frame.to_csv(input_path, index=False)
    output = tmp_path / "figures" / "shift.png"

    code = script.main(
        [
            "--input",
            str(input_path),
            "--output",
            str(output),
            "--nboot",
            "20",
            "--asymmetry-nboot",
            "10",
            "--no-progress",
        ]
    )

    assert code == 0
    assert output.exists()
    assert output.with_suffix(".shift.csv").exists()
    assert output.with_suffix(".asymmetry.csv").exists()


def test_missing_input_returns_error(script, tmp_path: Path) -> None:
    """A missing CSV is reported with exit code 1."""

    assert script.main(["--input", str(tmp_path / "missing.csv")]) == 1
