"""
Tests for the report command-line entry point.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from shift_report.commands import build_config, main, parse_args  # noqa: E402

FAST_FLAGS = [
    "--no-progress",
    "--tests-nboot",
    "50",
    "--shift-nboot",
    "50",
    "--median-nboot",
    "50",
    "--asymmetry-nboot",
    "10",
]


def test_main_writes_outputs(tmp_path: Path) -> None:
    """A successful run returns 0 and leaves every artefact on disk."""

    out = tmp_path / "report"

    code = main(["-o", str(out), "--figure-format", "svg", *FAST_FLAGS])

    assert code == 0
    for name in ("figure.svg", "tests.csv", "shift_function.csv", "asymmetry.csv", "report.md"):
        assert (out / name).exists()


def test_missing_config_returns_error(tmp_path: Path) -> None:
    """A missing config file is reported as a failure, not a traceback."""

    code = main(["--config", str(tmp_path / "nope.json"), "-o", str(tmp_path)])

    assert code == 1


def test_flags_override_config_file(tmp_path: Path) -> None:
    """Command-line flags take precedence over the JSON file."""

    config_path = tmp_path / "settings.json"
    config_path.write_text('{"n1": 20, "alpha": 0.1}', encoding="utf-8")

    config = build_config(parse_args(["--config", str(config_path), "--n1", "30"]))

    assert config.n1 == 30
    assert config.alpha == 0.1
    assert config.show_progress is True


def test_config_file_progress_setting_survives(tmp_path: Path) -> None:
    """A progress setting in the JSON file holds when the flag is absent."""

    config_path = tmp_path / "quiet.json"
    config_path.write_text('{"show_progress": false}', encoding="utf-8")

    config = build_config(parse_args(["--config", str(config_path)]))

    assert config.show_progress is False


def test_no_progress_flag_overrides_file(tmp_path: Path) -> None:
    """``--no-progress`` turns progress bars off whatever the file says."""

    config_path = tmp_path / "loud.json"
    config_path.write_text('{"show_progress": true}', encoding="utf-8")

    config = build_config(parse_args(["--config", str(config_path), "--no-progress"]))

    assert config.show_progress is False


def test_config_file_with_bad_jobs_fails(tmp_path: Path) -> None:
    """A negative worker count in the file is reported as a failure."""

    config_path = tmp_path / "jobs.json"
    config_path.write_text('{"n_jobs": -3}', encoding="utf-8")

    code = main(["--config", str(config_path), "-o", str(tmp_path / "out")])

    assert code == 1


def test_seed_and_interval_flags() -> None:
    """Seed flags and the unadjusted interval switch reach the config."""

    config = build_config(
        parse_args(["--sample-seed", "99", "--unadjusted-shift-ci", "-j", "2"])
    )

    assert config.sample_seed == 99
    assert config.adjust_shift_ci is False
    assert config.n_jobs == 2


@pytest.mark.parametrize(
    "argv",
    [["--n1", "1"], ["--shift-nboot", "0"], ["--jobs", "0"], ["--figure-format", "gif"]],
)
def test_invalid_arguments_exit(argv) -> None:
    """Out-of-range arguments stop the parser."""

    with pytest.raises(SystemExit):
        parse_args(argv)
