"""
Tests for the end-to-end report pipeline.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from robust_stats.harrell_davis import hd  # noqa: E402
from shift_report.pipeline import (  # noqa: E402
    ReportConfig,
    load_config_overrides,
    render_figure,
    run_report,
    write_report,
)

FAST = {
    "tests_nboot": 100,
    "shift_nboot": 100,
    "median_nboot": 100,
    "asymmetry_nboot": 20,
}


@pytest.fixture(name="result", scope="module")
def fixture_result():
    """Run the default scenario once with small bootstrap counts."""

    return run_report(ReportConfig().with_overrides(FAST))


def test_default_samples(result) -> None:
    """The default groups have 50 values each and near-equal HD medians."""

    assert result.data.sizes == (50, 50)
    assert hd(result.data.group1) == pytest.approx(5.001)
    assert hd(result.data.group2) == pytest.approx(5.0)
    assert result.pairwise.size == 2500


def test_default_test_pattern(result) -> None:
    """Location tests are not significant while the KS test is."""

    by_name = {test.name: test for test in result.tests}

    assert by_name["Welch t-test"].p_value > 0.05
    assert by_name["Wilcoxon rank-sum test"].p_value > 0.05
    assert by_name["Kolmogorov-Smirnov test"].p_value < 0.05


def test_stage_shapes(result) -> None:
    """Every stage produces one row per requested level."""

    assert len(result.shift.rows) == 9
    assert len(result.asymmetry.rows) == 8
    assert result.pairwise.median_lower <= result.pairwise.median
    assert result.pairwise.median <= result.pairwise.median_upper


def test_same_config_reproduces(result) -> None:
    """A second run with the same settings gives identical numbers."""

    again = run_report(ReportConfig().with_overrides(FAST))

    assert again.shift.to_frame().equals(result.shift.to_frame())
    assert again.asymmetry.to_frame().equals(result.asymmetry.to_frame())
    assert [t.p_value for t in again.tests] == [t.p_value for t in result.tests]


def test_render_figure_has_four_panels(result) -> None:
    """The composite figure holds a 2x2 grid of axes."""

    fig = render_figure(result)

    assert len(fig.axes) == 4


def test_write_report(result, tmp_path: Path) -> None:
    """All artefacts are written into the configured directory."""

    config = result.config.with_overrides(
        {"output_dir": tmp_path / "out", "figure_format": "png"}
    )
    rerun = run_report(config)

    written = write_report(rerun)

    assert set(written) == {"figure", "tests", "shift", "asymmetry", "report"}
    for path in written.values():
        assert path.exists()
        assert path.parent == (tmp_path / "out").resolve()
    assert written["figure"].suffix == ".png"
    report = written["report"].read_text(encoding="utf-8")
    assert "## Shift function" in report
    assert "figure.png" in report


def test_config_validation() -> None:
    """Invalid settings are rejected when the config is built."""

    with pytest.raises(ValueError):
        ReportConfig(alpha=1.5)
    with pytest.raises(ValueError):
        ReportConfig(figure_format="gif")
    with pytest.raises(ValueError):
        ReportConfig().with_overrides({"no_such_setting": 1})


@pytest.mark.parametrize("n_jobs", [0, -3])
def test_config_rejects_non_positive_jobs(n_jobs: int) -> None:
    """Worker counts below one are rejected, including from a config file."""

    with pytest.raises(ValueError):
        ReportConfig(n_jobs=n_jobs)
    with pytest.raises(ValueError):
        ReportConfig().with_overrides({"n_jobs": n_jobs})


def test_overrides_skip_none() -> None:
    """``None`` overrides leave the default in place."""

    config = ReportConfig().with_overrides({"n1": None, "n2": 30})

    assert config.n1 == 50
    assert config.n2 == 30


def test_load_config_overrides(tmp_path: Path) -> None:
    """A JSON object is loaded; other payloads and missing files raise."""

    good = tmp_path / "config.json"
    good.write_text('{"alpha": 0.1, "labels": ["a", "b"]}', encoding="utf-8")
    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    config = ReportConfig().with_overrides(load_config_overrides(good))

    assert config.alpha == 0.1
    assert config.labels == ("a", "b")
    with pytest.raises(ValueError):
        load_config_overrides(bad)
    with pytest.raises(FileNotFoundError):
        load_config_overrides(tmp_path / "missing.json")
