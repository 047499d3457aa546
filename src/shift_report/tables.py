"""CSV tables written next to the report figure."""

from __future__ import annotations

import csv
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from robust_stats.asymmetry import AsymmetryResult
from robust_stats.classical import TestResult
from robust_stats.formatting import round3
from robust_stats.shift_function import ShiftFunctionResult

TEST_FIELDNAMES = ["test", "estimate", "statistic", "p_value", "ci_low", "ci_high"]


def write_rows_with_fieldnames(
    output_path: Path,
    fieldnames: Sequence[str],
    rows: Sequence[Mapping[str, object]],
    *,
    description: str,
) -> Path:
    """Write ``rows`` to ``output_path`` using the given ``fieldnames``.

    Parameters
    ----------
    output_path:
        Destination path for the CSV file.
    fieldnames:
        Ordered list of column names to include in the output.
    rows:
        Mapping objects providing row data; missing keys are left empty.
    description:
        Human-readable description used in the final status message.
    """

    resolved = output_path.expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)

    with resolved.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            trimmed = {name: row.get(name, "") for name in fieldnames}
            writer.writerow(trimmed)

    print(f"Wrote {description} to {resolved}")
    return resolved


def _rounded(value: object) -> object:
    if isinstance(value, float):
        return round3(value)
    return value


def classical_test_rows(results: Sequence[TestResult]) -> List[Dict[str, object]]:
    """Return CSV rows for the classical tests."""

    rows: List[Dict[str, object]] = []
    for result in results:
        rows.append(
            {
                "test": result.name,
                "estimate": "" if result.estimate is None else round3(result.estimate),
                "statistic": round3(result.statistic),
                "p_value": result.p_value,
                "ci_low": "" if result.ci_low is None else round3(result.ci_low),
                "ci_high": "" if result.ci_high is None else round3(result.ci_high),
            }
        )
    return rows


def write_test_table(output_path: Path, results: Sequence[TestResult]) -> Path:
    """Write the classical test table."""

    return write_rows_with_fieldnames(
        output_path,
        TEST_FIELDNAMES,
        classical_test_rows(results),
        description="test results",
    )


def write_shift_table(output_path: Path, result: ShiftFunctionResult) -> Path:
    """Write one row per shift-function quantile level."""

    rows = [{k: _rounded(v) for k, v in asdict(row).items()} for row in result.rows]
    fieldnames = list(rows[0].keys()) if rows else []
    return write_rows_with_fieldnames(
        output_path, fieldnames, rows, description="shift function table"
    )


def write_asymmetry_table(output_path: Path, result: AsymmetryResult) -> Path:
    """Write one row per difference asymmetry quantile level."""

    rows = [{k: _rounded(v) for k, v in asdict(row).items()} for row in result.rows]
    fieldnames = list(rows[0].keys()) if rows else []
    return write_rows_with_fieldnames(
        output_path, fieldnames, rows, description="asymmetry table"
    )


__all__ = [
    "TEST_FIELDNAMES",
    "classical_test_rows",
    "write_asymmetry_table",
    "write_rows_with_fieldnames",
    "write_shift_table",
    "write_test_table",
]
