"""Markdown narrative accompanying the report figure.

The text is generated from the computed results so that every number quoted
in the prose matches the tables and the figure.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from robust_stats.asymmetry import AsymmetryResult
from robust_stats.classical import TestResult
from robust_stats.datasets import LabeledDataset
from robust_stats.formatting import format_interval, format_p_value, format_value3
from robust_stats.harrell_davis import hd
from robust_stats.pairwise import PairwiseResult
from robust_stats.shift_function import ShiftFunctionResult


def _significance_word(result: TestResult, alpha: float) -> str:
    return "significant" if result.is_significant(alpha) else "not significant"


def _format_levels(levels: Sequence[float]) -> str:
    return ", ".join(f"{level:.2f}" for level in levels)


def describe_tests(results: Sequence[TestResult], alpha: float) -> List[str]:
    """Return Markdown lines with a table and a verdict for each test."""

    lines = [
        "| Test | Estimate | Statistic | p-value | CI |",
        "| --- | --- | --- | --- | --- |",
    ]
    for result in results:
        lines.append(
            "| {name} | {estimate} | {statistic} | {p} | {ci} |".format(
                name=result.name,
                estimate=format_value3(result.estimate),
                statistic=format_value3(result.statistic),
                p=format_p_value(result.p_value),
                ci=format_interval(result.ci_low, result.ci_high),
            )
        )
    lines.append("")
    for result in results:
        verdict = _significance_word(result, alpha)
        note = ""
        if "nperm" in result.extra:
            note = f" Permutation p-value from {result.extra['nperm']} shuffles."
        lines.append(
            f"- {result.name}: {verdict} (p = {format_p_value(result.p_value)}).{note}"
        )
    return lines


def summarise_test_pattern(results: Sequence[TestResult], alpha: float) -> str:
    """Return one sentence contrasting location tests with distribution tests."""

    by_name = {result.name: result for result in results}
    location = [
        by_name[name]
        for name in ("Welch t-test", "Wilcoxon rank-sum test")
        if name in by_name
    ]
    distribution = by_name.get("Kolmogorov-Smirnov test")
    if not location or distribution is None:
        return ""
    location_significant = any(test.is_significant(alpha) for test in location)
    if not location_significant and distribution.is_significant(alpha):
        return (
            "The mean and rank-based tests find no difference, but the "
            "Kolmogorov-Smirnov test shows that the two distributions differ: "
            "the groups share a typical value yet differ in shape."
        )
    if location_significant and distribution.is_significant(alpha):
        return "Both the location tests and the distribution test detect a difference."
    if location_significant:
        return (
            "The location tests detect a difference that the "
            "Kolmogorov-Smirnov test does not."
        )
    return "None of the tests detects a difference between the groups."


def describe_shift_function(result: ShiftFunctionResult) -> List[str]:
    """Return Markdown lines interpreting the shift function."""

    label1, label2 = result.labels
    above = [row.q for row in result.rows if row.ci_lower > 0.0]
    below = [row.q for row in result.rows if row.ci_upper < 0.0]
    coverage = "simultaneous" if result.adjusted_ci else "unadjusted"
    lines = [
        f"Decile differences ({label1} - {label2}) with {coverage} "
        f"{100 * (1 - result.alpha):.0f}% percentile bootstrap intervals "
        f"({result.nboot} resamples).",
        "",
        "| Decile | " + label1 + " | " + label2 + " | Difference | CI |",
        "| --- | --- | --- | --- | --- |",
    ]
    for row in result.rows:
        lines.append(
            f"| {row.q:.1f} | {format_value3(row.group1_quantile)} | "
            f"{format_value3(row.group2_quantile)} | {format_value3(row.difference)} | "
            f"{format_interval(row.ci_lower, row.ci_upper)} |"
        )
    lines.append("")
    if above:
        lines.append(f"- {label1} is above {label2} at deciles {_format_levels(above)}.")
    if below:
        lines.append(f"- {label1} is below {label2} at deciles {_format_levels(below)}.")
    if not above and not below:
        lines.append("- No decile interval excludes zero.")
    return lines


def describe_pairwise(pairwise: PairwiseResult) -> List[str]:
    """Return Markdown lines for the pairwise-difference distribution."""

    confidence = f"{100 * (1 - pairwise.alpha):.0f}%"
    return [
        f"All {pairwise.size} pairwise differences were formed. Their HD median "
        f"is {format_value3(pairwise.median)}, {confidence} CI "
        f"{format_interval(pairwise.median_lower, pairwise.median_upper)}.",
        "",
        "Deciles of the differences: "
        + ", ".join(format_value3(value) for value in pairwise.deciles)
        + ".",
    ]


def describe_asymmetry(result: AsymmetryResult) -> List[str]:
    """Return Markdown lines interpreting the difference asymmetry function."""

    lines = [
        "| q | Q(q) | Q(1-q) | Sum | CI | p | adjusted p |",
        "| --- | --- | --- | --- | --- | --- | --- |",
    ]
    for row in result.rows:
        marker = " *" if row.significant else ""
        lines.append(
            f"| {row.q:.2f} | {format_value3(row.quantile_low)} | "
            f"{format_value3(row.quantile_high)} | {format_value3(row.sum)}{marker} | "
            f"{format_interval(row.ci_lower, row.ci_upper)} | "
            f"{format_p_value(row.p_value)} | {format_p_value(row.adjusted_p_value)} |"
        )
    lines.append("")
    significant = [row.q for row in result.rows if row.significant]
    if significant:
        lines.append(
            "- Sums differ from zero after Hochberg adjustment at "
            f"q = {_format_levels(significant)}: the distribution of differences "
            "is asymmetric."
        )
    else:
        lines.append(
            "- No quantile sum differs from zero after Hochberg adjustment."
        )
    return lines


def build_narrative(
    data: LabeledDataset,
    tests: Sequence[TestResult],
    shift: ShiftFunctionResult,
    pairwise: PairwiseResult,
    asymmetry: AsymmetryResult,
    *,
    alpha: float,
    figure_name: Optional[str] = None,
) -> str:
    """Return the full Markdown report.

    Parameters
    ----------
    data:
        The two samples.
    tests:
        Classical test results in report order.
    shift:
        Shift function.
    pairwise:
        Pairwise-difference summary.
    asymmetry:
        Difference asymmetry function.
    alpha:
        Significance level used in the verdicts.
    figure_name:
        File name of the composite figure, linked when given.
    """

    n1, n2 = data.sizes
    lines: List[str] = ["# Robust comparison of two independent groups", ""]
    lines.append("## Samples")
    lines.append("")
    lines.append(
        f"- {data.label1}: n = {n1}, HD median = {format_value3(hd(data.group1))}."
    )
    lines.append(
        f"- {data.label2}: n = {n2}, HD median = {format_value3(hd(data.group2))}."
    )
    lines.append("")
    if figure_name:
        lines.append(f"![Report figure]({figure_name})")
        lines.append("")
        lines.append(
            "A: stripchart with HD deciles (thick line: median). "
            "B: shift function. C: density of pairwise differences with deciles. "
            "D: difference asymmetry function (filled: significant)."
        )
        lines.append("")

    lines.append("## Classical tests")
    lines.append("")
    lines.extend(describe_tests(tests, alpha))
    pattern = summarise_test_pattern(tests, alpha)
    if pattern:
        lines.extend(["", pattern])
    lines.append("")

    lines.append("## Shift function")
    lines.append("")
    lines.extend(describe_shift_function(shift))
    lines.append("")

    lines.append("## Pairwise differences")
    lines.append("")
    lines.extend(describe_pairwise(pairwise))
    lines.append("")

    lines.append("## Difference asymmetry function")
    lines.append("")
    lines.extend(describe_asymmetry(asymmetry))
    lines.append("")
    return "\n".join(lines)


__all__ = [
    "build_narrative",
    "describe_asymmetry",
    "describe_pairwise",
    "describe_shift_function",
    "describe_tests",
    "summarise_test_pattern",
]
