"""Two-group dataset container shared by the estimators.

``LabeledDataset`` keeps two named samples side by side. It is the input to
the shift function and can be converted to and from the stacked long table
(one ``value`` column and one ``group`` column) used for CSV input and output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from robust_stats.harrell_davis import validate_sample

DEFAULT_LABELS: Tuple[str, str] = ("Group1", "Group2")


@dataclass(frozen=True, eq=False)
class LabeledDataset:
    """Two independent samples with their group labels.

    Parameters
    ----------
    group1:
        Observations of the first group.
    group2:
        Observations of the second group.
    label1:
        Display label for ``group1``.
    label2:
        Display label for ``group2``.
    """

    group1: np.ndarray = field(repr=False)
    group2: np.ndarray = field(repr=False)
    label1: str = DEFAULT_LABELS[0]
    label2: str = DEFAULT_LABELS[1]

    @classmethod
    def from_samples(
        cls,
        g1: Sequence[float],
        g2: Sequence[float],
        labels: Tuple[str, str] = DEFAULT_LABELS,
    ) -> "LabeledDataset":
        """Validate and copy two raw samples into a dataset."""

        if labels[0] == labels[1]:
            raise ValueError("Group labels must be distinct")
        first = validate_sample(g1, name=labels[0]).copy()
        second = validate_sample(g2, name=labels[1]).copy()
        first.setflags(write=False)
        second.setflags(write=False)
        return cls(group1=first, group2=second, label1=labels[0], label2=labels[1])

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        *,
        value_column: str = "value",
        group_column: str = "group",
        labels: Optional[Tuple[str, str]] = None,
    ) -> "LabeledDataset":
        """Build a dataset from a long table with one row per observation.

        Parameters
        ----------
        frame:
            Table holding the observations.
        value_column:
            Column containing the numeric observations.
        group_column:
            Column containing the group label of each observation.
        labels:
            Optional pair selecting and ordering the two groups. When omitted
            the table must contain exactly two groups, taken in order of
            first appearance.

        Raises
        ------
        ValueError
            If a column is missing or the groups cannot be resolved.
        """

        for column in (value_column, group_column):
            if column not in frame.columns:
                raise ValueError(f"Missing column {column!r} in input table")

        group_values = frame[group_column].astype(str)
        if labels is None:
            present = list(dict.fromkeys(group_values.tolist()))
            if len(present) != 2:
                raise ValueError(
                    f"Expected exactly two groups in {group_column!r}, found {present}"
                )
            labels = (present[0], present[1])

        samples = []
        for label in labels:
            mask = group_values == str(label)
            if not mask.any():
                raise ValueError(f"Group {label!r} not found in {group_column!r}")
            samples.append(frame.loc[mask, value_column].to_numpy(dtype=float))
        return cls.from_samples(samples[0], samples[1], labels=(labels[0], labels[1]))

    @property
    def labels(self) -> Tuple[str, str]:
        """Return the two group labels in order."""

        return self.label1, self.label2

    @property
    def sizes(self) -> Tuple[int, int]:
        """Return ``(n1, n2)``."""

        return int(self.group1.size), int(self.group2.size)

    def to_frame(self) -> pd.DataFrame:
        """Return the stacked ``value``/``group`` table."""

        values = np.concatenate([self.group1, self.group2])
        groups = [self.label1] * self.group1.size + [self.label2] * self.group2.size
        return pd.DataFrame(
            {
                "value": values,
                "group": pd.Categorical(groups, categories=list(self.labels)),
            }
        )


__all__ = ["DEFAULT_LABELS", "LabeledDataset"]
