"""Synthetic sample generation with robust re-centring.

Samples are drawn from a named distribution family with an explicit
``numpy.random.Generator`` and then shifted so that their Harrell-Davis
median equals a target value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np

from robust_stats.bootstrap import SeedLike, as_seed_sequence
from robust_stats.harrell_davis import hd

MIN_SAMPLE_SIZE = 2

_FAMILIES: Dict[str, Callable[[np.random.Generator, float, int], np.ndarray]] = {
    "t": lambda rng, df, n: rng.standard_t(df, size=n),
    "chisquare": lambda rng, df, n: rng.chisquare(df, size=n),
    "normal": lambda rng, df, n: rng.standard_normal(size=n),
    "lognormal": lambda rng, df, n: rng.lognormal(mean=0.0, sigma=1.0, size=n),
}


@dataclass(frozen=True)
class SampleSpec:
    """Recipe for one synthetic sample.

    Parameters
    ----------
    family:
        Distribution family: ``"t"``, ``"chisquare"``, ``"normal"`` or
        ``"lognormal"``.
    df:
        Degrees of freedom for ``"t"`` and ``"chisquare"``; ignored by the
        other families.
    n:
        Sample size, at least two.
    target:
        Value the HD median of the sample is shifted to.
    """

    family: str
    df: float
    n: int
    target: float

    def __post_init__(self) -> None:
        if self.family not in _FAMILIES:
            raise ValueError(
                f"Unknown family {self.family!r}; expected one of {sorted(_FAMILIES)}"
            )
        if self.n < MIN_SAMPLE_SIZE:
            raise ValueError(f"Sample size must be at least {MIN_SAMPLE_SIZE}")
        if self.family in ("t", "chisquare") and self.df <= 0:
            raise ValueError("Degrees of freedom must be positive")


def recenter(values: np.ndarray, target: float) -> np.ndarray:
    """Return ``values`` shifted so that their HD median equals ``target``."""

    return values - hd(values, 0.5) + target


def draw_sample(spec: SampleSpec, rng: np.random.Generator) -> np.ndarray:
    """Draw one sample following ``spec`` using ``rng``."""

    raw = _FAMILIES[spec.family](rng, spec.df, spec.n)
    return recenter(np.asarray(raw, dtype=float), spec.target)


def draw_two_samples(
    spec1: SampleSpec,
    spec2: SampleSpec,
    seed: SeedLike,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw both samples from two child streams of ``seed``.

    The output is bit-identical for identical specs and seed.
    """

    first, second = as_seed_sequence(seed).spawn(2)
    g1 = draw_sample(spec1, np.random.default_rng(first))
    g2 = draw_sample(spec2, np.random.default_rng(second))
    return g1, g2


__all__ = [
    "MIN_SAMPLE_SIZE",
    "SampleSpec",
    "draw_sample",
    "draw_two_samples",
    "recenter",
]
