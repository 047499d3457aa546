"""
Tests for synthetic sample generation.
"""

from __future__ import annotations

import numpy as np
import pytest

from robust_stats.harrell_davis import hd
from robust_stats.samples import SampleSpec, draw_sample, draw_two_samples


def test_same_seed_is_bit_identical() -> None:
    """Identical specs and seed give identical samples."""

    spec1 = SampleSpec("t", 6.0, 50, 5.001)
    spec2 = SampleSpec("chisquare", 6.0, 50, 5.0)

    first = draw_two_samples(spec1, spec2, 21)
    second = draw_two_samples(spec1, spec2, 21)

    assert np.array_equal(first[0], second[0])
    assert np.array_equal(first[1], second[1])


def test_different_seeds_differ() -> None:
    """Different seeds give different samples."""

    spec = SampleSpec("normal", 1.0, 20, 0.0)

    g1, _ = draw_two_samples(spec, spec, 1)
    h1, _ = draw_two_samples(spec, spec, 2)

    assert not np.array_equal(g1, h1)


@pytest.mark.parametrize("family", ["t", "chisquare", "normal", "lognormal"])
def test_recentred_median_matches_target(family: str) -> None:
    """The HD median of every generated sample equals its target."""

    spec = SampleSpec(family, 4.0, 50, 5.001)

    sample = draw_sample(spec, np.random.default_rng(8))

    assert sample.shape == (50,)
    assert abs(hd(sample, 0.5) - 5.001) < 1e-9


def test_unequal_sizes() -> None:
    """Both groups keep their own requested sizes."""

    g1, g2 = draw_two_samples(
        SampleSpec("t", 4.0, 30, 0.0), SampleSpec("chisquare", 4.0, 45, 0.0), 0
    )

    assert g1.size == 30
    assert g2.size == 45


def test_invalid_specs_raise() -> None:
    """Unknown families, tiny samples and bad df are rejected."""

    with pytest.raises(ValueError):
        SampleSpec("cauchy", 1.0, 10, 0.0)
    with pytest.raises(ValueError):
        SampleSpec("t", 4.0, 1, 0.0)
    with pytest.raises(ValueError):
        SampleSpec("chisquare", 0.0, 10, 0.0)
