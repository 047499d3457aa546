"""
Tests for the Harrell-Davis quantile estimator.
"""

from __future__ import annotations

import numpy as np
import pytest

from robust_stats.harrell_davis import DECILES, hd, hd_deciles, hd_sorted, hd_weights


def test_weights_sum_to_one() -> None:
    """Every row of the weight matrix should sum to one."""

    weights = hd_weights(25, DECILES)

    assert weights.shape == (9, 25)
    assert np.allclose(weights.sum(axis=1), 1.0)
    assert np.all(weights >= 0.0)


def test_median_of_symmetric_sample_is_centre() -> None:
    """The HD median of a symmetric sample equals its centre of symmetry."""

    assert hd([1.0, 2.0, 3.0]) == pytest.approx(2.0)
    assert hd([-4.0, -1.0, 0.0, 1.0, 4.0], 0.5) == pytest.approx(0.0, abs=1e-12)


def test_single_observation_returns_value() -> None:
    """A sample of one observation returns that observation for any level."""

    assert hd([7.5], 0.1) == pytest.approx(7.5)
    assert hd([7.5], 0.9) == pytest.approx(7.5)


def test_order_does_not_matter() -> None:
    """Unsorted input gives the same estimates as sorted input."""

    rng = np.random.default_rng(3)
    values = rng.normal(size=40)

    assert np.allclose(hd(values, DECILES), hd_sorted(np.sort(values), DECILES))


def test_location_scale_equivariance() -> None:
    """HD(a * x + b) = a * HD(x) + b for positive a."""

    rng = np.random.default_rng(4)
    values = rng.exponential(size=30)

    transformed = hd(2.5 * values + 10.0, DECILES)

    assert np.allclose(transformed, 2.5 * hd(values, DECILES) + 10.0)


def test_deciles_are_increasing() -> None:
    """Deciles of a continuous sample should be strictly increasing."""

    rng = np.random.default_rng(5)
    deciles = hd_deciles(rng.standard_t(4, size=60))

    assert deciles.shape == (9,)
    assert np.all(np.diff(deciles) > 0.0)


def test_scalar_and_array_levels() -> None:
    """A scalar level returns a float; a sequence returns an aligned array."""

    values = [3.0, 1.0, 4.0, 1.0, 5.0, 9.0, 2.0, 6.0]

    assert isinstance(hd(values, 0.25), float)
    result = hd(values, [0.25, 0.75])
    assert result.shape == (2,)
    assert result[0] < result[1]


def test_stacked_samples() -> None:
    """hd_sorted accepts one sorted sample per row."""

    rng = np.random.default_rng(6)
    stack = np.sort(rng.normal(size=(4, 20)), axis=1)

    estimates = hd_sorted(stack, [0.3, 0.7])

    assert estimates.shape == (4, 2)
    assert np.allclose(estimates[2], hd(stack[2], [0.3, 0.7]))


@pytest.mark.parametrize("level", [0.0, 1.0, -0.1, 1.5, float("nan")])
def test_invalid_levels_raise(level: float) -> None:
    """Levels outside (0, 1) are rejected."""

    with pytest.raises(ValueError):
        hd([1.0, 2.0, 3.0], level)


def test_invalid_samples_raise() -> None:
    """Empty, non-finite or multi-dimensional samples are rejected."""

    with pytest.raises(ValueError):
        hd([])
    with pytest.raises(ValueError):
        hd([1.0, float("inf")])
    with pytest.raises(ValueError):
        hd([[1.0, 2.0], [3.0, 4.0]])
