"""Test the function of computations module."""

import numpy as np
import pytest

from rhythmpy.core import computations

SINE_PERIOD = 10
SINE = np.sin(2 * np.pi * np.arange(40) / SINE_PERIOD)


@pytest.mark.parametrize(
    "value, expected",
    [(8.5, 9), (7.5, 8), (2.4, 2), (-2.5, -3), (0.49, 0), (12.0, 12)],
)
def test_round_half_away_from_zero(value: float, expected: int) -> None:
    """Test that halves are rounded away from zero."""
    assert computations.round_half_away_from_zero(value) == expected


def test_autocorrelation_full_cycle() -> None:
    """Test a sine shifted by its period correlates perfectly."""
    result = computations.autocorrelation(SINE, SINE_PERIOD)

    assert result == pytest.approx(1.0)


def test_autocorrelation_inverted_cycle() -> None:
    """Test a sine shifted by half a period counts as a cycle."""
    result = computations.autocorrelation(SINE, SINE_PERIOD // 2)

    assert result == pytest.approx(1.0)


@pytest.mark.parametrize("lag", [0, -1, 40, 41])
def test_autocorrelation_invalid_lag(lag: int) -> None:
    """Test lags without an overlap score 0."""
    assert computations.autocorrelation(SINE, lag) == 0.0


def test_autocorrelation_constant() -> None:
    """Test a constant series has no autocorrelation."""
    assert computations.autocorrelation(np.full(20, 4.0), 5) == 0.0


@pytest.mark.parametrize(
    "x, y, expected",
    [
        ([1, 2, 3], [1, 2, 3], 1.0),
        ([1, 2, 3], [3, 2, 1], 1.0),
        ([1, 2, 3], [2, 2, 2], 0.0),
        ([1, 2, 3], [1, 2], 0.0),
        ([1], [1], 0.0),
    ],
)
def test_pearson_correlation(x: list, y: list, expected: float) -> None:
    """Test the absolute Pearson correlation and its degenerate cases."""
    result = computations.pearson_correlation(np.array(x), np.array(y))

    assert result == pytest.approx(expected)


def test_split_into_chunks_drops_partial_chunk() -> None:
    """Test chunks are consecutive and the trailing remainder is dropped."""
    chunks = computations.split_into_chunks(np.arange(10), 3)

    assert chunks.shape == (3, 3)
    assert np.array_equal(chunks[0], [0, 1, 2])
    assert np.array_equal(chunks[2], [6, 7, 8])


def test_split_into_chunks_too_short() -> None:
    """Test a series shorter than one chunk yields no chunks."""
    assert computations.split_into_chunks(np.arange(4), 5).shape[0] == 0


def test_cycle_consistency_identical_chunks() -> None:
    """Test repeating chunks are perfectly consistent."""
    series = np.tile([1.0, 4.0, 2.0, 5.0], 3)

    assert computations.cycle_consistency(series, 4) == pytest.approx(1.0)


def test_cycle_consistency_single_chunk() -> None:
    """Test consistency needs at least two chunks."""
    assert computations.cycle_consistency(np.arange(10.0), 6) == 0.0


def test_amplitude_stability_constant_amplitude() -> None:
    """Test identical amplitudes are perfectly stable."""
    series = np.tile([0.0, 1.0], 6)

    assert computations.amplitude_stability(series, 2) == pytest.approx(1.0)


def test_amplitude_stability_varying_amplitude() -> None:
    """Test amplitudes 1 and 3 have a coefficient of variation of 0.5."""
    series = np.array([0.0, 1.0, 0.0, 3.0])

    assert computations.amplitude_stability(series, 2) == pytest.approx(0.5)


def test_amplitude_stability_zero_amplitude() -> None:
    """Test a flat series scores 0 instead of dividing by zero."""
    assert computations.amplitude_stability(np.full(12, 2.0), 3) == 0.0


def test_amplitude_stability_single_chunk() -> None:
    """Test amplitude stability needs at least two chunks."""
    assert computations.amplitude_stability(np.arange(5.0), 3) == 0.0


def test_period_score_true_period() -> None:
    """Test a clean sine scores close to 1 at its own period."""
    assert computations.period_score(SINE, SINE_PERIOD) == pytest.approx(1.0)


@pytest.mark.parametrize("candidate", [0.0, 0.4, -3.0, 39.5, 40.0, 50.0])
def test_period_score_rejected_periods(candidate: float) -> None:
    """Test periods that do not fit inside the series score 0."""
    assert computations.period_score(SINE, candidate) == 0.0


def test_period_score_constant_series() -> None:
    """Test a constant series scores 0 for every period."""
    series = np.full(60, 50.0)

    scores = [computations.period_score(series, p) for p in np.arange(7, 46, 0.5)]

    assert max(scores) == 0.0


def test_period_score_bounds_on_noise() -> None:
    """Test the composite score stays within [0, 1] on random data."""
    rng = np.random.default_rng(7)
    series = rng.integers(1, 6, size=60).astype(float)

    scores = [computations.period_score(series, p) for p in np.arange(7, 46, 0.5)]

    assert all(0.0 <= score <= 1.0 for score in scores)
    assert not np.isnan(scores).any()
