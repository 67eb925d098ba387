"""Test the period search."""

import datetime
from typing import Callable

import numpy as np
import pytest

from rhythmpy.core import models
from rhythmpy.processing import search


def test_candidate_periods_default_range() -> None:
    """Test the default sweep runs from 7 to 45 inclusive in steps of 0.5."""
    candidates = search.candidate_periods(7.0, 45.0, 0.5)

    assert len(candidates) == 77
    assert candidates[0] == 7.0
    assert candidates[-1] == 45.0
    assert np.allclose(np.diff(candidates), 0.5)


def test_candidate_periods_off_grid_max() -> None:
    """Test a maximum that is not on the grid is not exceeded."""
    candidates = search.candidate_periods(7.0, 8.0, 0.3)

    assert np.allclose(candidates, [7.0, 7.3, 7.6, 7.9])


def test_candidate_periods_single() -> None:
    """Test equal bounds give a single candidate."""
    assert np.array_equal(search.candidate_periods(10.0, 10.0, 0.5), [10.0])


@pytest.mark.parametrize(
    "min_period, max_period, step", [(7.0, 45.0, 0.0), (7.0, 45.0, -1.0), (9, 8, 1)]
)
def test_candidate_periods_invalid(
    min_period: float, max_period: float, step: float
) -> None:
    """Test invalid sweeps raise."""
    with pytest.raises(ValueError):
        search.candidate_periods(min_period, max_period, step)


@pytest.mark.parametrize("period, length", [(10, 25), (11, 30), (13, 35), (25, 60)])
def test_search_recovers_planted_period(
    period: int,
    length: int,
    sine_series: Callable[..., np.ndarray],
    fixed_now: datetime.datetime,
) -> None:
    """Test a noisy sine wave is recovered within the search resolution."""
    series = sine_series(period, length)

    estimate = search.search(
        series, models.Indicator.physical, computed_at=fixed_now
    )

    assert estimate is not None
    assert abs(estimate.period_days - period) <= 0.5
    assert estimate.confidence > 0.25
    assert estimate.sample_count_used == length


def test_search_constant_series() -> None:
    """Test a constant series never yields a period."""
    estimate = search.search(np.full(60, 3.0), models.Indicator.sleep)

    assert estimate is None


def test_search_empty_series() -> None:
    """Test an empty series yields no period."""
    assert search.search(np.array([]), models.Indicator.sleep) is None


def test_search_floor_enforced(sine_series: Callable[..., np.ndarray]) -> None:
    """Test a best score below the floor is reported as absent."""
    series = sine_series(10, 35)

    estimate = search.search(series, models.Indicator.mental, confidence_floor=1.0)

    assert estimate is None


def test_search_ties_keep_shortest_period(
    sine_series: Callable[..., np.ndarray],
) -> None:
    """Test candidates rounding to the same lag resolve to the first one."""
    series = sine_series(10, 35)

    estimate = search.search(
        series, models.Indicator.mental, min_period=9.5, max_period=10.0
    )

    assert estimate is not None
    assert estimate.period_days == 9.5


def test_search_deterministic(
    sine_series: Callable[..., np.ndarray], fixed_now: datetime.datetime
) -> None:
    """Test identical input produces identical estimates."""
    series = sine_series(12, 45, seed=3)

    first = search.search(series, models.Indicator.emotional, computed_at=fixed_now)
    second = search.search(series, models.Indicator.emotional, computed_at=fixed_now)

    assert first == second


def test_search_default_timestamp(sine_series: Callable[..., np.ndarray]) -> None:
    """Test the estimate is stamped with the current time by default."""
    before = datetime.datetime.now()

    estimate = search.search(sine_series(10, 35), models.Indicator.appetite)

    assert estimate is not None
    assert before <= estimate.computed_at <= datetime.datetime.now()
