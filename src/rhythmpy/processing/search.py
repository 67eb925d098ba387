"""Sweep candidate periods and pick the most plausible one."""

import datetime
from typing import Optional

import numpy as np

from rhythmpy.core import computations, config, models

logger = config.get_logger()

# Absorbs float error so that max_period itself is part of the sweep.
_SWEEP_TOLERANCE = 1e-9


def candidate_periods(min_period: float, max_period: float, step: float) -> np.ndarray:
    """Candidate periods from min_period to max_period inclusive, step apart.

    Candidates are computed as min_period + i * step rather than by accumulation so
    that the sweep does not drift.

    Args:
        min_period: The first candidate.
        max_period: The last candidate, included if it lies on the grid.
        step: The distance between candidates.

    Returns:
        A 1D array of candidate periods in ascending order.

    Raises:
        ValueError: If step is not positive or min_period exceeds max_period.
    """
    if step <= 0:
        raise ValueError("step must be greater than 0.")
    if min_period > max_period:
        raise ValueError("min_period must not exceed max_period.")

    n_candidates = int(np.floor((max_period - min_period) / step + _SWEEP_TOLERANCE))
    return min_period + step * np.arange(n_candidates + 1, dtype=np.float64)


def search(
    series: np.ndarray,
    indicator: models.Indicator,
    min_period: float = 7.0,
    max_period: float = 45.0,
    step: float = 0.5,
    confidence_floor: float = 0.25,
    computed_at: Optional[datetime.datetime] = None,
) -> Optional[models.PeriodEstimate]:
    """Finds the best scoring period for a series.

    Every candidate is scored with computations.period_score. Ties keep the first,
    i.e. shortest, candidate. A best score below the confidence floor yields no
    estimate at all rather than a guessed period.

    Args:
        series: The indicator values in chronological order.
        indicator: The indicator the series belongs to.
        min_period: Shortest candidate period.
        max_period: Longest candidate period, inclusive.
        step: Resolution of the sweep.
        confidence_floor: Minimum score for a period to be reported.
        computed_at: Timestamp stored on the estimate. Defaults to now.

    Returns:
        The winning PeriodEstimate, or None if no candidate reaches the floor.
    """
    series = np.asarray(series, dtype=np.float64)
    candidates = candidate_periods(min_period, max_period, step)

    best_period = None
    best_score = -1.0
    for period in candidates:
        score = computations.period_score(series, period)
        logger.debug("%s: period %.1f scored %.3f", indicator.value, period, score)
        if score > best_score:
            best_score = score
            best_period = float(period)

    if best_period is None or best_score < confidence_floor:
        logger.debug(
            "%s: best score %.3f is below the confidence floor %s, no period.",
            indicator.value,
            max(best_score, 0.0),
            confidence_floor,
        )
        return None

    logger.debug(
        "%s: detected period %.1f days (confidence %.3f).",
        indicator.value,
        best_period,
        best_score,
    )
    return models.PeriodEstimate(
        indicator=indicator,
        period_days=best_period,
        confidence=best_score,
        sample_count_used=int(series.size),
        computed_at=computed_at or datetime.datetime.now(),
    )
