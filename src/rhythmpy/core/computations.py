"""Scoring functions used to judge how well a candidate period fits a series.

Every sub-score lies in [0, 1] and degrades to 0 instead of producing NaN when the
data is degenerate (zero variance, empty overlaps, too few cycles).
"""

import math

import numpy as np

SCORE_WEIGHTS = {
    "autocorrelation": 0.5,
    "consistency": 0.3,
    "amplitude_stability": 0.2,
}


def round_half_away_from_zero(value: float) -> int:
    """Rounds to the nearest integer, with halves rounded away from zero.

    Python's built-in round() rounds halves to even, which would map the candidate
    periods 8.5 and 7.5 to the same lag.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def autocorrelation(series: np.ndarray, lag: int) -> float:
    """Normalized autocorrelation of a series with itself shifted by lag samples.

    Both overlapping windows are centered on the mean of the full series. The
    product of the centered windows is normalized by the geometric mean of their
    sums of squares. The sign is dropped: an inverted cycle is still a cycle.

    Args:
        series: The values to compare, in chronological order.
        lag: The shift, in samples.

    Returns:
        The absolute autocorrelation, or 0 if the lag is not positive, the overlap
        is empty, or either window has zero variance.
    """
    series = np.asarray(series, dtype=np.float64)
    if lag <= 0 or lag >= series.size:
        return 0.0

    centered = series - series.mean()
    leading = centered[:-lag]
    trailing = centered[lag:]

    denominator = math.sqrt(np.dot(leading, leading) * np.dot(trailing, trailing))
    if denominator <= 0:
        return 0.0
    return min(1.0, abs(float(np.dot(leading, trailing)) / denominator))


def pearson_correlation(x: np.ndarray, y: np.ndarray) -> float:
    """Absolute Pearson correlation coefficient of two equally long sequences.

    Returns 0 if the sequences differ in length, hold fewer than two values, or if
    either of them is constant.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.size != y.size or x.size < 2:
        return 0.0

    x_centered = x - x.mean()
    y_centered = y - y.mean()
    denominator = math.sqrt(
        np.dot(x_centered, x_centered) * np.dot(y_centered, y_centered)
    )
    if denominator <= 0:
        return 0.0
    return min(1.0, abs(float(np.dot(x_centered, y_centered)) / denominator))


def split_into_chunks(series: np.ndarray, length: int) -> np.ndarray:
    """Splits a series into consecutive, non-overlapping chunks.

    Any trailing partial chunk is discarded.

    Args:
        series: The values to split.
        length: The number of samples per chunk.

    Returns:
        A 2D array of shape (n_chunks, length). n_chunks may be 0.
    """
    series = np.asarray(series, dtype=np.float64)
    if length <= 0:
        return np.empty((0, 0), dtype=np.float64)
    n_chunks = series.size // length
    return series[: n_chunks * length].reshape(n_chunks, length)


def cycle_consistency(series: np.ndarray, lag: int) -> float:
    """Average absolute correlation between every pair of cycle-long chunks.

    Args:
        series: The values to score.
        lag: The cycle length, in samples.

    Returns:
        The mean pairwise correlation, or 0 when fewer than two full chunks exist.
    """
    chunks = split_into_chunks(series, lag)
    n_chunks = chunks.shape[0]
    if n_chunks < 2:
        return 0.0

    correlations = [
        pearson_correlation(chunks[i], chunks[j])
        for i in range(n_chunks - 1)
        for j in range(i + 1, n_chunks)
    ]
    return float(np.mean(correlations))


def amplitude_stability(series: np.ndarray, lag: int) -> float:
    """How steady the peak-to-trough amplitude stays from one cycle to the next.

    Computes max - min of every cycle-long chunk, then one minus the coefficient of
    variation of those amplitudes, floored at 0.

    Args:
        series: The values to score.
        lag: The cycle length, in samples.

    Returns:
        The stability score, or 0 with fewer than two chunks or a zero mean
        amplitude.
    """
    chunks = split_into_chunks(series, lag)
    if chunks.shape[0] < 2:
        return 0.0

    amplitudes = chunks.max(axis=1) - chunks.min(axis=1)
    mean_amplitude = float(amplitudes.mean())
    if mean_amplitude <= 0:
        return 0.0

    coefficient_of_variation = float(amplitudes.std()) / mean_amplitude
    return max(0.0, 1.0 - coefficient_of_variation)


def period_score(series: np.ndarray, candidate_period: float) -> float:
    """Composite plausibility score of a candidate period.

    Weighted average of autocorrelation, cycle consistency and amplitude stability,
    all evaluated at the candidate period rounded to whole samples.

    Args:
        series: The values to score, in chronological order.
        candidate_period: The period to test, in samples.

    Returns:
        A score in [0, 1]. 0 if the rounded period is not positive or does not fit
        inside the series.
    """
    series = np.asarray(series, dtype=np.float64)
    lag = round_half_away_from_zero(candidate_period)
    if lag <= 0 or lag >= series.size:
        return 0.0

    score = (
        SCORE_WEIGHTS["autocorrelation"] * autocorrelation(series, lag)
        + SCORE_WEIGHTS["consistency"] * cycle_consistency(series, lag)
        + SCORE_WEIGHTS["amplitude_stability"] * amplitude_stability(series, lag)
    )
    return min(1.0, max(0.0, score))
