"""Decide when a stored rhythm result is stale enough to be recomputed."""

from typing import Optional


def should_recompute(
    current_sample_count: int,
    last_computed_sample_count: Optional[int],
    has_existing_result: bool,
    forced: bool = False,
    cadence: int = 5,
) -> bool:
    """Whether the rhythm analysis should run again.

    A recomputation is due when it is forced, when there is nothing to show yet, or
    when the sample count has reached or crossed a multiple of the cadence since the
    last computation. Going from 10 to 12 samples with a cadence of 5 crosses no
    multiple; going from 9 to 11 crosses 10. A shrinking history (e.g. after data
    was deleted) invalidates the existing result.

    Args:
        current_sample_count: Number of samples available now.
        last_computed_sample_count: Number of samples the existing result was
            computed from, None if unknown.
        has_existing_result: Whether a result is currently stored.
        forced: Bypass the cadence check.
        cadence: Number of samples between automatic recomputations.

    Returns:
        True if the analysis should run.

    Raises:
        ValueError: If cadence is smaller than 1.
    """
    if cadence < 1:
        raise ValueError("cadence must be at least 1.")

    if forced or not has_existing_result or last_computed_sample_count is None:
        return True
    if current_sample_count < last_computed_sample_count:
        return True
    return current_sample_count // cadence > last_computed_sample_count // cadence
