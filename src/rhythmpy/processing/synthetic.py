"""Generate synthetic daily check-in histories with known periods."""

import datetime
from typing import Dict, List, Optional

import numpy as np

from rhythmpy.core import models

DEFAULT_PERIODS = {
    models.Indicator.physical: 25.0,
    models.Indicator.mental: 31.0,
    models.Indicator.emotional: 27.0,
    models.Indicator.sleep: 23.0,
    models.Indicator.appetite: 29.0,
}

DEFAULT_BASELINES = {
    models.Indicator.physical: 65.0,
    models.Indicator.mental: 60.0,
    models.Indicator.emotional: 62.0,
    models.Indicator.sleep: 58.0,
    models.Indicator.appetite: 64.0,
}


def generate_cyclic_samples(
    days: int = 60,
    periods: Optional[Dict[models.Indicator, float]] = None,
    baselines: Optional[Dict[models.Indicator, float]] = None,
    amplitude: float = 25.0,
    noise: float = 10.0,
    weekday_effect: bool = True,
    lower: int = 0,
    upper: int = 100,
    end_date: Optional[datetime.date] = None,
    seed: Optional[int] = None,
) -> List[models.DailySample]:
    """Generates one sample per day with a sinusoidal cycle per indicator.

    The value of an indicator on day index i is
    baseline + amplitude * sin(2 * pi * i / period) + U(-noise, noise), plus a small
    weekday bump (+3 on days where i % 7 < 5, -2 otherwise) when weekday_effect is
    set. Values are rounded and clipped to [lower, upper]. Day index 0 is end_date,
    index i lies i days before it. Samples are returned newest first, the way a
    sample store would hand them over.

    Args:
        days: Number of days to generate.
        periods: Period per indicator. Indicators missing from the mapping are not
            generated. Defaults to DEFAULT_PERIODS.
        baselines: Baseline per indicator. Defaults to DEFAULT_BASELINES, falling
            back to the middle of [lower, upper].
        amplitude: Amplitude of the sine wave.
        noise: Half width of the uniform noise.
        weekday_effect: Whether to add the weekday bump.
        lower: Smallest allowed value.
        upper: Largest allowed value.
        end_date: Date of day index 0. Defaults to today.
        seed: Seed of the random generator.

    Returns:
        The generated daily samples.

    Raises:
        ValueError: If days is negative or a period is not positive.
    """
    if days < 0:
        raise ValueError("days must not be negative.")
    periods = DEFAULT_PERIODS if periods is None else periods
    baselines = DEFAULT_BASELINES if baselines is None else baselines
    if any(period <= 0 for period in periods.values()):
        raise ValueError("periods must be greater than 0.")

    rng = np.random.default_rng(seed)
    end_date = end_date or datetime.date.today()
    day_index = np.arange(days)

    if weekday_effect:
        weekday_bump = np.where(day_index % 7 < 5, 3.0, -2.0)
    else:
        weekday_bump = np.zeros(days)

    values_per_indicator = {}
    for indicator, period in periods.items():
        baseline = baselines.get(indicator, (lower + upper) / 2)
        cycle = baseline + amplitude * np.sin(2.0 * np.pi * day_index / period)
        jitter = rng.uniform(-noise, noise, size=days)
        values = np.clip(np.round(cycle + jitter + weekday_bump), lower, upper)
        values_per_indicator[indicator] = values.astype(int)

    return [
        models.DailySample(
            date=end_date - datetime.timedelta(days=int(i)),
            indicator_values={
                indicator: int(values[i])
                for indicator, values in values_per_indicator.items()
            },
        )
        for i in day_index
    ]
