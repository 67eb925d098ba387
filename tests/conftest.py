"""Fixtures used by pytest."""

import datetime
import pathlib
from typing import Callable, List

import numpy as np
import pytest

from rhythmpy.core import models
from rhythmpy.processing import extraction, synthetic

_FIXED_NOW = datetime.datetime(2024, 5, 2, 12, 0, 0)
_END_DATE = datetime.date(2024, 5, 2)


@pytest.fixture
def fixed_now() -> datetime.datetime:
    """The moment returned by the fixed clock."""
    return _FIXED_NOW


@pytest.fixture
def end_date() -> datetime.date:
    """Date of the most recent sample in generated histories."""
    return _END_DATE


@pytest.fixture
def fixed_clock() -> Callable[[], datetime.datetime]:
    """Clock that always returns the same moment."""
    return lambda: _FIXED_NOW


@pytest.fixture
def physical_samples() -> List[models.DailySample]:
    """60 days of physical scores with a 25 day cycle and noise in [-10, 10]."""
    return synthetic.generate_cyclic_samples(
        days=60,
        periods={models.Indicator.physical: 25.0},
        baselines={models.Indicator.physical: 65.0},
        amplitude=25.0,
        noise=10.0,
        weekday_effect=False,
        end_date=_END_DATE,
        seed=42,
    )


@pytest.fixture
def constant_samples() -> List[models.DailySample]:
    """40 days where every indicator has the same value every day."""
    return [
        models.DailySample(
            date=_END_DATE - datetime.timedelta(days=i),
            indicator_values={
                indicator: 3 for indicator in models.Indicator.analyzable()
            },
        )
        for i in range(40)
    ]


@pytest.fixture
def sample_csv(
    tmp_path: pathlib.Path, physical_samples: List[models.DailySample]
) -> pathlib.Path:
    """The physical samples written as a csv file."""
    path = tmp_path / "samples.csv"
    extraction.samples_to_data_frame(physical_samples).write_csv(path)
    return path


@pytest.fixture
def sine_series() -> Callable[..., np.ndarray]:
    """Factory of sine waves around 60 with amplitude 25 plus uniform noise."""

    def make_series(
        period: int, length: int, noise: float = 2.0, seed: int = 0
    ) -> np.ndarray:
        rng = np.random.default_rng(seed)
        day = np.arange(length)
        return (
            60.0
            + 25.0 * np.sin(2.0 * np.pi * day / period)
            + rng.uniform(-noise, noise, size=length)
        )

    return make_series
