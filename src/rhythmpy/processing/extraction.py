"""Turn daily sample histories into per-indicator numeric series."""

from typing import Iterable, List, Sequence

import numpy as np
import polars as pl

from rhythmpy.core import models


def sort_samples(samples: Iterable[models.DailySample]) -> List[models.DailySample]:
    """Sorts samples by date, ascending.

    The sort is stable, so samples sharing a date keep their encounter order.
    """
    return sorted(samples, key=lambda sample: sample.date)


def extract(
    indicator: models.Indicator, samples: Sequence[models.DailySample]
) -> np.ndarray:
    """Extracts the values of one indicator as a chronological series.

    Samples without a value for the indicator are skipped, so the series holds the
    available values only: no gap filling, no interpolation. The samples must
    already be sorted by date.

    Args:
        indicator: The indicator to extract.
        samples: The daily samples, sorted ascending by date.

    Returns:
        A 1D float array, empty if no sample has a value for the indicator.
    """
    values = [sample.value_for(indicator) for sample in samples]
    return np.array([v for v in values if v is not None], dtype=np.float64)


def samples_to_data_frame(samples: Sequence[models.DailySample]) -> pl.DataFrame:
    """Converts samples to a DataFrame with one nullable column per indicator.

    Args:
        samples: The daily samples to convert. Their order is preserved.

    Returns:
        A DataFrame with a 'date' column followed by one Int64 column per
        analyzable indicator. Missing values are null.
    """
    columns = {"date": [sample.date for sample in samples]}
    for indicator in models.Indicator.analyzable():
        columns[indicator.value] = [
            sample.indicator_values.get(indicator) for sample in samples
        ]

    schema = {"date": pl.Date} | {
        indicator.value: pl.Int64 for indicator in models.Indicator.analyzable()
    }
    return pl.DataFrame(columns, schema=schema)


def data_frame_to_samples(data_frame: pl.DataFrame) -> List[models.DailySample]:
    """Builds samples from a DataFrame with a 'date' column.

    Only columns named after an analyzable indicator are read; nulls are treated as
    missing values.

    Args:
        data_frame: The DataFrame to convert. Must contain a 'date' column.

    Returns:
        The daily samples, in row order.
    """
    indicator_columns = [
        indicator
        for indicator in models.Indicator.analyzable()
        if indicator.value in data_frame.columns
    ]
    if data_frame.schema["date"] == pl.String:
        date_column = pl.col("date").str.to_date()
    else:
        date_column = pl.col("date").cast(pl.Date)

    rows = data_frame.select(
        date_column, *[indicator.value for indicator in indicator_columns]
    ).iter_rows(named=True)

    samples = []
    for row in rows:
        values = {
            indicator: int(round(row[indicator.value]))
            for indicator in indicator_columns
            if row[indicator.value] is not None
        }
        samples.append(models.DailySample(date=row["date"], indicator_values=values))
    return samples
