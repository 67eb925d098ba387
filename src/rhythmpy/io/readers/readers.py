"""Function to read daily check-in samples from a file."""

import json
import pathlib
from typing import List, Union

import polars as pl
import pydantic

from rhythmpy.core import config, exceptions, models
from rhythmpy.processing import extraction

VALID_FILE_TYPES = (".csv", ".parquet", ".json")

logger = config.get_logger()


def read_daily_samples(
    file_name: Union[pathlib.Path, str],
) -> List[models.DailySample]:
    """Read daily samples from a file.

    Tabular files (.csv, .parquet) must contain a 'date' column and may contain any
    subset of the indicator columns; empty cells mean the indicator was not
    recorded that day. JSON files hold a list of serialized DailySample objects.
    When a date occurs more than once, the last entry wins.

    Args:
        file_name: The filename to read the samples from.

    Returns:
        The daily samples, one per date, in file order of their last occurrence.

    Raises:
        InvalidFileTypeError: If the file extension is not supported.
        MissingColumnError: If a tabular file has no 'date' column.
    """
    file_name = pathlib.Path(file_name)
    file_type = file_name.suffix
    if file_type not in VALID_FILE_TYPES:
        raise exceptions.InvalidFileTypeError(
            f"File type {file_type} is not supported. "
            f"Supported types are {VALID_FILE_TYPES}."
        )

    if file_type == ".json":
        with open(file_name) as f:
            raw_samples = json.load(f)
        samples = pydantic.TypeAdapter(List[models.DailySample]).validate_python(
            raw_samples
        )
    else:
        if file_type == ".csv":
            data_frame = pl.read_csv(file_name, try_parse_dates=True)
        else:
            data_frame = pl.read_parquet(file_name)

        if "date" not in data_frame.columns:
            raise exceptions.MissingColumnError(
                f"{file_name.name} does not contain a 'date' column."
            )
        data_frame = data_frame.with_columns(
            pl.col(pl.Float32, pl.Float64).fill_nan(None)
        )
        samples = extraction.data_frame_to_samples(data_frame)

    deduplicated = _deduplicate_by_date(samples)
    logger.debug(
        "Read %s samples from %s (%s after de-duplication).",
        len(samples),
        file_name,
        len(deduplicated),
    )
    return deduplicated


def _deduplicate_by_date(
    samples: List[models.DailySample],
) -> List[models.DailySample]:
    """Keep one sample per date, the last one encountered."""
    by_date = {}
    for sample in samples:
        by_date.pop(sample.date, None)
        by_date[sample.date] = sample
    return list(by_date.values())
