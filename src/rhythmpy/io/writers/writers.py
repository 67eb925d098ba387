"""Module containing the functions for writing rhythm results to files."""

import pathlib
from typing import Union

import polars as pl

from rhythmpy.core import config, exceptions, models

VALID_FILE_TYPES = (".json", ".csv", ".parquet")

logger = config.get_logger()


def save_result(
    result: models.RhythmResult, output: Union[pathlib.Path, str]
) -> None:
    """Save a rhythm result as a json, csv or parquet file.

    The json form holds every field and can be read back with load_result. The
    tabular forms hold one row per detected period, with the total number of data
    points and the analysis date repeated on every row. Indicators without a
    detected period have no row. A result without any detected period is written
    as a single row whose estimate columns are null.

    Args:
        result: The result to save.
        output: The path and file name of the data to be saved.
    """
    output = pathlib.Path(output)
    logger.debug("Saving results.")
    validate_output(output=output)
    output.parent.mkdir(parents=True, exist_ok=True)

    if output.suffix == ".json":
        output.write_text(result.model_dump_json(indent=4))
    else:
        results_dataframe = result.to_data_frame()
        if results_dataframe.is_empty():
            results_dataframe = pl.DataFrame(
                {column: [None] for column in results_dataframe.columns},
                schema=results_dataframe.schema,
            )
        results_dataframe = results_dataframe.with_columns(
            total_data_points=pl.lit(result.total_data_points, dtype=pl.Int64),
            analysis_date=pl.lit(result.analysis_date, dtype=pl.Datetime("us")),
        )
        if output.suffix == ".csv":
            results_dataframe.write_csv(output, separator=",")
        else:
            results_dataframe.write_parquet(output)

    logger.info("Results saved in: %s", output)


def load_result(path: Union[pathlib.Path, str]) -> models.RhythmResult:
    """Load a rhythm result previously saved as json.

    Args:
        path: The json file to read.

    Returns:
        The stored RhythmResult.

    Raises:
        InvalidFileTypeError: If the file is not a .json file.
    """
    path = pathlib.Path(path)
    if path.suffix != ".json":
        raise exceptions.InvalidFileTypeError(
            f"Only .json results can be loaded, got: {path.suffix}"
        )
    return models.RhythmResult.model_validate_json(path.read_text())


def validate_output(output: pathlib.Path) -> None:
    """Validates that the output path is a valid format.

    Args:
        output: the name of the file to be saved, and the directory it will
            be saved in. Must be a .json, .csv or .parquet file.

    Raises:
        InvalidFileTypeError: If the output file path ends with any extension other
            than json, csv or parquet.
    """
    if output.suffix not in VALID_FILE_TYPES:
        raise exceptions.InvalidFileTypeError(
            f"The extension: {output.suffix} is not supported. "
            "Please save the file as .json, .csv or .parquet",
        )
