"""CLI for rhythmpy."""

import logging
import pathlib
from enum import Enum

import pydantic
import typer

from rhythmpy.core import config, exceptions, models

logger = config.get_logger()
app = typer.Typer(
    help="Detect personal rhythms in daily check-in data.",
)


class OutputFileType(str, Enum):
    """Valid output file types for saving data."""

    json = ".json"
    csv = ".csv"
    parquet = ".parquet"


def version_check(version: bool) -> None:
    """Print the current version of rhythmpy and exit."""
    if version:
        typer.echo(f"Rhythmpy version: {config.get_version()}")
        raise typer.Exit()


@app.command()
def main(
    input: pathlib.Path = typer.Argument(
        ..., help="Path to the input sample file or directory.", exists=True
    ),
    output: pathlib.Path = typer.Option(
        None,
        "-o",
        "--output",
        help="Path where data will be saved. Supports .json, .csv and .parquet.",
    ),
    output_filetype: OutputFileType = typer.Option(
        ".json",
        "-O",
        "--output-filetype",
        help="Format for save files when processing directories.",
    ),
    min_period: float = typer.Option(
        7.0, "--min-period", help="Shortest candidate period in days."
    ),
    max_period: float = typer.Option(
        45.0, "--max-period", help="Longest candidate period in days."
    ),
    step: float = typer.Option(
        0.5, "--step", help="Resolution of the period search in days."
    ),
    confidence_floor: float = typer.Option(
        0.25,
        "--confidence-floor",
        help="Minimum score, between 0 and 1, for a period to be reported.",
    ),
    min_data_points: int = typer.Option(
        1,
        "--min-data-points",
        help="Minimum number of daily samples before analyzing.",
        min=0,
    ),
    verbosity: bool = typer.Option(
        False,
        "-v",
        "--verbosity",
        help="Determines the level of verbosity. Use -v for DEBUG. "
        "Defaults to INFO if not included.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Print the current version of rhythmpy and exit.",
        is_eager=True,
        callback=version_check,
    ),
) -> None:
    """Run the rhythmpy orchestrator with command line arguments."""
    from rhythmpy.core import orchestrator

    log_level = logging.INFO
    if verbosity:
        log_level = logging.DEBUG
    logger.setLevel(log_level)

    try:
        settings = config.AnalysisSettings(
            min_period=min_period,
            max_period=max_period,
            step=step,
            confidence_floor=confidence_floor,
            min_data_points=min_data_points,
        )
    except pydantic.ValidationError as e:
        raise typer.BadParameter(str(e))

    logger.debug("Running rhythmpy. arguments given: %s", locals())
    try:
        results = orchestrator.run(
            input=input,
            output=output,
            settings=settings,
            verbosity=log_level,
            output_filetype=output_filetype.value,
        )
    except exceptions.EmptyDirectoryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if isinstance(results, models.RhythmResult):
        typer.echo(results.summary())


if __name__ == "__main__":
    app()
