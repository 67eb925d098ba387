"""Python based runner."""

import datetime
import itertools
import logging
import pathlib
from typing import Callable, Dict, Literal, Optional, Sequence, Union

from rich import progress

from rhythmpy.core import config, exceptions, models
from rhythmpy.io.readers import readers
from rhythmpy.io.writers import writers
from rhythmpy.processing import extraction, search

logger = config.get_logger()

VALID_FILE_TYPES = (".json", ".csv", ".parquet")

Clock = Callable[[], datetime.datetime]


def analyze(
    samples: Sequence[models.DailySample],
    settings: Optional[config.AnalysisSettings] = None,
    clock: Optional[Clock] = None,
) -> models.RhythmResult:
    """Detects the personal period of every indicator in a sample history.

    The samples are sorted by date once, then each analyzable indicator is
    extracted and searched independently. Indicators with no values, or whose best
    period does not reach the confidence floor, are left out of the result. Too
    little data yields an empty result rather than an error.

    Args:
        samples: The daily samples, in any order.
        settings: The analysis settings. Defaults to AnalysisSettings().
        clock: Returns the current time, used to stamp the result. Defaults to
            datetime.datetime.now.

    Returns:
        A RhythmResult with one PeriodEstimate per indicator with a detected period.
    """
    settings = settings or config.AnalysisSettings()
    clock = clock or datetime.datetime.now
    analysis_date = clock()

    if len(samples) < settings.min_data_points:
        logger.info(
            "Not enough data: %s samples, at least %s required.",
            len(samples),
            settings.min_data_points,
        )
        return models.RhythmResult(
            estimates=(), total_data_points=len(samples), analysis_date=analysis_date
        )

    sorted_samples = extraction.sort_samples(samples)
    logger.debug("Analyzing %s samples.", len(sorted_samples))

    estimates = []
    for indicator in models.Indicator.analyzable():
        series = extraction.extract(indicator, sorted_samples)
        if series.size == 0:
            logger.debug("%s: no values recorded.", indicator.value)
            continue

        estimate = search.search(
            series,
            indicator,
            min_period=settings.min_period,
            max_period=settings.max_period,
            step=settings.step,
            confidence_floor=settings.confidence_floor,
            computed_at=analysis_date,
        )
        if estimate is None:
            logger.debug("%s: no valid period detected.", indicator.value)
            continue
        estimates.append(estimate)

    logger.info(
        "Analysis complete, %s of %s indicators have a period, based on %s samples.",
        len(estimates),
        len(models.Indicator.analyzable()),
        len(samples),
    )
    return models.RhythmResult(
        estimates=tuple(estimates),
        total_data_points=len(samples),
        analysis_date=analysis_date,
    )


def run(
    input: Union[pathlib.Path, str],
    output: Optional[Union[pathlib.Path, str]] = None,
    settings: Optional[config.AnalysisSettings] = None,
    verbosity: int = logging.WARNING,
    output_filetype: Literal[".json", ".csv", ".parquet"] = ".json",
) -> Union[models.RhythmResult, Dict[str, models.RhythmResult]]:
    """Runs the rhythm analysis on single sample files, or directories.

    The run() function will execute the _run_file() function on individual files,
    or _run_directory() on entire directories. When the input path points to a
    file, the name of the save file will be taken from the given output path (if
    any). When the input path points to a directory the output path must be a
    directory as well, and output file names are derived from input file names.

    Args:
        input: Path to the input file or directory of files to be read. Currently,
            this supports .csv, .parquet and .json.
        output: Path to save data to. If processing a single file the path should
            end in the save file name in .json, .csv or .parquet format.
        settings: The analysis settings. Defaults to AnalysisSettings().
        verbosity: The logging level for the logger.
        output_filetype: Specifies the data format for the save files. Only used
            when processing directories.

    Returns:
        The RhythmResult of a single file, or a dictionary of RhythmResult objects
        keyed by input file.
    """
    logger.setLevel(verbosity)

    input = pathlib.Path(input)
    output = pathlib.Path(output) if output is not None else None
    settings = settings or config.AnalysisSettings()

    if input.is_file():
        return _run_file(input=input, output=output, settings=settings)

    return _run_directory(
        input=input,
        output=output,
        settings=settings,
        output_filetype=output_filetype,
    )


def _run_directory(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    settings: Optional[config.AnalysisSettings] = None,
    output_filetype: Literal[".json", ".csv", ".parquet"] = ".json",
) -> Dict[str, models.RhythmResult]:
    """Runs the rhythm analysis on every sample file of a directory.

    Files that fail to process are logged and skipped.

    Args:
        input: Path to the input directory of files to be read.
        output: Path to directory data will be saved to.
        settings: The analysis settings.
        output_filetype: Specifies the data format for the save files.

    Returns:
        A dictionary of RhythmResult objects keyed by input file.

    Raises:
        ValueError: If the output given is a file.
        ValueError: If the output_filetype is not a valid type.
        EmptyDirectoryError: If the input directory contained no sample files.
    """
    if output is not None:
        if output.is_file():
            raise ValueError(
                "Output is a file, but must be a directory when input is a directory."
            )
        if output_filetype not in VALID_FILE_TYPES:
            raise ValueError(
                "Invalid output_filetype: "
                f"{output_filetype}. Valid options are: {VALID_FILE_TYPES}."
            )

    file_names = sorted(
        itertools.chain(
            input.glob("*.csv"), input.glob("*.parquet"), input.glob("*.json")
        )
    )

    if not file_names:
        raise exceptions.EmptyDirectoryError(
            f"Directory {input} contains no .csv, .parquet or .json files."
        )
    results_dict = {}
    with progress.Progress(
        progress.SpinnerColumn(),
        progress.TextColumn("[progress.description]{task.description}"),
        progress.BarColumn(),
        progress.TaskProgressColumn(),
        console=None,
    ) as progress_bar:
        task = progress_bar.add_task(
            f"[cyan]Processing files in {input.name}...", total=len(file_names)
        )

        for file in file_names:
            output_file_path = (
                output / pathlib.Path(file.stem).with_suffix(output_filetype)
                if output
                else None
            )
            logger.debug(
                "Processing directory: %s, current file: %s, save path: %s",
                input,
                file,
                output_file_path,
            )
            try:
                results_dict[str(file)] = _run_file(
                    input=file, output=output_file_path, settings=settings
                )
            except Exception as e:
                logger.error("Did not run file: %s, Error: %s", file, e)
            progress_bar.update(task, advance=1)
    logger.info("Processing for directory %s completed successfully.", input)
    return results_dict


def _run_file(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    settings: Optional[config.AnalysisSettings] = None,
) -> models.RhythmResult:
    """Reads one sample file, analyzes it and optionally saves the result.

    Args:
        input: Path to the input file to be read.
        output: Path to save data to, ending in .json, .csv or .parquet.
        settings: The analysis settings.

    Returns:
        The RhythmResult of the file.
    """
    if output is not None:
        writers.validate_output(output=output)

    samples = readers.read_daily_samples(input)
    result = analyze(samples, settings=settings)

    if output is not None:
        try:
            writers.save_result(result, output=output)
        except (
            exceptions.InvalidFileTypeError,
            PermissionError,
            FileExistsError,
        ) as exc_info:
            # Allowed to pass to recover in Jupyter Notebook scenarios.
            logger.error(
                "Could not save output due to: %s. Call writers.save_result "
                "with a correct filename to save these results.",
                exc_info,
            )
    logger.info("Processing for %s completed successfully.", input.stem)
    return result
