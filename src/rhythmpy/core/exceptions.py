"""Custom exceptions for rhythmpy."""

from rhythmpy.core import config

logger = config.get_logger()


class LoggedException(Exception):
    """Base class that automatically logs messages."""

    def __init__(self, message: str) -> None:
        """Initialize a new instance of the LoggedException class.

        Args:
            message: The message to display.
        """
        logger.exception(message)
        super().__init__(message)


class InvalidFileTypeError(LoggedException):
    """Rhythmpy did not expect this file extension."""

    pass


class EmptyDirectoryError(LoggedException):
    """No .csv, .parquet or .json sample files were found in the directory."""

    pass


class MissingColumnError(LoggedException):
    """A sample file did not contain a required column."""

    pass
