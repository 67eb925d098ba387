"""Configuration module for rhythmpy."""

import logging
from importlib import metadata

import pydantic


def get_version() -> str:
    """Return rhythmpy version."""
    try:
        return metadata.version("rhythmpy")
    except metadata.PackageNotFoundError:
        return "Version unknown"


def get_logger() -> logging.Logger:
    """Gets the rhythmpy logger."""
    logger = logging.getLogger("rhythmpy")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)s - %(funcName)s - %(message)s",  # noqa: E501
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


class AnalysisSettings(pydantic.BaseModel):
    """Tunable options of the period detection engine.

    Attributes:
        min_period: Shortest candidate period, in samples (days).
        max_period: Longest candidate period, inclusive.
        step: Resolution of the candidate sweep.
        confidence_floor: Minimum composite score for a period to be reported.
        min_data_points: Minimum number of daily samples before any analysis is
            attempted.
        recompute_cadence: Number of new samples between automatic recomputations.
        debounce_seconds: Quiet time before a burst of sample changes triggers a
            recomputation.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    min_period: float = 7.0
    max_period: float = 45.0
    step: float = 0.5
    confidence_floor: float = 0.25
    min_data_points: int = 1
    recompute_cadence: int = 5
    debounce_seconds: float = 1.0

    @pydantic.field_validator("min_period", "step")
    def validate_positive(cls, v: float) -> float:
        """Validate that the value is strictly positive.

        Raises:
            ValueError: If the value is zero or negative.
        """
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    @pydantic.field_validator("confidence_floor")
    def validate_confidence_floor(cls, v: float) -> float:
        """Validate that the confidence floor is within [0, 1].

        Raises:
            ValueError: If the confidence floor is outside of [0, 1].
        """
        if not 0 <= v <= 1:
            raise ValueError("confidence_floor must be between 0 and 1")
        return v

    @pydantic.field_validator("min_data_points", "debounce_seconds")
    def validate_non_negative(cls, v: float) -> float:
        """Validate that the value is not negative."""
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @pydantic.field_validator("recompute_cadence")
    def validate_cadence(cls, v: int) -> int:
        """Validate that the recompute cadence is at least one sample."""
        if v < 1:
            raise ValueError("recompute_cadence must be at least 1")
        return v

    @pydantic.model_validator(mode="after")
    def validate_period_bounds(self) -> "AnalysisSettings":
        """Validate that the period bounds are ordered.

        Raises:
            ValueError: If max_period is smaller than min_period.
        """
        if self.max_period < self.min_period:
            raise ValueError("max_period must be greater than or equal to min_period")
        return self
