"""Internal data model."""

import datetime
import enum
from typing import Dict, Optional, Tuple

import polars as pl
import pydantic
from pydantic import BaseModel, field_validator


class Indicator(str, enum.Enum):
    """Wellness dimensions tracked by the daily check-in.

    `overall` is an aggregate of the other indicators. It is never analyzed on its
    own.
    """

    physical = "physical"
    mental = "mental"
    emotional = "emotional"
    sleep = "sleep"
    appetite = "appetite"
    overall = "overall"

    @classmethod
    def analyzable(cls) -> Tuple["Indicator", ...]:
        """Returns the indicators that are searched for a period, in order."""
        return tuple(indicator for indicator in cls if indicator is not cls.overall)


class DailySample(BaseModel):
    """One day of self-reported wellness scores.

    The values are treated as an opaque ordered scale; both 0-100 scores and 1-5
    ordinal answers are accepted.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    date: datetime.date
    indicator_values: Dict[Indicator, int] = pydantic.Field(default_factory=dict)

    @field_validator("indicator_values")
    def validate_no_overall(cls, v: Dict[Indicator, int]) -> Dict[Indicator, int]:
        """Validate that the aggregate indicator is not stored.

        Args:
            cls: The class.
            v: The indicator values to validate.

        Returns:
            v: The indicator values if they do not contain the overall indicator.

        Raises:
            ValueError: If a value is given for the overall indicator.
        """
        if Indicator.overall in v:
            raise ValueError("overall is derived from the other indicators")
        return v

    @property
    def overall(self) -> Optional[int]:
        """Integer mean of the recorded indicators, None if nothing was recorded."""
        if not self.indicator_values:
            return None
        return sum(self.indicator_values.values()) // len(self.indicator_values)

    def value_for(self, indicator: Indicator) -> Optional[int]:
        """Returns the recorded value for an indicator, or None if it is absent."""
        if indicator == Indicator.overall:
            return self.overall
        return self.indicator_values.get(indicator)


class PeriodEstimate(BaseModel):
    """A detected period for a single indicator."""

    model_config = pydantic.ConfigDict(frozen=True)

    indicator: Indicator
    period_days: float
    confidence: float
    sample_count_used: int
    computed_at: datetime.datetime

    @field_validator("period_days")
    def validate_period(cls, v: float) -> float:
        """Validate that the period is positive."""
        if v <= 0:
            raise ValueError("period_days must be greater than 0")
        return v

    @field_validator("confidence")
    def validate_confidence(cls, v: float) -> float:
        """Validate that the confidence is a score within [0, 1]."""
        if not 0 <= v <= 1:
            raise ValueError("confidence must be between 0 and 1")
        return v

    @property
    def cycle_days(self) -> int:
        """The period truncated to whole days."""
        return int(self.period_days)


class RhythmResult(BaseModel):
    """Outcome of one analysis run across all indicators.

    Indicators without a detectable period have no entry in `estimates`.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    estimates: Tuple[PeriodEstimate, ...] = ()
    total_data_points: int = 0
    analysis_date: datetime.datetime

    @field_validator("estimates")
    def validate_unique_indicators(
        cls, v: Tuple[PeriodEstimate, ...]
    ) -> Tuple[PeriodEstimate, ...]:
        """Validate that every indicator has at most one estimate.

        Raises:
            ValueError: If two estimates share an indicator.
        """
        indicators = [estimate.indicator for estimate in v]
        if len(indicators) != len(set(indicators)):
            raise ValueError("estimates must contain one entry per indicator")
        return v

    def estimate_for(self, indicator: Indicator) -> Optional[PeriodEstimate]:
        """Returns the estimate for an indicator, None if no period was detected."""
        for estimate in self.estimates:
            if estimate.indicator == indicator:
                return estimate
        return None

    def cycle_days(self, indicator: Indicator) -> Optional[int]:
        """Returns the detected cycle length in whole days, if any."""
        estimate = self.estimate_for(indicator)
        if estimate is None:
            return None
        return estimate.cycle_days

    def has_data(self, min_data_points: int = 1) -> bool:
        """Whether the result is backed by enough data and holds any estimate."""
        return self.total_data_points >= min_data_points and bool(self.estimates)

    def summary(self) -> str:
        """Human readable description of the result."""
        lines = [
            f"Total data points: {self.total_data_points}",
            f"Analysis date: {self.analysis_date.isoformat(timespec='seconds')}",
        ]
        if not self.estimates:
            lines.append("No period detected.")
        for estimate in self.estimates:
            lines.append(
                f"{estimate.indicator.value}: {estimate.period_days:.1f} days "
                f"(confidence {estimate.confidence:.3f}, "
                f"based on {estimate.sample_count_used} data points)"
            )
        return "\n".join(lines)

    def to_data_frame(self) -> pl.DataFrame:
        """Converts the estimates to a Polars DataFrame, one row per estimate."""
        return pl.DataFrame(
            {
                "indicator": [e.indicator.value for e in self.estimates],
                "period_days": [e.period_days for e in self.estimates],
                "confidence": [e.confidence for e in self.estimates],
                "sample_count_used": [e.sample_count_used for e in self.estimates],
                "computed_at": [e.computed_at for e in self.estimates],
            },
            schema={
                "indicator": pl.String,
                "period_days": pl.Float64,
                "confidence": pl.Float64,
                "sample_count_used": pl.Int64,
                "computed_at": pl.Datetime("us"),
            },
        )
