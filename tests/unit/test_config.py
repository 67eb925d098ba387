"""Test logging and settings in config.py."""

import logging

import pydantic
import pytest

from rhythmpy.core import config


def test_get_logger(caplog: pytest.LogCaptureFixture) -> None:
    """Test the rhythmpy logger with level set to default 20 (info)."""
    if logging.getLogger("rhythmpy").handlers:
        logging.getLogger("rhythmpy").handlers.clear()
    logger = config.get_logger()

    logger.debug("Debug message here.")
    logger.info("Info message here.")
    logger.warning("Warning message here.")

    assert logger.getEffectiveLevel() == 20
    assert "Debug message here" not in caplog.text
    assert "Info message here." in caplog.text
    assert "Warning message here." in caplog.text


def test_get_logger_second_call() -> None:
    """Test get logger when a handler already exists."""
    logger = config.get_logger()
    second_logger = config.get_logger()

    assert len(logger.handlers) == len(second_logger.handlers) == 1
    assert logger.handlers[0] is second_logger.handlers[0]
    assert logger is second_logger


def test_settings_defaults() -> None:
    """Test the default analysis settings."""
    settings = config.AnalysisSettings()

    assert settings.min_period == 7
    assert settings.max_period == 45
    assert settings.step == 0.5
    assert settings.confidence_floor == 0.25
    assert settings.min_data_points == 1
    assert settings.recompute_cadence == 5
    assert settings.debounce_seconds == 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"step": 0},
        {"min_period": -1},
        {"min_period": 20, "max_period": 10},
        {"confidence_floor": 1.5},
        {"min_data_points": -1},
        {"recompute_cadence": 0},
        {"debounce_seconds": -0.5},
    ],
)
def test_settings_invalid(kwargs: dict) -> None:
    """Test invalid settings are rejected."""
    with pytest.raises(pydantic.ValidationError):
        config.AnalysisSettings(**kwargs)


def test_settings_frozen() -> None:
    """Test settings cannot be changed after creation."""
    settings = config.AnalysisSettings()

    with pytest.raises(pydantic.ValidationError):
        settings.step = 1.0  # type: ignore[misc]


def test_get_version_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the version fallback when the package is not installed."""

    def not_found(name: str) -> str:
        raise config.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(config.metadata, "version", not_found)

    assert config.get_version() == "Version unknown"
