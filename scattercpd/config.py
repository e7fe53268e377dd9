"""
Configuration for the change detector.

Defaults can be overridden from the environment, e.g.
``SCATTERCPD_LOG_LEVEL=DEBUG`` or ``SCATTERCPD_DETECTOR__CONFIDENCE=99``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .student import Confidence


def coerce_confidence(value) -> Confidence:
    """Map a Confidence, a member name ("CONF95") or a percent (95, "99.5")."""
    if isinstance(value, Confidence):
        return value
    if isinstance(value, str):
        name = value.strip().upper()
        if name in Confidence.__members__:
            return Confidence[name]
        try:
            value = float(name.rstrip("%"))
        except ValueError:
            raise ConfigurationError(f"cannot interpret confidence {value!r}") from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"cannot interpret confidence {value!r}")
    return Confidence.from_percent(value)


class DetectorConfig(BaseModel):
    """
    Default scan parameters.

    Notes:
    - min_sample_size: minimum extra points on each side of a split.
    - confidence: t-test level, given as a percent or member name.
    - use_numba: run the compiled scan kernel instead of the Python loop.
    """

    min_sample_size: int = Field(5, ge=0)
    confidence: Confidence = Confidence.CONF95
    use_numba: bool = True

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value):
        try:
            return coerce_confidence(value)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc


class Config(BaseSettings):
    """
    Global configuration with environment overrides.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCATTERCPD_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Default logging level")
    log_file: Optional[Path] = Field(None, description="Optional rotating log file")
    detector: DetectorConfig = DetectorConfig()


config = Config()
