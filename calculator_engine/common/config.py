"""Engine configuration."""
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_DIGIT_LIMIT = 12


class EngineSettings(BaseSettings):
    """
    Settings fixed once when the engine is built.

    Loaded from ``CALCULATOR_DIGIT_LIMIT`` and ``CALCULATOR_LOG_LEVEL``, falling
    back to the field defaults. The digit limit bounds both how many digits a
    number being typed may hold and the precision results are rounded to
    before display.
    """

    model_config = SettingsConfigDict(env_prefix="CALCULATOR_", frozen=True)

    digit_limit: int = Field(default=DEFAULT_DIGIT_LIMIT, ge=1, description="Maximum digits per entry or result")
    log_level: LogLevel = Field(default="WARNING", description="Level of the package logger")

    @field_validator("log_level", mode="before")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v
