"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MODEL_SONAR = "sonar"
MODEL_SONAR_PRO = "sonar-pro"
MODEL_SONAR_REASONING = "sonar-reasoning"
MODEL_SONAR_REASONING_PRO = "sonar-reasoning-pro"
MODEL_SONAR_DEEP_RESEARCH = "sonar-deep-research"

KNOWN_MODELS = (
    MODEL_SONAR,
    MODEL_SONAR_PRO,
    MODEL_SONAR_REASONING,
    MODEL_SONAR_REASONING_PRO,
    MODEL_SONAR_DEEP_RESEARCH,
)

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_prefix="PERPLEXITY_", env_file=".env", extra="ignore"
    )

    # Required settings
    api_key: str = Field(min_length=1)

    # Request defaults
    default_model: str = MODEL_SONAR
    max_tokens: int = Field(default=1024, gt=0)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, ge=0.0, le=1.0)
    top_k: int = Field(default=0, ge=0)
    timeout: float = Field(default=30.0, gt=0.0)
    return_images: bool = False
    return_related: bool = False

    # Result caching is disabled when this is empty
    results_root_folder: str = ""

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"

    @field_validator("default_model")
    @classmethod
    def validate_model(cls, value: str) -> str:
        if value not in KNOWN_MODELS:
            raise ValueError(
                f"model '{value}' is not valid, expected one of: {', '.join(KNOWN_MODELS)}"
            )
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def parse_timeout(cls, value):
        """Accept plain seconds or a duration string such as '30s', '500ms' or '2m'."""
        if isinstance(value, str):
            match = _DURATION_PATTERN.match(value)
            if not match:
                raise ValueError(f"invalid duration: {value!r}")
            amount, unit = match.groups()
            return float(amount) * _DURATION_UNITS[unit or "s"]
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"invalid log level: {value!r}")
        return level

    @property
    def caching_enabled(self) -> bool:
        return bool(self.results_root_folder)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore
