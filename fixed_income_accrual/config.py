"""Engine configuration loaded from environment variables via pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valuation engine configuration.

    All fields are loaded from environment variables prefixed with ``FIXED_INCOME_``.

    Example::

        export FIXED_INCOME_DEFAULT_BENCHMARK_RATE=10.65
        export FIXED_INCOME_HISTORY_MAX_POINTS=90
        export FIXED_INCOME_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="FIXED_INCOME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_benchmark_rate: float = Field(
        default=11.15,
        description="CDI annual rate (percent) used when the caller has no fresher snapshot",
    )
    history_max_points: int = Field(
        default=60,
        ge=1,
        description="Upper bound on sampled points in an investment history chart",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum loguru level for setup_logging()",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    return Settings()
