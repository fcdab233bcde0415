"""Service configuration.

Settings are read from the environment (or a local .env file) using the same
variable names the HTTP deployment uses, e.g. MAX_COUNT=500.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mockdata.utils.helpers import to_boolean


class Settings(BaseSettings):
    """Mock data service configuration.

    Only ``max_count`` and ``default_count`` are consumed by the generation
    core; the remaining values belong to the HTTP layer and are reported by
    the health payload.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    max_count: int = Field(
        default=100,
        ge=1,
        description="Upper bound on records per request",
    )
    default_count: int = Field(
        default=1,
        ge=1,
        description="Record count used when none (or an invalid one) is given",
    )
    rate_limit_per_hour: int = Field(
        default=1000,
        description="Requests allowed per IP per hour",
    )
    disable_rate_limit: bool = Field(
        default=False,
        description="Turn the per-IP rate limiter off",
    )
    cors_origin: str | None = Field(
        default=None,
        description="Comma-separated list of allowed origins ('*' for any)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="console",
        description="Log rendering: 'console' or 'json'",
    )

    @field_validator("disable_rate_limit", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return to_boolean(value)

    @property
    def rate_limit_enabled(self) -> bool:
        return not self.disable_rate_limit and self.rate_limit_per_hour > 0

    @property
    def allowed_origins(self) -> list[str]:
        """Explicit origin allow-list; empty means every origin is allowed."""
        if not self.cors_origin or self.cors_origin in ("*", "true"):
            return []
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, loaded once from the environment."""
    return Settings()
