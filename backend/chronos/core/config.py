from functools import lru_cache
import logging
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronos.core.exceptions import ConfigurationError


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so overrides apply from any cwd.
    model_config = SettingsConfigDict(
        env_file=str(BACKEND_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="CHRONOS_",
        extra="ignore",
    )

    project_name: str = "Chronos Scheduler"
    log_level: str = "INFO"

    mandatory_periods: int = Field(default=3, ge=0, le=12)
    daily_load_limit: int = Field(default=3, ge=1, le=24)
    forced_daily_load_limit: int = Field(default=4, ge=1, le=24)
    max_consecutive_lectures: int = Field(default=3, ge=2, le=24)

    substitute_base_rank: int = 100
    substitute_load_penalty: int = Field(default=10, ge=0)
    substitute_section_bonus: int = Field(default=50, ge=0)

    @model_validator(mode="after")
    def validate_load_limits(self) -> "Settings":
        if self.forced_daily_load_limit < self.daily_load_limit:
            raise ValueError("forced_daily_load_limit cannot be lower than daily_load_limit")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {settings.log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("chronos").setLevel(level)
