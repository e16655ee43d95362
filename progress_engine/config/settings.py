from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="PROGRESS_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="PROGRESS_LOG_FILE")
    timezone: str = Field(default="UTC", validation_alias="PROGRESS_TIMEZONE")
    calories_per_minute: float = Field(default=8.0, ge=0, validation_alias="PROGRESS_CALORIES_PER_MINUTE")
    expected_sessions_week: int = Field(default=4, validation_alias="PROGRESS_EXPECTED_SESSIONS_WEEK")
    expected_sessions_month: int = Field(default=16, validation_alias="PROGRESS_EXPECTED_SESSIONS_MONTH")
    expected_sessions_year: int = Field(default=200, validation_alias="PROGRESS_EXPECTED_SESSIONS_YEAR")
    default_cache_ttl_seconds: float = Field(default=300.0, gt=0, validation_alias="PROGRESS_DEFAULT_CACHE_TTL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("expected_sessions_week", "expected_sessions_month", "expected_sessions_year")
    @classmethod
    def validate_expected_sessions(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Expected session targets must be positive integers")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = (value or "INFO").upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            logger.warning(f"Unknown log level {value!r}, using INFO")
            return "INFO"
        return level


settings = Settings()
