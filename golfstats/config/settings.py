from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str | None = Field(
        default=None,
        validation_alias="GOLFSTATS_LOG_LEVEL",
        description="Minimum log level; logging is left to the host application when this and log_file are unset",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="GOLFSTATS_LOG_FILE",
        description="Optional log file path; console only when unset",
    )
    log_rotation: str = Field(default="10 MB", validation_alias="GOLFSTATS_LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="GOLFSTATS_LOG_RETENTION")
    handicap_trend_window: int = Field(
        default=20,
        ge=1,
        validation_alias="GOLFSTATS_HANDICAP_TREND_WINDOW",
        description="Trailing number of rounds used for each handicap trend point",
    )
    recent_rounds_window: int = Field(
        default=10,
        ge=1,
        validation_alias="GOLFSTATS_RECENT_ROUNDS_WINDOW",
        description="Rounds in the recent and older slices of the improvement comparison",
    )
    exclude_recent_overlap: bool = Field(
        default=False,
        validation_alias="GOLFSTATS_EXCLUDE_RECENT_OVERLAP",
        description="Build the older slice only from rounds outside the recent slice",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        """Validate that log level is one of the standard logging levels."""
        if value is None:
            return None
        valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid GOLFSTATS_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @property
    def logging_requested(self) -> bool:
        return self.log_level is not None or bool(self.log_file)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
