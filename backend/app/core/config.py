"""Application configuration."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./query_safety.db",
        description="Database connection URL"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Calendar-day bucketing
    timezone: str = Field(
        default="UTC",
        description="IANA time zone used to assign records to calendar days"
    )

    # Query submission
    max_query_length: int = Field(
        default=10000,
        description="Maximum length of a submitted query"
    )
    analyzer_seed: int | None = Field(
        default=None,
        description="Seed for the placeholder safety analyzer (None = unseeded)"
    )

    # Pagination
    default_page_size: int = Field(default=20, description="Default page size for query listings")
    max_page_size: int = Field(default=100, description="Maximum page size for query listings")
    max_report_page_size: int = Field(default=50, description="Maximum page size for report listings")

    # Dashboard / analytics windows
    recent_activity_limit: int = Field(default=10, description="Default number of recent activity items")
    max_recent_activity_limit: int = Field(default=50, description="Maximum number of recent activity items")
    realtime_limit: int = Field(default=20, description="Number of records in the realtime feed")
    overview_days: int = Field(default=7, description="Trailing window of the analytics overview")
    default_trend_days: int = Field(default=30, description="Default trailing window of the trend series")
    alert_window_hours: int = Field(default=24, description="Look-back window for high-risk alerts")

    # Reports
    report_max_records: int = Field(
        default=100000,
        description="Upper bound of records a single report may aggregate"
    )

    # Development Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the time zone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"timezone must be a valid IANA time zone, got {v!r}")
        return v

    @field_validator(
        "max_query_length",
        "default_page_size",
        "max_page_size",
        "max_report_page_size",
        "recent_activity_limit",
        "max_recent_activity_limit",
        "realtime_limit",
        "overview_days",
        "default_trend_days",
        "alert_window_hours",
        "report_max_records",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate integer is positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate defaults do not exceed their upper bounds."""
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must be less than or equal to max_page_size")
        if self.recent_activity_limit > self.max_recent_activity_limit:
            raise ValueError("recent_activity_limit must be less than or equal to max_recent_activity_limit")
        return self

    @property
    def tzinfo(self) -> ZoneInfo:
        """Configured time zone as a tzinfo object."""
        return ZoneInfo(self.timezone)


# Global settings instance
settings = Settings()
