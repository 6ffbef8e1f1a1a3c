"""Unit tests for configuration validation."""

from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError
from backend.app.core.config import Settings


class TestSettingsValidation:
    """Test cases for Settings validation."""

    def test_default_settings(self):
        """Test that default settings are valid."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.timezone == "UTC"
        assert settings.default_page_size <= settings.max_page_size
        assert settings.recent_activity_limit <= settings.max_recent_activity_limit
        assert settings.report_max_records > 0

    def test_log_level_validation_valid(self):
        """Test log level accepts valid values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

        for level in valid_levels:
            settings = Settings(log_level=level)
            assert settings.log_level == level.upper()

    def test_log_level_validation_case_insensitive(self):
        """Test log level is case-insensitive."""
        settings = Settings(log_level="info")
        assert settings.log_level == "INFO"

        settings = Settings(log_level="DeBuG")
        assert settings.log_level == "DEBUG"

    def test_log_level_validation_invalid(self):
        """Test log level rejects invalid values."""
        with pytest.raises(ValidationError, match="log_level must be one of"):
            Settings(log_level="INVALID")

    def test_timezone_valid(self):
        """Test timezone accepts IANA names and exposes a tzinfo."""
        settings = Settings(timezone="Europe/Berlin")

        assert settings.timezone == "Europe/Berlin"
        assert settings.tzinfo == ZoneInfo("Europe/Berlin")

    def test_timezone_invalid(self):
        """Test timezone rejects unknown names."""
        with pytest.raises(ValidationError, match="timezone must be a valid IANA time zone"):
            Settings(timezone="Mars/Olympus_Mons")

    def test_page_size_positive(self):
        """Test page sizes must be positive."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(default_page_size=0)

        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(max_report_page_size=-1)

    def test_report_max_records_positive(self):
        """Test report_max_records must be positive."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(report_max_records=0)

    def test_alert_window_positive(self):
        """Test alert_window_hours must be positive."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(alert_window_hours=0)

    def test_default_page_size_within_max(self):
        """Test default_page_size cannot exceed max_page_size."""
        with pytest.raises(
            ValidationError,
            match="default_page_size must be less than or equal to max_page_size"
        ):
            Settings(default_page_size=50, max_page_size=10)

    def test_recent_activity_limit_within_max(self):
        """Test recent_activity_limit cannot exceed max_recent_activity_limit."""
        with pytest.raises(
            ValidationError,
            match="recent_activity_limit must be less than or equal to max_recent_activity_limit"
        ):
            Settings(recent_activity_limit=60, max_recent_activity_limit=50)

    def test_default_trend_days_positive(self):
        """Test default_trend_days must be positive; it has no upper bound."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(default_trend_days=0)

        assert Settings(default_trend_days=1000).default_trend_days == 1000

    def test_cors_origins_list(self):
        """Test CORS origins are split and stripped."""
        settings = Settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
