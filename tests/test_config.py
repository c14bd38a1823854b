"""
Unit tests for settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from floor_oee.config import ProductionSettings, Settings


class TestSettings:
    """Test the documented settings surface and its validators."""

    def test_documented_fields(self):
        assert set(Settings.model_fields) == {
            "APP_NAME", "VERSION", "ENVIRONMENT", "HOST", "PORT", "LOG_LEVEL",
            "ALLOWED_ORIGINS", "DATA_DIRECTORY", "STATUS_FILE",
            "MANUAL_STATUS_FILE", "PRODUCTION_FILE", "TIMESTAMP_FORMAT",
            "DEFAULT_DOWNTIME_REASON", "ENABLE_METRICS",
        }

    def test_comma_separated_origins(self):
        settings = Settings(ALLOWED_ORIGINS="http://a.local, http://b.local,")

        assert settings.ALLOWED_ORIGINS == ["http://a.local", "http://b.local"]

    def test_unknown_environment_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT="qa")

    def test_log_level_is_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_environment_subclass_sets_log_level(self):
        assert ProductionSettings().LOG_LEVEL == "WARNING"

    def test_data_path(self, tmp_path):
        settings = Settings(DATA_DIRECTORY=str(tmp_path))

        assert settings.data_path("status.json") == str(tmp_path / "status.json")
        assert settings.data_path("/srv/status.json") == "/srv/status.json"
