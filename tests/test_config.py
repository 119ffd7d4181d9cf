"""Configuration defaults and environment overrides."""

import logging
from pathlib import Path

import pytest


class TestProjectStructure:
    """Files the project ships with."""

    def test_env_example_exists(self):
        """Environment template must exist."""
        env_path = Path(__file__).parent.parent / ".env.example"
        assert env_path.exists(), ".env.example file missing"

    def test_env_example_lists_backend_url(self):
        env_path = Path(__file__).parent.parent / ".env.example"
        assert "API_BASE_URL" in env_path.read_text()


class TestConfiguration:
    """Test configuration loading."""

    def test_settings_import(self):
        """Settings module should import without error."""
        from gramin_portal.config import settings
        assert settings is not None
        assert settings.api.base_url

    def test_api_defaults(self):
        from gramin_portal.config import ApiSettings
        api = ApiSettings()
        assert api.base_url.endswith("/api")
        assert api.timeout_seconds == 30.0

    def test_polling_intervals(self):
        """Session list refreshes every 30s, the notification badge every 60s."""
        from gramin_portal.config import PollingSettings
        polling = PollingSettings()
        assert polling.sessions_seconds == 30.0
        assert polling.notifications_seconds == 60.0

    def test_ui_defaults(self):
        from gramin_portal.config import UISettings
        ui = UISettings()
        assert ui.language == "en"
        assert ui.first_year == 2024
        assert ui.title == "Dhuripara Village"

    def test_env_override(self, monkeypatch):
        """API_ prefixed variables override the backend settings."""
        from gramin_portal.config import ApiSettings
        monkeypatch.setenv("API_BASE_URL", "http://bank.example/api")
        monkeypatch.setenv("API_TIMEOUT_SECONDS", "5")
        api = ApiSettings()
        assert api.base_url == "http://bank.example/api"
        assert api.timeout_seconds == 5.0

    def test_configure_logging_accepts_unknown_level(self):
        from gramin_portal.config import configure_logging
        configure_logging("not-a-level")
        assert logging.getLogger("gramin_portal").getEffectiveLevel() <= logging.CRITICAL

    def test_configure_logging_level_is_optional(self):
        """Without a level the configured ``log_level`` is used."""
        from typing import Optional, get_type_hints

        from gramin_portal.config import configure_logging
        assert get_type_hints(configure_logging)["level"] == Optional[str]
        configure_logging()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
