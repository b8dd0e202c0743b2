"""
Configuration and logging setup tests.
"""

import logging
from uuid import uuid4

from feed.config import Settings
from feed.logging_config import configure_logging
from feed.services.notifications import NotificationService


class TestSettings:
    def test_defaults(self, monkeypatch):
        """Defaults suppress notifications from unknown actors."""
        monkeypatch.delenv("NOTIFY_ON_MISSING_ACTOR", raising=False)
        monkeypatch.delenv("DEFAULT_PAGE_SIZE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.notify_on_missing_actor is False
        assert settings.default_page_size == 20

    def test_environment_overrides(self, monkeypatch):
        """Environment variables are read case-insensitively."""
        monkeypatch.setenv("NOTIFY_ON_MISSING_ACTOR", "true")
        monkeypatch.setenv("default_page_size", "50")

        settings = Settings(_env_file=None)

        assert settings.notify_on_missing_actor is True
        assert settings.default_page_size == 50


class TestConfigureLogging:
    def test_sets_package_level(self):
        """The feed logger follows the requested level."""
        configure_logging("debug")

        assert logging.getLogger("feed").level == logging.DEBUG

    async def test_service_logs_suppression(self, caplog, directory):
        """Suppression decisions are logged at DEBUG by the service logger."""
        actor = uuid4()
        service = NotificationService(db=None, identity=directory)

        with caplog.at_level(logging.DEBUG, logger="feed.services.notifications"):
            result = await service.create_if_not_self(actor, actor, "like", {})

        assert result is None
        assert "Suppressed self-like notification" in caplog.text
