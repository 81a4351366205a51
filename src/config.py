from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

from src.health.models import Verbosity


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Logging
    log_level: str = "INFO"

    # Scheduled health check notifications
    health_notifications_enabled: bool = True
    health_notification_verbosity: Verbosity = Verbosity.SUMMARY
    health_notification_failure_only: bool = False  # only notify when a check fails

    # Channels (optional — Slack / Telegram / Discord)
    slack_webhook_url: str = ""
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    discord_webhook_url: str = ""


settings = Settings()


def configure_logging() -> None:
    """Install the root handler used by applications embedding the checks."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
