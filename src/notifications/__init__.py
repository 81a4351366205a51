"""Health check notifications — Slack, Telegram and Discord webhooks.

Sends the rendered results of a scheduled health check run:
- Slack / Telegram get the compact chat Markdown (• bullets, *bold*)
- Discord gets the regular Markdown (- bullets, **bold**)
- HTML is available for e-mail style senders via render_html_report()

All webhook calls are fire-and-forget; a failing channel is logged, never raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

import httpx

from src.config import settings
from src.health import HealthCheck, HealthCheckResults, Verbosity

logger = logging.getLogger(__name__)


def _heading() -> str:
    run_at = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"Results of the scheduled health checks run on {run_at} are as follows:"


class HealthCheckNotifier:
    """Central dispatcher for scheduled health check reports."""

    def __init__(
        self,
        slack_webhook: str = "",
        telegram_token: str = "",
        telegram_chat_id: str = "",
        discord_webhook: str = "",
        verbosity: Verbosity | None = None,
        failure_only: bool | None = None,
    ) -> None:
        self.slack_webhook = slack_webhook or settings.slack_webhook_url
        self.telegram_token = telegram_token or settings.telegram_bot_token
        self.telegram_chat_id = telegram_chat_id or settings.telegram_chat_id
        self.discord_webhook = discord_webhook or settings.discord_webhook_url
        self.verbosity = verbosity or settings.health_notification_verbosity
        self.failure_only = (
            settings.health_notification_failure_only if failure_only is None else failure_only
        )
        self._enabled = settings.health_notifications_enabled and bool(
            self.slack_webhook
            or (self.telegram_token and self.telegram_chat_id)
            or self.discord_webhook
        )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def status(self) -> dict[str, Any]:
        return {
            "enabled": self._enabled,
            "verbosity": self.verbosity.value,
            "failure_only": self.failure_only,
            "slack_configured": bool(self.slack_webhook),
            "telegram_configured": bool(self.telegram_token and self.telegram_chat_id),
            "discord_configured": bool(self.discord_webhook),
        }

    # -- High-level methods ---------------------------------------------------

    async def run(self, checks: Iterable[HealthCheck]) -> HealthCheckResults:
        """Run the checks, log their results and send the report."""
        results = HealthCheckResults(checks)
        results.log_results()
        await self.notify(results)
        return results

    async def notify(self, results: HealthCheckResults) -> None:
        """Send the results to every configured channel."""
        if not self._enabled:
            return
        if self.failure_only and results.all_successful:
            logger.debug("All health checks passed — skipping notification (failure only)")
            return

        heading = _heading()
        tasks = []
        if self.slack_webhook or (self.telegram_token and self.telegram_chat_id):
            compact = f"{heading}\n\n{results.results_as_markdown(self.verbosity, compact_bullet=True)}"
            if self.slack_webhook:
                tasks.append(self._send_slack(compact))
            if self.telegram_token and self.telegram_chat_id:
                tasks.append(self._send_telegram(compact))
        if self.discord_webhook:
            tasks.append(self._send_discord(f"{heading}\n\n{results.results_as_markdown(self.verbosity)}"))
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def render_html_report(self, results: HealthCheckResults) -> str:
        """HTML body for senders that deliver rich text (e-mail)."""
        return f"<p>{_heading()}</p>\n{results.results_as_html(self.verbosity)}"

    # -- Low-level dispatch ---------------------------------------------------

    async def _send_slack(self, text: str) -> None:
        """POST to Slack incoming webhook."""
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.post(
                    self.slack_webhook,
                    json={"text": text, "mrkdwn": True},
                )
                if resp.status_code != 200:
                    logger.warning("Slack webhook returned %d: %s", resp.status_code, resp.text[:200])
        except Exception as exc:
            logger.warning("Slack notification failed: %s", exc)

    async def _send_telegram(self, text: str) -> None:
        """POST to Telegram Bot API."""
        url = f"https://api.telegram.org/bot{self.telegram_token}/sendMessage"
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.post(
                    url,
                    json={
                        "chat_id": self.telegram_chat_id,
                        "text": text,
                        "parse_mode": "Markdown",
                    },
                )
                if resp.status_code != 200:
                    logger.warning("Telegram API returned %d: %s", resp.status_code, resp.text[:200])
        except Exception as exc:
            logger.warning("Telegram notification failed: %s", exc)

    async def _send_discord(self, text: str) -> None:
        """POST to Discord webhook (2000 character message limit)."""
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.post(self.discord_webhook, json={"content": text[:2000]})
                # Discord answers 204 No Content unless ?wait=true
                if resp.status_code not in (200, 204):
                    logger.warning("Discord webhook returned %d: %s", resp.status_code, resp.text[:200])
        except Exception as exc:
            logger.warning("Discord notification failed: %s", exc)


# -- Singleton -----------------------------------------------------------------

_notifier: HealthCheckNotifier | None = None


def get_notifier() -> HealthCheckNotifier:
    """Return the process-level health check notifier."""
    global _notifier
    if _notifier is None:
        _notifier = HealthCheckNotifier()
    return _notifier
