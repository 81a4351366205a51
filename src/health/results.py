"""Scheduled health check results — aggregation and rendering.

Runs a batch of checks once, keeps every status they reported and renders
the outcome as log lines, Markdown (plain or Slack-style bullets) or HTML
for the notification senders.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import mistune

from .models import CheckStatus, HealthCheck, StatusResultType, Verbosity

logger = logging.getLogger(__name__)

# Severity → highlight colour, applied in this order
_HIGHLIGHT_COLORS = (
    (StatusResultType.SUCCESS, "5cb85c"),
    (StatusResultType.WARNING, "f0ad4e"),
    (StatusResultType.ERROR, "d9534f"),
)

_MARKDOWN_EMPHASIS = (("<strong>", "**"), ("</strong>", "**"), ("<em>", "*"), ("</em>", "*"))
_COMPACT_EMPHASIS = (("<strong>", "*"), ("</strong>", "*"), ("<em>", "_"), ("</em>", "_"))

_to_html = mistune.create_markdown(escape=False)


def _all_success(statuses: Iterable[CheckStatus]) -> bool:
    return all(s.result_type == StatusResultType.SUCCESS for s in statuses)


class HealthCheckResults:
    """Outcome of one scheduled run over a set of health checks.

    Checks are invoked at construction. A check that raises is logged and
    recorded as a single Error status, so building the results never fails.
    """

    def __init__(self, checks: Iterable[HealthCheck]) -> None:
        self._results: dict[str, tuple[CheckStatus, ...]] = {}
        for check in checks:
            self._results[check.name] = self._run_check(check)

        # find out if all checks pass or not
        self.all_successful = True
        for statuses in self._results.values():
            if not _all_success(statuses):
                self.all_successful = False
                break

    @staticmethod
    def _run_check(check: HealthCheck) -> tuple[CheckStatus, ...]:
        try:
            return tuple(check.get_status())
        except Exception as exc:
            logger.exception("Error running scheduled health check: %s (%s)", check.name, exc)
            message = f"Health check failed with exception: {exc}. See logs for details."
            return (CheckStatus(message, StatusResultType.ERROR),)

    @property
    def results(self) -> Mapping[str, tuple[CheckStatus, ...]]:
        return MappingProxyType(self._results)

    @property
    def failed_checks(self) -> list[str]:
        """Names of checks that reported anything other than success."""
        return [name for name, statuses in self._results.items() if not _all_success(statuses)]

    # -- Rendering ------------------------------------------------------------

    def log_results(self) -> None:
        logger.info("Scheduled health check results:")
        for name, statuses in self._results.items():
            if _all_success(statuses):
                logger.info("    Checks for '%s' all completed succesfully.", name)
            else:
                logger.warning("    Checks for '%s' completed with errors.", name)

            for status in statuses:
                logger.info(
                    "        Result: %s, Message: '%s'",
                    status.result_type.value, status.message,
                )

    def results_as_markdown(self, verbosity: Verbosity, compact_bullet: bool = False) -> str:
        """Render the results as Markdown.

        ``compact_bullet`` switches to chat-style output (``•`` bullets,
        single-character emphasis) for Slack and Telegram.
        """
        bullet = "• " if compact_bullet else "- "
        parts: list[str] = []

        for i, (name, statuses) in enumerate(self._results.items()):
            if i > 0:
                parts.append("\n")

            if _all_success(statuses):
                parts.append(f"{bullet}Checks for '{name}' all completed succesfully.\n")
            else:
                parts.append(f"{bullet}Checks for '{name}' completed with errors.\n")

            for status in statuses:
                parts.append(f"\t{bullet}Result: '{status.result_type.value}'")
                # With summary verbosity, only warnings and errors carry details
                if status.result_type != StatusResultType.SUCCESS or verbosity == Verbosity.DETAILED:
                    parts.append(f", Message: '{_html_to_markdown(status.message, compact_bullet)}'")
                parts.append("\n\n")

        return "".join(parts)

    def results_as_html(self, verbosity: Verbosity) -> str:
        html = _to_html(self.results_as_markdown(verbosity))
        return _apply_highlighting(html)


def _html_to_markdown(text: str, compact: bool = False) -> str:
    """Swap the inline emphasis tags checks use for Markdown equivalents."""
    for tag, replacement in _COMPACT_EMPHASIS if compact else _MARKDOWN_EMPHASIS:
        text = text.replace(tag, replacement)
    return text


def _apply_highlighting(html: str) -> str:
    for result_type, color in _HIGHLIGHT_COLORS:
        html = html.replace(
            f"Result: '{result_type.value}'",
            f'Result: <span style="color: #{color}">{result_type.value}</span>',
        )
    return html
