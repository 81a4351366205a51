"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from src.health import CheckStatus, StatusResultType


@dataclass
class StubCheck:
    """A health check that returns canned statuses."""

    name: str
    statuses: list[CheckStatus] = field(default_factory=list)
    calls: int = 0

    def get_status(self) -> Sequence[CheckStatus]:
        self.calls += 1
        return self.statuses


@dataclass
class FailingCheck:
    """A health check whose status retrieval blows up."""

    name: str
    error: Exception = field(default_factory=lambda: RuntimeError("connection refused"))

    def get_status(self) -> Sequence[CheckStatus]:
        raise self.error


def success(message: str = "OK") -> CheckStatus:
    return CheckStatus(message, StatusResultType.SUCCESS)


def warning(message: str) -> CheckStatus:
    return CheckStatus(message, StatusResultType.WARNING)


def error(message: str) -> CheckStatus:
    return CheckStatus(message, StatusResultType.ERROR)


@pytest.fixture
def disk_and_config() -> list[StubCheck]:
    """One passing and one warning check."""
    return [
        StubCheck("Disk Space", [success("OK")]),
        StubCheck("Config", [warning("<strong>deprecated</strong> setting")]),
    ]
