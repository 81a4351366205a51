"""Health check models — status types, verbosity and the check protocol."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class StatusResultType(str, Enum):
    SUCCESS = "Success"
    WARNING = "Warning"
    ERROR = "Error"


class Verbosity(str, Enum):
    """How much of each result ends up in rendered notifications."""

    SUMMARY = "summary"  # messages only for warnings and errors
    DETAILED = "detailed"


@dataclass(frozen=True)
class CheckStatus:
    """A single finding reported by a health check."""

    message: str
    result_type: StatusResultType


class HealthCheck(Protocol):
    """Anything with a name that can report its current statuses."""

    @property
    def name(self) -> str: ...

    def get_status(self) -> Sequence[CheckStatus]: ...
