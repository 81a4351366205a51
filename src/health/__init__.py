"""Health subsystem — check models and scheduled result aggregation."""

from .models import CheckStatus, HealthCheck, StatusResultType, Verbosity
from .results import HealthCheckResults
