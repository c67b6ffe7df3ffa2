"""
Running log dashboard package.
"""

__version__ = "1.0.0"

from running_dashboard.casting import format_display_date, normalize_date, parse_miles, round_metric
from running_dashboard.config_models import DashboardConfig, MilesParseMode
from running_dashboard.metrics import (
    filter_by_person,
    overall,
    per_person,
    person_names,
    time_series,
    time_series_for_person,
)
from running_dashboard.models import (
    ErrorKind,
    OverallMetrics,
    ParseOutcome,
    PersonMetrics,
    TimeSeriesPoint,
    TokenizedFile,
    ValidatedRow,
    ValidationError,
)
from running_dashboard.orchestrator import FileProcessingError, load_running_log
from running_dashboard.session import DashboardSession, DashboardView
from running_dashboard.validators import validate

__all__ = [
    "DashboardConfig",
    "MilesParseMode",
    "DashboardSession",
    "DashboardView",
    "ErrorKind",
    "FileProcessingError",
    "OverallMetrics",
    "ParseOutcome",
    "PersonMetrics",
    "TimeSeriesPoint",
    "TokenizedFile",
    "ValidatedRow",
    "ValidationError",
    "load_running_log",
    "validate",
    "overall",
    "per_person",
    "time_series",
    "time_series_for_person",
    "person_names",
    "filter_by_person",
    "normalize_date",
    "parse_miles",
    "round_metric",
    "format_display_date",
]
