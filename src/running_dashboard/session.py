"""
Dashboard session state.

A ``DashboardSession`` owns the active ``ParseOutcome`` and the runner filter.
Loading a file or clearing replaces all of it at once, and every view is
recomputed from scratch.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from running_dashboard import metrics
from running_dashboard.async_orchestrator import load_running_log_async
from running_dashboard.config_models import DashboardConfig
from running_dashboard.models import (
    OverallMetrics,
    ParseOutcome,
    PersonMetrics,
    TimeSeriesPoint,
    ValidatedRow,
    ValidationError,
)
from running_dashboard.observability import EventType, ObservabilityManager, get_observability_manager
from running_dashboard.orchestrator import FileProcessingError, load_running_log

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer renders for the current state."""
    overall: OverallMetrics
    per_person: Dict[str, PersonMetrics]
    series: List[TimeSeriesPoint]
    persons: List[str]
    selected_person: Optional[str]
    success: bool
    errors: Tuple[ValidationError, ...]


class DashboardSession:
    """Holds one upload and the active runner filter.

    Args:
        config: Loading configuration
        observability: Manager receiving lifecycle events (global one by default)
    """

    def __init__(self, config: Optional[DashboardConfig] = None,
                 observability: Optional[ObservabilityManager] = None):
        self.config = config or DashboardConfig()
        self.observability = observability or get_observability_manager()
        self.outcome: Optional[ParseOutcome] = None
        self.source_name: Optional[str] = None
        self.selected_person: Optional[str] = None
        self.reset_count = 0

    @property
    def rows(self) -> Tuple[ValidatedRow, ...]:
        return self.outcome.rows if self.outcome else ()

    def load(self, path: Union[str, Path]) -> ParseOutcome:
        """Load a file, replacing any previous state."""
        path = Path(path)
        self.observability.emit_event(EventType.UPLOAD_START, source=path.name)
        try:
            outcome = load_running_log(path, self.config)
        except FileProcessingError as e:
            self._fail_upload(path.name, e)
            raise
        return self.load_outcome(outcome, source_name=path.name)

    async def load_async(self, path: Union[str, Path]) -> ParseOutcome:
        """Async variant of ``load``; only the file read suspends."""
        path = Path(path)
        self.observability.emit_event(EventType.UPLOAD_START, source=path.name)
        try:
            outcome = await load_running_log_async(path, self.config)
        except FileProcessingError as e:
            self._fail_upload(path.name, e)
            raise
        return self.load_outcome(outcome, source_name=path.name)

    def load_outcome(self, outcome: ParseOutcome, source_name: Optional[str] = None) -> ParseOutcome:
        """Install an already computed outcome and reset the runner filter."""
        self.outcome = outcome
        self.source_name = source_name
        self.selected_person = None

        tags = {"source": source_name or "<memory>"}
        self.observability.counter("rows_valid", len(outcome.rows), tags)
        if outcome.errors:
            self.observability.counter("validation_errors", outcome.error_count, tags)
            self.observability.emit_event(
                EventType.VALIDATION_ERROR,
                source=source_name,
                details={"errors": outcome.error_count, "rows": len(outcome.rows)}
            )
        self.observability.emit_event(
            EventType.UPLOAD_COMPLETE,
            source=source_name,
            details={"success": outcome.success}
        )
        return outcome

    def clear(self) -> None:
        """Discard the upload, the filter and all derived values."""
        self.outcome = None
        self.source_name = None
        self.selected_person = None
        self.reset_count += 1
        self.observability.emit_event(EventType.SESSION_CLEARED, details={"reset_count": self.reset_count})

    def select_person(self, person: Optional[str]) -> None:
        """Filter to one runner, or to everyone when ``person`` is None.

        Raises:
            ValueError: If no loaded row belongs to ``person``
        """
        if person is not None and person not in metrics.person_names(self.rows):
            raise ValueError(f"Unknown runner: {person!r}")
        self.selected_person = person
        self.observability.emit_event(EventType.PERSON_SELECTED, details={"person": person or "all"})

    def view(self) -> Optional[DashboardView]:
        """Derive the current view, or None when no rows are loaded."""
        if not self.rows:
            return None

        all_rows = self.rows
        person = self.selected_person
        filtered = metrics.filter_by_person(all_rows, person)

        per_person = metrics.per_person(all_rows)
        if person is not None:
            per_person = {person: per_person[person]} if person in per_person else {}

        if person is None:
            series = metrics.time_series(filtered)
        else:
            series = metrics.time_series_for_person(filtered, person)

        return DashboardView(
            overall=metrics.overall(filtered),
            per_person=per_person,
            series=series,
            persons=metrics.person_names(all_rows),
            selected_person=person,
            success=self.outcome.success,
            errors=self.outcome.errors,
        )

    def _fail_upload(self, source: str, error: Exception) -> None:
        logger.error(f"Upload of {source} failed: {error}")
        self.outcome = None
        self.source_name = None
        self.selected_person = None
        self.observability.emit_event(EventType.UPLOAD_ERROR, source=source, details={"error": str(error)})
