"""
Observability hooks for the dashboard lifecycle.

A small callback system: the dashboard session emits events and counter
metrics, and every registered hook receives them.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can be emitted."""
    UPLOAD_START = "upload_start"
    UPLOAD_COMPLETE = "upload_complete"
    UPLOAD_ERROR = "upload_error"
    VALIDATION_ERROR = "validation_error"
    SESSION_CLEARED = "session_cleared"
    PERSON_SELECTED = "person_selected"


@dataclass
class MetricEvent:
    """A counter increment."""
    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        tags_str = ",".join(f"{k}={v}" for k, v in self.tags.items())
        return f"{self.name}:{self.value}|counter|{tags_str}"


@dataclass
class Event:
    """A dashboard lifecycle event."""
    event_type: EventType
    timestamp: float = field(default_factory=time.time)
    source: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [self.event_type.value]
        if self.source:
            parts.append(f"source={self.source}")
        if self.details:
            details_str = ",".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(details_str)
        return " ".join(parts)


class ObservabilityHook:
    """Base class for observability hooks."""

    def on_metric(self, metric: MetricEvent) -> None:
        """Called when a metric is emitted."""
        pass

    def on_event(self, event: Event) -> None:
        """Called when an event occurs."""
        pass


class LoggingHook(ObservabilityHook):
    """Hook that logs metrics and events to Python logging."""

    def __init__(self, log_metrics: bool = True, log_events: bool = True):
        self.log_metrics = log_metrics
        self.log_events = log_events

    def on_metric(self, metric: MetricEvent) -> None:
        if self.log_metrics:
            logger.debug(f"METRIC: {metric}")

    def on_event(self, event: Event) -> None:
        if self.log_events:
            level = logging.WARNING if event.event_type in (EventType.UPLOAD_ERROR, EventType.VALIDATION_ERROR) else logging.INFO
            logger.log(level, f"EVENT: {event}")


class RecordingHook(ObservabilityHook):
    """Hook that keeps every metric and event in memory."""

    def __init__(self):
        self.metrics: List[MetricEvent] = []
        self.events: List[Event] = []

    def on_metric(self, metric: MetricEvent) -> None:
        self.metrics.append(metric)

    def on_event(self, event: Event) -> None:
        self.events.append(event)

    def event_types(self) -> List[EventType]:
        return [event.event_type for event in self.events]


class ObservabilityManager:
    """Manages observability hooks and emits metrics/events."""

    def __init__(self):
        self.hooks: List[ObservabilityHook] = []

    def register_hook(self, hook: ObservabilityHook) -> None:
        """Register an observability hook."""
        self.hooks.append(hook)

    def emit_event(
        self,
        event_type: EventType,
        source: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Emit an event to all registered hooks."""
        event = Event(event_type=event_type, source=source, details=details or {})

        for hook in self.hooks:
            try:
                hook.on_event(event)
            except Exception as e:
                logger.error(f"Error in observability hook: {e}")

    def counter(self, name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
        """Emit a counter metric to all registered hooks."""
        metric = MetricEvent(name=name, value=value, tags=tags or {})

        for hook in self.hooks:
            try:
                hook.on_metric(metric)
            except Exception as e:
                logger.error(f"Error in observability hook: {e}")


# Global observability manager instance
_global_manager: Optional[ObservabilityManager] = None


def get_observability_manager() -> ObservabilityManager:
    """Get the global observability manager instance."""
    global _global_manager
    if _global_manager is None:
        _global_manager = ObservabilityManager()
    return _global_manager


def configure_observability(hooks: List[ObservabilityHook]) -> None:
    """Configure the global observability manager with hooks.

    Example:
        >>> from running_dashboard.observability import configure_observability, LoggingHook
        >>> configure_observability([LoggingHook()])
    """
    manager = get_observability_manager()
    for hook in hooks:
        manager.register_hook(hook)
