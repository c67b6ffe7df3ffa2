"""Tests for dashboard session lifecycle and views."""

import pytest

from running_dashboard.models import ParseOutcome, PersonMetrics, TimeSeriesPoint, ValidatedRow
from running_dashboard.observability import EventType
from running_dashboard.orchestrator import FileProcessingError
from running_dashboard.session import DashboardSession


@pytest.fixture
def session(observability):
    return DashboardSession(observability=observability)


def test_view_before_load(session):
    assert session.view() is None


def test_rows_is_tuple_of_validated_rows(session, sample_csv_file, sample_rows):
    assert session.rows == ()

    session.load(sample_csv_file)
    assert session.rows == tuple(sample_rows)

    session.clear()
    assert session.rows == ()


def test_load_and_view(session, sample_csv_file):
    session.load(sample_csv_file)
    view = session.view()

    assert view.success
    assert view.persons == ["Alice", "Bob"]
    assert view.selected_person is None
    assert view.overall.total == 10.5
    assert set(view.per_person) == {"Alice", "Bob"}
    assert view.series == [
        TimeSeriesPoint(date="2024-12-31", miles=7.0),
        TimeSeriesPoint(date="2025-01-01", miles=3.5),
    ]


def test_select_person_filters_view(session, sample_csv_file):
    session.load(sample_csv_file)
    session.select_person("Alice")
    view = session.view()

    assert view.selected_person == "Alice"
    assert view.overall.total == 8.5
    assert view.overall.total_entries == 2
    assert view.per_person == {"Alice": PersonMetrics(average=4.25, min=3.5, max=5.0, total=8.5, entries=2)}
    assert [p.date for p in view.series] == ["2024-12-31", "2025-01-01"]
    assert view.persons == ["Alice", "Bob"]


def test_select_all_runners_again(session, sample_csv_file):
    session.load(sample_csv_file)
    session.select_person("Bob")
    session.select_person(None)

    assert session.view().overall.total_entries == 3


def test_select_unknown_person(session, sample_csv_file):
    session.load(sample_csv_file)
    with pytest.raises(ValueError, match="Unknown runner"):
        session.select_person("Zed")
    assert session.selected_person is None


def test_partial_outcome_still_viewable(session, partial_csv_file):
    """Test partial data is shown next to errors."""
    session.load(partial_csv_file)
    view = session.view()

    assert view.success is False
    assert len(view.errors) == 1
    assert view.overall.total_entries == 3


def test_new_load_resets_filter(session, sample_csv_file, partial_csv_file):
    session.load(sample_csv_file)
    session.select_person("Bob")
    session.load(partial_csv_file)

    assert session.selected_person is None
    assert session.source_name == "partial.csv"


def test_clear(session, sample_csv_file, recording_hook):
    session.load(sample_csv_file)
    session.select_person("Alice")
    session.clear()

    assert session.outcome is None
    assert session.selected_person is None
    assert session.view() is None
    assert session.reset_count == 1
    assert recording_hook.event_types()[-1] == EventType.SESSION_CLEARED


def test_failed_load_clears_previous_state(session, sample_csv_file, tmp_path, recording_hook):
    session.load(sample_csv_file)
    with pytest.raises(FileProcessingError):
        session.load(tmp_path / "missing.csv")

    assert session.outcome is None
    assert session.view() is None
    assert EventType.UPLOAD_ERROR in recording_hook.event_types()


def test_load_emits_events(session, partial_csv_file, recording_hook):
    session.load(partial_csv_file)

    assert recording_hook.event_types() == [
        EventType.UPLOAD_START,
        EventType.VALIDATION_ERROR,
        EventType.UPLOAD_COMPLETE,
    ]
    counters = {m.name: m.value for m in recording_hook.metrics}
    assert counters == {"rows_valid": 3, "validation_errors": 1}


def test_load_outcome_in_memory(session):
    outcome = ParseOutcome(success=True, rows=(
        ValidatedRow(date="2024-01-02", person="Ann", miles_run="1.25"),
    ))
    session.load_outcome(outcome)

    assert session.source_name is None
    assert session.view().overall.average == 1.25


def test_broken_hook_does_not_break_session(sample_csv_file, observability):
    class ExplodingHook:
        def on_event(self, event):
            raise RuntimeError("boom")

        def on_metric(self, metric):
            raise RuntimeError("boom")

    observability.register_hook(ExplodingHook())
    session = DashboardSession(observability=observability)

    assert session.load(sample_csv_file).success
