"""Tests for the metrics engine."""

from running_dashboard.metrics import (
    filter_by_person,
    overall,
    per_person,
    person_names,
    time_series,
    time_series_for_person,
)
from running_dashboard.models import OverallMetrics, PersonMetrics, TimeSeriesPoint, ValidatedRow


def test_overall_reference_values(sample_rows):
    """Test overall statistics for the reference data set."""
    metrics = overall(sample_rows)

    assert metrics == OverallMetrics(average=3.5, min=2.0, max=5.0, total=10.5, total_entries=3)
    assert abs(metrics.average * len(sample_rows) - metrics.total) <= 0.01


def test_overall_empty():
    """Test empty input degrades to all zeros instead of failing."""
    assert overall([]) == OverallMetrics(average=0, min=0, max=0, total=0, total_entries=0)


def test_overall_sums_before_rounding():
    """Test the total is rounded once, not per row."""
    rows = [ValidatedRow(date="2024-01-01", person="A", miles_run="0.004")] * 3
    metrics = overall(rows)

    assert metrics.total == 0.01
    assert metrics.min == 0.0
    assert metrics.average == 0.0


def test_per_person_reference_values(sample_rows):
    result = per_person(sample_rows)

    assert set(result) == {"Alice", "Bob"}
    assert result["Alice"] == PersonMetrics(average=4.25, min=3.5, max=5.0, total=8.5, entries=2)
    assert result["Bob"] == PersonMetrics(average=2.0, min=2.0, max=2.0, total=2.0, entries=1)


def test_per_person_entries_add_up(sample_rows):
    """Test grouping never loses or invents rows."""
    result = per_person(sample_rows)
    assert sum(pm.entries for pm in result.values()) == overall(sample_rows).total_entries


def test_per_person_empty():
    assert per_person([]) == {}


def test_time_series_sums_same_date(sample_rows):
    """Test the overall series sums runners sharing a date and sorts by date."""
    assert time_series(sample_rows) == [
        TimeSeriesPoint(date="2024-12-31", miles=7.0),
        TimeSeriesPoint(date="2025-01-01", miles=3.5),
    ]


def test_time_series_no_gap_filling():
    rows = [
        ValidatedRow(date="2024-03-10", person="A", miles_run="1"),
        ValidatedRow(date="2024-03-01", person="A", miles_run="2"),
    ]
    assert [p.date for p in time_series(rows)] == ["2024-03-01", "2024-03-10"]


def test_time_series_for_person_does_not_sum():
    """Test the per-person series keeps one point per row, unlike the overall one."""
    rows = [
        ValidatedRow(date="2024-05-02", person="Alice", miles_run="1.5"),
        ValidatedRow(date="2024-05-01", person="Alice", miles_run="2.0"),
        ValidatedRow(date="2024-05-02", person="Alice", miles_run="3.0"),
        ValidatedRow(date="2024-05-02", person="Bob", miles_run="9.0"),
    ]

    assert time_series_for_person(rows, "Alice") == [
        TimeSeriesPoint(date="2024-05-01", miles=2.0),
        TimeSeriesPoint(date="2024-05-02", miles=1.5),
        TimeSeriesPoint(date="2024-05-02", miles=3.0),
    ]
    assert time_series(filter_by_person(rows, "Alice")) == [
        TimeSeriesPoint(date="2024-05-01", miles=2.0),
        TimeSeriesPoint(date="2024-05-02", miles=4.5),
    ]


def test_time_series_for_person_exact_match(sample_rows):
    """Test runner matching is case-sensitive."""
    assert time_series_for_person(sample_rows, "alice") == []
    assert len(time_series_for_person(sample_rows, "Alice")) == 2


def test_person_names_sorted_unique(sample_rows):
    rows = list(sample_rows) + [ValidatedRow(date="2024-01-01", person="Aaron", miles_run="1")]
    assert person_names(rows) == ["Aaron", "Alice", "Bob"]


def test_filter_by_person(sample_rows):
    assert filter_by_person(sample_rows, None) == list(sample_rows)
    assert [r.miles_run for r in filter_by_person(sample_rows, "Bob")] == ["2.0"]
    assert filter_by_person(sample_rows, "Nobody") == []
