"""
Metrics engine: aggregate statistics and chart series over validated rows.

All functions are pure. Sums are accumulated at full precision and rounded
once at the end.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from running_dashboard.casting import round_metric
from running_dashboard.models import OverallMetrics, PersonMetrics, TimeSeriesPoint, ValidatedRow


def _summarize(miles: Sequence[float]) -> Dict[str, float]:
    total = sum(miles)
    return {
        "average": round_metric(total / len(miles)),
        "min": round_metric(min(miles)),
        "max": round_metric(max(miles)),
        "total": round_metric(total),
    }


def overall(rows: Sequence[ValidatedRow]) -> OverallMetrics:
    """Statistics across every row; all zeros for an empty row set."""
    if not rows:
        return OverallMetrics()
    return OverallMetrics(total_entries=len(rows), **_summarize([row.miles for row in rows]))


def per_person(rows: Iterable[ValidatedRow]) -> Dict[str, PersonMetrics]:
    """Statistics per runner, keyed by person name."""
    grouped: Dict[str, List[float]] = defaultdict(list)
    for row in rows:
        grouped[row.person.strip()].append(row.miles)

    return {
        person: PersonMetrics(entries=len(miles), **_summarize(miles))
        for person, miles in grouped.items()
    }


def time_series(rows: Iterable[ValidatedRow]) -> List[TimeSeriesPoint]:
    """Total miles per date across all runners, oldest first."""
    totals: Dict[str, float] = defaultdict(float)
    for row in rows:
        totals[row.date] += row.miles

    return [TimeSeriesPoint(date=date, miles=round_metric(totals[date])) for date in sorted(totals)]


def time_series_for_person(rows: Iterable[ValidatedRow], person: str) -> List[TimeSeriesPoint]:
    """One point per row for a single runner, oldest first.

    Unlike ``time_series`` entries sharing a date are not summed. The sort is
    stable so same-date entries keep their input order.
    """
    points = [
        TimeSeriesPoint(date=row.date, miles=round_metric(row.miles))
        for row in rows
        if row.person.strip() == person
    ]
    return sorted(points, key=lambda point: point.date)


def person_names(rows: Iterable[ValidatedRow]) -> List[str]:
    """Unique runner names in alphabetical order."""
    return sorted({row.person.strip() for row in rows})


def filter_by_person(rows: Sequence[ValidatedRow], person: Optional[str]) -> List[ValidatedRow]:
    """Rows for one runner, or every row when ``person`` is None."""
    if person is None:
        return list(rows)
    return [row for row in rows if row.person.strip() == person]
