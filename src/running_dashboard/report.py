"""
Plain-text rendering of outcomes and dashboard views.
"""

from typing import List

from running_dashboard.casting import format_display_date
from running_dashboard.models import ParseOutcome
from running_dashboard.session import DashboardView

RULE = "=" * 60


def render_outcome(outcome: ParseOutcome) -> str:
    """Success line, or every error on its own line."""
    if outcome.success:
        return f"✅ CSV file parsed successfully: {len(outcome.rows)} row(s) loaded"

    lines = [f"❌ Validation failed with {outcome.error_count} error(s):"]
    lines.extend(f"  - {error.message}" for error in outcome.errors)
    if outcome.rows:
        lines.append(f"Showing {len(outcome.rows)} valid row(s) despite the errors above")
    return "\n".join(lines)


def render_view(view: DashboardView) -> str:
    """Metric cards, per-person table and chart series."""
    lines: List[str] = [RULE]
    scope = view.selected_person or "All Runners"
    lines.append(f"Overall Metrics ({scope})")
    lines.append(RULE)
    lines.append(f"  Average Miles: {view.overall.average} mi")
    lines.append(f"  Minimum Miles: {view.overall.min} mi")
    lines.append(f"  Maximum Miles: {view.overall.max} mi")
    lines.append(f"  Total Miles:   {view.overall.total} mi")
    lines.append(f"  Total Entries: {view.overall.total_entries}")

    lines.append(RULE)
    lines.append("Per-Person Metrics")
    lines.append(RULE)
    if not view.per_person:
        lines.append("  No data available")
    for person in sorted(view.per_person):
        pm = view.per_person[person]
        lines.append(f"  {person or '(blank)'}: avg {pm.average} mi, min {pm.min} mi, "
                     f"max {pm.max} mi, total {pm.total} mi, {pm.entries} entries")

    lines.append(RULE)
    title = f"Miles Run Over Time: {view.selected_person}" if view.selected_person else "Overall Miles Run Over Time"
    lines.append(title)
    lines.append(RULE)
    for point in view.series:
        lines.append(f"  {format_display_date(point.date)}  {point.miles:>8} mi")

    return "\n".join(lines)
