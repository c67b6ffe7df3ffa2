"""
CSV export of dashboard metrics.
"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from running_dashboard.session import DashboardView

logger = logging.getLogger(__name__)


class MetricsCSVWriter:
    """Writes a dashboard view to CSV files in one directory.

    Args:
        out_dir: Output directory for CSV files (created if missing)
    """

    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self._row_counts: Dict[str, int] = {}

    def write_table(self, table: str, rows: Iterable[Dict[str, Any]], columns: List[str]) -> Path:
        """Write one table as ``<table>.csv`` with a header line."""
        path = self.out_dir / f"{table}.csv"
        count = 0
        with path.open("w", newline="", encoding="utf-8") as fp:
            writer = csv.DictWriter(fp, fieldnames=columns, extrasaction="ignore")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
                count += 1
        self._row_counts[table] = count
        logger.debug(f"Wrote {count} row(s) to {path}")
        return path

    def write_view(self, view: DashboardView) -> List[Path]:
        """Export overall, per-person, time series and (if any) error tables."""
        overall = view.overall
        written = [
            self.write_table("overall", [{
                "average": overall.average,
                "min": overall.min,
                "max": overall.max,
                "total": overall.total,
                "total_entries": overall.total_entries,
            }], ["average", "min", "max", "total", "total_entries"]),
            self.write_table("per_person", (
                {"person": person, "average": pm.average, "min": pm.min, "max": pm.max,
                 "total": pm.total, "entries": pm.entries}
                for person, pm in sorted(view.per_person.items())
            ), ["person", "average", "min", "max", "total", "entries"]),
            self.write_table("time_series", (
                {"date": point.date, "miles": point.miles} for point in view.series
            ), ["date", "miles"]),
        ]

        if view.errors:
            written.append(self.write_table("errors", (
                {"kind": error.kind.value, "row_index": error.row_index, "column": error.column,
                 "message": error.message}
                for error in view.errors
            ), ["kind", "row_index", "column", "message"]))

        logger.info(f"Exported {len(written)} table(s) to {self.out_dir}")
        return written

    def get_row_count(self, table: str) -> int:
        """Get row count for a written table."""
        return self._row_counts.get(table, 0)
