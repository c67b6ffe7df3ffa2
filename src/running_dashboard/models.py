"""
Data models and structures for the running log dashboard.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from running_dashboard.casting import parse_miles


class ErrorKind(str, Enum):
    """Categories of problems reported while loading a running log."""
    MISSING_HEADER = "missing_header"
    EMPTY_FILE = "empty_file"
    INVALID_DATE = "invalid_date"
    INVALID_MILES = "invalid_miles"
    UNREADABLE_FILE = "unreadable_file"  # Tokenizer could not read the file at all


@dataclass(frozen=True)
class ValidationError:
    """A single validation problem.

    ``row_index`` is the 1-based source line number (the header is line 1).
    """
    kind: ErrorKind
    message: str
    row_index: Optional[int] = None
    column: Optional[str] = None


@dataclass(frozen=True)
class ValidatedRow:
    """A row whose date and mileage have passed validation."""
    date: str  # YYYY-MM-DD
    person: str
    miles_run: str  # Raw numeric text, already confirmed positive and finite

    @property
    def miles(self) -> float:
        # A strictly valid number is also its own numeric prefix
        return parse_miles(self.miles_run, lenient=True)


@dataclass(frozen=True)
class ParseOutcome:
    """Result of validating one uploaded file.

    ``rows`` holds every valid row even when ``success`` is False, so callers
    may show partial data next to the errors.
    """
    success: bool
    rows: Tuple[ValidatedRow, ...] = ()
    errors: Tuple[ValidationError, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def has_rows(self) -> bool:
        return bool(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form, with enum members reduced to their values."""
        data = asdict(self)
        for error in data["errors"]:
            error["kind"] = error["kind"].value
        return data


@dataclass(frozen=True)
class OverallMetrics:
    """Aggregate statistics across a row set."""
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    total: float = 0.0
    total_entries: int = 0


@dataclass(frozen=True)
class PersonMetrics:
    """Aggregate statistics for one runner."""
    average: float
    min: float
    max: float
    total: float
    entries: int


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One chart point."""
    date: str
    miles: float


@dataclass(frozen=True)
class TokenizedFile:
    """Tokenizer output: header names plus header-keyed records."""
    headers: Tuple[str, ...]
    records: Tuple[Mapping[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_lists(cls, headers: List[str], records: List[Mapping[str, str]]) -> "TokenizedFile":
        return cls(headers=tuple(headers), records=tuple(records))
