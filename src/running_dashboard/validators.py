"""
Validation functions for running log headers and rows.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from running_dashboard.casting import normalize_date, parse_miles
from running_dashboard.models import ErrorKind, ParseOutcome, ValidatedRow, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("date", "person", "miles run")

# Source line of the first data record (the header is line 1)
FIRST_DATA_LINE = 2


def _normalize_header(name: str) -> str:
    return name.strip().lower()


def validate_headers(headers: Sequence[str]) -> List[ValidationError]:
    """Check that every required header is present.

    Returns:
        One MISSING_HEADER error per absent header (empty if valid)
    """
    present = {_normalize_header(h) for h in headers}
    return [
        ValidationError(
            kind=ErrorKind.MISSING_HEADER,
            message=f'Missing required header: "{required}"',
            column=required,
        )
        for required in REQUIRED_HEADERS
        if required not in present
    ]


def build_header_map(headers: Sequence[str]) -> Dict[str, str]:
    """Map each required logical header to the file's actual header text.

    The first matching column wins when a header appears twice.
    """
    header_map: Dict[str, str] = {}
    for header in headers:
        normalized = _normalize_header(header)
        if normalized in REQUIRED_HEADERS and normalized not in header_map:
            header_map[normalized] = header
    return header_map


def validate_row(record: Mapping[str, str], header_map: Mapping[str, str], line_num: int,
                 lenient_miles: bool = False) -> Tuple[Optional[ValidatedRow], List[ValidationError]]:
    """Validate one record.

    Args:
        record: Header-keyed raw values
        header_map: Logical header -> actual header (from ``build_header_map``)
        line_num: 1-based source line number used in error messages
        lenient_miles: Accept a leading numeric prefix for miles

    Returns:
        Tuple of (row or None, errors). The row is None whenever errors is non-empty.
    """
    date_value = (record.get(header_map["date"]) or "").strip()
    person_value = (record.get(header_map["person"]) or "").strip()
    miles_value = (record.get(header_map["miles run"]) or "").strip()

    errors = []

    iso_date = normalize_date(date_value)
    if iso_date is None:
        errors.append(ValidationError(
            kind=ErrorKind.INVALID_DATE,
            message=f'Invalid date format in row {line_num}: "{date_value}". Expected DD/MM/YYYY format.',
            row_index=line_num,
            column="date",
        ))

    if parse_miles(miles_value, lenient=lenient_miles) is None:
        errors.append(ValidationError(
            kind=ErrorKind.INVALID_MILES,
            message=f'Invalid miles value in row {line_num}: "{miles_value}". Must be a positive number.',
            row_index=line_num,
            column="miles run",
        ))

    if errors:
        return None, errors

    return ValidatedRow(date=iso_date, person=person_value, miles_run=miles_value), errors


def validate(headers: Sequence[str], records: Sequence[Mapping[str, str]],
             lenient_miles: bool = False) -> ParseOutcome:
    """Validate a tokenized running log.

    An empty record list and missing headers stop validation immediately,
    checked in that order.
    Row problems are collected for every row, and valid rows are kept even
    when other rows fail.

    Args:
        headers: Header names as found in the file
        records: Header-keyed records, empty lines already removed
        lenient_miles: Accept a leading numeric prefix for miles

    Returns:
        ParseOutcome with valid rows and all collected errors
    """
    if not records:
        logger.warning("CSV file is empty or contains no data rows")
        return ParseOutcome(success=False, errors=(ValidationError(
            kind=ErrorKind.EMPTY_FILE,
            message="CSV file is empty or contains no data rows",
        ),))

    header_errors = validate_headers(headers)
    if header_errors:
        for error in header_errors:
            logger.warning(error.message)
        return ParseOutcome(success=False, errors=tuple(header_errors))

    header_map = build_header_map(headers)
    rows: List[ValidatedRow] = []
    errors: List[ValidationError] = []

    for idx, record in enumerate(records):
        row, row_errors = validate_row(record, header_map, idx + FIRST_DATA_LINE, lenient_miles)
        if row_errors:
            errors.extend(row_errors)
        else:
            rows.append(row)

    if errors:
        logger.warning(f"Validation found {len(errors)} error(s); {len(rows)} of {len(records)} row(s) valid")
    else:
        logger.info(f"Validated {len(rows)} row(s)")

    return ParseOutcome(success=not errors, rows=tuple(rows), errors=tuple(errors))
