"""
Field normalization utilities for the running log dashboard.

This module provides the conversions applied to raw CSV cells before a row is
accepted: date normalization, mileage parsing, and the rounding used for every
displayed metric.
"""

import datetime as dt
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r'^\d{2}/\d{2}/\d{4}$', re.ASCII)

# Full-string decimal number, no underscores, no inf/nan words
STRICT_NUMBER_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$', re.ASCII)

# Leading numeric prefix, the way a browser's parseFloat reads "12abc" as 12
LENIENT_NUMBER_PATTERN = re.compile(r'^[+-]?(Infinity|(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?)', re.ASCII)

TWO_PLACES = Decimal("0.01")

# Two-digit years such as 0050 are not accepted as real years
MIN_YEAR = 100


def normalize_date(value: str) -> Optional[str]:
    """Convert a DD/MM/YYYY date to ISO YYYY-MM-DD.

    Args:
        value: Raw date text (already trimmed)

    Returns:
        ISO date string, or None when the text is not a real calendar day
    """
    if not DATE_PATTERN.fullmatch(value):
        return None

    day_str, month_str, year_str = value.split("/")
    if int(year_str) < MIN_YEAR:
        return None

    try:
        parsed = dt.date(int(year_str), int(month_str), int(day_str))
    except ValueError:
        # 31/02, day 00, month 13
        return None

    return f"{year_str}-{parsed.month:02d}-{parsed.day:02d}"


def parse_miles(value: str, lenient: bool = False) -> Optional[float]:
    """Parse a mileage cell into a positive, finite float.

    Args:
        value: Raw mileage text
        lenient: Accept a leading numeric prefix ("12abc" -> 12.0) instead of
            requiring the whole string to be a number

    Returns:
        The mileage, or None if it is empty, non-numeric, zero, negative or
        not finite
    """
    s = value.strip()
    if not s:
        return None

    if lenient:
        match = LENIENT_NUMBER_PATTERN.match(s)
        if not match:
            return None
        text = match.group(0)
        if text != s:
            logger.debug(f"Lenient miles parse read '{s}' as '{text}'")
        number = float(text.replace("Infinity", "inf"))
    else:
        if not STRICT_NUMBER_PATTERN.fullmatch(s):
            return None
        number = float(s)

    if not math.isfinite(number) or number <= 0:
        return None
    return number


def round_metric(value: float) -> float:
    """Round to 2 decimal places, halves away from zero.

    The float's shortest repr is rounded, so 2.675 becomes 2.68 even though
    its binary value sits just below the half.
    """
    return float(Decimal(repr(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def format_display_date(iso_date: str) -> str:
    """Format an ISO date as DD/MM/YYYY for display.

    Text that does not split into three parts is returned unchanged.
    """
    if not iso_date:
        return ""
    parts = iso_date.split("-")
    if len(parts) != 3 or not all(parts):
        return iso_date
    year, month, day = parts
    return f"{day}/{month}/{year}"
