"""
CSV tokenizer adapter.

Turns raw file content into a ``TokenizedFile``: the header row plus one
header-keyed record per non-empty data line. Empty and whitespace-only lines
are skipped here so the validator never sees them.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Union

from running_dashboard.models import TokenizedFile

logger = logging.getLogger(__name__)


def tokenize_text(text: str, delimiter: str = ",", quotechar: str = '"') -> TokenizedFile:
    """Tokenize CSV text.

    Args:
        text: Decoded CSV content
        delimiter: CSV delimiter character
        quotechar: CSV quote character

    Returns:
        TokenizedFile with headers and records

    Raises:
        csv.Error: When the content is not valid CSV
    """
    reader = csv.reader(io.StringIO(text, newline=''), delimiter=delimiter, quotechar=quotechar)

    headers: List[str] = []
    records: List[Dict[str, str]] = []

    line_num = 0
    for csv_row in reader:
        line_num += 1

        # Skip completely empty rows
        if not csv_row or all(not cell or cell.strip() == '' for cell in csv_row):
            logger.debug(f"Skipping blank row at line {line_num}")
            continue

        if not headers:
            headers = list(csv_row)
            continue

        # Short rows get empty strings, surplus cells are dropped
        record = {name: (csv_row[i] if i < len(csv_row) else "") for i, name in enumerate(headers)}
        if len(csv_row) > len(headers):
            logger.debug(f"Row at line {line_num} has {len(csv_row) - len(headers)} extra cell(s)")
        records.append(record)

    logger.debug(f"Tokenized {len(records)} record(s) with headers {headers}")
    return TokenizedFile.from_lists(headers, records)


def tokenize_bytes(data: bytes, encoding: str = "utf-8-sig", delimiter: str = ",",
                   quotechar: str = '"') -> TokenizedFile:
    """Decode and tokenize raw upload bytes.

    Raises:
        UnicodeDecodeError: When the bytes are not valid in ``encoding``
        csv.Error: When the content is not valid CSV
    """
    return tokenize_text(data.decode(encoding), delimiter=delimiter, quotechar=quotechar)


def tokenize_file(path: Union[str, Path], encoding: str = "utf-8-sig", delimiter: str = ",",
                  quotechar: str = '"') -> TokenizedFile:
    """Read and tokenize a CSV file from disk."""
    with open(path, 'rb') as f:
        data = f.read()
    return tokenize_bytes(data, encoding=encoding, delimiter=delimiter, quotechar=quotechar)
