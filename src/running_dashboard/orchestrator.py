"""
Orchestration logic for loading a running log.

This module ties the tokenizer and the validator together for a single file,
independent of CLI and session concerns.
"""

import csv
import logging
import time
from pathlib import Path
from typing import Optional, Union

from running_dashboard.config_models import DashboardConfig
from running_dashboard.models import ErrorKind, ParseOutcome, ValidationError
from running_dashboard.tokenizer import tokenize_bytes
from running_dashboard.validators import validate

logger = logging.getLogger(__name__)


class FileProcessingError(Exception):
    """Exception raised when a file cannot be read or tokenized."""
    pass


def check_file(input_file: Path, config: DashboardConfig) -> None:
    """Ensure the input exists and respects the configured size limit.

    Raises:
        FileProcessingError: If the file is missing or too large
    """
    if not input_file.exists():
        raise FileProcessingError(f"Input file not found: {input_file}")
    if not input_file.is_file():
        raise FileProcessingError(f"Input is not a regular file: {input_file}")

    file_size = input_file.stat().st_size
    if config.max_file_size is not None and file_size > config.max_file_size:
        size_mb = file_size / (1024 * 1024)
        limit_mb = config.max_file_size / (1024 * 1024)
        raise FileProcessingError(f"File size {size_mb:.2f} MB exceeds maximum allowed size {limit_mb:.2f} MB")

    size_kb = file_size / 1024
    logger.info(f"Processing: {input_file.name} ({size_kb:.1f} KB)")


def validate_bytes(data: bytes, config: Optional[DashboardConfig] = None) -> ParseOutcome:
    """Tokenize and validate raw upload bytes.

    Raises:
        FileProcessingError: If the bytes cannot be decoded or tokenized
    """
    config = config or DashboardConfig()
    try:
        tokenized = tokenize_bytes(
            data,
            encoding=config.csv_encoding,
            delimiter=config.csv_delimiter,
            quotechar=config.csv_quotechar,
        )
    except (UnicodeDecodeError, csv.Error) as e:
        raise FileProcessingError(f"Failed to parse CSV file: {e}") from e

    return validate(tokenized.headers, tokenized.records, lenient_miles=config.lenient_miles)


def load_running_log(
    input_file: Union[str, Path],
    config: Optional[DashboardConfig] = None,
    raise_on_unreadable: bool = True
) -> ParseOutcome:
    """Load and validate a running log file.

    Args:
        input_file: Path to the CSV file
        config: Loading configuration (defaults apply when None)
        raise_on_unreadable: If False, report an unreadable file as an
            UNREADABLE_FILE error in the outcome instead of raising

    Returns:
        ParseOutcome for the file

    Raises:
        FileProcessingError: When the file is unusable and raise_on_unreadable is True
    """
    config = config or DashboardConfig()
    input_file = Path(input_file)
    start_time = time.time()

    try:
        check_file(input_file, config)
        with open(input_file, 'rb') as f:
            data = f.read()
        outcome = validate_bytes(data, config)
    except (FileProcessingError, OSError) as e:
        error_msg = str(e)
        logger.error(f"❌ Failed {input_file.name}: {error_msg}")
        if raise_on_unreadable:
            if isinstance(e, FileProcessingError):
                raise
            raise FileProcessingError(error_msg) from e
        return ParseOutcome(success=False, errors=(ValidationError(
            kind=ErrorKind.UNREADABLE_FILE,
            message=error_msg,
        ),))

    duration = time.time() - start_time
    status = "✅" if outcome.success else "⚠️"
    logger.info(f"{status} Loaded {input_file.name} in {duration:.2f}s: "
                f"{len(outcome.rows)} valid row(s), {outcome.error_count} error(s)")
    return outcome
