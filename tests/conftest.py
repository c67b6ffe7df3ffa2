"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from running_dashboard.models import ValidatedRow
from running_dashboard.observability import ObservabilityManager, RecordingHook


@pytest.fixture
def sample_rows():
    """Three valid rows: two for Alice, one for Bob sharing a date with Alice."""
    return [
        ValidatedRow(date="2024-12-31", person="Alice", miles_run="5.0"),
        ValidatedRow(date="2025-01-01", person="Alice", miles_run="3.5"),
        ValidatedRow(date="2024-12-31", person="Bob", miles_run="2.0"),
    ]


@pytest.fixture
def sample_csv_file(tmp_path) -> Path:
    """Create a valid running log CSV."""
    csv_content = """date,person,miles run
31/12/2024,Alice,5.0
01/01/2025,Alice,3.5
31/12/2024,Bob,2.0
"""
    csv_file = tmp_path / "runs.csv"
    csv_file.write_text(csv_content)
    return csv_file


@pytest.fixture
def partial_csv_file(tmp_path) -> Path:
    """Create a CSV with three valid rows and one bad date."""
    csv_content = """date,person,miles run
31/12/2024,Alice,5.0
29/02/2023,Alice,4.0
01/01/2025,Alice,3.5
31/12/2024,Bob,2.0
"""
    csv_file = tmp_path / "partial.csv"
    csv_file.write_text(csv_content)
    return csv_file


@pytest.fixture
def missing_header_csv_file(tmp_path) -> Path:
    """Create a CSV without the person column."""
    csv_file = tmp_path / "no_person.csv"
    csv_file.write_text("date,miles run\n31/12/2024,5.0\n")
    return csv_file


@pytest.fixture
def sample_config_file(tmp_path) -> Path:
    """Create a config JSON enabling lenient miles parsing."""
    config = {
        "csv_delimiter": ",",
        "miles_parse_mode": "lenient",
        "max_file_size": 1048576
    }
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config, indent=2))
    return config_file


@pytest.fixture
def recording_hook():
    return RecordingHook()


@pytest.fixture
def observability(recording_hook) -> ObservabilityManager:
    """Isolated manager so tests never touch the global one."""
    manager = ObservabilityManager()
    manager.register_hook(recording_hook)
    return manager
