"""
Pydantic models for strongly-typed dashboard configuration.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


class MilesParseMode(str, Enum):
    """How the miles column is parsed."""
    STRICT = "strict"  # Whole cell must be a number
    LENIENT = "lenient"  # Leading numeric prefix is enough ("12abc" -> 12)


class DashboardConfig(BaseModel):
    """Dashboard loading configuration."""

    csv_delimiter: str = Field(",", description="CSV delimiter character")
    csv_quotechar: str = Field('"', description="CSV quote character")
    csv_encoding: str = Field("utf-8-sig", description="Input CSV encoding")

    miles_parse_mode: MilesParseMode = Field(
        MilesParseMode.STRICT,
        description="Numeric parsing mode for the 'miles run' column"
    )
    max_file_size: Optional[int] = Field(
        None,
        description="Maximum file size in bytes (None = no limit)",
        gt=0
    )

    @field_validator('csv_delimiter', 'csv_quotechar')
    @classmethod
    def validate_single_character(cls, value: str) -> str:
        """csv module dialect characters must be exactly one character."""
        if len(value) != 1:
            raise ValueError(f"must be a single character, got {value!r}")
        return value

    @property
    def lenient_miles(self) -> bool:
        return self.miles_parse_mode == MilesParseMode.LENIENT

    @classmethod
    def from_dict(cls, config_dict: dict) -> "DashboardConfig":
        """
        Create DashboardConfig from a dictionary.

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: Union[str, Path]) -> "DashboardConfig":
        """
        Load and validate configuration from a JSON file.

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)
