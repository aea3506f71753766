"""
Configuration management using Pydantic models loaded from YAML.
"""

import datetime as dt
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.calendar_grid import DAY_NAMES, DEFAULT_LOCALE
from .domain.dates import days_between, to_local_date
from .domain.models import Holiday
from .domain.sprint_calendar import (
    QUARTERS_PER_YEAR,
    SPRINT_DURATION_DAYS,
    SPRINTS_PER_QUARTER,
    SprintCalendar,
    SprintReference,
)


class SprintConfig(BaseModel):
    """Anchor of the biweekly sprint cycle."""
    reference_date: dt.date = dt.date(2025, 10, 27)
    number: int = 2
    quarter: int = 4
    year: int = 2025
    numbering_epoch: dt.date = dt.date(2025, 11, 10)

    @field_validator("number")
    @classmethod
    def validate_number(cls, value: int) -> int:
        """Ensure the sprint number fits in a quarter."""
        if not 1 <= value <= SPRINTS_PER_QUARTER:
            raise ValueError(f"number must be between 1 and {SPRINTS_PER_QUARTER}, got {value}")
        return value

    @field_validator("quarter")
    @classmethod
    def validate_quarter(cls, value: int) -> int:
        """Ensure the quarter is between 1 and 4."""
        if not 1 <= value <= QUARTERS_PER_YEAR:
            raise ValueError(f"quarter must be between 1 and {QUARTERS_PER_YEAR}, got {value}")
        return value

    @model_validator(mode="after")
    def validate_epoch_alignment(self) -> "SprintConfig":
        """Ensure the numbering epoch starts a sprint."""
        if days_between(self.reference_date, self.numbering_epoch) % SPRINT_DURATION_DAYS != 0:
            raise ValueError("numbering_epoch must fall on a sprint start")
        return self

    def build_calendar(self) -> SprintCalendar:
        """Create the sprint calendar for this anchor."""
        return SprintCalendar(
            SprintReference(
                start_date=to_local_date(self.reference_date),
                number=self.number,
                quarter=self.quarter,
                year=self.year,
                numbering_epoch=to_local_date(self.numbering_epoch),
            )
        )


class RegionalHoliday(BaseModel):
    """A non-national holiday configured by hand."""
    date: dt.date
    name: str

    def to_holiday(self) -> Holiday:
        return Holiday(date=to_local_date(self.date), name=self.name, is_national=False)


class HolidaysConfig(BaseModel):
    """Holiday API settings."""
    api_url: str = "https://libur.deno.dev/api"
    timeout_seconds: float = 30
    regional: List[RegionalHoliday] = Field(default_factory=list)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the request timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    def regional_holidays(self) -> List[Holiday]:
        return [item.to_holiday() for item in self.regional]


class AppConfig(BaseModel):
    """Application configuration."""
    locale: str = DEFAULT_LOCALE
    sprint: SprintConfig = Field(default_factory=SprintConfig)
    holidays: HolidaysConfig = Field(default_factory=HolidaysConfig)
    leave_data_file: Path = Path("leave_data.json")

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: str) -> str:
        """Ensure a day-name table exists for the locale."""
        if value not in DAY_NAMES:
            raise ValueError(f"locale must be one of {sorted(DAY_NAMES)}, got '{value}'")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative data paths are resolved against the config file location
        if not config.leave_data_file.is_absolute():
            config.leave_data_file = config_path.parent / config.leave_data_file

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
