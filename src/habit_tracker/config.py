# src/habit_tracker/config.py

"""
Tracker settings, read from TRACKER_* environment variables.

A local .env file is loaded first (existing environment wins). Every key has a
default, and malformed values fall back to it instead of failing at import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.custom_dates import YEAR_MAX, YEAR_MIN
from .tasks.task_filter import DatePeriod

ENV_PREFIX = "TRACKER"
_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _raw(suffix: str) -> str | None:
    """Stripped value of TRACKER_<suffix>; None when unset or blank."""
    value = os.getenv(_k(suffix))
    if value is None or not value.strip():
        return None
    return value.strip()


def _env(suffix: str, default: str) -> str:
    return _raw(suffix) or default


def _env_bool(suffix: str, default: bool) -> bool:
    value = _raw(suffix)
    return default if value is None else value.lower() in _TRUTHY


def _env_int(suffix: str, default: int) -> int:
    value = _raw(suffix)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_path(suffix: str, default: Path) -> Path:
    value = _raw(suffix)
    return default if value is None else Path(value).expanduser()


def _env_period(suffix: str, default: DatePeriod) -> DatePeriod:
    value = _raw(suffix)
    if value is None:
        return default
    try:
        period = DatePeriod.parse(value)
    except ValueError:
        return default
    # CUSTOM needs a range and cannot be a startup default
    return default if period == DatePeriod.CUSTOM else period


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str
    data_dir: Path

    console_enabled: bool
    seed_sample_data: bool

    # task filters
    default_period: DatePeriod
    custom_year_min: int
    custom_year_max: int

    @staticmethod
    def from_env() -> Settings:
        year_min = _env_int("CUSTOM_YEAR_MIN", YEAR_MIN)
        year_max = _env_int("CUSTOM_YEAR_MAX", YEAR_MAX)
        if year_min > year_max:
            year_min, year_max = YEAR_MIN, YEAR_MAX

        return Settings(
            app_name=_env("APP_NAME", "tracker"),
            log_level=_env("LOG_LEVEL", "WARNING").upper(),
            data_dir=_env_path("DATA_DIR", Path(".local/tracker")),
            console_enabled=_env_bool("CONSOLE_ENABLED", True),
            seed_sample_data=_env_bool("SEED_SAMPLE_DATA", True),
            default_period=_env_period("DEFAULT_PERIOD", DatePeriod.CURRENT_MONTH),
            custom_year_min=year_min,
            custom_year_max=year_max,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
