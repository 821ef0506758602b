"""Workspace root, settings file, timezone and "today" helpers."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habitcore.dateformat import format_date, parse_date
from habitcore.fileio import read_yaml, write_yaml_atomic
from habitcore.models import HabitValidationError, Settings


def workspace_root() -> Path:
    """Get the notes workspace root (contains habits.yaml and the daily notes)."""
    return Path(
        os.environ.get("HABITS_ROOT", str(Path.home() / "notes"))
    ).expanduser().resolve()


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habits.yaml"


def load_settings(root: Path | None = None) -> Settings:
    """Load habits.yaml into a Settings snapshot (defaults when absent)."""
    return Settings.from_dict(read_yaml(settings_path(root)))


def save_settings(settings: Settings, root: Path | None = None) -> None:
    write_yaml_atomic(settings_path(root), settings.to_dict())


def today(settings: Settings) -> date:
    """Current date in the configured timezone, or host local time."""
    if settings.timezone:
        try:
            return datetime.now(ZoneInfo(settings.timezone)).date()
        except ZoneInfoNotFoundError:
            pass
    return date.today()


def resolve_day(settings: Settings, day: str | None = None) -> date:
    """Parse *day* under the configured format, falling back to today."""
    if day:
        parsed = parse_date(day, settings.date_format)
        if parsed is not None:
            return parsed
    return today(settings)


def require_day(settings: Settings, day: str | None = None) -> date:
    """Like resolve_day, but an unparseable *day* is an error rather than today."""
    if day is None or day == "":
        return today(settings)
    parsed = parse_date(day, settings.date_format)
    if parsed is None:
        raise HabitValidationError(f"Invalid date for format {settings.date_format}: {day!r}")
    return parsed


def today_str(settings: Settings) -> str:
    return format_date(today(settings), settings.date_format)
