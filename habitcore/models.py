"""Typed dataclasses for the HabitNotes data model.

Settings are stored as snake_case YAML; derived habit data is serialized
as camelCase JSON for API consumers.  Unknown keys are ignored and missing
keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from habitcore.dateformat import DEFAULT_DATE_FORMAT, date_format_errors

STREAK_MODES = {"strict", "lenient"}
DEFAULT_WINDOW_DAYS = 30


class HabitValidationError(ValueError):
    """Input rejected before any note was touched."""


# ── Settings ──────────────────────────────────────────────────


def _str_list(raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [str(x) for x in raw if x is not None]


def _flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "yes", "on", "1")
    return bool(raw)


def _weekdays(raw: Any) -> list[int]:
    days = set()
    for x in raw:
        try:
            day = int(x)
        except (TypeError, ValueError):
            continue
        if 0 <= day <= 6:
            days.add(day)
    return sorted(days)


@dataclass
class Settings:
    daily_notes_folder: str = ""
    date_format: str = DEFAULT_DATE_FORMAT
    habits: list[str] = field(default_factory=list)
    auto_detect_habits: bool = False
    habits_with_values: list[str] = field(default_factory=list)
    habit_active_days: dict[str, list[int]] = field(default_factory=dict)
    streak_mode: str = "strict"  # lenient is accepted but counts like strict
    timezone: str = ""  # empty = host local time

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        active: dict[str, list[int]] = {}
        raw_active = d.get("habit_active_days") or {}
        if isinstance(raw_active, dict):
            for name, days in raw_active.items():
                if isinstance(days, (list, tuple)):
                    active[str(name)] = _weekdays(days)
        mode = str(d.get("streak_mode", "strict") or "strict").strip().lower()
        date_format = str(d.get("date_format", "") or DEFAULT_DATE_FORMAT)
        if date_format_errors(date_format):
            date_format = DEFAULT_DATE_FORMAT
        return cls(
            daily_notes_folder=str(d.get("daily_notes_folder", "") or "").strip().rstrip("/"),
            date_format=date_format,
            habits=_str_list(d.get("habits")),
            auto_detect_habits=_flag(d.get("auto_detect_habits", False)),
            habits_with_values=_str_list(d.get("habits_with_values")),
            habit_active_days=active,
            streak_mode=mode if mode in STREAK_MODES else "strict",
            timezone=str(d.get("timezone", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "daily_notes_folder": self.daily_notes_folder,
            "date_format": self.date_format,
            "habits": list(self.habits),
            "auto_detect_habits": self.auto_detect_habits,
            "habits_with_values": list(self.habits_with_values),
            "habit_active_days": {k: list(v) for k, v in self.habit_active_days.items()},
            "streak_mode": self.streak_mode,
            "timezone": self.timezone,
        }

    def active_days_for(self, name: str) -> set[int]:
        """Active weekdays (0=Sunday) for a habit; empty means every day."""
        return set(self.habit_active_days.get(name, []))

    def is_value_based(self, name: str) -> bool:
        return name in self.habits_with_values


def validate_settings(data: dict[str, Any]) -> list[str]:
    """Validate a raw settings mapping and return a list of errors (empty if valid)."""
    errors = []
    if not isinstance(data, dict):
        return ["Settings must be a mapping"]
    for key in ("habits", "habits_with_values"):
        if key in data and not isinstance(data[key], list):
            errors.append(f"{key} must be a list")
    if "date_format" in data:
        errors.extend(date_format_errors(str(data["date_format"] or "")))
    if "auto_detect_habits" in data and not isinstance(data["auto_detect_habits"], bool):
        errors.append("auto_detect_habits must be true or false")
    if "streak_mode" in data and data["streak_mode"] not in STREAK_MODES:
        errors.append(f"Invalid streak_mode: {data['streak_mode']}")
    active = data.get("habit_active_days")
    if active is not None:
        if not isinstance(active, dict):
            errors.append("habit_active_days must be a mapping")
        else:
            for name, days in active.items():
                if not isinstance(days, list) or not all(isinstance(x, int) and 0 <= x <= 6 for x in days):
                    errors.append(f"habit_active_days[{name}] must be a list of weekdays 0-6")
    return errors


def rename_in_settings(settings: Settings, old_name: str, new_name: str) -> Settings:
    """Return a copy of *settings* with *old_name* replaced by *new_name*."""
    active = dict(settings.habit_active_days)
    if old_name in active:
        active[new_name] = active.pop(old_name)
    return replace(
        settings,
        habits=[new_name if h == old_name else h for h in settings.habits],
        habits_with_values=[new_name if h == old_name else h for h in settings.habits_with_values],
        habit_active_days=active,
    )


# ── Habit records ─────────────────────────────────────────────


@dataclass
class HabitStatus:
    """Stored state of one habit line; a missing line reads as not completed."""

    completed: bool = False
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"completed": self.completed}
        if self.value is not None:
            d["value"] = self.value
        return d


@dataclass
class HabitCompletion:
    date: str = ""
    completed: bool = False
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"date": self.date, "completed": self.completed}
        if self.value is not None:
            d["value"] = self.value
        return d


@dataclass
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0


@dataclass
class CompletionStats:
    total_days_completed: int = 0
    total_active_days: int = 0
    completion_rate: float = 0.0


@dataclass
class HabitTimeline:
    name: str = ""
    completions: list[HabitCompletion] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: float = 0.0
    total_days_completed: int = 0
    total_active_days: int = 0
    is_value_based: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "completions": [c.to_dict() for c in self.completions],
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "completionRate": round(self.completion_rate, 3),
            "totalDaysCompleted": self.total_days_completed,
            "totalActiveDays": self.total_active_days,
            "isValueBased": self.is_value_based,
        }
