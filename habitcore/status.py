"""Read and write habit state in daily notes."""

from __future__ import annotations

import logging
from datetime import timedelta

from habitcore.codec import ensure_habit_lines, format_habit_line, read_status, uncheck_all, write_status
from habitcore.discovery import resolve_habit_names
from habitcore.models import DEFAULT_WINDOW_DAYS, HabitStatus, HabitValidationError, Settings
from habitcore.notes import ensure_daily_note, note_path, read_note
from habitcore.store import DocumentStore
from habitcore.workspace import require_day, resolve_day

logger = logging.getLogger(__name__)


def get_habit_status(
    store: DocumentStore,
    settings: Settings,
    name: str,
    day: str | None = None,
) -> HabitStatus:
    """Stored status of *name* on *day* (today by default).

    A missing note or missing line both read as not completed.
    """
    content = read_note(store, settings, require_day(settings, day))
    if content is None:
        return HabitStatus()
    return read_status(content, name)


def set_habit_status(
    store: DocumentStore,
    settings: Settings,
    name: str,
    completed: bool,
    day: str | None = None,
    value: str | int | float | None = None,
) -> None:
    """Write the habit's line for *day*, creating the note and section as needed."""
    if not name or not name.strip():
        raise HabitValidationError("Missing habit name")
    target = require_day(settings, day)
    format_habit_line(name, completed, value)  # reject unstorable values before creating the note
    path = ensure_daily_note(store, settings, target)
    content = store.read(path)
    store.modify(path, write_status(content, name, completed, value))
    logger.info("Set %s=%s on %s", name, "done" if completed else "open", path)


def toggle_habit(
    store: DocumentStore,
    settings: Settings,
    name: str,
    day: str | None = None,
) -> bool:
    """Flip the stored completed flag, keeping any value; returns the new state."""
    current = get_habit_status(store, settings, name, day)
    set_habit_status(store, settings, name, not current.completed, day, current.value)
    return not current.completed


def ensure_habits_for_date(
    store: DocumentStore,
    settings: Settings,
    day: str | None = None,
    names: list[str] | None = None,
) -> None:
    """Make sure the note for *day* has a checkbox line for every known habit.

    Missing habits get an unchecked line; existing lines are untouched, so
    repeated calls are no-ops.  Nothing is created when there are no habits.
    """
    target = require_day(settings, day)
    if names is None:
        names = resolve_habit_names(store, settings, target)
    names = [n for n in names if n and n.strip()]
    if not names:
        return
    path = ensure_daily_note(store, settings, target)
    content = store.read(path)
    updated = ensure_habit_lines(content, names)
    if updated == content:
        logger.debug("All %d habits already present in %s", len(names), path)
        return
    store.modify(path, updated)
    logger.info("Inserted missing habit lines into %s", path)


def clear_all_habits_for_date(
    store: DocumentStore,
    settings: Settings,
    day: str | None = None,
) -> int:
    """Uncheck every habit on *day*; returns how many lines changed."""
    target = require_day(settings, day)
    content = read_note(store, settings, target)
    if content is None:
        return 0
    updated, changed = uncheck_all(content)
    if changed:
        store.modify(note_path(settings, target), updated)
        logger.info("Cleared %d habits on %s", changed, target)
    return changed


def get_completion_rate(
    store: DocumentStore,
    settings: Settings,
    name: str,
    days: int = DEFAULT_WINDOW_DAYS,
    base_date: str | None = None,
) -> float:
    """Percentage of the last *days* days with the habit completed (all days count)."""
    if days <= 0:
        return 0.0
    base = resolve_day(settings, base_date)
    completed = 0
    for offset in range(days):
        content = read_note(store, settings, base - timedelta(days=offset))
        if content is not None and read_status(content, name).completed:
            completed += 1
    return 100 * completed / days
