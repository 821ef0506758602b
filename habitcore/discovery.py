"""Habit discovery: collect habit names recorded in recent daily notes."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from habitcore.codec import has_line_break, section_names
from habitcore.models import DEFAULT_WINDOW_DAYS, Settings
from habitcore.notes import read_note
from habitcore.store import DocumentStore
from habitcore.workspace import resolve_day

logger = logging.getLogger(__name__)


def detect_habits(store: DocumentStore, settings: Settings, base: date, window_days: int = DEFAULT_WINDOW_DAYS) -> list[str]:
    """Distinct habit names in the *window_days* notes ending at *base*.

    Names are compared exactly, so "Run" and "run" are two habits.  Order is
    first sighting, newest note first.
    """
    seen: dict[str, None] = {}
    for offset in range(max(window_days, 0)):
        content = read_note(store, settings, base - timedelta(days=offset))
        if content is None:
            continue
        for name in section_names(content):
            seen.setdefault(name, None)
    logger.debug("Detected %d habits in %d days ending %s", len(seen), window_days, base)
    return list(seen)


def auto_detect_habits(
    store: DocumentStore,
    settings: Settings,
    window_days: int = DEFAULT_WINDOW_DAYS,
    base_date: str | None = None,
) -> list[str]:
    """Detect habits over a window ending at *base_date* (today when absent or invalid)."""
    return detect_habits(store, settings, resolve_day(settings, base_date), window_days)


def resolve_habit_names(store: DocumentStore, settings: Settings, base: date) -> list[str]:
    """Configured habit list, or the detected one when auto-detect is on.

    Blank names and names that would span several lines are dropped.
    """
    if settings.auto_detect_habits:
        names = detect_habits(store, settings, base)
    else:
        names = settings.habits
    return [n for n in names if n and n.strip() and not has_line_break(n)]
