"""Per-habit completion timelines with streaks and rates for a date window."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from habitcore.codec import read_status
from habitcore.dateformat import format_date
from habitcore.discovery import resolve_habit_names
from habitcore.models import DEFAULT_WINDOW_DAYS, HabitCompletion, HabitTimeline, Settings
from habitcore.notes import read_note
from habitcore.status import ensure_habits_for_date
from habitcore.store import DocumentStore
from habitcore.streaks import compute_completion_stats, compute_streaks
from habitcore.workspace import resolve_day

logger = logging.getLogger(__name__)


def window_days(base: date, length: int = DEFAULT_WINDOW_DAYS) -> list[date]:
    """*length* consecutive dates ending at *base*, oldest first."""
    return [base - timedelta(days=offset) for offset in range(length - 1, -1, -1)]


def build_timeline(
    name: str,
    notes: list[tuple[str, str | None]],
    settings: Settings,
) -> HabitTimeline:
    """Reduce one habit's view of the window's notes into a HabitTimeline.

    *notes* pairs each formatted date (oldest first) with that day's note
    text, or None when the note does not exist.
    """
    completions = []
    for day_str, content in notes:
        status = read_status(content, name) if content is not None else None
        completions.append(
            HabitCompletion(
                date=day_str,
                completed=bool(status and status.completed),
                value=status.value if status else None,
            )
        )
    active = settings.active_days_for(name)
    streaks = compute_streaks(completions, active, settings.date_format)
    stats = compute_completion_stats(completions, active, settings.date_format)
    return HabitTimeline(
        name=name,
        completions=completions,
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        completion_rate=stats.completion_rate,
        total_days_completed=stats.total_days_completed,
        total_active_days=stats.total_active_days,
        is_value_based=settings.is_value_based(name),
    )


def get_all_habit_data(
    store: DocumentStore,
    settings: Settings,
    base_date: str | None = None,
) -> list[HabitTimeline]:
    """Snapshot of every habit over the 30 days ending at *base_date*.

    Also makes sure the base date's note lists every habit, the only write
    this performs.  Each note in the window is read once per call; nothing
    is cached between calls.
    """
    base = resolve_day(settings, base_date)
    names = resolve_habit_names(store, settings, base)
    ensure_habits_for_date(store, settings, format_date(base, settings.date_format), names)

    notes = [
        (format_date(d, settings.date_format), read_note(store, settings, d))
        for d in window_days(base)
    ]
    timelines = [build_timeline(name, notes, settings) for name in names]
    logger.debug("Built %d habit timelines ending %s", len(timelines), base)
    return timelines
