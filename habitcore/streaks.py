"""Streak and completion statistics over a habit's completion series.

Series are chronological (oldest first).  An *active day* set holds weekday
indices (0=Sunday .. 6=Saturday); an empty set means every day is active.
Inactive days neither extend nor break a streak and are left out of the
completion rate.
"""

from __future__ import annotations

from collections.abc import Collection

from habitcore.dateformat import DEFAULT_DATE_FORMAT, parse_date, sunday_weekday
from habitcore.models import CompletionStats, HabitCompletion, StreakResult


def active_flags(
    completions: list[HabitCompletion],
    active_days: Collection[int] = (),
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list[bool]:
    """Per-entry active flag.  Entries whose date cannot be parsed count as active."""
    if not active_days:
        return [True] * len(completions)
    days = set(active_days)
    flags = []
    for c in completions:
        d = parse_date(c.date, date_format)
        flags.append(d is None or sunday_weekday(d) in days)
    return flags


def compute_streaks(
    completions: list[HabitCompletion],
    active_days: Collection[int] = (),
    date_format: str = DEFAULT_DATE_FORMAT,
) -> StreakResult:
    """Current and longest streak.

    The current streak has a one-day grace: if the most recent active day is
    not completed yet it is skipped (unless it is the only entry), so an
    unfinished today does not zero a running streak.

    Both streak modes count the same way; ``lenient`` is accepted in
    settings but has no gap tolerance of its own yet.
    """
    if not completions:
        return StreakResult()
    active = active_flags(completions, active_days, date_format)

    longest = 0
    run = 0
    for i in range(len(completions) - 1, -1, -1):
        if not active[i]:
            continue
        if completions[i].completed:
            run += 1
            longest = max(longest, run)
        else:
            run = 0

    start = len(completions) - 1
    while start > 0 and not active[start]:
        start -= 1
    if active[start] and not completions[start].completed and start > 0:
        start -= 1

    current = 0
    for i in range(start, -1, -1):
        if not active[i]:
            continue
        if not completions[i].completed:
            break
        current += 1

    return StreakResult(current_streak=current, longest_streak=longest)


def compute_completion_stats(
    completions: list[HabitCompletion],
    active_days: Collection[int] = (),
    date_format: str = DEFAULT_DATE_FORMAT,
) -> CompletionStats:
    """Totals and completion percentage over active days only."""
    active = active_flags(completions, active_days, date_format)
    considered = [c for c, is_active in zip(completions, active) if is_active]
    total = len(considered)
    done = sum(1 for c in considered if c.completed)
    rate = 100 * done / total if total > 0 else 0.0
    return CompletionStats(total_days_completed=done, total_active_days=total, completion_rate=rate)
