"""HabitNotes core library: habit tracking on top of dated Markdown notes.

Public API re-exports for convenient imports:
    from habitcore import FileDocumentStore, load_settings, get_all_habit_data, ...
"""

# Workspace & settings
from habitcore.workspace import (
    workspace_root,
    settings_path,
    load_settings,
    save_settings,
    today,
    today_str,
    resolve_day,
    require_day,
)

# Dates
from habitcore.dateformat import (
    DEFAULT_DATE_FORMAT,
    format_date,
    parse_date,
    is_valid_date,
    date_format_errors,
)

# Storage
from habitcore.store import (
    DocumentStore,
    FileDocumentStore,
    NoteFile,
)

# Section codec
from habitcore.codec import (
    HABITS_HEADER,
    find_habit_section,
    parse_habit_line,
    format_habit_line,
    section_names,
    read_status,
    write_status,
    ensure_habit_lines,
    rename_in_section,
    uncheck_all,
)

# Notes
from habitcore.notes import (
    note_path,
    ensure_daily_note,
    get_existing_daily_note_dates,
)

# Engine operations
from habitcore.discovery import auto_detect_habits, resolve_habit_names
from habitcore.status import (
    get_habit_status,
    set_habit_status,
    toggle_habit,
    ensure_habits_for_date,
    clear_all_habits_for_date,
    get_completion_rate,
)
from habitcore.streaks import compute_streaks, compute_completion_stats
from habitcore.timeline import get_all_habit_data, build_timeline
from habitcore.rename import rename_habit, validate_rename

# Models
from habitcore.models import (
    Settings,
    HabitStatus,
    HabitCompletion,
    HabitTimeline,
    StreakResult,
    CompletionStats,
    HabitValidationError,
    validate_settings,
    rename_in_settings,
)
