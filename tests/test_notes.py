"""Tests for habitcore/notes.py — note paths and dated note listing."""

from datetime import date

from habitcore.models import Settings
from habitcore.notes import daily_note_files, ensure_daily_note, get_existing_daily_note_dates, note_path


def test_note_path():
    assert note_path(Settings(), date(2026, 2, 11)) == "2026-02-11.md"
    assert note_path(Settings(daily_notes_folder="Daily"), date(2026, 2, 11)) == "Daily/2026-02-11.md"
    fmt = Settings(daily_notes_folder="Daily", date_format="DD.MM.YYYY")
    assert note_path(fmt, date(2026, 2, 11)) == "Daily/11.02.2026.md"


def test_existing_dates_newest_first(store, settings):
    assert get_existing_daily_note_dates(store, settings) == ["2026-02-11", "2026-02-10", "2026-02-09"]


def test_existing_dates_ignore_other_folders(store, workspace):
    (workspace / "Archive").mkdir()
    (workspace / "Archive" / "2025-01-01.md").write_text("", encoding="utf-8")
    settings = Settings(daily_notes_folder="Daily")
    assert "2025-01-01" not in get_existing_daily_note_dates(store, settings)
    assert "2025-01-01" in get_existing_daily_note_dates(store, Settings())


def test_daily_note_files_skip_malformed(store, settings):
    names = {f.basename for _, f in daily_note_files(store, settings)}
    assert "notes" not in names
    assert "2026-13-01" not in names


def test_ensure_daily_note_is_idempotent(store, settings, workspace):
    path = ensure_daily_note(store, settings, date(2026, 3, 1))
    assert path == "Daily/2026-03-01.md"
    (workspace / "Daily" / "2026-03-01.md").write_text("kept", encoding="utf-8")
    ensure_daily_note(store, settings, date(2026, 3, 1))
    assert (workspace / "Daily" / "2026-03-01.md").read_text(encoding="utf-8") == "kept"
