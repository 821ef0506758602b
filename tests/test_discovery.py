"""Tests for habitcore/discovery.py — habit auto-detection."""

from datetime import date

from habitcore.discovery import auto_detect_habits, detect_habits, resolve_habit_names
from habitcore.models import Settings


def test_auto_detect_habits(store, settings):
    assert auto_detect_habits(store, settings, 30, "2026-02-11") == ["Run", "Read", "Meditate"]


def test_auto_detect_respects_window(store, settings):
    assert auto_detect_habits(store, settings, 1, "2026-02-11") == ["Run", "Read"]
    assert auto_detect_habits(store, settings, 30, "2026-01-01") == []


def test_detect_is_case_sensitive(store, settings, workspace):
    (workspace / "Daily" / "2026-02-08.md").write_text("## Habits\n- [x] run\n", encoding="utf-8")
    assert detect_habits(store, settings, date(2026, 2, 11)) == ["Run", "Read", "Meditate", "run"]


def test_detect_ignores_checkboxes_outside_section(store, settings, workspace):
    (workspace / "Daily" / "2026-02-08.md").write_text(
        "- [ ] Buy milk\n\n## Habits\n- [ ] Stretch (value: 10m)\n\n## Todo\n- [ ] Call mom\n",
        encoding="utf-8",
    )
    found = detect_habits(store, settings, date(2026, 2, 11))
    assert "Stretch" in found
    assert "Buy milk" not in found
    assert "Call mom" not in found


def test_resolve_habit_names_explicit(store):
    settings = Settings(daily_notes_folder="Daily", habits=["Run", "  ", ""])
    assert resolve_habit_names(store, settings, date(2026, 2, 11)) == ["Run"]


def test_resolve_habit_names_auto(store):
    settings = Settings(daily_notes_folder="Daily", habits=["Ignored"], auto_detect_habits=True)
    assert resolve_habit_names(store, settings, date(2026, 2, 11)) == ["Run", "Read", "Meditate"]


def test_resolve_habit_names_drops_multiline_names(store):
    settings = Settings(daily_notes_folder="Daily", habits=["Run", "Read\n## Notes"])
    assert resolve_habit_names(store, settings, date(2026, 2, 11)) == ["Run"]
