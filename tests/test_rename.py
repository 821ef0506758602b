"""Tests for habitcore/rename.py — renaming a habit across notes."""

import pytest

from habitcore.models import HabitValidationError, Settings
from habitcore.rename import rename_habit, validate_rename


def test_rename_preserves_state_and_value(store, settings, note_text, workspace):
    assert rename_habit(store, settings, "Run", "Jog") == 3
    assert "- [x] Jog (value: 5k)\n" in note_text("2026-02-11")
    assert "- [x] Jog (value: 3k)\n" in note_text("2026-02-10")
    assert "- [x] Jog\n" in note_text("2026-02-09")
    for day in ("2026-02-11", "2026-02-10", "2026-02-09"):
        assert "Run" not in note_text(day)
    # Non-daily notes are left alone
    assert (workspace / "Daily" / "notes.md").read_text(encoding="utf-8") == "## Habits\n- [x] Run\n"
    assert (workspace / "Daily" / "2026-13-01.md").read_text(encoding="utf-8") == "## Habits\n- [x] Run\n"


def test_rename_counts_only_matching_notes(store, settings):
    assert rename_habit(store, settings, "Meditate", "Yoga") == 1


def test_rename_unknown_habit(store, settings):
    assert rename_habit(store, settings, "Swim", "Dive") == 0


def test_rename_to_configured_name_rejected(store, settings, note_text):
    before = note_text("2026-02-11")
    with pytest.raises(HabitValidationError):
        rename_habit(store, settings, "Run", "read")
    assert note_text("2026-02-11") == before


def test_rename_to_recorded_name_rejected_before_any_write(store, note_text):
    settings = Settings(daily_notes_folder="Daily", habits=["Run", "Read"])
    before = {d: note_text(d) for d in ("2026-02-11", "2026-02-10", "2026-02-09")}
    with pytest.raises(HabitValidationError):
        rename_habit(store, settings, "Run", "Meditate")
    assert {d: note_text(d) for d in before} == before


def test_validate_rename():
    settings = Settings(habits=["Run", "Read"])
    assert validate_rename(settings, "Run", "Jog") == []
    assert validate_rename(settings, "Run", " ") == ["Missing new habit name"]
    assert any("already named" in e for e in validate_rename(settings, "Run", "run"))
    assert any("already exists" in e for e in validate_rename(settings, "Run", "Read"))


def test_rename_to_multiline_name_rejected(store, settings, note_text):
    before = note_text("2026-02-11")
    with pytest.raises(HabitValidationError):
        rename_habit(store, settings, "Run", "Jog\n- [x] Fake")
    assert note_text("2026-02-11") == before
    assert validate_rename(settings, "Run", "Jog\r\n") == ["New habit name cannot contain line breaks"]
