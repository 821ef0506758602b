"""Tests for habitcore/models.py — settings and habit record serialization."""

from habitcore.models import (
    HabitCompletion,
    HabitStatus,
    HabitTimeline,
    Settings,
    rename_in_settings,
    validate_settings,
)


def test_settings_defaults():
    s = Settings.from_dict({})
    assert s.date_format == "YYYY-MM-DD"
    assert s.habits == []
    assert s.auto_detect_habits is False
    assert s.streak_mode == "strict"
    assert s.habit_active_days == {}


def test_settings_from_dict():
    s = Settings.from_dict({
        "daily_notes_folder": "Daily/",
        "habits": ["Run", "Read"],
        "habits_with_values": ["Run"],
        "habit_active_days": {"Run": [5, 1, 1, 9]},
        "streak_mode": "Lenient",
        "unknown_key": True,
    })
    assert s.daily_notes_folder == "Daily"
    assert s.habits == ["Run", "Read"]
    assert s.habit_active_days == {"Run": [1, 5]}
    assert s.streak_mode == "lenient"
    assert s.is_value_based("Run") is True
    assert s.is_value_based("Read") is False
    assert s.active_days_for("Run") == {1, 5}
    assert s.active_days_for("Read") == set()


def test_settings_invalid_streak_mode_falls_back():
    assert Settings.from_dict({"streak_mode": "fuzzy"}).streak_mode == "strict"


def test_settings_round_trip():
    s = Settings(habits=["A"], habit_active_days={"A": [0, 6]}, timezone="UTC")
    assert Settings.from_dict(s.to_dict()) == s


def test_validate_settings():
    assert validate_settings({"habits": ["A"], "streak_mode": "strict"}) == []
    errors = validate_settings({
        "habits": "A",
        "streak_mode": "fuzzy",
        "habit_active_days": {"A": [7]},
        "date_format": "",
    })
    assert any("habits" in e for e in errors)
    assert any("streak_mode" in e for e in errors)
    assert any("habit_active_days" in e for e in errors)
    assert any("date_format" in e for e in errors)


def test_rename_in_settings():
    s = Settings(
        habits=["Run", "Read"],
        habits_with_values=["Run"],
        habit_active_days={"Run": [1, 2]},
    )
    renamed = rename_in_settings(s, "Run", "Jog")
    assert renamed.habits == ["Jog", "Read"]
    assert renamed.habits_with_values == ["Jog"]
    assert renamed.habit_active_days == {"Jog": [1, 2]}
    assert s.habits == ["Run", "Read"]


def test_status_and_completion_to_dict():
    assert HabitStatus().to_dict() == {"completed": False}
    assert HabitStatus(True, "5k").to_dict() == {"completed": True, "value": "5k"}
    assert HabitCompletion("2026-02-11", True).to_dict() == {"date": "2026-02-11", "completed": True}


def test_timeline_to_dict_keys():
    d = HabitTimeline(name="Run", completion_rate=33.33333).to_dict()
    assert d["completionRate"] == 33.333
    assert set(d) == {
        "name",
        "completions",
        "currentStreak",
        "longestStreak",
        "completionRate",
        "totalDaysCompleted",
        "totalActiveDays",
        "isValueBased",
    }


def test_validate_settings_date_format():
    assert validate_settings({"date_format": "D.M.YYYY"}) == []
    assert validate_settings({"date_format": "[Week] YYYY"}) == [
        "date_format must contain a month token",
        "date_format must contain a day token",
    ]
    assert validate_settings({"date_format": "YYYY-MM-DD hh"}) == ["Unsupported date_format letters: h"]


def test_validate_settings_auto_detect_must_be_bool():
    assert validate_settings({"auto_detect_habits": True}) == []
    assert validate_settings({"auto_detect_habits": "false"}) == ["auto_detect_habits must be true or false"]


def test_settings_from_hand_edited_file():
    s = Settings.from_dict({
        "auto_detect_habits": "false",
        "habit_active_days": {"Run": ["mon", 2, None, "4"]},
        "date_format": "YYYY",
    })
    assert s.auto_detect_habits is False
    assert s.habit_active_days == {"Run": [2, 4]}
    assert s.date_format == "YYYY-MM-DD"
    assert Settings.from_dict({"auto_detect_habits": "yes"}).auto_detect_habits is True
