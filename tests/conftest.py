"""Shared test fixtures for HabitNotes tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from habitcore import FileDocumentStore, Settings, load_settings


NOTE_0211 = """# Wednesday

Some text.

## Habits

- [x] Run (value: 5k)
- [ ] Read

## Notes
foo
"""

NOTE_0210 = """## Habits

- [x] Run (value: 3k)
- [x] Read
"""

NOTE_0209 = """## Habits
- [x] Run
- [x] Meditate
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary notes workspace with three dated notes."""
    root = tmp_path / "workspace"
    daily = root / "Daily"
    daily.mkdir(parents=True)

    settings = {
        "daily_notes_folder": "Daily",
        "date_format": "YYYY-MM-DD",
        "habits": ["Run", "Read", "Meditate"],
        "auto_detect_habits": False,
        "habits_with_values": ["Run"],
        "habit_active_days": {},
        "streak_mode": "strict",
    }
    (root / "habits.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    (daily / "2026-02-11.md").write_text(NOTE_0211, encoding="utf-8")
    (daily / "2026-02-10.md").write_text(NOTE_0210, encoding="utf-8")
    (daily / "2026-02-09.md").write_text(NOTE_0209, encoding="utf-8")

    # Not daily notes: must never be scanned or rewritten
    (daily / "notes.md").write_text("## Habits\n- [x] Run\n", encoding="utf-8")
    (daily / "2026-13-01.md").write_text("## Habits\n- [x] Run\n", encoding="utf-8")

    os.environ["HABITS_ROOT"] = str(root)
    yield root
    if "HABITS_ROOT" in os.environ:
        del os.environ["HABITS_ROOT"]


@pytest.fixture
def store(workspace: Path) -> FileDocumentStore:
    return FileDocumentStore(workspace)


@pytest.fixture
def settings(workspace: Path) -> Settings:
    return load_settings(workspace)


@pytest.fixture
def note_text(workspace: Path):
    """Read a daily note straight from disk."""
    def _read(day: str) -> str:
        return (workspace / "Daily" / f"{day}.md").read_text(encoding="utf-8")
    return _read
