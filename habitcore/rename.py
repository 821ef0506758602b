"""Rename a habit across every daily note."""

from __future__ import annotations

import logging

from habitcore.codec import has_line_break, rename_in_section, section_names
from habitcore.models import HabitValidationError, Settings
from habitcore.notes import daily_note_files
from habitcore.store import DocumentStore

logger = logging.getLogger(__name__)


def validate_rename(settings: Settings, old_name: str, new_name: str) -> list[str]:
    """Check a rename against the configured habits; returns errors (empty if valid)."""
    errors = []
    if not old_name or not old_name.strip():
        errors.append("Missing old habit name")
    if not new_name or not new_name.strip():
        errors.append("Missing new habit name")
    elif has_line_break(new_name):
        errors.append("New habit name cannot contain line breaks")
    if errors:
        return errors
    old_key = old_name.strip().casefold()
    new_key = new_name.strip().casefold()
    if old_key == new_key:
        errors.append(f"Habit is already named {new_name.strip()!r}")
    elif any(h.strip().casefold() == new_key for h in settings.habits):
        errors.append(f"Habit already exists: {new_name.strip()}")
    return errors


def rename_habit(store: DocumentStore, settings: Settings, old_name: str, new_name: str) -> int:
    """Rename *old_name* to *new_name* in every dated note; returns notes modified.

    Checked state and value annotations are kept as written.  The rename is
    rejected with HabitValidationError before any write if the new name is
    already configured or already recorded in a note that would be touched
    alongside it.
    """
    errors = validate_rename(settings, old_name, new_name)
    if errors:
        raise HabitValidationError("; ".join(errors))

    new_key = new_name.strip().casefold()
    pending: list[tuple[str, str]] = []
    for _day, f in daily_note_files(store, settings):
        content = store.read(f.path)
        updated, replaced = rename_in_section(content, old_name, new_name)
        if not replaced:
            continue
        if any(n.casefold() == new_key for n in section_names(content)):
            raise HabitValidationError(f"Habit already recorded as {new_name.strip()!r} in {f.path}")
        pending.append((f.path, updated))

    for path, updated in pending:
        store.modify(path, updated)
    logger.info("Renamed habit %r to %r in %d notes", old_name, new_name, len(pending))
    return len(pending)
