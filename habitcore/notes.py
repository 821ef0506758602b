"""Daily note addressing: date -> path, creation, and listing dated notes."""

from __future__ import annotations

import logging
from datetime import date

from habitcore.dateformat import format_date, parse_date
from habitcore.models import Settings
from habitcore.store import DocumentStore, NoteFile

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


def note_path(settings: Settings, day: date) -> str:
    """``<folder>/<formatted date>.md``, or just the file name without a folder."""
    name = format_date(day, settings.date_format) + NOTE_SUFFIX
    folder = settings.daily_notes_folder.strip().rstrip("/")
    return f"{folder}/{name}" if folder else name


def read_note(store: DocumentStore, settings: Settings, day: date) -> str | None:
    """Text of the note for *day*, or None when it does not exist."""
    path = note_path(settings, day)
    if not store.exists(path):
        return None
    return store.read(path)


def ensure_daily_note(store: DocumentStore, settings: Settings, day: date) -> str:
    """Create the folder and an empty note for *day* if needed; return its path."""
    path = note_path(settings, day)
    if store.exists(path):
        return path
    folder = settings.daily_notes_folder.strip().rstrip("/")
    if folder:
        store.create_folder(folder)
    store.create(path, "")
    logger.info("Created daily note %s", path)
    return path


def daily_note_files(store: DocumentStore, settings: Settings) -> list[tuple[date, NoteFile]]:
    """Every stored note whose basename is a valid date, under the notes folder."""
    folder = settings.daily_notes_folder.strip().rstrip("/")
    prefix = f"{folder}/" if folder else ""
    out = []
    for f in store.list_files():
        if not f.path.endswith(NOTE_SUFFIX):
            continue
        if prefix and not f.path.startswith(prefix):
            continue
        parsed = parse_date(f.basename, settings.date_format)
        if parsed is None:
            logger.debug("Skipping %s: not a %s date", f.path, settings.date_format)
            continue
        out.append((parsed, f))
    return out


def get_existing_daily_note_dates(store: DocumentStore, settings: Settings) -> list[str]:
    """Basenames of all dated notes, newest first."""
    dates = {d: f.basename for d, f in daily_note_files(store, settings)}
    return [dates[d] for d in sorted(dates, reverse=True)]
