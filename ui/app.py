from __future__ import annotations

import logging
import os
import secrets
import threading
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from habitcore import (
    FileDocumentStore,
    HabitValidationError,
    Settings,
    auto_detect_habits,
    clear_all_habits_for_date,
    ensure_habits_for_date,
    get_all_habit_data,
    get_existing_daily_note_dates,
    get_habit_status,
    load_settings,
    rename_habit,
    rename_in_settings,
    save_settings,
    set_habit_status,
    toggle_habit,
    validate_settings,
    workspace_root as _workspace_root,
)

logging.basicConfig(
    level=os.environ.get("HABITS_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="HabitNotes API", version="0.1.0")

security = HTTPBasic(auto_error=False)

# A snapshot scans the whole window; overlapping requests are turned away.
_snapshot_lock = threading.Lock()

# Every engine write is a read-modify-write of one note; they run one at a time.
_write_lock = threading.Lock()


# ── Auth ──────────────────────────────────────────────────────


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("HABITS_USERNAME", "")
    expected_password = os.environ.get("HABITS_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Helpers ───────────────────────────────────────────────────


def _context() -> tuple[Path, FileDocumentStore, Settings]:
    root = _workspace_root()
    return root, FileDocumentStore(root), load_settings(root)


def _call(fn, *args, **kwargs):
    """Run an engine call, mapping validation errors to 400 and storage errors to 500."""
    try:
        return fn(*args, **kwargs)
    except HabitValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.exception("Note storage failed")
        raise HTTPException(status_code=500, detail=f"Storage error: {e}")


def _write(fn, *args, **kwargs):
    """Run a mutating engine call while holding the write lock."""
    with _write_lock:
        return _call(fn, *args, **kwargs)


# ── Endpoints ─────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/habits")
def api_habits(date: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Snapshot of every habit over the 30-day window ending at *date*."""
    if not _snapshot_lock.acquire(blocking=False):
        raise HTTPException(status_code=409, detail="Snapshot already in progress")
    try:
        _root, store, settings = _context()
        habits = _write(get_all_habit_data, store, settings, date)
    finally:
        _snapshot_lock.release()
    return {"habits": [h.to_dict() for h in habits]}


@app.get("/api/habits/detect")
def api_detect(days: int = 30, date: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    return {"habits": _call(auto_detect_habits, store, settings, days, date)}


@app.post("/api/habits/rename")
def api_rename(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Rename a habit in every note, then in habits.yaml."""
    old_name = str(payload.get("old_name", "") or "")
    new_name = str(payload.get("new_name", "") or "")
    with _write_lock:
        root, store, settings = _context()
        modified = _call(rename_habit, store, settings, old_name, new_name)
        save_settings(rename_in_settings(settings, old_name, new_name.strip()), root)
    return {"ok": True, "modified": modified}


@app.get("/api/habits/{name}/status")
def api_get_status(name: str, date: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    return _call(get_habit_status, store, settings, name, date).to_dict()


@app.post("/api/habits/{name}/status")
def api_set_status(name: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    completed = payload.get("completed")
    if not isinstance(completed, bool):
        raise HTTPException(status_code=400, detail="completed must be true or false")
    _root, store, settings = _context()
    _write(
        set_habit_status,
        store,
        settings,
        name,
        completed,
        payload.get("date"),
        payload.get("value"),
    )
    return {"ok": True}


@app.post("/api/habits/{name}/toggle")
def api_toggle(name: str, payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    completed = _write(toggle_habit, store, settings, name, payload.get("date"))
    return {"ok": True, "completed": completed}


@app.post("/api/days/{day}/ensure")
def api_ensure(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    _write(ensure_habits_for_date, store, settings, day)
    return {"ok": True}


@app.post("/api/days/{day}/clear")
def api_clear(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    return {"ok": True, "cleared": _write(clear_all_habits_for_date, store, settings, day)}


@app.get("/api/dates")
def api_dates(username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, store, settings = _context()
    return {"dates": get_existing_daily_note_dates(store, settings)}


@app.get("/api/settings")
def api_get_settings(username: str = Depends(get_current_user)) -> dict[str, Any]:
    _root, _store, settings = _context()
    return settings.to_dict()


@app.put("/api/settings")
def api_put_settings(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Replace habits.yaml after validation."""
    errors = validate_settings(payload)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    root = _workspace_root()
    settings = Settings.from_dict(payload)
    with _write_lock:
        save_settings(settings, root)
    return {"ok": True, "settings": settings.to_dict()}
