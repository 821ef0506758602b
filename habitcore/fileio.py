"""Locked, atomic file I/O for note and settings files."""

from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str:
    """Read a UTF-8 text file with line endings untouched; a missing file reads as empty."""
    if not path.exists():
        return ""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, returning {} for missing, empty or non-mapping files."""
    text = read_text(path)
    if not text.strip():
        return {}
    loaded = yaml.safe_load(text)
    return loaded if isinstance(loaded, dict) else {}


def replace_file(path: Path, content: str) -> None:
    """Replace *path* with *content* in one step.

    Writes a sibling temp file under an exclusive flock, fsyncs it, then
    renames it over the target so readers never see a half-written note.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=path.suffix or ".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        os.replace(tmp_name, path)
    except Exception:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    """Atomic YAML write, keeping key order."""
    replace_file(path, yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False))
