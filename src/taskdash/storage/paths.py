"""Filesystem locations for taskdash.

Every persisted file lives under the platformdirs config directory.
Directory creation is deferred to :func:`ensure_parents` so importing
this module has no side effects.
"""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "taskdash"

CONFIG_DIR: Path = Path(user_config_dir(APP_NAME))

SESSION_FILE = CONFIG_DIR / "session.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"


def ensure_parents(path: Path) -> Path:
    """Create the parent directories of *path* and return *path*."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return path


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temporary file and ``os.replace``.

    Readers see either the previous document or the new one, never a
    partially written file.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    ensure_parents(tmp)
    with tmp.open("w", encoding="utf-8") as fh:
        fh.write(data)
    try:
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass
