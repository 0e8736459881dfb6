# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "ConstructionDashboard"
COMPANY_NAME = "BuildOps"


def user_data_dir() -> Path:
    """
    Returns the per-user data directory. ``PM_DATA_DIR`` overrides it.

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\BuildOps\\ConstructionDashboard

    macOS:
        ~/Library/Application Support/BuildOps/ConstructionDashboard

    Linux:
        ~/.local/share/BuildOps/ConstructionDashboard
    """
    override = (os.getenv("PM_DATA_DIR", "") or "").strip()
    try:
        if override:
            path = Path(override).expanduser()
        else:
            if sys.platform.startswith("win"):
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            elif sys.platform == "darwin":
                base = Path.home() / "Library" / "Application Support"
            else:
                base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
            path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    """
    The full path to the SQLite database file under the user data dir.
    """
    return user_data_dir() / "construction_dashboard.db"


def database_url() -> str:
    configured = (os.getenv("PM_DATABASE_URL", "") or "").strip()
    if configured:
        return configured
    return f"sqlite:///{default_db_path().as_posix()}"
