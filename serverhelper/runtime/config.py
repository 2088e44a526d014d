"""Persistent JSON config helpers.

Stores the backup directory, UI theme and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir, user_documents_dir

APP_NAME = "serverhelper"
CONFIG_FILENAME = "config.json"
BACKUP_DIR_NAME = "ServerBackups"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def default_backup_dir() -> Path:
    """Return ``<Documents>/ServerBackups``, the conventional backup root."""
    return Path(user_documents_dir()) / BACKUP_DIR_NAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only profile never breaks the
    dashboard.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_backup_dir() -> Path:
    """Return the configured backup directory or the Documents default."""
    value = _load_string("backup_dir")
    if value is None:
        return default_backup_dir()
    return Path(value).expanduser()


def save_backup_dir(backup_dir: Path) -> None:
    _save_string("backup_dir", str(backup_dir))


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    _save_string("theme", theme_name)


def load_log_level() -> str | None:
    return _load_string("log_level")
