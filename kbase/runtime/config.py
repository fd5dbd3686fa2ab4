"""Persistent JSON preferences and default catalog locations.

Stores the UI theme name and extra catalog paths.
Malformed or missing config falls back to empty values.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..catalog import expand_path

APP_NAME = "kbase"
CONFIG_FILENAME = "config.json"
CATALOG_FILENAME = "commands.yaml"
LOG_FILENAME = "kbase.log"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME
DEFAULT_CATALOG_PATH = CONFIG_DIR / CATALOG_FILENAME
LEGACY_CATALOG_PATH = Path.home() / ".config" / APP_NAME / CATALOG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

logger = logging.getLogger(__name__)


def default_catalog_path() -> Path:
    """Return the platform catalog path, preferring an existing legacy file."""
    if DEFAULT_CATALOG_PATH.exists():
        return DEFAULT_CATALOG_PATH
    if LEGACY_CATALOG_PATH.exists():
        return LEGACY_CATALOG_PATH
    return DEFAULT_CATALOG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never interrupts a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_command_paths() -> list[Path]:
    """Load configured catalog files/directories with ``~`` and ``$VAR`` expanded.

    Non-string and blank entries are dropped.
    """
    value = load_config().get("command_paths")
    if not isinstance(value, list):
        return []
    return [expand_path(raw.strip()) for raw in value if isinstance(raw, str) and raw.strip()]
