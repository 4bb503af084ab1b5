"""
Persistent command line defaults.

Settings live in a small JSON file. Any malformed data falls back to
defaults with a logged warning; a bad settings file never stops grading.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "SAT_AUTOGRADER_SETTINGS"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_settings_path() -> Path:
    """Settings file path: $SAT_AUTOGRADER_SETTINGS or ~/.sat_autograder/settings.json."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".sat_autograder" / "settings.json"


@dataclass(frozen=True)
class AutograderSettings:
    """
    Command line defaults.

    Attributes:
        key_dir: Folder of worksheet key files for --key-id (None = not set)
        skip_missing: Default for --skip-missing / --count-missing.
            True matches the grading screen's default.
        log_level: Root log level name
    """
    key_dir: Optional[str] = None
    skip_missing: bool = True
    log_level: str = "INFO"
    schema_version: int = 1

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> AutograderSettings:
        """Build settings from a JSON object, keeping defaults for bad fields."""
        defaults = cls()

        key_dir = raw.get("key_dir")
        if key_dir is not None and not isinstance(key_dir, str):
            logger.warning(f"Ignoring invalid key_dir setting: {key_dir!r}")
            key_dir = defaults.key_dir

        skip_missing = raw.get("skip_missing", defaults.skip_missing)
        if not isinstance(skip_missing, bool):
            logger.warning(f"Ignoring invalid skip_missing setting: {skip_missing!r}")
            skip_missing = defaults.skip_missing

        log_level = str(raw.get("log_level", defaults.log_level)).upper()
        if log_level not in LOG_LEVELS:
            logger.warning(f"Ignoring invalid log_level setting: {log_level!r}")
            log_level = defaults.log_level

        return cls(key_dir=key_dir, skip_missing=skip_missing, log_level=log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: Optional[Path] = None) -> AutograderSettings:
    """
    Load settings, falling back to defaults.

    A missing file is normal and silently gives defaults. A corrupted or
    unreadable file gives defaults with a warning.
    """
    path = path or default_settings_path()
    if not path.exists():
        return AutograderSettings()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file {path} is corrupted, using defaults: {e}")
        return AutograderSettings()
    except OSError as e:
        logger.warning(f"Failed to read settings {path}, using defaults: {e}")
        return AutograderSettings()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {path} is not a JSON object, using defaults")
        return AutograderSettings()

    return AutograderSettings.from_dict(raw)


def save_settings(settings: AutograderSettings, path: Optional[Path] = None) -> Path:
    """Write settings as JSON and return the path written."""
    path = path or default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    return path
