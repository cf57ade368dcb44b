from __future__ import annotations
import os
import sys
from pathlib import Path
from messages import DEFAULT_LOCALE, MESSAGES


APP_NAME = "StudyScheduler"
DATA_DIR_ENV = "STUDY_SCHEDULER_DATA_DIR"
LOCALE_ENV = "STUDY_SCHEDULER_LOCALE"


def _platform_data_dir() -> Path:
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_NAME
    if sys.platform.startswith("win"):
        roaming = os.environ.get("APPDATA")
        return Path(roaming) / APP_NAME if roaming else home / "AppData" / "Roaming" / APP_NAME
    return home / ".local" / "share" / "study-scheduler"


def get_data_dir() -> Path:
    """
    Directory holding the cached study data and schedule.
    STUDY_SCHEDULER_DATA_DIR wins over the per-OS user data location.
    """
    override = os.environ.get(DATA_DIR_ENV)
    base = Path(override).expanduser() if override else _platform_data_dir()
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_default_locale() -> str:
    locale = os.environ.get(LOCALE_ENV, DEFAULT_LOCALE).strip().lower()
    return locale if locale in MESSAGES else DEFAULT_LOCALE
