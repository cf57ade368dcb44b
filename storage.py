from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any
from config import get_data_dir

logger = logging.getLogger(__name__)


def _sanitize_key(key: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", key.strip())
    safe = safe.strip("_")
    if not safe:
        raise ValueError("Storage key cannot be empty.")
    return safe[:80]


def _backup_file(path: Path, content: bytes) -> None:
    backup = path.with_suffix(path.suffix + ".bak")
    try:
        backup.write_bytes(content)
    except OSError:
        # If backup fails we still continue with a reset
        logger.warning("Could not back up %s", path)


def load_json(path: Path | str) -> Any:
    """
    Load JSON from path with safety:
    - If missing: return None
    - If empty, not UTF-8 or invalid: write .bak, remove the file and return None
    """
    path = Path(path)
    if not path.exists():
        return None

    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8").strip()
        if not text:
            raise ValueError("empty file")
        return json.loads(text)
    except ValueError:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
        logger.warning("Discarding unreadable data in %s", path)
        _backup_file(path, raw)
        path.unlink()
        return None


def save_json(path: Path | str, payload: Any) -> None:
    """
    Atomic JSON write: write to temp file then replace target.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    temp.replace(path)


class JsonStore:
    """Key-value store keeping one JSON file per key."""

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory) if directory is not None else get_data_dir()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_sanitize_key(key)}.json"

    def put(self, key: str, value: Any) -> None:
        save_json(self._path(key), value)

    def get(self, key: str) -> Any:
        return load_json(self._path(key))

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
