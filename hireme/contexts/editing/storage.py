"""
Durable key-value storage.

A local stand-in for browser local storage: one JSON file mapping string keys
to string values. Writes go to a temporary file that then replaces the original,
so a crash mid-write never leaves a half-written store behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from hireme.contexts.editing.exceptions import StorageError
from hireme.contexts.editing.logger import _log_debug, _log_warning

load_dotenv()
DEFAULT_STORAGE_PATH = Path(
    os.getenv("HIREME_STORAGE_PATH", str(Path.home() / ".hireme" / "local_storage.json"))
).expanduser()


class JsonFileStorage:
    """
    Key-value store persisted as a single JSON object on disk.

    Values are strings, as with browser local storage; callers serialise
    structured data themselves.
    """

    def __init__(self, path: Path = DEFAULT_STORAGE_PATH):
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under key.

        Returns:
            Stored string, or None if the file or key does not exist

        Raises:
            StorageError: If the storage file exists but cannot be read or parsed
        """
        items = self._read_all()
        value = items.get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value under '{key}' is not a string", path=self.path)
        return value

    def set_item(self, key: str, value: str) -> None:
        """
        Store value under key, keeping other keys intact.

        Raises:
            StorageError: If the storage file cannot be written
        """
        try:
            items = self._read_all()
        except StorageError as e:
            # An unreadable store must not block saving new data
            _log_warning(f"Replacing unreadable storage file: {e.message}")
            items = {}

        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError("Could not read storage file", path=self.path, original_error=e)

        if not content.strip():
            return {}

        try:
            items = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError("Storage file is not valid JSON", path=self.path, original_error=e)

        if not isinstance(items, dict):
            raise StorageError("Storage file must hold a JSON object", path=self.path)
        return items

    def _write_all(self, items: Dict[str, str]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Could not write storage file", path=self.path, original_error=e)

        _log_debug(f"Wrote {len(items)} key(s) to {self.path}")
