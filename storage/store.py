"""
Persists the user's layout as a named entry in a JSON key-value file.
"""
import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional

from config import STATE_FILE, STORAGE_KEY
from models.errors import StorageError
from models.part import LayoutState

log = logging.getLogger(__name__)


class LayoutStore:
    def __init__(self, path: str = STATE_FILE, key: str = STORAGE_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a key-value mapping")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def load(self) -> Optional[LayoutState]:
        """Return the saved layout, or None if nothing has been saved yet."""
        entry = self._read_all().get(self.key)
        if entry is None:
            return None
        # Older saves hold the entry as a JSON string, like browser storage.
        if isinstance(entry, str):
            try:
                entry = json.loads(entry)
            except ValueError as e:
                raise StorageError(f"Entry '{self.key}' is not valid JSON: {e}") from e
        state = LayoutState.from_dict(entry)
        log.info("Loaded %d sheet(s) and %d component(s) from %s",
                 len(state.sheets), len(state.components), self.path)
        return state

    def save(self, state: LayoutState) -> None:
        """Write the layout entry, replacing the file if it cannot be read."""
        try:
            data = self._read_all()
        except StorageError:
            log.warning("Overwriting unreadable state file %s", self.path, exc_info=True)
            data = {}
        data[self.key] = state.to_dict()
        self._write_all(data)
        log.debug("Saved layout to %s", self.path)

    def clear(self) -> None:
        data = self._read_all()
        if data.pop(self.key, None) is not None:
            self._write_all(data)
