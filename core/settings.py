"""
Settings Flag

Persisted process-wide boolean settings. Currently a single flag,
debug mode, which turns on per-comparison match tracing.

Stored as JSON:
    {"debug_mode": false}
"""

import json
import sys
import threading
from pathlib import Path


KEY_DEBUG_MODE = "debug_mode"


class SettingsFlag:
    """
    Debug-mode flag backed by a JSON file.

    - Default is False when the file is missing or unreadable
    - set() writes through immediately
    - Passed explicitly to the Router; nothing reads it as a global
    """

    def __init__(self, settings_file: str = "runtime/settings.json"):
        self.settings_file = Path(settings_file)
        self._lock = threading.Lock()

    def get(self) -> bool:
        """Return the persisted debug flag."""
        return self._load().get(KEY_DEBUG_MODE) is True

    def set(self, enabled: bool):
        """Persist the debug flag."""
        with self._lock:
            data = self._load()
            data[KEY_DEBUG_MODE] = bool(enabled)
            self._save(data)

    # ---------- helper functions ----------
    def _load(self) -> dict:
        if not self.settings_file.exists():
            return {}

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError, OSError) as e:
            print(f"Warning: Could not load settings: {e}", file=sys.stderr)
            return {}

        return data if isinstance(data, dict) else {}

    def _save(self, data: dict):
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
