"""Application settings — JSON-based, with file locking and batch update support."""

from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from launcher.core.projection import SortMode

# Default data directory
DEFAULT_DATA_DIR = Path.home() / "Documents" / "GameLauncher"


class Config:
    """JSON-based settings store with file locking.

    An unreadable settings file is ignored and the defaults are used.
    """

    _DEFAULTS: dict[str, Any] = {
        "language": "en_US",
        "theme": "auto",
        "sort_mode": SortMode.INSERTION.value,
        "window": {
            "geometry": "",
            "maximized": False,
        },
    }

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = data_dir or DEFAULT_DATA_DIR
        self._path = self._dir / "settings.json"
        self._lock = threading.Lock()
        self._defer_save = False
        self._load()

    def _load(self) -> None:
        """Load settings from disk, merging with defaults."""
        self._data = json.loads(json.dumps(self._DEFAULTS))  # deep copy defaults
        if self._path.exists():
            try:
                with open(self._path, encoding="utf-8") as f:
                    user_data = json.load(f)
                if isinstance(user_data, dict):
                    self._deep_merge(self._data, user_data)
                else:
                    logger.warning("Settings file is not a JSON object, using defaults")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load settings, using defaults: {e}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Recursively merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _save(self) -> None:
        """Persist settings to disk with file locking."""
        if self._defer_save:
            return
        with self._lock:
            tmp_path = self._path.with_suffix(".tmp")
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save settings: {e}")
                if tmp_path.exists():
                    tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Context manager for batching multiple setting changes into a single write."""
        self._defer_save = True
        try:
            yield
        finally:
            self._defer_save = False
            self._save()

    # ── Generic access ──

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting by dot-separated key path."""
        node = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a setting by dot-separated key path."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    # ── Typed properties ──

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    @language.setter
    def language(self, value: str) -> None:
        self.set("language", value)

    @property
    def theme(self) -> str:
        return self._data.get("theme", "auto")

    @theme.setter
    def theme(self, value: str) -> None:
        self.set("theme", value)

    @property
    def sort_mode(self) -> SortMode:
        return SortMode.parse(self._data.get("sort_mode"))

    @sort_mode.setter
    def sort_mode(self, value: SortMode) -> None:
        self.set("sort_mode", SortMode(value).value)

    @property
    def window_geometry(self) -> bytes:
        """Saved QWidget geometry blob (empty when never saved)."""
        raw = self.get("window.geometry", "")
        try:
            return bytes.fromhex(raw) if isinstance(raw, str) else b""
        except ValueError:
            return b""

    @window_geometry.setter
    def window_geometry(self, value: bytes) -> None:
        self.set("window.geometry", bytes(value).hex())

    @property
    def window_maximized(self) -> bool:
        return bool(self.get("window.maximized", False))

    @window_maximized.setter
    def window_maximized(self, value: bool) -> None:
        self.set("window.maximized", bool(value))
