"""Game icon cache — one rendered image per game id, loaded on demand."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable
from uuid import UUID

from loguru import logger

from launcher.models.game_entry import GameEntry

# Probes return None (or raise) when they cannot produce an image.
ImageProbe = Callable[[str], Any]


def _is_null(image: Any) -> bool:
    if image is None:
        return True
    is_null = getattr(image, "isNull", None)
    return bool(is_null()) if callable(is_null) else False


class IconCache:
    """
    Maps game id → icon image.

    Lookup order: custom icon file, icon extracted from the executable,
    generic application icon. Loading never raises; every failure ends in
    the generic icon. The image type is whatever the probes produce (the
    UI wires QImage probes from ``launcher.ui.icons``).
    """

    def __init__(
        self,
        decoder: ImageProbe,
        extractor: ImageProbe,
        fallback: Callable[[], Any],
    ) -> None:
        self._decode = decoder
        self._extract = extractor
        self._fallback_factory = fallback
        self._fallback: Any = None
        self._images: dict[UUID, Any] = {}
        self._lock = threading.RLock()

    def get_or_load(self, entry: GameEntry, dirty: bool = False) -> Any:
        """Return the cached icon for *entry*, loading it if needed.

        *dirty* means the icon-affecting fields changed since the image was
        cached; the old image is dropped before reloading.
        """
        with self._lock:
            if entry.id in self._images:
                if not dirty:
                    return self._images[entry.id]
                del self._images[entry.id]

            try:
                image = self._load(entry)
            except (OSError, ValueError) as e:
                logger.warning(f"Icon lookup failed for '{entry.display_name}': {e}")
                image = self.fallback()
            self._images[entry.id] = image
            return image

    def invalidate(self, entry_id: UUID) -> None:
        with self._lock:
            self._images.pop(entry_id, None)

    def contains(self, entry_id: UUID) -> bool:
        with self._lock:
            return entry_id in self._images

    def clear(self) -> None:
        with self._lock:
            self._images.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._images)

    # ── Loading ──

    def _load(self, entry: GameEntry) -> Any:
        if entry.custom_icon_path:
            if Path(entry.custom_icon_path).is_file():
                image = self._try(self._decode, entry.custom_icon_path)
                if image is not None:
                    return image
            # A broken custom icon goes straight to the generic icon.
            logger.debug(f"Custom icon unusable for '{entry.display_name}': {entry.custom_icon_path}")
            return self.fallback()

        if entry.executable_path and Path(entry.executable_path).exists():
            image = self._try(self._extract, entry.executable_path)
            if image is not None:
                return image
        return self.fallback()

    def _try(self, probe: ImageProbe, path: str) -> Any:
        try:
            image = probe(path)
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Icon load failed for {path}: {e}")
            return None
        return None if _is_null(image) else image

    def fallback(self) -> Any:
        """Generic icon, built once."""
        if self._fallback is None:
            try:
                self._fallback = self._fallback_factory()
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Fallback icon failed: {e}")
                self._fallback = object()
        return self._fallback
