"""Display ordering for the game list."""

from __future__ import annotations

import locale
import unicodedata
from enum import StrEnum
from typing import Iterable

from loguru import logger

from launcher.models.game_entry import GameEntry


class SortMode(StrEnum):
    INSERTION = "insertion"
    ALPHABETICAL = "alphabetical"

    @classmethod
    def parse(cls, value: object) -> SortMode:
        """Settings value → SortMode, defaulting to insertion order."""
        try:
            return cls(value)
        except ValueError:
            return cls.INSERTION


def use_system_collation() -> None:
    """Collate names with the user's locale instead of the "C" default."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"System collation unavailable, keeping default: {e}")


def _fold(name: str) -> str:
    # Accents are ignored like case, so "Émile" sorts next to "emile" even in the C locale.
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def name_key(entry: GameEntry) -> str:
    """Case- and accent-insensitive, locale-aware sort key for a display name."""
    name = _fold(entry.display_name)
    try:
        return locale.strxfrm(name)
    except (ValueError, OSError):
        return name


def project(entries: Iterable[GameEntry], sort_mode: SortMode) -> list[GameEntry]:
    """Ordered copy of *entries* for display.

    Alphabetical order is stable: names that compare equal ignoring case
    keep their insertion order.
    """
    ordered = list(entries)
    if sort_mode == SortMode.ALPHABETICAL:
        ordered.sort(key=name_key)
    return ordered
