"""Game library — JSON-backed, id-keyed registry of game entries."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, Iterator
from uuid import UUID

from loguru import logger

from launcher.core.identifiers import IdAllocator
from launcher.errors import NotFoundError, PersistenceError
from launcher.models.game_entry import NIL_ID, GameEntry

LIBRARY_VERSION = 2


def _parse_id(raw: Any) -> UUID:
    """Stored id → UUID; anything missing or unreadable is a legacy entry."""
    if not raw:
        return NIL_ID
    try:
        return UUID(str(raw))
    except ValueError:
        logger.warning(f"Invalid game id '{raw}', treating entry as unidentified")
        return NIL_ID


def _game_entry_from_dict(data: dict[str, Any]) -> GameEntry:
    """Reconstruct a GameEntry from a dict (loaded from JSON)."""
    data = dict(data)
    entry_id = _parse_id(data.pop("id", None))
    return GameEntry(**data, id=entry_id)


def _game_entry_to_dict(entry: GameEntry) -> dict[str, Any]:
    """Convert a GameEntry to a serializable dict."""
    d = asdict(entry)
    d["id"] = str(entry.id) if entry.is_identified else ""
    return d


class GameLibrary:
    """
    Game registry — reads/writes games.json.

    Entries keep insertion order. Every mutation rewrites the whole file
    before returning; if the write fails the in-memory state is restored
    and PersistenceError is raised.
    """

    def __init__(self, data_dir: Path, allocator: IdAllocator | None = None) -> None:
        self._data_dir = data_dir
        self._path = data_dir / "games.json"
        self._allocator = allocator or IdAllocator()
        self._games: list[GameEntry] = []

    # ── Persistence ──

    def load(self) -> None:
        """Load the game list from disk. A missing file means an empty library."""
        self._games.clear()
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Failed to load game library: {e}")
            raise PersistenceError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Unexpected content in {self._path}")

        seen: set[UUID] = set()
        for i, game_data in enumerate(data.get("games", [])):
            try:
                entry = _game_entry_from_dict(game_data)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed game entry #{i}: {e}")
                continue
            if entry.id in seen:
                # Left for the migrator to re-identify.
                logger.warning(f"Duplicate game id {entry.id} on entry #{i}, treating it as unidentified")
                entry = entry.with_id(NIL_ID)
            elif entry.is_identified:
                seen.add(entry.id)
            self._games.append(entry)
        logger.info(f"Loaded {len(self._games)} game(s) from {self._path}")

    def save(self) -> None:
        """Persist the full game list to disk."""
        data = {
            "version": LIBRARY_VERSION,
            "games": [_game_entry_to_dict(entry) for entry in self._games],
        }
        tmp = self._path.with_suffix(".tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp.replace(self._path)
        except OSError as e:
            logger.error(f"Failed to save game library: {e}")
            if tmp.exists():
                tmp.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write {self._path}: {e}") from e

    def _commit(self, snapshot: list[GameEntry]) -> None:
        try:
            self.save()
        except PersistenceError:
            self._games = snapshot
            raise

    # ── Mutations ──

    def add(self, entry: GameEntry) -> GameEntry:
        """Append an entry, assigning an id if it has none (or a taken one)."""
        entry_id = self._allocator.ensure_unique(entry.id, self.ids())
        stored = entry if entry_id == entry.id else entry.with_id(entry_id)
        snapshot = list(self._games)
        self._games.append(stored)
        self._commit(snapshot)
        logger.debug(f"Added game '{stored.display_name}' ({stored.id})")
        return stored

    def edit(self, entry_id: UUID, values: GameEntry) -> GameEntry:
        """Replace all mutable fields of an entry, keeping its id and position."""
        index = self._index_of(entry_id)
        updated = self._games[index].with_values(values)
        snapshot = list(self._games)
        self._games[index] = updated
        self._commit(snapshot)
        logger.debug(f"Edited game '{updated.display_name}' ({entry_id})")
        return updated

    def delete(self, entry_id: UUID) -> None:
        index = self._index_of(entry_id)
        snapshot = list(self._games)
        removed = self._games.pop(index)
        self._commit(snapshot)
        logger.debug(f"Deleted game '{removed.display_name}' ({entry_id})")

    def replace_all(self, entries: Iterable[GameEntry]) -> None:
        """Swap the whole list in one write."""
        snapshot = list(self._games)
        self._games = list(entries)
        self._commit(snapshot)

    # ── Queries ──

    def _index_of(self, entry_id: UUID) -> int:
        for i, entry in enumerate(self._games):
            if entry.id == entry_id:
                return i
        raise NotFoundError(entry_id)

    def find_by_id(self, entry_id: UUID) -> GameEntry:
        return self._games[self._index_of(entry_id)]

    def get(self, entry_id: UUID) -> GameEntry | None:
        try:
            return self.find_by_id(entry_id)
        except NotFoundError:
            return None

    def all(self) -> list[GameEntry]:
        return list(self._games)

    def ids(self) -> set[UUID]:
        return {e.id for e in self._games if e.is_identified}

    def unidentified(self) -> list[GameEntry]:
        return [e for e in self._games if not e.is_identified]

    @property
    def count(self) -> int:
        return len(self._games)

    def __len__(self) -> int:
        return len(self._games)

    def __iter__(self) -> Iterator[GameEntry]:
        return iter(list(self._games))

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._games)
