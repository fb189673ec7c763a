"""Identifier migration for libraries saved before games had ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID

from loguru import logger

from launcher.core.identifiers import IdAllocator

if TYPE_CHECKING:
    from launcher.data.game_library import GameLibrary


@dataclass
class MigrationResult:
    """Outcome of one migration pass."""

    assigned: list[UUID] = field(default_factory=list)

    @property
    def changed(self) -> int:
        return len(self.assigned)

    @property
    def migrated(self) -> bool:
        return bool(self.assigned)


class Migrator:
    """Backfills ids onto unidentified entries in a single write.

    Running it on an already migrated library finds nothing to do and
    does not touch the file.
    """

    def __init__(self, allocator: IdAllocator | None = None) -> None:
        self._allocator = allocator or IdAllocator()

    @staticmethod
    def needs_migration(library: GameLibrary) -> bool:
        return bool(library.unidentified())

    def migrate(self, library: GameLibrary) -> MigrationResult:
        result = MigrationResult()
        if not self.needs_migration(library):
            return result

        taken = library.ids()
        migrated = []
        # Allocation errors propagate before anything is written.
        for entry in library.all():
            if not entry.is_identified:
                new_id = self._allocator.allocate(taken)
                taken.add(new_id)
                result.assigned.append(new_id)
                entry = entry.with_id(new_id)
            migrated.append(entry)

        library.replace_all(migrated)
        logger.info(f"Migrated {result.changed} game(s) to identifiers")
        return result
