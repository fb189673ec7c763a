"""Application context — service container for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from launcher.config import Config
    from launcher.core.icon_cache import IconCache
    from launcher.core.identifiers import IdAllocator
    from launcher.core.importer import BulkImporter
    from launcher.core.migration import Migrator
    from launcher.data.game_library import GameLibrary


@dataclass
class AppContext:
    """
    Central service container.

    Built once at startup and handed to every page and dialog, so no
    component reaches for a global library or settings object.
    """

    config: Config
    allocator: IdAllocator
    game_library: GameLibrary
    migrator: Migrator
    icon_cache: IconCache
    importer: BulkImporter
