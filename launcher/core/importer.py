"""Bulk import — registers dropped files one at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from loguru import logger

from launcher.core.identifiers import IdAllocator
from launcher.models.game_entry import GameEntry

if TYPE_CHECKING:
    from launcher.core.icon_cache import IconCache
    from launcher.data.game_library import GameLibrary

# Per-entry customization: returns the (possibly edited) entry, or None to skip.
ConfirmFn = Callable[[GameEntry], "GameEntry | None"]


class ImportStatus(StrEnum):
    ADDED = "added"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ImportResult:
    path: str
    status: ImportStatus
    entry: GameEntry | None = None
    error: Exception | None = None


@dataclass
class ImportReport:
    """Per-path outcomes of one batch, in input order."""

    results: list[ImportResult] = field(default_factory=list)

    def _with_status(self, status: ImportStatus) -> list[ImportResult]:
        return [r for r in self.results if r.status == status]

    @property
    def added(self) -> list[ImportResult]:
        return self._with_status(ImportStatus.ADDED)

    @property
    def skipped(self) -> list[ImportResult]:
        return self._with_status(ImportStatus.SKIPPED)

    @property
    def failed(self) -> list[ImportResult]:
        return self._with_status(ImportStatus.FAILED)

    def __len__(self) -> int:
        return len(self.results)


class BulkImporter:
    """
    Adds games from a list of paths.

    Each path gets a default entry (name from the file stem, start
    directory from its parent) with a fresh id, goes through *confirm*,
    and is added to the library. A cancelled or failing path never stops
    the rest of the batch.

    Not thread-safe: the caller keeps every other library mutation out
    while a batch runs.
    """

    def __init__(
        self,
        library: GameLibrary,
        allocator: IdAllocator | None = None,
        icon_cache: IconCache | None = None,
    ) -> None:
        self._library = library
        self._allocator = allocator or IdAllocator()
        self._icon_cache = icon_cache

    def run(
        self,
        paths: Iterable[str | Path],
        confirm: ConfirmFn,
        on_progress: Callable[[int, int], None] | None = None,
        report: ImportReport | None = None,
    ) -> ImportReport:
        """Import *paths* in order.

        Results are appended to *report* as each path finishes, so a caller
        that passes its own report still sees the completed items if the
        batch is interrupted.
        """
        paths = list(paths)
        if report is None:
            report = ImportReport()
        for i, path in enumerate(paths, 1):
            report.results.append(self.add_one(path, confirm))
            if on_progress:
                on_progress(i, len(paths))

        logger.info(
            f"Import finished: {len(report.added)} added, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    def add_one(self, path: str | Path, confirm: ConfirmFn) -> ImportResult:
        path_str = str(path)
        try:
            candidate = GameEntry.from_executable(path)
            candidate = candidate.with_id(self._allocator.allocate(self._library.ids()))

            confirmed = confirm(candidate)
            if confirmed is None:
                logger.debug(f"Import skipped: {path_str}")
                return ImportResult(path_str, ImportStatus.SKIPPED)

            if not confirmed.is_identified:
                confirmed = confirmed.with_id(candidate.id)
            stored = self._library.add(confirmed)
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Import failed for {path_str}: {e}")
            return ImportResult(path_str, ImportStatus.FAILED, error=e)

        if self._icon_cache is not None:
            self._icon_cache.get_or_load(stored)
        return ImportResult(path_str, ImportStatus.ADDED, entry=stored)
