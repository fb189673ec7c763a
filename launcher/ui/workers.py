"""Background workers for the library page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger
from PySide6.QtCore import QThread, Signal

from launcher.core.importer import ImportReport

if TYPE_CHECKING:
    from launcher.core.importer import BulkImporter
    from launcher.models.game_entry import GameEntry


@dataclass
class ConfirmReply:
    """Filled in by the GUI thread while the worker waits."""

    entry: GameEntry | None = None


class ImportWorker(QThread):
    """Runs a bulk import off the GUI thread.

    ``confirm_requested`` must be connected with
    ``Qt.BlockingQueuedConnection``: the worker blocks until the GUI-thread
    slot has shown the settings dialog and filled in the reply.
    ``import_finished`` is emitted exactly once, after the last path or after
    a crash; in the latter case it carries the results gathered so far.
    """

    confirm_requested = Signal(object, object)  # GameEntry, ConfirmReply
    progress = Signal(int, int)  # done, total
    import_finished = Signal(object)  # ImportReport

    def __init__(self, importer: BulkImporter, paths: list[str], parent=None) -> None:
        super().__init__(parent)
        self._importer = importer
        self._paths = list(paths)

    def run(self) -> None:
        report = ImportReport()
        try:
            self._importer.run(self._paths, self._confirm, on_progress=self.progress.emit, report=report)
        except Exception:  # noqa: BLE001
            logger.exception(f"Bulk import crashed after {len(report)} of {len(self._paths)} path(s)")
        finally:
            self.import_finished.emit(report)

    def _confirm(self, entry: GameEntry) -> GameEntry | None:
        reply = ConfirmReply()
        self.confirm_requested.emit(entry, reply)
        return reply.entry
