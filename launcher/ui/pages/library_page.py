"""Library page — game list with add/edit/delete, sorting and drag-and-drop import."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID

from loguru import logger
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QDragEnterEvent, QDropEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)
from qfluentwidgets import (
    CaptionLabel,
    ListWidget,
    MessageBox,
    PrimaryPushButton,
    PushButton,
    TogglePushButton,
)
from qfluentwidgets import FluentIcon as FIF

from launcher.core.importer import ImportReport, ImportStatus
from launcher.core.projection import SortMode, project
from launcher.errors import LauncherError
from launcher.i18n import t
from launcher.ui.constants import LIST_ICON_SIZE
from launcher.ui.dialogs.game_settings_dialog import GameSettingsDialog
from launcher.ui.icons import to_qicon
from launcher.ui.utils import show_error, show_info, show_library_error, show_success, show_warning
from launcher.ui.workers import ConfirmReply, ImportWorker

if TYPE_CHECKING:
    from launcher.context import AppContext
    from launcher.models.game_entry import GameEntry

_ID_ROLE = Qt.ItemDataRole.UserRole


class GameLibraryPage(QWidget):
    """Game list view.

    The list is rebuilt from the library after every change. While a
    drag-and-drop import runs the page is disabled; it is re-enabled in
    the worker's completion slot on the GUI thread.
    """

    def __init__(self, ctx: AppContext, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ctx = ctx
        self._worker: ImportWorker | None = None
        self.setObjectName("gameLibraryPage")
        self.setAcceptDrops(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 16, 24, 12)
        layout.setSpacing(12)

        # ── Toolbar ──
        toolbar = QHBoxLayout()
        toolbar.setSpacing(12)

        self._add_btn = PrimaryPushButton(FIF.ADD, t("library.add"), self)
        self._add_btn.clicked.connect(self._on_add)
        toolbar.addWidget(self._add_btn)

        self._edit_btn = PushButton(FIF.EDIT, t("library.edit"), self)
        self._edit_btn.clicked.connect(self._on_edit)
        toolbar.addWidget(self._edit_btn)

        self._delete_btn = PushButton(FIF.DELETE, t("library.delete"), self)
        self._delete_btn.clicked.connect(self._on_delete)
        toolbar.addWidget(self._delete_btn)

        toolbar.addStretch()

        self._sort_btn = TogglePushButton(FIF.FONT, t("library.sort_alpha"), self)
        self._sort_btn.setChecked(ctx.config.sort_mode == SortMode.ALPHABETICAL)
        self._sort_btn.toggled.connect(self._on_sort_toggled)
        toolbar.addWidget(self._sort_btn)

        layout.addLayout(toolbar)

        # ── Game list ──
        self._list = ListWidget(self)
        self._list.setIconSize(QSize(LIST_ICON_SIZE, LIST_ICON_SIZE))
        self._list.itemDoubleClicked.connect(lambda _item: self._on_edit())
        self._list.itemSelectionChanged.connect(self._update_actions)
        layout.addWidget(self._list, stretch=1)

        self._empty_label = CaptionLabel(t("library.empty_hint"), self)
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("color: #888;")
        layout.addWidget(self._empty_label)
        self._empty_label.hide()

        # ── Status bar ──
        self._status_label = CaptionLabel(t("library.ready"), self)
        self._status_label.setStyleSheet("color: #888;")
        layout.addWidget(self._status_label)

        QShortcut(QKeySequence(QKeySequence.StandardKey.Delete), self._list, activated=self._on_delete)

        self.refresh()

    @property
    def is_importing(self) -> bool:
        return self._worker is not None

    # ── Projection ──

    def refresh(self) -> None:
        """Rebuild the list from the library in the current sort order."""
        selected = self._selected_id()
        entries = project(self._ctx.game_library.all(), self._ctx.config.sort_mode)

        self._list.clear()
        for entry in entries:
            item = QListWidgetItem(to_qicon(self._ctx.icon_cache.get_or_load(entry)), entry.display_name)
            item.setData(_ID_ROLE, str(entry.id))
            item.setToolTip(entry.executable_path)
            self._list.addItem(item)
            if entry.id == selected:
                self._list.setCurrentItem(item)

        self._empty_label.setVisible(not entries)
        self._status_label.setText(t("library.n_games", count=len(entries)))
        self._update_actions()

    def _selected_id(self) -> UUID | None:
        item = self._list.currentItem()
        if item is None:
            return None
        return UUID(item.data(_ID_ROLE))

    def _selected_entry(self) -> GameEntry | None:
        entry_id = self._selected_id()
        if entry_id is None:
            return None
        entry = self._ctx.game_library.get(entry_id)
        if entry is None:
            show_error(self.window(), t("error.not_found"), t("error.not_found_detail"))
            self.refresh()
        return entry

    def _update_actions(self) -> None:
        has_selection = self._list.currentItem() is not None
        self._edit_btn.setEnabled(has_selection)
        self._delete_btn.setEnabled(has_selection)

    # ── Single-entry actions ──

    def _ask_entry(self, entry: GameEntry) -> GameEntry | None:
        return GameSettingsDialog.ask(entry, self.window(), is_new=True)

    def _on_add(self) -> None:
        exe_filter = t("library.filter_exe") if sys.platform == "win32" else t("library.filter_all")
        path, _ = QFileDialog.getOpenFileName(self, t("library.pick_executable"), "", exe_filter)
        if not path:
            return

        result = self._ctx.importer.add_one(path, self._ask_entry)
        if result.status == ImportStatus.FAILED:
            self._show_import_error(path, result.error)
        elif result.status == ImportStatus.ADDED:
            show_success(self.window(), t("library.added", name=result.entry.display_name))
        self.refresh()

    def _show_import_error(self, path: str, error: Exception | None) -> None:
        if isinstance(error, LauncherError):
            show_library_error(self.window(), error)
        else:
            show_error(self.window(), t("library.import_failed_item", path=path, error=error))

    def _on_edit(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            return

        values = GameSettingsDialog.ask(entry, self.window())
        if values is None:
            return

        try:
            updated = self._ctx.game_library.edit(entry.id, values)
        except LauncherError as e:
            show_library_error(self.window(), e)
            self.refresh()
            return

        if updated.icon_fields() != entry.icon_fields():
            self._ctx.icon_cache.invalidate(updated.id)
        self.refresh()

    def _on_delete(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            return

        box = MessageBox(
            t("library.delete_title"),
            t("library.delete_confirm", name=entry.display_name),
            self.window(),
        )
        if not box.exec():
            return

        try:
            self._ctx.game_library.delete(entry.id)
        except LauncherError as e:
            show_library_error(self.window(), e)
        else:
            self._ctx.icon_cache.invalidate(entry.id)
        self.refresh()

    def _on_sort_toggled(self, checked: bool) -> None:
        self._ctx.config.sort_mode = SortMode.ALPHABETICAL if checked else SortMode.INSERTION
        self.refresh()

    # ── Drag-and-drop import ──

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls() and self._worker is None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        paths = [p for p in paths if Path(p).is_file()]
        if paths:
            event.acceptProposedAction()
            self.start_import(paths)

    def start_import(self, paths: list[str]) -> None:
        """Import *paths* in the background. One batch at a time."""
        if self._worker is not None:
            show_warning(self.window(), t("library.import_busy"))
            return

        logger.info(f"Importing {len(paths)} dropped file(s)")
        self.setEnabled(False)
        self._status_label.setText(t("library.importing", done=0, total=len(paths)))

        self._worker = ImportWorker(self._ctx.importer, paths, self)
        self._worker.confirm_requested.connect(
            self._on_confirm_requested, Qt.ConnectionType.BlockingQueuedConnection
        )
        self._worker.progress.connect(self._on_import_progress)
        self._worker.import_finished.connect(self._on_import_finished)
        self._worker.finished.connect(self._worker.deleteLater)
        self._worker.start()

    def _on_confirm_requested(self, entry: GameEntry, reply: ConfirmReply) -> None:
        reply.entry = self._ask_entry(entry)

    def _on_import_progress(self, done: int, total: int) -> None:
        self._status_label.setText(t("library.importing", done=done, total=total))

    def _on_import_finished(self, report: ImportReport) -> None:
        """Runs on the GUI thread once the worker is done."""
        self._worker = None
        self.setEnabled(True)
        self.refresh()

        for result in report.failed:
            self._show_import_error(result.path, result.error)
        show_info(
            self.window(),
            t("library.import_done"),
            t(
                "library.import_summary",
                added=len(report.added),
                skipped=len(report.skipped),
                failed=len(report.failed),
            ),
        )
