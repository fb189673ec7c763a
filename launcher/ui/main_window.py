"""Main window — FluentWindow hosting the game library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from loguru import logger
from PySide6.QtCore import QByteArray, QSize
from PySide6.QtGui import QCloseEvent
from qfluentwidgets import FluentIcon as FIF
from qfluentwidgets import FluentWindow

from launcher.errors import LauncherError
from launcher.i18n import t
from launcher.ui.constants import (
    WINDOW_DEFAULT_HEIGHT,
    WINDOW_DEFAULT_WIDTH,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
)
from launcher.ui.pages.library_page import GameLibraryPage
from launcher.ui.utils import show_error, show_info, show_warning

if TYPE_CHECKING:
    from launcher.context import AppContext


class MainWindow(FluentWindow):
    """Application main window with sidebar navigation."""

    def __init__(self, ctx: AppContext) -> None:
        super().__init__()
        self._ctx = ctx

        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(QSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT))
        self.resize(WINDOW_DEFAULT_WIDTH, WINDOW_DEFAULT_HEIGHT)

        # Legacy entries need ids before anything is keyed by them.
        self._migration_notice = self._run_migration()

        self._library_page = GameLibraryPage(ctx, self)
        self.addSubInterface(self._library_page, FIF.GAME, t("nav.library"))

        self._restore_geometry()

    def show_window(self) -> None:
        if self._ctx.config.window_maximized:
            self.showMaximized()
        else:
            self.show()

        if self._migration_notice is not None:
            self._migration_notice()
            self._migration_notice = None

    def _run_migration(self) -> Callable[[], None] | None:
        """Give legacy entries ids. Returns the notice to show once visible, if any."""
        try:
            result = self._ctx.migrator.migrate(self._ctx.game_library)
        except LauncherError as e:
            message = str(e)
            logger.error(f"Migration failed: {message}")
            return lambda: show_error(self, t("error.migration_failed"), message)
        if result.migrated:
            return lambda: show_info(self, t("migration.title"), t("migration.done", count=result.changed))
        return None

    # ── Geometry ──

    def _restore_geometry(self) -> None:
        geometry = self._ctx.config.window_geometry
        if geometry:
            self.restoreGeometry(QByteArray(geometry))

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._library_page.is_importing:
            show_warning(self, t("library.import_busy"))
            event.ignore()
            return

        with self._ctx.config.batch_update():
            self._ctx.config.window_maximized = self.isMaximized()
            self._ctx.config.window_geometry = self.saveGeometry().data()
        super().closeEvent(event)
