"""Application entry point — wires services and launches the UI."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger
from PySide6.QtWidgets import QApplication, QMessageBox

from launcher.config import Config
from launcher.context import AppContext
from launcher.core.identifiers import IdAllocator
from launcher.core.importer import BulkImporter
from launcher.core.migration import Migrator
from launcher.core.projection import use_system_collation
from launcher.data.game_library import GameLibrary
from launcher.errors import PersistenceError
from launcher.i18n import set_language, t
from launcher.logger import setup_logger
from launcher.ui.icons import create_icon_cache
from launcher.ui.main_window import MainWindow
from launcher.ui.theme import apply_theme


def create_context(data_dir: Path | None = None) -> AppContext:
    """Wire all services and return an AppContext.

    Raises PersistenceError if an existing library file cannot be read.
    """
    config = Config(data_dir)

    # Logger
    setup_logger(config.data_dir / "logs")

    allocator = IdAllocator()
    icon_cache = create_icon_cache()

    # Data
    game_library = GameLibrary(config.data_dir, allocator)
    game_library.load()

    return AppContext(
        config=config,
        allocator=allocator,
        game_library=game_library,
        migrator=Migrator(allocator),
        icon_cache=icon_cache,
        importer=BulkImporter(game_library, allocator, icon_cache),
    )


def main() -> int:
    """Application entry point."""
    use_system_collation()
    app = QApplication(sys.argv)
    app.setApplicationName("Game Launcher")
    app.setOrganizationName("GameLauncher")

    try:
        ctx = create_context()
    except PersistenceError as e:
        logger.error(f"Startup aborted: {e}")
        QMessageBox.critical(None, t("error.load_failed"), str(e))
        return 1

    set_language(ctx.config.language)
    apply_theme(ctx.config.theme)

    window = MainWindow(ctx)
    window.show_window()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
