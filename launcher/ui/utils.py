"""UI utility functions — InfoBar notices and error presentation."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget
from qfluentwidgets import InfoBar, InfoBarPosition

from launcher.errors import LauncherError, NotFoundError, PersistenceError
from launcher.i18n import t


def _show(factory: Callable[..., InfoBar], parent: QWidget, title: str, content: str, duration: int) -> None:
    factory(
        title=title,
        content=content,
        orient=Qt.Orientation.Vertical,
        isClosable=True,
        position=InfoBarPosition.TOP_RIGHT,
        duration=duration,
        parent=parent,
    )


def show_success(parent: QWidget, title: str, content: str = "") -> None:
    _show(InfoBar.success, parent, title, content, 3000)


def show_info(parent: QWidget, title: str, content: str = "") -> None:
    _show(InfoBar.info, parent, title, content, 4000)


def show_warning(parent: QWidget, title: str, content: str = "") -> None:
    _show(InfoBar.warning, parent, title, content, 4000)


def show_error(parent: QWidget, title: str, content: str = "") -> None:
    _show(InfoBar.error, parent, title, content, 5000)


def show_library_error(parent: QWidget, error: LauncherError) -> None:
    """Present a registry error the way the user should read it."""
    if isinstance(error, NotFoundError):
        show_error(parent, t("error.not_found"), t("error.not_found_detail"))
    elif isinstance(error, PersistenceError):
        show_error(parent, t("error.save_failed"), t("error.save_failed_detail", error=error))
    else:
        show_error(parent, type(error).__name__, str(error))
