"""Qt icon probes for the icon cache."""

from __future__ import annotations

from PySide6.QtCore import QFileInfo, Qt
from PySide6.QtGui import QIcon, QImage, QPixmap
from PySide6.QtWidgets import QFileIconProvider
from qfluentwidgets import FluentIcon as FIF

from launcher.core.icon_cache import IconCache
from launcher.ui.constants import LIST_ICON_SIZE


def decode_image(path: str) -> QImage | None:
    image = QImage(path)
    return None if image.isNull() else image


def extract_icon(path: str) -> QImage | None:
    """Icon the platform shows for *path* (the embedded icon for a Windows .exe)."""
    icon = QFileIconProvider().icon(QFileInfo(path))
    if icon.isNull():
        return None
    pixmap = icon.pixmap(LIST_ICON_SIZE, LIST_ICON_SIZE)
    return None if pixmap.isNull() else pixmap.toImage()


def generic_icon() -> QImage:
    """Built-in application icon, or a transparent square if that is unavailable."""
    image = FIF.APPLICATION.icon().pixmap(LIST_ICON_SIZE, LIST_ICON_SIZE).toImage()
    if image.isNull():
        image = QImage(LIST_ICON_SIZE, LIST_ICON_SIZE, QImage.Format.Format_ARGB32)
        image.fill(Qt.GlobalColor.transparent)
    return image


def create_icon_cache() -> IconCache:
    return IconCache(decode_image, extract_icon, generic_icon)


def to_qicon(image: object) -> QIcon:
    """Cached image → QIcon. Must run on the GUI thread."""
    if isinstance(image, QImage) and not image.isNull():
        return QIcon(QPixmap.fromImage(image))
    return FIF.APPLICATION.icon()
