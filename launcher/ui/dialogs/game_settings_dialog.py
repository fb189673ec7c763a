"""Game settings dialog — edits one entry before it is added or saved."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QFormLayout, QHBoxLayout, QWidget
from qfluentwidgets import (
    CaptionLabel,
    LineEdit,
    MessageBoxBase,
    SubtitleLabel,
    ToolButton,
)
from qfluentwidgets import FluentIcon as FIF

from launcher.i18n import t
from launcher.models.game_entry import GameEntry
from launcher.ui.constants import DIALOG_MIN_WIDTH


class _PathField(QWidget):
    """LineEdit with a browse button."""

    def __init__(self, text: str, pick_dir: bool, file_filter: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._pick_dir = pick_dir
        self._filter = file_filter

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.edit = LineEdit(self)
        self.edit.setText(text)
        self.edit.setClearButtonEnabled(True)
        layout.addWidget(self.edit, 1)

        browse = ToolButton(FIF.FOLDER, self)
        browse.setToolTip(t("dialog.browse"))
        browse.clicked.connect(self._browse)
        layout.addWidget(browse)

    def text(self) -> str:
        return self.edit.text().strip()

    def _browse(self) -> None:
        start = self.text() or str(Path.home())
        if self._pick_dir:
            path = QFileDialog.getExistingDirectory(self, t("dialog.browse"), start)
        else:
            path, _ = QFileDialog.getOpenFileName(self, t("dialog.browse"), start, self._filter)
        if path:
            self.edit.setText(str(Path(path)))


class GameSettingsDialog(MessageBoxBase):
    """Lets the user adjust name, paths and icon of an entry.

    Never touches the library; the caller decides what to do with
    :meth:`entry`.
    """

    def __init__(self, entry: GameEntry, is_new: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._entry = entry

        title = SubtitleLabel(t("dialog.title_add") if is_new else t("dialog.title_edit"), self)
        self.viewLayout.addWidget(title)

        exe_filter = t("library.filter_exe") if sys.platform == "win32" else t("library.filter_all")

        self._name = LineEdit(self)
        self._name.setText(entry.display_name)
        self._exe = _PathField(entry.executable_path, pick_dir=False, file_filter=exe_filter, parent=self)
        self._start_dir = _PathField(entry.start_directory, pick_dir=True, parent=self)
        self._icon = _PathField(entry.custom_icon_path, pick_dir=False, file_filter=t("dialog.filter_images"), parent=self)
        self._icon.edit.setPlaceholderText(t("dialog.custom_icon_hint"))

        form = QFormLayout()
        form.setSpacing(8)
        form.addRow(t("dialog.name"), self._name)
        form.addRow(t("dialog.executable"), self._exe)
        form.addRow(t("dialog.start_dir"), self._start_dir)
        form.addRow(t("dialog.custom_icon"), self._icon)
        self.viewLayout.addLayout(form)

        self._error_label = CaptionLabel("", self)
        self._error_label.setStyleSheet("color: #d13438;")
        self._error_label.hide()
        self.viewLayout.addWidget(self._error_label)

        self.yesButton.setText(t("dialog.ok"))
        self.cancelButton.setText(t("dialog.cancel"))
        self.widget.setMinimumWidth(DIALOG_MIN_WIDTH)

    def validate(self) -> bool:
        if not self._name.text().strip():
            self._error_label.setText(t("dialog.name_required"))
            self._error_label.show()
            return False
        return True

    def entry(self) -> GameEntry:
        """The edited entry, keeping the id it was opened with."""
        return replace(
            self._entry,
            display_name=self._name.text().strip(),
            executable_path=self._exe.text(),
            start_directory=self._start_dir.text(),
            custom_icon_path=self._icon.text(),
        )

    @classmethod
    def ask(cls, entry: GameEntry, parent: QWidget, is_new: bool = False) -> GameEntry | None:
        """Show the dialog; the edited entry on OK, None on cancel."""
        dialog = cls(entry, is_new=is_new, parent=parent)
        if dialog.exec():
            return dialog.entry()
        return None
