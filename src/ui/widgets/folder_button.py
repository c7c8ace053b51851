# ui/widgets/folder_button.py
from __future__ import annotations

import logging

from PySide6.QtCore import QSize, Signal
from PySide6.QtWidgets import QPushButton

from core.services import FolderDialog
from core.state import AppState
from ui.icons import SVG_FOLDER, svg_icon

logger = logging.getLogger(__name__)


class FolderButton(QPushButton):
    """
    Shows the chosen folder; shows "Choose folder" while hovered or when
    nothing is selected yet.
    """
    folderChosen = Signal(str)

    def __init__(self, app_state: AppState, dialog: FolderDialog, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.dialog = dialog

        self.setObjectName("choose-folder")
        self.setIcon(svg_icon(SVG_FOLDER, 18))
        self.setIconSize(QSize(18, 18))
        self.setText(self.app_state.ui.folder_label)

        self.clicked.connect(self.choose)
        self.app_state.ui_changed.connect(self._on_ui_changed)

    def choose(self):
        path = self.dialog.choose(multiple=False, directory=True)
        if path is None:
            logger.info("No folder was selected")
            return
        self.app_state.replace_ui(folder=str(path))
        self.folderChosen.emit(str(path))

    def enterEvent(self, event):
        self.app_state.replace_ui(folder_hovered=True)
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.app_state.replace_ui(folder_hovered=False)
        super().leaveEvent(event)

    def _on_ui_changed(self, ui):
        self.setText(ui.folder_label)
        self.setToolTip(ui.folder or "")
