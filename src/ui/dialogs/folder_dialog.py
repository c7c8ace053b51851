from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QFileDialog


class QtFolderDialog:
    """Folder picker backed by the native Qt dialog."""

    def __init__(self, parent=None, title: str = "Select Music Folder"):
        self.parent = parent
        self.title = title

    def choose(self, multiple: bool = False, directory: bool = True) -> Optional[str]:
        if multiple or not directory:
            raise ValueError("Only single directory selection is supported")

        path = QFileDialog.getExistingDirectory(self.parent, self.title)
        if not path:
            return None
        return path
