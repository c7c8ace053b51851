# ui/widgets/song_list_widget.py
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView

from core.models import PlaylistResponse, SongMetadata
from ui.models.song_list_model import SongListModel


class SongListWidget(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)

        self.table = QTableView()
        self.model = SongListModel()
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.setColumnWidth(0, 320)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setDefaultSectionSize(24)
        self.table.setObjectName("SongTable")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.table)

    def set_response(self, response: PlaylistResponse | None):
        self.model.set_response(response)

    def set_metadata(self, row: int, meta: SongMetadata):
        self.model.set_metadata(row, meta)

    def labels(self) -> list[str]:
        return self.model.labels()
