# ui/models/song_list_model.py
from __future__ import annotations

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from core.duration import CLOCK, format_duration
from core.models import PlaylistResponse, SongMetadata


def fmt_details(meta: SongMetadata | None) -> str:
    if meta is None:
        return ""
    return f"{meta.artist} — {meta.title} ({format_duration(meta.duration_seconds, CLOCK)})"


class SongListModel(QAbstractTableModel):
    def __init__(self):
        super().__init__()
        self._paths: list[str] = []
        self._labels: list[str] = []
        self._meta: dict[int, SongMetadata] = {}

    def set_response(self, response: PlaylistResponse | None):
        self.beginResetModel()
        self._paths = list(response.songs) if response else []
        self._labels = response.labels() if response else []
        self._meta = {}
        self.endResetModel()

    def set_metadata(self, row: int, meta: SongMetadata):
        if row < 0 or row >= len(self._paths):
            return
        self._meta[row] = meta
        idx = self.index(row, 1)
        self.dataChanged.emit(idx, idx, [Qt.DisplayRole])

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._paths)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 2

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return ["Song", "Details"][section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = index.row()
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return self._labels[row]
            if col == 1:
                return fmt_details(self._meta.get(row))
        if role == Qt.ToolTipRole:
            return self._paths[row]
        if role == Qt.UserRole:
            return self._paths[row]
        return None

    def labels(self) -> list[str]:
        return list(self._labels)
