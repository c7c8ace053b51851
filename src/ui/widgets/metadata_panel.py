# ui/widgets/metadata_panel.py
from __future__ import annotations

import base64
import binascii
import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QLabel

from core.metadata_fetcher import MetadataDisplay

logger = logging.getLogger(__name__)

COVER_SIZE = 200


def pixmap_from_source(source: str) -> QPixmap:
    """Load an image from a ``data:<mime>;base64,...`` URI or a file path."""
    pm = QPixmap()
    if source.startswith("data:"):
        header, _, payload = source.partition(",")
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Invalid cover data URI (%s)", header)
            return pm
        fmt = header[len("data:"):].split(";")[0].split("/")[-1].upper() or None
        if not pm.loadFromData(raw, fmt) and fmt is not None:
            pm.loadFromData(raw)
        return pm

    pm.load(source)
    return pm


class MetadataPanel(QWidget):
    """Cover + title/artist/album/duration of one song (last update wins)."""

    def __init__(self, default_cover: str, parent=None):
        super().__init__(parent)
        self.default_cover = default_cover
        self.cover_source = default_cover

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(16)

        self.cover = QLabel()
        self.cover.setObjectName("Cover")
        self.cover.setFixedSize(COVER_SIZE, COVER_SIZE)
        self.cover.setAlignment(Qt.AlignmentFlag.AlignCenter)

        text_col = QVBoxLayout()
        self.lbl_title = QLabel("")
        self.lbl_title.setObjectName("SongTitle")
        self.lbl_artist = QLabel("")
        self.lbl_album = QLabel("")
        self.lbl_duration = QLabel("")
        for lbl in (self.lbl_title, self.lbl_artist, self.lbl_album, self.lbl_duration):
            lbl.setTextInteractionFlags(Qt.TextSelectableByMouse)
            text_col.addWidget(lbl)
        text_col.addStretch(1)

        root.addWidget(self.cover)
        root.addLayout(text_col, 1)

        self.clear()

    def clear(self):
        self.lbl_title.setText("")
        self.lbl_artist.setText("")
        self.lbl_album.setText("")
        self.lbl_duration.setText("")
        self._set_cover(self.default_cover)

    def show_display(self, display: MetadataDisplay):
        self.lbl_title.setText(display.title)
        self.lbl_artist.setText(display.artist)
        self.lbl_album.setText(display.album)
        self.lbl_duration.setText(display.duration)
        self._set_cover(display.cover_source)

    def _set_cover(self, source: str):
        self.cover_source = source
        pm = pixmap_from_source(source)
        if pm.isNull():
            self.cover.setPixmap(QPixmap())
            return
        self.cover.setPixmap(
            pm.scaled(COVER_SIZE, COVER_SIZE, Qt.AspectRatioMode.KeepAspectRatio,
                      Qt.TransformationMode.SmoothTransformation)
        )
