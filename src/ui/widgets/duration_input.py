# ui/widgets/duration_input.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QSize, Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QLabel, QLineEdit, QToolButton

from core.duration import Duration, HOURS, MINUTES, SECONDS, UNITS
from ui.icons import SVG_DOWN, SVG_UP, svg_icon

_CAPTIONS = {HOURS: "Hours", MINUTES: "Minutes", SECONDS: "Seconds"}


class _CounterColumn(QWidget):
    def __init__(self, unit: str, parent=None):
        super().__init__(parent)
        self.unit = unit

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(4)

        self.btn_up = QToolButton()
        self.btn_up.setObjectName(f"{unit}-up")
        self.btn_up.setIcon(svg_icon(SVG_UP, 18))
        self.btn_up.setIconSize(QSize(18, 18))

        self.edit = QLineEdit("0")
        self.edit.setObjectName(f"{unit}-input")
        self.edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.edit.setFixedWidth(64)

        self.btn_down = QToolButton()
        self.btn_down.setObjectName(f"{unit}-down")
        self.btn_down.setIcon(svg_icon(SVG_DOWN, 18))
        self.btn_down.setIconSize(QSize(18, 18))

        caption = QLabel(_CAPTIONS[unit])
        caption.setAlignment(Qt.AlignmentFlag.AlignCenter)

        root.addWidget(self.btn_up, 0, Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.edit, 0, Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.btn_down, 0, Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(caption)


class DurationInput(QWidget):
    """Hours / minutes / seconds steppers with carry on increment."""
    durationChanged = Signal(object)   # Duration | None (a field is blank)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._value = Duration()
        self._blank: set[str] = set()

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(14)

        self.columns: dict[str, _CounterColumn] = {}
        for unit in UNITS:
            col = _CounterColumn(unit)
            col.btn_up.clicked.connect(lambda _=False, u=unit: self.increment(u))
            col.btn_down.clicked.connect(lambda _=False, u=unit: self.decrement(u))
            col.edit.textEdited.connect(lambda text, u=unit: self.set_from_text(u, text))
            self.columns[unit] = col
            root.addWidget(col)

    # -------------------------
    # External API
    # -------------------------
    def value(self) -> Duration:
        return self._value

    def duration(self) -> Optional[Duration]:
        """None while any field is blank."""
        return None if self._blank else self._value

    def increment(self, unit: str):
        self._blank.discard(unit)
        self._set(self._value.increment(unit))

    def decrement(self, unit: str):
        self._blank.discard(unit)
        self._set(self._value.decrement(unit))

    def set_from_text(self, unit: str, raw: str):
        updated = self._value.with_text(unit, raw)
        if updated is None:
            self._blank.add(unit)
            self.durationChanged.emit(None)
            return
        self._blank.discard(unit)
        self._set(updated)

    def text(self, unit: str) -> str:
        return self.columns[unit].edit.text()

    # -------------------------
    # internals
    # -------------------------
    def _set(self, value: Duration):
        self._value = value
        for unit in UNITS:
            if unit in self._blank:
                continue
            edit = self.columns[unit].edit
            text = str(value.get(unit))
            if edit.text() != text:
                edit.setText(text)
        self.durationChanged.emit(self.duration())
