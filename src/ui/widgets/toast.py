from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import Qt, QTimer, QEasingCurve, QPropertyAnimation
from PySide6.QtWidgets import (
    QWidget,
    QFrame,
    QLabel,
    QHBoxLayout,
    QVBoxLayout,
    QToolButton,
    QGraphicsOpacityEffect,
)

# notify_type -> (background, accent)
_PALETTE = {
    "info": ("#0b1222", "#38bdf8"),
    "success": ("#052e1a", "#16a34a"),
    "warning": ("#2a1a05", "#f59e0b"),
    "error": ("#2a0a0a", "#ef4444"),
}

_STYLE = """
QFrame#Toast {{ background: {bg}; border: 1px solid {accent}; border-radius: 14px; }}
QLabel {{ color: #e5e7eb; font-size: 12px; }}
QToolButton {{ border: none; background: transparent; color: #e5e7eb; padding: 2px 6px; }}
QToolButton#ToastAction {{ border: 1px solid {accent}; border-radius: 8px; }}
QToolButton:hover {{ background: rgba(255,255,255,0.06); border-radius: 8px; }}
"""

FADE_MS = 180


@dataclass(frozen=True)
class ToastData:
    message: str
    notify_type: str = "info"  # "info" | "success" | "warning" | "error"
    timeout_ms: int = 3000
    action_text: Optional[str] = None
    action: Optional[Callable[[], None]] = None


class ToastWidget(QFrame):
    """One notification row: message, optional action button (e.g. "Retry"), close button."""

    def __init__(self, data: ToastData, manager: "ToastManager"):
        super().__init__(manager)
        self.data = data
        self.manager = manager

        bg, accent = _PALETTE.get((data.notify_type or "info").lower(), _PALETTE["info"])
        self.setObjectName("Toast")
        self.setStyleSheet(_STYLE.format(bg=bg, accent=accent))
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        row = QHBoxLayout(self)
        row.setContentsMargins(12, 10, 10, 10)
        row.setSpacing(10)

        self.lbl = QLabel(data.message)
        self.lbl.setWordWrap(True)
        row.addWidget(self.lbl, 1)

        self.btn_action: Optional[QToolButton] = None
        if data.action is not None:
            self.btn_action = QToolButton()
            self.btn_action.setObjectName("ToastAction")
            self.btn_action.setText(data.action_text or "Retry")
            self.btn_action.setCursor(Qt.CursorShape.PointingHandCursor)
            self.btn_action.clicked.connect(self.trigger_action)
            row.addWidget(self.btn_action, 0, Qt.AlignmentFlag.AlignTop)

        self.btn_close = QToolButton()
        self.btn_close.setText("✕")
        self.btn_close.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_close.clicked.connect(lambda: self.manager.dismiss_toast(self))
        row.addWidget(self.btn_close, 0, Qt.AlignmentFlag.AlignTop)

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._fade: Optional[QPropertyAnimation] = None

    @property
    def has_action(self) -> bool:
        return self.btn_action is not None

    def trigger_action(self):
        action = self.data.action
        self.manager.dismiss_toast(self)
        if action is not None:
            action()

    def fade(self, start: float, end: float, on_done=None):
        self._fade = QPropertyAnimation(self._opacity, b"opacity", self)
        self._fade.setDuration(FADE_MS)
        self._fade.setStartValue(start)
        self._fade.setEndValue(end)
        self._fade.setEasingCurve(QEasingCurve.Type.OutCubic)
        if on_done is not None:
            self._fade.finished.connect(on_done)
        self._fade.start()


class ToastManager(QWidget):
    """
    Column of toasts pinned to the top-right corner of the host, newest first.

    The manager is only as large as the column itself so the rest of the window
    stays clickable. Plain toasts expire after their timeout; toasts with an
    action stay until used, closed, or dropped with ``clear(actions_only=True)``
    once the request they would retry has been superseded.
    """
    def __init__(self, host: QWidget, max_visible: int = 5, width: int = 380, margin: int = 14):
        super().__init__(host)
        self.host = host
        self._max_visible = max_visible
        self._width = width
        self._margin = margin
        self._toasts: list[ToastWidget] = []

        self._column = QVBoxLayout(self)
        self._column.setContentsMargins(0, 0, 0, 0)
        self._column.setSpacing(10)
        self.setFixedWidth(width)
        self.hide()

    def toasts(self) -> list[ToastWidget]:
        return list(self._toasts)

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000,
                   action_text: Optional[str] = None, action: Optional[Callable[[], None]] = None):
        toast = ToastWidget(ToastData(message, notify_type, timeout_ms, action_text, action), manager=self)
        self._toasts.insert(0, toast)
        self._column.insertWidget(0, toast)

        for old in self._toasts[self._max_visible:]:
            self._drop(old)

        self._place()
        toast.fade(0.0, 1.0)

        if not toast.has_action:
            QTimer.singleShot(max(500, int(timeout_ms)), lambda: self.dismiss_toast(toast))
        return toast

    def dismiss_toast(self, toast: ToastWidget):
        if toast not in self._toasts:
            return
        self._toasts.remove(toast)

        def remove():
            self._column.removeWidget(toast)
            toast.deleteLater()
            self._place()

        toast.fade(toast.graphicsEffect().opacity(), 0.0, remove)

    def clear(self, actions_only: bool = False):
        for toast in list(self._toasts):
            if toast.has_action or not actions_only:
                self._drop(toast)
        self._place()

    def _drop(self, toast: ToastWidget):
        self._toasts.remove(toast)
        self._column.removeWidget(toast)
        toast.hide()
        toast.deleteLater()

    def _place(self):
        if not self._toasts:
            self.hide()
            return
        self._column.activate()
        height = self._column.sizeHint().height()
        x = max(0, self.host.width() - self._width - self._margin)
        self.setGeometry(x, self._margin, self._width, height)
        self.show()
        self.raise_()
