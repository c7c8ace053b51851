from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, Slot

from core.config import AppConfig
from core.models import UiState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error
    action_text: Optional[str] = None
    action: Optional[Callable[[], None]] = None


class AppState(QObject):
    notification = Signal(object)   # emits Notify
    ui_changed = Signal(object)     # emits UiState
    reset_requested = Signal()

    def __init__(self, config=None):
        super().__init__()
        self.config = config or AppConfig()
        self.ui = UiState()
        self.generation = 0
        self.queued_notifications: list[Notify] = []

    def replace_ui(self, **changes) -> UiState:
        self.ui = replace(self.ui, **changes)
        self.ui_changed.emit(self.ui)
        return self.ui

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def reset(self):
        # replies tagged with an older generation are dropped on arrival
        self.generation += 1
        self.ui = UiState()
        logger.debug("State reset, generation=%d", self.generation)
        self.reset_requested.emit()
        self.ui_changed.emit(self.ui)

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def notify_with_action(self, message: str, notify_type: str, action_text: str, action: Callable[[], None]):
        self.notification.emit(
            Notify(message=message, notify_type=notify_type, action_text=action_text, action=action)
        )
