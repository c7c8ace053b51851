# ui/workers/service_call.py
from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QThread, Signal, Slot

from core.models import ServiceError

logger = logging.getLogger(__name__)


class ServiceCallWorker(QThread):
    done = Signal(object, bool, object)   # worker, ok, reply | ServiceError

    def __init__(self, fn: Callable, args: tuple, parent=None):
        super().__init__(parent)
        self.fn = fn
        self.args = args
        self.operation = getattr(fn, "__name__", "service call")

    def run(self):
        try:
            reply = self.fn(*self.args)
        except ServiceError as e:
            logger.warning("%s%r failed: %s", self.operation, self.args, e)
            self.done.emit(self, False, e)
            return
        except Exception as e:
            logger.exception("%s%r crashed", self.operation, self.args)
            self.done.emit(self, False, ServiceError(f"{self.operation} failed: {e}", self.operation))
            return
        self.done.emit(self, True, reply)


class ThreadTaskRunner(QObject):
    """
    One QThread per call; results come back through a queued signal so the
    callbacks always run on the GUI thread.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._pending: dict[ServiceCallWorker, tuple[Callable, Callable]] = {}

    def run(self, fn, args, on_success, on_failure):
        worker = ServiceCallWorker(fn, tuple(args))
        self._pending[worker] = (on_success, on_failure)
        worker.done.connect(self._on_done)
        worker.start()

    def active_count(self) -> int:
        return len(self._pending)

    @Slot(object, bool, object)
    def _on_done(self, worker, ok, payload):
        callbacks = self._pending.pop(worker, None)
        worker.wait()
        worker.deleteLater()
        if callbacks is None:
            return

        on_success, on_failure = callbacks
        if ok:
            on_success(payload)
        else:
            on_failure(payload)

    def shutdown(self):
        for worker in list(self._pending):
            worker.wait()
        self._pending.clear()
