# core/playlist_submission.py
from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from core.duration import Duration, SPACED, format_duration
from core.models import PlaylistRequest, PlaylistResponse, ServiceError, ValidationError
from core.services import PlaylistService, Scheduler, TaskRunner
from core.state import AppState

logger = logging.getLogger(__name__)

# lets the loading indicator paint before the request goes out
LOADING_DELAY_MS = 500


def qt_scheduler(delay_ms: int, callback) -> None:
    QTimer.singleShot(delay_ms, callback)


def build_request(duration: Optional[Duration], folder: Optional[str]) -> PlaylistRequest:
    if duration is None or not duration.is_valid():
        raise ValidationError("Enter hours, minutes and seconds before creating a playlist.")
    if not folder:
        raise ValidationError("Choose a music folder before creating a playlist.")
    return PlaylistRequest(target_seconds=duration.total_seconds, folder=folder)


class PlaylistSubmission(QObject):
    loadingStarted = Signal()
    loadingFinished = Signal()
    playlistReady = Signal(object, int)   # PlaylistResponse, requested seconds
    validationFailed = Signal(str)
    failed = Signal(object)               # ServiceError

    def __init__(self, app_state: AppState, service: PlaylistService, runner: TaskRunner,
                 scheduler: Scheduler = qt_scheduler, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.service = service
        self.runner = runner
        self.scheduler = scheduler
        self.last_request: Optional[PlaylistRequest] = None
        self.response: Optional[PlaylistResponse] = None

    def submit(self, duration: Optional[Duration], folder: Optional[str]) -> bool:
        try:
            request = build_request(duration, folder)
        except ValidationError as e:
            logger.info("Submission blocked: %s", e)
            self.app_state.notify(str(e), "warn")
            self.validationFailed.emit(str(e))
            return False

        self._issue(request)
        return True

    def retry(self):
        if self.last_request is None:
            return
        logger.info("Retrying playlist request %s", self.last_request)
        self._issue(self.last_request)

    def cancel(self):
        self.last_request = None
        self.response = None
        self.app_state.reset()

    # ------------------ internals ------------------
    def _issue(self, request: PlaylistRequest):
        generation = self.app_state.generation
        self.last_request = request
        self.response = None
        self.loadingStarted.emit()
        self.scheduler(LOADING_DELAY_MS, partial(self._call, request, generation))

    def _call(self, request: PlaylistRequest, generation: int):
        if not self.app_state.is_current(generation):
            logger.debug("Playlist request for %s abandoned before sending", request.folder)
            return

        logger.info("Requesting playlist %s", request.to_call_args())
        self.runner.run(
            self.service.get_playlist,
            (request.target_seconds, request.folder),
            partial(self._on_reply, request, generation),
            partial(self._on_error, request, generation),
        )

    def _on_reply(self, request: PlaylistRequest, generation: int, reply):
        if not self.app_state.is_current(generation):
            logger.debug("Dropping stale playlist reply for %s", request.folder)
            return

        try:
            response = PlaylistResponse.from_reply(reply)
        except (TypeError, ValueError) as e:
            self._on_error(request, generation, ServiceError(f"Malformed playlist reply: {e}", "get_playlist"))
            return

        logger.info(
            "Playlist ready: %d songs, %s (asked %s)",
            len(response.songs),
            format_duration(response.achieved_seconds, SPACED) or "0s",
            format_duration(request.target_seconds, SPACED) or "0s",
        )
        self.response = response
        self.loadingFinished.emit()
        self.playlistReady.emit(response, request.target_seconds)

    def _on_error(self, request: PlaylistRequest, generation: int, error):
        if not self.app_state.is_current(generation):
            logger.debug("Dropping stale playlist failure for %s", request.folder)
            return

        if not isinstance(error, ServiceError):
            error = ServiceError(str(error), "get_playlist")

        self.loadingFinished.emit()
        self.failed.emit(error)
        self.app_state.notify_with_action(
            f"Could not build a playlist: {error}", "error", "Retry", self.retry
        )
