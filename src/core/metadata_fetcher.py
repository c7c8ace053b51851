# core/metadata_fetcher.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from PySide6.QtCore import QObject, Signal

from core.duration import CLOCK, format_duration
from core.models import PlaylistResponse, ServiceError, SongMetadata
from core.services import MetadataService, TaskRunner
from core.state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetadataDisplay:
    cover_source: str
    title: str
    artist: str
    album: str
    duration: str

    @classmethod
    def from_metadata(cls, meta: SongMetadata, default_cover: str) -> "MetadataDisplay":
        return cls(
            cover_source=meta.cover_source(default_cover),
            title=meta.title,
            artist=meta.artist,
            album=meta.album,
            duration=format_duration(meta.duration_seconds, CLOCK),
        )


class MetadataFetcher(QObject):
    """
    One request per song, all in flight at once. Every reply overwrites the
    shared display (last reply wins) and is also kept per song index.
    """
    fetchStarted = Signal(int)             # number of songs
    metadataReady = Signal(int, object)    # index, SongMetadata
    failed = Signal(int, object)           # index, ServiceError

    def __init__(self, app_state: AppState, service: MetadataService, runner: TaskRunner, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.service = service
        self.runner = runner
        self.results: dict[int, SongMetadata] = {}
        self.displayed: Optional[tuple[int, SongMetadata]] = None

    def start(self, response: PlaylistResponse):
        generation = self.app_state.generation
        self.results = {}
        self.displayed = None
        self.fetchStarted.emit(len(response.songs))

        for index, path in enumerate(response.songs):
            self._fetch(index, path, generation)

    def retry(self, index: int, path: str, generation: int):
        if not self.app_state.is_current(generation):
            return
        self._fetch(index, path, generation)

    def _fetch(self, index: int, path: str, generation: int):
        logger.debug("Requesting metadata #%d %s", index + 1, path)
        self.runner.run(
            self.service.get_metadata,
            (path,),
            partial(self._on_reply, index, path, generation),
            partial(self._on_error, index, path, generation),
        )

    def _on_reply(self, index: int, path: str, generation: int, reply):
        if not self.app_state.is_current(generation):
            logger.debug("Dropping stale metadata for %s", path)
            return

        try:
            meta = SongMetadata.from_reply(reply)
        except (TypeError, ValueError) as e:
            self._on_error(index, path, generation, ServiceError(f"Malformed metadata reply: {e}", "get_metadata"))
            return

        self.results[index] = meta
        self.displayed = (index, meta)
        self.metadataReady.emit(index, meta)

    def _on_error(self, index: int, path: str, generation: int, error):
        if not self.app_state.is_current(generation):
            return

        if not isinstance(error, ServiceError):
            error = ServiceError(str(error), "get_metadata")

        self.failed.emit(index, error)
        self.app_state.notify_with_action(
            f"Could not read metadata for song {index + 1}: {error}",
            "error",
            "Retry",
            partial(self.retry, index, path, generation),
        )
