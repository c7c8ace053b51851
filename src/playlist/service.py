# src/playlist/service.py
from __future__ import annotations

import logging
import random
import time as _time
from typing import Callable, Optional

from core.models import ServiceError
from library.catalog import load_catalog
from playlist.builder import Track, build_playlist

logger = logging.getLogger(__name__)


class LocalPlaylistService:
    """Builds playlists in-process from the audio files of one folder."""

    def __init__(self, depth_factor: int = 100, steps_factor: int = 100, loops: int = 1,
                 catalog_loader: Callable[[str], list[Track]] = load_catalog,
                 rng: Optional[random.Random] = None):
        self.depth_factor = depth_factor
        self.steps_factor = steps_factor
        self.loops = loops
        self.catalog_loader = catalog_loader
        self.rng = rng

    @classmethod
    def from_config(cls, config) -> "LocalPlaylistService":
        return cls(
            depth_factor=config.depth_factor,
            steps_factor=config.steps_factor,
            loops=config.loops,
        )

    def get_playlist(self, time: int, path: str) -> tuple[list[str], int]:
        start = _time.monotonic()
        try:
            catalog = self.catalog_loader(path)
        except OSError as e:
            raise ServiceError(f"Cannot open folder {path}: {e}", operation="get_playlist") from e

        if not catalog:
            raise ServiceError(f"No playable audio files in {path}", operation="get_playlist")

        songs, achieved = build_playlist(
            catalog,
            int(time),
            depth_factor=self.depth_factor,
            steps_factor=self.steps_factor,
            loops=self.loops,
            rng=self.rng,
        )
        logger.info(
            "Built playlist: %d songs, %ds for target %ds (%dms)",
            len(songs), achieved, time, int((_time.monotonic() - start) * 1000),
        )
        return songs, achieved

