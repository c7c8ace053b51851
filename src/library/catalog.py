# src/library/catalog.py
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor

from library.metadata import read_duration_seconds

logger = logging.getLogger(__name__)

AUDIO_EXTS = {".mp3", ".wav", ".ogg", ".flac"}


def list_audio_paths(folder: str) -> list[str]:
    """Supported audio files directly inside ``folder`` (no recursion), sorted by name."""
    if not folder or not os.path.isdir(folder):
        raise NotADirectoryError(folder)

    paths: list[str] = []
    with os.scandir(folder) as it:
        for entry in it:
            if not entry.is_file():
                continue
            ext = os.path.splitext(entry.name)[1].lower()
            if ext in AUDIO_EXTS:
                paths.append(entry.path)
    paths.sort()
    return paths


def load_catalog(folder: str) -> list[tuple[str, int]]:
    """(path, seconds) for every readable audio file in ``folder``."""
    paths = list_audio_paths(folder)
    with ThreadPoolExecutor() as executor:
        durations = list(executor.map(read_duration_seconds, paths))

    catalog = [(p, d) for p, d in zip(paths, durations) if d is not None]
    logger.info("Catalog for %s: %d usable of %d audio files", folder, len(catalog), len(paths))
    return catalog
