# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).resolve().parent.parent / "ui" / "assets"
DEFAULT_COVER = str(ASSETS_DIR / "default_cover.svg")

ENV_PREFIX = "PLAYLIST_PREVIEW_"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r (not an integer)", ENV_PREFIX, name, raw)
        return default


@dataclass(frozen=True)
class AppConfig:
    log_level: str = "INFO"
    toast_timeout_ms: int = 4000
    depth_factor: int = 100
    steps_factor: int = 100
    loops: int = 1
    default_cover: str = DEFAULT_COVER

    @classmethod
    def from_env(cls) -> "AppConfig":
        level = (os.getenv(ENV_PREFIX + "LOG_LEVEL") or cls.log_level).upper()
        return cls(
            log_level=level,
            depth_factor=_env_int("DEPTH_FACTOR", cls.depth_factor),
            steps_factor=_env_int("STEPS_FACTOR", cls.steps_factor),
            loops=_env_int("LOOPS", cls.loops),
        )
