# core/models.py
from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from typing import Optional

from core.duration import Duration


class ValidationError(Exception):
    """Submission inputs are incomplete (no folder, blank duration field)."""


class ServiceError(Exception):
    """A playlist or metadata request failed."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


@dataclass(frozen=True)
class PlaylistRequest:
    target_seconds: int
    folder: str

    def to_call_args(self) -> dict:
        return {"time": self.target_seconds, "path": self.folder}


@dataclass(frozen=True)
class PlaylistResponse:
    songs: tuple[str, ...]
    achieved_seconds: int

    @classmethod
    def from_reply(cls, reply) -> "PlaylistResponse":
        songs, achieved = reply
        return cls(songs=tuple(str(s) for s in songs), achieved_seconds=int(achieved))

    def labels(self) -> list[str]:
        return [song_label(i, path) for i, path in enumerate(self.songs)]


@dataclass(frozen=True)
class SongMetadata:
    title: str
    artist: str
    album: str
    cover: Optional[bytes]
    mime_type: str
    duration_seconds: int

    @classmethod
    def from_reply(cls, reply) -> "SongMetadata":
        title, artist, album, cover, mime_type, duration_s = reply
        return cls(
            title=title,
            artist=artist,
            album=album,
            cover=bytes(cover) if cover is not None else None,
            mime_type=mime_type,
            duration_seconds=int(duration_s or 0),
        )

    def cover_source(self, default_asset: str) -> str:
        if self.cover is None:
            return default_asset
        payload = base64.b64encode(self.cover).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"


@dataclass(frozen=True)
class UiState:
    duration: Optional[Duration] = field(default_factory=Duration)
    folder: Optional[str] = None
    folder_hovered: bool = False

    @property
    def folder_label(self) -> str:
        if self.folder_hovered or not self.folder:
            return "Choose folder"
        return self.folder


def last_segment(path: str) -> str:
    trimmed = path.rstrip("/\\") or path
    return os.path.basename(trimmed.replace("\\", "/"))


def song_label(index: int, path: str) -> str:
    return f"{index + 1}. {last_segment(path)}"
