# src/library/metadata.py
from __future__ import annotations

import base64
import logging
import os
from typing import Optional, Tuple

from mutagen import File as MutagenFile
from mutagen._util import MutagenError
from mutagen.flac import FLAC, Picture
from mutagen.mp4 import MP4, MP4Cover
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from core.models import ServiceError, SongMetadata

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

_MP4_MIME = {
    MP4Cover.FORMAT_JPEG: "image/jpeg",
    MP4Cover.FORMAT_PNG: "image/png",
}


def _first(easy, key: str) -> str | None:
    if easy is None or easy.tags is None:
        return None
    v = easy.get(key)
    if not v:
        return None
    if isinstance(v, list):
        return (str(v[0]).strip() if v else None) or None
    s = str(v).strip()
    return s or None


_ID3_TEXT_FRAMES = {"title": "TIT2", "artist": "TPE1", "album": "TALB"}


def _id3_text(audio, key: str) -> str | None:
    # WAVE and other non-easy formats expose raw ID3 frames
    tags = getattr(audio, "tags", None)
    if tags is None or not hasattr(tags, "getall"):
        return None
    for frame in tags.getall(_ID3_TEXT_FRAMES[key]):
        for text in frame.text:
            s = str(text).strip()
            if s:
                return s
    return None


def _tag(easy, full, key: str) -> str | None:
    return _first(easy, key) or _id3_text(full, key)


def _title_from_file_name(path: str) -> str | None:
    stem, _ = os.path.splitext(os.path.basename(path))
    return stem or None


def read_cover(audio) -> Tuple[Optional[bytes], Optional[str]]:
    """
    First embedded picture of an already opened (non-easy) mutagen file.
    Returns (bytes_or_None, mime_or_None).

      - FLAC: native picture blocks.
      - Ogg Vorbis/Opus: base64 'metadata_block_picture' comments.
      - MP4/M4A: 'covr' atom.
      - ID3 (MP3, WAV): APIC frames.
    """
    if audio is None:
        return None, None

    if isinstance(audio, FLAC):
        if audio.pictures:
            pic = audio.pictures[0]
            return bytes(pic.data), pic.mime or None
        return None, None

    if isinstance(audio, (OggVorbis, OggOpus)):
        blocks = (audio.tags or {}).get("metadata_block_picture") or []
        for raw in blocks:
            try:
                pic = Picture(base64.b64decode(raw))
            except (ValueError, MutagenError):
                continue
            return bytes(pic.data), pic.mime or None
        return None, None

    if isinstance(audio, MP4):
        covers = (audio.tags or {}).get("covr") or []
        if covers:
            cover = covers[0]
            return bytes(cover), _MP4_MIME.get(getattr(cover, "imageformat", None))
        return None, None

    tags = getattr(audio, "tags", None)
    if tags is not None and hasattr(tags, "getall"):
        frames = tags.getall("APIC")
        if frames:
            return bytes(frames[0].data), frames[0].mime or None

    return None, None


def read_song_metadata(path: str) -> SongMetadata:
    """
    Tags, cover and duration of a single audio file.
    Missing text tags fall back to "Unknown" (title falls back to the file name).
    """
    try:
        easy = MutagenFile(path, easy=True)
        full = MutagenFile(path)
    except Exception as e:
        raise ServiceError(f"Cannot read {path}: {e}", operation="get_metadata") from e

    if easy is None or full is None:
        raise ServiceError(f"Unsupported audio file: {path}", operation="get_metadata")

    cover, mime = read_cover(full)
    if cover is None:
        mime = None

    info = getattr(full, "info", None)
    duration_s = int(getattr(info, "length", 0) or 0)

    return SongMetadata(
        title=_tag(easy, full, "title") or _title_from_file_name(path) or UNKNOWN,
        artist=_tag(easy, full, "artist") or UNKNOWN,
        album=_tag(easy, full, "album") or UNKNOWN,
        cover=cover,
        mime_type=mime or UNKNOWN,
        duration_seconds=duration_s,
    )


def read_duration_seconds(path: str) -> Optional[int]:
    try:
        audio = MutagenFile(path)
    except Exception as e:
        logger.warning("Skipping %s: %s", path, e)
        return None
    if audio is None or getattr(audio, "info", None) is None:
        logger.warning("Skipping %s: not a recognised audio file", path)
        return None
    return int(audio.info.length or 0)


class LocalMetadataService:
    def get_metadata(self, path: str):
        meta = read_song_metadata(path)
        return (meta.title, meta.artist, meta.album, meta.cover, meta.mime_type, meta.duration_seconds)
