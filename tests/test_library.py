import wave

import pytest
from mutagen.flac import FLAC, Picture
from mutagen.id3 import APIC, TALB, TIT2, TPE1
from mutagen.wave import WAVE

from core.models import ServiceError
from library.catalog import list_audio_paths, load_catalog
from library.metadata import read_cover, read_song_metadata

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _write_wav(path, seconds=3, rate=8000):
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        w.writeframes(b"\x00\x00" * rate * seconds)
    return str(path)


def _write_flac(path, seconds=2, rate=44100):
    # STREAMINFO only: 16-bit stereo, no audio frames
    packed = (rate << 44) | (1 << 41) | (15 << 36) | (rate * seconds)
    info = (
        (4096).to_bytes(2, "big") + (4096).to_bytes(2, "big")
        + bytes(6) + packed.to_bytes(8, "big") + bytes(16)
    )
    path.write_bytes(b"fLaC" + bytes([0x80]) + len(info).to_bytes(3, "big") + info)
    return str(path)


def test_list_audio_paths_is_single_level_and_filtered(tmp_path):
    (tmp_path / "b.MP3").write_bytes(b"")
    (tmp_path / "a.flac").write_bytes(b"")
    (tmp_path / "cover.jpg").write_bytes(b"")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "deep.ogg").write_bytes(b"")

    paths = list_audio_paths(str(tmp_path))

    assert [p.rsplit("/", 1)[-1] for p in paths] == ["a.flac", "b.MP3"]


def test_list_audio_paths_rejects_missing_folder(tmp_path):
    with pytest.raises(NotADirectoryError):
        list_audio_paths(str(tmp_path / "missing"))


def test_load_catalog_skips_unreadable_files(tmp_path):
    (tmp_path / "broken.wav").write_bytes(b"this is not audio at all")
    (tmp_path / "notes.txt").write_text("hello")

    assert load_catalog(str(tmp_path)) == []


def test_read_song_metadata_wraps_unreadable_file(tmp_path):
    bad = tmp_path / "broken.flac"
    bad.write_bytes(b"not a flac stream")

    with pytest.raises(ServiceError):
        read_song_metadata(str(bad))


def test_read_cover_without_file():
    assert read_cover(None) == (None, None)


def test_read_song_metadata_from_id3_tagged_wav(tmp_path):
    path = _write_wav(tmp_path / "track.wav")
    audio = WAVE(path)
    audio.add_tags()
    audio.tags.add(TIT2(encoding=3, text="Real Title"))
    audio.tags.add(TPE1(encoding=3, text="Real Artist"))
    audio.tags.add(TALB(encoding=3, text="Real Album"))
    audio.tags.add(APIC(encoding=3, mime="image/png", type=3, desc="cover", data=PNG_BYTES))
    audio.save()

    meta = read_song_metadata(path)

    assert (meta.title, meta.artist, meta.album) == ("Real Title", "Real Artist", "Real Album")
    assert meta.cover == PNG_BYTES
    assert meta.mime_type == "image/png"
    assert meta.duration_seconds == 3


def test_read_song_metadata_from_flac_with_picture(tmp_path):
    path = _write_flac(tmp_path / "song.flac")
    audio = FLAC(path)
    audio.add_tags()
    audio["title"] = "Flac Title"
    audio["artist"] = "Flac Artist"
    audio["album"] = "Flac Album"
    pic = Picture()
    pic.type = 3
    pic.mime = "image/png"
    pic.data = PNG_BYTES
    audio.add_picture(pic)
    audio.save()

    meta = read_song_metadata(path)

    assert (meta.title, meta.artist, meta.album) == ("Flac Title", "Flac Artist", "Flac Album")
    assert meta.cover == PNG_BYTES
    assert meta.mime_type == "image/png"
    assert meta.duration_seconds == 2


def test_read_song_metadata_falls_back_for_untagged_file(tmp_path):
    path = _write_wav(tmp_path / "field recording.wav", seconds=1)

    meta = read_song_metadata(path)

    assert meta.title == "field recording"
    assert (meta.artist, meta.album) == ("Unknown", "Unknown")
    assert meta.cover is None
    assert meta.mime_type == "Unknown"
    assert meta.duration_seconds == 1


def test_load_catalog_reads_durations(tmp_path):
    _write_wav(tmp_path / "a.wav", seconds=2)
    _write_wav(tmp_path / "b.wav", seconds=5)

    catalog = load_catalog(str(tmp_path))

    assert sorted(duration for _, duration in catalog) == [2, 5]
