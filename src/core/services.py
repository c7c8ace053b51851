# core/services.py
from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

PlaylistReply = tuple[Sequence[str], int]
MetadataReply = tuple[str, str, str, Optional[bytes], str, int]


class FolderDialog(Protocol):
    def choose(self, multiple: bool = False, directory: bool = True) -> Optional[str]: ...


class PlaylistService(Protocol):
    def get_playlist(self, time: int, path: str) -> PlaylistReply: ...


class MetadataService(Protocol):
    def get_metadata(self, path: str) -> MetadataReply: ...


class TaskRunner(Protocol):
    """Runs ``fn(*args)`` off the GUI thread and reports back on it."""

    def run(self, fn: Callable, args: tuple,
            on_success: Callable[[object], None],
            on_failure: Callable[[Exception], None]) -> None: ...


# schedule(delay_ms, callback)
Scheduler = Callable[[int, Callable[[], None]], None]
