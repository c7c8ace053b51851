# src/playlist/builder.py
from __future__ import annotations

import random
from typing import Callable, Optional, Sequence

Track = tuple[str, int]   # (path, seconds)

# heuristic(original_total, old_total, new_total, target) -> prefer new?
Heuristic = Callable[[int, int, int, int], bool]


def greedy(_original_total: int, old_total: int, new_total: int, target: int) -> bool:
    """Prefer the candidate that puts the total strictly closer to the target."""
    return abs(target - new_total) < abs(target - old_total)


class Playlist:
    def __init__(self, used: list[Track], unused: list[Track], target: int, rng: random.Random):
        self.used = used
        self.unused = unused
        self.target = int(target)
        self.rng = rng
        self.used_duration = sum(d for _, d in used)

    @classmethod
    def from_random(cls, candidates: Sequence[Track], target: int,
                    rng: Optional[random.Random] = None) -> "Playlist":
        """Pick random tracks until the running total reaches ``target``."""
        rng = rng or random.Random()
        unused = list(candidates)
        used: list[Track] = []
        total = 0

        while total < target and unused:
            track = unused.pop(rng.randrange(len(unused)))
            total += track[1]
            used.append(track)

        return cls(used, unused, target, rng)

    def used_len(self) -> int:
        return len(self.used)

    def unused_len(self) -> int:
        return len(self.unused)

    def get(self) -> tuple[list[str], int]:
        return [p for p, _ in self.used], self.used_duration

    def swap(self, index: int, depth: int, heuristic: Heuristic = greedy) -> "Playlist":
        """
        Try to replace ``used[index]`` with one of ``depth`` random unused tracks.
        The removed track competes too, so a swap never happens unless the
        heuristic prefers the replacement.
        """
        depth = min(depth, len(self.unused))
        attempts = self.rng.sample(list(enumerate(self.unused)), depth)

        current = self.used.pop(index)
        original_total = self.used_duration
        self.used_duration -= current[1]

        best_idx: Optional[int] = None
        best = current
        for idx, candidate in attempts:
            old_total = self.used_duration + best[1]
            new_total = self.used_duration + candidate[1]
            if heuristic(original_total, old_total, new_total, self.target):
                best_idx, best = idx, candidate

        self.used.insert(index, best)
        self.used_duration += best[1]

        if best_idx is not None:
            del self.unused[best_idx]
            self.unused.append(current)

        return self


def build_playlist(candidates: Sequence[Track], target: int,
                   depth_factor: int = 100, steps_factor: int = 100, loops: int = 1,
                   heuristic: Heuristic = greedy,
                   rng: Optional[random.Random] = None) -> tuple[list[str], int]:
    playlist = Playlist.from_random(candidates, target, rng=rng)

    depth = playlist.unused_len() * depth_factor // 100
    steps = min(playlist.used_len() * steps_factor // 100, playlist.used_len())

    for _ in range(loops + 1):
        for i in range(steps):
            playlist.swap(i, depth, heuristic)

    return playlist.get()
