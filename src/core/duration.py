# core/duration.py
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

HOURS = "hours"
MINUTES = "minutes"
SECONDS = "seconds"

# largest unit first; the "next-larger" unit of index i is i - 1
UNITS: tuple[str, ...] = (HOURS, MINUTES, SECONDS)

_NON_DIGIT = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class BoundedCounter:
    minimum: int = 0
    maximum: Optional[int] = None   # None -> unbounded

    def clamp(self, value: int) -> int:
        if value < self.minimum:
            return self.minimum
        if self.maximum is not None and value > self.maximum:
            return self.maximum
        return value


COUNTERS: tuple[BoundedCounter, ...] = (
    BoundedCounter(0, None),   # hours
    BoundedCounter(0, 59),     # minutes
    BoundedCounter(0, 59),     # seconds
)


def increment_counters(values: tuple[int, ...], index: int,
                       counters: tuple[BoundedCounter, ...] = COUNTERS) -> tuple[int, ...]:
    """
    Increment ``values[index]`` and return a new tuple.

    A bounded counter sitting on its maximum rolls over to its minimum and
    carries into the counter before it. The carry cascades until it reaches a
    counter with room left (or the unbounded one).
    """
    out = list(values)
    policy = counters[index]

    if policy.maximum is not None and out[index] >= policy.maximum:
        out[index] = policy.minimum
        if index > 0:
            return increment_counters(tuple(out), index - 1, counters)
        return tuple(out)

    out[index] += 1
    return tuple(out)


def decrement_counters(values: tuple[int, ...], index: int,
                       counters: tuple[BoundedCounter, ...] = COUNTERS) -> tuple[int, ...]:
    # floors at the minimum, never borrows from the larger unit
    out = list(values)
    out[index] = max(counters[index].minimum, out[index] - 1)
    return tuple(out)


def sanitize_digits(raw: str) -> str:
    """Replace every non-digit character with '0' ("a1b2" -> "0102")."""
    return _NON_DIGIT.sub("0", raw or "")


def parse_counter_text(raw: str, counter: BoundedCounter) -> Optional[int]:
    """
    Sanitize and parse a text entry for one counter.
    Returns None when nothing is left to parse (empty field).
    Only bounded counters are clamped upward.
    """
    digits = sanitize_digits(raw)
    if not digits:
        return None
    value = int(digits)
    if counter.maximum is not None and value > counter.maximum:
        return counter.maximum
    return value


@dataclass(frozen=True)
class Duration:
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_tuple(cls, values: tuple[int, ...]) -> "Duration":
        h, m, s = values
        return cls(hours=h, minutes=m, seconds=s)

    @classmethod
    def from_seconds(cls, total: int) -> "Duration":
        total = max(0, int(total))
        h, rest = divmod(total, 3600)
        m, s = divmod(rest, 60)
        return cls(hours=h, minutes=m, seconds=s)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.hours, self.minutes, self.seconds)

    def get(self, unit: str) -> int:
        return self.as_tuple()[UNITS.index(unit)]

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def is_valid(self) -> bool:
        for value, counter in zip(self.as_tuple(), COUNTERS):
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            if counter.clamp(value) != value:
                return False
        return True

    def increment(self, unit: str) -> "Duration":
        return Duration.from_tuple(increment_counters(self.as_tuple(), UNITS.index(unit)))

    def decrement(self, unit: str) -> "Duration":
        return Duration.from_tuple(decrement_counters(self.as_tuple(), UNITS.index(unit)))

    def with_text(self, unit: str, raw: str) -> Optional["Duration"]:
        """New duration with ``unit`` set from text, or None if the text is blank."""
        idx = UNITS.index(unit)
        value = parse_counter_text(raw, COUNTERS[idx])
        if value is None:
            return None
        values = list(self.as_tuple())
        values[idx] = value
        return Duration.from_tuple(tuple(values))


# ---- formatting ----

class ZeroPolicy(Enum):
    OMIT_ALL = "omit_all"           # drop every zero component
    OMIT_LEADING = "omit_leading"   # drop zero components only while they lead


@dataclass(frozen=True)
class DurationStyle:
    separator: str
    suffixes: tuple[str, str, str]
    zero_policy: ZeroPolicy
    pad_inner: bool = False


# "1h 1m 1s" -- playlist summary
SPACED = DurationStyle(separator=" ", suffixes=("h", "m", "s"), zero_policy=ZeroPolicy.OMIT_ALL)

# "1:01:01" -- per-song metadata
CLOCK = DurationStyle(separator=":", suffixes=("", "", ""), zero_policy=ZeroPolicy.OMIT_LEADING, pad_inner=True)


def format_duration(seconds: int, style: DurationStyle = SPACED) -> str:
    parts = Duration.from_seconds(seconds).as_tuple()

    if style.zero_policy is ZeroPolicy.OMIT_ALL:
        picked = [(i, v) for i, v in enumerate(parts) if v != 0]
    else:
        first = 0
        # the last component (seconds) is always kept
        while first < len(parts) - 1 and parts[first] == 0:
            first += 1
        picked = list(enumerate(parts))[first:]

    out = []
    for pos, (i, v) in enumerate(picked):
        text = f"{v:02d}" if style.pad_inner and pos > 0 else str(v)
        out.append(text + style.suffixes[i])
    return style.separator.join(out)
