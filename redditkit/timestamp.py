"""Timestamps as they appear in API payloads: RFC 3339 strings, Unix seconds or ``false``."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

_ZERO = datetime(1, 1, 1, tzinfo=timezone.utc)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction, zone = match.group(7), match.group(8)
    microsecond = int((fraction + "000000")[:6]) if fraction else 0
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours >= 24 or minutes >= 60:
            raise ValueError(f"time zone offset out of range in {text!r}")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone.utc if not offset else timezone(sign * offset)
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)


@dataclass(frozen=True)
class Timestamp:
    """A point in time; the zero value stands for "no time" (e.g. a post never edited)."""

    time: datetime = _ZERO

    def __post_init__(self) -> None:
        if self.time.tzinfo is None:
            object.__setattr__(self, "time", self.time.replace(tzinfo=timezone.utc))

    @classmethod
    def from_json(cls, value: Any) -> "Timestamp":
        """Build a timestamp from a decoded JSON value.

        ``false`` gives the zero timestamp, a number is read as Unix seconds
        (fractions are dropped) and a string as an RFC 3339 time.
        """
        if value is False:
            return cls()
        if isinstance(value, bool):
            raise ValueError(f"cannot parse timestamp from {value!r}")
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"cannot parse timestamp from {value!r}")
            try:
                return cls(_EPOCH + timedelta(seconds=int(value)))
            except OverflowError as exc:
                raise ValueError(f"timestamp {value!r} is out of range") from exc
        if isinstance(value, str):
            return cls(_parse_rfc3339(value))
        raise ValueError(f"cannot parse timestamp from {value!r}")

    def is_zero(self) -> bool:
        """Whether this is the zero timestamp."""
        return self.time == _ZERO

    def to_json(self) -> str | bool:
        """The JSON value for this timestamp: ``False`` when zero, else an RFC 3339 string."""
        if self.is_zero():
            return False
        t = self.time
        offset = t.utcoffset() or timedelta(0)
        if offset:
            total = int(offset.total_seconds()) // 60
            sign = "-" if total < 0 else "+"
            hours, minutes = divmod(abs(total), 60)
            zone = f"{sign}{hours:02d}:{minutes:02d}"
        else:
            zone = "Z"
        return (
            f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
            f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}{zone}"
        )