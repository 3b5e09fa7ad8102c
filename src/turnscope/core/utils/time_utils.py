"""
Timestamp normalization for turnscope.

Every parser funnels its time values through ``to_seconds`` so that bare
seconds, ``MM:SS`` and ``HH:MM:SS`` strings (with ``.`` or ``,`` decimals)
end up as one float representation. The function is total: anything it
cannot interpret becomes ``None`` rather than an exception.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

_NUMBER_RE = re.compile(r"^\d+(?:[.,]\d+)?$")
_INT_RE = re.compile(r"^\d+$")
_CHAT_TIME_RE = re.compile(
    r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AP]M)$", re.IGNORECASE
)

SECONDS_PER_DAY = 86400


def to_seconds(value: Union[str, int, float, None]) -> Optional[float]:
    """
    Convert a time value to seconds.

    Accepts numbers, numeric strings ("12.5", "12,5"), "MM:SS" and
    "HH:MM:SS" (the last component may carry a decimal fraction).
    The leading component has no upper bound, so "90:00" is 5400 seconds.

    Returns:
        Seconds as a float, or None when the value is empty, negative,
        non-finite or malformed, or when a minutes/seconds component is >= 60.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        if not math.isfinite(number) or number < 0:
            return None
        return number

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if ":" not in text:
        if not _NUMBER_RE.match(text):
            return None
        return float(text.replace(",", "."))

    parts = text.split(":")
    if len(parts) not in (2, 3):
        return None

    *whole_parts, last = parts
    if not all(_INT_RE.match(part) for part in whole_parts):
        return None
    if not _NUMBER_RE.match(last):
        return None

    numbers = [int(part) for part in whole_parts]
    seconds = float(last.replace(",", "."))

    if seconds >= 60:
        return None
    if len(numbers) == 2:
        hours, minutes = numbers
        if minutes >= 60:
            return None
        return hours * 3600 + minutes * 60 + seconds

    (minutes,) = numbers
    return minutes * 60 + seconds


def parse_chat_time(value: str) -> Optional[float]:
    """
    Convert a 12-hour wall-clock time ("11:58 PM", "9:05:30 am") to seconds
    since midnight.

    Returns None when hours are outside 1..12 or minutes/seconds >= 60.
    """
    match = _CHAT_TIME_RE.match(value.strip())
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) else 0
    meridiem = match.group(4).upper()

    if hours < 1 or hours > 12 or minutes >= 60 or seconds >= 60:
        return None

    if meridiem == "PM" and hours != 12:
        hours += 12
    elif meridiem == "AM" and hours == 12:
        hours = 0

    return float(hours * 3600 + minutes * 60 + seconds)


def format_time(seconds: Optional[float]) -> str:
    """
    Format seconds as "M:SS" or "H:MM:SS" for display.

    Examples:
        >>> format_time(65)
        '1:05'
        >>> format_time(3723)
        '1:02:03'
    """
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return "-"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
