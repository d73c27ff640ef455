# weekplan/timeutils.py
import re
from typing import Iterable, List, Optional, Tuple

from .models import MINUTES_PER_DAY, ValidationError

Interval = Tuple[int, int]  # [start, end) in minutes of the day

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def to_minutes(text: str) -> int:
    """Parse "HH:MM" (24h, hour may be one digit) into minute of the day."""
    m = _HHMM.match(str(text).strip())
    if not m:
        raise ValidationError(f"invalid time {text!r}, expected HH:MM")
    return int(m.group(1)) * 60 + int(m.group(2))


def to_hhmm(minutes: int) -> str:
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValidationError(f"minute value out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def overlaps(a: Interval, b: Interval) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def clip(interval: Interval, window: Interval) -> Optional[Interval]:
    """Intersection of two intervals, or None when it is empty."""
    start = max(interval[0], window[0])
    end = min(interval[1], window[1])
    if start < end:
        return start, end
    return None


def subtract(interval: Interval, occupied: Interval) -> List[Interval]:
    """Remove one occupied span from one free span."""
    start, end = interval
    o_start, o_end = occupied
    if start >= end:
        return []
    if o_start >= o_end or not overlaps(interval, occupied):
        return [interval]

    pieces = []
    if o_start > start:
        pieces.append((start, o_start))
    if o_end < end:
        pieces.append((o_end, end))
    return pieces


def subtract_all(interval: Interval, occupied: Iterable[Interval]) -> List[Interval]:
    fragments = [interval] if interval[0] < interval[1] else []
    for span in occupied:
        fragments = [piece for frag in fragments for piece in subtract(frag, span)]
        if not fragments:
            break
    return sorted(fragments)
