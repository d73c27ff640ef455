# weekplan/free_intervals.py
from typing import Dict, List, Sequence

from .models import DayWindow, EngineConfig, FreeInterval, Period, TimeBlock
from .timeutils import Interval, subtract_all


def period_spans(day_window: DayWindow, config: EngineConfig) -> Dict[Period, Interval]:
    """Morning / afternoon / evening clipped to the day window. Empty periods are omitted."""
    start, end = day_window.start, day_window.end
    noon, late = config.morning_end, config.afternoon_end

    spans: Dict[Period, Interval] = {}
    if start < noon:
        spans[Period.MORNING] = (start, min(end, noon))
    if start < late and end > noon:
        spans[Period.AFTERNOON] = (max(start, noon), min(end, late))
    if end > late:
        spans[Period.EVENING] = (max(start, late), end)
    return spans


def free_intervals(day_window: DayWindow,
                   placed: Sequence[TimeBlock],
                   config: EngineConfig) -> Dict[Period, List[FreeInterval]]:
    occupied = [(b.start, b.end) for b in placed]
    result: Dict[Period, List[FreeInterval]] = {p: [] for p in Period}
    for period, span in period_spans(day_window, config).items():
        result[period] = [FreeInterval(s, e, period) for s, e in subtract_all(span, occupied)]
    return result
