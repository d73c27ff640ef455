# weekplan/placement.py
import logging
from typing import List, Sequence, Union

from .models import (Activity, BlockKind, DayWindow, EngineConfig, Subject,
                     TimeBlock)
from .timeutils import Interval, clip, to_hhmm

logger = logging.getLogger(__name__)

BREAK_REF = "break"


def make_block(day_window: DayWindow, start: int, end: int,
               kind: BlockKind, ref: str, label: str) -> TimeBlock:
    day = day_window.day
    return TimeBlock(
        id=f"{day.value}-{to_hhmm(start)}-{ref}",
        day=day,
        start=start,
        end=end,
        kind=kind,
        ref=ref,
        label=label,
    )


def fixed_spans(fixed_start: int, fixed_end: int, day_window: DayWindow,
                config: EngineConfig) -> List[Interval]:
    """
    Pieces of a recurring fixed slot that fall inside one day window.

    An overnight slot (start after end) is split at midnight into
    [start, day_close] and [00:00, end] before clipping.
    """
    if fixed_start < fixed_end:
        raw = [(fixed_start, fixed_end)]
    else:
        raw = [(fixed_start, config.day_close), (0, fixed_end)]

    window = (day_window.start, day_window.end)
    spans = []
    for span in raw:
        clipped = clip(span, window)
        if clipped is not None:
            spans.append(clipped)
    return spans


def place_fixed(day_window: DayWindow,
                activities: Sequence[Activity],
                subjects: Sequence[Subject],
                config: EngineConfig) -> List[TimeBlock]:
    """Fixed activities, fixed subjects and the break for one day, in insertion order."""
    blocks: List[TimeBlock] = []

    fixed_items: List[Union[Activity, Subject]] = [a for a in activities if a.fixed]
    fixed_items += [s for s in subjects if s.fixed]

    for item in fixed_items:
        kind = BlockKind.ACTIVITY if isinstance(item, Activity) else BlockKind.SUBJECT
        spans = fixed_spans(item.fixed_start, item.fixed_end, day_window, config)
        if not spans:
            logger.debug("%s: fixed %s '%s' falls outside the day window",
                         day_window.day.value, kind.value, item.name)
        for start, end in spans:
            blocks.append(make_block(day_window, start, end, kind, item.id, item.name))

    if day_window.has_break:
        span = clip((day_window.break_start, day_window.break_end),
                    (day_window.start, day_window.end))
        if span is not None:
            blocks.append(make_block(day_window, span[0], span[1],
                                     BlockKind.BREAK, BREAK_REF, "Break"))

    return blocks
