# weekplan/allocator.py
import logging
from typing import Dict, List, Optional, Sequence

from .demand import (DayDemand, activity_need, flexible_activities, flexible_subjects,
                     subject_share)
from .models import (Activity, BlockKind, DayWindow, EngineConfig, FreeInterval,
                     Period, Subject, TimeBlock)
from .placement import make_block

logger = logging.getLogger(__name__)


def _first_fit(intervals: List[FreeInterval], min_minutes: int) -> Optional[FreeInterval]:
    # intervals stay sorted by start, so the first hit is the earliest one
    for iv in intervals:
        if iv.minutes >= min_minutes:
            return iv
    return None


def _take(intervals: List[FreeInterval], iv: FreeInterval, minutes: int) -> int:
    """Consume `minutes` from the front of `iv`; returns the start of the taken span."""
    start = iv.start
    iv.start += minutes
    if iv.start >= iv.end:
        intervals[:] = [other for other in intervals if other is not iv]
    return start


def allocate_activities(day_window: DayWindow,
                        intervals: List[FreeInterval],
                        activities: Sequence[Activity],
                        config: EngineConfig) -> List[TimeBlock]:
    blocks = []
    for activity in activities:
        need = activity_need(activity)
        while need > 0:
            iv = _first_fit(intervals, config.activity_min_block)
            if iv is None:
                logger.debug("%s: %d min of '%s' left unplaced",
                             day_window.day.value, need, activity.name)
                break
            minutes = min(config.activity_chunk, iv.minutes, need)
            start = _take(intervals, iv, minutes)
            blocks.append(make_block(day_window, start, start + minutes,
                                     BlockKind.ACTIVITY, activity.id, activity.name))
            need -= minutes
    return blocks


def allocate_subjects(day_window: DayWindow,
                      intervals: List[FreeInterval],
                      subjects: Sequence[Subject],
                      study_minutes: float,
                      config: EngineConfig) -> List[TimeBlock]:
    """Round-robin the period's study demand over the flexible subjects."""
    if not subjects:
        return []

    share = subject_share(study_minutes, len(subjects))
    remaining = [share] * len(subjects)
    blocks = []
    turn = 0
    while any(r > 0 for r in remaining):
        idx = turn % len(subjects)
        turn += 1
        if remaining[idx] <= 0:
            continue
        iv = _first_fit(intervals, config.subject_min_block)
        if iv is None:
            break
        subject = subjects[idx]
        minutes = min(config.subject_chunk, iv.minutes, remaining[idx])
        start = _take(intervals, iv, minutes)
        blocks.append(make_block(day_window, start, start + minutes,
                                 BlockKind.SUBJECT, subject.id, subject.name))
        remaining[idx] -= minutes
    return blocks


def fill_free_time(day_window: DayWindow,
                   intervals: List[FreeInterval],
                   placeholder: Optional[Activity],
                   config: EngineConfig) -> List[TimeBlock]:
    if placeholder is None:
        return []
    blocks = [
        make_block(day_window, iv.start, iv.end, BlockKind.FREE, placeholder.id, placeholder.name)
        for iv in intervals if iv.minutes >= config.free_min_block
    ]
    intervals.clear()
    return blocks


def allocate_day(day_window: DayWindow,
                 free: Dict[Period, List[FreeInterval]],
                 demand: DayDemand,
                 activities: Sequence[Activity],
                 subjects: Sequence[Subject],
                 config: EngineConfig) -> List[TimeBlock]:
    """
    Greedy fill of one day's free intervals, period by period:
    flexible activities first, then subjects in rotation, then free time.
    """
    placeholder = next((a for a in activities if a.is_free_placeholder), None)
    flex_activities = flexible_activities(activities)
    flex_subjects = flexible_subjects(subjects)

    blocks: List[TimeBlock] = []
    for period in Period:
        working = [FreeInterval(iv.start, iv.end, iv.period) for iv in free.get(period, [])]
        period_activities = [a for a in flex_activities if a.period_affinity is period]

        blocks += allocate_activities(day_window, working, period_activities, config)
        blocks += allocate_subjects(day_window, working, flex_subjects,
                                    demand.study_minutes[period], config)
        blocks += fill_free_time(day_window, working, placeholder, config)
    return blocks
