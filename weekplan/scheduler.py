# weekplan/scheduler.py
import logging
from typing import Iterable, List, Optional, Sequence

from .allocator import allocate_day
from .demand import (DayDemand, activity_need, compute_demand, daily_study_minutes,
                     flexible_activities, overcommit_warnings)
from .free_intervals import free_intervals
from .models import (NO_DAYS_AVAILABLE, WEEK_CAPACITY, Activity, DayWindow,
                     EngineConfig, Period, ScheduleResult, ScheduleWarning,
                     Subject, TimeBlock)
from .placement import place_fixed

logger = logging.getLogger(__name__)


def assemble_week(day_blocks: Iterable[List[TimeBlock]]) -> List[TimeBlock]:
    """Merge per-day block lists, ordered Monday..Sunday then by start time."""
    merged = [block for blocks in day_blocks for block in blocks]
    return sorted(merged, key=lambda b: (b.day_index, b.start, b.end, b.id))


def schedule_day(day_window: DayWindow,
                 subjects: Sequence[Subject],
                 activities: Sequence[Activity],
                 config: EngineConfig):
    """
    Build one day: fixed placement, free intervals, demand check, allocation.

    Returns (blocks, warnings, demand) for that day. Reads nothing from
    other days, so days can be computed in any order.
    """
    placed = place_fixed(day_window, activities, subjects, config)
    free = free_intervals(day_window, placed, config)
    demand = compute_demand(free, activities, subjects)
    warnings = overcommit_warnings(day_window, demand)
    allocated = allocate_day(day_window, free, demand, activities, subjects, config)

    logger.debug("%s: %d fixed, %d allocated blocks", day_window.day.value,
                 len(placed), len(allocated))
    return placed + allocated, warnings, demand


def _week_capacity_warning(demands: List[DayDemand]) -> Optional[ScheduleWarning]:
    needed = sum(d.total(p) for d in demands for p in Period)
    available = sum(d.free_minutes[p] for d in demands for p in Period)
    if needed <= available:
        return None
    msg = (f"flexible obligations need {needed / 60:.1f} h this week, "
           f"but only {available / 60:.1f} h are free")
    logger.warning(msg)
    return ScheduleWarning(code=WEEK_CAPACITY, message=msg,
                           demand=needed, available=available)


def generate(day_windows: Sequence[DayWindow],
             subjects: Sequence[Subject],
             activities: Sequence[Activity],
             config: Optional[EngineConfig] = None) -> ScheduleResult:
    """
    Generate the week's schedule.

    day_windows: the active days (one per weekday at most). Disabled days
                 are dropped by the input layer before they get here.
    Returns a ScheduleResult, which also unpacks as (blocks, warnings);
    its `demands` keeps each day's DayDemand.
    """
    config = config or EngineConfig()

    if not day_windows:
        msg = "no day has a valid availability window"
        logger.warning(msg)
        return ScheduleResult(blocks=[], warnings=[
            ScheduleWarning(code=NO_DAYS_AVAILABLE, message=msg)
        ])

    ordered = sorted(day_windows, key=lambda dw: dw.day.position)
    logger.info("Generating schedule for %d day(s), %d subject(s), %d activity(ies)",
                len(ordered), len(subjects), len(activities))
    logger.debug("Flexible demand per day: %d activity min, %.1f study min",
                 sum(activity_need(a) for a in flexible_activities(activities)),
                 daily_study_minutes(subjects))

    day_blocks = []
    warnings: List[ScheduleWarning] = []
    demands = {}
    for day_window in ordered:
        blocks, day_warnings, demand = schedule_day(day_window, subjects, activities, config)
        day_blocks.append(blocks)
        warnings += day_warnings
        demands[day_window.day] = demand

    capacity = _week_capacity_warning(list(demands.values()))
    if capacity is not None:
        warnings.append(capacity)

    return ScheduleResult(blocks=assemble_week(day_blocks), warnings=warnings,
                          demands=demands)
