# weekplan/demand.py
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .models import (OVERCOMMIT, Activity, DayWindow, FreeInterval, Period,
                     ScheduleWarning, Subject)

logger = logging.getLogger(__name__)


@dataclass
class DayDemand:
    free_minutes: Dict[Period, int] = field(default_factory=dict)
    activity_minutes: Dict[Period, int] = field(default_factory=dict)
    study_minutes: Dict[Period, float] = field(default_factory=dict)

    def total(self, period: Period) -> float:
        return self.activity_minutes[period] + self.study_minutes[period]


def flexible_activities(activities: Sequence[Activity]) -> List[Activity]:
    # the free-time placeholder only labels leftovers, it is never demand
    return [a for a in activities if not a.fixed and not a.is_free_placeholder]


def flexible_subjects(subjects: Sequence[Subject]) -> List[Subject]:
    return [s for s in subjects if not s.fixed]


def activity_need(activity: Activity) -> int:
    return int(round(activity.daily_hours * 60))


def daily_study_minutes(subjects: Sequence[Subject]) -> float:
    """Per-day share of the weekly hours of every flexible subject."""
    return sum(s.weekly_hours * 60 / 7 for s in flexible_subjects(subjects))


def subject_share(study_minutes: float, count: int) -> int:
    """Whole minutes each of `count` flexible subjects gets from one period."""
    return math.floor(study_minutes / count) if count else 0


def split_study(total: float) -> Dict[Period, float]:
    per_period = math.floor(total / 3)
    return {
        Period.MORNING: per_period,
        Period.AFTERNOON: per_period,
        Period.EVENING: total - 2 * per_period,
    }


def compute_demand(free: Dict[Period, List[FreeInterval]],
                   activities: Sequence[Activity],
                   subjects: Sequence[Subject]) -> DayDemand:
    demand = DayDemand()
    for period in Period:
        demand.free_minutes[period] = sum(iv.minutes for iv in free.get(period, []))
        demand.activity_minutes[period] = sum(
            activity_need(a) for a in flexible_activities(activities)
            if a.period_affinity is period
        )
    demand.study_minutes = split_study(daily_study_minutes(subjects))
    return demand


def overcommit_warnings(day_window: DayWindow, demand: DayDemand) -> List[ScheduleWarning]:
    warnings = []
    for period in Period:
        needed = demand.total(period)
        available = demand.free_minutes[period]
        if needed > available:
            msg = (f"{day_window.day.value} {period.value}: needs {needed:.0f} min "
                   f"but only {available} min are free")
            logger.warning(msg)
            warnings.append(ScheduleWarning(
                code=OVERCOMMIT,
                message=msg,
                day=day_window.day,
                period=period,
                demand=needed,
                available=available,
            ))
    return warnings
