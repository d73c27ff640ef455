import pytest

from weekplan.demand import (compute_demand, daily_study_minutes, overcommit_warnings,
                             split_study)
from weekplan.models import (OVERCOMMIT, Activity, ActivityType, DayWindow, FreeInterval,
                             Period, Subject, Weekday)
from weekplan.timeutils import to_minutes as t


def test_split_study_puts_remainder_in_evening():
    assert split_study(40) == {Period.MORNING: 13, Period.AFTERNOON: 13, Period.EVENING: 14}
    assert split_study(120) == {Period.MORNING: 40, Period.AFTERNOON: 40, Period.EVENING: 40}


def test_split_study_fractional_total():
    split = split_study(60 / 7)  # one weekly hour
    assert split[Period.MORNING] == 2
    assert split[Period.AFTERNOON] == 2
    assert split[Period.EVENING] == pytest.approx(60 / 7 - 4)


def test_daily_study_minutes_ignores_fixed_subjects():
    subjects = [
        Subject(id="a", name="A", weekly_hours=7),
        Subject(id="b", name="B", weekly_hours=7),
        Subject(id="lab", name="Lab", weekly_hours=3, fixed=True,
                fixed_start=t("16:00"), fixed_end=t("17:00")),
    ]
    assert daily_study_minutes(subjects) == pytest.approx(120)


def test_compute_demand_groups_activities_by_affinity():
    free = {
        Period.MORNING: [FreeInterval(t("06:00"), t("08:00"), Period.MORNING)],
        Period.AFTERNOON: [],
        Period.EVENING: [FreeInterval(t("16:00"), t("17:00"), Period.EVENING),
                         FreeInterval(t("18:00"), t("22:00"), Period.EVENING)],
    }
    activities = [
        Activity(id="gym", name="Gym", type=ActivityType.EXERCISE, daily_hours=1,
                 period_affinity=Period.MORNING),
        Activity(id="run", name="Run", type=ActivityType.EXERCISE, daily_hours=0.5,
                 period_affinity=Period.MORNING),
        Activity(id="read", name="Read", type=ActivityType.LEISURE, daily_hours=2,
                 period_affinity=Period.EVENING),
        Activity(id="free", name="Free", type=ActivityType.FREE, daily_hours=3,
                 period_affinity=Period.EVENING),
    ]
    demand = compute_demand(free, activities, [])

    assert demand.free_minutes == {Period.MORNING: 120, Period.AFTERNOON: 0, Period.EVENING: 300}
    assert demand.activity_minutes == {Period.MORNING: 90, Period.AFTERNOON: 0, Period.EVENING: 120}
    assert demand.study_minutes == {Period.MORNING: 0, Period.AFTERNOON: 0, Period.EVENING: 0}


def test_overcommit_warning_per_period():
    window = DayWindow(Weekday.WEDNESDAY, t("09:00"), t("11:00"))
    free = {Period.MORNING: [FreeInterval(t("09:00"), t("11:00"), Period.MORNING)]}
    reading = Activity(id="read", name="Read", type=ActivityType.LEISURE, daily_hours=3,
                       period_affinity=Period.MORNING)

    warnings = overcommit_warnings(window, compute_demand(free, [reading], []))

    assert len(warnings) == 1
    w = warnings[0]
    assert w.code == OVERCOMMIT
    assert (w.day, w.period, w.demand, w.available) == (Weekday.WEDNESDAY, Period.MORNING, 180, 120)


def test_no_warning_when_demand_fits():
    window = DayWindow(Weekday.WEDNESDAY, t("09:00"), t("11:00"))
    free = {Period.MORNING: [FreeInterval(t("09:00"), t("11:00"), Period.MORNING)]}
    reading = Activity(id="read", name="Read", type=ActivityType.LEISURE, daily_hours=2,
                       period_affinity=Period.MORNING)
    assert overcommit_warnings(window, compute_demand(free, [reading], [])) == []
