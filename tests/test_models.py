import pytest

from weekplan.models import (Activity, ActivityType, BlockKind, DayWindow, EngineConfig,
                             Period, ScheduleResult, Subject, TimeBlock, ValidationError,
                             Weekday)


def test_weekday_position():
    assert Weekday.MONDAY.position == 0
    assert Weekday.SUNDAY.position == 6
    assert Weekday("Thursday") is Weekday.THURSDAY


def test_day_window_requires_start_before_end():
    with pytest.raises(ValidationError):
        DayWindow(Weekday.MONDAY, 600, 600)


def test_day_window_break_needs_both_bounds():
    with pytest.raises(ValidationError):
        DayWindow(Weekday.MONDAY, 540, 1020, break_start=720)


def test_day_window_accepts_day_name():
    assert DayWindow("Tuesday", 540, 1020).day is Weekday.TUESDAY


@pytest.mark.parametrize("kwargs", [
    {"weekly_hours": 0},
    {"weekly_hours": 3, "fixed": True},
    {"weekly_hours": 3, "fixed": True, "fixed_start": 600, "fixed_end": 600},
    {"weekly_hours": 3, "fixed": True, "fixed_start": 600, "fixed_end": 1440},
])
def test_invalid_subjects(kwargs):
    with pytest.raises(ValidationError):
        Subject(id="s", name="Math", **kwargs)


def test_activity_rejects_break_type_and_negative_hours():
    with pytest.raises(ValidationError):
        Activity(id="b", name="Break", type=ActivityType.BREAK)
    with pytest.raises(ValidationError):
        Activity(id="r", name="Read", type=ActivityType.LEISURE, daily_hours=-1)


def test_activity_coerces_enum_values():
    activity = Activity(id="r", name="Read", type="leisure", period_affinity="evening")
    assert activity.type is ActivityType.LEISURE
    assert activity.period_affinity is Period.EVENING
    assert not activity.is_free_placeholder


def test_engine_config_validation():
    with pytest.raises(ValidationError):
        EngineConfig(morning_end=960, afternoon_end=720)
    with pytest.raises(ValidationError):
        EngineConfig(subject_chunk=0)


def test_time_block_properties():
    block = TimeBlock(id="Sunday-21:30-read", day=Weekday.SUNDAY, start=1290, end=1440,
                      kind=BlockKind.ACTIVITY, ref="read", label="Read")
    assert block.minutes == 150
    assert block.day_index == 6
    assert (block.start_hhmm, block.end_hhmm) == ("21:30", "24:00")


def test_schedule_result_unpacks():
    blocks, warnings = ScheduleResult()
    assert blocks == [] and warnings == []
