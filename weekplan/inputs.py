# weekplan/inputs.py
"""
Input boundary: turns loosely shaped records (form values, JSON) into the
validated records the engine accepts.

Keys are accepted in snake_case or in the camelCase used by the web forms
(``startTime``, ``hoursPerWeek``, ``breakTime`` as "12:00-13:00", ...).
Unknown keys are rejected.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import (AliasChoices, BaseModel, ConfigDict, Field, field_validator,
                      model_validator)
from pydantic import ValidationError as RecordError

from .models import (Activity, ActivityType, DayWindow, MINUTES_PER_DAY, Period, Subject,
                     ValidationError, Weekday)
from .timeutils import to_minutes

logger = logging.getLogger(__name__)

# activity type names used by older saved data
ACTIVITY_TYPE_ALIASES = {
    "freshup": ActivityType.WAKE_ROUTINE,
    "school": ActivityType.PRIMARY_OBLIGATION,
    "study": ActivityType.PRIMARY_OBLIGATION,
    "extracurricular": ActivityType.LEISURE,
    "bedtime": ActivityType.EVENING_ROUTINE,
}

Record = Dict[str, Any]


def parse_time(value: Any) -> Optional[int]:
    """"HH:MM" or a minute count; blank means unset."""
    if value is None or value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < MINUTES_PER_DAY:
            raise ValidationError(f"minute value out of range: {value}")
        return value
    return to_minutes(value)


def parse_break(text: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """'12:00-13:00' -> (720, 780). Empty means no break."""
    if not text:
        return None, None
    parts = str(text).split("-")
    if len(parts) != 2:
        raise ValidationError(f"invalid break {text!r}, expected HH:MM-HH:MM")
    start, end = to_minutes(parts[0]), to_minutes(parts[1])
    if start >= end:
        raise ValidationError(f"break {text!r} must start before it ends")
    return start, end


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True,
                              str_strip_whitespace=True, coerce_numbers_to_str=True)


class DayWindowRecord(_Record):
    day: Weekday
    start: Optional[int] = Field(None, validation_alias=AliasChoices("start", "startTime"))
    end: Optional[int] = Field(None, validation_alias=AliasChoices("end", "endTime"))
    break_time: Optional[Tuple[int, int]] = Field(None, alias="breakTime")
    break_start: Optional[int] = Field(
        None, validation_alias=AliasChoices("break_start", "breakStart"))
    break_end: Optional[int] = Field(None, validation_alias=AliasChoices("break_end", "breakEnd"))

    @field_validator("day", mode="before")
    @classmethod
    def _day_name(cls, value):
        return value.strip().capitalize() if isinstance(value, str) else value

    @field_validator("start", "end", "break_start", "break_end", mode="before")
    @classmethod
    def _time(cls, value):
        return parse_time(value)

    @field_validator("break_time", mode="before")
    @classmethod
    def _break(cls, value):
        start, end = parse_break(value)
        return None if start is None else (start, end)

    @model_validator(mode="after")
    def _one_break_form(self):
        if self.break_time is not None:
            if self.break_start is not None or self.break_end is not None:
                raise ValueError("give either breakTime or break_start/break_end, not both")
            self.break_start, self.break_end = self.break_time
        return self

    @property
    def enabled(self) -> bool:
        return self.start is not None and self.end is not None and self.start < self.end

    def to_day_window(self) -> Optional[DayWindow]:
        if not self.enabled:
            logger.debug("%s is disabled, skipping", self.day.value)
            return None
        return DayWindow(day=self.day, start=self.start, end=self.end,
                         break_start=self.break_start, break_end=self.break_end)


class _FixedSlotRecord(_Record):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    color: Optional[str] = None  # display only
    fixed: bool = Field(False, validation_alias=AliasChoices("fixed", "fixedTime"))
    fixed_start: Optional[int] = Field(
        None, validation_alias=AliasChoices("fixed_start", "fixedStart", "startTime"))
    fixed_end: Optional[int] = Field(
        None, validation_alias=AliasChoices("fixed_end", "fixedEnd", "endTime"))

    @field_validator("fixed_start", "fixed_end", mode="before")
    @classmethod
    def _time(cls, value):
        return parse_time(value)

    @model_validator(mode="after")
    def _fixed_slot(self):
        if not self.fixed:
            self.fixed_start = self.fixed_end = None
            return self
        if self.fixed_start is None or self.fixed_end is None:
            raise ValueError("fixed items need both a start and an end time")
        if self.fixed_start == self.fixed_end:
            raise ValueError("fixed slot has zero length")
        return self


class SubjectRecord(_FixedSlotRecord):
    weekly_hours: float = Field(gt=0, validation_alias=AliasChoices("weekly_hours", "hoursPerWeek"))

    def to_subject(self) -> Subject:
        return Subject(id=self.id, name=self.name, weekly_hours=self.weekly_hours,
                       fixed=self.fixed, fixed_start=self.fixed_start, fixed_end=self.fixed_end)


class ActivityRecord(_FixedSlotRecord):
    type: ActivityType
    daily_hours: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("daily_hours", "hoursPerDay"))
    period_affinity: Period = Field(
        Period.MORNING,
        validation_alias=AliasChoices("period_affinity", "periodAffinity", "preferredTime"))
    priority: Optional[int] = None  # kept by the forms, unused by the engine

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        if not isinstance(value, str):
            return value
        key = value.strip().lower()
        if key == ActivityType.BREAK.value:
            raise ValueError("type 'break' is reserved for the day break")
        return ACTIVITY_TYPE_ALIASES.get(key, key)

    @field_validator("period_affinity", mode="before")
    @classmethod
    def _period(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    def to_activity(self) -> Activity:
        return Activity(id=self.id, name=self.name, type=self.type,
                        daily_hours=self.daily_hours, period_affinity=self.period_affinity,
                        fixed=self.fixed, fixed_start=self.fixed_start, fixed_end=self.fixed_end)


class WeekRecord(_Record):
    day_windows: List[DayWindowRecord] = Field(
        default_factory=list, validation_alias=AliasChoices("day_windows", "dayPreferences"))
    subjects: List[SubjectRecord] = Field(default_factory=list)
    activities: List[ActivityRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique(self):
        _check_unique_days(self.day_windows)
        seen = set()
        # ids label block refs, so subjects and activities share one namespace
        for item in list(self.subjects) + list(self.activities):
            if item.id in seen:
                raise ValueError(f"duplicate id {item.id!r}")
            seen.add(item.id)
        return self


def _check_unique_days(records: Iterable[DayWindowRecord]) -> None:
    seen = set()
    for record in records:
        if not record.enabled:
            continue
        if record.day in seen:
            raise ValueError(f"{record.day.value} is listed more than once")
        seen.add(record.day)


def _validate(model, record: Any):
    try:
        return model.model_validate(record)
    except RecordError as exc:
        raise ValidationError(str(exc)) from exc


def day_window_from_record(record: Record) -> Optional[DayWindow]:
    """Returns None for a disabled day (blank times, or start not before end)."""
    return _validate(DayWindowRecord, record).to_day_window()


def active_day_windows(records: Iterable[Record]) -> List[DayWindow]:
    parsed = [_validate(DayWindowRecord, r) for r in records]
    try:
        _check_unique_days(parsed)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return [w for w in (p.to_day_window() for p in parsed) if w is not None]


def subject_from_record(record: Record) -> Subject:
    return _validate(SubjectRecord, record).to_subject()


def activity_from_record(record: Record) -> Activity:
    return _validate(ActivityRecord, record).to_activity()


def load_week(data: Record) -> Tuple[List[DayWindow], List[Subject], List[Activity]]:
    """Validate a whole input document: dayPreferences / subjects / activities."""
    week = _validate(WeekRecord, data)
    windows = [w for w in (r.to_day_window() for r in week.day_windows) if w is not None]
    return (windows,
            [r.to_subject() for r in week.subjects],
            [r.to_activity() for r in week.activities])


def load_week_file(path: str) -> Tuple[List[DayWindow], List[Subject], List[Activity]]:
    with open(path, "r", encoding="utf-8") as f:
        return load_week(json.load(f))
