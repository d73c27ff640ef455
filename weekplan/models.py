# weekplan/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .demand import DayDemand


MINUTES_PER_DAY = 1440


class ValidationError(ValueError):
    """Raised when an input record cannot be handed to the engine."""


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def position(self) -> int:
        return list(Weekday).index(self)


class Period(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class ActivityType(str, Enum):
    SLEEP = "sleep"
    WAKE_ROUTINE = "wake-routine"
    EXERCISE = "exercise"
    PRIMARY_OBLIGATION = "primary-obligation"
    LEISURE = "leisure"
    EVENING_ROUTINE = "evening-routine"
    FREE = "free"
    BREAK = "break"  # engine only


class BlockKind(str, Enum):
    SUBJECT = "subject"
    ACTIVITY = "activity"
    BREAK = "break"
    FREE = "free"


def _check_minute(value: int, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be an integer minute, got {value!r}")
    if not 0 <= value < MINUTES_PER_DAY:
        raise ValidationError(f"{what} must be within [0, {MINUTES_PER_DAY}), got {value}")


def _check_fixed_slot(owner: str, fixed: bool,
                      fixed_start: Optional[int], fixed_end: Optional[int]) -> None:
    if not fixed:
        return
    if fixed_start is None or fixed_end is None:
        raise ValidationError(f"{owner}: fixed items need both fixed_start and fixed_end")
    _check_minute(fixed_start, f"{owner}.fixed_start")
    _check_minute(fixed_end, f"{owner}.fixed_end")
    if fixed_start == fixed_end:
        raise ValidationError(f"{owner}: fixed slot has zero length")


@dataclass(frozen=True)
class EngineConfig:
    morning_end: int = 12 * 60
    afternoon_end: int = 16 * 60
    day_close: int = 23 * 60 + 59   # closing boundary for overnight slots
    activity_chunk: int = 60
    activity_min_block: int = 30
    subject_chunk: int = 60
    subject_min_block: int = 30
    free_min_block: int = 15

    def __post_init__(self):
        if not 0 < self.morning_end < self.afternoon_end <= MINUTES_PER_DAY:
            raise ValidationError("period boundaries must satisfy 0 < morning_end < afternoon_end")
        if not 0 < self.day_close <= MINUTES_PER_DAY:
            raise ValidationError("day_close must be within (0, 1440]")
        for name in ("activity_chunk", "subject_chunk"):
            if getattr(self, name) <= 0:
                raise ValidationError(f"{name} must be positive")
        for name in ("activity_min_block", "subject_min_block", "free_min_block"):
            if getattr(self, name) < 1:
                raise ValidationError(f"{name} must be at least one minute")


@dataclass(frozen=True)
class DayWindow:
    day: Weekday
    start: int
    end: int
    break_start: Optional[int] = None
    break_end: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "day", Weekday(self.day))
        _check_minute(self.start, f"{self.day.value}.start")
        _check_minute(self.end, f"{self.day.value}.end")
        if self.start >= self.end:
            raise ValidationError(f"{self.day.value}: start must be before end")
        if (self.break_start is None) != (self.break_end is None):
            raise ValidationError(f"{self.day.value}: break needs both start and end")
        if self.break_start is not None:
            _check_minute(self.break_start, f"{self.day.value}.break_start")
            _check_minute(self.break_end, f"{self.day.value}.break_end")

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_start < self.break_end


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    weekly_hours: float
    fixed: bool = False
    fixed_start: Optional[int] = None
    fixed_end: Optional[int] = None

    def __post_init__(self):
        if not str(self.id):
            raise ValidationError("subject id cannot be empty")
        if not self.name.strip():
            raise ValidationError(f"subject {self.id}: name cannot be empty")
        if self.weekly_hours <= 0:
            raise ValidationError(f"subject {self.name}: weekly_hours must be greater than 0")
        _check_fixed_slot(f"subject {self.name}", self.fixed, self.fixed_start, self.fixed_end)


@dataclass(frozen=True)
class Activity:
    id: str
    name: str
    type: ActivityType
    daily_hours: float = 0.0
    period_affinity: Period = Period.MORNING
    fixed: bool = False
    fixed_start: Optional[int] = None
    fixed_end: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "type", ActivityType(self.type))
        object.__setattr__(self, "period_affinity", Period(self.period_affinity))
        if not str(self.id):
            raise ValidationError("activity id cannot be empty")
        if not self.name.strip():
            raise ValidationError(f"activity {self.id}: name cannot be empty")
        if self.type is ActivityType.BREAK:
            raise ValidationError(f"activity {self.name}: type 'break' is reserved")
        if self.daily_hours < 0:
            raise ValidationError(f"activity {self.name}: daily_hours cannot be negative")
        _check_fixed_slot(f"activity {self.name}", self.fixed, self.fixed_start, self.fixed_end)

    @property
    def is_free_placeholder(self) -> bool:
        return self.type is ActivityType.FREE


@dataclass(frozen=True)
class TimeBlock:
    id: str
    day: Weekday
    start: int
    end: int
    kind: BlockKind
    ref: str
    label: str

    @property
    def minutes(self) -> int:
        return self.end - self.start

    @property
    def day_index(self) -> int:
        return self.day.position

    @property
    def start_hhmm(self) -> str:
        return f"{self.start // 60:02d}:{self.start % 60:02d}"

    @property
    def end_hhmm(self) -> str:
        return f"{self.end // 60:02d}:{self.end % 60:02d}"


@dataclass
class FreeInterval:
    start: int
    end: int
    period: Period

    @property
    def minutes(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ScheduleWarning:
    code: str
    message: str
    day: Optional[Weekday] = None
    period: Optional[Period] = None
    demand: Optional[float] = None
    available: Optional[int] = None


NO_DAYS_AVAILABLE = "no-days-available"
OVERCOMMIT = "overcommit"
WEEK_CAPACITY = "week-capacity"


@dataclass
class ScheduleResult:
    blocks: List[TimeBlock] = field(default_factory=list)
    warnings: List[ScheduleWarning] = field(default_factory=list)
    # per active day, the free minutes and demand the allocator worked from
    demands: Dict[Weekday, "DayDemand"] = field(default_factory=dict)

    def __iter__(self):
        # allows `blocks, warnings = generate(...)`
        yield self.blocks
        yield self.warnings
