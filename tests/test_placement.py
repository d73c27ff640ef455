from weekplan.models import (Activity, ActivityType, BlockKind, DayWindow, EngineConfig,
                             Subject, Weekday)
from weekplan.placement import fixed_spans, place_fixed
from weekplan.timeutils import to_minutes as t

CONFIG = EngineConfig()


def sleep(start="22:00", end="06:00"):
    return Activity(id="sleep", name="Sleep", type=ActivityType.SLEEP,
                    fixed=True, fixed_start=t(start), fixed_end=t(end))


def school():
    return Activity(id="school", name="School", type=ActivityType.PRIMARY_OBLIGATION,
                    fixed=True, fixed_start=t("08:00"), fixed_end=t("15:00"))


def test_overnight_pieces_touching_window_edges_are_dropped():
    monday = DayWindow(Weekday.MONDAY, t("06:00"), t("22:00"))
    blocks = place_fixed(monday, [sleep(), school()], [], CONFIG)

    assert [(b.ref, b.start, b.end) for b in blocks] == [("school", t("08:00"), t("15:00"))]


def test_overnight_slot_splits_at_midnight_and_clips():
    window = DayWindow(Weekday.TUESDAY, t("05:00"), t("23:30"))
    spans = fixed_spans(t("22:00"), t("06:00"), window, CONFIG)
    assert spans == [(t("22:00"), t("23:30")), (t("05:00"), t("06:00"))]


def test_overnight_slot_uses_day_close_for_evening_piece():
    window = DayWindow(Weekday.TUESDAY, t("00:00"), t("23:59"))
    spans = fixed_spans(t("22:00"), t("06:00"), window, CONFIG)
    assert spans == [(t("22:00"), t("23:59")), (0, t("06:00"))]


def test_fixed_slot_is_clipped_to_window():
    window = DayWindow(Weekday.FRIDAY, t("09:00"), t("14:00"))
    blocks = place_fixed(window, [school()], [], CONFIG)
    assert [(b.start, b.end) for b in blocks] == [(t("09:00"), t("14:00"))]


def test_fixed_slot_outside_window_is_skipped():
    window = DayWindow(Weekday.SATURDAY, t("16:00"), t("20:00"))
    assert place_fixed(window, [school()], [], CONFIG) == []


def test_order_is_activities_subjects_then_break():
    window = DayWindow(Weekday.MONDAY, t("06:00"), t("22:00"),
                       break_start=t("15:30"), break_end=t("16:00"))
    lab = Subject(id="lab", name="Lab", weekly_hours=5, fixed=True,
                  fixed_start=t("16:00"), fixed_end=t("17:00"))
    blocks = place_fixed(window, [school()], [lab], CONFIG)

    assert [b.kind for b in blocks] == [BlockKind.ACTIVITY, BlockKind.SUBJECT, BlockKind.BREAK]
    assert blocks[1].id == "Monday-16:00-lab"
    assert (blocks[2].start, blocks[2].end, blocks[2].ref) == (t("15:30"), t("16:00"), "break")


def test_flexible_items_are_not_placed():
    window = DayWindow(Weekday.MONDAY, t("06:00"), t("22:00"))
    gym = Activity(id="gym", name="Gym", type=ActivityType.EXERCISE, daily_hours=1)
    math = Subject(id="math", name="Math", weekly_hours=7)
    assert place_fixed(window, [gym], [math], CONFIG) == []


def test_inverted_break_is_not_placed():
    window = DayWindow(Weekday.MONDAY, t("06:00"), t("22:00"),
                       break_start=t("13:00"), break_end=t("12:00"))
    assert place_fixed(window, [], [], CONFIG) == []


def test_break_outside_window_is_dropped():
    window = DayWindow(Weekday.MONDAY, t("14:00"), t("22:00"),
                       break_start=t("12:00"), break_end=t("13:00"))
    assert place_fixed(window, [], [], CONFIG) == []
