# main.py
import argparse
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
import pandas as pd
from prometheus_client import Counter, Summary, start_http_server

from weekplan.frame import blocks_to_frame, minutes_by_kind, weekly_summary
from weekplan.inputs import load_week, load_week_file
from weekplan.models import EngineConfig
from weekplan.scheduler import generate

logger = logging.getLogger("weekplan")

SCHEDULE_TIME = Summary(
    "schedule_generation_seconds",
    "Time spent generating the weekly schedule",
)
WARNING_COUNTER = Counter(
    "schedule_warnings_total",
    "Schedule warnings by code",
    ["code"],
)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

EXAMPLE_WEEK = {
    "dayPreferences": (
        [{"day": d, "startTime": "06:00", "endTime": "22:00", "breakTime": "12:30-13:00"}
         for d in WEEKDAYS]
        + [{"day": "Saturday", "startTime": "08:00", "endTime": "20:00", "breakTime": ""},
           {"day": "Sunday", "startTime": "", "endTime": "", "breakTime": ""}]
    ),
    "subjects": [
        {"id": "math", "name": "Mathematics", "hoursPerWeek": 7},
        {"id": "phys", "name": "Physics", "hoursPerWeek": 5},
        {"id": "lab", "name": "Chemistry Lab", "hoursPerWeek": 2, "fixed": True,
         "fixedStart": "16:00", "fixedEnd": "17:00"},
    ],
    "activities": [
        {"id": "sleep", "name": "Sleep", "type": "sleep", "fixed": True,
         "fixedStart": "22:30", "fixedEnd": "06:30"},
        {"id": "school", "name": "School", "type": "school", "fixed": True,
         "fixedStart": "08:00", "fixedEnd": "12:00"},
        {"id": "gym", "name": "Gym", "type": "exercise", "hoursPerDay": 1,
         "periodAffinity": "evening"},
        {"id": "reading", "name": "Reading", "type": "leisure", "hoursPerDay": 0.5,
         "periodAffinity": "afternoon"},
        {"id": "free", "name": "Free time", "type": "free"},
    ],
}


def plot_week(blocks) -> None:
    table = minutes_by_kind(blocks)
    if table.empty:
        return
    (table / 60).plot(kind="bar", stacked=True, figsize=(10, 4))
    plt.title("Scheduled hours per day")
    plt.xlabel("Day")
    plt.ylabel("Hours")
    plt.tight_layout()
    plt.show()


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Generate a weekly schedule")
    parser.add_argument("input", nargs="?", help="JSON file with dayPreferences, subjects, activities")
    parser.add_argument("--subject-min-block", type=int, default=30,
                        help="smallest free interval (minutes) that starts a study block")
    parser.add_argument("--plot", action="store_true", help="plot hours per day")
    parser.add_argument("--metrics-port", type=int, default=None,
                        help="expose prometheus metrics on this port")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.metrics_port:
        start_http_server(args.metrics_port)
        logger.info("Metrics on :%d", args.metrics_port)

    if args.input:
        windows, subjects, activities = load_week_file(args.input)
    else:
        windows, subjects, activities = load_week(EXAMPLE_WEEK)

    config = EngineConfig(subject_min_block=args.subject_min_block)
    with SCHEDULE_TIME.time():
        result = generate(windows, subjects, activities, config)
    blocks, warnings = result

    for w in warnings:
        WARNING_COUNTER.labels(code=w.code).inc()

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print("=== Schedule ===")
        print(blocks_to_frame(blocks, config).drop(columns=["day_index"]))
        print()
        print("=== Weekly summary ===")
        print(weekly_summary(result, subjects, activities))

    if args.plot:
        plot_week(blocks)

    return blocks, warnings


if __name__ == "__main__":
    main()
