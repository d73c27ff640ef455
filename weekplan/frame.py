# weekplan/frame.py
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .demand import activity_need, flexible_activities, flexible_subjects, subject_share
from .models import (Activity, BlockKind, EngineConfig, Period, ScheduleResult, Subject,
                     TimeBlock, Weekday)

BLOCK_COLUMNS = ["id", "day", "day_index", "start", "end", "minutes",
                 "period", "kind", "ref", "label"]


def blocks_to_frame(blocks: Sequence[TimeBlock],
                    config: Optional[EngineConfig] = None) -> pd.DataFrame:
    """
    One row per block, ordered like the week assembler output.

    start/end are "HH:MM" strings; `period` is the period the block starts in.
    """
    config = config or EngineConfig()
    if not blocks:
        return pd.DataFrame(columns=BLOCK_COLUMNS)

    df = pd.DataFrame([{
        "id": b.id,
        "day": b.day.value,
        "day_index": b.day_index,
        "start_min": b.start,
        "start": b.start_hhmm,
        "end": b.end_hhmm,
        "minutes": b.minutes,
        "kind": b.kind.value,
        "ref": b.ref,
        "label": b.label,
    } for b in blocks])

    df["period"] = np.select(
        [df["start_min"] < config.morning_end, df["start_min"] < config.afternoon_end],
        ["morning", "afternoon"],
        default="evening",
    )
    df = df.sort_values(["day_index", "start_min"], kind="stable").reset_index(drop=True)
    return df[BLOCK_COLUMNS]


def minutes_by_kind(blocks: Sequence[TimeBlock]) -> pd.DataFrame:
    """Days (Monday..Sunday, active days only) x block kinds, in minutes."""
    kinds = [k.value for k in BlockKind]
    df = blocks_to_frame(blocks)
    if df.empty:
        return pd.DataFrame(columns=kinds, dtype=int)
    table = df.pivot_table(index="day", columns="kind", values="minutes",
                           aggfunc="sum", fill_value=0)
    order = [d.value for d in Weekday if d.value in table.index]
    return table.reindex(index=order, columns=kinds, fill_value=0).astype(int)


def weekly_summary(result: ScheduleResult,
                   subjects: Sequence[Subject],
                   activities: Sequence[Activity]) -> pd.DataFrame:
    """
    Planned vs scheduled minutes for every flexible subject and activity.

    `planned` is what the allocator set out to place: each subject's floored
    per-period share of the study demand, and each flexible activity's daily
    need, summed over the active days in `result.demands`. `shortfall` is
    the part of that the greedy allocation could not place.
    """
    flex_subjects = flexible_subjects(subjects)
    per_subject = sum(subject_share(d.study_minutes[p], len(flex_subjects))
                      for d in result.demands.values() for p in Period)

    rows: List[dict] = []
    for s in flex_subjects:
        rows.append({"ref": s.id, "name": s.name, "kind": BlockKind.SUBJECT.value,
                     "planned": float(per_subject)})
    for a in flexible_activities(activities):
        rows.append({"ref": a.id, "name": a.name, "kind": BlockKind.ACTIVITY.value,
                     "planned": float(activity_need(a) * len(result.demands))})
    summary = pd.DataFrame(rows, columns=["ref", "name", "kind", "planned"])

    df = blocks_to_frame(result.blocks)
    scheduled = (df.groupby(["kind", "ref"], as_index=False)["minutes"].sum()
                 .rename(columns={"minutes": "scheduled"}))
    summary = summary.merge(scheduled, on=["kind", "ref"], how="left")
    summary["scheduled"] = summary["scheduled"].fillna(0).astype(float)
    summary["shortfall"] = (summary["planned"] - summary["scheduled"]).clip(lower=0)
    return summary
