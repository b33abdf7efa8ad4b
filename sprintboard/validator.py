from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence

import pandas as pd

from .config import DEFAULT_CAPACITY_HOURS
from .domain.issue import Issue
from .services.calendar import format_window
from .services.capacity import capacity_for

PLAN_COLUMNS = ["id", "key", "priority", "assignee", "estimate_hours", "sprint"]


def plan_frame(issues: Iterable[Issue]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "id": i.id,
                "key": i.key,
                "priority": i.priority,
                "assignee": i.assignee or "",
                "estimate_hours": float(i.estimate_hours or 0.0),
                "sprint": int(i.sprint),
            }
            for i in issues
        ],
        columns=PLAN_COLUMNS,
    )


def unscheduled_issues(issues: Sequence[Issue], planned: Sequence[Issue]) -> List[Issue]:
    planned_ids = {i.id for i in planned}
    return [i for i in issues if i.id not in planned_ids]


def sprint_load(planned: Sequence[Issue], team_capacity: Mapping[str, float], default_capacity: float = DEFAULT_CAPACITY_HOURS) -> pd.DataFrame:
    df = plan_frame(planned)
    df = df[(df["assignee"] != "") & (df["estimate_hours"] > 0)]
    if df.empty:
        return pd.DataFrame(columns=["sprint", "assignee", "hours", "capacity"])
    load = df.groupby(["sprint", "assignee"])["estimate_hours"].sum().reset_index()
    load.rename(columns={"estimate_hours": "hours"}, inplace=True)
    load["capacity"] = load["assignee"].map(lambda a: capacity_for(a, team_capacity, default_capacity))
    return load.sort_values(["sprint", "assignee"]).reset_index(drop=True)


def validate_plan(
    planned: Sequence[Issue],
    team_capacity: Mapping[str, float],
    default_capacity: float = DEFAULT_CAPACITY_HOURS,
    ceiling_ids: Iterable[int] = (),
) -> None:
    # Dependency ordering
    sprint_by_id = {i.id: i.sprint for i in planned}
    for issue in planned:
        for dep_id in issue.depends_on:
            if dep_id == issue.id or dep_id not in sprint_by_id:
                continue
            if issue.sprint < sprint_by_id[dep_id]:
                raise ValueError(
                    f"Issue {issue.key or issue.id} is in sprint {issue.sprint} "
                    f"before its dependency {dep_id} (sprint {sprint_by_id[dep_id]})"
                )

    # Capacity per sprint per assignee, ceiling placements exempt
    exempt = set(ceiling_ids)
    load = sprint_load([i for i in planned if i.id not in exempt], team_capacity, default_capacity)
    over = load[load["hours"] > load["capacity"] + 1e-9]
    if not over.empty:
        row = over.iloc[0]
        raise ValueError(
            f"Capacity exceeded in sprint {int(row['sprint'])} for {row['assignee']}: "
            f"{row['hours']:.1f}h > {row['capacity']:g}h"
        )


def summarize_plan(
    planned: Sequence[Issue],
    team_capacity: Mapping[str, float],
    sprint_start: str,
    sprint_length_days: int = 14,
    default_capacity: float = DEFAULT_CAPACITY_HOURS,
) -> str:
    if not planned:
        return "No planned issues."
    df = plan_frame(planned)
    lines = ["Issues per sprint:"]
    for sprint, group in df.groupby("sprint"):
        window = format_window(sprint_start, int(sprint), sprint_length_days)
        keys = ", ".join(str(k) for k in group["key"])
        lines.append(f"  Sprint {int(sprint)} ({window}): {len(group)} issues [{keys}]")

    load = sprint_load(planned, team_capacity, default_capacity)
    lines.append("")
    lines.append("Load per sprint per assignee (hours / capacity):")
    if load.empty:
        lines.append("  (no estimated, assigned issues)")
    else:
        lines.append(load.to_string(index=False))
    return "\n".join(lines)
