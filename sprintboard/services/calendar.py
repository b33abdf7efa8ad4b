"""Sprint date windows."""

from __future__ import annotations

from typing import Tuple

import pandas as pd


def sprint_window(sprint_start: str, sprint: int, length_days: int = 14) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """
    First and last day of a sprint.

    Sprint 1 starts on ``sprint_start``; each sprint lasts ``length_days`` days.
    """
    if sprint < 1:
        raise ValueError(f"Sprint numbers start at 1, got {sprint}")
    start = pd.Timestamp(sprint_start).normalize() + pd.Timedelta(days=(sprint - 1) * length_days)
    end = start + pd.Timedelta(days=length_days - 1)
    return start, end


def format_window(sprint_start: str, sprint: int, length_days: int = 14) -> str:
    start, end = sprint_window(sprint_start, sprint, length_days)
    return f"{start.strftime('%Y-%m-%d')} .. {end.strftime('%Y-%m-%d')}"
