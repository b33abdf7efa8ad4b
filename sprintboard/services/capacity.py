"""Assignee capacity lookup and per-sprint bookkeeping."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Mapping

from sprintboard.config import DEFAULT_CAPACITY_HOURS


def capacity_for(
    member: str,
    team_capacity: Mapping[str, float],
    default: float = DEFAULT_CAPACITY_HOURS,
) -> float:
    """Capacity of ``member``; members missing from the table get ``default``."""
    hours = team_capacity.get(member)
    return float(default) if hours is None else float(hours)


class CapacityLedger:
    """
    Remaining hours per (sprint, assignee).

    Entries are created lazily at the assignee's full capacity the first time
    a sprint/assignee pair is looked at.
    """

    def __init__(self, team_capacity: Mapping[str, float], default: float = DEFAULT_CAPACITY_HOURS):
        self.team_capacity = dict(team_capacity)
        self.default = float(default)
        self._remaining: Dict[int, Dict[str, float]] = defaultdict(dict)

    def remaining(self, sprint: int, member: str) -> float:
        by_member = self._remaining[sprint]
        if member not in by_member:
            by_member[member] = capacity_for(member, self.team_capacity, self.default)
        return by_member[member]

    def fits(self, sprint: int, member: str, hours: float) -> bool:
        return self.remaining(sprint, member) >= hours

    def consume(self, sprint: int, member: str, hours: float) -> None:
        self._remaining[sprint][member] = self.remaining(sprint, member) - hours
