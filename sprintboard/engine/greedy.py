"""Greedy capacity-constrained sprint planner."""

from __future__ import annotations

from typing import Dict, List, Mapping

from sprintboard.config import DEFAULT_CAPACITY_HOURS, MAX_SPRINT
from sprintboard.domain.issue import Issue
from sprintboard.services.capacity import CapacityLedger

from .base import BasePlanner
from .topo import topological_order


class GreedySprintPlanner(BasePlanner):
    """
    Places issues one by one, in dependency-then-priority order, into the
    earliest sprint their dependencies and their assignee's capacity allow.
    
    Unassigned or unestimated issues consume no capacity and go to the
    earliest sprint their dependencies allow. When no sprint up to
    ``max_sprint`` has room, the issue is placed on ``max_sprint`` anyway and
    the hours are still booked there.
    """
    
    name = "greedy"
    
    def __init__(
        self,
        default_capacity: float = DEFAULT_CAPACITY_HOURS,
        max_sprint: int = MAX_SPRINT,
    ):
        self.default_capacity = float(default_capacity)
        self.max_sprint = int(max_sprint)
        self.ceiling_placements: List[int] = []
    
    def make_plan(
        self,
        issues: List[Issue],
        team_capacity: Mapping[str, float],
    ) -> List[Issue]:
        ordered = topological_order(issues)
        ledger = CapacityLedger(team_capacity, self.default_capacity)
        placed: Dict[int, int] = {}
        self.ceiling_placements = []
        
        for issue in ordered:
            earliest = 1
            for dep_id in issue.depends_on:
                if dep_id != issue.id and dep_id in placed:
                    earliest = max(earliest, placed[dep_id])
            
            hours = issue.estimate_hours or 0.0
            member = issue.assignee
            if not member or hours == 0:
                issue.sprint = earliest
                placed[issue.id] = earliest
                continue
            
            sprint = earliest
            while sprint <= self.max_sprint and not ledger.fits(sprint, member, hours):
                sprint += 1
            if sprint > self.max_sprint:
                sprint = max(self.max_sprint, earliest)
                self.ceiling_placements.append(issue.id)
                print(
                    f"[WARN] {issue.key or issue.id}: no sprint up to {self.max_sprint} has "
                    f"{hours:g}h free for {member}; placed on sprint {sprint}"
                )
            
            issue.sprint = sprint
            placed[issue.id] = sprint
            ledger.consume(sprint, member, hours)
        
        skipped = len({i.id for i in issues}) - len(ordered)
        if skipped:
            print(f"[WARN] {skipped} issues left unplanned (dependency cycle)")
        return ordered


def schedule(
    issues: List[Issue],
    team_capacity: Mapping[str, float],
    default_capacity: float = DEFAULT_CAPACITY_HOURS,
    max_sprint: int = MAX_SPRINT,
) -> List[Issue]:
    """
    Convenience function to plan ``issues`` with the greedy planner.
    
    Args:
        issues: Full issue set; ``sprint`` is overwritten in place
        team_capacity: Assignee -> hours per sprint
        default_capacity: Capacity for assignees missing from the table
        max_sprint: Highest sprint the placement scan considers
    
    Returns:
        Planned issues in dependency-and-priority order
    """
    planner = GreedySprintPlanner(default_capacity=default_capacity, max_sprint=max_sprint)
    return planner.make_plan(issues, team_capacity)
