"""Base planner interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Mapping

from sprintboard.domain.issue import Issue


class BasePlanner(ABC):
    """
    Abstract base class for sprint planners.
    
    A planner receives the full issue set and the capacity table and fills in
    ``Issue.sprint``. It keeps no state between calls.
    """
    
    name: str | None = None  # Override in subclasses
    
    @abstractmethod
    def make_plan(
        self,
        issues: List[Issue],
        team_capacity: Mapping[str, float],
    ) -> List[Issue]:
        """
        Assign sprints to ``issues``.
        
        Args:
            issues: Issues to plan; their ``sprint`` field is overwritten
            team_capacity: Assignee name -> hours per sprint
        
        Returns:
            The planned issues in planning order. Issues that cannot be
            ordered (dependency cycles) are left out.
        """
        pass
    
    def get_name(self) -> str:
        return self.name or "UNKNOWN"
