"""Issue entity and the board state aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .vocabulary import MEDIUM, TODO

DEFAULT_PROJECT_KEY = "SB"
DEFAULT_SPRINT_START = "2026-02-15"


@dataclass
class Issue:
    """A schedulable unit of work.

    ``id`` is the identity used for dependency edges and for matching rows on
    save. ``key`` is the human-readable tracker key and is only used for
    display and tie-breaking. ``raw_row`` carries the full export row so
    columns the board does not model survive a round trip.
    """

    id: int
    key: str = ""
    title: str = ""
    description: str = ""
    status: str = TODO
    priority: str = MEDIUM
    assignee: str = ""
    estimate_hours: float = 0.0
    depends_on: List[int] = field(default_factory=list)
    sprint: int = 1
    raw_row: Optional[List[str]] = None

    def __repr__(self) -> str:
        return (
            f"<Issue(id={self.id}, key='{self.key}', priority={self.priority}, "
            f"assignee='{self.assignee}', sprint={self.sprint})>"
        )


def unique_ids(ids) -> List[int]:
    """Deduplicate while keeping first-seen order."""
    seen = set()
    out: List[int] = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


@dataclass
class BoardState:
    """Everything loaded, edited and saved as one unit."""

    next_id: int = 1
    project_key: str = DEFAULT_PROJECT_KEY
    sprint_start: str = DEFAULT_SPRINT_START
    team_capacity: Dict[str, float] = field(default_factory=dict)
    issues: List[Issue] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.next_id = max(self.next_id, self._max_id() + 1)

    def _max_id(self) -> int:
        return max((i.id for i in self.issues), default=0)

    def allocate_id(self) -> int:
        new_id = max(self.next_id, self._max_id() + 1)
        self.next_id = new_id + 1
        return new_id

    def get_issue(self, issue_id: int) -> Optional[Issue]:
        for issue in self.issues:
            if issue.id == issue_id:
                return issue
        return None

    def issue_by_key(self, key: str) -> Optional[Issue]:
        for issue in self.issues:
            if issue.key == key:
                return issue
        return None

    def add_issue(
        self,
        title: str,
        *,
        description: str = "",
        status: str = TODO,
        priority: str = MEDIUM,
        assignee: str = "",
        estimate_hours: float = 0.0,
        depends_on: Optional[List[int]] = None,
    ) -> Issue:
        """Create an issue keyed ``<project_key>-<id>`` and append it."""
        new_id = self.allocate_id()
        known = {i.id for i in self.issues}
        deps = [d for d in unique_ids(depends_on or []) if d in known]
        issue = Issue(
            id=new_id,
            key=f"{self.project_key}-{new_id}",
            title=title,
            description=description,
            status=status,
            priority=priority,
            assignee=assignee,
            estimate_hours=float(estimate_hours),
            depends_on=deps,
        )
        self.issues.append(issue)
        return issue

    def remove_issue(self, issue_id: int) -> bool:
        """Remove an issue and every dependency edge pointing at it."""
        before = len(self.issues)
        self.issues = [i for i in self.issues if i.id != issue_id]
        if len(self.issues) == before:
            return False
        for issue in self.issues:
            if issue_id in issue.depends_on:
                issue.depends_on = [d for d in issue.depends_on if d != issue_id]
        return True
