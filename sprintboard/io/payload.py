"""Structured (JSON-shaped) form of the board state.

This is the shape callers exchange with the store: camelCase keys, one object
per issue. Reading a payload is the one place bad input is reported as an
error instead of being repaired.
"""

from __future__ import annotations

import json
from datetime import date
from numbers import Real
from typing import Any, Dict, List

from sprintboard.domain.issue import DEFAULT_PROJECT_KEY, DEFAULT_SPRINT_START, BoardState, Issue, unique_ids
from sprintboard.domain.vocabulary import MEDIUM, PRIORITIES, STATUSES, TODO


class InvalidPayloadError(ValueError):
    """Raised when a caller-supplied state payload is malformed."""


def issue_to_payload(issue: Issue) -> Dict[str, Any]:
    return {
        "id": issue.id,
        "key": issue.key,
        "title": issue.title,
        "description": issue.description,
        "status": issue.status,
        "priority": issue.priority,
        "assignee": issue.assignee,
        "estimateHours": issue.estimate_hours,
        "dependsOn": list(issue.depends_on),
        "sprint": issue.sprint,
        "rawRow": list(issue.raw_row) if issue.raw_row is not None else None,
    }


def state_to_payload(state: BoardState) -> Dict[str, Any]:
    return {
        "nextId": state.next_id,
        "projectKey": state.project_key,
        "sprintStart": state.sprint_start,
        "teamCapacity": dict(state.team_capacity),
        "issues": [issue_to_payload(i) for i in state.issues],
    }


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _text(obj: Dict[str, Any], name: str, where: str) -> str:
    value = obj.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidPayloadError(f"{where}.{name} must be a string")
    return value


def issue_from_payload(obj: Any, where: str = "issue") -> Issue:
    if not isinstance(obj, dict):
        raise InvalidPayloadError(f"{where} must be an object")
    issue_id = obj.get("id")
    if not _is_int(issue_id):
        raise InvalidPayloadError(f"{where}.id must be an integer")

    status = obj.get("status", TODO)
    if status not in STATUSES:
        raise InvalidPayloadError(f"{where}.status must be one of {', '.join(STATUSES)}")
    priority = obj.get("priority", MEDIUM)
    if priority not in PRIORITIES:
        raise InvalidPayloadError(f"{where}.priority must be one of {', '.join(PRIORITIES)}")

    hours = obj.get("estimateHours", 0)
    if hours is None:
        hours = 0
    if not _is_number(hours) or hours < 0:
        raise InvalidPayloadError(f"{where}.estimateHours must be a non-negative number")

    depends_on = obj.get("dependsOn", [])
    if depends_on is None:
        depends_on = []
    if not isinstance(depends_on, list) or not all(_is_int(d) for d in depends_on):
        raise InvalidPayloadError(f"{where}.dependsOn must be a list of integers")

    sprint = obj.get("sprint", 1)
    if not _is_int(sprint) or sprint < 1:
        raise InvalidPayloadError(f"{where}.sprint must be a positive integer")

    raw_row = obj.get("rawRow")
    if raw_row is not None and (not isinstance(raw_row, list) or not all(isinstance(c, str) for c in raw_row)):
        raise InvalidPayloadError(f"{where}.rawRow must be a list of strings")

    return Issue(
        id=issue_id,
        key=_text(obj, "key", where),
        title=_text(obj, "title", where),
        description=_text(obj, "description", where),
        status=status,
        priority=priority,
        assignee=_text(obj, "assignee", where),
        estimate_hours=float(hours),
        depends_on=[d for d in unique_ids(depends_on) if d != issue_id],
        sprint=sprint,
        raw_row=raw_row,
    )


def state_from_payload(obj: Any) -> BoardState:
    """
    Build a BoardState from a decoded payload.

    Raises:
        InvalidPayloadError: If any field has the wrong shape
    """
    if not isinstance(obj, dict):
        raise InvalidPayloadError("State payload must be an object")

    raw_issues = obj.get("issues")
    if not isinstance(raw_issues, list):
        raise InvalidPayloadError("State payload needs an 'issues' list")
    issues: List[Issue] = []
    seen = set()
    for n, raw in enumerate(raw_issues):
        issue = issue_from_payload(raw, where=f"issues[{n}]")
        if issue.id in seen:
            raise InvalidPayloadError(f"issues[{n}].id {issue.id} is not unique")
        seen.add(issue.id)
        issues.append(issue)

    capacity = obj.get("teamCapacity", {})
    if capacity is None:
        capacity = {}
    if not isinstance(capacity, dict):
        raise InvalidPayloadError("teamCapacity must be an object")
    team_capacity: Dict[str, float] = {}
    for name, hours in capacity.items():
        if not _is_number(hours) or hours < 0:
            raise InvalidPayloadError(f"teamCapacity[{name!r}] must be a non-negative number")
        team_capacity[str(name)] = float(hours)

    next_id = obj.get("nextId", 1)
    if not _is_int(next_id):
        raise InvalidPayloadError("nextId must be an integer")

    project_key = obj.get("projectKey", DEFAULT_PROJECT_KEY) or DEFAULT_PROJECT_KEY
    if not isinstance(project_key, str):
        raise InvalidPayloadError("projectKey must be a string")

    sprint_start = obj.get("sprintStart", DEFAULT_SPRINT_START) or DEFAULT_SPRINT_START
    try:
        date.fromisoformat(str(sprint_start))
    except ValueError as e:
        raise InvalidPayloadError(f"sprintStart must be an ISO date: {e}") from e

    return BoardState(
        next_id=next_id,
        project_key=project_key,
        sprint_start=str(sprint_start),
        team_capacity=team_capacity,
        issues=issues,
    )


def loads_state(text: str) -> BoardState:
    """Decode JSON text into a BoardState."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidPayloadError(f"Invalid JSON: {e}") from e
    return state_from_payload(obj)


def dumps_state(state: BoardState) -> str:
    return json.dumps(state_to_payload(state), indent=2) + "\n"
