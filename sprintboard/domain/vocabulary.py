"""Status and priority vocabularies.

Tracker exports use free-text labels ("Closed", "In Review", "Blocker", ...).
The board works with three statuses and three priorities; these tables map
between the two. The mapping is lossy: only the internal values round-trip.
"""

from __future__ import annotations

from typing import Dict

TODO = "todo"
IN_PROGRESS = "inprogress"
DONE = "done"
STATUSES = (TODO, IN_PROGRESS, DONE)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"
PRIORITIES = (HIGH, MEDIUM, LOW)

STATUS_TO_INTERNAL: Dict[str, str] = {
    "open": TODO,
    "to do": TODO,
    "backlog": TODO,
    "in refinement": TODO,
    "new": TODO,
    "reopened": TODO,
    "in progress": IN_PROGRESS,
    "in development": IN_PROGRESS,
    "in review": IN_PROGRESS,
    "done": DONE,
    "closed": DONE,
    "resolved": DONE,
}

INTERNAL_TO_STATUS: Dict[str, str] = {
    TODO: "Open",
    IN_PROGRESS: "In Progress",
    DONE: "Done",
}

PRIORITY_TO_INTERNAL: Dict[str, str] = {
    "blocker": HIGH,
    "critical": HIGH,
    "highest": HIGH,
    "high": HIGH,
    "major": MEDIUM,
    "medium": MEDIUM,
    "normal": MEDIUM,
    "minor": LOW,
    "low": LOW,
    "trivial": LOW,
    "lowest": LOW,
}

INTERNAL_TO_PRIORITY: Dict[str, str] = {
    HIGH: "Critical",
    MEDIUM: "Major",
    LOW: "Minor",
}


def _normalize(label: str | None) -> str:
    return (label or "").strip().lower()


def status_to_internal(label: str | None) -> str:
    return STATUS_TO_INTERNAL.get(_normalize(label), TODO)


def status_to_external(status: str) -> str:
    return INTERNAL_TO_STATUS.get(status, INTERNAL_TO_STATUS[TODO])


def priority_to_internal(label: str | None) -> str:
    return PRIORITY_TO_INTERNAL.get(_normalize(label), MEDIUM)


def priority_to_external(priority: str) -> str:
    return INTERNAL_TO_PRIORITY.get(priority, INTERNAL_TO_PRIORITY[MEDIUM])


def priority_weight(priority: str) -> int:
    """Sort weight for scheduling; lower is scheduled first."""
    if priority == HIGH:
        return 0
    if priority == MEDIUM:
        return 1
    if priority == LOW:
        return 2
    return 3
