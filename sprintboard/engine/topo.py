"""Dependency ordering with priority as the secondary key."""

from __future__ import annotations

import heapq
from itertools import count
from typing import Dict, List, Sequence, Tuple

from sprintboard.domain.issue import Issue, unique_ids
from sprintboard.domain.vocabulary import priority_weight


def ready_key(issue: Issue) -> Tuple[int, str]:
    return priority_weight(issue.priority), issue.key or ""


def in_set_dependencies(issue: Issue, by_id: Dict[int, Issue]) -> List[int]:
    """Dependencies that are part of the issue set; self-links are ignored."""
    return [d for d in unique_ids(issue.depends_on) if d in by_id and d != issue.id]


def topological_order(issues: Sequence[Issue]) -> List[Issue]:
    """
    Order issues so every issue follows its dependencies.

    Ready issues are taken by (priority weight, key); equal keys keep the
    order in which they became ready. Issues on or behind a dependency cycle
    never become ready and are absent from the result.
    """
    by_id: Dict[int, Issue] = {}
    for issue in issues:
        by_id.setdefault(issue.id, issue)

    in_degree: Dict[int, int] = {issue_id: 0 for issue_id in by_id}
    dependents: Dict[int, List[int]] = {issue_id: [] for issue_id in by_id}
    for issue in by_id.values():
        for dep_id in in_set_dependencies(issue, by_id):
            in_degree[issue.id] += 1
            dependents[dep_id].append(issue.id)

    seq = count()
    ready: List[Tuple[int, str, int, int]] = []
    for issue in by_id.values():
        if in_degree[issue.id] == 0:
            heapq.heappush(ready, (*ready_key(issue), next(seq), issue.id))

    ordered: List[Issue] = []
    while ready:
        *_, issue_id = heapq.heappop(ready)
        ordered.append(by_id[issue_id])
        freed = []
        for dependent_id in dependents[issue_id]:
            in_degree[dependent_id] -= 1
            if in_degree[dependent_id] == 0:
                freed.append(by_id[dependent_id])
        for issue in sorted(freed, key=ready_key):
            heapq.heappush(ready, (*ready_key(issue), next(seq), issue.id))

    return ordered
