"""Mapping between export rows and Issue objects.

Column positions are resolved once per load into a ``ColumnIndex`` value that
is passed to every row-level call. Save reconciles issues against the rows
that were loaded: matched rows keep every column the board does not model,
rows of removed issues are dropped, and new issues are appended.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from sprintboard.domain.issue import DEFAULT_PROJECT_KEY, Issue, unique_ids
from sprintboard.domain.vocabulary import (
    priority_to_external,
    priority_to_internal,
    status_to_external,
    status_to_internal,
)

COL_SUMMARY = "Summary"
COL_ISSUE_KEY = "Issue key"
COL_ISSUE_ID = "Issue id"
COL_STATUS = "Status"
COL_PRIORITY = "Priority"
COL_ASSIGNEE = "Assignee"
COL_DESCRIPTION = "Description"
COL_ORIGINAL_ESTIMATE = "Original Estimate"
COL_DEPENDS = "Inward issue link (Depends)"
COL_FINISH_TO_START = "Inward issue link (Finish to Start)"

# Header row used when no export has been loaded yet
DEFAULT_HEADERS = [
    "Summary", "Issue key", "Issue id", "Issue Type", "Status", "Project key",
    "Project name", "Project type", "Project lead", "Project description", "Project url",
    "Priority", "Resolution", "Assignee", "Reporter", "Creator", "Created", "Updated",
    "Last Viewed", "Resolved", "Affects Version/s", "Fix Version/s", "Component/s",
    "Due Date", "Votes", "Description",
    COL_DEPENDS, COL_FINISH_TO_START,
]

MISSING = -1
SECONDS_PER_HOUR = 3600
DEPENDENCY_SEPARATOR = "; "

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_DEP_SPLIT = re.compile(r"\s*;\s*")


@dataclass(frozen=True)
class ColumnIndex:
    """Positions of the modelled columns; ``MISSING`` when absent."""

    summary: int = MISSING
    issue_key: int = MISSING
    issue_id: int = MISSING
    status: int = MISSING
    priority: int = MISSING
    assignee: int = MISSING
    description: int = MISSING
    original_estimate: int = MISSING
    depends: int = MISSING
    finish_to_start: int = MISSING

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> "ColumnIndex":
        def find(name: str) -> int:
            try:
                return list(headers).index(name)
            except ValueError:
                return MISSING

        return cls(
            summary=find(COL_SUMMARY),
            issue_key=find(COL_ISSUE_KEY),
            issue_id=find(COL_ISSUE_ID),
            status=find(COL_STATUS),
            priority=find(COL_PRIORITY),
            assignee=find(COL_ASSIGNEE),
            description=find(COL_DESCRIPTION),
            original_estimate=find(COL_ORIGINAL_ESTIMATE),
            depends=find(COL_DEPENDS),
            finish_to_start=find(COL_FINISH_TO_START),
        )


@dataclass
class LoadedIssues:
    issues: List[Issue] = field(default_factory=list)
    project_key: str = DEFAULT_PROJECT_KEY
    next_id: int = 1
    columns: ColumnIndex = field(default_factory=ColumnIndex)
    dropped_rows: int = 0


def get_cell(row: Sequence[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    return row[idx]


def set_cell(row: List[str], idx: int, value) -> None:
    if idx < 0:
        return
    while len(row) <= idx:
        row.append("")
    row[idx] = "" if value is None else str(value)


def parse_int(text: str) -> Optional[int]:
    """Leading-integer parse; ``None`` when the text has no leading digits."""
    m = _INT_PREFIX.match(text or "")
    if not m:
        return None
    return int(m.group(1))


def parse_dependency_field(raw: str) -> List[str]:
    if not raw.strip():
        return []
    return [t.strip() for t in _DEP_SPLIT.split(raw) if t.strip()]


def dependency_tokens(row: Sequence[str], columns: ColumnIndex) -> List[str]:
    """Union of both link columns, deduplicated in first-seen order."""
    tokens = parse_dependency_field(get_cell(row, columns.depends))
    tokens += parse_dependency_field(get_cell(row, columns.finish_to_start))
    return list(dict.fromkeys(tokens))


def row_to_issue(row: Sequence[str], columns: ColumnIndex) -> Optional[Issue]:
    """Build an Issue from one row; ``None`` if the id does not parse."""
    issue_id = parse_int(get_cell(row, columns.issue_id))
    if issue_id is None:
        return None
    seconds = parse_int(get_cell(row, columns.original_estimate))
    return Issue(
        id=issue_id,
        key=get_cell(row, columns.issue_key),
        title=get_cell(row, columns.summary),
        description=get_cell(row, columns.description),
        status=status_to_internal(get_cell(row, columns.status)),
        priority=priority_to_internal(get_cell(row, columns.priority)),
        assignee=get_cell(row, columns.assignee),
        estimate_hours=0.0 if seconds is None else seconds / SECONDS_PER_HOUR,
        depends_on=[],
        sprint=1,
        raw_row=list(row),
    )


def derive_project_key(issues: Sequence[Issue], default: str = DEFAULT_PROJECT_KEY) -> str:
    if not issues or not issues[0].key:
        return default
    head, sep, _ = issues[0].key.rpartition("-")
    return head if sep and head else default


def resolve_dependencies(
    issue: Issue,
    tokens: Sequence[str],
    key_to_id: Dict[str, int],
    known_ids: Set[int],
) -> List[int]:
    """Translate link tokens to ids: key first, then literal id; unknowns dropped."""
    resolved: List[int] = []
    for token in tokens:
        dep_id = key_to_id.get(token)
        if dep_id is None:
            dep_id = parse_int(token)
        if dep_id is None or dep_id not in known_ids or dep_id == issue.id:
            continue
        resolved.append(dep_id)
    return unique_ids(resolved)


def load_issues(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    default_project_key: str = DEFAULT_PROJECT_KEY,
) -> LoadedIssues:
    """Build the issue list from parsed rows."""
    columns = ColumnIndex.from_headers(headers)
    issues: List[Issue] = []
    tokens_by_id: Dict[int, List[str]] = {}
    unparseable = 0
    duplicates = 0

    for row in rows:
        issue = row_to_issue(row, columns)
        if issue is None:
            unparseable += 1
            continue
        if issue.id in tokens_by_id:
            print(f"[WARN] Duplicate Issue id {issue.id} ({issue.key}); keeping first row")
            duplicates += 1
            continue
        tokens_by_id[issue.id] = dependency_tokens(row, columns)
        issues.append(issue)

    if unparseable:
        print(f"[WARN] Skipped {unparseable} rows without a usable Issue id")

    # Second pass once every key is known; a repeated key maps to its last issue
    key_to_id: Dict[str, int] = {}
    for issue in issues:
        if issue.key:
            key_to_id[issue.key] = issue.id
    known_ids = set(tokens_by_id)
    for issue in issues:
        issue.depends_on = resolve_dependencies(issue, tokens_by_id[issue.id], key_to_id, known_ids)

    return LoadedIssues(
        issues=issues,
        project_key=derive_project_key(issues, default_project_key),
        next_id=max((i.id for i in issues), default=0) + 1,
        columns=columns,
        dropped_rows=unparseable + duplicates,
    )


def format_estimate(hours: float) -> str:
    if not hours:
        return ""
    return str(int(math.floor(hours * SECONDS_PER_HOUR + 0.5)))


def issue_to_row(
    issue: Issue,
    base_row: Optional[Sequence[str]],
    columns: ColumnIndex,
    width: int,
) -> List[str]:
    """Write the modelled fields over a copy of ``base_row`` (or a blank row)."""
    row = list(base_row) if base_row is not None else [""] * width
    set_cell(row, columns.summary, issue.title)
    set_cell(row, columns.issue_key, issue.key)
    set_cell(row, columns.issue_id, issue.id)
    set_cell(row, columns.status, status_to_external(issue.status))
    set_cell(row, columns.priority, priority_to_external(issue.priority))
    set_cell(row, columns.assignee, issue.assignee or "")
    set_cell(row, columns.description, issue.description or "")
    set_cell(row, columns.original_estimate, format_estimate(issue.estimate_hours))
    deps = DEPENDENCY_SEPARATOR.join(str(d) for d in unique_ids(issue.depends_on))
    set_cell(row, columns.depends, deps)
    set_cell(row, columns.finish_to_start, deps)
    return row


def merge_rows(
    issues: Sequence[Issue],
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    columns: ColumnIndex,
) -> List[List[str]]:
    """
    Reconcile issues with previously loaded rows.

    Output order is the original row order restricted to issues still present,
    followed by new issues in list order. Rows whose id is gone are omitted.
    A row repeating an earlier id is kept in place with the same issue's
    fields written over it.
    """
    width = len(headers)
    issue_by_id: Dict[int, Issue] = {}
    for issue in issues:
        issue_by_id.setdefault(issue.id, issue)

    merged: List[List[str]] = []
    written = set()
    repeated = 0
    for row in rows:
        row_id = parse_int(get_cell(row, columns.issue_id))
        if row_id is None or row_id not in issue_by_id:
            continue
        if row_id in written:
            repeated += 1
        merged.append(issue_to_row(issue_by_id[row_id], row, columns, width))
        written.add(row_id)
    if repeated:
        print(f"[WARN] {repeated} rows repeat an Issue id; each gets that issue's fields")

    for issue in issues:
        if issue.id in written:
            continue
        merged.append(issue_to_row(issue, None, columns, width))
        written.add(issue.id)
    return merged


def passthrough_fields(issue: Issue, headers: Sequence[str], names: Sequence[str]) -> Dict[str, str]:
    """Values of the named export columns from the issue's original row."""
    row = issue.raw_row or []
    out: Dict[str, str] = {}
    for name in names:
        try:
            idx = list(headers).index(name)
        except ValueError:
            continue
        out[name] = get_cell(row, idx)
    return out
