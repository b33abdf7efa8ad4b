import pytest

from sprintboard.domain.issue import Issue
from sprintboard.services.calendar import format_window, sprint_window
from sprintboard.validator import plan_frame, sprint_load, summarize_plan, unscheduled_issues, validate_plan


def _planned(issue_id, key, sprint, assignee="", hours=0.0, deps=None):
    return Issue(id=issue_id, key=key, assignee=assignee, estimate_hours=hours,
                 depends_on=list(deps or []), sprint=sprint)


def test_dependency_violation_detected():
    a = _planned(1, "A", 2)
    b = _planned(2, "B", 1, deps=[1])
    with pytest.raises(ValueError) as e:
        validate_plan([a, b], {})
    assert "dependency" in str(e.value).lower()


def test_capacity_violation_detected():
    a = _planned(1, "A", 1, "Alice", 50)
    b = _planned(2, "B", 1, "Alice", 40)
    with pytest.raises(ValueError) as e:
        validate_plan([a, b], {"Alice": 80})
    assert "Alice" in str(e.value)


def test_ceiling_placements_are_exempt():
    a = _planned(1, "A", 100, "Alice", 500)
    validate_plan([a], {"Alice": 80}, ceiling_ids=[1])


def test_sprint_load_groups_by_sprint_and_assignee():
    issues = [
        _planned(1, "A", 1, "Alice", 10),
        _planned(2, "B", 1, "Alice", 15),
        _planned(3, "C", 2, "Bob", 5),
        _planned(4, "D", 1, "", 99),
    ]
    load = sprint_load(issues, {"Bob": 40})
    assert list(load["assignee"]) == ["Alice", "Bob"]
    assert list(load["hours"]) == [25.0, 5.0]
    assert list(load["capacity"]) == [80.0, 40.0]


def test_plan_frame_columns():
    df = plan_frame([_planned(1, "A", 3, "Alice", 2)])
    assert list(df.columns) == ["id", "key", "priority", "assignee", "estimate_hours", "sprint"]
    assert int(df.loc[0, "sprint"]) == 3


def test_unscheduled_issues():
    a, b = _planned(1, "A", 1), _planned(2, "B", 1)
    assert unscheduled_issues([a, b], [a]) == [b]


def test_sprint_window():
    start, end = sprint_window("2026-02-15", 1, 14)
    assert start.strftime("%Y-%m-%d") == "2026-02-15"
    assert end.strftime("%Y-%m-%d") == "2026-02-28"
    assert format_window("2026-02-15", 2, 14) == "2026-03-01 .. 2026-03-14"
    with pytest.raises(ValueError):
        sprint_window("2026-02-15", 0)


def test_summarize_plan():
    issues = [_planned(1, "SB-1", 1, "Alice", 8), _planned(2, "SB-2", 2)]
    text = summarize_plan(issues, {}, "2026-02-15")
    assert "Sprint 1 (2026-02-15 .. 2026-02-28): 1 issues [SB-1]" in text
    assert "Sprint 2" in text
    assert "Alice" in text
    assert summarize_plan([], {}, "2026-02-15") == "No planned issues."
