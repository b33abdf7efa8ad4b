"""Tests for service layer (capacity, board state helpers)."""

from sprintboard.domain.issue import BoardState, Issue
from sprintboard.services.capacity import CapacityLedger, capacity_for


def test_capacity_for_defaults():
    assert capacity_for("Alice", {"Alice": 60}) == 60.0
    assert capacity_for("Bob", {"Alice": 60}) == 80.0
    assert capacity_for("Bob", {}, default=32) == 32.0
    assert capacity_for("Zero", {"Zero": 0}) == 0.0


def test_ledger_is_lazy_and_per_sprint():
    ledger = CapacityLedger({"Alice": 40})
    assert ledger.remaining(1, "Alice") == 40.0
    ledger.consume(1, "Alice", 30)
    assert ledger.remaining(1, "Alice") == 10.0
    assert not ledger.fits(1, "Alice", 11)
    assert ledger.fits(1, "Alice", 10)
    # other sprints start full
    assert ledger.remaining(2, "Alice") == 40.0
    ledger.consume(3, "Carol", 5)
    assert ledger.remaining(3, "Carol") == 75.0


def test_board_state_next_id_above_max():
    state = BoardState(next_id=1, issues=[Issue(id=7)])
    assert state.next_id == 8
    assert state.allocate_id() == 8
    assert state.next_id == 9


def test_add_issue_uses_project_key():
    state = BoardState(project_key="OPS")
    first = state.add_issue("First")
    second = state.add_issue("Second", depends_on=[first.id, first.id, 42])
    assert (first.id, first.key) == (1, "OPS-1")
    assert second.key == "OPS-2"
    assert second.depends_on == [1]
    assert state.issue_by_key("OPS-2") is second


def test_remove_issue_strips_links():
    state = BoardState(issues=[Issue(id=1), Issue(id=2, depends_on=[1]), Issue(id=3, depends_on=[2, 1])])
    assert state.remove_issue(1)
    assert [i.id for i in state.issues] == [2, 3]
    assert state.get_issue(3).depends_on == [2]
    assert state.get_issue(2).depends_on == []
    assert not state.remove_issue(99)
