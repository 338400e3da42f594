"""Tests for decision status transitions."""
import pytest

from decision_memory.core.exceptions import TransitionError
from decision_memory.domain.transitions import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    can_transition,
    check_transition,
    is_terminal,
)
from decision_memory.schemas.decisions import DecisionStatus

pytestmark = pytest.mark.unit


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {DecisionStatus.SUCCEEDED, DecisionStatus.FAILED, DecisionStatus.REVERSED}
    assert not is_terminal(DecisionStatus.ACTIVE)


@pytest.mark.parametrize("target", [DecisionStatus.SUCCEEDED, DecisionStatus.FAILED, DecisionStatus.REVERSED])
def test_active_can_be_reviewed(target):
    assert can_transition(DecisionStatus.ACTIVE, target)
    check_transition(DecisionStatus.ACTIVE, target)


def test_draft_moves_to_active_only():
    assert can_transition(DecisionStatus.DRAFT, DecisionStatus.ACTIVE)
    assert not can_transition(DecisionStatus.DRAFT, DecisionStatus.SUCCEEDED)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES))
def test_terminal_statuses_cannot_move(terminal):
    for target in DecisionStatus:
        assert not can_transition(terminal, target)


def test_succeeded_to_active_raises():
    with pytest.raises(TransitionError, match="Cannot transition decision from SUCCEEDED to ACTIVE"):
        check_transition(DecisionStatus.SUCCEEDED, DecisionStatus.ACTIVE)


def test_same_status_is_not_a_transition():
    for status in TRANSITIONS:
        assert not can_transition(status, status)
