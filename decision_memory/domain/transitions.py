"""Decision status transitions.

Pure domain functions. Status only moves forward:
DRAFT -> ACTIVE -> {SUCCEEDED | FAILED | REVERSED}.
"""

from decision_memory.core.exceptions import TransitionError
from decision_memory.schemas.decisions import DecisionStatus

TRANSITIONS: dict[DecisionStatus, list[DecisionStatus]] = {
    DecisionStatus.DRAFT: [DecisionStatus.ACTIVE],
    DecisionStatus.ACTIVE: [
        DecisionStatus.SUCCEEDED,
        DecisionStatus.FAILED,
        DecisionStatus.REVERSED,
    ],
    DecisionStatus.SUCCEEDED: [],  # Terminal state
    DecisionStatus.FAILED: [],  # Terminal state
    DecisionStatus.REVERSED: [],  # Terminal state
}

TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)


def is_terminal(status: DecisionStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: DecisionStatus, requested: DecisionStatus) -> bool:
    """True when ``requested`` is a valid forward step from ``current``."""
    return requested in TRANSITIONS.get(current, [])


def check_transition(current: DecisionStatus, requested: DecisionStatus) -> None:
    """Raise TransitionError unless ``current -> requested`` is allowed."""
    if not can_transition(current, requested):
        raise TransitionError(current.value, requested.value)
