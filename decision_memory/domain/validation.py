"""Local completeness checks run before a decision is sent to the API."""

from decision_memory.core.exceptions import ValidationError
from decision_memory.schemas.decisions import DecisionDraft

MIN_TITLE_LENGTH = 5
MIN_DECISION_LENGTH = 10
MIN_CONTEXT_LENGTH = 10


def draft_errors(draft: DecisionDraft) -> list[str]:
    """Return human-readable problems with a draft; empty when it can be submitted."""
    errors: list[str] = []

    if len(draft.title.strip()) < MIN_TITLE_LENGTH:
        errors.append("Title must be at least 5 characters")
    if len(draft.decision.strip()) < MIN_DECISION_LENGTH:
        errors.append("Please describe the decision in more detail")
    if len(draft.context.strip()) < MIN_CONTEXT_LENGTH:
        errors.append("Context must be at least 10 characters")

    if not draft.alternatives:
        errors.append("At least one alternative must be documented")
    for index, alternative in enumerate(draft.alternatives):
        if not alternative.name.strip():
            errors.append(f"Alternative {index + 1}: name is required")
        if not alternative.why_rejected.strip():
            errors.append(f"Alternative {index + 1}: reason for rejection is required")

    if not draft.assumptions:
        errors.append("At least one assumption is required")
    elif any(not a.strip() for a in draft.assumptions):
        errors.append("Assumption cannot be empty")

    if not draft.success_criteria:
        errors.append("At least one success criterion is required")
    elif any(not c.strip() for c in draft.success_criteria):
        errors.append("Criterion cannot be empty")

    return errors


def validate_draft(draft: DecisionDraft) -> None:
    """Raise ValidationError listing every problem with the draft."""
    errors = draft_errors(draft)
    if errors:
        raise ValidationError(f"Decision is incomplete: {errors[0]}", errors=errors)
