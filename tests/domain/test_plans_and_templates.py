"""Tests for plan limits and decision templates."""
import pytest

from decision_memory.domain.plans import decisions_remaining, is_feature_locked
from decision_memory.domain.templates import BLANK_TEMPLATE_ID, DECISION_TEMPLATES, get_template
from decision_memory.domain.validation import draft_errors
from decision_memory.schemas.decisions import Category
from decision_memory.schemas.workspaces import PlanTier

pytestmark = pytest.mark.unit


def test_free_plan_locks_ai_insights():
    assert is_feature_locked(PlanTier.FREE, "ai_insights")
    assert not is_feature_locked(PlanTier.PRO, "ai_insights")


def test_unknown_plan_feature_raises():
    with pytest.raises(KeyError):
        is_feature_locked(PlanTier.FREE, "teleportation")


def test_decisions_remaining_on_free_plan():
    assert decisions_remaining(PlanTier.FREE, 10) == 40
    assert decisions_remaining(PlanTier.FREE, 75) == 0


@pytest.mark.parametrize("tier", [PlanTier.PRO, PlanTier.TEAM, PlanTier.ENTERPRISE])
def test_paid_plans_are_unlimited(tier):
    assert decisions_remaining(tier, 10_000) is None


def test_get_template_returns_prefill():
    draft = get_template("hiring")
    assert draft.category == Category.HIRING
    assert len(draft.alternatives) == 3


def test_get_template_returns_independent_copy():
    draft = get_template("pricing")
    draft.assumptions.append("Mutated")
    draft.alternatives[0].name = "Mutated"

    fresh = get_template("pricing")
    assert "Mutated" not in fresh.assumptions
    assert fresh.alternatives[0].name != "Mutated"


def test_get_template_unknown_id_raises():
    with pytest.raises(ValueError, match="Unknown template"):
        get_template("nope")


def test_blank_template_is_not_submittable():
    assert draft_errors(get_template(BLANK_TEMPLATE_ID))


@pytest.mark.parametrize("template_id", sorted(set(DECISION_TEMPLATES) - {BLANK_TEMPLATE_ID}))
def test_filled_templates_pass_validation(template_id):
    assert draft_errors(get_template(template_id)) == []
