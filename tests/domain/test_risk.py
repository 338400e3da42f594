"""Tests for the heuristic risk score."""
import pytest

from decision_memory.domain.risk import HEDGE_WORDS, RiskLevel, assess_decision_risk, assess_risk, risk_level

pytestmark = pytest.mark.unit

CONFIDENT = "We will ship the billing service on Postgres this quarter with a dedicated owner."


def test_confident_complete_decision_scores_zero():
    result = assess_risk(CONFIDENT, alternatives_count=2, assumptions_count=1)
    assert result.score == 0
    assert result.level == RiskLevel.LOW
    assert result.hedge_words == []
    assert result.feedback == []


def test_repeated_hedge_word_counts_once():
    text = "maybe maybe maybe " + CONFIDENT
    assert assess_risk(text, alternatives_count=2, assumptions_count=1).score == 10


def test_each_distinct_hedge_word_adds_ten():
    text = "Perhaps we should probably do this. " + CONFIDENT
    result = assess_risk(text, alternatives_count=2, assumptions_count=1)
    assert result.score == 20
    assert result.hedge_words == ["perhaps", "probably"]


def test_hedge_words_match_inside_longer_words():
    # "try" inside "country"
    text = "Expand to a second country with a local partner and a sales team of five."
    result = assess_risk(text, alternatives_count=2, assumptions_count=1)
    assert "try" in result.hedge_words


def test_structural_gaps_add_points():
    result = assess_risk("Short.", alternatives_count=0, assumptions_count=0)
    assert result.score == 20 + 30 + 25
    assert len(result.feedback) == 3
    assert result.level == RiskLevel.HIGH


def test_score_is_clamped_to_100():
    text = " ".join(HEDGE_WORDS * 5)
    result = assess_risk(text, alternatives_count=0, assumptions_count=0)
    assert result.score == 100
    assert result.level == RiskLevel.CRITICAL


@pytest.mark.parametrize("text", ["", "x", "maybe " * 500, "a" * 10_000])
def test_score_always_within_bounds(text):
    for alternatives in (0, 1, 5):
        for assumptions in (0, 3):
            score = assess_risk(text, alternatives, assumptions).score
            assert 0 <= score <= 100


@pytest.mark.parametrize(
    "score,level",
    [(0, RiskLevel.LOW), (19, RiskLevel.LOW), (20, RiskLevel.MODERATE), (49, RiskLevel.MODERATE),
     (50, RiskLevel.HIGH), (79, RiskLevel.HIGH), (80, RiskLevel.CRITICAL), (100, RiskLevel.CRITICAL)],
)
def test_risk_level_thresholds(score, level):
    assert risk_level(score) == level


def test_assess_decision_risk_uses_record_fields(complete_draft):
    # One alternative only; text is long and confident
    result = assess_decision_risk(complete_draft)
    assert result.score == 30
    assert result.level == RiskLevel.MODERATE
