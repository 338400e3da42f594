"""Heuristic pre-mortem risk scoring.

Scores the written decision for hedging language and structural gaps.
Deterministic, no I/O.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from decision_memory.schemas.decisions import Decision, DecisionDraft

# Matched case-insensitively as substrings of the combined decision + context text.
HEDGE_WORDS: tuple[str, ...] = (
    "maybe",
    "perhaps",
    "guess",
    "hope",
    "probably",
    "likely",
    "assume",
    "think",
    "might",
    "could",
    "try",
    "hopefully",
    "believe",
    "feeling",
    "pretty sure",
)

HEDGE_WORD_POINTS = 10
BRIEF_TEXT_LENGTH = 50
BRIEF_TEXT_POINTS = 20
FEW_ALTERNATIVES_POINTS = 30
NO_ASSUMPTIONS_POINTS = 25


class RiskLevel(StrEnum):
    LOW = "LOW RISK"
    MODERATE = "MODERATE"
    HIGH = "HIGH RISK"
    CRITICAL = "CRITICAL"


@dataclass
class RiskAssessment:
    score: int
    level: RiskLevel
    hedge_words: list[str] = field(default_factory=list)
    feedback: list[str] = field(default_factory=list)


def risk_level(score: int) -> RiskLevel:
    if score < 20:
        return RiskLevel.LOW
    if score < 50:
        return RiskLevel.MODERATE
    if score < 80:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def assess_risk(text: str, alternatives_count: int, assumptions_count: int) -> RiskAssessment:
    """Score a decision's text and structure, clamped to 0-100.

    Args:
        text: Combined decision + context text
        alternatives_count: Number of recorded alternatives
        assumptions_count: Number of recorded assumptions

    Rules:
        - +10 per distinct hedge word present (repetition does not add)
        - +20 if the text is shorter than 50 characters
        - +30 if fewer than 2 alternatives were considered
        - +25 if no assumptions were written down
    """
    lowered = text.lower()
    matches = [word for word in HEDGE_WORDS if word in lowered]
    score = HEDGE_WORD_POINTS * len(matches)
    feedback: list[str] = []

    if len(text) < BRIEF_TEXT_LENGTH:
        score += BRIEF_TEXT_POINTS
        feedback.append("Description is too brief. Elaborate to uncover hidden risks.")

    if alternatives_count < 2:
        score += FEW_ALTERNATIVES_POINTS
        feedback.append("Tunnel vision detected. Consider at least 2 alternatives.")

    if assumptions_count == 0:
        score += NO_ASSUMPTIONS_POINTS
        feedback.append("Zero assumptions logged. This implies certainty, which is risky.")

    score = max(0, min(100, score))
    return RiskAssessment(score=score, level=risk_level(score), hedge_words=matches, feedback=feedback)


def assess_decision_risk(record: Decision | DecisionDraft) -> RiskAssessment:
    """assess_risk over a decision or draft's own fields."""
    return assess_risk(
        f"{record.decision} {record.context}".strip(),
        alternatives_count=len(record.alternatives),
        assumptions_count=len([a for a in record.assumptions if a.strip()]),
    )
