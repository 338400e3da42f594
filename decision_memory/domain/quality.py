"""Decision write-up completeness score."""

from dataclasses import dataclass, field

from decision_memory.schemas.decisions import Decision, DecisionDraft

SECTION_POINTS = 20


@dataclass
class QualityReport:
    score: int
    grade: str
    checks: dict[str, bool] = field(default_factory=dict)


def quality_grade(score: int) -> str:
    if score >= 100:
        return "A+"
    if score >= 80:
        return "A"
    if score >= 60:
        return "B"
    if score >= 40:
        return "C"
    return "D"


def score_quality(record: Decision | DecisionDraft) -> QualityReport:
    """Award 20 points for each of the five populated sections.

    Sections: core choice (title > 5 chars and decision > 10 chars), context
    (> 20 chars), alternatives, assumptions and success criteria (first entry
    non-empty).
    """
    checks = {
        "Core Choice": len(record.title) > 5 and len(record.decision) > 10,
        "Context": len(record.context) > 20,
        "Alternatives": bool(record.alternatives) and bool(record.alternatives[0].name),
        "Assumptions": bool(record.assumptions) and bool(record.assumptions[0]),
        "Success Metrics": bool(record.success_criteria) and bool(record.success_criteria[0]),
    }
    score = SECTION_POINTS * sum(checks.values())
    return QualityReport(score=score, grade=quality_grade(score), checks=checks)
