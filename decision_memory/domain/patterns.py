"""Failure pattern detection.

Warns when an in-progress decision looks like one that previously failed or
was reversed, by keyword overlap of title + context.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from decision_memory.schemas.decisions import Decision, DecisionStatus

STOPWORDS = frozenset({"the", "and", "for", "with", "this", "that", "from", "migration", "update", "new"})

MIN_TITLE_LENGTH = 5
MIN_OVERLAP = 2

_FAILED_STATUSES = (DecisionStatus.FAILED, DecisionStatus.REVERSED)
_WORD_SPLIT = re.compile(r"\W+")


@dataclass
class PatternMatch:
    matched_decision_id: str
    matched_title: str
    reason: str
    score: int


def tokenize(text: str) -> set[str]:
    """Lowercase keyword set: tokens longer than 3 chars, stopwords removed."""
    return {
        word
        for word in _WORD_SPLIT.split(text.lower())
        if len(word) > 3 and word not in STOPWORDS
    }


def detect_failure_pattern(
    title: str,
    context: str,
    past_decisions: Iterable[Decision],
) -> PatternMatch | None:
    """Find the failed/reversed decision sharing the most keywords.

    Args:
        title: Title of the decision being written
        context: Context text of the decision being written
        past_decisions: Cached decisions; only FAILED and REVERSED ones are compared

    Returns:
        Best match with at least 2 shared keywords, or None. On equal overlap
        the first decision in iteration order wins.
    """
    if not title or len(title) < MIN_TITLE_LENGTH:
        return None

    current_words = tokenize(f"{title} {context}")
    best: PatternMatch | None = None
    best_overlap = 0

    for past in past_decisions:
        if past.status not in _FAILED_STATUSES:
            continue

        overlap = len(current_words & tokenize(f"{past.title} {past.context}"))
        if overlap >= MIN_OVERLAP and overlap > best_overlap:
            best_overlap = overlap
            best = PatternMatch(
                matched_decision_id=past.id,
                matched_title=past.title,
                reason=f"Matches {overlap} keywords from a previous failed attempt.",
                score=overlap,
            )

    return best
