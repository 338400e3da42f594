"""CSV and JSON export of a decision collection."""

import csv
import io
import json
from collections.abc import Iterable

from decision_memory.schemas.decisions import Decision

CSV_HEADERS = ["ID", "Title", "Date", "Status", "Verdict", "Context", "Author", "Category", "Risk Score"]


def decisions_to_csv(decisions: Iterable[Decision]) -> str:
    """Render decisions as CSV, one row per decision. Empty input gives an empty string."""
    decisions = list(decisions)
    if not decisions:
        return ""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for d in decisions:
        writer.writerow([
            d.id,
            d.title,
            d.made_on.date().isoformat(),
            d.status.value,
            d.decision,
            d.context,
            d.made_by,
            d.category.value,
            d.ai_risk_score or 0,
        ])
    return buffer.getvalue()


def decisions_to_json(decisions: Iterable[Decision]) -> str:
    return json.dumps([d.model_dump(mode="json") for d in decisions], indent=2)
