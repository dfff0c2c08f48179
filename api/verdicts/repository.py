"""
Verdict persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterSpec, date_range, integer_field, prefix_field

VERDICT_COLUMNS = ("verdict_id", "case_id", "name", "description", "verdict_date", "sentence_years")

FILTERS = FilterSpec(
    table="verdicts",
    primary_key="verdict_id",
    columns=VERDICT_COLUMNS,
    fields=(
        integer_field("id", "verdict_id"),
        prefix_field("name", "name"),
        integer_field("case-id", "case_id"),
        *date_range("verdict_date"),
    ),
    sortable=("verdict_id", "name", "verdict_date", "sentence_years"),
)


async def get_verdict(verdict_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT verdict_id, case_id, name, description, verdict_date, sentence_years
        FROM verdicts
        WHERE verdict_id = $1
        """,
        verdict_id,
    )
