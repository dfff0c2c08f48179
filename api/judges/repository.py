"""
Judge persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterSpec, integer_field, prefix_field

JUDGE_COLUMNS = ("judge_id", "first_name", "last_name", "age", "court")

FILTERS = FilterSpec(
    table="judges",
    primary_key="judge_id",
    columns=JUDGE_COLUMNS,
    fields=(
        integer_field("id", "judge_id"),
        prefix_field("first-name", "first_name"),
        prefix_field("last-name", "last_name"),
        integer_field("age", "age"),
        prefix_field("court", "court"),
    ),
    sortable=JUDGE_COLUMNS,
)


async def get_judge(judge_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT judge_id, first_name, last_name, age, court
        FROM judges
        WHERE judge_id = $1
        """,
        judge_id,
    )
