"""
Case persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterField, FilterSpec, date_range, integer_field, prefix_field

CASE_COLUMNS = (
    "case_id",
    "description",
    "severity",
    "date_reported",
    "crime_scene_id",
    "judge_id",
    "prosecutor_id",
)

FILTERS = FilterSpec(
    table="cases",
    primary_key="case_id",
    columns=CASE_COLUMNS,
    fields=(
        integer_field("id", "case_id"),
        prefix_field("description", "description"),
        FilterField("severity", "severity"),
        integer_field("crime-scene-id", "crime_scene_id"),
        integer_field("judge-id", "judge_id"),
        integer_field("prosecutor-id", "prosecutor_id"),
        *date_range("date_reported"),
    ),
    sortable=("case_id", "description", "severity", "date_reported"),
)


async def get_case(case_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT case_id, description, severity, date_reported,
               crime_scene_id, judge_id, prosecutor_id
        FROM cases
        WHERE case_id = $1
        """,
        case_id,
    )


async def get_crime_scene_of_case(case_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT s.crime_scene_id, s.building_number, s.street, s.city, s.crime_date
        FROM crime_scenes s
        JOIN cases c ON c.crime_scene_id = s.crime_scene_id
        WHERE c.case_id = $1
        """,
        case_id,
    )
