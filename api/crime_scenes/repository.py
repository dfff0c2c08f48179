"""
Crime scene persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterSpec, date_range, integer_field, prefix_field

CRIME_SCENE_COLUMNS = ("crime_scene_id", "building_number", "street", "city", "crime_date")

FILTERS = FilterSpec(
    table="crime_scenes",
    primary_key="crime_scene_id",
    columns=CRIME_SCENE_COLUMNS,
    fields=(
        integer_field("id", "crime_scene_id"),
        prefix_field("street", "street"),
        prefix_field("city", "city"),
        *date_range("crime_date"),
    ),
    sortable=("crime_scene_id", "street", "city", "crime_date"),
)


async def get_crime_scene(crime_scene_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT crime_scene_id, building_number, street, city, crime_date
        FROM crime_scenes
        WHERE crime_scene_id = $1
        """,
        crime_scene_id,
    )
