"""
Victim persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterField, FilterSpec, integer_field, prefix_field

VICTIM_COLUMNS = ("victim_id", "first_name", "last_name", "age", "marital_status", "prosecutor_id")

FILTERS = FilterSpec(
    table="victims",
    primary_key="victim_id",
    columns=VICTIM_COLUMNS,
    fields=(
        integer_field("id", "victim_id"),
        prefix_field("first-name", "first_name"),
        prefix_field("last-name", "last_name"),
        integer_field("age", "age"),
        FilterField("marital-status", "marital_status"),
        integer_field("prosecutor-id", "prosecutor_id"),
    ),
    sortable=("victim_id", "first_name", "last_name", "age", "marital_status"),
)


async def get_victim(victim_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT victim_id, first_name, last_name, age, marital_status, prosecutor_id
        FROM victims
        WHERE victim_id = $1
        """,
        victim_id,
    )


async def get_prosecutor_of_victim(victim_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT p.prosecutor_id, p.first_name, p.last_name, p.age, p.specialization
        FROM prosecutors p
        JOIN victims v ON v.prosecutor_id = p.prosecutor_id
        WHERE v.victim_id = $1
        """,
        victim_id,
    )
