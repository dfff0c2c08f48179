"""
Offender persistence (raw SQL).

Offenders reference the defendant record they were charged as and,
optionally, the case they belong to.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.filters import FilterField, FilterSpec, date_range, integer_field, prefix_field, time_range

from . import schemas

OFFENDER_COLUMNS = (
    "offender_id",
    "first_name",
    "last_name",
    "age",
    "marital_status",
    "arrest_date",
    "arrest_time",
    "defendant_id",
    "case_id",
)

FILTERS = FilterSpec(
    table="offenders",
    primary_key="offender_id",
    columns=OFFENDER_COLUMNS,
    fields=(
        integer_field("id", "offender_id"),
        prefix_field("first-name", "first_name"),
        prefix_field("last-name", "last_name"),
        integer_field("age", "age"),
        FilterField("marital-status", "marital_status"),
        *date_range("arrest_date"),
        *time_range("arrest_time"),
        integer_field("defendant-id", "defendant_id"),
        integer_field("case-id", "case_id"),
    ),
    sortable=(
        "offender_id",
        "first_name",
        "last_name",
        "age",
        "marital_status",
        "arrest_date",
        "arrest_time",
    ),
)


async def get_offender(offender_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT offender_id, first_name, last_name, age, marital_status,
               arrest_date, arrest_time, defendant_id, case_id
        FROM offenders
        WHERE offender_id = $1
        """,
        offender_id,
    )


async def get_defendant_of_offender(offender_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT d.defendant_id, d.first_name, d.last_name, d.age, d.plea
        FROM defendants d
        JOIN offenders o ON o.defendant_id = d.defendant_id
        WHERE o.offender_id = $1
        """,
        offender_id,
    )


async def get_case_of_offender(offender_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT c.case_id, c.description, c.severity, c.date_reported,
               c.crime_scene_id, c.judge_id, c.prosecutor_id
        FROM cases c
        JOIN offenders o ON o.case_id = c.case_id
        WHERE o.offender_id = $1
        """,
        offender_id,
    )


async def insert_offenders(items: list[schemas.OffenderCreate]) -> list[dict[str, Any]]:
    """
    Insert every offender in one transaction; all rows or none are written.
    """
    created: list[dict[str, Any]] = []
    async with db.transaction() as conn:
        for item in items:
            row = await conn.fetchrow(
                """
                INSERT INTO offenders (
                    first_name, last_name, age, marital_status,
                    arrest_date, arrest_time, defendant_id, case_id
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                RETURNING offender_id, first_name, last_name, age, marital_status,
                          arrest_date, arrest_time, defendant_id, case_id
                """,
                item.first_name,
                item.last_name,
                item.age,
                item.marital_status,
                item.arrest_date,
                item.arrest_time,
                item.defendant_id,
                item.case_id,
            )
            if row is None:
                raise db.StorageError("INSERT INTO offenders returned no row.")
            created.append(dict(row))
    return created
