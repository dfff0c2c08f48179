"""
Prosecutor persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.errors import ApiError, ErrorKind
from core.filters import FilterSpec, integer_field, prefix_field

from . import schemas

PROSECUTOR_COLUMNS = ("prosecutor_id", "first_name", "last_name", "age", "specialization")

FILTERS = FilterSpec(
    table="prosecutors",
    primary_key="prosecutor_id",
    columns=PROSECUTOR_COLUMNS,
    fields=(
        integer_field("id", "prosecutor_id"),
        prefix_field("first-name", "first_name"),
        prefix_field("last-name", "last_name"),
        integer_field("age", "age"),
        prefix_field("specialization", "specialization"),
    ),
    sortable=PROSECUTOR_COLUMNS,
)

_RETURNING = "RETURNING " + ", ".join(PROSECUTOR_COLUMNS)


async def get_prosecutor(prosecutor_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT prosecutor_id, first_name, last_name, age, specialization
        FROM prosecutors
        WHERE prosecutor_id = $1
        """,
        prosecutor_id,
    )


async def prosecutor_exists(prosecutor_id: int) -> bool:
    if not db.fits_integer(prosecutor_id):
        return False
    return await db.exists("prosecutors", {"prosecutor_id": prosecutor_id})


async def insert_prosecutors(items: list[schemas.ProsecutorCreate]) -> list[dict[str, Any]]:
    created: list[dict[str, Any]] = []
    async with db.transaction() as conn:
        for item in items:
            row = await conn.fetchrow(
                f"""
                INSERT INTO prosecutors (first_name, last_name, age, specialization)
                VALUES ($1, $2, $3, $4)
                {_RETURNING}
                """,
                item.first_name,
                item.last_name,
                item.age,
                item.specialization,
            )
            if row is None:
                raise db.StorageError("INSERT INTO prosecutors returned no row.")
            created.append(dict(row))
    return created


async def update_prosecutors(items: list[schemas.ProsecutorUpdate]) -> list[dict[str, Any]]:
    """
    Apply each item's changed columns in one transaction.

    Column names come from the ProsecutorUpdate schema (unknown keys are
    rejected there), values are bound.
    """
    updated: list[dict[str, Any]] = []
    async with db.transaction() as conn:
        for item in items:
            changes = item.changes()
            assignments = ", ".join(
                f"{column} = ${position}" for position, column in enumerate(changes, start=2)
            )
            row = await conn.fetchrow(
                f"UPDATE prosecutors SET {assignments} WHERE prosecutor_id = $1 {_RETURNING}",
                item.prosecutor_id,
                *changes.values(),
            )
            if row is None:
                # Raising inside the transaction rolls back the earlier items.
                raise ApiError(
                    ErrorKind.NOT_FOUND,
                    f"Either prosecutor {item.prosecutor_id} does not exist, or it has been deleted.",
                )
            updated.append(dict(row))
    return updated
