"""
Prosecutor handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from fastapi import status

from core.config import Settings
from core.errors import ApiError, ErrorKind
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query, storage_guard
from core.payloads import batch_items, validate_items
from core.result import Ok, returns_result

from . import repository, schemas

logger = logging.getLogger(__name__)


@returns_result
async def list_prosecutors(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("prosecutors")


@returns_result
async def get_prosecutor(raw_id: str, params: Mapping[str, str]) -> dict:
    prosecutor_id = parse_id(raw_id, name="prosecutor id")
    reject_query(params)
    return await fetch_by_id(
        repository.get_prosecutor,
        prosecutor_id,
        action="get:prosecutors",
        detail=f"Prosecutor {prosecutor_id} not found.",
    )


@returns_result
async def create_prosecutors(raw_body: bytes) -> Ok:
    items = validate_items(schemas.ProsecutorCreate, batch_items(raw_body))

    with storage_guard("create:prosecutors"):
        rows = await repository.insert_prosecutors(items)

    logger.info("prosecutors_created count=%s ids=%s", len(rows), [row["prosecutor_id"] for row in rows])
    return Ok({"prosecutors": rows, "count": len(rows)}, status_code=status.HTTP_201_CREATED)


@returns_result
async def update_prosecutors(raw_body: bytes) -> dict:
    items = validate_items(schemas.ProsecutorUpdate, batch_items(raw_body))

    with storage_guard("update:prosecutors"):
        for prosecutor_id in sorted({item.prosecutor_id for item in items}):
            if not await repository.prosecutor_exists(prosecutor_id):
                raise ApiError(
                    ErrorKind.NOT_FOUND,
                    f"Either prosecutor {prosecutor_id} does not exist, or it has been deleted.",
                )
        rows = await repository.update_prosecutors(items)

    logger.info("prosecutors_updated count=%s ids=%s", len(rows), [row["prosecutor_id"] for row in rows])
    return {"prosecutors": rows, "count": len(rows)}
