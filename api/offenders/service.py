"""
Offender handlers.

Scope:
- filtered / paginated offender listing
- offender by id, plus its defendant record and its case
- batch create (all items validated, then inserted in one transaction)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from fastapi import status

from core.config import Settings
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query, require_row, storage_guard
from core.payloads import batch_items, require_references, validate_items
from core.result import Ok, returns_result

from . import repository, schemas

logger = logging.getLogger(__name__)


@returns_result
async def list_offenders(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("offenders")


async def _require_offender(offender_id: int) -> dict:
    return await fetch_by_id(
        repository.get_offender,
        offender_id,
        action="get:offenders",
        detail=f"Offender {offender_id} not found.",
    )


@returns_result
async def get_offender(raw_id: str, params: Mapping[str, str]) -> dict:
    offender_id = parse_id(raw_id, name="offender id")
    reject_query(params)
    return await _require_offender(offender_id)


@returns_result
async def get_defendant_of_offender(raw_id: str, params: Mapping[str, str]) -> dict:
    offender_id = parse_id(raw_id, name="offender id")
    reject_query(params)
    offender = await _require_offender(offender_id)

    with storage_guard("get:offender_defendant"):
        defendant = await repository.get_defendant_of_offender(offender_id)
    defendant = require_row(defendant, detail=f"No defendant recorded for offender {offender_id}.")
    return {"offender": offender, "defendant": defendant}


@returns_result
async def get_case_of_offender(raw_id: str, params: Mapping[str, str]) -> dict:
    offender_id = parse_id(raw_id, name="offender id")
    reject_query(params)
    offender = await _require_offender(offender_id)

    with storage_guard("get:offender_case"):
        case = await repository.get_case_of_offender(offender_id)
    case = require_row(case, detail=f"No case recorded for offender {offender_id}.")
    return {"offender": offender, "case": case}


@returns_result
async def create_offenders(raw_body: bytes) -> Ok:
    items = validate_items(schemas.OffenderCreate, batch_items(raw_body))

    with storage_guard("create:offenders"):
        await require_references(
            "defendants",
            "defendant_id",
            (item.defendant_id for item in items),
            label="defendant",
        )
        await require_references(
            "cases",
            "case_id",
            (item.case_id for item in items if item.case_id is not None),
            label="case",
        )
        rows = await repository.insert_offenders(items)

    logger.info("offenders_created count=%s ids=%s", len(rows), [row["offender_id"] for row in rows])
    return Ok({"offenders": rows, "count": len(rows)}, status_code=status.HTTP_201_CREATED)
