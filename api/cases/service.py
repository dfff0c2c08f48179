"""
Case handlers.
"""

from __future__ import annotations

from collections.abc import Mapping

from core.config import Settings
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query, storage_guard
from core.result import returns_result

from . import repository


@returns_result
async def list_cases(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("cases")


@returns_result
async def get_case(raw_id: str, params: Mapping[str, str]) -> dict:
    case_id = parse_id(raw_id, name="case id")
    reject_query(params)

    case = await fetch_by_id(
        repository.get_case,
        case_id,
        action="get:cases",
        detail=f"Case {case_id} not found.",
    )
    with storage_guard("get:case_crime_scene"):
        crime_scene = await repository.get_crime_scene_of_case(case_id)

    return {"case": case, "crime_scene": crime_scene}
