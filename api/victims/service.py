"""
Victim handlers.
"""

from __future__ import annotations

from collections.abc import Mapping

from core.config import Settings
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query, storage_guard
from core.result import returns_result

from . import repository


@returns_result
async def list_victims(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("victims")


@returns_result
async def get_victim(raw_id: str, params: Mapping[str, str]) -> dict:
    """
    A victim together with the prosecutor handling them (null when none is
    assigned).
    """
    victim_id = parse_id(raw_id, name="victim id")
    reject_query(params)

    victim = await fetch_by_id(
        repository.get_victim,
        victim_id,
        action="get:victims",
        detail=f"Victim {victim_id} not found.",
    )
    with storage_guard("get:victim_prosecutor"):
        prosecutor = await repository.get_prosecutor_of_victim(victim_id)

    return {"victim": victim, "prosecutor": prosecutor}
