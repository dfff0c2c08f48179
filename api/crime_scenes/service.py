"""
Crime scene handlers.
"""

from __future__ import annotations

from collections.abc import Mapping

from core.config import Settings
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query
from core.result import returns_result

from . import repository


@returns_result
async def list_crime_scenes(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("crime_scenes")


@returns_result
async def get_crime_scene(raw_id: str, params: Mapping[str, str]) -> dict:
    crime_scene_id = parse_id(raw_id, name="crime scene id")
    reject_query(params)
    return await fetch_by_id(
        repository.get_crime_scene,
        crime_scene_id,
        action="get:crime_scenes",
        detail=f"Crime scene {crime_scene_id} not found.",
    )
