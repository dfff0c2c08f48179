"""
Verdict handlers.
"""

from __future__ import annotations

from collections.abc import Mapping

from core.config import Settings
from core.handlers import fetch_by_id, list_collection, parse_id, reject_query
from core.result import returns_result

from . import repository


@returns_result
async def list_verdicts(params: Mapping[str, str], *, settings: Settings) -> dict:
    page = await list_collection(repository.FILTERS, params, settings=settings)
    return page.to_payload("verdicts")


@returns_result
async def get_verdict(raw_id: str, params: Mapping[str, str]) -> dict:
    verdict_id = parse_id(raw_id, name="verdict id")
    reject_query(params)
    return await fetch_by_id(
        repository.get_verdict,
        verdict_id,
        action="get:verdicts",
        detail=f"Verdict {verdict_id} not found.",
    )
