"""
Verdict API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.result import respond

from . import service

router = APIRouter()


@router.get("/verdicts")
async def list_verdicts(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    result = await service.list_verdicts(dict(request.query_params), settings=settings)
    return respond(result)


@router.get("/verdicts/{verdict_id}")
async def get_verdict(verdict_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_verdict(verdict_id, dict(request.query_params)))
