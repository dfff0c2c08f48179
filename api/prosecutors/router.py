"""
Prosecutor API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.result import respond

from . import service

router = APIRouter()


@router.get("/prosecutors")
async def list_prosecutors(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    result = await service.list_prosecutors(dict(request.query_params), settings=settings)
    return respond(result)


@router.get("/prosecutors/{prosecutor_id}")
async def get_prosecutor(prosecutor_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_prosecutor(prosecutor_id, dict(request.query_params)))


@router.post("/prosecutors")
async def create_prosecutors(request: Request) -> JSONResponse:
    return respond(await service.create_prosecutors(await request.body()))


@router.put("/prosecutors")
async def update_prosecutors(request: Request) -> JSONResponse:
    """
    Update prosecutors. Each item needs `prosecutor_id` and at least one
    other column; a missing prosecutor fails the whole batch with 404.
    """
    return respond(await service.update_prosecutors(await request.body()))
