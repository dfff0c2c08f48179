"""
Crime scene API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.result import respond

from . import service

router = APIRouter()


@router.get("/crime_scenes")
async def list_crime_scenes(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    result = await service.list_crime_scenes(dict(request.query_params), settings=settings)
    return respond(result)


@router.get("/crime_scenes/{crime_scene_id}")
async def get_crime_scene(crime_scene_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_crime_scene(crime_scene_id, dict(request.query_params)))
