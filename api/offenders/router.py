"""
Offender API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.result import respond

from . import service

router = APIRouter()


@router.get("/offenders")
async def list_offenders(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    List offenders. Filters: id, first-name, last-name, age, marital-status,
    date-min/date-max (arrest date), time-min/time-max (arrest time),
    defendant-id, case-id, plus page, pageSize and sort.
    """
    result = await service.list_offenders(dict(request.query_params), settings=settings)
    return respond(result)


@router.get("/offenders/{offender_id}")
async def get_offender(offender_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_offender(offender_id, dict(request.query_params)))


@router.get("/offenders/{offender_id}/defendant")
async def get_defendant_of_offender(offender_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_defendant_of_offender(offender_id, dict(request.query_params)))


@router.get("/offenders/{offender_id}/case")
async def get_case_of_offender(offender_id: str, request: Request) -> JSONResponse:
    return respond(await service.get_case_of_offender(offender_id, dict(request.query_params)))


@router.post("/offenders")
async def create_offenders(request: Request) -> JSONResponse:
    """
    Create offenders from a JSON array (or a single object). Every referenced
    defendant (and case, when given) must already exist.
    """
    return respond(await service.create_offenders(await request.body()))
