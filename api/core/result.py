"""
Handler results and their translation to HTTP responses.

Resource handlers return `Ok` or `Err` instead of raising HTTP exceptions;
routers pass that value to `respond()`, which is the only place status codes
are chosen.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .errors import ApiError, ErrorKind


@dataclass(frozen=True)
class Ok:
    payload: Any
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    detail: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


Result = Union[Ok, Err]


def returns_result(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Result]]:
    """
    Wrap an async handler so it always returns a Result.

    A plain return value becomes `Ok(value)`, an `Ok` passes through, and an
    `ApiError` raised anywhere below becomes `Err`.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Result:
        try:
            value = await func(*args, **kwargs)
        except ApiError as exc:
            return Err(exc.kind, exc.detail)
        if isinstance(value, Ok):
            return value
        return Ok(value)

    return wrapper


def respond(result: Result) -> JSONResponse:
    if isinstance(result, Err):
        return JSONResponse(
            status_code=result.status_code,
            content={"detail": result.detail, "error": result.kind.value},
        )
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.payload))
