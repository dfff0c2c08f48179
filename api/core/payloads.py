"""
Request-body helpers for batch create / update endpoints.

Bodies are a JSON array of objects; a single object is accepted as a
one-item batch. Every item is checked before anything is written.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from . import db
from .errors import ApiError, ErrorKind

ModelT = TypeVar("ModelT", bound=BaseModel)

_BODY = TypeAdapter(list[dict[str, Any]] | dict[str, Any])


def batch_items(raw_body: bytes) -> list[dict[str, Any]]:
    try:
        text = (raw_body or b"").decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise ApiError(ErrorKind.INVALID_PAYLOAD, "Request body is not valid UTF-8.") from exc
    if not text:
        raise ApiError(ErrorKind.EMPTY_PAYLOAD, "No data to be added.")

    try:
        body = _BODY.validate_json(text)
    except ValidationError as exc:
        raise ApiError(
            ErrorKind.INVALID_PAYLOAD,
            f"Request body must be a JSON object or an array of objects ({_describe(exc)}).",
        ) from exc

    items = [body] if isinstance(body, dict) else body
    if not items:
        raise ApiError(ErrorKind.EMPTY_PAYLOAD, "No data to be added.")

    for index, item in enumerate(items):
        if not item:
            raise ApiError(ErrorKind.EMPTY_PAYLOAD, f"Item {index} is empty. No data to be added.")
    return items


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "item"
        problems.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(problems)


def validate_items(model: type[ModelT], items: list[dict[str, Any]]) -> list[ModelT]:
    validated: list[ModelT] = []
    for index, item in enumerate(items):
        try:
            validated.append(model.model_validate(item))
        except ValidationError as exc:
            raise ApiError(
                ErrorKind.INVALID_PAYLOAD,
                "Either you are missing needed columns, or you are passing in invalid values "
                f"(item {index}: {_describe(exc)}). Refer to documentation.",
            ) from exc
    return validated


async def require_references(table: str, column: str, ids: Iterable[int], *, label: str) -> None:
    """
    Fail with missing_reference unless every id exists in `table.column`.
    """
    for ref_id in sorted(set(ids)):
        if not db.fits_integer(ref_id) or not await db.exists(table, {column: ref_id}):
            raise ApiError(
                ErrorKind.MISSING_REFERENCE,
                f"That {label} ({ref_id}) never existed, or it has been deleted.",
            )
