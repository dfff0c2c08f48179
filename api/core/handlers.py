"""
Building blocks shared by the per-resource handlers.

Collection endpoints run the full pipeline:
    filters -> paging -> query builder -> paginator
By-id endpoints validate the id, refuse any query string, and look up a
single row.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from . import db
from .config import Settings
from .errors import ApiError, ErrorKind
from .filters import FilterSpec, parse_integer, validate_filters
from .paginator import Page, paginate
from .paging import validate_paging
from .query import build_predicate

logger = logging.getLogger(__name__)


def parse_id(raw: str, *, name: str = "id") -> int:
    value = parse_integer(raw)
    if value is None or value <= 0:
        raise ApiError(ErrorKind.INVALID_ID, f"Enter a valid {name}: expected a positive integer.")
    return value


def reject_query(params: Mapping[str, str]) -> None:
    if params:
        raise ApiError(ErrorKind.UNSUPPORTED_QUERY, "Resource does not support filtering or pagination.")


def require_row(row: dict[str, Any] | None, *, detail: str) -> dict[str, Any]:
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, detail)
    return row


async def fetch_by_id(
    fetch: Callable[[int], Awaitable[dict[str, Any] | None]],
    row_id: int,
    *,
    action: str,
    detail: str,
) -> dict[str, Any]:
    """
    Look up one row by primary key, or raise not_found.

    Ids beyond the INTEGER column range are a miss without a storage round trip.
    """
    if not db.fits_integer(row_id):
        raise ApiError(ErrorKind.NOT_FOUND, detail)
    with storage_guard(action):
        row = await fetch(row_id)
    return require_row(row, detail=detail)


@contextmanager
def storage_guard(action: str) -> Iterator[None]:
    """
    Map storage failures to API errors: unavailable -> 503, rejected -> 400.
    """
    try:
        yield
    except db.StorageUnavailable as exc:
        logger.warning("storage_unavailable action=%s error=%s", action, exc)
        raise ApiError(ErrorKind.STORAGE_UNAVAILABLE, "Storage is temporarily unavailable, try again later.") from exc
    except db.StorageError as exc:
        logger.exception("storage_rejected action=%s", action)
        raise ApiError(ErrorKind.STORAGE_REJECTED, "Not the right syntax, consult the documentation.") from exc


async def list_collection(spec: FilterSpec, raw: Mapping[str, str], *, settings: Settings) -> Page:
    filters = validate_filters(spec, raw)
    page_request = validate_paging(filters.page, filters.page_size, settings=settings)
    predicate = build_predicate(spec, filters)

    with storage_guard(f"list:{spec.table}"):
        page = await paginate(spec, predicate, page_request)

    if not page.items:
        raise ApiError(ErrorKind.NOT_FOUND, "No matching records. Check your parameters or consult the documentation.")
    return page

