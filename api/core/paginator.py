"""
Paginator: run a built predicate with LIMIT/OFFSET and count the full match.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from . import db
from .filters import FilterSpec
from .paging import PageRequest
from .query import QueryPredicate


@dataclass(frozen=True)
class Page:
    items: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0

    def to_payload(self, kind: str) -> dict[str, Any]:
        return {
            kind: self.items,
            "pagination": {
                "page": self.page,
                "pageSize": self.page_size,
                "total": self.total_count,
                "pages": self.pages,
            },
        }


def select_sql(spec: FilterSpec) -> str:
    return f"SELECT {', '.join(spec.columns)} FROM {spec.table}"


def _order_sql(spec: FilterSpec, predicate: QueryPredicate) -> str:
    # Primary key breaks ties so the same request always yields the same page.
    if predicate.order_by and predicate.order_by != spec.primary_key:
        return f" ORDER BY {predicate.order_by}, {spec.primary_key}"
    return f" ORDER BY {spec.primary_key}"


async def paginate(spec: FilterSpec, predicate: QueryPredicate, page_request: PageRequest) -> Page:
    """
    Fetch one page of rows matching `predicate`.

    An offset past the last row is not an error: the page comes back empty
    and the caller decides what that means.
    """
    where, args = predicate.render_where()
    limit_position = len(args) + 1

    rows: list[dict[str, Any]] = []
    # OFFSET is a BIGINT; a page beyond it is past the last row anyway.
    if page_request.offset <= db.BIGINT_MAX:
        rows = await db.fetch_all(
            select_sql(spec)
            + where
            + _order_sql(spec, predicate)
            + f" LIMIT ${limit_position} OFFSET ${limit_position + 1}",
            *args,
            page_request.limit,
            page_request.offset,
        )
    count_row = await db.fetch_one(f"SELECT count(*) AS n FROM {spec.table}{where}", *args)

    return Page(
        items=rows,
        total_count=int((count_row or {}).get("n", 0)),
        page=page_request.page,
        page_size=page_request.page_size,
    )
