"""
Query builder: validated filters -> parameterized WHERE / ORDER BY.

Only identifiers declared in a FilterSpec ever reach SQL text. Filter values
are always bound parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .db import fits_integer
from .filters import FilterSpec, Match, ValidatedFilters, ValueType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clause:
    # `{}` marks where each bound parameter goes, in order.
    sql: str
    params: tuple[Any, ...]


@dataclass(frozen=True)
class QueryPredicate:
    clauses: tuple[Clause, ...] = ()
    order_by: str | None = None

    def render_where(self, start: int = 1) -> tuple[str, list[Any]]:
        """
        Return (" WHERE ...", args) numbered from `$start`, or ("", []) when
        there is nothing to filter on.
        """
        parts: list[str] = []
        args: list[Any] = []
        position = start
        for clause in self.clauses:
            placeholders = []
            for param in clause.params:
                placeholders.append(f"${position}")
                args.append(param)
                position += 1
            parts.append(clause.sql.format(*placeholders))
        if not parts:
            return "", []
        return " WHERE " + " AND ".join(parts), args


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_predicate(spec: FilterSpec, filters: ValidatedFilters) -> QueryPredicate:
    clauses: list[Clause] = []

    for f in spec.fields:
        if f.key not in filters.values:
            continue
        value = filters.values[f.key]
        if f.match is Match.PREFIX:
            clauses.append(Clause(f"{f.column} LIKE {{}} ESCAPE '\\'", (escape_like(str(value)) + "%",)))
        elif f.value_type is ValueType.INTEGER and not fits_integer(value):
            # No stored INTEGER can equal it; match nothing.
            clauses.append(Clause("1 = 0", ()))
        else:
            clauses.append(Clause(f"{f.column} = {{}}", (value,)))

    seen: set[str] = set()
    for f in spec.fields:
        if f.column in seen or f.column not in filters.ranges:
            continue
        seen.add(f.column)
        low, high = filters.ranges[f.column]
        clauses.append(Clause(f"{f.column} BETWEEN {{}} AND {{}}", (low, high)))

    order_by = None
    if filters.sort is not None:
        if filters.sort in spec.sortable:
            order_by = filters.sort
        else:
            logger.debug("sort_ignored table=%s sort=%s", spec.table, filters.sort)

    return QueryPredicate(clauses=tuple(clauses), order_by=order_by)
