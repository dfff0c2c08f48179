"""
Query-parameter allow-lists and the filter validator.

Every collection endpoint declares a `FilterSpec`: which keys it accepts, the
column each key targets, how the column is compared, and what type the raw
value must parse to. `validate_filters` turns the raw query-string map into
typed values, or raises `ApiError` on the first problem it finds.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Any

from .config import DATE_RANGE_MAX, DATE_RANGE_MIN, TIME_RANGE_MAX, TIME_RANGE_MIN
from .errors import ApiError, ErrorKind

PAGE_KEY = "page"
PAGE_SIZE_KEY = "pageSize"
SORT_KEY = "sort"
UNIVERSAL_KEYS = (PAGE_KEY, PAGE_SIZE_KEY, SORT_KEY)

_INTEGER = re.compile(r"^[+-]?\d+$")
_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")


class Match(str, Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    RANGE_MIN = "range_min"
    RANGE_MAX = "range_max"


class ValueType(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    DATE = "date"
    TIME = "time"


@dataclass(frozen=True)
class FilterField:
    key: str
    column: str
    match: Match = Match.EXACT
    value_type: ValueType = ValueType.TEXT


@dataclass(frozen=True)
class FilterSpec:
    table: str
    primary_key: str
    columns: tuple[str, ...]
    fields: tuple[FilterField, ...]
    sortable: tuple[str, ...] = ()

    @property
    def allowed_keys(self) -> tuple[str, ...]:
        return tuple(f.key for f in self.fields) + UNIVERSAL_KEYS


@dataclass(frozen=True)
class ValidatedFilters:
    # key -> typed value, for exact/prefix fields, in FilterSpec order
    values: dict[str, Any] = field(default_factory=dict)
    # column -> (low, high), open ends already filled in
    ranges: dict[str, tuple[Any, Any]] = field(default_factory=dict)
    sort: str | None = None
    page: str | None = None
    page_size: str | None = None


def integer_field(key: str, column: str) -> FilterField:
    return FilterField(key, column, Match.EXACT, ValueType.INTEGER)


def prefix_field(key: str, column: str) -> FilterField:
    return FilterField(key, column, Match.PREFIX, ValueType.TEXT)


def date_range(column: str, *, prefix: str = "date") -> tuple[FilterField, FilterField]:
    return (
        FilterField(f"{prefix}-min", column, Match.RANGE_MIN, ValueType.DATE),
        FilterField(f"{prefix}-max", column, Match.RANGE_MAX, ValueType.DATE),
    )


def time_range(column: str, *, prefix: str = "time") -> tuple[FilterField, FilterField]:
    return (
        FilterField(f"{prefix}-min", column, Match.RANGE_MIN, ValueType.TIME),
        FilterField(f"{prefix}-max", column, Match.RANGE_MAX, ValueType.TIME),
    )


def parse_integer(raw: str | None) -> int | None:
    text = (raw or "").strip()
    if not _INTEGER.match(text):
        return None
    return int(text)


def _parse_date(key: str, raw: str) -> date:
    text = raw.strip()
    try:
        if _DATE.match(text):
            return date.fromisoformat(text)
    except ValueError:
        pass
    raise ApiError(
        ErrorKind.BAD_DATE_FORMAT,
        f"Bad date format for '{key}'. Make sure it is in this format: YYYY-MM-DD",
    )


def _parse_time(key: str, raw: str) -> time:
    text = raw.strip()
    try:
        if _TIME.match(text):
            return time.fromisoformat(text)
    except ValueError:
        pass
    raise ApiError(
        ErrorKind.BAD_TIME_FORMAT,
        f"Bad time format for '{key}'. Make sure it is in this format: HH:MM or HH:MM:SS",
    )


def _coerce(f: FilterField, raw: str) -> Any:
    if f.value_type is ValueType.INTEGER:
        value = parse_integer(raw)
        if value is None:
            raise ApiError(ErrorKind.NOT_NUMERIC, f"Expected numeric value for '{f.key}', received '{raw}'")
        return value
    if f.value_type is ValueType.DATE:
        return _parse_date(f.key, raw)
    if f.value_type is ValueType.TIME:
        return _parse_time(f.key, raw)
    return raw


def _range_defaults(value_type: ValueType) -> tuple[Any, Any]:
    if value_type is ValueType.TIME:
        return TIME_RANGE_MIN, TIME_RANGE_MAX
    return DATE_RANGE_MIN, DATE_RANGE_MAX


def check_keys(spec: FilterSpec, raw: Mapping[str, str]) -> None:
    allowed = spec.allowed_keys
    for key, value in raw.items():
        if key not in allowed:
            raise ApiError(ErrorKind.UNKNOWN_FILTER, f"Invalid query parameter: {{{key}}}")
        if len(value) == 0:
            raise ApiError(ErrorKind.EMPTY_FILTER_VALUE, f"Provide query value for: {{{key}}}")


def validate_filters(spec: FilterSpec, raw: Mapping[str, str]) -> ValidatedFilters:
    """
    Validate a raw query-string map against `spec`.

    Key checks (unknown key, empty value) run over the whole request before any
    value is parsed. Range fields sharing a column are validated together and
    an absent side takes the open-ended default for its type.
    """
    check_keys(spec, raw)

    values: dict[str, Any] = {}
    bounds: dict[str, list[Any]] = {}
    range_types: dict[str, ValueType] = {}

    for f in spec.fields:
        if f.key not in raw:
            continue
        value = _coerce(f, raw[f.key])
        if f.match in (Match.RANGE_MIN, Match.RANGE_MAX):
            side = 0 if f.match is Match.RANGE_MIN else 1
            bounds.setdefault(f.column, [None, None])[side] = value
            range_types[f.column] = f.value_type
        else:
            values[f.key] = value

    ranges: dict[str, tuple[Any, Any]] = {}
    for column, (low, high) in bounds.items():
        default_low, default_high = _range_defaults(range_types[column])
        ranges[column] = (
            low if low is not None else default_low,
            high if high is not None else default_high,
        )

    return ValidatedFilters(
        values=values,
        ranges=ranges,
        sort=raw.get(SORT_KEY),
        page=raw.get(PAGE_KEY),
        page_size=raw.get(PAGE_SIZE_KEY),
    )
