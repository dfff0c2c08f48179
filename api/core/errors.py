"""
Error kinds shared by validators and resource handlers.

Each kind maps to exactly one HTTP status. Handlers never pick status codes
themselves; they raise `ApiError(kind, detail)` and the result boundary
(`core/result.py`) does the translation.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ID = "invalid_id"
    NOT_NUMERIC = "not_numeric"
    BAD_DATE_FORMAT = "bad_date_format"
    BAD_TIME_FORMAT = "bad_time_format"
    UNKNOWN_FILTER = "unknown_filter"
    EMPTY_FILTER_VALUE = "empty_filter_value"
    OUT_OF_RANGE = "out_of_range"
    UNSUPPORTED_QUERY = "unsupported_query"
    NOT_FOUND = "not_found"
    EMPTY_PAYLOAD = "empty_payload"
    INVALID_PAYLOAD = "invalid_payload"
    MISSING_REFERENCE = "missing_reference"
    STORAGE_REJECTED = "storage_rejected"
    STORAGE_UNAVAILABLE = "storage_unavailable"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.INVALID_ID: 400,
    ErrorKind.NOT_NUMERIC: 400,
    ErrorKind.BAD_DATE_FORMAT: 400,
    ErrorKind.BAD_TIME_FORMAT: 400,
    ErrorKind.UNKNOWN_FILTER: 422,
    ErrorKind.EMPTY_FILTER_VALUE: 422,
    ErrorKind.OUT_OF_RANGE: 422,
    ErrorKind.UNSUPPORTED_QUERY: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EMPTY_PAYLOAD: 400,
    ErrorKind.INVALID_PAYLOAD: 400,
    ErrorKind.MISSING_REFERENCE: 400,
    ErrorKind.STORAGE_REJECTED: 400,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
}


class ApiError(Exception):
    def __init__(self, kind: ErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
