"""
Page / pageSize validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings
from .errors import ApiError, ErrorKind
from .filters import parse_integer


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def validate_paging(page: str | None, page_size: str | None, *, settings: Settings) -> PageRequest:
    """
    Defaults first, then numeric checks (400), then range checks (422).
    """
    raw_page = str(settings.default_page) if page is None else page
    raw_page_size = str(settings.default_page_size) if page_size is None else page_size

    parsed_page = parse_integer(raw_page)
    parsed_page_size = parse_integer(raw_page_size)
    if parsed_page is None or parsed_page_size is None:
        raise ApiError(ErrorKind.NOT_NUMERIC, "page and pageSize must be numeric.")

    if (
        parsed_page < settings.page_min
        or parsed_page_size < settings.page_size_min
        or parsed_page_size > settings.page_size_max
    ):
        raise ApiError(
            ErrorKind.OUT_OF_RANGE,
            "Out of range, unable to process your request. "
            f"page >= {settings.page_min}, "
            f"{settings.page_size_min} <= pageSize <= {settings.page_size_max}.",
        )

    return PageRequest(page=parsed_page, page_size=parsed_page_size)
