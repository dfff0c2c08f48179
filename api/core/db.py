"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures never leave this module as asyncpg exceptions. They are
re-raised as `StorageUnavailable` (connection-level, worth retrying later) or
`StorageError` (the statement itself was rejected).
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import asynccontextmanager, contextmanager
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import Settings

_pool: asyncpg.Pool | None = None

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Postgres INTEGER (and SERIAL) and BIGINT column ranges.
INTEGER_MIN, INTEGER_MAX = -(2**31), 2**31 - 1
BIGINT_MAX = 2**63 - 1

_TRANSIENT_ERRORS = (
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.InsufficientResourcesError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncio.TimeoutError,
    OSError,
)

_PERMANENT_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
)


class StorageError(RuntimeError):
    pass


class StorageUnavailable(StorageError):
    pass


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except _TRANSIENT_ERRORS as exc:
        raise StorageUnavailable(str(exc) or exc.__class__.__name__) from exc
    except _PERMANENT_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url(settings: Settings) -> str:
    url = settings.database_url
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool(settings: Settings) -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with _storage_errors():
        row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with _storage_errors():
        rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    with _storage_errors():
        await pool().execute(sql, *args)


def _quote_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name or ""):
        raise ValueError(f"Not a plain SQL identifier: {name!r}")
    return name


async def exists(table: str, columns: Mapping[str, Any]) -> bool:
    """
    True when `table` has at least one row matching every column = value pair.
    """
    if not columns:
        raise ValueError("exists() needs at least one column to match on.")

    conditions = [
        f"{_quote_identifier(column)} = ${position}"
        for position, column in enumerate(columns, start=1)
    ]
    row = await fetch_one(
        f"SELECT 1 AS ok FROM {_quote_identifier(table)} WHERE {' AND '.join(conditions)} LIMIT 1",
        *columns.values(),
    )
    return row is not None


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Yield a pooled connection inside a single transaction.

    The transaction commits when the block exits normally and rolls back on
    any exception.
    """
    with _storage_errors():
        async with pool().acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                yield conn


def fits_integer(value: int) -> bool:
    """
    True when `value` can be bound to an INTEGER column. Anything outside that
    range cannot match a stored row, and asyncpg refuses to encode it.
    """
    return INTEGER_MIN <= value <= INTEGER_MAX
