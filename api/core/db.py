"""
PostgreSQL access for the users/podcasts/episodes tables.

One asyncpg pool per process, opened and closed by the FastAPI lifespan in
`api/main.py`, which also applies `schema.sql` on startup. Repositories go
through the helpers below rather than touching the pool, so tests can swap
`fetch_one`/`fetch_all`/`execute` for recorders.

Placeholders are asyncpg's positional $1, $2, ...
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

# Range of the BIGSERIAL/BIGINT id columns.
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    # asyncpg does not understand libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def apply_schema_on_startup() -> bool:
    raw = os.environ.get("DB_APPLY_SCHEMA", "").strip().lower()
    if not raw:
        return True
    return raw not in {"0", "false", "no", "off"}


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=1,
        max_size=5,
        command_timeout=30,
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


async def apply_schema() -> None:
    # asyncpg runs a multi-statement script when no arguments are passed.
    await pool().execute(SCHEMA_PATH.read_text(encoding="utf-8"))


def fits_bigint(value: int) -> bool:
    """
    True if `value` can be bound to a BIGINT parameter. Ids outside this
    range cannot match any row, and asyncpg refuses to encode them.
    """
    return BIGINT_MIN <= value <= BIGINT_MAX


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    row = await pool().fetchrow(sql, *args)
    return dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    rows = await pool().fetch(sql, *args)
    return [dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement and return asyncpg's command tag, e.g. "DELETE 1".
    """
    return await pool().execute(sql, *args)


def affected_rows(status: str) -> int:
    """
    Row count from a command tag: "UPDATE 3" -> 3, "INSERT 0 1" -> 1,
    anything unparsable -> 0.
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
