"""
Account persistence helpers.
"""

from __future__ import annotations

import asyncpg

from core import db

_USER_COLUMNS = "id, email, password_hash, role, created_at, updated_at"


class EmailTakenError(RuntimeError):
    pass


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, email: str, password_hash: str, role: str) -> dict:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO users (email, password_hash, role)
            VALUES ($1, $2, $3)
            RETURNING {_USER_COLUMNS}
            """,
            normalize_email(email),
            password_hash,
            role,
        )
    except asyncpg.UniqueViolationError as exc:
        raise EmailTakenError(normalize_email(email)) from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE email = $1
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    if not db.fits_bigint(user_id):
        return None
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def update_user(
    user_id: int,
    *,
    email: str | None = None,
    password_hash: str | None = None,
) -> dict | None:
    """
    Patch a user row. `None` arguments keep the stored value.
    Returns the updated row, or None when the user does not exist.
    """
    if not db.fits_bigint(user_id):
        return None
    try:
        return await db.fetch_one(
            f"""
            UPDATE users
            SET email = COALESCE($2, email),
                password_hash = COALESCE($3, password_hash),
                updated_at = now()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
            """,
            user_id,
            normalize_email(email) if email is not None else None,
            password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise EmailTakenError(normalize_email(email or "")) from exc
