"""
Podcast and episode persistence (raw SQL).

Episodes reference podcasts with ON DELETE CASCADE, so deleting a podcast
removes its episodes in the same statement. Ids that do not fit a BIGINT
cannot match a row and are answered as missing without a query.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

_PODCAST_COLUMNS = "id, title, category, rating, created_at, updated_at"
_EPISODE_COLUMNS = "id, podcast_id, title, category, created_at, updated_at"


async def list_podcasts() -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_PODCAST_COLUMNS}
        FROM podcasts
        ORDER BY id ASC
        """
    )


async def create_podcast(*, title: str, category: str, rating: float) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO podcasts (title, category, rating)
        VALUES ($1, $2, $3)
        RETURNING {_PODCAST_COLUMNS}
        """,
        title,
        category,
        rating,
    )
    if row is None:
        raise RuntimeError("Failed to create podcast.")
    return row


async def get_podcast(podcast_id: int) -> dict[str, Any] | None:
    if not db.fits_bigint(podcast_id):
        return None
    return await db.fetch_one(
        f"""
        SELECT {_PODCAST_COLUMNS}
        FROM podcasts
        WHERE id = $1
        """,
        podcast_id,
    )


async def update_podcast(
    podcast_id: int,
    *,
    title: str | None = None,
    category: str | None = None,
    rating: float | None = None,
) -> dict[str, Any] | None:
    """
    Patch a podcast. `None` arguments keep the stored value.
    Returns the updated row, or None when the podcast does not exist.
    """
    if not db.fits_bigint(podcast_id):
        return None
    return await db.fetch_one(
        f"""
        UPDATE podcasts
        SET title = COALESCE($2, title),
            category = COALESCE($3, category),
            rating = COALESCE($4, rating),
            updated_at = now()
        WHERE id = $1
        RETURNING {_PODCAST_COLUMNS}
        """,
        podcast_id,
        title,
        category,
        rating,
    )


async def delete_podcast(podcast_id: int) -> bool:
    if not db.fits_bigint(podcast_id):
        return False
    row = await db.fetch_one(
        """
        DELETE FROM podcasts
        WHERE id = $1
        RETURNING id
        """,
        podcast_id,
    )
    return row is not None


async def create_episode(*, podcast_id: int, title: str, category: str) -> dict[str, Any] | None:
    """
    Insert an episode under a podcast.
    Returns None if the podcast is gone (foreign key violation).
    """
    if not db.fits_bigint(podcast_id):
        return None
    try:
        return await db.fetch_one(
            f"""
            INSERT INTO episodes (podcast_id, title, category)
            VALUES ($1, $2, $3)
            RETURNING {_EPISODE_COLUMNS}
            """,
            podcast_id,
            title,
            category,
        )
    except asyncpg.ForeignKeyViolationError:
        return None


async def list_episodes(podcast_id: int) -> list[dict[str, Any]]:
    if not db.fits_bigint(podcast_id):
        return []
    return await db.fetch_all(
        f"""
        SELECT {_EPISODE_COLUMNS}
        FROM episodes
        WHERE podcast_id = $1
        ORDER BY id ASC
        """,
        podcast_id,
    )


async def update_episode(
    podcast_id: int,
    episode_id: int,
    *,
    title: str | None = None,
    category: str | None = None,
) -> dict[str, Any] | None:
    if not (db.fits_bigint(podcast_id) and db.fits_bigint(episode_id)):
        return None
    return await db.fetch_one(
        f"""
        UPDATE episodes
        SET title = COALESCE($3, title),
            category = COALESCE($4, category),
            updated_at = now()
        WHERE id = $1
          AND podcast_id = $2
        RETURNING {_EPISODE_COLUMNS}
        """,
        episode_id,
        podcast_id,
        title,
        category,
    )


async def delete_episode(podcast_id: int, episode_id: int) -> bool:
    if not (db.fits_bigint(podcast_id) and db.fits_bigint(episode_id)):
        return False
    status = await db.execute(
        """
        DELETE FROM episodes
        WHERE id = $1
          AND podcast_id = $2
        """,
        episode_id,
        podcast_id,
    )
    return db.affected_rows(status) > 0
