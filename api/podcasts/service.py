"""
Podcast business logic.

Rules:
- existence checks run before any validation (a missing podcast id is
  reported as not found even if the payload is also invalid)
- rating must stay within [MIN_RATING, MAX_RATING]
- episode lookups are scoped to (podcast_id, episode_id) pairs
"""

from __future__ import annotations

import logging
import os

from core.result import Fail, Ok, Result

from . import repository, schemas

logger = logging.getLogger(__name__)

MIN_RATING = 1.0
MAX_RATING = 5.0
RATING_OUT_OF_RANGE = "Rating must be between 1 and 5."


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def default_rating() -> float:
    rating = _env_float("PODCAST_DEFAULT_RATING", MIN_RATING)
    if not _rating_in_range(rating):
        return MIN_RATING
    return rating


def _rating_in_range(rating: float) -> bool:
    return MIN_RATING <= rating <= MAX_RATING


def podcast_not_found(podcast_id: int) -> str:
    return f"Podcast with id {podcast_id} not found"


def episode_not_found(podcast_id: int, episode_id: int) -> str:
    return f"Episode with id {episode_id} not found in podcast with id {podcast_id}"


def _to_podcast(row: dict) -> dict:
    return {
        "id": int(row["id"]),
        "title": str(row["title"]),
        "category": str(row["category"]),
        "rating": float(row["rating"]),
    }


def _to_episode(row: dict) -> dict:
    return {
        "id": int(row["id"]),
        "podcast_id": int(row["podcast_id"]),
        "title": str(row["title"]),
        "category": str(row["category"]),
    }


async def get_all_podcasts() -> Result[list[dict]]:
    rows = await repository.list_podcasts()
    return Ok([_to_podcast(row) for row in rows])


async def create_podcast(payload: schemas.CreatePodcastInput) -> Result[int]:
    row = await repository.create_podcast(
        title=payload.title,
        category=payload.category,
        rating=default_rating(),
    )
    logger.info("podcast_created podcast_id=%s", row["id"])
    return Ok(int(row["id"]))


async def get_podcast(podcast_id: int) -> Result[dict]:
    row = await repository.get_podcast(podcast_id)
    if row is None:
        return Fail(podcast_not_found(podcast_id))
    return Ok(_to_podcast(row))


async def update_podcast(podcast_id: int, patch: schemas.PodcastPatch) -> Result[dict]:
    existing = await repository.get_podcast(podcast_id)
    if existing is None:
        return Fail(podcast_not_found(podcast_id))

    if patch.rating is not None and not _rating_in_range(patch.rating):
        return Fail(RATING_OUT_OF_RANGE)

    row = await repository.update_podcast(
        podcast_id,
        title=patch.title,
        category=patch.category,
        rating=patch.rating,
    )
    if row is None:
        # Deleted between the lookup and the update.
        return Fail(podcast_not_found(podcast_id))

    logger.info("podcast_updated podcast_id=%s", podcast_id)
    return Ok(_to_podcast(row))


async def delete_podcast(podcast_id: int) -> Result[None]:
    deleted = await repository.delete_podcast(podcast_id)
    if not deleted:
        return Fail(podcast_not_found(podcast_id))
    logger.info("podcast_deleted podcast_id=%s", podcast_id)
    return Ok()


async def create_episode(payload: schemas.CreateEpisodeInput) -> Result[int]:
    podcast = await repository.get_podcast(payload.podcast_id)
    if podcast is None:
        return Fail(podcast_not_found(payload.podcast_id))

    row = await repository.create_episode(
        podcast_id=payload.podcast_id,
        title=payload.title,
        category=payload.category,
    )
    if row is None:
        return Fail(podcast_not_found(payload.podcast_id))

    logger.info("episode_created podcast_id=%s episode_id=%s", payload.podcast_id, row["id"])
    return Ok(int(row["id"]))


async def get_episodes(podcast_id: int) -> Result[list[dict]]:
    podcast = await repository.get_podcast(podcast_id)
    if podcast is None:
        return Fail(podcast_not_found(podcast_id))

    rows = await repository.list_episodes(podcast_id)
    return Ok([_to_episode(row) for row in rows])


async def update_episode(payload: schemas.UpdateEpisodeInput) -> Result[dict]:
    row = await repository.update_episode(
        payload.podcast_id,
        payload.episode_id,
        title=payload.title,
        category=payload.category,
    )
    if row is None:
        return Fail(episode_not_found(payload.podcast_id, payload.episode_id))

    logger.info("episode_updated podcast_id=%s episode_id=%s", payload.podcast_id, payload.episode_id)
    return Ok(_to_episode(row))


async def delete_episode(payload: schemas.EpisodeRefInput) -> Result[None]:
    deleted = await repository.delete_episode(payload.podcast_id, payload.episode_id)
    if not deleted:
        return Fail(episode_not_found(payload.podcast_id, payload.episode_id))

    logger.info("episode_deleted podcast_id=%s episode_id=%s", payload.podcast_id, payload.episode_id)
    return Ok()
