"""
Podcast/episode operation schemas.
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CoreOutput, WireModel


class PodcastOut(WireModel):
    id: int
    title: str
    category: str
    rating: float


class EpisodeOut(WireModel):
    id: int
    podcast_id: int
    title: str
    category: str


class PodcastIdInput(WireModel):
    id: int


class CreatePodcastInput(WireModel):
    title: str = Field(..., min_length=1, max_length=500)
    category: str = Field(..., min_length=1, max_length=200)


class PodcastPatch(WireModel):
    """
    Fields left out (or null) keep their stored values.
    Rating bounds are a business rule and are checked by the service.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    category: str | None = Field(default=None, min_length=1, max_length=200)
    rating: float | None = None


class UpdatePodcastInput(WireModel):
    id: int
    payload: PodcastPatch


class CreateEpisodeInput(WireModel):
    podcast_id: int
    title: str = Field(..., min_length=1, max_length=500)
    category: str = Field(..., min_length=1, max_length=200)


class EpisodeRefInput(WireModel):
    podcast_id: int
    episode_id: int


class UpdateEpisodeInput(EpisodeRefInput):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    category: str | None = Field(default=None, min_length=1, max_length=200)


class GetAllPodcastsOutput(CoreOutput):
    podcasts: list[PodcastOut] | None = None


class CreatePodcastOutput(CoreOutput):
    id: int | None = None


class GetPodcastOutput(CoreOutput):
    podcast: PodcastOut | None = None


class UpdatePodcastOutput(CoreOutput):
    pass


class DeletePodcastOutput(CoreOutput):
    pass


class CreateEpisodeOutput(CoreOutput):
    id: int | None = None


class GetEpisodesOutput(CoreOutput):
    episodes: list[EpisodeOut] | None = None


class UpdateEpisodeOutput(CoreOutput):
    pass


class DeleteEpisodeOutput(CoreOutput):
    pass
