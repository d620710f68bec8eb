"""
Podcast and episode operations.
"""

from __future__ import annotations

from core.schemas import to_output
from gateway.registry import OperationRegistry

from . import schemas, service

operations = OperationRegistry()


@operations.operation("getAllPodcasts")
async def get_all_podcasts(_: None, __: dict | None) -> schemas.GetAllPodcastsOutput:
    result = await service.get_all_podcasts()
    return to_output(result, schemas.GetAllPodcastsOutput, "podcasts")


@operations.operation("createPodcast", input_model=schemas.CreatePodcastInput)
async def create_podcast(
    payload: schemas.CreatePodcastInput,
    _: dict | None,
) -> schemas.CreatePodcastOutput:
    result = await service.create_podcast(payload)
    return to_output(result, schemas.CreatePodcastOutput, "id")


@operations.operation("getPodcast", input_model=schemas.PodcastIdInput)
async def get_podcast(payload: schemas.PodcastIdInput, _: dict | None) -> schemas.GetPodcastOutput:
    result = await service.get_podcast(payload.id)
    return to_output(result, schemas.GetPodcastOutput, "podcast")


@operations.operation("updatePodcast", input_model=schemas.UpdatePodcastInput)
async def update_podcast(
    payload: schemas.UpdatePodcastInput,
    _: dict | None,
) -> schemas.UpdatePodcastOutput:
    result = await service.update_podcast(payload.id, payload.payload)
    return to_output(result, schemas.UpdatePodcastOutput)


@operations.operation("deletePodcast", input_model=schemas.PodcastIdInput)
async def delete_podcast(
    payload: schemas.PodcastIdInput,
    _: dict | None,
) -> schemas.DeletePodcastOutput:
    result = await service.delete_podcast(payload.id)
    return to_output(result, schemas.DeletePodcastOutput)


@operations.operation("createEpisode", input_model=schemas.CreateEpisodeInput)
async def create_episode(
    payload: schemas.CreateEpisodeInput,
    _: dict | None,
) -> schemas.CreateEpisodeOutput:
    result = await service.create_episode(payload)
    return to_output(result, schemas.CreateEpisodeOutput, "id")


@operations.operation("getEpisodes", input_model=schemas.PodcastIdInput)
async def get_episodes(payload: schemas.PodcastIdInput, _: dict | None) -> schemas.GetEpisodesOutput:
    result = await service.get_episodes(payload.id)
    return to_output(result, schemas.GetEpisodesOutput, "episodes")


@operations.operation("updateEpisode", input_model=schemas.UpdateEpisodeInput)
async def update_episode(
    payload: schemas.UpdateEpisodeInput,
    _: dict | None,
) -> schemas.UpdateEpisodeOutput:
    result = await service.update_episode(payload)
    return to_output(result, schemas.UpdateEpisodeOutput)


@operations.operation("deleteEpisode", input_model=schemas.EpisodeRefInput)
async def delete_episode(
    payload: schemas.EpisodeRefInput,
    _: dict | None,
) -> schemas.DeleteEpisodeOutput:
    result = await service.delete_episode(payload)
    return to_output(result, schemas.DeleteEpisodeOutput)
