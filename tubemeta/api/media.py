"""
Metadata endpoints backed by yt-dlp.

Each route validates its path parameter, builds the matching command, and
hands it to the runner. Validation failures are raised before any process
is started.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from tubemeta.api.schemas import ERROR_RESPONSES, MessageResponse, SuccessEnvelope
from tubemeta.config import get_config
from tubemeta.extractor import (
    ExtractorRunner,
    OperationKind,
    build_command,
    validate_identifier,
)
from tubemeta.extractor.runner import get_runner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metadata"])

ROOT_MESSAGE = (
    "YouTube Scraper API using yt-dlp. "
    "Use endpoints like /video/:id, /playlist/:id, /channel/:id/playlists"
)


async def _extract(
    kind: OperationKind,
    raw_identifier: str,
    runner: ExtractorRunner,
) -> dict[str, Any]:
    identifier = validate_identifier(kind, raw_identifier)
    logger.debug(f"{kind.value} request for {identifier}")
    command = build_command(kind, identifier, get_config().extractor)
    return await runner.extract(command)


@router.get("/", response_model=MessageResponse)
async def index() -> dict[str, str]:
    """Usage hint."""
    return {"message": ROOT_MESSAGE}


@router.get("/video/{video_id}", response_model=SuccessEnvelope, responses=ERROR_RESPONSES)
async def get_video(
    video_id: str,
    runner: ExtractorRunner = Depends(get_runner),
) -> dict[str, Any]:
    """
    Video details: title, description, likes, upload date, channel, and up
    to 50 comments where yt-dlp supports them.
    """
    return await _extract(OperationKind.VIDEO, video_id, runner)


@router.get("/comments/{video_id}", response_model=SuccessEnvelope, responses=ERROR_RESPONSES)
async def get_comments(
    video_id: str,
    runner: ExtractorRunner = Depends(get_runner),
) -> dict[str, Any]:
    """
    Video JSON with up to 200 comments. Callers read the ``comments`` field
    of ``data``. Slow, and reply coverage depends on yt-dlp.
    """
    return await _extract(OperationKind.COMMENTS, video_id, runner)


@router.get("/playlist/{playlist_id}", response_model=SuccessEnvelope, responses=ERROR_RESPONSES)
async def get_playlist(
    playlist_id: str,
    runner: ExtractorRunner = Depends(get_runner),
) -> dict[str, Any]:
    """Playlist metadata and flat video entries."""
    return await _extract(OperationKind.PLAYLIST, playlist_id, runner)


@router.get(
    "/channel/{channel_id}/playlists",
    response_model=SuccessEnvelope,
    responses=ERROR_RESPONSES,
)
async def get_channel_playlists(
    channel_id: str,
    runner: ExtractorRunner = Depends(get_runner),
) -> dict[str, Any]:
    """Channel metadata and the flat list of playlists it created."""
    return await _extract(OperationKind.CHANNEL_PLAYLISTS, channel_id, runner)


@router.get(
    "/channel/{channel_id}/info",
    response_model=SuccessEnvelope,
    responses=ERROR_RESPONSES,
)
async def get_channel_info(
    channel_id: str,
    runner: ExtractorRunner = Depends(get_runner),
) -> dict[str, Any]:
    """Channel metadata only; top-level fields of ``data`` describe the channel."""
    return await _extract(OperationKind.CHANNEL_INFO, channel_id, runner)
