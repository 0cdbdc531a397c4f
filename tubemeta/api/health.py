"""Health check API endpoints for TubeMeta"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from tubemeta import __version__
from tubemeta.extractor.runner import ExtractorRunner, get_runner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(runner: ExtractorRunner = Depends(get_runner)) -> dict[str, Any]:
    """
    Health check including yt-dlp reachability.

    The server stays "healthy" when yt-dlp is missing; the ``extractor``
    block reports the problem.
    """
    extractor = await runner.probe_version()
    if extractor["status"] != "ok":
        logger.warning(f"Health check: yt-dlp unavailable at {extractor['path']}: {extractor['error']}")

    return {
        "status": "healthy",
        "version": __version__,
        "app": "TubeMeta",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "extractor": extractor,
    }


@router.get("/version")
async def version_info() -> dict[str, str]:
    """Version information endpoint."""
    return {
        "version": __version__,
        "app": "TubeMeta",
        "description": "YouTube metadata API backed by yt-dlp",
    }
