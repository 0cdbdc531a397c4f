"""
yt-dlp command templates.

Each operation maps to a fixed flag set plus one target URL. The identifier
is only ever placed inside the URL, which is always the last argument.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tubemeta.config import ExtractorConfig


class OperationKind(str, Enum):
    """Metadata operations exposed over HTTP."""

    VIDEO = "video"
    COMMENTS = "comments"
    PLAYLIST = "playlist"
    CHANNEL_PLAYLISTS = "channel_playlists"
    CHANNEL_INFO = "channel_info"


# External config files could change output shape, so every command skips them
BASE_FLAGS = ("--ignore-config",)


@dataclass(frozen=True)
class ExtractorCommand:
    """A built yt-dlp argument vector (without the executable)."""

    kind: OperationKind
    target_url: str
    args: tuple[str, ...]


def _comment_args(max_comments: int, player_client: str) -> tuple[str, ...]:
    return (
        "--no-playlist",
        "--dump-single-json",
        "--extractor-args",
        f"youtube:max_comments={max_comments},all;player_client={player_client}",
    )


def build_command(
    kind: OperationKind,
    identifier: str,
    settings: Optional[ExtractorConfig] = None,
) -> ExtractorCommand:
    """
    Build the yt-dlp command for an operation.

    Args:
        kind: Operation to run.
        identifier: Already validated video, playlist, or channel identifier.
        settings: Extractor settings (defaults when omitted).

    Returns:
        ExtractorCommand with flags followed by the target URL.
    """
    settings = settings or ExtractorConfig()
    base = settings.base_url.rstrip("/")

    if kind is OperationKind.VIDEO:
        url = f"{base}/watch?v={identifier}"
        flags = _comment_args(settings.video_max_comments, settings.player_client)
    elif kind is OperationKind.COMMENTS:
        url = f"{base}/watch?v={identifier}"
        flags = _comment_args(settings.comments_max_comments, settings.player_client)
    elif kind is OperationKind.PLAYLIST:
        # Flat: entries only, no per-video fetch
        url = f"{base}/playlist?list={identifier}"
        flags = ("--flat-playlist", "--dump-single-json")
    elif kind is OperationKind.CHANNEL_PLAYLISTS:
        url = f"{base}/channel/{identifier}/playlists"
        flags = ("--flat-playlist", "--dump-single-json")
    elif kind is OperationKind.CHANNEL_INFO:
        # Zero items: channel metadata only
        url = f"{base}/channel/{identifier}"
        flags = ("--playlist-items", "0", "--dump-single-json")
    else:
        raise ValueError(f"Unknown operation: {kind}")

    return ExtractorCommand(kind=kind, target_url=url, args=(*BASE_FLAGS, *flags, url))
