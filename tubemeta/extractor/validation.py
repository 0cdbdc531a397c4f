"""
Path parameter sanitizing and identifier format checks.

Identifiers never reach a shell (commands are argument vectors), but they are
still filtered and checked before any command is built.
"""

import re
from typing import Optional

from tubemeta.extractor.commands import OperationKind
from tubemeta.extractor.errors import IdentifierValidationError

# Anything outside this set is dropped by sanitize()
_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9_\-/:?=&]")

VIDEO_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]{11}")
PLAYLIST_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

INVALID_VIDEO_ID = "Invalid YouTube Video ID format."
INVALID_PLAYLIST_ID = "Invalid YouTube Playlist ID format."
MISSING_CHANNEL_ID = "Channel ID or name is required."


def sanitize(value: Optional[str]) -> str:
    """
    Strip characters outside ``[A-Za-z0-9_-/:?=&]`` and escape quotes.

    Never raises; missing input yields an empty string.

    Args:
        value: Raw path segment.

    Returns:
        Best-effort cleaned string.
    """
    if not value:
        return ""
    cleaned = _DISALLOWED_CHARS.sub("", value)
    return cleaned.replace('"', '\\"').replace("'", "\\'")


def is_valid_video_id(value: str) -> bool:
    """Exactly 11 characters of ``[A-Za-z0-9_-]``."""
    return bool(value) and VIDEO_ID_PATTERN.fullmatch(value) is not None


def is_valid_playlist_id(value: str) -> bool:
    return bool(value) and PLAYLIST_ID_PATTERN.fullmatch(value) is not None


def is_valid_channel_id(value: str) -> bool:
    # Channel IDs and custom handles vary too much for a tighter check
    return bool(value)


_CHECKS = {
    OperationKind.VIDEO: (is_valid_video_id, INVALID_VIDEO_ID),
    OperationKind.COMMENTS: (is_valid_video_id, INVALID_VIDEO_ID),
    OperationKind.PLAYLIST: (is_valid_playlist_id, INVALID_PLAYLIST_ID),
    OperationKind.CHANNEL_PLAYLISTS: (is_valid_channel_id, MISSING_CHANNEL_ID),
    OperationKind.CHANNEL_INFO: (is_valid_channel_id, MISSING_CHANNEL_ID),
}


def validate_identifier(kind: OperationKind, raw: Optional[str]) -> str:
    """
    Sanitize a path parameter and check it against its category.

    Args:
        kind: Operation the identifier is for.
        raw: Raw path segment from the request.

    Returns:
        The sanitized identifier.

    Raises:
        IdentifierValidationError: If the sanitized value fails the check.
    """
    identifier = sanitize(raw)
    check, message = _CHECKS[kind]
    if not check(identifier):
        raise IdentifierValidationError(message)
    return identifier
