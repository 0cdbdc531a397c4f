"""
yt-dlp stdout normalization.

yt-dlp prints either one consolidated JSON document or one JSON document per
line depending on mode. Both come back to callers in the same envelope.
"""

import json
import logging
from typing import Any

from tubemeta.extractor.errors import (
    DETAILS_MAX_CHARS,
    PREVIEW_MAX_CHARS,
    OutputParseError,
)

logger = logging.getLogger(__name__)


def parse_json_lines(stdout: str) -> list[Any]:
    """
    Parse every non-blank line of ``stdout`` as its own JSON value.

    Raises:
        json.JSONDecodeError: If any non-blank line is not valid JSON.
        ValueError: If there are no non-blank lines.
    """
    entries = [json.loads(line) for line in stdout.splitlines() if line.strip()]
    if not entries:
        raise ValueError("No JSON lines in output")
    return entries


def normalize_output(stdout: str, stderr: str = "") -> dict[str, Any]:
    """
    Turn the stdout of a clean yt-dlp exit into a success envelope.

    Args:
        stdout: Decoded standard output.
        stderr: Decoded standard error, used as the diagnostic if parsing fails.

    Returns:
        ``{"success": True, "data": value}`` for one JSON document, or
        ``{"success": True, "data": {"entries": [...]}}`` for JSON lines.

    Raises:
        OutputParseError: If stdout is neither.
    """
    try:
        return {"success": True, "data": json.loads(stdout)}
    except json.JSONDecodeError as parse_error:
        try:
            entries = parse_json_lines(stdout)
        except ValueError as multi_parse_error:
            logger.error(f"JSON parse error: {parse_error}")
            logger.error(f"Multi-line parse error attempt: {multi_parse_error}")

            # yt-dlp sometimes reports problems on stderr with exit status 0
            if stderr:
                logger.error(f"Stderr content on parse error: {stderr}")
                raise OutputParseError(
                    "yt-dlp produced non-JSON output.",
                    details=stderr[:DETAILS_MAX_CHARS],
                ) from parse_error

            raise OutputParseError(
                "Failed to parse yt-dlp output as JSON.",
                details=str(parse_error),
                extra={"raw_output_preview": stdout[:PREVIEW_MAX_CHARS]},
            ) from parse_error

        return {"success": True, "data": {"entries": entries}}
