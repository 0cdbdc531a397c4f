"""
Error types and failure classification for yt-dlp invocations.

Every failure a request can hit is an ExtractorError subclass carrying the
HTTP status and the JSON envelope it should be rendered as.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from tubemeta.extractor.runner import ProcessResult

logger = logging.getLogger(__name__)

# Length caps for diagnostic text returned to callers
DETAILS_MAX_CHARS = 1000
PREVIEW_MAX_CHARS = 500

# Exit status a shell reports for a missing command
COMMAND_NOT_FOUND_STATUS = 127


class ErrorType(str, Enum):
    """Classification of request failures."""

    VALIDATION_ERROR = "validation_error"  # Bad identifier, caught before launch
    RESOURCE_NOT_FOUND = "resource_not_found"  # Video/playlist/channel missing
    BAD_UPSTREAM_URL = "bad_upstream_url"  # yt-dlp rejected the URL
    EXECUTION_FAILED = "execution_failed"  # Kill, non-zero exit, launch error
    CONFIGURATION_ERROR = "configuration_error"  # yt-dlp executable missing
    OUTPUT_PARSE_ERROR = "output_parse_error"  # Clean exit, unparseable stdout


class ExtractorError(Exception):
    """Base class for failures rendered as a JSON error envelope."""

    error_type: ErrorType = ErrorType.EXECUTION_FAILED
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        extra: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.extra = extra or {}

    def to_envelope(self) -> dict[str, Any]:
        """Render as ``{success: false, error, details?}``."""
        envelope: dict[str, Any] = {"success": False, "error": self.message}
        if self.details is not None:
            envelope["details"] = self.details
        envelope.update(self.extra)
        return envelope


class IdentifierValidationError(ExtractorError):
    error_type = ErrorType.VALIDATION_ERROR
    status_code = 400


class ResourceNotFoundError(ExtractorError):
    error_type = ErrorType.RESOURCE_NOT_FOUND
    status_code = 404


class BadUpstreamURLError(ExtractorError):
    error_type = ErrorType.BAD_UPSTREAM_URL
    status_code = 400


class ExecutionFailedError(ExtractorError):
    error_type = ErrorType.EXECUTION_FAILED
    status_code = 500


class ConfigurationError(ExtractorError):
    error_type = ErrorType.CONFIGURATION_ERROR
    status_code = 500


class OutputParseError(ExtractorError):
    error_type = ErrorType.OUTPUT_PARSE_ERROR
    status_code = 500


NOT_FOUND_MARKERS = ("Video unavailable", "404 Not Found", "channel not found")
INVALID_URL_MARKERS = ("Invalid URL",)


class ErrorClassifier:
    """Maps a failed ProcessResult onto the error taxonomy."""

    @staticmethod
    def classify(result: "ProcessResult", executable: str) -> ExtractorError:
        """
        Classify a failed invocation.

        Checks run in priority order against stderr (or the launch error
        message when stderr is empty). Substring matches are case-sensitive.

        Args:
            result: The failed process result.
            executable: Executable path, named in configuration errors.

        Returns:
            The ExtractorError to raise for this request.
        """
        error_output = result.stderr_text or result.launch_error or ""
        details = error_output[:DETAILS_MAX_CHARS]

        if any(marker in error_output for marker in NOT_FOUND_MARKERS):
            return ResourceNotFoundError(
                "Video, Playlist, or Channel not found or unavailable.",
                details=details,
            )

        if any(marker in error_output for marker in INVALID_URL_MARKERS):
            return BadUpstreamURLError(
                "Invalid URL provided to yt-dlp.",
                details=details,
            )

        if result.killed:
            return ExecutionFailedError(
                "Process killed, possibly due to timeout or excessive resource usage.",
                details=details,
            )

        if result.not_found or result.exit_status == COMMAND_NOT_FOUND_STATUS:
            return ConfigurationError(
                f"Command not found: '{executable}'. "
                "Ensure yt-dlp is installed and accessible.",
                details=details,
            )

        if result.launch_failed:
            return ConfigurationError(
                f"Command could not be launched: '{executable}'. "
                "Ensure yt-dlp is installed and executable.",
                details=details,
            )

        return ExecutionFailedError(
            "Failed to execute yt-dlp command.",
            details=details,
        )
