"""
Unit tests for failure classification.
"""

import pytest

from tubemeta.extractor.errors import (
    BadUpstreamURLError,
    ConfigurationError,
    ErrorClassifier,
    ErrorType,
    ExecutionFailedError,
    ExtractorError,
    ResourceNotFoundError,
)
from tubemeta.extractor.runner import ProcessResult


def failed(stderr: str = "", **kwargs) -> ProcessResult:
    kwargs.setdefault("exit_status", 1)
    return ProcessResult(stderr=stderr.encode(), **kwargs)


@pytest.mark.unit
class TestErrorClassifier:
    """Tests for ErrorClassifier.classify()."""

    @pytest.mark.parametrize(
        "stderr",
        [
            "ERROR: [youtube] dQw4w9WgXcQ: Video unavailable",
            "ERROR: Unable to download webpage: HTTP Error 404: 404 Not Found",
            "ERROR: channel not found",
        ],
    )
    def test_not_found(self, stderr):
        error = ErrorClassifier.classify(failed(stderr), "yt-dlp")

        assert isinstance(error, ResourceNotFoundError)
        assert error.status_code == 404
        assert error.error_type is ErrorType.RESOURCE_NOT_FOUND
        assert error.message == "Video, Playlist, or Channel not found or unavailable."
        assert error.details == stderr

    def test_invalid_url(self):
        error = ErrorClassifier.classify(failed("ERROR: Invalid URL: foo"), "yt-dlp")

        assert isinstance(error, BadUpstreamURLError)
        assert error.status_code == 400

    def test_not_found_beats_invalid_url(self):
        stderr = "ERROR: Invalid URL\nERROR: Video unavailable"

        error = ErrorClassifier.classify(failed(stderr), "yt-dlp")

        assert isinstance(error, ResourceNotFoundError)

    def test_match_is_case_sensitive(self):
        error = ErrorClassifier.classify(failed("error: video UNAVAILABLE"), "yt-dlp")

        assert type(error) is ExecutionFailedError

    def test_killed(self):
        error = ErrorClassifier.classify(failed("", exit_status=-9, killed=True), "yt-dlp")

        assert isinstance(error, ExecutionFailedError)
        assert error.status_code == 500
        assert "timeout or excessive resource usage" in error.message

    def test_text_match_beats_killed(self):
        error = ErrorClassifier.classify(
            failed("Video unavailable", exit_status=-9, killed=True), "yt-dlp"
        )

        assert isinstance(error, ResourceNotFoundError)

    def test_executable_missing(self):
        result = ProcessResult(
            exit_status=None,
            launch_error="[Errno 2] No such file or directory: '/opt/yt-dlp'",
            not_found=True,
        )

        error = ErrorClassifier.classify(result, "/opt/yt-dlp")

        assert isinstance(error, ConfigurationError)
        assert error.error_type is ErrorType.CONFIGURATION_ERROR
        assert "'/opt/yt-dlp'" in error.message
        assert error.details == result.launch_error

    def test_exit_127_means_command_not_found(self):
        error = ErrorClassifier.classify(
            failed("sh: yt-dlp: not found", exit_status=127), "yt-dlp"
        )

        assert isinstance(error, ConfigurationError)

    def test_generic_failure_caps_details(self):
        stderr = "ERROR: " + "z" * 5000

        error = ErrorClassifier.classify(failed(stderr), "yt-dlp")

        assert type(error) is ExecutionFailedError
        assert error.message == "Failed to execute yt-dlp command."
        assert error.details == stderr[:1000]
        assert len(error.details) == 1000

    def test_launch_failure_is_configuration_error(self):
        result = ProcessResult(
            exit_status=None,
            launch_error="[Errno 13] Permission denied",
            launch_failed=True,
        )

        error = ErrorClassifier.classify(result, "/opt/bin/yt-dlp")

        assert type(error) is ConfigurationError
        assert error.status_code == 500
        assert "'/opt/bin/yt-dlp'" in error.message
        assert error.details == "[Errno 13] Permission denied"

    def test_launch_error_used_when_stderr_empty(self):
        result = ProcessResult(exit_status=None, launch_error="spawn failed")

        error = ErrorClassifier.classify(result, "yt-dlp")

        assert type(error) is ExecutionFailedError
        assert error.details == "spawn failed"


@pytest.mark.unit
class TestEnvelope:
    """Tests for ExtractorError.to_envelope()."""

    def test_without_details(self):
        assert ExtractorError("nope").to_envelope() == {"success": False, "error": "nope"}

    def test_with_details_and_extra(self):
        error = ExtractorError("nope", details="why", extra={"raw_output_preview": "..."})

        assert error.to_envelope() == {
            "success": False,
            "error": "nope",
            "details": "why",
            "raw_output_preview": "...",
        }
