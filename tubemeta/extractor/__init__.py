"""yt-dlp command pipeline: validation, command building, execution, normalization."""

from tubemeta.extractor.commands import ExtractorCommand, OperationKind, build_command
from tubemeta.extractor.errors import (
    BadUpstreamURLError,
    ConfigurationError,
    ErrorClassifier,
    ErrorType,
    ExecutionFailedError,
    ExtractorError,
    IdentifierValidationError,
    OutputParseError,
    ResourceNotFoundError,
)
from tubemeta.extractor.normalizer import normalize_output
from tubemeta.extractor.runner import ExtractorRunner, ProcessResult, resolve_executable
from tubemeta.extractor.validation import sanitize, validate_identifier

__all__ = [
    "BadUpstreamURLError",
    "ConfigurationError",
    "ErrorClassifier",
    "ErrorType",
    "ExecutionFailedError",
    "ExtractorCommand",
    "ExtractorError",
    "ExtractorRunner",
    "IdentifierValidationError",
    "OperationKind",
    "OutputParseError",
    "ProcessResult",
    "ResourceNotFoundError",
    "build_command",
    "normalize_output",
    "resolve_executable",
    "sanitize",
    "validate_identifier",
]
