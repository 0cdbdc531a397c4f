"""Pydantic schemas for API responses"""

from typing import Any, Optional

from pydantic import BaseModel


class SuccessEnvelope(BaseModel):
    """Successful extraction: yt-dlp JSON under ``data``."""

    success: bool = True
    data: Any


class ErrorEnvelope(BaseModel):
    """Failed request."""

    success: bool = False
    error: str
    details: Optional[str] = None
    raw_output_preview: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


# Shared ``responses=`` mapping for extraction routes
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorEnvelope, "description": "Invalid identifier or URL"},
    404: {"model": ErrorEnvelope, "description": "Video, playlist, or channel not found"},
    500: {"model": ErrorEnvelope, "description": "yt-dlp failed or produced unparseable output"},
}
