"""
TubeMeta Main Application

FastAPI application entry point.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tubemeta import __version__
from tubemeta.config import get_config, load_config, parse_size
from tubemeta.extractor.errors import ExtractorError
from tubemeta.extractor.runner import get_runner
from tubemeta.utils.logging_setup import install_exception_hooks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup:
    - Install process-wide exception logging
    - Probe the yt-dlp executable (logged, never fatal)
    """
    logger.info(f"Starting TubeMeta v{__version__}")

    install_exception_hooks(asyncio.get_running_loop())

    runner = get_runner()
    logger.info(f"Attempting to use yt-dlp executable at: {runner.executable}")
    probe = await runner.probe_version()
    if probe["status"] == "ok":
        logger.info(f"[OK] yt-dlp version check successful: {probe['version']}")
    else:
        logger.warning(
            f"[Warning] yt-dlp command check failed. Ensure '{runner.executable}' "
            "is installed correctly and executable."
        )
        logger.warning(f"Error: {probe['error']}")

    yield

    logger.info("TubeMeta shutdown complete")


async def extractor_error_handler(request: Request, exc: ExtractorError) -> JSONResponse:
    """Render pipeline failures as the JSON error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and other framework errors use the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error."},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    config = get_config()

    app = FastAPI(
        title="TubeMeta",
        description="YouTube video, comment, playlist, and channel metadata via yt-dlp",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ExtractorError, extractor_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    from tubemeta.api import api_router
    app.include_router(api_router)

    return app


def main() -> None:
    """
    Main entry point for running the server.

    Called when running `python -m tubemeta` or via the `tubemeta` script.
    """
    import uvicorn
    from tubemeta.utils.logging_setup import setup_logging

    config = load_config()

    setup_logging(
        log_level=config.logging.level,
        log_file_name=config.logging.file,
        log_to_console=True,
        log_to_file=config.logging.to_file,
        max_bytes=parse_size(config.logging.max_size),
        backup_count=config.logging.backup_count,
        log_format=config.logging.format,
    )

    logger.info(f"Server running on http://{config.server.host}:{config.server.port}")

    uvicorn.run(
        "tubemeta.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
        log_level=config.server.log_level.lower(),
    )


# Create the app instance
app = create_app()

if __name__ == "__main__":
    main()
