"""Logging setup for TubeMeta with file and console output"""

import asyncio
import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Any, Optional


def setup_logging(
    log_level: str = "INFO",
    log_file_name: str | None = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Set up logging for the TubeMeta server.

    This configures logging to write to:
    - Console (stdout)
    - File with rotation

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_name: Path to log file (can be absolute or relative)
        log_to_console: Whether to log to console
        log_to_file: Whether to log to file
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup files to keep (default 5)
        log_format: Custom log format string

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    log_path = Path(log_file_name or "logs/tubemeta.log")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    root_logger.info(f"TubeMeta logging initialized - Level: {log_level}")
    if log_to_file:
        root_logger.info(
            f"Log file: {log_path} (max {max_bytes / (1024*1024):.1f} MB, backups: {backup_count})"
        )

    return root_logger


_hook_logger = logging.getLogger("tubemeta.uncaught")


def _log_uncaught(exc_type, exc_value, exc_traceback) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    _hook_logger.error(
        "There was an uncaught error",
        exc_info=(exc_type, exc_value, exc_traceback),
    )


def _log_thread_exception(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    thread_name = args.thread.name if args.thread else "unknown"
    _hook_logger.error(
        f"Uncaught error in thread {thread_name}",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    exception = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exception is not None:
        _hook_logger.error(
            f"Unhandled rejection: {message}",
            exc_info=(type(exception), exception, exception.__traceback__),
        )
    else:
        _hook_logger.error(f"Unhandled rejection: {message}")


def install_exception_hooks(loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
    """
    Log uncaught exceptions process-wide instead of letting them end the server.

    Covers the main thread, worker threads, and, when ``loop`` is given,
    task exceptions nobody retrieved. Installed once at startup.
    """
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_exception
    if loop is not None:
        loop.set_exception_handler(_log_loop_exception)
