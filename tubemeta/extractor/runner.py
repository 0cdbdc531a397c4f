"""
yt-dlp process runner.

Launches one yt-dlp process per request and collects its output. Each output
stream is capped; a process that exceeds the cap is killed rather than having
its output truncated.
"""

import asyncio
import logging
import shlex
from dataclasses import dataclass
from typing import Any, Optional

from tubemeta.config import ExtractorConfig, get_config
from tubemeta.extractor.commands import ExtractorCommand
from tubemeta.extractor.errors import ErrorClassifier
from tubemeta.extractor.normalizer import normalize_output
from tubemeta.utils.paths import get_project_root

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "yt-dlp"


def resolve_executable(configured_path: Optional[str] = None) -> str:
    """
    Pick the yt-dlp executable.

    Order: explicit configuration, a ``yt-dlp`` file in the project root,
    then ``yt-dlp`` looked up on PATH at launch time.
    """
    if configured_path:
        return configured_path
    local = get_project_root() / DEFAULT_EXECUTABLE
    if local.exists():
        return str(local)
    return DEFAULT_EXECUTABLE


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a single yt-dlp invocation."""

    exit_status: Optional[int]
    stdout: bytes = b""
    stderr: bytes = b""
    killed: bool = False
    launch_error: Optional[str] = None
    not_found: bool = False
    launch_failed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0 and not self.killed and self.launch_error is None

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


class ExtractorRunner:
    """
    Runs yt-dlp commands and turns their output into response envelopes.

    No concurrency limit and no timeout: every call spawns its own process
    and waits for it to exit.
    """

    def __init__(self, settings: Optional[ExtractorConfig] = None):
        self.settings = settings or ExtractorConfig()
        self.executable = resolve_executable(self.settings.path)

    async def run(self, command: ExtractorCommand) -> ProcessResult:
        """
        Execute a command and collect its output.

        Launch failures are reported in the result, not raised.

        Args:
            command: Built yt-dlp command.

        Returns:
            ProcessResult for the invocation.
        """
        argv = [self.executable, *command.args]
        logger.info(f"Executing: {shlex.join(argv)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            logger.error(f"yt-dlp executable not found: {self.executable}")
            return ProcessResult(
                exit_status=None, launch_error=str(e), not_found=True, launch_failed=True
            )
        except OSError as e:
            logger.error(f"Failed to launch yt-dlp at {self.executable}: {e}")
            return ProcessResult(exit_status=None, launch_error=str(e), launch_failed=True)

        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []
        overflow = False

        async def pump(stream: asyncio.StreamReader, chunks: list[bytes]) -> None:
            nonlocal overflow
            size = 0
            while True:
                chunk = await stream.read(self.settings.read_size)
                if not chunk:
                    return
                size += len(chunk)
                if size > self.settings.max_output_bytes:
                    if not overflow:
                        overflow = True
                        logger.warning(
                            f"yt-dlp output exceeded {self.settings.max_output_bytes} bytes, "
                            f"killing pid {process.pid}"
                        )
                        try:
                            process.kill()
                        except ProcessLookupError:
                            pass
                    return
                chunks.append(chunk)

        await asyncio.gather(
            pump(process.stdout, stdout_chunks),
            pump(process.stderr, stderr_chunks),
        )
        returncode = await process.wait()

        # Negative return codes mean the process died on a signal
        killed = overflow or returncode < 0

        return ProcessResult(
            exit_status=returncode,
            stdout=b"".join(stdout_chunks),
            stderr=b"".join(stderr_chunks),
            killed=killed,
        )

    async def extract(self, command: ExtractorCommand) -> dict[str, Any]:
        """
        Run a command and normalize its output.

        Returns:
            ``{success: True, data: ...}`` envelope.

        Raises:
            ExtractorError: Classified failure for the request.
        """
        result = await self.run(command)

        if not result.succeeded:
            logger.error(
                f"yt-dlp failed (exit={result.exit_status}, killed={result.killed}): "
                f"{result.launch_error or ''}"
            )
            if result.stderr:
                logger.error(f"Stderr: {result.stderr_text}")
            raise ErrorClassifier.classify(result, self.executable)

        return normalize_output(result.stdout_text, result.stderr_text)

    async def probe_version(self) -> dict[str, Any]:
        """
        Run ``yt-dlp --version``.

        Returns:
            dict with ``status`` ("ok" or "error"), ``path`` and either
            ``version`` or ``error``.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                "--version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return {
                "status": "error",
                "path": self.executable,
                "error": "yt-dlp not found",
            }
        except OSError as e:
            return {"status": "error", "path": self.executable, "error": str(e)}

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=self.settings.version_check_timeout,
            )
        except asyncio.TimeoutError:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            return {
                "status": "error",
                "path": self.executable,
                "error": "yt-dlp version check timed out",
            }

        if process.returncode != 0:
            return {
                "status": "error",
                "path": self.executable,
                "error": stderr.decode("utf-8", errors="replace").strip()
                or f"yt-dlp exited with status {process.returncode}",
            }

        return {
            "status": "ok",
            "path": self.executable,
            "version": stdout.decode("utf-8", errors="replace").strip(),
        }


def get_runner() -> ExtractorRunner:
    """FastAPI dependency providing a runner built from current configuration."""
    return ExtractorRunner(get_config().extractor)
