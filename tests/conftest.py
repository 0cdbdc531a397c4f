"""
TubeMeta Test Configuration

Shared fixtures and configuration for all tests.
"""

import os
import sys
import threading
from pathlib import Path
from typing import Generator, Optional
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tubemeta import config as config_module
from tubemeta.config import ExtractorConfig, TubeMetaConfig
from tubemeta.extractor.commands import ExtractorCommand
from tubemeta.extractor.runner import ExtractorRunner, ProcessResult, get_runner
from tubemeta.main import create_app


class StubRunner(ExtractorRunner):
    """
    Runner that never starts a process.

    Records every command it is asked to run and returns a canned
    ProcessResult, so classification and normalization run for real.
    """

    def __init__(self, result: Optional[ProcessResult] = None):
        super().__init__(ExtractorConfig(path="yt-dlp"))
        self.result = result or ProcessResult(exit_status=0, stdout=b"{}")
        self.commands: list[ExtractorCommand] = []
        self.probe = {"status": "ok", "path": "yt-dlp", "version": "2024.12.13"}

    async def run(self, command: ExtractorCommand) -> ProcessResult:
        self.commands.append(command)
        return self.result

    async def probe_version(self) -> dict:
        return dict(self.probe)


# ============ Configuration Fixtures ============


@pytest.fixture(autouse=True)
def default_config() -> Generator[TubeMetaConfig, None, None]:
    """Start every test from built-in defaults, ignoring any config.yaml."""
    original = config_module._config
    config_module._config = TubeMetaConfig()
    yield config_module._config
    config_module._config = original


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables for each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("TUBEMETA_") or key == "PORT":
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
server:
  host: "127.0.0.1"
  port: 8080
  debug: true

extractor:
  path: "/opt/bin/yt-dlp"
  video_max_comments: 10

logging:
  level: "DEBUG"
  max_size: "5MB"
"""
    )
    return config_file


# ============ FastAPI Test Client Fixtures ============


@pytest.fixture
def stub_runner() -> StubRunner:
    return StubRunner()


@pytest.fixture
def app(stub_runner: StubRunner) -> FastAPI:
    """Create a test FastAPI application with the runner replaced."""
    app = create_app()
    app.dependency_overrides[get_runner] = lambda: stub_runner
    return app


@pytest.fixture
def client(
    app: FastAPI,
    stub_runner: StubRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[TestClient, None, None]:
    """Create a synchronous test client (runs the lifespan)."""
    # Startup installs process-wide hooks; put the originals back afterwards
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)

    with patch("tubemeta.main.get_runner", return_value=stub_runner):
        with TestClient(app) as client:
            yield client


# ============ Markers ============


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
