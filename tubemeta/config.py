"""
Configuration management for TubeMeta.

Handles loading, validation, and access to application configuration.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["TubeMetaConfig"] = None


class ServerConfig(BaseModel):
    """Server configuration."""
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ExtractorConfig(BaseModel):
    """yt-dlp invocation settings."""
    path: Optional[str] = None  # None = project-local yt-dlp, then PATH
    base_url: str = "https://www.youtube.com"
    max_output_bytes: int = 50 * 1024 * 1024  # per stream
    read_size: int = 65536  # 64KB
    video_max_comments: int = 50
    comments_max_comments: int = 200
    player_client: str = "web"
    version_check_timeout: float = 15.0


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: str = "logs/tubemeta.log"
    to_file: bool = True
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TubeMetaConfig(BaseModel):
    """Main TubeMeta configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> TubeMetaConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = TubeMetaConfig(**config_data)
    return _config


def get_config() -> TubeMetaConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> TubeMetaConfig:
    """Drop the cached configuration and load it again from disk."""
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    # PORT comes first so TUBEMETA_PORT wins when both are set
    env_map = {
        "PORT": ("server", "port"),
        "TUBEMETA_HOST": ("server", "host"),
        "TUBEMETA_PORT": ("server", "port"),
        "TUBEMETA_DEBUG": ("server", "debug"),
        "TUBEMETA_LOG_LEVEL": ("logging", "level"),
        "TUBEMETA_YTDLP_PATH": ("extractor", "path"),
        "TUBEMETA_BASE_URL": ("extractor", "base_url"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def parse_size(size: str, default: int = 10 * 1024 * 1024) -> int:
    """
    Convert a size string such as "10MB" to bytes.

    Unrecognised values fall back to ``default``.
    """
    size_str = size.strip().upper()
    units = {"GB": 1024 ** 3, "MB": 1024 ** 2, "KB": 1024}
    for suffix, factor in units.items():
        if size_str.endswith(suffix):
            try:
                return int(size_str[: -len(suffix)]) * factor
            except ValueError:
                return default
    return default

