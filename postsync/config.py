"""Configuration loading for postsync."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class RemoteConfig:
    """Configuration for the remote document store."""

    base_url: str = ""
    collection: str = "posts"
    suffix: str = ".json"  # Firebase REST paths end in .json
    timeout: float = 10.0


@dataclass
class DashboardConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    title: str = "Posts"


@dataclass
class LoggingConfig:
    level: str = "info"
    json: bool = False


@dataclass
class Config:
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with POSTSYNC_ prefix."""
    return os.environ.get(f"POSTSYNC_{key}", default)


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config.

    Only the remote address and the request timeout can be overridden.
    """
    if url := _get_env("REMOTE_URL"):
        config.remote.base_url = url
    if timeout := _get_env("REMOTE_TIMEOUT"):
        config.remote.timeout = float(timeout)

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. If None, uses default config.

    Returns:
        Loaded Config object.
    """
    config = Config()

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}

            if "remote" in data:
                remote_data = data["remote"]
                config.remote = RemoteConfig(
                    base_url=remote_data.get("base_url", config.remote.base_url),
                    collection=remote_data.get(
                        "collection", config.remote.collection
                    ),
                    suffix=remote_data.get("suffix", config.remote.suffix),
                    timeout=float(
                        remote_data.get("timeout", config.remote.timeout)
                    ),
                )

            if "dashboard" in data:
                dash_data = data["dashboard"]
                config.dashboard = DashboardConfig(
                    host=dash_data.get("host", config.dashboard.host),
                    port=dash_data.get("port", config.dashboard.port),
                    title=dash_data.get("title", config.dashboard.title),
                )

            if "logging" in data:
                log_data = data["logging"]
                config.logging = LoggingConfig(
                    level=log_data.get("level", config.logging.level),
                    json=log_data.get("json", config.logging.json),
                )

    return _apply_env_overrides(config)
