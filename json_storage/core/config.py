"""
Configuration - Single source of truth for the storage node.

Create once from the environment, pass everywhere.
"""

import os
from dataclasses import dataclass, field


TRUTHY = ("1", "true", "yes", "on")


def default_file_path() -> str:
    """Default store location: ./data/custom_json.json under the working dir."""
    return os.path.join(os.getcwd(), "data", "custom_json.json")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


@dataclass
class Config:
    """
    Node configuration.

    Usage:
        config = Config.from_env()
        tool = JsonStorageTool(config)
    """

    # Store settings
    file_path: str = field(default_factory=default_file_path)
    continue_on_fail: bool = False

    # Logging
    log_level: str = "INFO"

    # HTTP host settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> 'Config':
        """Create config from environment variables."""
        return cls(
            file_path=os.environ.get("JSON_STORAGE_FILE_PATH", default_file_path()),
            continue_on_fail=_env_flag("JSON_STORAGE_CONTINUE_ON_FAIL"),
            log_level=os.environ.get("JSON_STORAGE_LOG_LEVEL", "INFO").upper(),
            api_host=os.environ.get("API_HOST", "0.0.0.0"),
            api_port=int(os.environ.get("API_PORT", 8000)),
        )

    @classmethod
    def for_testing(cls, file_path: str = None) -> 'Config':
        """Create config for tests with an optional isolated store path."""
        config = cls.from_env()
        if file_path is not None:
            config.file_path = file_path
        return config
