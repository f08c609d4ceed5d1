"""Configuration management for the MCP scanner.

Supports an optional YAML configuration file and environment variable
overrides. Configuration is loaded once and cached.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "config/scanner.yaml"


class Settings(BaseSettings):
    """Scanner settings."""
    url: Optional[str] = Field(default=None, description="Base URL of the MCP server")
    timeout: float = Field(default=5.0, gt=0, description="Overall fetch deadline in seconds")
    http_timeout: float = Field(default=10.0, gt=0, description="Per-request HTTP timeout in seconds")
    client_name: str = Field(default="cursor-vscode", min_length=1)

    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="MCP_SCANNER_",
        env_file=".env",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file, falling back to defaults."""
        data = load_yaml_config(path)
        return cls(**data)


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Get cached scanner settings."""
    config_path = os.environ.get("MCP_SCANNER_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    return Settings.from_yaml(config_path)
