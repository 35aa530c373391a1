"""Server configuration, config file loading, and environment overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 41888


def get_data_dir() -> Path:
    env = os.environ.get("GASTIPS_DATA_DIR")
    if env:
        return Path(env)
    return Path.home() / ".gastips" / "data"


def get_api_url() -> str:
    port = os.environ.get("GASTIPS_PORT", str(DEFAULT_PORT))
    return f"http://127.0.0.1:{port}"


@dataclass
class Config:
    port: int = DEFAULT_PORT


def load_config(path: Path | None = None) -> Config:
    """Load server config from JSON file with env var overrides."""
    config = Config()

    if path and path.exists():
        try:
            data = json.loads(path.read_text())
            section = data.get("server", {})
            if isinstance(section, dict) and isinstance(section.get("port"), int):
                config.port = section["port"]
        except (json.JSONDecodeError, OSError):
            pass

    port_env = os.environ.get("GASTIPS_PORT")
    if port_env:
        config.port = int(port_env)

    return config
