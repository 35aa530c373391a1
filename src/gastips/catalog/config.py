"""CatalogConfig dataclass and loader for catalog source settings."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".gastips.json"


@dataclass
class CatalogConfig:
    source: str | None = None  # None = bundled gas-tips.json
    strict: bool = True


def load_catalog_config(path: Path | None = None) -> CatalogConfig:
    """Load catalog config from .gastips.json."""
    config = CatalogConfig()
    if path and path.exists():
        try:
            text = path.read_text(encoding="utf-8")
            if text.strip():
                data = json.loads(text)
                section = data.get("catalog", {}) if isinstance(data, dict) else {}
                if isinstance(section, dict):
                    _apply(config, section)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load catalog config from {path}: {e}")
    if env_source := os.environ.get("GASTIPS_CATALOG"):
        config.source = env_source
    if env_strict := os.environ.get("GASTIPS_STRICT"):
        config.strict = env_strict.lower() in ("true", "1", "yes")
    return config


def _apply(cfg: CatalogConfig, data: dict[str, object]) -> None:
    if "source" in data and isinstance(data["source"], str):
        cfg.source = data["source"] or None
    if "strict" in data and isinstance(data["strict"], bool):
        cfg.strict = data["strict"]
