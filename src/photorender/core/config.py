"""Engine configuration loaded from an optional YAML file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from photorender.engines.colmap.config import ColmapConfig

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class RenderConfig(BaseModel):
    """Top-level configuration loaded from a render.yaml."""

    colmap: ColmapConfig = Field(default_factory=ColmapConfig)


def load_render_config(config_path: Path | None) -> RenderConfig:
    """Load and validate a YAML config; ``None`` yields the defaults."""
    if config_path is None:
        return RenderConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise InvalidConfiguration(f"Cannot read config file {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"Config file {config_path} must contain a mapping")

    try:
        cfg = RenderConfig(**raw)
    except ValidationError as exc:
        raise InvalidConfiguration(f"Invalid config file {config_path}: {exc}") from exc

    logger.debug(f"Loaded config from {config_path}")
    return cfg
