"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    path_rewrite_rules: str = Field(default="",         description="Path rewrite rules, one 'from:to' per line")
    publish_marker:     str = Field(default="pub-blog", min_length=1, description="Frontmatter key always set to true")
    output_dir:         str = Field(default="dist",     description="Directory for published notes")
    vault_dir:          str = Field(default=".",        description="Root that note paths are relative to")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then GARDENFM_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"GARDENFM_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
