"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    db_url:           str   = "sqlite:///blogpub.db"
    api_base_url:     str   = Field(default="http://localhost:3000", description="Articles REST API base URL")
    api_timeout:      float = Field(default=10.0, gt=0, description="Seconds before an API call counts as failed")
    words_per_minute: int   = Field(default=225, ge=1, description="Reading speed used for reading_time")
    excerpt_length:   int   = Field(default=160, ge=1, description="Max characters of a generated excerpt")
    default_author:   str   = Field(default="Anonymous", max_length=100)
    drafts_dir:       str   = Field(default=".blogpub/drafts", description="Directory for local draft snapshots")
    log_level:        str   = Field(default="INFO", pattern="^(TRACE|DEBUG|INFO|SUCCESS|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGPUB_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"BLOGPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
