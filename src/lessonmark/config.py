"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "LESSONMARK_"


class Settings(BaseModel):
    app_name:   str = "lessonmark"
    db_url:     str = "sqlite:///lessonmark.db"
    id_length:  int = Field(default=9, ge=4, le=32, description="Length of generated block ids")
    unescape:   str = Field(default="auto", pattern="^(auto|always|never)$",
                            description="Entity un-escaping applied to markup before display")
    max_depth:  int = Field(default=256, ge=1, description="Deepest element nesting walked by parser and renderer")
    highlight:  bool = Field(default=True, description="Attach syntax-highlight token spans to code views")
    copy_reset_seconds: float = Field(default=2.0, gt=0, description="How long a code view stays in the copied state")
    log_level:  str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then LESSONMARK_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
