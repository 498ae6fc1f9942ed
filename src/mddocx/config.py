"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str = "mddocx"
    output_dir:    str = Field(default="dist",             description="Directory for converted .docx / .md files")
    parser_config: str = Field(default="gfm-like",         description="MarkdownIt parser preset name")
    polish:        bool = Field(default=False,             description="Run the AI polisher on markdown text")
    polish_model:  str = Field(default="gemini-2.0-flash", description="Gemini model used by the polisher")
    api_key:       Optional[str] = Field(default=None,     description="Gemini API key; None falls back to GOOGLE_API_KEY")
    image_width:   int = Field(default=500, ge=1,          description="Embedded image width in pixels")
    image_height:  int = Field(default=300, ge=1,          description="Embedded image height in pixels")
    log_level:     str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDDOCX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDDOCX_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
