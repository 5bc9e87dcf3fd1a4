"""Configuration for the HTML template engine."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator


# Tag that wrapper elements written with the marker as their name
# ("<:>...</:>") are parsed as.
WRAPPER_TAG = "html-templates-wrapper"

DEFAULT_HANDLERS = ["nest", "foreach", "with", "without", "as", "text", "append"]


class RenderConfig(BaseModel):
    """Engine settings, fixed for the lifetime of an Engine."""

    marker: str = ":"
    nesting_separator: str = "/"
    listing_separator: str = ","
    template_folder: str = "templates"
    text_attribute: str = "text"
    wrapper_tag: str | None = None
    handlers: list[str] = DEFAULT_HANDLERS
    max_include_depth: int = 16

    model_config = {"frozen": True}

    @field_validator("marker", "nesting_separator")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def wrapper(self) -> str:
        return self.wrapper_tag or WRAPPER_TAG


DEFAULT_CONFIG = RenderConfig()


def load_config(path: str | Path) -> RenderConfig:
    """Load a RenderConfig from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return RenderConfig.model_validate(data)
