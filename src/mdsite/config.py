"""Site configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class CollectionConfig(BaseModel):
    """Per-collection options. `output: false` makes a collection read-only."""
    output:    bool = True
    permalink: Optional[str] = None
    directory: Optional[str] = Field(default=None, description="Source subdirectory; defaults to _<label>")
    relations: dict[str, dict[str, str]] = Field(default_factory=dict, description="belongs_to / has_many maps")


class TaxonomyConfig(BaseModel):
    key:   str
    title: Optional[str] = None


class DefaultScope(BaseModel):
    path:       str = ""
    collection: Optional[str] = None


class DefaultSet(BaseModel):
    """Front matter values applied to every resource matching scope."""
    scope:  DefaultScope = Field(default_factory=DefaultScope)
    values: dict[str, Any] = Field(default_factory=dict)


def _default_collections() -> dict[str, CollectionConfig]:
    return {
        "posts": CollectionConfig(output=True, permalink="pretty"),
        "pages": CollectionConfig(output=True, permalink="/:path/", directory="."),
        "data":  CollectionConfig(output=False),
    }


def _default_taxonomies() -> dict[str, TaxonomyConfig]:
    return {
        "category": TaxonomyConfig(key="categories", title="Category"),
        "tag":      TaxonomyConfig(key="tags", title="Tag"),
    }


class Settings(BaseModel):
    app_name:      str = "mdsite"
    db_url:        str = "sqlite:///mdsite.db"
    source_dir:    str = Field(default="src",      description="Site source root")
    output_dir:    str = Field(default="output",   description="Directory the built site is written to")
    layouts_dir:   str = Field(default="_layouts", description="Layouts directory, relative to source_dir")
    url:           str = Field(default="",         description="Absolute site URL used for absolute_url")
    base_path:     str = Field(default="",         description="Path prefix for relative URLs")
    permalink:     str = Field(default="pretty",   description="Default permalink style or template")
    parser_config: str = Field(default="commonmark", description="MarkdownIt parser preset name")
    inline_code:   bool = Field(default=False, description="Evaluate !py expressions in front matter")
    future:        bool = Field(default=False, description="Publish resources dated in the future")
    unpublished:   bool = Field(default=False, description="Publish resources marked published: false")
    collections:   dict[str, CollectionConfig] = Field(default_factory=_default_collections)
    taxonomies:    dict[str, TaxonomyConfig]   = Field(default_factory=_default_taxonomies)
    defaults:      list[DefaultSet] = Field(default_factory=list)


# Structured fields are only configurable through config.yaml
_NESTED_FIELDS = {"collections", "taxonomies", "defaults"}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if name in _NESTED_FIELDS:
            continue
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
