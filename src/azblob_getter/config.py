"""Getter configuration helpers."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import ACCESS_KEY_PARAM, CONFIG_ENV_VAR, CONFIG_FILE, ENV_PREFIX, MAX_PAGE_SIZE
from .errors import ConfigError


class GetterSettings(BaseModel):
    """Tunables for listing and downloading."""
    model_config = ConfigDict(extra="forbid")

    page_size: int = Field(default=MAX_PAGE_SIZE, gt=0, le=MAX_PAGE_SIZE)
    max_workers: int = Field(default=1, ge=1)   # >1 downloads a page's objects in parallel
    connection_timeout: Optional[float] = Field(default=None, gt=0)  # seconds
    read_timeout: Optional[float] = Field(default=None, gt=0)        # seconds
    chunk_size: Optional[int] = Field(default=None, gt=0)           # bytes per download request
    access_key_param: str = ACCESS_KEY_PARAM

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the Azure client's transport."""
        kwargs: Dict[str, Any] = {}
        if self.connection_timeout is not None:
            kwargs["connection_timeout"] = self.connection_timeout
        if self.read_timeout is not None:
            kwargs["read_timeout"] = self.read_timeout
        if self.chunk_size is not None:
            kwargs["max_chunk_get_size"] = self.chunk_size
        return kwargs


def _env_overrides() -> Dict[str, str]:
    overrides = {}
    for field_name in GetterSettings.model_fields:
        value = os.environ.get(ENV_PREFIX + field_name.upper())
        if value:
            overrides[field_name] = value
    return overrides


def load_settings(path: Optional[Path] = None) -> GetterSettings:
    """
    Load settings from YAML, then apply AZBLOB_GETTER_* environment overrides.

    The file is, in order: path, $AZBLOB_GETTER_CONFIG, ./azblob-getter.yaml.
    A missing default file means defaults; a missing explicit file is an error.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    explicit = path is not None or CONFIG_ENV_VAR in os.environ
    cfg_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILE)

    data: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            data = yaml.safe_load(cfg_path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read settings from {cfg_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Settings in {cfg_path} must be a mapping")
    elif explicit:
        raise ConfigError(f"Settings file not found: {cfg_path}")

    data.update(_env_overrides())

    try:
        return GetterSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
