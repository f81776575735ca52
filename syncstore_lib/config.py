"""Settings for applications that open a store by name.

Settings come from an optional YAML file (default `syncstore.yml` in the
working directory):

    app_name: myapp
    filename: settings.json
    backend: json        # json | yaml
    portable: false      # true keeps the store under the working directory
    log_level: INFO
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, field_validator

from syncstore_lib.paths import get_resource_file_path
from syncstore_lib.storage import BACKENDS, SyncedStore, create_store

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("syncstore.yml")


class StoreSettings(BaseModel):
    app_name: str = "syncstore"
    filename: str = "store.json"
    backend: str = "json"
    portable: bool = False
    log_level: str = "WARNING"

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in BACKENDS:
            raise ValueError(f"unknown backend {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v


def read_config_file(path: Optional[Path] = None) -> dict:
    """Return the raw mapping from a YAML config file, or {} if it is missing."""
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return {}
    with cfg_path.open('r', encoding='utf-8') as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid config format in {cfg_path}: parse error") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"invalid config format in {cfg_path}: expected mapping")
    return data


def load_settings(path: Optional[Path] = None) -> StoreSettings:
    settings = StoreSettings(**read_config_file(path))
    logger.debug("Loaded settings: %s", settings)
    return settings


def store_path(settings: StoreSettings) -> Path:
    return get_resource_file_path(settings.app_name, settings.filename, settings.portable)


def open_app_store(settings: StoreSettings) -> SyncedStore:
    """Create the store described by `settings`. The file is created lazily."""
    path = store_path(settings)
    logger.info("Opening %s store at %s", settings.backend, path)
    return create_store(path, backend=settings.backend)
