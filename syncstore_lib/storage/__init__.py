"""Storage abstraction package for syncstore."""
from __future__ import annotations
import os
from pathlib import Path
from typing import Dict, Type

from .base import SyncedStore
from .errors import StoreError, StoreFormatError, UnsupportedValueError
from .json_backend import JsonStore
from .yaml_backend import YamlStore

BACKENDS: Dict[str, Type[SyncedStore]] = {
    "json": JsonStore,
    "yaml": YamlStore,
}


def create_store(path: str | os.PathLike[str], backend: str = "json") -> SyncedStore:
    """Return a store of the named backend bound to `path`.

    A path without a suffix gets the backend serializer's extension, so
    `create_store("prefs", "yaml")` opens `prefs.yml`. Raises ValueError
    for an unknown backend name.
    """
    try:
        cls = BACKENDS[backend.lower()]
    except KeyError:
        raise ValueError(f"Unknown store backend {backend!r}; expected one of {sorted(BACKENDS)}") from None
    target = Path(path)
    serializer = getattr(cls, "serializer", None)
    if not target.suffix and serializer is not None:
        target = target.with_name(target.name + serializer.file_extension)
    return cls(target)


__all__ = [
    "SyncedStore",
    "JsonStore",
    "YamlStore",
    "StoreError",
    "StoreFormatError",
    "UnsupportedValueError",
    "BACKENDS",
    "create_store",
]
