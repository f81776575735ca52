"""File-synchronized mapping base class.

Defines the SyncedStore abstract class: a `MutableMapping[str, Any]` whose
in-memory cache is reconciled with a backing file before values are read
and flushed to that file after every mutation. Implementations supply the
on-disk format by overriding the four backend hooks.

Staleness is decided solely by the file's modification time. The store
remembers the mtime it last observed; a differing (or unset) mtime causes
a reload before reads and a write before the timestamp is recorded again.

Note: `len()`, `is_empty()`, `in` and `contains_value()` read the cache
without reconciling and may lag behind external edits of the file until
the next reconciling call.
"""
from __future__ import annotations
import copy
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import ItemsView, KeysView, Mapping, MutableMapping, ValuesView
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional

from .errors import UnsupportedValueError
from .locking import ReadWriteLock

logger = logging.getLogger(__name__)

_MISSING = object()


class SyncedStore(MutableMapping, ABC):
    """Abstract file-synchronized key-value store.

    Thread-safe within one process. Stores in other processes (or other
    instances in this one) bound to the same file are reconciled on a
    last-writer-wins basis through the mtime check only.
    """

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self._file_path = Path(file_path)
        self._lock = ReadWriteLock()
        self._observed_mtime: Optional[int] = None
        self._cache: Optional[Dict[str, Any]] = {}

    # Backend hooks ---------------------------------------------------

    @abstractmethod
    def load_from_file(self) -> None:
        """Parse the backing file and replace the cache with its content.

        Raise `StoreFormatError` if the content is unparsable; the cache
        must be left untouched in that case.
        """

    @abstractmethod
    def save_to_file(self) -> None:
        """Serialize the cache to the backing file, fully overwriting it.

        Raise `UnsupportedValueError` if the cache holds a value the format
        cannot encode.
        """

    @abstractmethod
    def create_empty_file(self) -> None:
        """Create the backing file (and parent directories) as an empty store."""

    @abstractmethod
    def is_representable(self, value: Any) -> bool:
        """Return True if `value` can be stored and retrieved by this format."""

    # Synchronization -------------------------------------------------

    @property
    def path(self) -> Path:
        return self._file_path

    @property
    def observed_mtime(self) -> Optional[int]:
        """Modification time (ns) of the backing file at the last sync, or None."""
        with self._lock.read_locked():
            return self._observed_mtime

    def _current_mtime(self) -> int:
        return self._file_path.stat().st_mtime_ns

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            logger.debug("Creating empty store file %s", self._file_path)
            self.create_empty_file()
            # a recreated file may share the old file's mtime on coarse clocks
            self._invalidate()

    def _is_stale(self) -> bool:
        return self._observed_mtime is None or self._current_mtime() != self._observed_mtime

    def _reconcile(self) -> None:
        with self._lock.write_locked():
            self._ensure_file()
            if self._is_stale():
                logger.debug("Reloading %s (observed mtime %s)", self._file_path, self._observed_mtime)
                self.load_from_file()
                self._observed_mtime = self._current_mtime()

    def _flush(self) -> None:
        with self._lock.write_locked():
            self._ensure_file()
            if self._is_stale():
                if self._cache is not None:
                    self.save_to_file()
                    logger.debug("Flushed %d entries to %s", len(self._cache), self._file_path)
                self._observed_mtime = self._current_mtime()

    def _invalidate(self) -> None:
        self._observed_mtime = None

    def _commit(self) -> None:
        self._invalidate()
        self._flush()

    def _check_entry(self, key: Any, value: Any) -> None:
        if not isinstance(key, str):
            raise UnsupportedValueError(
                f"Cannot use key of type {type(key).__name__} in {type(self).__name__}; keys must be str")
        if value is not None and not self.is_representable(value):
            logger.warning("Rejected value of type %s for key %r", type(value).__name__, key)
            raise UnsupportedValueError(
                f"Cannot store object of type {type(value).__name__} in {type(self).__name__}")

    def _copy_in(self, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, dict):
            value = dict(value)
        try:
            return copy.deepcopy(value)
        except (TypeError, copy.Error) as e:
            raise UnsupportedValueError(
                f"Cannot copy object of type {type(value).__name__} into {type(self).__name__}: {e}") from e

    # Cache-only reads ------------------------------------------------

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._cache)

    def is_empty(self) -> bool:
        with self._lock.read_locked():
            return not self._cache

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._cache

    def contains_value(self, value: Any) -> bool:
        with self._lock.read_locked():
            return any(v == value for v in self._cache.values())

    # Reconciling reads -----------------------------------------------

    def __getitem__(self, key: str) -> Any:
        with self._lock.write_locked():
            self._reconcile()
            return copy.deepcopy(self._cache[key])

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock.write_locked():
            self._reconcile()
            if key in self._cache:
                return copy.deepcopy(self._cache[key])
            return default

    def _snapshot(self) -> Mapping[str, Any]:
        with self._lock.write_locked():
            self._reconcile()
            return MappingProxyType(copy.deepcopy(self._cache))

    def keys(self) -> KeysView:
        return self._snapshot().keys()

    def values(self) -> ValuesView:
        return self._snapshot().values()

    def items(self) -> ItemsView:
        return self._snapshot().items()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def to_dict(self) -> Dict[str, Any]:
        """Return a reconciled deep copy of the whole store as a plain dict."""
        return dict(self._snapshot())

    # Mutations -------------------------------------------------------

    def put(self, key: str, value: Any) -> Any:
        """Store `value` under `key` and flush. Returns the previous value or None."""
        self._check_entry(key, value)
        value = self._copy_in(value)
        with self._lock.write_locked():
            self._reconcile()
            previous = self._cache.get(key)
            self._cache[key] = value
            self._commit()
            return previous

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def remove(self, key: str) -> Any:
        """Delete `key` if present and flush. Returns the previous value or None."""
        with self._lock.write_locked():
            self._reconcile()
            previous = self._cache.pop(key, None)
            self._commit()
            return previous

    def __delitem__(self, key: str) -> None:
        with self._lock.write_locked():
            self._reconcile()
            del self._cache[key]
            self._commit()

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        with self._lock.write_locked():
            self._reconcile()
            if key not in self._cache:
                if default is _MISSING:
                    raise KeyError(key)
                return default
            previous = self._cache.pop(key)
            self._commit()
            return previous

    def popitem(self) -> tuple:
        with self._lock.write_locked():
            self._reconcile()
            if not self._cache:
                raise KeyError("popitem(): store is empty")
            item = self._cache.popitem()
            self._commit()
            return item

    def setdefault(self, key: str, default: Any = None) -> Any:
        self._check_entry(key, default)
        stored = self._copy_in(default)
        with self._lock.write_locked():
            self._reconcile()
            if key in self._cache:
                return copy.deepcopy(self._cache[key])
            self._cache[key] = stored
            self._commit()
            return default

    def put_all(self, entries: Mapping[str, Any]) -> None:
        """Merge `entries` into the store with a single flush.

        Every key and value is validated before the cache is touched.
        """
        entries = dict(entries)
        for key, value in entries.items():
            self._check_entry(key, value)
        entries = {key: self._copy_in(value) for key, value in entries.items()}
        with self._lock.write_locked():
            self._reconcile()
            self._cache.update(entries)
            self._commit()

    def update(self, other: Any = (), /, **kwds: Any) -> None:
        merged = dict(other)
        merged.update(kwds)
        self.put_all(merged)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._cache.clear()
            self._commit()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._file_path)!r})"
