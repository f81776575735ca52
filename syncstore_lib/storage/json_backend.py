"""SyncedStore implementation that keeps its data in a single JSON file.

The file holds one JSON object at its root, written with a 3 space indent.
Writes go to a temporary sibling file that replaces the target once fully
written, so a failed encode or an interrupted write leaves the previous
document in place.
"""
from __future__ import annotations
import logging
import numbers
import os
from collections.abc import Mapping
from typing import Any

from .base import SyncedStore
from .errors import StoreFormatError
from .serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)


class JsonStore(SyncedStore):
    """Mapping that syncs to a JSON file whenever it changes. Thread-safe.

    Parameters
    - file_path: path to the JSON file. It is created (with its parent
      directories) on first access, not at construction.
    """

    serializer: Serializer = JSONSerializer(indent=3)
    document_name = "JSON"

    def _write_bytes(self, data: bytes) -> None:
        path = self.path
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

    def _guarantee_parent(self) -> None:
        parent = self.path.parent
        if not parent.exists():
            os.makedirs(parent, exist_ok=True)

    def load_from_file(self) -> None:
        with open(self.path, "rb") as f:
            data = f.read()
        logger.debug("%s loaded %s (%d bytes)", type(self).__name__, self.path, len(data))
        document = self._parse_document(data)
        self._cache = document

    def _parse_document(self, data: bytes) -> dict:
        return self._check_document(self.serializer.load(data))

    def _check_document(self, document: Any) -> dict:
        if not isinstance(document, dict):
            raise StoreFormatError(
                f"{self.document_name} document in {self.path} must be an object, "
                f"got {type(document).__name__}")
        return document

    def save_to_file(self) -> None:
        # encode first so an unsupported value never truncates the file
        data = self.serializer.dump(self._cache)
        self._guarantee_parent()
        self._write_bytes(data)
        # memory must equal what a reload would produce (tuples become lists, JSON keys become str)
        self._cache = self._parse_document(data)

    def create_empty_file(self) -> None:
        self._guarantee_parent()
        if self.path.exists():
            return
        self._write_bytes(self.serializer.dump({}))

    def is_representable(self, value: Any) -> bool:
        if isinstance(value, str):
            return True
        if isinstance(value, (bytes, bytearray)):
            return False
        # bool is a Number subclass
        if isinstance(value, numbers.Number):
            return True
        if isinstance(value, Mapping):
            return True
        if isinstance(value, (list, tuple)):
            # only the first element gates acceptance; the encoder catches the rest on save
            if len(value) > 0:
                return self.is_representable(value[0])
            return True
        return False
