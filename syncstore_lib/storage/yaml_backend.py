"""SyncedStore implementation backed by a YAML mapping document.

Uses the same value rules as `JsonStore`; only the document encoding
differs. An empty file (or a bare `null` document) loads as an empty store.
"""
from __future__ import annotations
from typing import Any

from .json_backend import JsonStore
from .serializer import Serializer, YAMLSerializer


class YamlStore(JsonStore):
    serializer: Serializer = YAMLSerializer()
    document_name = "YAML"

    def _check_document(self, document: Any) -> dict:
        if document is None:
            return {}
        return super()._check_document(document)
