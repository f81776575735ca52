from typing import Any, Protocol
import json
import yaml

from .errors import StoreFormatError, UnsupportedValueError


class Serializer(Protocol):
    """Serialize/deserialize a store document for file-backed stores.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `load` raises `StoreFormatError` for content it cannot parse and `dump`
    raises `UnsupportedValueError` for values the format cannot encode.
    """

    file_extension: str

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text) with a fixed, human-readable indent."""

    file_extension = ".json"

    def __init__(self, indent: int = 3) -> None:
        self.indent = indent

    def dump(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, indent=self.indent, ensure_ascii=False, allow_nan=False)
            return text.encode("utf-8")
        except (TypeError, ValueError) as e:
            # TypeError: unknown object type, ValueError: NaN/inf, a circular reference or a lone surrogate
            raise UnsupportedValueError(f"cannot encode value as JSON: {e}") from e

    def load(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise StoreFormatError("JSON document is not valid UTF-8") from e
        except json.JSONDecodeError as e:
            raise StoreFormatError(f"JSON syntax error: {e}") from e


class _SafeDumper(yaml.SafeDumper):
    pass


# tuples are written as plain sequences, the same way the JSON encoder treats them
_SafeDumper.add_representer(tuple, yaml.SafeDumper.represent_list)


class YAMLSerializer:
    """Serializer using YAML (text). Only plain YAML types are written."""

    file_extension = ".yml"

    def dump(self, value: Any) -> bytes:
        try:
            text = yaml.dump(value, Dumper=_SafeDumper, sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as e:
            raise UnsupportedValueError(f"cannot encode value as YAML: {e}") from e
        return text.encode("utf-8")

    def load(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise StoreFormatError("YAML document is not valid UTF-8") from e
        except yaml.YAMLError as e:
            raise StoreFormatError(f"YAML syntax error: {e}") from e
