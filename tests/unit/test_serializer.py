import math

import pytest

from syncstore_lib.storage.errors import StoreFormatError, UnsupportedValueError
from syncstore_lib.storage.serializer import JSONSerializer, YAMLSerializer


def test_json_dump_indent_and_unicode():
    out = JSONSerializer().dump({"name": "Zoë", "n": [1]})
    assert out.decode("utf-8") == '{\n   "name": "Zoë",\n   "n": [\n      1\n   ]\n}'


@pytest.mark.parametrize("value", [{"x": object()}, {"x": math.nan}, {"x": {1, 2}}])
def test_json_dump_unsupported(value):
    with pytest.raises(UnsupportedValueError):
        JSONSerializer().dump(value)


def test_json_dump_circular_reference():
    value = {}
    value["self"] = value
    with pytest.raises(UnsupportedValueError):
        JSONSerializer().dump(value)


@pytest.mark.parametrize("data", [b"", b"{", b"\xff"])
def test_json_load_errors(data):
    with pytest.raises(StoreFormatError):
        JSONSerializer().load(data)


def test_yaml_dump_tuple_as_list():
    assert YAMLSerializer().dump({"t": (1, 2)}) == b"t:\n- 1\n- 2\n"


def test_yaml_dump_unsupported():
    with pytest.raises(UnsupportedValueError):
        YAMLSerializer().dump({"x": object()})


def test_yaml_load_error():
    with pytest.raises(StoreFormatError):
        YAMLSerializer().load(b"key: [unclosed")
