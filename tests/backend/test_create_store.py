import pytest

from syncstore_lib.storage import JsonStore, SyncedStore, YamlStore, create_store
from syncstore_lib.storage.interfaces import StoreProtocol


def test_create_store_json(tmp_path):
    s = create_store(tmp_path / "data_json" / "s.json")
    assert isinstance(s, JsonStore)
    s.put("a", {"b": 1})
    assert s.get("a") == {"b": 1}


def test_create_store_yaml(tmp_path):
    s = create_store(str(tmp_path / "data_yaml" / "s.yml"), backend="YAML")
    assert isinstance(s, YamlStore)
    s.put("a", [1, 2])
    assert s.get("a") == [1, 2]


def test_create_store_unknown_backend(tmp_path):
    with pytest.raises(ValueError):
        create_store(tmp_path / "s.bin", backend="pickle")


def test_stores_satisfy_protocol(tmp_path):
    s = create_store(tmp_path / "s.json")
    assert isinstance(s, StoreProtocol)
    assert isinstance(s, SyncedStore)


def test_custom_backend_plugs_in(tmp_path):
    class LineStore(SyncedStore):
        """key=value lines, strings only"""

        def load_from_file(self):
            text = self.path.read_text(encoding="utf-8")
            self._cache = dict(line.split("=", 1) for line in text.splitlines() if line)

        def save_to_file(self):
            self.path.write_text("".join(f"{k}={v}\n" for k, v in self._cache.items()), encoding="utf-8")

        def create_empty_file(self):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()

        def is_representable(self, value):
            return isinstance(value, str)

    path = tmp_path / "lines" / "s.txt"
    s = LineStore(path)
    s.put("a", "1")
    s.put("b", "2")
    assert path.read_text(encoding="utf-8") == "a=1\nb=2\n"
    assert LineStore(path).to_dict() == {"a": "1", "b": "2"}
    with pytest.raises(TypeError):
        s.put("c", 3)


@pytest.mark.parametrize("backend,name", [("json", "prefs.json"), ("yaml", "prefs.yml")])
def test_create_store_adds_format_extension(tmp_path, backend, name):
    s = create_store(tmp_path / "prefs", backend=backend)
    assert s.path == tmp_path / name
    s.put("a", 1)
    assert (tmp_path / name).exists()


def test_create_store_keeps_explicit_suffix(tmp_path):
    assert create_store(tmp_path / "prefs.conf", backend="yaml").path == tmp_path / "prefs.conf"
