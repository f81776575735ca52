from typing import Protocol, Any, ItemsView, Iterator, KeysView, Mapping, ValuesView, runtime_checkable


@runtime_checkable
class StoreProtocol(Protocol):
    """Mapping contract exposed by `syncstore_lib.storage.SyncedStore`.

    Consumers (configuration readers, the CLI) should depend on this
    protocol rather than a concrete backend. See the abstract base class in
    `syncstore_lib.storage.base` for the synchronization semantics.
    """

    def get(self, key: str, default: Any = None) -> Any: ...

    def put(self, key: str, value: Any) -> Any: ...

    def remove(self, key: str) -> Any: ...

    def put_all(self, entries: Mapping[str, Any]) -> None: ...

    def clear(self) -> None: ...

    def is_empty(self) -> bool: ...

    def contains_value(self, value: Any) -> bool: ...

    def keys(self) -> KeysView: ...

    def values(self) -> ValuesView: ...

    def items(self) -> ItemsView: ...

    def __len__(self) -> int: ...

    def __contains__(self, key: object) -> bool: ...

    def __iter__(self) -> Iterator[str]: ...
