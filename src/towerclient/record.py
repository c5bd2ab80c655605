"""
JSON document wrapper with generated accessors.

A ``Record`` exposes every top-level key of a JSON object as a snake_case
attribute, wrapping nested objects (and objects inside arrays) into Records
of a derived child type.  Subclasses can exclude field paths from wrapping::

    class Person(Record, exclude=("address#geo",)):
        pass

    person = Person('{"firstName": "jeff", "address": {"zipCode": "01013"}}')
    person.first_name          # 'jeff'
    person.address.zip_code    # '01013'
    person.to_json()           # the original document
"""
import copy
import json
import threading
from typing import Any, Iterable, Iterator, Mapping

from ._utils import load_json, to_snake_case
from .exceptions import ParseError

SEPARATOR = "#"
COLLISION_PREFIX = "_"

_registry_lock = threading.Lock()
_effective_paths: dict[type, frozenset[str]] = {}
_child_types: dict[frozenset[str], type] = {}


def normalize_paths(paths: Iterable[str]) -> frozenset[str]:
    normalized = set()
    for path in paths:
        path = str(path).strip().replace(".", SEPARATOR)
        if path:
            normalized.add(path)
    return frozenset(normalized)


def descend_paths(paths: Iterable[str]) -> frozenset[str]:
    """
    Exclusion paths that apply one nesting level down.

    ``"vars#ansible_host"`` becomes ``"ansible_host"``; paths without a
    separator only apply at the current level and are dropped.
    """
    return frozenset(
        suffix
        for suffix in (
            path.split(SEPARATOR, 1)[1] for path in paths if SEPARATOR in path
        )
        if suffix
    )


def _unwrap(value: Any) -> Any:
    if isinstance(value, Record):
        return {k: _unwrap(v) for k, v in value._data.items()}
    elif isinstance(value, Mapping):
        return {k: _unwrap(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_unwrap(v) for v in value]
    return value


def _is_dunder(name: str) -> bool:
    # protocol lookups (__deepcopy__, __len__, ...) must never hit a document field
    return name[:2] == name[-2:] == "__" and name[2:3] != "_" and len(name) > 4


def _strict_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, Record):
        return _strict_equal(a._data, b._data)
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_strict_equal(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(_strict_equal(x, y) for x, y in zip(a, b))
    return a == b


class Record:
    _declared_paths: frozenset[str] = frozenset()

    def __init_subclass__(cls, exclude: Iterable[str] = (), **kwargs):
        super().__init_subclass__(**kwargs)
        cls._declared_paths = normalize_paths(exclude)

    def __init__(self, data: str | bytes | Mapping | None = None):
        self._load(self._parse(data))

    # section: exclusion registry #############################################

    @classmethod
    def exclude_paths(cls, *paths: str) -> None:
        """
        Merge field paths into this class's own exclusion set.
        """
        cls._declared_paths = cls.__dict__.get(
            "_declared_paths", frozenset()
        ) | normalize_paths(paths)
        _invalidate_registry()

    @classmethod
    def excluded_paths(cls) -> frozenset[str]:
        """
        Effective exclusion set: own paths plus those of every Record base.
        """
        paths = _effective_paths.get(cls)
        if paths is not None:
            return paths
        with _registry_lock:
            if cls not in _effective_paths:
                _effective_paths[cls] = frozenset().union(
                    *(
                        klass.__dict__.get("_declared_paths", frozenset())
                        for klass in cls.__mro__
                        if issubclass(klass, Record)
                    )
                )
            return _effective_paths[cls]

    @classmethod
    def child_type(cls) -> type["Record"]:
        """
        Record type used to wrap objects nested directly under this one.
        """
        child_paths = descend_paths(cls.excluded_paths())
        if not child_paths:
            return Record
        with _registry_lock:
            child = _child_types.get(child_paths)
            if child is None:
                child = _child_types[child_paths] = type(
                    "Record", (Record,), {"__module__": __name__}, exclude=child_paths
                )
            return child

    # section: wrapping #######################################################

    @staticmethod
    def _parse(data: Any) -> dict:
        if data is None:
            return {}
        if isinstance(data, (Record, Mapping)):
            return copy.deepcopy(_unwrap(data))
        document = load_json(data)
        if not isinstance(document, dict):
            raise ParseError(
                f"expected a JSON object, got {type(document).__name__}"
            )
        return document

    def _load(self, data: dict) -> None:
        object.__setattr__(self, "_data", {})
        object.__setattr__(self, "_accessors", {})
        object.__setattr__(self, "_child_type", type(self).child_type())
        for key, value in data.items():
            self[key] = value

    def _wrap(self, key: str, value: Any) -> Any:
        if to_snake_case(key) in self.excluded_paths():
            return value
        if isinstance(value, list):
            return [
                self._child_type(elem) if isinstance(elem, Mapping) else elem
                for elem in value
            ]
        elif isinstance(value, Mapping):
            return self._child_type(value)
        return value

    def _is_taken(self, name: str) -> bool:
        return (
            _is_dunder(name)
            or name in self._accessors
            or name in self.__dict__
            or hasattr(type(self), name)
        )

    def _add_accessor(self, key: str) -> str:
        name = to_snake_case(key)
        while self._is_taken(name):
            name = COLLISION_PREFIX + name
        self._accessors[name] = key
        return name

    def accessors(self) -> dict[str, str]:
        """
        Mapping of accessor name to the document key it reads and writes.
        """
        return dict(self._accessors)

    # section: attribute access ###############################################

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        accessors = self.__dict__.get("_accessors")
        if accessors is not None and name in accessors and not _is_dunder(name):
            return self._data[accessors[name]]
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        key = self.__dict__.get("_accessors", {}).get(name)
        if key is None:
            object.__setattr__(self, name, value)
        else:
            self._data[key] = self._wrap(key, value)

    def __dir__(self) -> Iterable[str]:
        return [*super().__dir__(), *self._accessors]

    # section: indexed access #################################################

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        key_exists = key in self._data
        self._data[key] = self._wrap(key, value)
        if not key_exists:
            self._add_accessor(key)

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        for name, accessor_key in list(self._accessors.items()):
            if accessor_key == key:
                del self._accessors[name]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> Iterable[str]:
        return self._data.keys()

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    # section: identity & serialization #######################################

    def to_dict(self) -> dict:
        return _unwrap(self)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={self._data[key]!r}" for name, key in self._accessors.items()
        )
        return f"<{type(self).__name__} {fields}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore

    def eql(self, other: object) -> bool:
        """
        Strict equality: same class and values of identical types.
        """
        return _strict_equal(self, other)


def _invalidate_registry() -> None:
    with _registry_lock:
        _effective_paths.clear()
        _child_types.clear()
