# Copyright 2021-present Kensho Technologies, LLC.
"""A mapping keyed by arbitrary values, with a pluggable notion of key equality.

Enum types need to find the enum value declared for an internal value produced by a resolver.
Internal values may be anything: strings and numbers, but also lists, dicts or arbitrary objects.
A plain dict cannot hold unhashable keys, and its equality would conflate True with 1, so the
reverse lookup is instead built on this store.
"""
from abc import ABCMeta, abstractmethod
from collections.abc import Hashable
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar


VT = TypeVar("VT")

_PRIMITIVE_TYPES = (str, int, float)


def _structurally_equal(left: Any, right: Any) -> bool:
    """Deep equality over lists/tuples/dicts, with type-strict comparison of the leaves."""
    if isinstance(left, (list, tuple)):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(_structurally_equal(a, b) for a, b in zip(left, right))
    elif isinstance(left, dict):
        if not isinstance(right, dict) or left.keys() != right.keys():
            return False
        return all(_structurally_equal(left[key], right[key]) for key in left)
    elif left is None or isinstance(left, (bool,) + _PRIMITIVE_TYPES):
        return type(left) is type(right) and left == right
    else:
        return left is right or (_uses_value_equality(left) and left == right)


def _uses_value_equality(value: Any) -> bool:
    """Return True if the object's class opts into value equality and is hashable."""
    return type(value).__eq__ is not object.__eq__ and isinstance(value, Hashable)


class KeyEqualityStrategy(metaclass=ABCMeta):
    """Decide how the keys of a ValueKeyedStore are bucketed and compared."""

    @abstractmethod
    def bucket_key(self, key: Any) -> Hashable:
        """Return a hashable key such that equal keys always land in the same bucket."""

    @abstractmethod
    def keys_equal(self, left: Any, right: Any) -> bool:
        """Return True if the two keys should be considered the same key."""


class DefaultKeyEquality(KeyEqualityStrategy):
    """Native equality for primitives, structural for containers, identity for other objects.

    Booleans are kept apart from the integers 0 and 1. Objects whose class declares its own
    __eq__ and is hashable (enum members, frozen dataclasses, etc.) use that equality.
    """

    def bucket_key(self, key: Any) -> Hashable:
        if key is None or isinstance(key, bool):
            return ("constant", key)
        elif isinstance(key, _PRIMITIVE_TYPES):
            return ("primitive", type(key).__name__, key)
        elif isinstance(key, (list, tuple)):
            return ("sequence", type(key).__name__, len(key))
        elif isinstance(key, dict):
            return ("mapping", len(key))
        elif _uses_value_equality(key):
            return ("value", key)
        else:
            return ("identity", id(key))

    def keys_equal(self, left: Any, right: Any) -> bool:
        return _structurally_equal(left, right)


class IdentityKeyEquality(KeyEqualityStrategy):
    """Every key is only equal to itself."""

    def bucket_key(self, key: Any) -> Hashable:
        return id(key)

    def keys_equal(self, left: Any, right: Any) -> bool:
        return left is right


class ValueKeyedStore(Generic[VT]):
    """Map arbitrary keys to values, according to the configured key equality strategy.

    Keys are grouped into buckets by the strategy's bucket_key(); within a bucket, keys are
    compared with keys_equal(). Insertion order is preserved. The store keeps a reference to every
    key it holds, so identity-keyed objects stay alive (and their ids stay unique) for as long as
    the store does.
    """

    __slots__ = ("_strategy", "_buckets", "_entries")

    def __init__(self, strategy: Optional[KeyEqualityStrategy] = None) -> None:
        self._strategy = DefaultKeyEquality() if strategy is None else strategy
        self._buckets: Dict[Hashable, List[Tuple[Any, VT]]] = {}
        self._entries: List[Tuple[Any, VT]] = []

    def _find(self, key: Any) -> Optional[Tuple[Any, VT]]:
        bucket = self._buckets.get(self._strategy.bucket_key(key))
        if bucket is None:
            return None
        for entry in bucket:
            if self._strategy.keys_equal(entry[0], key):
                return entry
        return None

    def set(self, key: Any, value: VT) -> None:
        """Associate the value with the key, replacing any value stored under an equal key."""
        bucket_key = self._strategy.bucket_key(key)
        bucket = self._buckets.setdefault(bucket_key, [])
        new_entry = (key, value)
        for index, entry in enumerate(bucket):
            if self._strategy.keys_equal(entry[0], key):
                bucket[index] = new_entry
                for entry_index, existing_entry in enumerate(self._entries):
                    if existing_entry is entry:
                        self._entries[entry_index] = new_entry
                        break
                return

        bucket.append(new_entry)
        self._entries.append(new_entry)

    def get(self, key: Any, default: Optional[VT] = None) -> Optional[VT]:
        entry = self._find(key)
        return default if entry is None else entry[1]

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def __getitem__(self, key: Any) -> VT:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return entry[1]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._entries)

    def items(self) -> Iterator[Tuple[Any, VT]]:
        return iter(self._entries)
