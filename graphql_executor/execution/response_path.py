# Copyright 2021-present Kensho Technologies, LLC.
from dataclasses import dataclass
from typing import List, Optional, Union


ResponseKey = Union[str, int]


@dataclass(frozen=True, init=False)
class ResponsePath:
    """An immutable path from the root of the response to one of its values.

    Each node holds one key (a response key for object fields, an index for list items) and
    points at the path of its parent value. Extending a path shares the prefix with every other
    path extended from the same node, so building the path of each value is cheap.
    """

    __slots__ = ("key", "depth", "prev")

    # N.B.: Keep "depth" defined before "prev"! Dataclass equality compares attributes in
    #       declaration order, and comparing depths first is much cheaper than walking the paths.
    key: ResponseKey  # The last key of the path.
    depth: int  # The number of keys in the path, not counting this one.
    prev: Optional["ResponsePath"]  # The path of the parent value, if any.

    def __init__(self, key: ResponseKey, prev: Optional["ResponsePath"] = None) -> None:
        """Initialize the ResponsePath."""
        # Frozen dataclasses have to use object.__setattr__() to write their attributes.
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "prev", prev)

        depth = 0 if prev is None else prev.depth + 1
        object.__setattr__(self, "depth", depth)

    def add_key(self, key: ResponseKey) -> "ResponsePath":
        """Create a new ResponsePath that extends this one with the given key."""
        return ResponsePath(key, self)

    def as_list(self) -> List[ResponseKey]:
        """Return the keys of the path, from the root of the response down."""
        keys: List[ResponseKey] = []
        current: Optional[ResponsePath] = self
        while current is not None:
            keys.append(current.key)
            current = current.prev
        keys.reverse()
        return keys


def add_path_key(prev: Optional[ResponsePath], key: ResponseKey) -> ResponsePath:
    """Extend the given path with a key, starting a new path if there is none yet."""
    return ResponsePath(key, prev)
