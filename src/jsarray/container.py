"""Ordered container with JavaScript Array semantics and a per-instance mutability mode."""

from __future__ import annotations

import functools
import itertools
import json
import logging
import math
from collections.abc import Iterator, Mapping
from typing import Callable, ClassVar, Final

from .callbacks import element_invoker, reducer_invoker
from .errors import IllegalMutationError, InvalidAccessError, JsArrayTypeError, MalformedInputError
from .keys import Key, clamp_bound, coerce_key, decode_key, is_sequential, is_spreadable, next_index, normalize_index, normalize_items, reindex, sort_key, strict_equals, stringify
from .results import PopResult, SpliceResult

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR: Final[str] = ","
DEFAULT_FLAT_DEPTH: Final[float] = math.inf

_NO_INITIAL: Final = object()


def _flatten(values: Iterator[object], depth: float) -> Iterator[object]:
    for value in values:
        if depth > 0 and is_spreadable(value):
            yield from _flatten(iter(value), depth - 1)
        else:
            yield value


def _project(value: object) -> object:
    if isinstance(value, JsArray):
        return value.json_serialize()
    if isinstance(value, (list, tuple)):
        return [_project(item) for item in value]
    if isinstance(value, dict):
        return {key: _project(item) for key, item in value.items()}
    return value


def _lookup_key(key: object) -> object:
    return decode_key(key) if isinstance(key, str) else key

class JsArray:
    """Ordered key/value container exposing the JavaScript Array method set.

    Keys are non-negative integers or strings. A container whose keys are
    exactly ``0..n-1`` in order is *sequential* and behaves like a JS array;
    any other key layout is *associative* and several operations keep its
    keys instead of renumbering them.

    Immutable containers (the default) answer every producing operation with
    a new container. Mutable containers replace their own entries and return
    themselves, so chains read the same in both modes.
    """

    __slots__ = ("_items", "_mutable", "_position")

    _jsarray_container: ClassVar[bool] = True

    def __init__(self, items: object = None, mutable: bool = False) -> None:
        object.__setattr__(self, "_items", normalize_items(items))
        object.__setattr__(self, "_mutable", bool(mutable))
        object.__setattr__(self, "_position", 0)

    # construction

    @classmethod
    def from_(cls, items: object) -> "JsArray":
        return cls(items, mutable=False)

    @classmethod
    def of(cls, *values: object) -> "JsArray":
        return cls(list(values), mutable=False)

    @classmethod
    def mutable(cls, items: object = None) -> "JsArray":
        return cls(items, mutable=True)

    @classmethod
    def create_mutable(cls, items: object = None) -> "JsArray":
        return cls.mutable(items)

    @classmethod
    def from_json(cls, text: str | bytes) -> "JsArray":
        """Decode a JSON array or object into a new immutable container."""
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as err:
            logger.debug("rejecting malformed JSON input: %s", err)
            raise MalformedInputError.from_decode_error(err) from err
        except UnicodeDecodeError as err:
            logger.debug("rejecting undecodable JSON bytes: %s", err)
            raise MalformedInputError.from_unicode_error(err) from err
        if not isinstance(decoded, (list, dict)):
            raise MalformedInputError(
                f"expected a JSON array or object, got {type(decoded).__name__}"
            )
        return cls(decoded, mutable=False)

    @classmethod
    def _wrap(cls, items: dict[Key, object], mutable: bool = False) -> "JsArray":
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_items", items)
        object.__setattr__(instance, "_mutable", mutable)
        object.__setattr__(instance, "_position", 0)
        return instance

    # mode

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def is_mutable(self) -> bool:
        return self._mutable

    @property
    def is_immutable(self) -> bool:
        return not self._mutable

    @property
    def is_sequential(self) -> bool:
        return is_sequential(self._items)

    def to_immutable(self) -> "JsArray":
        return self._wrap(dict(self._items), mutable=False)

    def to_mutable(self) -> "JsArray":
        """Switch this instance to mutable mode in place and return it."""
        if not self._mutable:
            logger.debug("switching container of length %d to mutable mode", len(self._items))
            object.__setattr__(self, "_mutable", True)
        return self

    def get_mutable_copy(self) -> "JsArray":
        return self._wrap(dict(self._items), mutable=True)

    def get_immutable_copy(self) -> "JsArray":
        return self._wrap(dict(self._items), mutable=False)

    def _produce(self, result: dict[Key, object]) -> "JsArray":
        if self._mutable:
            object.__setattr__(self, "_items", result)
            return self
        return self._wrap(result, mutable=False)

    def _snapshot(self) -> tuple[tuple[Key, object], ...]:
        return tuple(self._items.items())

    def _entry_at(self, position: int) -> tuple[Key, object] | None:
        if position < 0 or position >= len(self._items):
            return None
        return next(itertools.islice(self._items.items(), position, None))

    # transformation

    def map(self, callback: Callable) -> "JsArray":
        call = element_invoker(callback, self)
        return self._produce({key: call(value, key) for key, value in self._snapshot()})

    def filter(self, callback: Callable) -> "JsArray":
        call = element_invoker(callback, self)
        return self._produce(reindex(value for key, value in self._snapshot() if call(value, key)))

    def reduce(self, callback: Callable, initial: object = _NO_INITIAL) -> object:
        """Fold left to right; without ``initial`` the first value seeds the fold.

        An empty container with no ``initial`` reduces to ``None``.
        """
        entries = self._snapshot()
        if initial is _NO_INITIAL:
            if not entries:
                return None
            accumulator = entries[0][1]
            entries = entries[1:]
        else:
            accumulator = initial
        call = reducer_invoker(callback, self)
        for key, value in entries:
            accumulator = call(accumulator, value, key)
        return accumulator

    def flat(self, depth: float = DEFAULT_FLAT_DEPTH) -> "JsArray":
        if depth <= 0:
            return self._produce(dict(self._items))
        return self._produce(reindex(_flatten(iter(self._items.values()), depth)))

    def flat_map(self, callback: Callable) -> "JsArray":
        call = element_invoker(callback, self)
        mapped = [call(value, key) for key, value in self._snapshot()]
        return self._produce(reindex(_flatten(iter(mapped), 1)))

    def concat(self, *others: object) -> "JsArray":
        """Append ``others`` to a sequential container, or merge them by key into an associative one.

        Lists, tuples and containers are spread into their elements; any other
        value is appended as a single element.
        """
        if is_sequential(self._items):
            values = list(self._items.values())
            for other in others:
                if is_spreadable(other):
                    values.extend(other)
                else:
                    values.append(other)
            return self._produce(reindex(values))

        result = dict(self._items)
        position = next_index(result)
        for other in others:
            if isinstance(other, JsArray):
                pairs = list(other.entries())
            elif isinstance(other, Mapping):
                pairs = list(other.items())
            elif isinstance(other, (list, tuple)):
                pairs = list(enumerate(other))
            else:
                pairs = [(position, other)]
            for key, value in pairs:
                if isinstance(key, str) and isinstance(decode_key(key), str):
                    result[key] = value
                    continue
                result[position] = value
                position += 1
        return self._produce(result)

    def push(self, *values: object) -> "JsArray":
        result = dict(self._items)
        position = next_index(result)
        for value in values:
            result[position] = value
            position += 1
        return self._produce(result)

    def unshift(self, *values: object) -> "JsArray":
        if is_sequential(self._items):
            return self._produce(reindex([*values, *self._items.values()]))
        position = next_index(self._items)
        result: dict[Key, object] = {}
        for value in values:
            result[position] = value
            position += 1
        result.update(self._items)
        return self._produce(result)

    def pop(self) -> PopResult:
        if not self._items:
            return PopResult(array=self._produce({}), value=None)
        result = dict(self._items)
        last_key = next(reversed(result))
        value = result.pop(last_key)
        return PopResult(array=self._produce(result), value=value)

    def shift(self) -> PopResult:
        if not self._items:
            return PopResult(array=self._produce({}), value=None)
        sequential = is_sequential(self._items)
        result = dict(self._items)
        first_key = next(iter(result))
        value = result.pop(first_key)
        if sequential:
            result = reindex(result.values())
        return PopResult(array=self._produce(result), value=value)

    def slice(self, start: int = 0, end: int | None = None) -> "JsArray":
        length = len(self._items)
        begin = clamp_bound(start, length)
        stop = length if end is None else clamp_bound(end, length)
        window = itertools.islice(self._items.values(), begin, max(begin, stop))
        return self._produce(reindex(window))

    def splice(self, start: int, delete_count: int | None = None, insert: object = ()) -> SpliceResult:
        """Remove ``delete_count`` entries at ``start`` and put ``insert`` in their place.

        Sequential containers are renumbered afterwards, both the deleted view
        and the remaining array. Associative containers keep the keys of every
        entry that is not new; inserted values take the next free integer keys.
        """
        pairs = list(self._items.items())
        length = len(pairs)
        begin = clamp_bound(start, length)
        if delete_count is None:
            count = length - begin
        else:
            count = min(max(delete_count, 0), length - begin)
        before, removed, after = pairs[:begin], pairs[begin:begin + count], pairs[begin + count:]
        inserted = list(insert)

        if is_sequential(self._items):
            deleted = reindex(value for _, value in removed)
            result = reindex([*(value for _, value in before), *inserted, *(value for _, value in after)])
        else:
            deleted = dict(removed)
            position = next_index(key for key, _ in before + after)
            result = dict(before)
            for value in inserted:
                result[position] = value
                position += 1
            result.update(after)
        return SpliceResult(deleted=self._wrap(deleted), array=self._produce(result))

    def reverse(self) -> "JsArray":
        if is_sequential(self._items):
            return self._produce(reindex(reversed(self._items.values())))
        return self._produce(dict(reversed(self._items.items())))

    def sort(self, compare: Callable[[object, object], int] | None = None) -> "JsArray":
        values = list(self._items.values())
        if compare is None:
            ordered = sorted(values, key=sort_key)
        else:
            ordered = sorted(values, key=functools.cmp_to_key(compare))
        return self._produce(reindex(ordered))

    def keys(self) -> "JsArray":
        return self._wrap(reindex(self._items.keys()))

    def values(self) -> "JsArray":
        return self._wrap(reindex(self._items.values()))

    # search

    def find(self, callback: Callable) -> object:
        call = element_invoker(callback, self)
        for key, value in self._snapshot():
            if call(value, key):
                return value
        return None

    def find_index(self, callback: Callable) -> Key | None:
        """Position of the first match for sequential containers, its key otherwise.

        No match gives ``-1`` for sequential containers and ``None`` for
        associative ones.
        """
        call = element_invoker(callback, self)
        for key, value in self._snapshot():
            if call(value, key):
                return key
        return -1 if is_sequential(self._items) else None

    def includes(self, value: object) -> bool:
        return any(strict_equals(item, value) for item in self._items.values())

    def index_of(self, value: object, from_index: int = 0) -> int:
        values = list(self._items.values())
        for position in range(clamp_bound(from_index, len(values)), len(values)):
            if strict_equals(values[position], value):
                return position
        return -1

    def last_index_of(self, value: object, from_index: int | None = None) -> int:
        values = list(self._items.values())
        length = len(values)
        if from_index is None:
            start = length - 1
        elif from_index < 0:
            start = length + from_index
        else:
            start = min(from_index, length - 1)
        for position in range(start, -1, -1):
            if strict_equals(values[position], value):
                return position
        return -1

    def some(self, callback: Callable) -> bool:
        call = element_invoker(callback, self)
        return any(call(value, key) for key, value in self._snapshot())

    def every(self, callback: Callable) -> bool:
        call = element_invoker(callback, self)
        return all(call(value, key) for key, value in self._snapshot())

    # access

    def first(self) -> object:
        if not self._items:
            return None
        return next(iter(self._items.values()))

    def last(self) -> object:
        if not self._items:
            return None
        return next(reversed(self._items.values()))

    def at(self, index: int) -> object:
        position = normalize_index(index, len(self._items))
        if position is None:
            return None
        return self._entry_at(position)[1]

    def join(self, separator: str = DEFAULT_SEPARATOR) -> str:
        return separator.join(stringify(value) for value in self._items.values())

    def for_each(self, callback: Callable) -> None:
        call = element_invoker(callback, self)
        for key, value in self._snapshot():
            call(value, key)

    def get(self, key: Key, default: object = None) -> object:
        return self._items.get(_lookup_key(key), default)

    def has(self, key: Key) -> bool:
        return _lookup_key(key) in self._items

    def count(self) -> int:
        return len(self._items)

    def entries(self) -> Iterator[tuple[Key, object]]:
        return iter(tuple(self._items.items()))

    # conversion

    def to_array(self) -> list[object] | dict[Key, object]:
        if is_sequential(self._items):
            return list(self._items.values())
        return dict(self._items)

    def json_serialize(self) -> list[object] | dict[Key, object]:
        """JSON-compatible projection; nested containers expand to their own projection."""
        return _project(self.to_array())

    def to_json(self, **dumps_kwargs: object) -> str:
        dumps_kwargs.setdefault("separators", (",", ":"))
        return json.dumps(self.json_serialize(), **dumps_kwargs)

    # cursor protocol

    def current(self) -> object:
        entry = self._entry_at(self._position)
        return None if entry is None else entry[1]

    def key(self) -> Key | None:
        entry = self._entry_at(self._position)
        return None if entry is None else entry[0]

    def valid(self) -> bool:
        return 0 <= self._position < len(self._items)

    def next(self) -> None:
        object.__setattr__(self, "_position", self._position + 1)

    def rewind(self) -> None:
        object.__setattr__(self, "_position", 0)

    # python protocols

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[object]:
        return iter(tuple(self._items.values()))

    def __getitem__(self, key: Key) -> object:
        return self._items[_lookup_key(key)]

    def __setitem__(self, key: Key, value: object) -> None:
        self._check_writable()
        self._items[coerce_key(key)] = value

    def __delitem__(self, key: Key) -> None:
        self._check_writable()
        del self._items[coerce_key(key)]

    def _check_writable(self) -> None:
        if not self._mutable:
            raise IllegalMutationError("cannot change entries of an immutable container")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsArray):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        mode = "mutable" if self._mutable else "immutable"
        return f"{type(self).__name__}({self.to_array()!r}, {mode})"

    def __reduce__(self):
        return (type(self)._wrap, (dict(self._items), self._mutable))

    def __getattr__(self, name: str):
        raise InvalidAccessError(f"{type(self).__name__} has no attribute {name!r}")

    def __setattr__(self, name: str, value: object) -> None:
        raise IllegalMutationError(
            f"cannot set {name!r}: {type(self).__name__} state changes only through its methods"
        )

    def __delattr__(self, name: str) -> None:
        raise IllegalMutationError(
            f"cannot delete {name!r}: {type(self).__name__} state changes only through its methods"
        )
