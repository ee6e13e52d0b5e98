"""Callback-arity detection for the callback-taking container operations."""

from __future__ import annotations

import inspect
import os
from functools import lru_cache
from types import CodeType
from typing import Callable, Final

_DEFAULT_ARITY: Final[int] = 2
_ARITY_CACHE_MAX: Final[int] = max(1, int(os.environ.get("JSARRAY_ARITY_CACHE_MAX", "256")))

_POSITIONAL_KINDS: Final = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_SIGNATURE_OVERRIDES: Final = frozenset({"__signature__", "__wrapped__"})


def _inspect_arity(fn: Callable) -> int | None:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return -1
        if param.kind in _POSITIONAL_KINDS:
            count += 1
    return count


@lru_cache(maxsize=_ARITY_CACHE_MAX)
def _code_arity(code: CodeType) -> int:
    if code.co_flags & inspect.CO_VARARGS:
        return -1
    return code.co_argcount


def declared_arity(fn: Callable) -> int | None:
    """Positional parameter count of ``fn``; ``-1`` for ``*args``, ``None`` if unknown.

    Plain functions are memoized by code object so the cache never holds the
    callbacks or their closures.
    """
    if inspect.isfunction(fn) and not _SIGNATURE_OVERRIDES.intersection(vars(fn)):
        return _code_arity(fn.__code__)
    return _inspect_arity(fn)


def arity_for(fn: Callable, *, full: int) -> int:
    """Number of arguments to pass ``fn`` out of a ``full``-argument signature."""
    declared = declared_arity(fn)
    if declared is None:
        return min(_DEFAULT_ARITY, full)
    if declared < 0 or declared > full:
        return full
    return declared


def element_invoker(fn: Callable, container: object) -> Callable[[object, object], object]:
    """Wrap ``fn`` so it is called as ``(value)``, ``(value, key)`` or ``(value, key, container)``."""
    arity = arity_for(fn, full=3)
    if arity == 0:
        return lambda value, key: fn()
    if arity == 1:
        return lambda value, key: fn(value)
    if arity == 2:
        return lambda value, key: fn(value, key)
    return lambda value, key: fn(value, key, container)


def reducer_invoker(fn: Callable, container: object) -> Callable[[object, object, object], object]:
    """Wrap ``fn`` so it receives ``(acc, value[, key[, container]])`` as it declares."""
    arity = arity_for(fn, full=4)
    if arity == 0:
        return lambda acc, value, key: fn()
    if arity == 1:
        return lambda acc, value, key: fn(acc)
    if arity == 2:
        return lambda acc, value, key: fn(acc, value)
    if arity == 3:
        return lambda acc, value, key: fn(acc, value, key)
    return lambda acc, value, key: fn(acc, value, key, container)
