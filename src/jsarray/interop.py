"""Conversions between containers and JAX arrays."""

from __future__ import annotations

import jax.numpy as jnp

from .container import JsArray
from .errors import JsArrayTypeError


def from_jax(array: object, *, mutable: bool = False) -> JsArray:
    """Container over ``array.tolist()``; a 0-d array becomes a one-element container."""
    values = jnp.asarray(array).tolist()
    if not isinstance(values, list):
        values = [values]
    return JsArray(values, mutable=mutable)


def to_jax(container: JsArray, dtype=None):
    if not isinstance(container, JsArray):
        raise JsArrayTypeError(f"to_jax expects a JsArray, got {type(container).__name__}")
    if not container.is_sequential:
        raise JsArrayTypeError("only sequential containers convert to arrays; call values() first")
    return jnp.asarray(container.json_serialize(), dtype=dtype)
