"""jsarray public API."""

from .container import JsArray
from .errors import (
    IllegalMutationError,
    InvalidAccessError,
    JsArrayError,
    JsArrayTypeError,
    MalformedInputError,
)
from .results import PopResult, SpliceResult

try:
    from .interop import from_jax, to_jax
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc

        def from_jax(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for from_jax(). Install runtime deps first."
            ) from _jax_import_error

        def to_jax(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for to_jax(). Install runtime deps first."
            ) from _jax_import_error

    else:
        raise

__all__ = [
    "JsArray",
    "PopResult",
    "SpliceResult",
    "from_jax",
    "to_jax",
    "JsArrayError",
    "InvalidAccessError",
    "IllegalMutationError",
    "JsArrayTypeError",
    "MalformedInputError",
]
