"""Structured error types for container access, mutation and decoding."""

from __future__ import annotations

import json
from dataclasses import dataclass


class JsArrayError(Exception):
    """Base class for structured jsarray errors."""


class InvalidAccessError(JsArrayError, AttributeError):
    """Read of an attribute the container does not expose."""


class IllegalMutationError(JsArrayError, RuntimeError):
    """Direct state change that bypasses the container's methods."""


class JsArrayTypeError(JsArrayError, TypeError):
    """Container or value kind is incompatible with the requested conversion."""


@dataclass(frozen=True)
class MalformedInputError(JsArrayError, ValueError):
    """JSON text that cannot be decoded into a container."""

    message: str
    position: int | None = None
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_decode_error(cls, err: json.JSONDecodeError) -> "MalformedInputError":
        return cls(
            message=err.msg,
            position=err.pos,
            line=err.lineno,
            column=err.colno,
        )

    @classmethod
    def from_unicode_error(cls, err: UnicodeDecodeError) -> "MalformedInputError":
        return cls(message=f"invalid {err.encoding} byte sequence: {err.reason}", position=err.start)

    def __str__(self) -> str:
        if self.line is None and self.position is not None:
            return f"{self.message} (byte {self.position})"
        if self.position is None:
            return self.message
        return f"{self.message} at line {self.line} column {self.column} (char {self.position})"
