"""Result records for operations that return an extracted part and the remaining array."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .container import JsArray


@dataclass(frozen=True)
class PopResult:
    """Remaining array plus the removed value (``None`` when the source was empty)."""

    array: "JsArray"
    value: object


@dataclass(frozen=True)
class SpliceResult:
    deleted: "JsArray"
    array: "JsArray"
