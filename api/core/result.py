"""
Service-level result type.

Services return `Ok(value)` for success and `Fail(reason)` for expected,
recoverable business errors (not found, out of range, duplicate email...).
Routers turn either one into the `{ok, error, ...}` wire envelope with
`core.schemas.to_output`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Fail:
    reason: str


Result = Union[Ok[T], Fail]


def is_ok(result: Result[Any]) -> bool:
    return isinstance(result, Ok)
