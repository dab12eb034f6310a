"""Typed outcome of an operation that can fail on a business rule.

Expected failures (not enough colonists, unmet prerequisites, an invalid
migration, an unknown id) are returned as ``Result.failure(reason)`` and
leave all state untouched; they are never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    is_success: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, error: str) -> Result[T]:
        return cls(is_success=False, error=error)

    @classmethod
    def not_found(cls, what: str, identifier: object) -> Result[T]:
        return cls(is_success=False, error=f"{what} {identifier} not found")
