from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from webservice.errors import ApiError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HeaderField:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class QueryParameter:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a single load: a decoded value or the error that stopped it."""

    value: T | None = None
    error: ApiError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("Result holds either a value or an error, not both")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["HeaderField", "QueryParameter", "Result"]
