"""Success/failure outcome delivered to response callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Failure:
    error: BaseException

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        raise self.error


Result = Union[Success[T], Failure]


__all__ = [
    "Success",
    "Failure",
    "Result",
]
