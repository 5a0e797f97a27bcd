"""
BlogApp Client Core — Failure and Either
=========================================

What:  The return-value vocabulary used above the repository boundary.
How:   Repositories and use cases return `Left(Failure)` or `Right(value)`.
       Callers branch with `fold()` instead of try/except.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    """A recoverable, reported error. `message` is shown to the user as-is."""

    message: str = "An unexpected error occurred"

    @classmethod
    def from_message(cls, message: str, fallback: str) -> "Failure":
        """Uses `fallback` when the error carried no message."""
        return cls(message if message else fallback)


@dataclass(frozen=True)
class Left(Generic[L]):
    value: L

    @property
    def is_left(self) -> bool:
        return True

    @property
    def is_right(self) -> bool:
        return False

    def fold(self, on_left: Callable[[L], T], on_right: Callable[..., T]) -> T:
        return on_left(self.value)


@dataclass(frozen=True)
class Right(Generic[R]):
    value: R

    @property
    def is_left(self) -> bool:
        return False

    @property
    def is_right(self) -> bool:
        return True

    def fold(self, on_left: Callable[..., T], on_right: Callable[[R], T]) -> T:
        return on_right(self.value)


Either = Union[Left[L], Right[R]]
