"""
BlogApp Client Core — Use Case Contract
========================================

What:  Abstract base for every domain operation.
How:   A use case is awaited like a function: `await use_case(params)`.
       Implementations call exactly one repository method and return its
       result unchanged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from blogapp.core.result import Either, Failure

SuccessType = TypeVar("SuccessType")
Params = TypeVar("Params")


@dataclass(frozen=True)
class NoParams:
    """Marker shared by every use case that takes no input."""


class UseCase(ABC, Generic[SuccessType, Params]):
    """Contract for a single-operation pass-through to a repository."""

    @abstractmethod
    async def __call__(self, params: Params) -> Either[Failure, SuccessType]:
        ...
