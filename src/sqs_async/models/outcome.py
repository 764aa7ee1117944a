"""
Module: outcome.py
Description: Result of one dispatched request, and its continuations.

Every dispatch resolves to exactly one Success or Failure. Callbacks
are the optional continuation pair invoked alongside.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ..errors import SQSError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: SQSError

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[Any], Failure]


@dataclass(frozen=True)
class Callbacks:
    """
    Success and failure continuations for one call.

    At most one of them is invoked per call, and only once.
    """

    success: Optional[Callable[[Any], Any]] = None
    failure: Optional[Callable[[SQSError], Any]] = None
