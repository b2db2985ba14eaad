"""Outcome types returned by the service layer.

``ServiceResponse`` is either ``Ok`` or ``Err``; ``Lookup`` is either
``Found`` or ``NotFound``. Callers branch with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E')

MOVIE_NOT_FOUND = 'MovieNotFound'


@dataclass(frozen=True)
class EntityError:
    error_type: str
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    errors: List[EntityError]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError('Err requires at least one EntityError')


ServiceResponse = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    id: Any


Lookup = Union[Found[T], NotFound]


def movie_not_found(movie_id: Any) -> Err[List[EntityError]]:
    return Err([EntityError(MOVIE_NOT_FOUND, f'Movie {movie_id} not found')])


def error_from_exception(error: BaseException) -> EntityError:
    """Classification tag is the exception class name."""
    return EntityError(type(error).__name__, str(error))
