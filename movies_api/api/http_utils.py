from dataclasses import asdict
from functools import wraps
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException

from movies_api.services.results import (
    MOVIE_NOT_FOUND,
    Err,
    NotFound,
    Ok,
    movie_not_found,
)


def handle_store_errors(mapping: dict[type[Exception], HTTPStatus]):
    """
    Translate infrastructure exceptions escaping the service into HTTP errors.
    Example mapping: {ConnectionFailure: HTTPStatus.SERVICE_UNAVAILABLE}
    """
    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except tuple(mapping) as e:
                status = next(s for exc_type, s in mapping.items()
                              if isinstance(e, exc_type))
                raise HTTPException(status_code=status,
                                    detail="store_unavailable") from e
        return wrapper
    return decorator


def not_found_if_missing(lookup):
    """Found -> value, NotFound -> 404 with the same error list as writes."""
    if isinstance(lookup, NotFound):
        unwrap(movie_not_found(lookup.id))
    return lookup.value


def unwrap(response) -> Any:
    """Ok -> value; Err -> 404 for a missing movie, 400 otherwise."""
    if isinstance(response, Ok):
        return response.value
    if not isinstance(response, Err):
        raise TypeError(f"unexpected service response {response!r}")
    status = HTTPStatus.BAD_REQUEST
    if any(e.error_type == MOVIE_NOT_FOUND for e in response.errors):
        status = HTTPStatus.NOT_FOUND
    raise HTTPException(status_code=status,
                        detail=[asdict(e) for e in response.errors])
