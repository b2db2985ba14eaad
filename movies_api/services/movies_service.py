"""Movies service: paginated listing, date filter, CRUD and nested reviews."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pymongo.errors import ConnectionFailure, PyMongoError

from movies_api.models.entities import Movie, Review
from movies_api.models.movies import (
    MovieView,
    MovieWithReviewsView,
    ReviewView,
)
from movies_api.services.mapper import MovieMapper
from movies_api.services.pagination import (
    PaginatedResultSet,
    normalize_pagination,
)
from movies_api.services.repositories.movies_repo import MoviesRepo
from movies_api.services.results import (
    EntityError,
    Err,
    Found,
    Lookup,
    NotFound,
    Ok,
    ServiceResponse,
    error_from_exception,
    movie_not_found,
)

logger = logging.getLogger(__name__)

BOTH_DATES_REQUIRED = 'Both dates are required'
FROM_NOT_BEFORE_TO = 'fromDate is not before toDate'

Errors = List[EntityError]


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC, the way Mongo stores them."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MoviesService:
    """Business operations on movies and their reviews.

    Reads return plain results (or ``Found``/``NotFound``); writes return
    ``Ok`` or ``Err`` with a list of ``EntityError``. A store that cannot
    be reached at all (``ConnectionFailure``) is not a business outcome and
    propagates to the caller.
    """

    def __init__(
            self,
            repo: MoviesRepo,
            mapper: Optional[MovieMapper] = None) -> None:
        self.repo = repo
        self.mapper = mapper or MovieMapper()

    # ---------- helpers ----------

    @staticmethod
    def _commit_failed(action: str, error: PyMongoError) -> Err[Errors]:
        entity_error = error_from_exception(error)
        logger.warning(
            'movie_commit_failed',
            extra={'action': action,
                   'error_type': entity_error.error_type,
                   'err': entity_error.message},
        )
        return Err([entity_error])

    # ---------- LIST ----------

    async def list_movies(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> ServiceResponse[PaginatedResultSet[MovieView], Errors]:
        """Movies ordered by title; total is the grand total."""
        window = normalize_pagination(page, per_page)
        movies = []
        if window.reachable:
            movies = await self.repo.list_by_title(
                skip=window.skip, limit=window.per_page)
        total = await self.repo.count()
        return Ok(PaginatedResultSet[MovieView].from_window(
            [self.mapper.to_view(m) for m in movies], window, total))

    async def list_reviews_for_movie(
        self,
        movie_id: int,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> ServiceResponse[PaginatedResultSet[MovieWithReviewsView], Errors]:
        """The matched movie with all of its reviews.

        The window applies to the (at most one) movie row, not to the
        review list; total is still the grand total of movies.
        """
        window = normalize_pagination(page, per_page)
        movies = []
        if window.reachable:
            movies = await self.repo.list_with_reviews_by_id(
                movie_id, skip=window.skip, limit=window.per_page)
        total = await self.repo.count()
        return Ok(PaginatedResultSet[MovieWithReviewsView].from_window(
            [self.mapper.to_view_with_reviews(m) for m in movies],
            window,
            total,
        ))

    async def filter_movies_by_date_added(
        self,
        from_date: Optional[datetime],
        to_date: Optional[datetime],
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> ServiceResponse[PaginatedResultSet[MovieView], Errors]:
        """Movies added within [from_date, to_date], newest release first."""
        if from_date is None or to_date is None:
            return Err([EntityError('', BOTH_DATES_REQUIRED)])
        from_date, to_date = _as_utc(from_date), _as_utc(to_date)
        if from_date >= to_date:
            return Err([EntityError('', FROM_NOT_BEFORE_TO)])

        window = normalize_pagination(page, per_page)
        movies = []
        if window.reachable:
            movies = await self.repo.list_added_between(
                from_date, to_date,
                skip=window.skip, limit=window.per_page)
        # grand total on purpose, same as the unfiltered listings
        total = await self.repo.count()
        return Ok(PaginatedResultSet[MovieView].from_window(
            [self.mapper.to_view(m) for m in movies], window, total))

    # ---------- GET ONE ----------

    async def get_movie(self, movie_id: int) -> Lookup[MovieView]:
        movie = await self.repo.get_by_id(movie_id)
        if movie is None:
            return NotFound(movie_id)
        return Found(self.mapper.to_view(movie))

    async def movie_exists(self, movie_id: int) -> bool:
        return await self.repo.exists(movie_id)

    # ---------- CREATE ----------

    async def create_movie(
            self, view: MovieView) -> ServiceResponse[Movie, Errors]:
        """Insert a movie; identity is always assigned by the store."""
        movie = self.mapper.to_entity(view)
        movie.id = None
        if movie.date_added is None:
            movie.date_added = datetime.now(timezone.utc)
        try:
            created = await self.repo.insert(movie)
        except ConnectionFailure:
            raise
        except PyMongoError as error:
            return self._commit_failed('create_movie', error)
        logger.info('movie_created', extra={'movie_id': created.id})
        return Ok(created)

    async def create_review(
            self,
            movie_id: int,
            view: ReviewView) -> ServiceResponse[Review, Errors]:
        """Append a review to an existing movie."""
        movie = await self.repo.get_by_id(movie_id, with_reviews=True)
        if movie is None:
            return movie_not_found(movie_id)

        review = self.mapper.review_to_entity(view)
        review.id = None
        review.movie_id = movie.id
        movie.reviews.append(review)
        try:
            pushed = await self.repo.push_review(movie.id, review)
        except ConnectionFailure:
            raise
        except PyMongoError as error:
            return self._commit_failed('create_review', error)
        if not pushed:
            # deleted between lookup and commit
            return movie_not_found(movie_id)
        logger.info('review_created',
                    extra={'movie_id': movie.id, 'review_id': review.id})
        return Ok(review)

    # ---------- UPDATE ----------

    async def update_movie(
            self,
            movie_id: int,
            view: MovieView) -> ServiceResponse[Movie, Errors]:
        """Merge the view onto the stored movie and persist it."""
        movie = await self.repo.get_by_id(movie_id, with_reviews=True)
        if movie is None:
            return movie_not_found(movie_id)

        self.mapper.apply(view, movie)
        try:
            updated = await self.repo.update_fields(movie)
        except ConnectionFailure:
            raise
        except PyMongoError as error:
            return self._commit_failed('update_movie', error)
        if not updated:
            return movie_not_found(movie_id)
        logger.info('movie_updated', extra={'movie_id': movie.id})
        return Ok(movie)

    # ---------- DELETE ----------

    async def delete_movie(
            self, movie_id: int) -> ServiceResponse[bool, Errors]:
        """Remove a movie and, with it, its reviews."""
        movie = await self.repo.get_by_id(movie_id)
        if movie is None:
            return movie_not_found(movie_id)
        try:
            deleted = await self.repo.delete(movie.id)
        except ConnectionFailure:
            raise
        except PyMongoError as error:
            return self._commit_failed('delete_movie', error)
        if not deleted:
            return movie_not_found(movie_id)
        logger.info('movie_deleted', extra={'movie_id': movie.id})
        return Ok(True)
