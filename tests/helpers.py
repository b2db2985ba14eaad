"""In-memory stand-in for MoviesRepo plus small factories."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Dict, List, Optional

from movies_api.models.entities import Movie, Review


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_movie(title: str = "Movie", year: int = 2000,
               added: Optional[datetime] = None,
               reviews: Optional[List[str]] = None) -> Movie:
    return Movie(
        title=title,
        year_of_release=year,
        date_added=added or utc(2024, 1, 1),
        reviews=[Review(content=c) for c in reviews or []],
    )


class InMemoryMoviesRepo:
    """Honours the MoviesRepo contract against a dict of movies.

    ``fail_next`` is raised by the next call, ``calls`` records every
    method invoked so tests can assert no query ran.
    """

    def __init__(self) -> None:
        self.movies: Dict[int, Movie] = {}
        self.calls: List[str] = []
        self.fail_next: Optional[Exception] = None
        self.vanish_on_write = False
        self._seq = {"movies": 0, "reviews": 0}

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

    def _next_id(self, sequence: str) -> int:
        self._seq[sequence] += 1
        return self._seq[sequence]

    @staticmethod
    def _copy(movie: Movie, with_reviews: bool) -> Movie:
        clone = copy.deepcopy(movie)
        if not with_reviews:
            clone.reviews = []
        return clone

    def _window(self, movies, skip, limit, with_reviews) -> List[Movie]:
        return [self._copy(m, with_reviews) for m in movies[skip:skip + limit]]

    def seed(self, *movies: Movie) -> List[Movie]:
        """Store movies directly, bypassing call tracking."""
        stored = []
        for movie in movies:
            movie.id = self._next_id("movies")
            for review in movie.reviews:
                review.id = self._next_id("reviews")
                review.movie_id = movie.id
            self.movies[movie.id] = copy.deepcopy(movie)
            stored.append(movie)
        return stored

    async def count(self) -> int:
        self._enter("count")
        return len(self.movies)

    async def exists(self, movie_id: int) -> bool:
        self._enter("exists")
        return movie_id in self.movies

    async def get_by_id(self, movie_id: int,
                        with_reviews: bool = False) -> Optional[Movie]:
        self._enter("get_by_id")
        movie = self.movies.get(movie_id)
        return self._copy(movie, with_reviews) if movie else None

    async def list_by_title(self, skip: int, limit: int) -> List[Movie]:
        self._enter("list_by_title")
        ordered = sorted(self.movies.values(), key=lambda m: (m.title, m.id))
        return self._window(ordered, skip, limit, with_reviews=False)

    async def list_with_reviews_by_id(self, movie_id: int, skip: int,
                                      limit: int) -> List[Movie]:
        self._enter("list_with_reviews_by_id")
        matched = [m for m in self.movies.values() if m.id == movie_id]
        return self._window(matched, skip, limit, with_reviews=True)

    async def list_added_between(self, from_date: datetime,
                                 to_date: datetime, skip: int,
                                 limit: int) -> List[Movie]:
        self._enter("list_added_between")
        matched = [m for m in self.movies.values()
                   if from_date <= m.date_added <= to_date]
        matched.sort(key=lambda m: (-m.year_of_release, m.id))
        return self._window(matched, skip, limit, with_reviews=True)

    async def insert(self, movie: Movie) -> Movie:
        self._enter("insert")
        if movie.id is None:
            movie.id = self._next_id("movies")
        for review in movie.reviews:
            review.movie_id = movie.id
            if review.id is None:
                review.id = self._next_id("reviews")
        self.movies[movie.id] = copy.deepcopy(movie)
        return movie

    async def update_fields(self, movie: Movie) -> bool:
        self._enter("update_fields")
        if self.vanish_on_write:
            self.movies.pop(movie.id, None)
        stored = self.movies.get(movie.id)
        if stored is None:
            return False
        stored.title = movie.title
        stored.year_of_release = movie.year_of_release
        stored.date_added = movie.date_added
        return True

    async def push_review(self, movie_id: int, review: Review) -> bool:
        self._enter("push_review")
        if self.vanish_on_write:
            self.movies.pop(movie_id, None)
        if review.id is None:
            review.id = self._next_id("reviews")
        review.movie_id = movie_id
        stored = self.movies.get(movie_id)
        if stored is None:
            return False
        stored.reviews.append(copy.deepcopy(review))
        return True

    async def delete(self, movie_id: int) -> bool:
        self._enter("delete")
        if self.vanish_on_write:
            self.movies.pop(movie_id, None)
        return self.movies.pop(movie_id, None) is not None
