"""Mongo repository for the movies collection.

Reviews live inside their movie document, so every write below touches a
single document and is applied atomically by the server.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from movies_api.models.entities import Movie, Review

MOVIES = 'movies'
COUNTERS = 'counters'
REVIEWS_KEY = 'reviews'

Sort = Sequence[Tuple[str, int]]

BY_TITLE: Sort = [('title', ASCENDING), ('_id', ASCENDING)]
BY_YEAR_DESC: Sort = [('year_of_release', DESCENDING), ('_id', ASCENDING)]


def review_to_doc(review: Review) -> Dict[str, Any]:
    return {
        'id': review.id,
        'content': review.content,
        'movie_id': review.movie_id,
    }


def movie_to_doc(movie: Movie) -> Dict[str, Any]:
    return {
        '_id': movie.id,
        'title': movie.title,
        'year_of_release': movie.year_of_release,
        'date_added': movie.date_added,
        REVIEWS_KEY: [review_to_doc(r) for r in movie.reviews],
    }


def movie_from_doc(doc: Dict[str, Any]) -> Movie:
    movie_id = doc['_id']
    return Movie(
        id=movie_id,
        title=doc['title'],
        year_of_release=doc['year_of_release'],
        date_added=doc.get('date_added'),
        reviews=[
            Review(
                id=r.get('id'),
                content=r['content'],
                movie_id=r.get('movie_id', movie_id),
            )
            for r in doc.get(REVIEWS_KEY, [])
        ],
    )


class MoviesRepo:
    """Queries and single-document writes for movies and their reviews."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db[MOVIES]
        self.counters = db[COUNTERS]

    @staticmethod
    def _projection(with_reviews: bool) -> Optional[Dict[str, int]]:
        return None if with_reviews else {REVIEWS_KEY: 0}

    async def next_id(self, sequence: str) -> int:
        """Allocate the next integer identity from a named counter."""
        doc = await self.counters.find_one_and_update(
            {'_id': sequence},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc['seq'])

    # ---------- READ ----------

    async def count(self) -> int:
        return await self.col.count_documents({})

    async def exists(self, movie_id: int) -> bool:
        return await self.col.count_documents({'_id': movie_id}, limit=1) > 0

    async def get_by_id(
        self,
        movie_id: int,
        with_reviews: bool = False,
    ) -> Optional[Movie]:
        doc = await self.col.find_one(
            {'_id': movie_id}, self._projection(with_reviews))
        return movie_from_doc(doc) if doc else None

    async def find(
        self,
        query: Dict[str, Any],
        sort: Sort,
        skip: int,
        limit: int,
        with_reviews: bool = False,
    ) -> List[Movie]:
        cursor = (
            self.col.find(query, self._projection(with_reviews))
            .sort(list(sort))
            .skip(skip)
            .limit(limit)
        )
        return [movie_from_doc(doc) async for doc in cursor]

    async def list_by_title(self, skip: int, limit: int) -> List[Movie]:
        return await self.find({}, BY_TITLE, skip, limit)

    async def list_with_reviews_by_id(
        self,
        movie_id: int,
        skip: int,
        limit: int,
    ) -> List[Movie]:
        return await self.find(
            {'_id': movie_id}, BY_TITLE, skip, limit, with_reviews=True)

    async def list_added_between(
        self,
        from_date: datetime,
        to_date: datetime,
        skip: int,
        limit: int,
    ) -> List[Movie]:
        """Movies added in [from_date, to_date], newest release first."""
        return await self.find(
            {'date_added': {'$gte': from_date, '$lte': to_date}},
            BY_YEAR_DESC,
            skip,
            limit,
            with_reviews=True,
        )

    # ---------- WRITE (each call is one atomic commit) ----------

    async def insert(self, movie: Movie) -> Movie:
        """Insert a movie, allocating its id (and review ids) when unset."""
        if movie.id is None:
            movie.id = await self.next_id(MOVIES)
        for review in movie.reviews:
            review.movie_id = movie.id
            if review.id is None:
                review.id = await self.next_id(REVIEWS_KEY)
        await self.col.insert_one(movie_to_doc(movie))
        return movie

    async def update_fields(self, movie: Movie) -> bool:
        """Persist scalar fields; the embedded reviews are not rewritten."""
        result = await self.col.update_one(
            {'_id': movie.id},
            {'$set': {
                'title': movie.title,
                'year_of_release': movie.year_of_release,
                'date_added': movie.date_added,
            }},
        )
        return result.matched_count == 1

    async def push_review(self, movie_id: int, review: Review) -> bool:
        """Append a review to its movie; False when the movie is gone."""
        if review.id is None:
            review.id = await self.next_id(REVIEWS_KEY)
        review.movie_id = movie_id
        result = await self.col.update_one(
            {'_id': movie_id},
            {'$push': {REVIEWS_KEY: review_to_doc(review)}},
        )
        return result.matched_count == 1

    async def delete(self, movie_id: int) -> bool:
        """Delete a movie together with its embedded reviews."""
        result = await self.col.delete_one({'_id': movie_id})
        return result.deleted_count == 1
