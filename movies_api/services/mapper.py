"""Field-by-field projection between stored entities and API views."""

from __future__ import annotations

from movies_api.models.entities import Movie, Review
from movies_api.models.movies import (
    MovieView,
    MovieWithReviewsView,
    ReviewView,
)


class MovieMapper:
    """Pure converter; holds no state and performs no I/O."""

    def review_to_view(self, review: Review) -> ReviewView:
        return ReviewView(
            id=review.id,
            content=review.content,
            movie_id=review.movie_id,
        )

    def review_to_entity(self, view: ReviewView) -> Review:
        return Review(
            id=view.id,
            content=view.content,
            movie_id=view.movie_id,
        )

    def to_view(self, movie: Movie) -> MovieView:
        return MovieView(
            id=movie.id,
            title=movie.title,
            year_of_release=movie.year_of_release,
            date_added=movie.date_added,
        )

    def to_view_with_reviews(self, movie: Movie) -> MovieWithReviewsView:
        return MovieWithReviewsView(
            id=movie.id,
            title=movie.title,
            year_of_release=movie.year_of_release,
            date_added=movie.date_added,
            reviews=[self.review_to_view(r) for r in movie.reviews],
        )

    def to_entity(self, view: MovieView) -> Movie:
        reviews = []
        if isinstance(view, MovieWithReviewsView):
            reviews = [self.review_to_entity(r) for r in view.reviews]
        return Movie(
            id=view.id,
            title=view.title,
            year_of_release=view.year_of_release,
            date_added=view.date_added,
            reviews=reviews,
        )

    def apply(self, view: MovieView, movie: Movie) -> Movie:
        """Copy scalar view fields onto a loaded entity.

        Identity and the review collection of ``movie`` are left alone;
        a missing ``date_added`` keeps the stored value.
        """
        movie.title = view.title
        movie.year_of_release = view.year_of_release
        if view.date_added is not None:
            movie.date_added = view.date_added
        return movie
