from datetime import datetime
from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from pymongo.errors import ConnectionFailure

from movies_api.api.http_utils import (
    handle_store_errors,
    not_found_if_missing,
    unwrap,
)
from movies_api.dependencies import get_movies_service
from movies_api.models.movies import (
    ErrorListResponse,
    MovieView,
    MovieWithReviewsView,
    ReviewView,
)
from movies_api.services.movies_service import MoviesService
from movies_api.services.pagination import PaginatedResultSet

router = APIRouter(prefix="/api/v1/movies", tags=["movies"])

STORE_ERRMAP = {ConnectionFailure: HTTPStatus.SERVICE_UNAVAILABLE}

ERROR_RESPONSES = {
    HTTPStatus.BAD_REQUEST.value: {"model": ErrorListResponse},
    HTTPStatus.NOT_FOUND.value: {"model": ErrorListResponse},
}


@router.get("", response_model=PaginatedResultSet[MovieView],
            status_code=HTTPStatus.OK)
@handle_store_errors(STORE_ERRMAP)
async def list_movies(
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None, alias="perPage"),
    svc: MoviesService = Depends(get_movies_service),
):
    return unwrap(await svc.list_movies(page=page, per_page=per_page))


@router.get("/filter", response_model=PaginatedResultSet[MovieView],
            status_code=HTTPStatus.OK,
            responses=ERROR_RESPONSES)
@handle_store_errors(STORE_ERRMAP)
async def filter_movies_by_date_added(
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None, alias="perPage"),
    svc: MoviesService = Depends(get_movies_service),
):
    return unwrap(await svc.filter_movies_by_date_added(
        from_date=from_date, to_date=to_date,
        page=page, per_page=per_page))


@router.get("/{movie_id}", response_model=MovieView,
            status_code=HTTPStatus.OK)
@handle_store_errors(STORE_ERRMAP)
async def get_movie(
    movie_id: int,
    svc: MoviesService = Depends(get_movies_service),
):
    return not_found_if_missing(await svc.get_movie(movie_id))


@router.head("/{movie_id}", status_code=HTTPStatus.OK)
@handle_store_errors(STORE_ERRMAP)
async def movie_exists(
    movie_id: int,
    svc: MoviesService = Depends(get_movies_service),
):
    if await svc.movie_exists(movie_id):
        return Response(status_code=HTTPStatus.OK)
    return Response(status_code=HTTPStatus.NOT_FOUND)


@router.get("/{movie_id}/reviews",
            response_model=PaginatedResultSet[MovieWithReviewsView],
            status_code=HTTPStatus.OK)
@handle_store_errors(STORE_ERRMAP)
async def list_reviews_for_movie(
    movie_id: int,
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None, alias="perPage"),
    svc: MoviesService = Depends(get_movies_service),
):
    return unwrap(await svc.list_reviews_for_movie(
        movie_id, page=page, per_page=per_page))


@router.post("", response_model=MovieView,
             status_code=HTTPStatus.CREATED,
             responses=ERROR_RESPONSES)
@handle_store_errors(STORE_ERRMAP)
async def create_movie(
    body: MovieView,
    svc: MoviesService = Depends(get_movies_service),
):
    movie = unwrap(await svc.create_movie(body))
    return svc.mapper.to_view(movie)


@router.post("/{movie_id}/reviews", response_model=ReviewView,
             status_code=HTTPStatus.CREATED,
             responses=ERROR_RESPONSES)
@handle_store_errors(STORE_ERRMAP)
async def create_review(
    movie_id: int,
    body: ReviewView,
    svc: MoviesService = Depends(get_movies_service),
):
    review = unwrap(await svc.create_review(movie_id, body))
    return svc.mapper.review_to_view(review)


@router.put("/{movie_id}", response_model=MovieView,
            status_code=HTTPStatus.OK,
            responses=ERROR_RESPONSES)
@handle_store_errors(STORE_ERRMAP)
async def update_movie(
    movie_id: int,
    body: MovieView,
    svc: MoviesService = Depends(get_movies_service),
):
    movie = unwrap(await svc.update_movie(movie_id, body))
    return svc.mapper.to_view(movie)


@router.delete("/{movie_id}", status_code=HTTPStatus.NO_CONTENT,
               responses=ERROR_RESPONSES)
@handle_store_errors(STORE_ERRMAP)
async def delete_movie(
    movie_id: int,
    svc: MoviesService = Depends(get_movies_service),
):
    unwrap(await svc.delete_movie(movie_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)
