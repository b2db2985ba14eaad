from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from movies_api.db.mongo import get_mongo_db
from movies_api.services.mapper import MovieMapper
from movies_api.services.movies_service import MoviesService
from movies_api.services.repositories.movies_repo import MoviesRepo

_mapper = MovieMapper()


async def get_db() -> AsyncIOMotorDatabase:
    return await get_mongo_db()


def get_movie_mapper() -> MovieMapper:
    return _mapper


async def get_movies_repo(db=Depends(get_db)) -> MoviesRepo:
    return MoviesRepo(db)


async def get_movies_service(
        repo: MoviesRepo = Depends(get_movies_repo),
        mapper: MovieMapper = Depends(get_movie_mapper),
) -> MoviesService:
    return MoviesService(repo, mapper)
