"""Seed the movies collection with demo movies and reviews."""

from __future__ import annotations

import asyncio
import os
import random
import time
from datetime import datetime, timedelta, timezone

from motor.motor_asyncio import AsyncIOMotorClient

from movies_api.core.config import settings
from movies_api.models.entities import Movie, Review
from movies_api.services.repositories.movies_repo import MoviesRepo

TOTAL = int(os.getenv("TOTAL", "200"))
MAX_REVIEWS = int(os.getenv("MAX_REVIEWS", "5"))

WORDS = ["night", "river", "signal", "garden", "empire", "winter",
         "echo", "harbor", "glass", "orbit", "silent", "crimson"]


def random_movie(now: datetime) -> Movie:
    title = " ".join(random.sample(WORDS, 2)).title()
    return Movie(
        title=title,
        year_of_release=random.randint(1950, now.year),
        date_added=now - timedelta(days=random.randint(0, 365)),
        reviews=[
            Review(content=f"{random.choice(WORDS)} {random.choice(WORDS)}")
            for _ in range(random.randint(0, MAX_REVIEWS))
        ],
    )


async def main() -> None:
    """Insert TOTAL movies through the repository, one document each."""
    client = AsyncIOMotorClient(settings.mongo_dsn, tz_aware=True)
    repo = MoviesRepo(client[settings.mongo_db])

    now = datetime.now(timezone.utc)
    t0 = time.time()
    for _ in range(TOTAL):
        await repo.insert(random_movie(now))

    dt = time.time() - t0
    print(f"[mongo] inserted={TOTAL} movies in {dt:.1f}s "
          f"(total now {await repo.count()})")

    client.close()


if __name__ == "__main__":
    asyncio.run(main())
