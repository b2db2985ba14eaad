"""Persistence-side records for movies and their reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Review:
    content: str
    id: Optional[int] = None
    # owner reference used for routing, the movie owns the review
    movie_id: Optional[int] = None


@dataclass
class Movie:
    title: str
    year_of_release: int
    id: Optional[int] = None
    date_added: Optional[datetime] = None
    reviews: List[Review] = field(default_factory=list)
