from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReviewView(BaseModel):
    id: Optional[int] = None
    content: str
    movie_id: Optional[int] = None


class MovieView(BaseModel):
    id: Optional[int] = None
    title: str
    year_of_release: int
    date_added: Optional[datetime] = None


class MovieWithReviewsView(MovieView):
    reviews: List[ReviewView] = Field(default_factory=list)


class EntityErrorItem(BaseModel):
    error_type: str
    message: str


class ErrorListResponse(BaseModel):
    detail: List[EntityErrorItem]
