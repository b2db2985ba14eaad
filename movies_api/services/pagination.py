"""Page window normalization and the paginated result envelope.

Every listing operation normalizes ``page``/``per_page`` first and only
then queries the store, so the skip/limit window and the metadata
returned to the client are always computed from the same values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, computed_field, model_validator

T = TypeVar('T')

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100
# cursor skip is sent to the server as a BSON int64
MAX_SKIP = 2 ** 63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    per_page: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def reachable(self) -> bool:
        """False when the window starts past anything the store can skip."""
        return self.skip <= MAX_SKIP


def normalize_pagination(
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> PageRequest:
    """Substitute defaults for missing or out-of-range values.

    ``page`` below 1 becomes 1. ``per_page`` outside ``1..100`` becomes 20
    rather than being clamped to the bound.
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if per_page is None or per_page < 1 or per_page > MAX_PER_PAGE:
        per_page = DEFAULT_PER_PAGE
    return PageRequest(page=page, per_page=per_page)


def compute_total_pages(total_count: int, page_size: int) -> int:
    if total_count <= 0:
        return 0
    return ((total_count - 1) // page_size) + 1


class PaginatedResultSet(BaseModel, Generic[T]):
    items: List[T]
    current_page: int
    total_count: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return compute_total_pages(self.total_count, self.page_size)

    @model_validator(mode='after')
    def _items_fit_page(self) -> 'PaginatedResultSet[T]':
        if len(self.items) > self.page_size:
            raise ValueError(
                f'{len(self.items)} items exceed page_size {self.page_size}')
        return self

    @classmethod
    def from_window(
        cls,
        items: Sequence[T],
        window: PageRequest,
        total_count: int,
    ) -> 'PaginatedResultSet[T]':
        return cls(
            items=list(items),
            current_page=window.page,
            total_count=total_count,
            page_size=window.per_page,
        )
