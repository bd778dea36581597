"""Page-number pagination: request modes, page math and the result page."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, Optional, Tuple, TypeVar, Union

from ..errors import (
    INVALID_PAGE_NUMBER,
    INVALID_PAGE_SIZE,
    MISSING_PAGINATION_CURSOR,
    ClientInputError,
)
from .naming import camelize_keys

T = TypeVar('T')


@dataclass(frozen=True)
class Unpaged:
    """Return the entire matching set."""


@dataclass(frozen=True)
class Paged:
    page_number: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


Pagination = Union[Unpaged, Paged]


def _as_int(value: Any, what: str, code: str) -> int:
    # bool is an int subclass; floats and numeric strings are not coerced
    if isinstance(value, bool) or not isinstance(value, int):
        raise ClientInputError(f"{what} must be an integer", code=code)
    return value


def resolve_pagination(first: Optional[int], skip: Optional[int]) -> Pagination:
    """Derive the pagination mode from ``first`` (page size) and ``skip`` (page number).

    No page size means the whole set. A page size without a page number is a
    client error. ``skip == 0`` addresses the first page.
    """
    if first is None:
        return Unpaged()
    size = _as_int(first, 'first', INVALID_PAGE_SIZE)
    if size < 0:
        raise ClientInputError('first must be non-negative', code=INVALID_PAGE_SIZE)
    if size == 0:
        return Unpaged()
    if skip is None:
        raise ClientInputError(
            'Missing Skip parameter. Set it to either 0 or some other value',
            code=MISSING_PAGINATION_CURSOR,
        )
    page = _as_int(skip, 'skip', INVALID_PAGE_NUMBER)
    if page < 0:
        raise ClientInputError('skip must be non-negative', code=INVALID_PAGE_NUMBER)
    return Paged(page_number=max(page, 1), page_size=size)


@dataclass(frozen=True)
class PageMeta:
    total_count: int
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int]
    prev_page: Optional[int]

    @classmethod
    def compute(cls, total_count: int, page_number: int, page_size: int) -> 'PageMeta':
        total_pages = math.ceil(total_count / page_size)
        has_next = page_number < total_pages
        has_prev = page_number > 1
        return cls(
            total_count=total_count,
            current_page=page_number,
            total_pages=total_pages,
            has_next=has_next,
            has_prev=has_prev,
            next_page=page_number + 1 if has_next else None,
            prev_page=page_number - 1 if has_prev else None,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Tuple[T, ...]
    has_next: bool
    has_prev: bool
    total_pages: int
    next_page: Optional[int]
    prev_page: Optional[int]
    current_page: Optional[int]
    total_count: int

    @classmethod
    def from_meta(cls, items: Iterable[T], meta: PageMeta) -> 'Page[T]':
        return cls(
            items=tuple(items),
            has_next=meta.has_next,
            has_prev=meta.has_prev,
            total_pages=meta.total_pages,
            next_page=meta.next_page,
            prev_page=meta.prev_page,
            current_page=meta.current_page,
            total_count=meta.total_count,
        )

    @classmethod
    def unpaged(cls, items: Iterable[T], total_count: int) -> 'Page[T]':
        # The whole set counts as a single page
        return cls(
            items=tuple(items),
            has_next=False,
            has_prev=False,
            total_pages=1,
            next_page=None,
            prev_page=None,
            current_page=None,
            total_count=total_count,
        )

    def to_response(self) -> Dict[str, Any]:
        """Render the connection shape handed to the transport layer."""
        return {
            'pageInfo': {
                'hasNextPage': self.has_next,
                'hasPreviousPage': self.has_prev,
                'totalPages': self.total_pages,
                'nextPageNo': self.next_page,
                'prevPageNo': self.prev_page,
                'currPageNo': self.current_page,
            },
            'edges': [camelize_keys(item) for item in self.items],
            'aggregate': {'count': self.total_count},
        }
