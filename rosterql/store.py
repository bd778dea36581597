"""Member stores: the query-execution capability behind the listing service.

A store receives a predicate tree, an ordering description and a pagination
mode, and returns a :class:`RawPage`. :class:`SQLAlchemyMemberStore` is the
reference implementation on top of an ``AsyncSession``.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .core.pagination import PageMeta, Paged, Pagination
from .core.predicates import Conjunction
from .errors import STORE_UNAVAILABLE, InfrastructureError
from .models import User
from .sorting import Ordering
from .sql.builders import apply_ordering, apply_pagination, apply_projection, build_where, row_to_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawPage:
    """Records as the store returned them, plus page metadata when paged."""

    records: Tuple[Mapping[str, Any], ...]
    total_count: int
    meta: Optional[PageMeta] = None


class MemberStore(ABC):
    """Abstract member store."""

    @abstractmethod
    async def fetch(
        self,
        predicate: Conjunction,
        ordering: Ordering,
        pagination: Pagination,
        *,
        exclude: Iterable[str] = (),
        expand: Iterable[str] = (),
    ) -> RawPage:
        """Run the query and the count for one listing request."""
        pass


class SQLAlchemyMemberStore(MemberStore):
    """Member store backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession, model=User):
        self.session = session
        self.model = model

    async def fetch(
        self,
        predicate: Conjunction,
        ordering: Ordering,
        pagination: Pagination,
        *,
        exclude: Iterable[str] = (),
        expand: Iterable[str] = (),
    ) -> RawPage:
        exclude = tuple(exclude or ())
        expand = tuple(expand or ())
        where = build_where(self.model, predicate)

        count_stmt = select(func.count()).select_from(self.model).where(where)
        stmt = select(self.model).where(where)
        stmt = apply_ordering(stmt, model_cls=self.model, ordering=ordering)
        stmt = apply_projection(stmt, model_cls=self.model, exclude=exclude, expand=expand)
        if isinstance(pagination, Paged):
            stmt = apply_pagination(stmt, pagination)
        stmt = stmt.execution_options(populate_existing=True)

        try:
            total = (await self.session.execute(count_stmt)).scalar_one()
            rows = (await self.session.execute(stmt)).scalars().all()
            records = tuple(row_to_record(row, exclude=exclude, expand=expand) for row in rows)
        except SQLAlchemyError as e:
            logger.error(f"Member query failed for {self.model.__name__}: {e}")
            raise InfrastructureError(f"Member store unavailable: {e}", code=STORE_UNAVAILABLE) from e

        logger.debug(f"Root query found {len(records)} rows of {total}")
        meta = None
        if isinstance(pagination, Paged):
            meta = PageMeta.compute(total, pagination.page_number, pagination.page_size)
        return RawPage(records=records, total_count=total, meta=meta)
