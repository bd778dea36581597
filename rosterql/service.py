"""Organization member listing.

:class:`MemberListingService` turns a listing request into a single store call
and shapes the result into a :class:`~rosterql.core.pagination.Page` of public
member records:

1. validate the pagination arguments (client errors abort before any I/O),
2. resolve the sort order through the injected sort resolver,
3. build the predicate tree for the organization and filter,
4. fetch from the store (password excluded, registered events expanded),
5. redact and rewrite every record the same way in both pagination modes,
6. assemble the page.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from .core.filters import build_member_filter
from .core.pagination import Page, Paged, resolve_pagination
from .errors import MALFORMED_STORE_RESULT, STORE_TIMEOUT, InfrastructureError
from .sorting import SortResolver, get_sort
from .store import MemberStore, RawPage

logger = logging.getLogger(__name__)

EXCLUDED_FIELDS = ('password',)
EXPANDED_RELATIONS = ('registeredEvents',)


def to_public_member(record: Mapping[str, Any], api_root_url: str) -> Dict[str, Any]:
    """Copy a raw member record into its public shape.

    The password is always nulled; a non-empty image path is prefixed with the
    API root URL, anything else becomes ``None``.
    """
    member = dict(record)
    image = member.get('image')
    member['image'] = f"{api_root_url or ''}{image}" if image else None
    member['password'] = None
    return member


class MemberListingService:
    """Lists the members of an organization, one store round-trip per call."""

    def __init__(
        self,
        store: MemberStore,
        *,
        sort_resolver: SortResolver = get_sort,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.sort_resolver = sort_resolver
        self.timeout = timeout

    async def list(
        self,
        org_id: Any,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Any = None,
        first: Optional[int] = None,
        skip: Optional[int] = None,
        api_root_url: str = '',
    ) -> Page[Dict[str, Any]]:
        pagination = resolve_pagination(first, skip)
        ordering = self.sort_resolver(order_by)
        predicate = build_member_filter(org_id, where)
        logger.debug(f"Listing members of {org_id}: {len(predicate)} predicates, {pagination}")

        raw = await self._fetch(predicate, ordering, pagination)
        if not isinstance(raw, RawPage):
            logger.error(f"Member store returned {type(raw).__name__}, expected RawPage")
            raise InfrastructureError('Member store returned a malformed result', code=MALFORMED_STORE_RESULT)

        members = [to_public_member(record, api_root_url) for record in raw.records]

        if isinstance(pagination, Paged):
            if raw.meta is None:
                logger.error("Member store returned a paged result without page metadata")
                raise InfrastructureError('Member store returned no page metadata', code=MALFORMED_STORE_RESULT)
            return Page.from_meta(members, raw.meta)
        return Page.unpaged(members, raw.total_count)

    async def _fetch(self, predicate, ordering, pagination) -> RawPage:
        call = self.store.fetch(
            predicate,
            ordering,
            pagination,
            exclude=EXCLUDED_FIELDS,
            expand=EXPANDED_RELATIONS,
        )
        if self.timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Member store did not answer within {self.timeout}s")
            raise InfrastructureError(
                f"Member store timed out after {self.timeout}s", code=STORE_TIMEOUT
            ) from e
